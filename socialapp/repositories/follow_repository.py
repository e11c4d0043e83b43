from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from socialapp.db import db
from socialapp.models.follow_model import Follow


def toggle_follow(follower_id: int, followee_id: int):
    """Flip the follow edge and return ``(following, created)``.

    ``created`` is False when a concurrent request inserted the same edge
    first; the caller must not notify twice in that case.
    """
    removed = (
        Follow.query
        .filter_by(follower_id=follower_id, followee_id=followee_id)
        .delete(synchronize_session=False)
    )
    if removed:
        return False, False

    try:
        with db.session.begin_nested():
            db.session.add(
                Follow(
                    follower_id=follower_id,
                    followee_id=followee_id,
                )
            )
    except IntegrityError:
        return True, False
    return True, True


def get_follow_counts(user_id: int):
    following = (
        db.select(func.count(Follow.id))
        .where(Follow.follower_id == user_id)
        .scalar_subquery()
    )
    followers = (
        db.select(func.count(Follow.id))
        .where(Follow.followee_id == user_id)
        .scalar_subquery()
    )
    row = db.session.execute(
        db.select(following.label("following"), followers.label("followers"))
    ).one()
    return row.following, row.followers


def get_followee_ids(follower_id: int, candidate_ids):
    if not candidate_ids:
        return set()
    rows = (
        db.session.query(Follow.followee_id)
        .filter(
            Follow.follower_id == follower_id,
            Follow.followee_id.in_(candidate_ids),
        )
        .all()
    )
    return {row[0] for row in rows}
