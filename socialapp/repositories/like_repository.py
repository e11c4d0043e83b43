from sqlalchemy.exc import IntegrityError

from socialapp.db import db
from socialapp.models.like_model import Like


def toggle_like(user_id: int, post_id: int):
    """Same contract as ``follow_repository.toggle_follow``: ``(liked, created)``."""
    removed = (
        Like.query
        .filter_by(user_id=user_id, post_id=post_id)
        .delete(synchronize_session=False)
    )
    if removed:
        return False, False

    try:
        with db.session.begin_nested():
            db.session.add(Like(user_id=user_id, post_id=post_id))
    except IntegrityError:
        return True, False
    return True, True


def get_liked_post_ids(user_id: int, post_ids):
    if not post_ids:
        return set()
    rows = (
        db.session.query(Like.post_id)
        .filter(Like.user_id == user_id, Like.post_id.in_(post_ids))
        .all()
    )
    return {row[0] for row in rows}
