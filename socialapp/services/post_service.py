import logging

from socialapp.db import db
from socialapp.errors import NotFoundError
from socialapp.repositories import comment_repository, post_repository
from socialapp.repositories.follow_repository import get_followee_ids
from socialapp.repositories.like_repository import get_liked_post_ids, toggle_like as toggle_like_edge
from socialapp.schemas.response_schemas import CommentResponseSchema
from socialapp.services import notification_service
from socialapp.utils.timestamps import isoformat_utc


logger = logging.getLogger(__name__)


def _serialize_post(post, author, likes_count, comments_count):
    return {
        "id": post.id,
        "text": post.text,
        "image": post.image,
        "createdAt": isoformat_utc(post.created_at),
        "author": author.username,
        "display": author.display,
        "avatarColor": author.avatar_color,
        "likes_count": likes_count,
        "comments_count": comments_count,
        "comments": CommentResponseSchema(many=True).dump(
            comment_repository.get_comments_by_post(post.id)
        ),
    }


def create_post(author, text=None, image=None):
    post = post_repository.create_post(author.id, text or "", image or "")
    db.session.commit()
    logger.info("%s created post %s", author.username, post.id)
    return post.id


def get_post_or_404(post_id):
    post = post_repository.get_by_id(post_id)
    if not post:
        raise NotFoundError("post not found")
    return post


def list_posts(search=None, trending=False, viewer=None):
    rows = post_repository.list_posts(search=search, trending=trending)
    # Comments are fetched per post; fine for feeds capped at a few hundred rows.
    posts = [_serialize_post(*row) for row in rows]

    if viewer is not None and posts:
        author_ids = {row[1].id for row in rows}
        post_ids = [post["id"] for post in posts]
        followed = get_followee_ids(viewer.id, author_ids)
        liked = get_liked_post_ids(viewer.id, post_ids)
        for (post, author, _, _), payload in zip(rows, posts):
            payload["following"] = author.id in followed
            payload["liked"] = post.id in liked

    return posts


def toggle_like(actor, post_id) -> bool:
    post = get_post_or_404(post_id)

    liked, created = toggle_like_edge(actor.id, post.id)
    if created:
        notification_service.notify(
            post.author_id,
            f"{actor.username} liked your post",
            actor_id=actor.id,
        )
    db.session.commit()
    return liked
