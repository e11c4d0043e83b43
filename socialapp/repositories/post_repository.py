from sqlalchemy import func

from socialapp.models.comment_model import Comment
from socialapp.models.like_model import Like
from socialapp.models.post_model import Post
from socialapp.models.user_model import User
from socialapp.db import db


FEED_LIMIT = 200
TRENDING_LIMIT = 50


def create_post(author_id, text, image):
    post = Post(
        author_id=author_id,
        text=text,
        image=image,
    )
    db.session.add(post)
    db.session.flush()

    return post


def get_by_id(post_id):
    return db.session.get(Post, post_id)


def _likes_count():
    return (
        db.select(func.count(Like.id))
        .where(Like.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
        .label("likes_count")
    )


def _comments_count():
    return (
        db.select(func.count(Comment.id))
        .where(Comment.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
        .label("comments_count")
    )


def list_posts(search=None, trending=False):
    """Return ``(post, author, likes_count, comments_count)`` rows for one feed mode."""
    likes_count = _likes_count()
    comments_count = _comments_count()
    query = (
        db.session.query(Post, User, likes_count, comments_count)
        .join(User, Post.author_id == User.id)
    )

    if search:
        query = (
            query
            .filter(Post.text.contains(search, autoescape=True))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .limit(FEED_LIMIT)
        )
    elif trending:
        query = (
            query
            .order_by(likes_count.desc(), Post.created_at.desc(), Post.id.desc())
            .limit(TRENDING_LIMIT)
        )
    else:
        query = (
            query
            .order_by(Post.created_at.desc(), Post.id.desc())
            .limit(FEED_LIMIT)
        )

    return query.all()
