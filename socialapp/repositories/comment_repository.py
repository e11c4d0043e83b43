from socialapp.db import db
from socialapp.models.comment_model import Comment


def create_comment(author_id, post_id, text):
    comment = Comment(
        author_id=author_id,
        post_id=post_id,
        text=text,
    )

    db.session.add(comment)
    return comment

def get_comments_by_post(post_id):
    return (
        Comment.query
        .filter(Comment.post_id == post_id)
        .order_by(
            Comment.created_at.asc(),
            Comment.id.asc()
        )
        .all()
    )
