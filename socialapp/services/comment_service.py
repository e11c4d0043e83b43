from socialapp.db import db
from socialapp.errors import ValidationError
from socialapp.repositories.comment_repository import create_comment
from socialapp.services import notification_service
from socialapp.services.post_service import get_post_or_404


NOTIFICATION_PREVIEW_LENGTH = 80


def add_comment(author, post_id, text):
    post = get_post_or_404(post_id)

    text = (text or "").strip()
    if not text:
        raise ValidationError("comment text required")

    comment = create_comment(
        author_id=author.id,
        post_id=post.id,
        text=text,
    )
    notification_service.notify(
        post.author_id,
        f"{author.username} commented: {text[:NOTIFICATION_PREVIEW_LENGTH]}",
        actor_id=author.id,
    )

    db.session.commit()
    return comment
