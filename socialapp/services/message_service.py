from socialapp.db import db
from socialapp.errors import NotFoundError
from socialapp.repositories import message_repository, user_repository
from socialapp.services import notification_service

def send_message(sender, recipient_username, text):
    recipient = user_repository.get_by_username(recipient_username)
    if not recipient:
        raise NotFoundError("recipient not found")

    message = message_repository.create_message(sender.id, recipient.id, text)
    notification_service.notify(
        recipient.id,
        f"{sender.username} sent you a message",
        actor_id=sender.id,
    )
    db.session.commit()
    return message

def list_threads(user):
    return [
        {"with_user": row.with_user, "last_text": row.last_text}
        for row in message_repository.get_latest_per_counterpart(user.id)
    ]
