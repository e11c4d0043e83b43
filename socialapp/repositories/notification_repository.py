from socialapp.db import db
from socialapp.models.notification_model import Notification


def add_notification(user_id: int, text: str):
    notification = Notification(user_id=user_id, text=text)
    db.session.add(notification)
    return notification


def get_recent(user_id: int, limit: int = 50):
    return (
        Notification.query
        .filter_by(user_id=user_id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(limit)
        .all()
    )


def mark_seen(notification_ids):
    if not notification_ids:
        return 0
    return (
        Notification.query
        .filter(Notification.id.in_(notification_ids), Notification.seen.is_(False))
        .update({Notification.seen: True}, synchronize_session=False)
    )
