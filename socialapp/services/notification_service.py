import logging

from flask import current_app

from socialapp.db import db
from socialapp.repositories import notification_repository
from socialapp.schemas.response_schemas import NotificationSchema


logger = logging.getLogger(__name__)

NOTIFICATION_LIMIT = 50


def notify(recipient_id: int, text: str, actor_id: int = None):
    """Queue a notification row on the current session; the caller commits."""
    if (
        actor_id is not None
        and actor_id == recipient_id
        and not current_app.config.get("NOTIFY_SELF_ACTIONS", True)
    ):
        return None
    return notification_repository.add_notification(recipient_id, text)


def list_notifications(user):
    """Newest notifications for ``user``.

    The returned rows keep the ``seen`` value they had before this call;
    everything returned is marked seen afterwards.
    """
    notifications = notification_repository.get_recent(user.id, NOTIFICATION_LIMIT)
    snapshot = NotificationSchema(many=True).dump(notifications)

    unseen_ids = [n.id for n in notifications if not n.seen]
    if unseen_ids:
        notification_repository.mark_seen(unseen_ids)
        db.session.commit()
        logger.debug("marked %d notifications seen for %s", len(unseen_ids), user.username)

    return snapshot
