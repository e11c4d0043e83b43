import logging

from socialapp.db import db
from socialapp.errors import NotFoundError, ValidationError
from socialapp.repositories import user_repository
from socialapp.repositories.follow_repository import toggle_follow as toggle_follow_edge
from socialapp.services import notification_service


logger = logging.getLogger(__name__)


def toggle_follow(actor, target_username: str) -> bool:
    target = user_repository.get_by_username(target_username)

    if not target:
        raise NotFoundError("user not found")
    if target.id == actor.id:
        raise ValidationError("cannot follow yourself")

    following, created = toggle_follow_edge(actor.id, target.id)
    if created:
        notification_service.notify(
            target.id,
            f"{actor.username} followed you",
            actor_id=actor.id,
        )
    db.session.commit()

    logger.info(
        "%s %s %s", actor.username, "followed" if following else "unfollowed", target.username
    )
    return following
