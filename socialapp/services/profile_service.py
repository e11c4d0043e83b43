from socialapp.db import db
from socialapp.repositories import user_repository
from socialapp.repositories.follow_repository import get_follow_counts


def get_profile(user):
    following_count, followers_count = get_follow_counts(user.id)
    return {
        "username": user.username,
        "display": user.display,
        "avatarColor": user.avatar_color,
        "following_count": following_count,
        "followers_count": followers_count,
    }


def update_profile(user, display=None):
    if not display:
        return False

    user_repository.update_display(user, display)
    db.session.commit()
    return True
