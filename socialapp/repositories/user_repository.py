from socialapp.models.user_model import User
from socialapp.db import db


def get_by_username(username: str):
    return User.query.filter_by(username=username).first()


def get_by_id(user_id: int):
    return db.session.get(User, user_id)


def create_user(username, password_hash, display, avatar_color):
    user = User(
        username=username,
        password_hash=password_hash,
        display=display,
        avatar_color=avatar_color,
    )
    db.session.add(user)
    db.session.flush()
    return user


def list_users(limit: int = 100):
    return User.query.order_by(User.username.asc()).limit(limit).all()


def update_display(user, display: str):
    user.display = display
    db.session.add(user)
    return user
