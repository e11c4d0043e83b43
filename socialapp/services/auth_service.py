import logging
import random

from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError
from werkzeug.security import generate_password_hash, check_password_hash

from socialapp.config import AVATAR_COLORS
from socialapp.db import db
from socialapp.errors import AuthError, ConflictError, NotFoundError
from socialapp.repositories import user_repository


logger = logging.getLogger(__name__)


def token_for_user(user):
    return create_access_token(
        identity=str(user.id),
        additional_claims={"username": user.username},
    )


def _auth_payload(user):
    return {
        "token": token_for_user(user),
        "user": user.to_dict(),
    }


def register(username, password, display=None):
    if user_repository.get_by_username(username):
        raise ConflictError("username taken")

    try:
        user = user_repository.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            display=display or username,
            avatar_color=random.choice(AVATAR_COLORS),
        )
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        raise ConflictError("username taken") from e

    logger.info("registered user %s", username)
    return _auth_payload(user)


def login(username, password):
    user = user_repository.get_by_username(username)
    # Both failures answer 400, matching the registration errors.
    if not user:
        raise NotFoundError("user not found", status_code=400)
    if not check_password_hash(user.password_hash, password):
        logger.warning("failed login for %s", username)
        raise AuthError("invalid credentials", status_code=400)

    return _auth_payload(user)
