import logging

from flask_jwt_extended import get_current_user, verify_jwt_in_request
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from socialapp.extensions.extensions import jwt
from socialapp.repositories import user_repository


logger = logging.getLogger(__name__)


@jwt.user_lookup_loader
def load_user(jwt_header, jwt_data):
    try:
        user_id = int(jwt_data["sub"])
    except (KeyError, TypeError, ValueError):
        return None
    return user_repository.get_by_id(user_id)


def optional_viewer():
    """Resolve the bearer token if one verifies, else treat the caller as anonymous.

    Used by public endpoints, which must keep working for clients holding a
    stale token.
    """
    try:
        verify_jwt_in_request(optional=True)
    except (JWTExtendedException, PyJWTError) as e:
        logger.debug("ignoring unusable token on public endpoint: %s", e)
        return None
    return get_current_user()
