import logging
from functools import wraps

from flask import request

from errors import AuthenticationError
from security import InvalidTokenError, Principal

logger = logging.getLogger(__name__)

NO_TOKEN = "No autorizado, no hay token"
INVALID_TOKEN = "Token no válido"


def bearer_token():
    """Pull the token out of ``Authorization: Bearer <token>``."""
    header = request.headers.get("Authorization")
    if not header:
        raise AuthenticationError(NO_TOKEN)
    parts = header.split()
    return parts[1] if len(parts) > 1 else ""


def token_required(tokens):
    """Reject the request unless it carries a valid bearer token.

    The wrapped view receives the caller as a ``principal`` keyword argument.
    """

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            token = bearer_token()
            try:
                user_id = tokens.verify(token)
            except InvalidTokenError as exc:
                logger.debug("Rejected bearer token: %s", exc)
                raise AuthenticationError(INVALID_TOKEN)
            return fn(*args, principal=Principal(user_id), **kwargs)

        return wrapper

    return decorator
