import logging
from dataclasses import dataclass

import bcrypt
from flask import current_app
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt.exceptions import PyJWTError

from errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, as proven by a bearer token."""

    user_id: str


class InvalidTokenError(Exception):
    """A bearer token failed signature, expiry or shape checks."""


class PasswordHasher:
    def __init__(self, rounds=10, pepper=""):
        self.rounds = rounds
        self.pepper = (pepper or "").encode("utf-8")

    def _peppered(self, password):
        # bcrypt only reads the first 72 bytes
        return (password.encode("utf-8") + self.pepper)[:72]

    def hash(self, password):
        return bcrypt.hashpw(self._peppered(password), bcrypt.gensalt(rounds=self.rounds))

    def verify(self, password, password_hash):
        # checkpw compares in constant time
        if not password_hash:
            return False
        try:
            return bcrypt.checkpw(self._peppered(password), password_hash)
        except ValueError:
            return False


class TokenIssuer:
    """Signs and checks the bearer tokens handed out at login.

    Tokens carry the user id as their identity claim and expire after the
    configured ``JWT_ACCESS_TOKEN_EXPIRES``. Nothing is stored server side, so
    a token stays valid until it expires.
    """

    def _require_secret(self):
        if not current_app.config.get("JWT_SECRET_KEY"):
            raise ConfigurationError("JWT_SECRET_KEY is not set")

    def issue(self, user_id):
        self._require_secret()
        return create_access_token(
            identity=user_id,
            expires_delta=current_app.config["JWT_ACCESS_TOKEN_EXPIRES"],
        )

    def verify(self, token):
        """Return the user id embedded in ``token``."""
        self._require_secret()
        if not token:
            raise InvalidTokenError("empty token")
        try:
            claims = decode_token(token)
        except (PyJWTError, JWTExtendedException) as exc:
            raise InvalidTokenError(str(exc)) from exc

        user_id = claims.get(current_app.config["JWT_IDENTITY_CLAIM"])
        if claims.get("type") != "access" or not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError("token carries no usable identity")
        return user_id
