import logging

from marshmallow import ValidationError as SchemaValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from errors import SERVER_ERROR_MESSAGE, AuthenticationError, ConflictError, ServerError, ValidationError
from schemas import credentials_schema

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS = "Email y contraseña son obligatorios"
DUPLICATE_EMAIL = "El email ya existe"
INVALID_CREDENTIALS = "Credenciales inválidas"
REGISTERED = "Usuario registrado con éxito"


class AuthService:
    def __init__(self, users, hasher, tokens):
        self.users = users
        self.hasher = hasher
        self.tokens = tokens
        # Checked against when the email is unknown, so both failures cost one bcrypt run.
        self._placeholder_hash = hasher.hash("placeholder-password")

    def _load_credentials(self, payload):
        try:
            data = credentials_schema.load(payload or {})
        except SchemaValidationError:
            raise ValidationError(MISSING_CREDENTIALS)
        return data["email"], data["password"]

    def register(self, payload):
        email, password = self._load_credentials(payload)
        password_hash = self.hasher.hash(password)

        # No lookup first: the unique index on email decides, so two
        # concurrent sign-ups cannot both pass a check and then insert.
        try:
            user = self.users.create(email, password_hash)
        except IntegrityError:
            self.users.rollback()
            logger.info("Registration rejected for an email already in use")
            raise ConflictError(DUPLICATE_EMAIL)
        except SQLAlchemyError:
            self.users.rollback()
            logger.exception("Could not store new user")
            raise ServerError("Error al registrar el usuario")

        logger.info("Registered user %s", user.id)
        return {"message": REGISTERED}

    def login(self, payload):
        email, password = self._load_credentials(payload)
        try:
            user = self.users.find_by_email(email)
        except SQLAlchemyError:
            self.users.rollback()
            logger.exception("Could not look up user for login")
            raise ServerError(SERVER_ERROR_MESSAGE)

        # Unknown email and wrong password take the same exit.
        stored_hash = user.password_hash if user is not None else self._placeholder_hash
        if not self.hasher.verify(password, stored_hash) or user is None:
            logger.info("Rejected login attempt")
            raise AuthenticationError(INVALID_CREDENTIALS)

        return {"token": self.tokens.issue(user.id)}
