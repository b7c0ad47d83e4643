import logging

from flask import Flask
from flask_jwt_extended import JWTManager

from config import Config
from errors import ConfigurationError, register_error_handlers
from models import db
from repositories import MovieRepository, UserRepository
from routes.auth_routes import create_auth_blueprint
from routes.movie_routes import create_movie_blueprint
from security import PasswordHasher, TokenIssuer
from services.auth_service import AuthService
from services.movie_service import MovieService

logger = logging.getLogger(__name__)


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not app.config.get("JWT_SECRET_KEY"):
        logger.critical("JWT_SECRET_KEY is not set; refusing to start")
        raise ConfigurationError("JWT_SECRET_KEY is not set")

    db.init_app(app)
    JWTManager(app)

    tokens = TokenIssuer()
    hasher = PasswordHasher(rounds=app.config["BCRYPT_ROUNDS"], pepper=app.config["PEPPER"])
    auth_service = AuthService(UserRepository(db.session), hasher, tokens)
    movie_service = MovieService(MovieRepository(db.session))

    app.register_blueprint(create_auth_blueprint(auth_service))
    app.register_blueprint(create_movie_blueprint(movie_service, tokens))
    register_error_handlers(app)

    with app.app_context():
        db.create_all()

    return app


if __name__ == '__main__':
    create_app().run(debug=True)
