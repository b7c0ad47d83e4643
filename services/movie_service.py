import logging
from contextlib import contextmanager

from marshmallow import ValidationError as SchemaValidationError
from sqlalchemy.exc import DataError, IntegrityError, SQLAlchemyError

from errors import NotFoundError, ServerError, ValidationError
from schemas import movie_input_schema, movie_schema, movies_schema, rating_schema

logger = logging.getLogger(__name__)

MOVIE_NOT_FOUND = "Película no encontrada"
INVALID_MOVIE = "Datos inválidos"
INVALID_UPDATE = "No se pudo actualizar la película"
INVALID_RATING = "El rating debe ser un número entre 0 y 5"


class MovieService:
    """Catalog operations for a single authenticated owner.

    Every method takes the caller's ``Principal`` and only ever touches rows
    whose owner is that principal. A movie owned by someone else is reported
    exactly like one that does not exist.

    Toggling the favorite flag and setting the rating read the row and then
    write it back; two concurrent requests on the same movie resolve as last
    write wins.
    """

    def __init__(self, movies):
        self.movies = movies

    @contextmanager
    def _store(self, failure_message, invalid_message=None):
        try:
            yield
        except (DataError, IntegrityError):
            self.movies.rollback()
            if invalid_message is None:
                logger.exception(failure_message)
                raise ServerError(failure_message)
            logger.info("Store rejected movie payload")
            raise ValidationError(invalid_message)
        except SQLAlchemyError:
            self.movies.rollback()
            logger.exception(failure_message)
            raise ServerError(failure_message)

    def _get_owned(self, principal, movie_id, failure_message):
        with self._store(failure_message):
            movie = self.movies.find_owned(movie_id, principal.user_id)
        if movie is None:
            raise NotFoundError(MOVIE_NOT_FOUND)
        return movie

    def list(self, principal):
        with self._store("Error al obtener las películas"):
            movies = self.movies.list_for_owner(principal.user_id)
        return movies_schema.dump(movies)

    def get(self, principal, movie_id):
        movie = self._get_owned(principal, movie_id, "Error al obtener la película")
        return movie_schema.dump(movie)

    def create(self, principal, payload):
        try:
            fields = movie_input_schema.load(payload or {})
        except SchemaValidationError:
            raise ValidationError(INVALID_MOVIE)

        with self._store("Error al crear la película", INVALID_MOVIE):
            created = movie_schema.dump(self.movies.create(principal.user_id, fields))
        logger.info("User %s created movie %s", principal.user_id, created["id"])
        return created

    def update(self, principal, movie_id, payload):
        # Only the keys the client sent are written.
        try:
            fields = movie_input_schema.load(payload or {}, partial=True)
        except SchemaValidationError:
            raise ValidationError(INVALID_UPDATE)

        with self._store(INVALID_UPDATE, INVALID_UPDATE):
            count = self.movies.update_owned(movie_id, principal.user_id, fields)
        if count == 0:
            raise NotFoundError(MOVIE_NOT_FOUND)
        return self.get(principal, movie_id)

    def delete(self, principal, movie_id):
        with self._store("No se pudo eliminar la película"):
            count = self.movies.delete_owned(movie_id, principal.user_id)
        if count == 0:
            raise NotFoundError(MOVIE_NOT_FOUND)
        logger.info("User %s deleted movie %s", principal.user_id, movie_id)

    def toggle_favorite(self, principal, movie_id):
        failure = "No se pudo actualizar el favorito"
        movie = self._get_owned(principal, movie_id, failure)
        with self._store(failure):
            self.movies.update_owned(movie_id, principal.user_id, {"is_favorite": not movie.is_favorite})
        return movie_schema.dump(self._get_owned(principal, movie_id, failure))

    def set_rating(self, principal, movie_id, payload):
        try:
            rating = rating_schema.load(payload or {})["rating"]
        except SchemaValidationError:
            raise ValidationError(INVALID_RATING)

        failure = "No se pudo actualizar el rating"
        self._get_owned(principal, movie_id, failure)
        with self._store(failure):
            self.movies.update_owned(movie_id, principal.user_id, {"rating": rating})
        return movie_schema.dump(self._get_owned(principal, movie_id, failure))
