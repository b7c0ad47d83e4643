from datetime import timezone
from typing import Any, Dict

from marshmallow import EXCLUDE, Schema, fields, pre_load, validate


class UTCDateTime(fields.DateTime):
    """Timestamps are stored as UTC; stores that drop the offset get it back."""

    def _serialize(self, value, attr, obj, **kwargs):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return super()._serialize(value, attr, obj, **kwargs)


class CredentialsSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Str(required=True, validate=validate.Length(min=1))
    password = fields.Str(required=True, validate=validate.Length(min=1))

    @pre_load
    def strip_email(self, data: Dict[str, Any], **kwargs):
        email = data.get("email")
        if isinstance(email, str):
            data = dict(data, email=email.strip())
        return data


class MovieInputSchema(Schema):
    """Fields a client may write on a movie.

    Ownership, favorite flag and rating are never taken from this payload.
    """

    class Meta:
        unknown = EXCLUDE

    title = fields.Str(required=True, validate=validate.Length(min=1))
    director = fields.Str(allow_none=True)
    year = fields.Int(strict=True, allow_none=True, validate=validate.Range(min=-2**31, max=2**31 - 1))
    poster_url = fields.Str(data_key="posterUrl", allow_none=True)


class RatingSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    rating = fields.Int(required=True, strict=True, validate=validate.Range(min=0, max=5))


class MovieSchema(Schema):
    id = fields.Str()
    title = fields.Str()
    director = fields.Str(allow_none=True)
    year = fields.Int(allow_none=True)
    poster_url = fields.Str(data_key="posterUrl", allow_none=True)
    is_favorite = fields.Bool(data_key="isFavorite")
    rating = fields.Int()
    owner_id = fields.Str(data_key="ownerId")
    created_at = UTCDateTime(data_key="createdAt")
    updated_at = UTCDateTime(data_key="updatedAt")


credentials_schema = CredentialsSchema()
movie_input_schema = MovieInputSchema()
rating_schema = RatingSchema()
movie_schema = MovieSchema()
movies_schema = MovieSchema(many=True)
