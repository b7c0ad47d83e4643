import uuid
from datetime import datetime, timezone

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def _new_id():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


class User(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.LargeBinary, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<User {self.id}>"


class Movie(db.Model):
    __tablename__ = 'movies'
    id = db.Column(db.String(36), primary_key=True, default=_new_id)
    title = db.Column(db.String(255), nullable=False)
    director = db.Column(db.String(255))
    year = db.Column(db.Integer)
    poster_url = db.Column(db.String(1024))
    is_favorite = db.Column(db.Boolean, nullable=False, default=False)
    rating = db.Column(db.Integer, nullable=False, default=0)
    owner_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Movie {self.id}:{self.title}>"
