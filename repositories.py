from models import Movie, User, utcnow


class UserRepository:
    """Credential store backed by a SQLAlchemy session."""

    def __init__(self, session):
        self.session = session

    def create(self, email, password_hash):
        # A duplicate email surfaces as sqlalchemy.exc.IntegrityError on commit.
        user = User(email=email, password_hash=password_hash)
        self.session.add(user)
        self.session.commit()
        return user

    def find_by_email(self, email):
        return self.session.query(User).filter_by(email=email).first()

    def rollback(self):
        self.session.rollback()


class MovieRepository:
    """Movie store. Every lookup and write is filtered by id and owner."""

    def __init__(self, session):
        self.session = session

    def _owned(self, movie_id, owner_id):
        return self.session.query(Movie).filter_by(id=movie_id, owner_id=owner_id)

    def list_for_owner(self, owner_id):
        return (
            self.session.query(Movie)
            .filter_by(owner_id=owner_id)
            .order_by(Movie.created_at.desc())
            .all()
        )

    def find_owned(self, movie_id, owner_id):
        return self._owned(movie_id, owner_id).first()

    def create(self, owner_id, fields):
        movie = Movie(owner_id=owner_id, **fields)
        self.session.add(movie)
        self.session.commit()
        return movie

    def update_owned(self, movie_id, owner_id, fields):
        """Apply ``fields`` to the owner's movie and return the rows touched."""
        values = dict(fields, updated_at=utcnow())
        count = self._owned(movie_id, owner_id).update(values, synchronize_session="fetch")
        self.session.commit()
        return count

    def delete_owned(self, movie_id, owner_id):
        count = self._owned(movie_id, owner_id).delete(synchronize_session="fetch")
        self.session.commit()
        return count

    def rollback(self):
        self.session.rollback()
