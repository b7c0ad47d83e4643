import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from app import create_app
from models import db


@pytest.fixture()
def app(tmp_path):
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'unit.db'}",
            "JWT_SECRET_KEY": "test-jwt",
            "BCRYPT_ROUNDS": 4,
            "PEPPER": "",
        }
    )
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


def register(client, email="a@x.com", password="pw123456"):
    return client.post("/api/auth/register", json={"email": email, "password": password})


def login(client, email="a@x.com", password="pw123456"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def auth_header(client, email="a@x.com", password="pw123456"):
    register(client, email, password)
    token = login(client, email, password).get_json()["token"]
    return {"Authorization": f"Bearer {token}"}
