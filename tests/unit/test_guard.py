from datetime import datetime, timedelta, timezone

import jwt
import pytest
from flask_jwt_extended import create_access_token, create_refresh_token

from conftest import auth_header


def test_missing_header_is_rejected(client):
    response = client.get("/api/movies")
    assert response.status_code == 401
    assert response.get_json() == {"error": "No autorizado, no hay token"}


@pytest.mark.parametrize(
    "header",
    [
        "Bearer",
        "Bearer not-a-jwt",
        "Bearer a.b.c",
        "Token",
    ],
)
def test_malformed_header_is_rejected(client, header):
    response = client.get("/api/movies", headers={"Authorization": header})
    assert response.status_code == 401
    assert response.get_json() == {"error": "Token no válido"}


def test_expired_token_is_rejected(client):
    token = create_access_token(identity="user-1", expires_delta=timedelta(seconds=-5))
    response = client.get("/api/movies", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.get_json() == {"error": "Token no válido"}


def test_token_signed_with_other_secret_is_rejected(client):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "user-1", "type": "access", "iat": now, "nbf": now, "exp": now + timedelta(hours=1)},
        "some-other-secret",
        algorithm="HS256",
    )
    response = client.get("/api/movies", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401
    assert response.get_json() == {"error": "Token no válido"}


def test_refresh_token_is_not_accepted(client):
    token = create_refresh_token(identity="user-1")
    response = client.get("/api/movies", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_invalid_token_failures_share_one_response(client):
    expired = create_access_token(identity="user-1", expires_delta=timedelta(seconds=-5))
    bodies = {
        client.get("/api/movies", headers={"Authorization": f"Bearer {token}"}).data
        for token in (expired, "garbage", "a.b.c")
    }
    assert len(bodies) == 1


def test_valid_token_reaches_the_view(client):
    response = client.get("/api/movies", headers=auth_header(client))
    assert response.status_code == 200


def test_auth_routes_do_not_need_a_token(client):
    response = client.post("/api/auth/register", json={"email": "b@x.com", "password": "pw123456"})
    assert response.status_code == 201
