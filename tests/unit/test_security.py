import pytest

from app import create_app
from errors import ConfigurationError
from security import PasswordHasher


def test_hash_round_trip():
    hasher = PasswordHasher(rounds=4)
    hashed = hasher.hash("pw123456")
    assert hasher.verify("pw123456", hashed)
    assert not hasher.verify("pw1234567", hashed)


def test_hash_is_salted():
    hasher = PasswordHasher(rounds=4)
    assert hasher.hash("pw123456") != hasher.hash("pw123456")


def test_pepper_is_part_of_the_hash():
    hashed = PasswordHasher(rounds=4, pepper="pepper-a").hash("pw123456")
    assert PasswordHasher(rounds=4, pepper="pepper-a").verify("pw123456", hashed)
    assert not PasswordHasher(rounds=4, pepper="pepper-b").verify("pw123456", hashed)


@pytest.mark.parametrize("stored", [None, b"", b"not-a-bcrypt-hash"])
def test_verify_rejects_unusable_hashes(stored):
    assert not PasswordHasher(rounds=4).verify("pw123456", stored)


def test_app_refuses_to_start_without_secret(tmp_path):
    with pytest.raises(ConfigurationError):
        create_app(
            {
                "TESTING": True,
                "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'unit.db'}",
                "JWT_SECRET_KEY": None,
            }
        )
