import os
from datetime import timedelta

from dotenv import load_dotenv

load_dotenv()


class Config:
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///movies.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY") or os.getenv("JWT_SECRET")
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)

    try:
        BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))
    except ValueError:
        BCRYPT_ROUNDS = 10
    PEPPER = os.getenv("PEPPER", "")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
