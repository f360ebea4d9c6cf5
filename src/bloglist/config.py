# configuration for the bloglist service
import os
from datetime import timedelta

from common.jwt_keys import load_jwt_keys

class Config:
    # SQLAlchemy
    SQLALCHEMY_DATABASE_URI = os.getenv("BLOGLIST_DATABASE_URL",
                                        "sqlite:///bloglist.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT token stuff (bearer header only, no refresh tokens)
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(
        seconds=int(os.getenv("BLOGLIST_TOKEN_EXPIRES", "3600")))
    JWT_PRIVATE_KEY = None
    JWT_PUBLIC_KEY = None
    JWT_ALGORITHM = None
    JWT_SECRET_KEY = None

    # logging
    LOG_LEVEL = os.getenv("BLOGLIST_LOG_LEVEL", "INFO")

    # testing
    TESTING = False

    def __init__(self):
        load_jwt_keys(self, private_key_env="BLOGLIST_PRIVATE_KEY",
                      public_key_env="BLOGLIST_PUBLIC_KEY")

class TestConfig(Config):
    # SQLAlchemy
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"

    # bcrypt cost
    BCRYPT_LOG_ROUNDS = 4

    # JWT
    JWT_ALGORITHM = "HS256"
    JWT_SECRET_KEY = "test-secret" # nosec

    # logging
    LOG_LEVEL = "WARNING"

    # testing
    TESTING = True

    def __init__(self):
        pass
