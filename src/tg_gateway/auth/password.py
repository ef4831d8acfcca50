"""Password hashing with bcrypt (used directly, passlib is unmaintained).

The work factor comes from settings.BCRYPT_ROUNDS so tests can run with a
cheap cost while production keeps the bcrypt default.
"""

import bcrypt

from config.settings import settings


def hash_password(plain: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(plain.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
