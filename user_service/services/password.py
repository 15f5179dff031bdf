"""
Password hashing and verification with bcrypt (through passlib).
"""

from passlib.context import CryptContext

from user_service.settings import BCRYPT_ROUNDS

pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password, hashed_password) -> bool:
    """
    Check a plaintext password against a stored hash.

    Returns False instead of raising when either side is missing or the
    stored value is not a recognizable hash.
    """
    if password is None or hashed_password is None:
        return False
    try:
        return pwd_context.verify(password, hashed_password)
    except ValueError:
        return False
