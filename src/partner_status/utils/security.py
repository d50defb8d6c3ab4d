"""Security utilities for password hashing and invitation codes."""

import secrets
import string

import bcrypt

from partner_status.config import get_settings
from partner_status.models.user import INVITATION_CODE_LENGTH

INVITATION_CODE_ALPHABET = string.ascii_uppercase + string.digits


def hash_password(password: str) -> str:
    """Hash a plain text password using bcrypt."""
    password_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a hashed password."""
    password_bytes = plain_password.encode("utf-8")
    hashed_bytes = hashed_password.encode("utf-8")
    return bcrypt.checkpw(password_bytes, hashed_bytes)


def generate_invitation_code(length: int = INVITATION_CODE_LENGTH) -> str:
    """Generate a random invitation code from [A-Z0-9].

    Uniqueness is not checked here; callers retry on collision.
    """
    return "".join(secrets.choice(INVITATION_CODE_ALPHABET) for _ in range(length))
