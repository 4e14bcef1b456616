"""Password hashing and bearer token primitives."""

from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with a per-password salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(
    user_id: int,
    secret: str,
    expires_in_seconds: int,
    algorithm: str = "HS256",
    now: Optional[datetime] = None,
) -> str:
    """
    Issue a signed token carrying the user id.

    Args:
        user_id: Identifier of the authenticated user
        secret: Server signing secret
        expires_in_seconds: Token lifetime
        algorithm: JWT signing algorithm
        now: Issue time (defaults to the current UTC time)

    Returns:
        Encoded token string
    """
    issued_at = now or datetime.now(timezone.utc)
    payload = {
        "userId": str(user_id),
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=expires_in_seconds),
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str = "HS256") -> int:
    """
    Validate a token and return its user id.

    Raises:
        jwt.InvalidTokenError: If the token is malformed, expired, signed
            with another key or carries no usable user id
    """
    payload = jwt.decode(
        token, secret, algorithms=[algorithm], options={"require": ["exp", "userId"]}
    )
    try:
        return int(payload["userId"])
    except (TypeError, ValueError) as e:
        raise jwt.InvalidTokenError("Token carries an invalid user id") from e
