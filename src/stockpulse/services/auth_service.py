"""Authentication service: registration, login and token validation."""

from dataclasses import dataclass
from typing import Optional

import jwt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config.logging import get_logger, log_audit_event
from ..config.settings import Settings
from ..core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from ..exceptions import ConflictError, NotFoundError, UnauthorizedError
from ..ormdb.models import User
from ..ormdb.repositories import UserRepository

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
USER_EXISTS = "User with this email or username already exists"


@dataclass
class AuthResult:
    """Token issued for an authenticated user."""

    token: str
    user: User


class AuthService:
    """Service for account lifecycle and bearer tokens."""

    def __init__(self, session: Session, settings: Settings):
        self.users = UserRepository(session)
        self.settings = settings
        self.logger = logger.bind(service="auth_service")

    def issue_token(self, user: User) -> str:
        """Sign a token for the user with the configured lifetime."""
        return create_access_token(
            user.id,
            self.settings.jwt_secret,
            self.settings.jwt_expires_in_seconds,
            algorithm=self.settings.jwt_algorithm,
        )

    def register(self, username: str, email: str, password: str) -> AuthResult:
        """
        Create an account and log it in.

        Raises:
            ConflictError: If the email or the username is already taken
        """
        if self.users.find_by_email_or_username(email, username):
            self.logger.info("Registration rejected, user exists")
            raise ConflictError(USER_EXISTS)

        password_hash = hash_password(password, rounds=self.settings.bcrypt_rounds)
        try:
            user = self.users.create(username, email, password_hash)
        except IntegrityError as e:
            # Lost a race with a concurrent registration
            self.users.session.rollback()
            raise ConflictError(USER_EXISTS) from e

        log_audit_event("user_registered", user_id=str(user.id), username=username)
        return AuthResult(token=self.issue_token(user), user=user)

    def login(self, email: str, password: str) -> AuthResult:
        """
        Authenticate with email and password.

        Raises:
            UnauthorizedError: With the same message whether the email is
                unknown or the password is wrong
        """
        user = self.users.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            self.logger.info("Login failed")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        log_audit_event("user_logged_in", user_id=str(user.id))
        return AuthResult(token=self.issue_token(user), user=user)

    def authenticate(self, token: Optional[str]) -> User:
        """
        Resolve a bearer token to its user.

        Raises:
            UnauthorizedError: If the token is missing, malformed, expired or
                signed with another key
            NotFoundError: If the user no longer exists
        """
        if not token:
            raise UnauthorizedError("Token required")

        try:
            user_id = decode_access_token(
                token, self.settings.jwt_secret, self.settings.jwt_algorithm
            )
        except jwt.InvalidTokenError as e:
            self.logger.info("Token rejected", error=str(e))
            raise UnauthorizedError("Invalid token") from e

        user = self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", "user", str(user_id))
        return user
