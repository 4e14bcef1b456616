"""Repository for user account operations."""

from typing import Optional

from sqlalchemy import or_

from ..models import User
from .base import BaseRepository


class UserRepository(BaseRepository):
    """Repository for user account operations."""

    def get_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by primary key."""
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by email address."""
        return self.session.query(User).filter(User.email == email).first()

    def find_by_email_or_username(self, email: str, username: str) -> Optional[User]:
        """Get any user holding either the email or the username."""
        return (
            self.session.query(User)
            .filter(or_(User.email == email, User.username == username))
            .first()
        )

    def create(self, username: str, email: str, password_hash: str) -> User:
        """Insert a new user."""
        user = User(username=username, email=email, password_hash=password_hash)
        self.session.add(user)
        self.session.commit()
        self.session.refresh(user)
        return user

    def delete(self, user_id: int) -> bool:
        """Delete a user and their watchlist."""
        user = self.get_by_id(user_id)
        if user is None:
            return False
        self.session.delete(user)
        self.session.commit()
        return True
