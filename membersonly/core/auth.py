"""
Members Only Authentication

Username/password verification against the user store.
"""

import logging
from typing import Optional

from ..db.models import User
from ..db.users import UserRepository
from .crypto import CryptoManager

logger = logging.getLogger(__name__)


class Authenticator:
    """Verifies credentials and yields the matching user."""

    def __init__(self, user_repo: UserRepository, crypto: CryptoManager):
        self.user_repo = user_repo
        self.crypto = crypto

    def verify(self, username: str, password: str) -> Optional[User]:
        """
        Look up a user by username and check the password.

        Returns the User on success, None on any failure. Callers get no
        hint whether the username or the password was wrong.
        """
        username = (username or "").strip()
        if not username or not password:
            return None

        user = self.user_repo.get_user_by_username(username)
        if not user:
            logger.warning(f"Login failed: unknown user '{username}'")
            return None

        if not self.crypto.verify_password(password, user.password_hash):
            logger.warning(f"Login failed: bad password for '{username}'")
            return None

        if self.crypto.needs_rehash(user.password_hash):
            user.password_hash = self.crypto.hash_password(password)
            self.user_repo.update_user(user)
            logger.info(f"Rehashed password for '{username}'")

        logger.info(f"User logged in: {username}")
        return user
