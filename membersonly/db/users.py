"""
Members Only User Database Operations

CRUD operations for user accounts.
"""

import time
import logging
from typing import Optional

from .connection import Database
from .models import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Repository for user-related database operations."""

    def __init__(self, db: Database):
        self.db = db

    def create_user(
        self,
        username: str,
        first_name: str,
        last_name: str,
        password_hash: str,
        membership_status: bool = False
    ) -> User:
        """Create a new user."""
        now_us = int(time.time() * 1_000_000)

        cursor = self.db.execute("""
            INSERT INTO users (
                username, first_name, last_name, password_hash,
                membership_status, created_at_us
            ) VALUES (?, ?, ?, ?, ?, ?)
        """, (
            username,
            first_name,
            last_name,
            password_hash,
            1 if membership_status else 0,
            now_us
        ))

        return User(
            id=cursor.lastrowid,
            username=username,
            first_name=first_name,
            last_name=last_name,
            password_hash=password_hash,
            membership_status=membership_status,
            created_at_us=now_us
        )

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        row = self.db.fetchone("SELECT * FROM users WHERE id = ?", (user_id,))
        return self._row_to_user(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by exact username."""
        row = self.db.fetchone(
            "SELECT * FROM users WHERE username = ?",
            (username,)
        )
        return self._row_to_user(row) if row else None

    def get_users_by_ids(self, user_ids: list[int]) -> dict[int, User]:
        """Get several users at once, keyed by ID. Missing IDs are left out."""
        if not user_ids:
            return {}

        placeholders = ", ".join("?" for _ in user_ids)
        rows = self.db.fetchall(
            f"SELECT * FROM users WHERE id IN ({placeholders})",
            tuple(user_ids)
        )
        return {row["id"]: self._row_to_user(row) for row in rows}

    def update_user(self, user: User) -> bool:
        """Persist the mutable fields of an existing user."""
        cursor = self.db.execute("""
            UPDATE users
            SET first_name = ?, last_name = ?, password_hash = ?,
                membership_status = ?
            WHERE id = ?
        """, (
            user.first_name,
            user.last_name,
            user.password_hash,
            1 if user.membership_status else 0,
            user.id
        ))
        return cursor.rowcount > 0

    def _row_to_user(self, row) -> User:
        """Convert database row to User object."""
        return User(
            id=row["id"],
            username=row["username"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            password_hash=row["password_hash"],
            membership_status=bool(row["membership_status"]),
            created_at_us=row["created_at_us"]
        )
