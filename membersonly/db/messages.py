"""
Members Only Message Database Operations

CRUD operations for board messages.
"""

import time
import logging
from typing import Optional

from .connection import Database
from .models import Message

logger = logging.getLogger(__name__)


class MessageRepository:
    """Repository for message-related database operations."""

    def __init__(self, db: Database):
        self.db = db

    def create_message(
        self,
        author_id: int,
        title: str,
        text: str
    ) -> Message:
        """Create a new message."""
        now_us = int(time.time() * 1_000_000)

        cursor = self.db.execute("""
            INSERT INTO messages (author_id, title, text, created_at_us)
            VALUES (?, ?, ?, ?)
        """, (author_id, title, text, now_us))

        return Message(
            id=cursor.lastrowid,
            author_id=author_id,
            title=title,
            text=text,
            created_at_us=now_us
        )

    def get_message_by_id(self, message_id: int) -> Optional[Message]:
        """Get message by ID."""
        row = self.db.fetchone("SELECT * FROM messages WHERE id = ?", (message_id,))
        return self._row_to_message(row) if row else None

    def get_all_messages(self) -> list[Message]:
        """Get every message in insertion order."""
        rows = self.db.fetchall("SELECT * FROM messages ORDER BY id")
        return [self._row_to_message(row) for row in rows]

    def delete_message(self, message_id: int) -> bool:
        """Delete a message. Returns False if no such message existed."""
        cursor = self.db.execute(
            "DELETE FROM messages WHERE id = ?",
            (message_id,)
        )
        return cursor.rowcount > 0

    def _row_to_message(self, row) -> Message:
        """Convert database row to Message object."""
        return Message(
            id=row["id"],
            author_id=row["author_id"],
            title=row["title"],
            text=row["text"],
            created_at_us=row["created_at_us"]
        )
