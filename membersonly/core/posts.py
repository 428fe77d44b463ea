"""
Members Only Post Service

Listing, posting and deleting board messages.
"""

import logging
from typing import Optional, Mapping, TYPE_CHECKING

from ..db.models import Message, Post, User
from ..db.messages import MessageRepository
from ..db.users import UserRepository
from ..utils.formatting import truncate
from .errors import NotFoundError
from .validation import ValidationResult, validate_message

if TYPE_CHECKING:
    from .board import MembersOnly

logger = logging.getLogger(__name__)

# SQLite INTEGER range; ids outside it cannot exist
MIN_ID = -2**63
MAX_ID = 2**63 - 1


def _valid_id(message_id: Optional[int]) -> bool:
    return message_id is not None and MIN_ID <= message_id <= MAX_ID


class PostService:
    """Message board operations. Any logged-in user may delete any post."""

    def __init__(self, board: "MembersOnly"):
        self.board = board
        self.msg_repo = MessageRepository(board.db)
        self.user_repo = UserRepository(board.db)

    def list_posts(self) -> list[Post]:
        """All messages in insertion order, each with its author resolved."""
        messages = self.msg_repo.get_all_messages()

        author_ids = list({m.author_id for m in messages if m.author_id is not None})
        authors = self.user_repo.get_users_by_ids(author_ids)

        return [Post(message=m, author=authors.get(m.author_id)) for m in messages]

    def get_post(self, message_id: int) -> Post:
        """
        Get one message with its author.

        Raises:
            NotFoundError: no message with that ID
        """
        message = self.msg_repo.get_message_by_id(message_id) if _valid_id(message_id) else None
        if not message:
            raise NotFoundError("Message not found")

        author = self.user_repo.get_user_by_id(message.author_id) if message.author_id else None
        return Post(message=message, author=author)

    def create_post(self, author: User, form: Mapping[str, str]) -> tuple[Optional[Message], ValidationResult]:
        """
        Create a message from a submitted form.

        Returns:
            (Message, result) on success
            (None, result) with field errors on failure
        """
        result = validate_message(form)
        if not result.ok:
            return None, result

        message = self.msg_repo.create_message(
            author_id=author.id,
            title=result.values["title"],
            text=result.values["message"]
        )

        logger.info(f"Message {message.id} posted by {author.username}: {truncate(message.title, 40)}")
        return message, result

    def delete_post(self, message_id: Optional[int], deleted_by: User):
        """
        Delete a message.

        Raises:
            NotFoundError: no message with that ID
        """
        if not _valid_id(message_id) or not self.msg_repo.delete_message(message_id):
            raise NotFoundError("Message not found")

        logger.info(f"Message {message_id} deleted by {deleted_by.username}")
