"""
Members Only Data Models

Dataclasses representing database entities.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """Registered board user."""
    id: Optional[int] = None
    username: str = ""
    first_name: str = ""
    last_name: str = ""
    password_hash: str = ""
    membership_status: bool = False
    created_at_us: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass
class Message:
    """Board message as stored."""
    id: Optional[int] = None
    author_id: Optional[int] = None
    title: str = ""
    text: str = ""
    created_at_us: int = 0


@dataclass
class Post:
    """Message resolved with its author for display."""
    message: Message
    author: Optional[User] = None

    @property
    def id(self) -> Optional[int]:
        return self.message.id

    @property
    def title(self) -> str:
        return self.message.title

    @property
    def text(self) -> str:
        return self.message.text

    @property
    def created_at_us(self) -> int:
        return self.message.created_at_us
