"""Members Only Database Module - SQLite database operations."""

from .connection import Database
from .models import User, Message, Post

__all__ = ["Database", "User", "Message", "Post"]
