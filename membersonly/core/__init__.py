"""Members Only Core Module - Board class, credentials, validation and services."""

from .board import MembersOnly
from .crypto import CryptoManager
from .auth import Authenticator
from .accounts import AccountService
from .posts import PostService
from .errors import MembersOnlyError, NotFoundError, ConfigError

__all__ = [
    "MembersOnly",
    "CryptoManager",
    "Authenticator",
    "AccountService",
    "PostService",
    "MembersOnlyError",
    "NotFoundError",
    "ConfigError",
]
