"""
Members Only Formatting Utilities

Helper functions for formatting output.
"""

from datetime import datetime
from typing import Optional

from ..db.models import User

ANONYMOUS = "Anonymous"
DELETED_AUTHOR = "Deleted user"


def format_timestamp(timestamp_us: int) -> str:
    """
    Format microsecond timestamp to human-readable string.

    Args:
        timestamp_us: Microseconds since epoch

    Returns:
        Formatted string like "2025-12-10 14:32"
    """
    if not timestamp_us:
        return "Never"

    timestamp_s = timestamp_us / 1_000_000
    dt = datetime.fromtimestamp(timestamp_s)
    return dt.strftime("%Y-%m-%d %H:%M")


def format_author(author: Optional[User], viewer: Optional[User]) -> str:
    """
    Name a post's author as the viewer is allowed to see it.

    Only members see who wrote a post; everyone else sees "Anonymous".
    """
    if viewer is None or not viewer.membership_status:
        return ANONYMOUS

    if author is None:
        return DELETED_AUTHOR

    return f"{author.full_name} ({author.username})"


def truncate(text: str, max_length: int = 50, suffix: str = "...") -> str:
    """
    Truncate text to maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length including suffix
        suffix: Suffix to add if truncated

    Returns:
        Truncated text
    """
    if len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix
