"""Members Only Utilities Module."""

from .formatting import format_timestamp, format_author, truncate

__all__ = ["format_timestamp", "format_author", "truncate"]
