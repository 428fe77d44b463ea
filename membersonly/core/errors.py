"""
Members Only Exceptions
"""


class MembersOnlyError(Exception):
    """Base class for board errors."""
    status = 500


class NotFoundError(MembersOnlyError):
    """A referenced user or message does not exist."""
    status = 404


class ConfigError(MembersOnlyError):
    """Configuration failed validation at startup."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("Invalid configuration: " + "; ".join(errors))
