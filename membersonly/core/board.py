"""
Members Only Main Board Class

Central owner of configuration, storage and services.
"""

import logging
from typing import Optional

from ..config import Config
from ..db.connection import Database
from ..db.users import UserRepository
from .accounts import AccountService
from .auth import Authenticator
from .crypto import CryptoManager
from .errors import ConfigError
from .posts import PostService

logger = logging.getLogger(__name__)


class MembersOnly:
    """
    Main Members Only class - wires the board's components together.

    Responsibilities:
    - Open the database and run migrations
    - Build the credential, account and post services
    - Close the database on shutdown
    """

    def __init__(self, config: Config):
        """
        Initialize the board with configuration.

        Args:
            config: Loaded configuration object
        """
        self.config = config

        self.crypto = CryptoManager(
            time_cost=config.crypto.argon2_time_cost,
            memory_cost_kb=config.crypto.argon2_memory_kb,
            parallelism=config.crypto.argon2_parallelism
        )

        # These will be initialized in setup()
        self.db: Optional[Database] = None
        self.authenticator: Optional[Authenticator] = None
        self.accounts: Optional[AccountService] = None
        self.posts: Optional[PostService] = None

        logger.info(f"Members Only initialized: {config.board.name}")

    def setup(self, strict: bool = False):
        """
        Initialize all components.

        Args:
            strict: raise ConfigError if the configuration does not validate
        """
        errors = self.config.validate()
        if errors:
            if strict:
                raise ConfigError(errors)
            for error in errors:
                logger.warning(f"Config: {error}")

        self.db = Database(self.config.database.path)
        self.db.initialize()

        self.authenticator = Authenticator(UserRepository(self.db), self.crypto)
        self.accounts = AccountService(self)
        self.posts = PostService(self)

        logger.info(
            f"Members Only setup complete: {self.db.count_users()} users "
            f"({self.db.count_members()} members), "
            f"{self.db.count_messages()} messages"
        )

    def shutdown(self):
        """Release the database connection."""
        if self.db:
            self.db.close()
        logger.info("Members Only shut down")
