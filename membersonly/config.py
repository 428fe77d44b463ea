"""
Members Only Configuration Module

Handles loading, validation, and management of configuration settings.
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

# Use tomllib for Python 3.11+, tomli for earlier versions
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib


DEFAULT_MEMBER_SECRET = "changeme"

# Environment variable -> (section, attribute)
ENV_OVERRIDES = {
    "MEMBER_SECRET": ("board", "member_secret"),
    "SECRET_KEY": ("web", "secret_key"),
    "MEMBERSONLY_DB": ("database", "path"),
    "MEMBERSONLY_LOG_LEVEL": ("logging", "level"),
}


@dataclass
class BoardConfig:
    """Board general settings."""
    name: str = "Members Only"
    member_secret: str = DEFAULT_MEMBER_SECRET
    min_password_length: int = 6


@dataclass
class DatabaseConfig:
    """Database settings."""
    path: str = "membersonly.db"


@dataclass
class CryptoConfig:
    """Password hashing settings."""
    argon2_time_cost: int = 3
    argon2_memory_kb: int = 65536
    argon2_parallelism: int = 1


@dataclass
class FeaturesConfig:
    """Feature toggles for handlers that are not mounted by default."""
    membership_enabled: bool = False
    delete_enabled: bool = False


@dataclass
class WebConfig:
    """Web server settings."""
    host: str = "127.0.0.1"
    port: int = 3000
    secret_key: str = ""
    debug: bool = False


@dataclass
class LoggingConfig:
    """Logging settings."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class Config:
    """Main configuration container."""
    board: BoardConfig = field(default_factory=BoardConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    crypto: CryptoConfig = field(default_factory=CryptoConfig)
    features: FeaturesConfig = field(default_factory=FeaturesConfig)
    web: WebConfig = field(default_factory=WebConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.board.member_secret:
            errors.append("board.member_secret must not be empty")
        elif self.board.member_secret == DEFAULT_MEMBER_SECRET:
            errors.append("board.member_secret must be changed from default")

        if not self.web.secret_key:
            errors.append("web.secret_key must be set (or SECRET_KEY in the environment)")

        if not 0 < self.web.port < 65536:
            errors.append("web.port must be between 1 and 65535")

        if self.board.min_password_length < 1:
            errors.append("board.min_password_length must be at least 1")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.logging.level.upper() not in valid_levels:
            errors.append(f"logging.level must be one of: {valid_levels}")

        return errors

    def save(self, path: Path):
        """Save configuration to TOML file."""
        import toml  # For writing

        data = self._to_dict()

        with open(path, "w") as f:
            toml.dump(data, f)

    def _to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        from dataclasses import asdict
        data = asdict(self)
        # TOML has no null
        if data["logging"]["file"] is None:
            del data["logging"]["file"]
        return data


def apply_env_overrides(config: Config, environ: Optional[Mapping[str, str]] = None) -> Config:
    """
    Overlay process environment values onto a loaded config.

    Secrets, the database path and the log level may come from the environment.
    """
    if environ is None:
        environ = os.environ

    for var, (section, attr) in ENV_OVERRIDES.items():
        value = environ.get(var)
        if value:
            setattr(getattr(config, section), attr, value)

    return config


def load_config(path: Path, environ: Optional[Mapping[str, str]] = None) -> Config:
    """Load configuration from TOML file, then apply environment overrides."""
    config = Config()

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)

        # Map TOML sections to config dataclasses
        if "board" in data:
            config.board = BoardConfig(**data["board"])

        if "database" in data:
            config.database = DatabaseConfig(**data["database"])

        if "crypto" in data:
            config.crypto = CryptoConfig(**data["crypto"])

        if "features" in data:
            config.features = FeaturesConfig(**data["features"])

        if "web" in data:
            config.web = WebConfig(**data["web"])

        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

    return apply_env_overrides(config, environ)


def create_default_config(path: Path):
    """Create a default configuration file."""
    config = Config()
    config.save(path)
