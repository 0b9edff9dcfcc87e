"""Configuration management for Figma References."""

import os
from dataclasses import dataclass
from pathlib import Path


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""
    pass


# Default values
DEFAULT_CHUNK_SIZE = 5
DEFAULT_CHUNK_DELAY_MS = 100
DEFAULT_GIT_TIMEOUT_SECONDS = 30
DEFAULT_SETTINGS_PATH = str(Path.home() / ".config" / "figma-references" / "settings.json")


@dataclass(frozen=True)
class ChunkConfig:
    """Pacing for PR lookups: how many run together, and the pause between groups."""

    group_size: int = DEFAULT_CHUNK_SIZE
    inter_group_delay: float = DEFAULT_CHUNK_DELAY_MS / 1000

    def __post_init__(self):
        if self.group_size < 1:
            raise ConfigError(f"group_size must be at least 1, got: {self.group_size}")
        if self.inter_group_delay < 0:
            raise ConfigError(f"inter_group_delay must not be negative, got: {self.inter_group_delay}")


DEFAULT_CHUNK_CONFIG = ChunkConfig()


def _int_from_env(key: str, default: int, minimum: int) -> int:
    raw = os.getenv(key, str(default))
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got: {raw}")
    if value < minimum:
        raise ConfigError(f"{key} must be at least {minimum}, got: {value}")
    return value


@dataclass(frozen=True)
class Config:
    """Immutable configuration for a reference search."""

    settings_path: str = DEFAULT_SETTINGS_PATH
    chunk_size: int = DEFAULT_CHUNK_SIZE
    chunk_delay_ms: int = DEFAULT_CHUNK_DELAY_MS
    git_timeout_seconds: int = DEFAULT_GIT_TIMEOUT_SECONDS

    @property
    def chunk_config(self) -> ChunkConfig:
        """Build the pacing value object from the chunk settings."""
        return ChunkConfig(
            group_size=self.chunk_size,
            inter_group_delay=self.chunk_delay_ms / 1000,
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        The GitHub token is not part of this; see settings.get_github_token.

        Raises:
            ConfigError: If a numeric setting is malformed or out of range.
        """
        return cls(
            settings_path=os.getenv("FIGMA_REFS_SETTINGS_PATH", DEFAULT_SETTINGS_PATH),
            chunk_size=_int_from_env("FIGMA_REFS_CHUNK_SIZE", DEFAULT_CHUNK_SIZE, 1),
            chunk_delay_ms=_int_from_env("FIGMA_REFS_CHUNK_DELAY_MS", DEFAULT_CHUNK_DELAY_MS, 0),
            git_timeout_seconds=_int_from_env(
                "FIGMA_REFS_GIT_TIMEOUT_SECONDS",
                DEFAULT_GIT_TIMEOUT_SECONDS,
                1
            ),
        )
