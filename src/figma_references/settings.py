"""Persisted settings and GitHub token lookup."""

import json
import logging
import os
from pathlib import Path
from typing import Callable, Optional

from figma_references.config import ConfigError, DEFAULT_SETTINGS_PATH

logger = logging.getLogger(__name__)

GITHUB_TOKEN_ENV_VAR = "GITHUB_TOKEN"
GITHUB_TOKEN_SETTING = "github.token"

TokenProvider = Callable[[], Optional[str]]


def _load_settings(settings_path: str) -> dict:
    path = Path(settings_path)
    if not path.exists():
        return {}

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Settings file is not valid JSON: {path}") from e
    except OSError as e:
        raise ConfigError(f"Could not read settings file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Settings file must contain a JSON object: {path}")
    return data


def get_github_token_from_settings(settings_path: str = DEFAULT_SETTINGS_PATH) -> Optional[str]:
    """Read the GitHub token from the persisted settings file.

    Returns:
        The token, or None if the file or the setting is missing.
    """
    token = _load_settings(settings_path).get(GITHUB_TOKEN_SETTING)
    return token or None


def has_github_token(settings_path: str = DEFAULT_SETTINGS_PATH) -> bool:
    """Check whether a token is stored in the settings file."""
    return get_github_token_from_settings(settings_path) is not None


def save_github_token(token: str, settings_path: str = DEFAULT_SETTINGS_PATH) -> None:
    """Store a GitHub token in the settings file, keeping other settings.

    Args:
        token: GitHub personal access token.
        settings_path: Settings file to update; created if missing.
    """
    if not token:
        raise ConfigError("Refusing to save an empty GitHub token")

    settings = _load_settings(settings_path)
    settings[GITHUB_TOKEN_SETTING] = token

    path = Path(settings_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    # Token file should only be readable by its owner, from the moment it exists
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as f:
        json.dump(settings, f, indent=2)
    # The mode above only applies on creation
    os.chmod(path, 0o600)
    logger.info(f"Saved GitHub token to {path}")


def get_github_token(settings_path: str = DEFAULT_SETTINGS_PATH) -> Optional[str]:
    """Get the GitHub token from the environment, falling back to settings.

    Returns:
        The token, or None if neither source has one.
    """
    env_token = os.getenv(GITHUB_TOKEN_ENV_VAR)
    if env_token:
        return env_token
    return get_github_token_from_settings(settings_path)


def token_provider_for(settings_path: str = DEFAULT_SETTINGS_PATH) -> TokenProvider:
    """Bind get_github_token to a settings file for injection into clients."""
    return lambda: get_github_token(settings_path)
