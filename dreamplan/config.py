"""Configuration file management for dreamplan.

The config file also stands in for sign-in: its user_id identifies the author
of every event written from this machine.
"""

import os
import tomllib
import uuid
from pathlib import Path
from typing import Any

import tomli_w

from dreamplan.domain.models import UserId


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "dreamplan" / "config.toml"


def create_default_config(config_path: Path | None = None, display_name: str = "") -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
        display_name: Optional name shown in the timeline footer.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    default_config: dict[str, Any] = {
        "user_id": uuid.uuid4().hex,
        "display_name": display_name,
    }

    save_config(default_config, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def get_user_id(config_path: Path | None = None) -> UserId | None:
    """Get the local user identifier.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        User ID, or None if dreamplan has not been initialized.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return None

    user_id = config.get("user_id")
    return UserId(user_id) if user_id else None


def get_display_name(config_path: Path | None = None) -> str | None:
    """Get the name shown in the CLI footer.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Display name, or None if unset or dreamplan has not been initialized.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return None

    return config.get("display_name") or None
