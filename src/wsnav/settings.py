"""Navigator settings: reads settings.toml + .env to produce NavigatorConfig.

Backend URLs and tuning knobs live in the ``[navigator]`` table of
settings.toml; secrets stay in the environment (or a .env file) and are
referenced by variable name.

Key entities:
  - NavigatorConfig: frozen dataclass with all resolved settings.
  - load_settings(): parse .env + settings.toml → NavigatorConfig.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .utils import wsnav_dir

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NavigatorConfig:
    """Resolved configuration for one navigator session."""

    # Backends
    persistence_url: str
    execution_url: str
    auth_token: str = ""

    # Polling
    poll_interval: float = 1.0  # seconds between status polls
    error_delay: float = 1.0  # seconds to wait after a failed poll
    request_timeout: float = 10.0

    # Display
    refresh_interval: float = 2.0

    config_dir: Path = field(default_factory=lambda: wsnav_dir())

    @property
    def settings_file(self) -> Path:
        return self.config_dir / "settings.toml"


def load_settings(config_dir: Path | None = None) -> NavigatorConfig:
    """Read .env + settings.toml and return a NavigatorConfig.

    Args:
        config_dir: Override for the base config directory.
                    Defaults to ``wsnav_dir()``.
    """
    if config_dir is None:
        config_dir = wsnav_dir()

    # Load .env files (local cwd first, then config_dir)
    local_env = Path(".env")
    global_env = config_dir / ".env"
    if local_env.is_file():
        load_dotenv(local_env)
    if global_env.is_file():
        load_dotenv(global_env)

    toml_path = config_dir / "settings.toml"
    if not toml_path.is_file():
        raise FileNotFoundError(f"Settings file not found: {toml_path}")

    with open(toml_path, "rb") as f:
        raw = tomllib.load(f)

    section = raw.get("navigator", {})

    urls: dict[str, str] = {}
    for key in ("persistence_url", "execution_url"):
        value = str(section.get(key, "")).strip()
        if not value:
            raise ValueError(f"settings.toml: [navigator] {key} is required.")
        urls[key] = value

    token_env = section.get("auth_token_env", "")
    auth_token = os.getenv(token_env, "") if token_env else ""
    if token_env and not auth_token:
        logger.warning("auth_token_env=%s is not set; requests are unauthenticated", token_env)

    def _float(key: str, default: float) -> float:
        value = section.get(key, default)
        try:
            result = float(value)
        except (TypeError, ValueError):
            raise ValueError(f"settings.toml: [navigator] {key} must be a number.") from None
        if result < 0:
            raise ValueError(f"settings.toml: [navigator] {key} must not be negative.")
        return result

    return NavigatorConfig(
        persistence_url=urls["persistence_url"],
        execution_url=urls["execution_url"],
        auth_token=auth_token,
        poll_interval=_float("poll_interval", 1.0),
        error_delay=_float("error_delay", 1.0),
        request_timeout=_float("request_timeout", 10.0),
        refresh_interval=_float("refresh_interval", 2.0),
        config_dir=config_dir,
    )
