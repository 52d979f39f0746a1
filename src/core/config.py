"""Client configuration.

Settings come from environment variables (`HEAVERC_*`), a project `.env`,
and the per-user `.env`. The CLI can override the API base URL with a TOML
file passed through `--config`.
"""

from __future__ import annotations

import os
import sys
import tomllib
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.errors import ConfigError

VERSION = "0.2.0"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "heaverc"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "heaverc"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "heaverc"
    return Path.home() / ".config" / "heaverc"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def load_config_file(path: Path) -> str:
    """Read the API base URL from a TOML config file.

    Expected layout::

        [api]
        base_url = "http://lxbox.host.s:8081/"
    """

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid config file {path}: {exc}") from exc

    api = data.get("api")
    base_url = api.get("base_url") if isinstance(api, dict) else None
    if not isinstance(base_url, str) or not base_url.strip():
        raise ConfigError(f"{path}: missing [api] base_url")
    return base_url.strip()


class AppSettings(BaseSettings):
    """Central client settings."""

    model_config = SettingsConfigDict(
        env_prefix="HEAVERC_",
        extra="ignore",
        case_sensitive=False,
        # Project first (dev), then the per-user config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_base_url: str | None = Field(
        default=None,
        description="heaverd-ng API base URL; the built-in default is used when unset.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout (seconds).",
    )
    user_agent: str = Field(
        default=f"heaverc/{VERSION}",
        min_length=1,
        description="User-Agent sent to the API.",
    )
