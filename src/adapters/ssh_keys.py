"""Public SSH key loading for container creation."""

from __future__ import annotations

from pathlib import Path

from core.errors import KeyFileError


def read_public_key(path: str | Path) -> str:
    """Return the file contents as-is; the server installs them verbatim."""

    try:
        return Path(path).expanduser().read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise KeyFileError(f"Cannot read key file {path}: {exc}") from exc


def resolve_key(*, raw_key: str | None, key_path: str | None) -> str:
    """Raw key wins over a key file; neither set gives an empty key."""

    if raw_key:
        return raw_key
    if key_path:
        return read_public_key(key_path)
    return ""
