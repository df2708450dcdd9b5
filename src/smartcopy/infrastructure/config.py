"""Configuration constants and .env parsing."""

from __future__ import annotations

import os
from pathlib import Path

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def read_env_file(keys: list[str]) -> dict[str, str]:
    """Parse .env file and return values for requested keys.

    Does NOT load into os.environ; callers decide what to do with values.
    """
    env_file = Path.cwd() / ".env"
    try:
        content = env_file.read_text()
    except OSError:
        return {}

    result: dict[str, str] = {}
    wanted = set(keys)

    for line in content.splitlines():
        trimmed = line.strip()
        if not trimmed or trimmed.startswith("#"):
            continue
        eq_idx = trimmed.find("=")
        if eq_idx == -1:
            continue
        key = trimmed[:eq_idx].strip()
        if key not in wanted:
            continue
        value = trimmed[eq_idx + 1 :].strip()
        if (value.startswith('"') and value.endswith('"')) or (value.startswith("'") and value.endswith("'")):
            value = value[1:-1]
        if value:
            result[key] = value

    return result


def parse_flag(value: str | None, default: bool) -> bool:
    """Interpret a boolean setting; unrecognized or missing values yield the default."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


# Read config values from .env (falls back to os.environ).
_env_config = read_env_file(["SMARTCOPY_PROMPT", "SMARTCOPY_PRESERVE"])

PROMPT_ON_OVERWRITE: bool = parse_flag(
    os.environ.get("SMARTCOPY_PROMPT") or _env_config.get("SMARTCOPY_PROMPT"), default=False
)
PRESERVE_ATTRIBUTES: bool = parse_flag(
    os.environ.get("SMARTCOPY_PRESERVE") or _env_config.get("SMARTCOPY_PRESERVE"), default=True
)

OVERWRITE_PROMPT: str = "overwrite {target} (yes/no)? "
COMPLETION_MESSAGE: str = "ALL DONE"
