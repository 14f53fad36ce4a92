from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from pseudoloc.core.errors import SettingsError


DEFAULT_LOCALE = "German"
DEFAULT_WORKERS = 1


@dataclass(frozen=True)
class Settings:
    locale: str
    seed: Optional[int]
    workers: int
    profile_file: Optional[str]


def _env_str(name: str) -> Optional[str]:
    value = (os.getenv(name, "") or "").strip()
    return value or None


def _env_int(name: str, *, minimum: Optional[int] = None) -> Optional[int]:
    raw = _env_str(name)
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise SettingsError(
            code="E_SETTINGS_INVALID",
            message=f"{name} must be an integer, got {raw!r}",
            path=name,
        ) from None
    if minimum is not None and value < minimum:
        raise SettingsError(
            code="E_SETTINGS_INVALID",
            message=f"{name} must be >= {minimum}, got {value}",
            path=name,
        )
    return value


def load_settings() -> Settings:
    """Read defaults from the environment.

    Resolution order for every setting: command line option, then
    PSEUDOLOC_<NAME>, then the built-in default.
    """

    workers = _env_int("PSEUDOLOC_WORKERS", minimum=1)
    return Settings(
        locale=_env_str("PSEUDOLOC_LOCALE") or DEFAULT_LOCALE,
        seed=_env_int("PSEUDOLOC_SEED"),
        workers=workers if workers is not None else DEFAULT_WORKERS,
        profile_file=_env_str("PSEUDOLOC_PROFILE_FILE"),
    )
