from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from pseudoloc.core.model import LocaleProfile
from pseudoloc.core.profiles.registry import (
    ProfileRegistry,
    build_registry,
    default_registry,
    make_profile,
    validate_profile,
)


logger = logging.getLogger(__name__)


class ProfileConfigError(ValueError):
    pass


def load_profile_file(path: str | Path) -> dict[str, LocaleProfile]:
    """Load locale profiles from a YAML file.

    Format:
      <locale>:
        substitutions:
          <char>: ["<candidate>", ...]   # or a string of candidates
        filler: "<characters>"           # or a list of single characters

    Returns a mapping of locale id -> profile. Shape problems raise
    ProfileConfigError; well-formed profiles that break a profile invariant
    raise InvalidProfileError.
    """
    p = Path(path)
    raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ProfileConfigError("profile file must be a mapping of locale -> profile")

    out: dict[str, LocaleProfile] = {}
    for k, v in raw.items():
        if not isinstance(k, str) or not k.strip():
            raise ProfileConfigError("locale ids must be non-empty strings")
        lid = k.strip()
        if not isinstance(v, dict):
            raise ProfileConfigError(f"profile '{lid}' must be a mapping")

        subs_raw = v.get("substitutions", {})
        if subs_raw is None:
            subs_raw = {}
        if not isinstance(subs_raw, dict):
            raise ProfileConfigError(f"profile '{lid}' substitutions must be a mapping")
        subs: dict[str, list[str]] = {}
        for ch, cands in subs_raw.items():
            if not isinstance(ch, str):
                raise ProfileConfigError(f"profile '{lid}' substitution keys must be strings")
            subs[ch] = _characters(cands, f"profile '{lid}' substitution '{ch}'")

        if "filler" not in v:
            raise ProfileConfigError(f"profile '{lid}' is missing 'filler'")
        filler = _characters(v["filler"], f"profile '{lid}' filler")

        profile = make_profile(lid, subs, filler)
        errors = validate_profile(profile, file=str(p))
        if errors:
            raise errors[0]
        out[lid] = profile

    logger.debug("loaded %d profile(s) from %s", len(out), p)
    return out


def _characters(value: Any, what: str) -> list[str]:
    if isinstance(value, str):
        return list(value)
    if isinstance(value, list) and all(isinstance(x, str) for x in value):
        return list(value)
    raise ProfileConfigError(f"{what} must be a string or a list of strings")


def load_and_merge(profile_file: str | None) -> ProfileRegistry:
    if not profile_file:
        return default_registry()
    overrides = load_profile_file(profile_file)
    return build_registry(overrides, file=str(profile_file))
