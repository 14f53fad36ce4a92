from __future__ import annotations

import logging
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Optional

from pseudoloc.core.errors import InvalidProfileError, UnknownLocaleError
from pseudoloc.core.model import DELIMITER, LocaleProfile
from pseudoloc.core.profiles.builtin import BUILTIN_PROFILE_DATA


logger = logging.getLogger(__name__)


def make_profile(
    locale_id: str,
    substitutions: Mapping[str, Iterable[str]],
    filler_alphabet: Iterable[str],
) -> LocaleProfile:
    """Build a frozen LocaleProfile from plain Python data.

    Candidate lists become tuples, the table becomes a read-only mapping and a
    filler given as a string is split into its characters. Invariants are
    checked by ProfileRegistry.register through validate_profile.
    """

    table = {k: tuple(v) for k, v in substitutions.items()}
    return LocaleProfile(
        locale_id=locale_id,
        substitutions=MappingProxyType(table),
        filler_alphabet=tuple(filler_alphabet),
    )


def validate_profile(
    profile: LocaleProfile, *, file: Optional[str] = None
) -> list[InvalidProfileError]:
    """Return every invariant violation of a profile (empty when valid)."""

    errors: list[InvalidProfileError] = []
    loc = profile.locale_id if isinstance(profile.locale_id, str) else "<profile>"

    if not isinstance(profile.locale_id, str) or not profile.locale_id.strip():
        errors.append(
            InvalidProfileError(
                code="E_PROFILE_ID",
                message="locale id must be a non-empty string",
                file=file,
                path="locale_id",
            )
        )

    for key, candidates in profile.substitutions.items():
        key_path = f"{loc}.substitutions[{key!r}]"
        if not isinstance(key, str) or len(key) != 1:
            errors.append(
                InvalidProfileError(
                    code="E_PROFILE_KEY",
                    message=f"substitution key must be a single character, got {key!r}",
                    file=file,
                    path=key_path,
                )
            )
        if not candidates:
            errors.append(
                InvalidProfileError(
                    code="E_PROFILE_EMPTY_CANDIDATES",
                    message="candidate set must not be empty",
                    file=file,
                    path=key_path,
                )
            )
            continue
        for i, c in enumerate(candidates):
            if not isinstance(c, str) or len(c) != 1:
                errors.append(
                    InvalidProfileError(
                        code="E_PROFILE_CANDIDATE",
                        message=f"candidate must be a single character, got {c!r}",
                        file=file,
                        path=f"{key_path}[{i}]",
                    )
                )

    if not profile.filler_alphabet:
        errors.append(
            InvalidProfileError(
                code="E_PROFILE_EMPTY_FILLER",
                message="filler alphabet must not be empty",
                file=file,
                path=f"{loc}.filler",
            )
        )
    for i, c in enumerate(profile.filler_alphabet):
        if not isinstance(c, str) or len(c) != 1:
            errors.append(
                InvalidProfileError(
                    code="E_PROFILE_FILLER",
                    message=f"filler member must be a single character, got {c!r}",
                    file=file,
                    path=f"{loc}.filler[{i}]",
                )
            )
        elif c == DELIMITER:
            errors.append(
                InvalidProfileError(
                    code="E_PROFILE_FILLER",
                    message=f"filler must not contain the delimiter {DELIMITER!r}",
                    file=file,
                    path=f"{loc}.filler[{i}]",
                )
            )

    return errors


class ProfileRegistry:
    """Registered locale profiles, looked up by locale id.

    Registration validates a profile and stores it for good: ids cannot be
    re-registered, so a profile handed out by profile_for never changes.
    """

    def __init__(self, profiles: Iterable[LocaleProfile] = ()) -> None:
        self._profiles: dict[str, LocaleProfile] = {}
        for p in profiles:
            self.register(p)

    def register(self, profile: LocaleProfile, *, file: Optional[str] = None) -> LocaleProfile:
        # Store a private frozen copy; the caller may still hold the source table.
        profile = make_profile(profile.locale_id, profile.substitutions, profile.filler_alphabet)
        errors = validate_profile(profile, file=file)
        if errors:
            raise errors[0]
        if self._find(profile.locale_id, casefold=True) is not None:
            raise InvalidProfileError(
                code="E_PROFILE_DUPLICATE",
                message=f"locale already registered: {profile.locale_id}",
                file=file,
                path="locale_id",
            )
        self._profiles[profile.locale_id] = profile
        logger.debug(
            "registered locale %s (%d substitution keys, %d filler characters)",
            profile.locale_id,
            len(profile.substitutions),
            len(profile.filler_alphabet),
        )
        return profile

    def profile_for(self, locale_id: str) -> LocaleProfile:
        found = self._find(locale_id)
        if found is None:
            known = ", ".join(self.locale_ids()) or "<none>"
            raise UnknownLocaleError(
                code="E_UNKNOWN_LOCALE",
                message=f"unknown locale: {locale_id} (choose one of: {known})",
                path="locale",
            )
        return found

    def locale_ids(self) -> list[str]:
        return list(self._profiles.keys())

    def _find(self, locale_id: str, *, casefold: bool = True) -> Optional[LocaleProfile]:
        if locale_id in self._profiles:
            return self._profiles[locale_id]
        if not casefold or not isinstance(locale_id, str):
            return None
        wanted = locale_id.strip().casefold()
        for lid, p in self._profiles.items():
            if lid.casefold() == wanted:
                return p
        return None

    def __contains__(self, locale_id: object) -> bool:
        return isinstance(locale_id, str) and self._find(locale_id) is not None

    def __iter__(self) -> Iterator[LocaleProfile]:
        return iter(list(self._profiles.values()))

    def __len__(self) -> int:
        return len(self._profiles)


def builtin_profiles() -> list[LocaleProfile]:
    return [
        make_profile(lid, data["substitutions"], data["filler"])
        for lid, data in BUILTIN_PROFILE_DATA.items()
    ]


def build_registry(
    overrides: Optional[Mapping[str, LocaleProfile]] = None, *, file: Optional[str] = None
) -> ProfileRegistry:
    """Return a registry of the built-ins merged with optional overrides.

    Overrides replace built-ins with the same id (compared case-insensitively)
    before anything is registered, and may add new locales after them.
    """

    merged: dict[str, LocaleProfile] = {p.locale_id: p for p in builtin_profiles()}
    if overrides:
        for lid, p in overrides.items():
            for existing in list(merged):
                if existing.casefold() == lid.casefold():
                    logger.debug("profile %s overrides built-in %s", lid, existing)
                    del merged[existing]
            merged[lid] = p

    registry = ProfileRegistry()
    for p in merged.values():
        registry.register(p, file=file if overrides and p.locale_id in overrides else None)
    return registry


@lru_cache(maxsize=1)
def default_registry() -> ProfileRegistry:
    return build_registry()


def profile_for(locale_id: str) -> LocaleProfile:
    return default_registry().profile_for(locale_id)


def describe_profile(profile: LocaleProfile) -> dict[str, Any]:
    return {
        "locale": profile.locale_id,
        "substitution_keys": len(profile.substitutions),
        "multi_candidate_keys": sorted(k for k, v in profile.substitutions.items() if len(v) > 1),
        "filler": "".join(profile.filler_alphabet),
    }
