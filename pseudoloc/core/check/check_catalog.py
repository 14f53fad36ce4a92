from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional

from pseudoloc.core.errors import CatalogCheckError
from pseudoloc.core.model import DELIMITER, LocaleProfile
from pseudoloc.core.transform.expansion import filler_count
from pseudoloc.core.transform.transform_text import split_pseudo


# Checks an existing pseudo catalog against its source:
# - L_MISSING_KEY / L_EXTRA_KEY: key sets differ
# - L_NOT_A_STRING: pseudo value is not a string
# - L_SEGMENT_LENGTH: value shorter than the source text plus delimiter
# - L_MISSING_DELIMITER: no "|" right after the substituted segment
# - L_UNEXPECTED_CHARACTER: mapped char not replaced by one of its candidates, or unmapped char changed
# - L_FILLER_LENGTH: filler size disagrees with the expansion tiers
# - L_FILLER_CHARACTER: filler char outside the profile's filler alphabet


def check_catalog(
    source: Mapping[str, str],
    pseudo: Mapping[str, Any],
    profile: LocaleProfile,
    *,
    file: Optional[str] = None,
) -> list[CatalogCheckError]:
    errors: list[CatalogCheckError] = []

    for key in source:
        if key not in pseudo:
            errors.append(
                CatalogCheckError(
                    code="L_MISSING_KEY",
                    message=f"key missing from pseudo catalog: {key}",
                    file=file,
                    path=key,
                )
            )
    for key in pseudo:
        if key not in source:
            errors.append(
                CatalogCheckError(
                    code="L_EXTRA_KEY",
                    message=f"key not in source catalog: {key}",
                    file=file,
                    path=key,
                )
            )

    for key, text in source.items():
        if key not in pseudo:
            continue
        errors.extend(_check_entry(key, text, pseudo[key], profile, file))

    return _sorted(errors)


def _check_entry(
    key: str, text: str, value: Any, profile: LocaleProfile, file: Optional[str]
) -> list[CatalogCheckError]:
    if not isinstance(value, str):
        return [
            CatalogCheckError(
                code="L_NOT_A_STRING",
                message=f"value must be a string, got {type(value).__name__}",
                file=file,
                path=key,
            )
        ]

    if len(value) < len(text) + len(DELIMITER):
        return [
            CatalogCheckError(
                code="L_SEGMENT_LENGTH",
                message=f"value has {len(value)} characters, source alone needs {len(text)} plus delimiter",
                file=file,
                path=key,
            )
        ]

    parts = split_pseudo(value, len(text))
    if parts is None:
        return [
            CatalogCheckError(
                code="L_MISSING_DELIMITER",
                message=f"expected {DELIMITER!r} at position {len(text)}",
                file=file,
                path=key,
            )
        ]
    segment, filler = parts

    errors: list[CatalogCheckError] = []
    for i, (src_ch, out_ch) in enumerate(zip(text, segment)):
        candidates = profile.substitutions.get(src_ch)
        if candidates is None:
            ok = out_ch == src_ch
        else:
            ok = out_ch in candidates
        if not ok:
            expected_chars = "".join(candidates) if candidates is not None else src_ch
            errors.append(
                CatalogCheckError(
                    code="L_UNEXPECTED_CHARACTER",
                    message=f"{out_ch!r} at {src_ch!r}, expected one of {expected_chars!r}",
                    file=file,
                    path=f"{key}[{i}]",
                )
            )

    expected = filler_count(len(text))
    if len(filler) != expected:
        errors.append(
            CatalogCheckError(
                code="L_FILLER_LENGTH",
                message=f"filler has {len(filler)} characters, expected {expected}",
                file=file,
                path=key,
            )
        )

    alphabet = set(profile.filler_alphabet)
    bad = sorted({c for c in filler if c not in alphabet})
    if bad:
        errors.append(
            CatalogCheckError(
                code="L_FILLER_CHARACTER",
                message=f"filler characters outside the {profile.locale_id} alphabet: {''.join(bad)}",
                file=file,
                path=key,
            )
        )
    return errors


def _sorted(errors: Iterable[CatalogCheckError]) -> list[CatalogCheckError]:
    return sorted(
        list(errors),
        key=lambda e: (
            e.file or "",
            e.path or "",
            e.code,
        ),
    )
