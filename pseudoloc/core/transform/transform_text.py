from __future__ import annotations

from random import Random

from pseudoloc.core.model import DELIMITER, LocaleProfile
from pseudoloc.core.transform.expansion import filler_count


def substitute(text: str, profile: LocaleProfile, rng: Random) -> str:
    table = profile.substitutions
    out: list[str] = []
    for ch in text:
        candidates = table.get(ch)
        if candidates:
            out.append(rng.choice(candidates))
        else:
            out.append(ch)
    return "".join(out)


def generate_filler(count: int, profile: LocaleProfile, rng: Random) -> str:
    alphabet = profile.filler_alphabet
    return "".join(rng.choice(alphabet) for _ in range(count))


def transform(text: str, profile: LocaleProfile, rng: Random) -> str:
    """Return the pseudo-localized form of `text`.

    The substituted text keeps the original length; filler is sized from the
    original length by the expansion tiers. Result: "<substituted>|<filler>".
    An empty string becomes "|".
    """

    substituted = substitute(text, profile, rng)
    filler = generate_filler(filler_count(len(text)), profile, rng)
    return f"{substituted}{DELIMITER}{filler}"


def split_pseudo(pseudo: str, original_length: int) -> tuple[str, str] | None:
    """Split a pseudo string back into (substituted, filler).

    The substituted segment may itself contain "|", so the split point comes
    from the original length. Returns None when the delimiter is not where it
    should be.
    """

    if len(pseudo) <= original_length or pseudo[original_length] != DELIMITER:
        return None
    return pseudo[:original_length], pseudo[original_length + 1 :]
