from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


Catalog = dict[str, str]

DELIMITER = "|"


@dataclass(frozen=True)
class LocaleProfile:
    locale_id: str
    substitutions: Mapping[str, tuple[str, ...]]
    filler_alphabet: tuple[str, ...]


@dataclass(frozen=True)
class CatalogRun:
    catalog: Catalog
    total: int
    completed: int
    cancelled: bool = False
    skipped: tuple[str, ...] = ()
