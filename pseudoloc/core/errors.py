from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PseudoLocError(Exception):
    """Base error envelope. Every failure the tool reports carries a stable code."""

    code: str
    message: str
    file: Optional[str] = None
    path: Optional[str] = None

    def __str__(self) -> str:
        parts: list[str] = []
        if self.file:
            parts.append(self.file)
        if self.path:
            parts.append(self.path)
        loc = ":".join(parts) if parts else "<catalog>"
        return f"{loc}: {self.code}: {self.message}"


class CatalogLoadError(PseudoLocError):
    pass


class CatalogValidationError(PseudoLocError):
    pass


class EmptyCatalogError(CatalogValidationError):
    pass


class UnknownLocaleError(PseudoLocError):
    pass


class InvalidProfileError(PseudoLocError):
    pass


class CatalogCheckError(PseudoLocError):
    pass


class SettingsError(PseudoLocError):
    pass
