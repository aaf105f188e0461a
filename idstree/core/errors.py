from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class IdsError(Exception):
    """Base error envelope.

    ``subject`` is the offending fragment or character, ``path`` the location inside
    a description or the chain of characters being expanded.
    """

    code: str
    message: str
    subject: Optional[str] = None
    file: Optional[str] = None
    path: Optional[str] = None

    def __str__(self) -> str:
        parts: list[str] = []
        if self.file:
            parts.append(self.file)
        if self.path:
            parts.append(self.path)
        loc = ":".join(parts) if parts else "<ids>"
        return f"{loc}: {self.code}: {self.message}"


class IdsGrammarError(IdsError):
    pass


class IdsLookupError(IdsError):
    pass


class IdsExpansionError(IdsError):
    pass


class IdsLoadError(IdsError):
    pass
