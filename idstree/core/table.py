from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Optional

from idstree.core.expand.resolve import resolve_variant


class VariantTable:
    """Read-only map of character -> {variant tag -> raw description}.

    Built once, then only read; safe to share between threads.
    """

    def __init__(self, entries: Mapping[str, Mapping[str, str]]) -> None:
        self._entries: Mapping[str, Mapping[str, str]] = MappingProxyType(
            {ch: MappingProxyType(dict(vars_)) for ch, vars_ in entries.items()}
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, ch: object) -> bool:
        return ch in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def variants(self, ch: str) -> Optional[Mapping[str, str]]:
        return self._entries.get(ch)

    def lookup(self, ch: str, preference: Sequence[str]) -> Optional[tuple[str, str]]:
        available = self._entries.get(ch)
        if available is None:
            return None
        return resolve_variant(ch, available, preference)
