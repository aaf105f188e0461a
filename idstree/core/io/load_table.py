from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

from idstree.core.errors import IdsLoadError
from idstree.core.table import VariantTable


logger = logging.getLogger(__name__)

COMMENT_PREFIX = "*"


def split_variants(seq: str) -> list[tuple[str, str]]:
    """Split ``⿰木木(G,T)`` into [("G", "⿰木木"), ("T", "⿰木木")].

    A trailing group opened by ``#(`` is a stroke sequence, not a tag list.
    """
    if seq.endswith(")"):
        p = seq.rfind("(")
        if p == -1:
            logger.warning("IDS syntax may be wrong: %r", seq)
        elif p > 0 and seq[p - 1] != "#":
            return [(var, seq[:p]) for var in seq[p + 1 : -1].split(",")]
    return [("", seq)]


def parse_ids_lines(
    lines: Iterable[str],
    file: Optional[str] = None,
    into: Optional[dict[str, dict[str, str]]] = None,
) -> dict[str, dict[str, str]]:
    """Collect ``char<TAB>ids[;ids...]`` lines into char -> {tag -> raw}.

    Comment lines (``*``) and lines without a second field are skipped. Later
    lines override earlier ones for the same (char, tag).
    """
    ids_map: dict[str, dict[str, str]] = {} if into is None else into
    for lineno, ln in enumerate(lines, start=1):
        ln = ln.rstrip("\r\n")
        if ln.startswith(COMMENT_PREFIX):
            continue
        fields = ln.split("\t")
        if len(fields) < 2 or not fields[0]:
            continue
        if len(fields[0]) != 1:
            logger.warning("%s:%d: %r is not a single character", file or "<ids>", lineno, fields[0])
            continue

        entry = ids_map.setdefault(fields[0], {})
        for seq in fields[1].split(";"):
            for var, raw in split_variants(seq):
                entry[var] = raw
    return ids_map


def load_table(paths: Iterable[str | Path]) -> VariantTable:
    """Load IDS source files, in order, into a read-only table."""
    ids_map: dict[str, dict[str, str]] = {}
    for path in paths:
        p = Path(path)
        if not p.exists():
            raise IdsLoadError(
                code="E_FILE_NOT_FOUND",
                message="file does not exist",
                file=str(p),
            )
        try:
            text = p.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise IdsLoadError(code="E_FILE_READ", message=str(e), file=str(p)) from e
        parse_ids_lines(text.splitlines(), file=str(p), into=ids_map)

    logger.info("loaded IDS data for %d characters", len(ids_map))
    return VariantTable(ids_map)
