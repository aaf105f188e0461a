from __future__ import annotations

import logging
from collections.abc import Sequence

from idstree.core.errors import IdsExpansionError, IdsGrammarError, IdsLookupError
from idstree.core.expand.resolve import extend_preference
from idstree.core.model import IdsNode, IdsTree
from idstree.core.parse.parse_ids import parse_ids
from idstree.core.table import VariantTable


logger = logging.getLogger(__name__)


def create_tree(table: VariantTable, ch: str, preference: Sequence[str]) -> IdsTree:
    return IdsTree(root=expand_character(table, ch, preference))


def expand_character(
    table: VariantTable,
    ch: str,
    preference: Sequence[str],
    *,
    _chain: tuple[str, ...] = (),
) -> IdsNode:
    """Return the fully expanded tree for ``ch``.

    Any failure below aborts the whole expansion with IdsExpansionError; the error
    keeps the code of its cause and ``path`` lists the characters from the root
    down to the failing one.
    """
    chain = _chain + (ch,)
    if ch in _chain:
        raise IdsExpansionError(
            code="E_EXPAND_CYCLE",
            message=f"{ch!r} refers back to itself",
            subject=ch,
            path="/".join(chain),
        )

    logger.debug("expand %r with (%s)", ch, ",".join(preference))
    try:
        variant, raw = _lookup(table, ch, preference)
        node = parse_ids(raw)
    except (IdsLookupError, IdsGrammarError) as e:
        raise IdsExpansionError(
            code=e.code,
            message=f"{ch!r}: {e.message}",
            subject=ch,
            path="/".join(chain),
        ) from e

    node.char = ch
    node.variant = variant
    _expand_children(table, node, preference, chain)
    return node


def _lookup(table: VariantTable, ch: str, preference: Sequence[str]) -> tuple[str, str]:
    found = table.lookup(ch, preference)
    if found is None:
        raise IdsLookupError(
            code="E_LOOKUP_NOT_FOUND",
            message="no IDS entry under any variant",
            subject=ch,
        )
    return found


def _expand_children(
    table: VariantTable,
    node: IdsNode,
    preference: Sequence[str],
    chain: tuple[str, ...],
) -> None:
    children = node.children
    for i, child in enumerate(children):
        ch = child.char
        if ch is not None and child.is_unresolved:
            children[i] = expand_character(
                table,
                ch,
                extend_preference(preference, child.variant),
                _chain=chain,
            )
        elif child.char is None and child.strokes is None:
            # anonymous sub-expression of the same description
            _expand_children(table, child, preference, chain)
