from __future__ import annotations

from typing import Any

from idstree.core.model import BinExpr, Empty, IdsNode, IdsTree


INDENT = 4


def to_string_simp(node: IdsNode, level: int) -> str:
    """Flat IDS string, truncated at ``level``.

    At level 1 any node naming a character collapses to that character. Each step
    down costs one level but never goes below 1, so deep trees keep rendering
    instead of failing.
    """
    if level < 1:
        raise ValueError("level must be >= 1")
    if level == 1 and node.char is not None:
        return node.char
    lv_next = level - 1 if level > 1 else level
    expr = node.expr
    if isinstance(expr, Empty):
        return ""
    return expr.op + "".join(to_string_simp(arg, lv_next) for arg in expr.args)


def format_tree(node: IdsNode, level: int = 0) -> str:
    lines: list[str] = []
    _format_tree_r(node, level, lines)
    return "".join(lines)


def format_ids_tree(tree: IdsTree) -> str:
    head = f"'{tree.root.char}' " if tree.root.char is not None else ""
    return head + "\n" + format_tree(tree.root)


def _format_tree_r(node: IdsNode, level: int, out: list[str]) -> None:
    line = " " * (level * INDENT) + "* "
    expr = node.expr
    if not isinstance(expr, Empty):
        line += expr.op
        if isinstance(expr, BinExpr) and expr.op_arg is not None:
            line += f"[{expr.op_arg}]"
    line += "\t"
    if node.char is not None:
        line += node.char
        if node.variant:
            line += f"({node.variant})"
        line += " "
    if node.strokes is not None:
        line += f"{node.strokes} "
    if node.hint:
        line += f"Hint: {{{node.hint}}}"
    out.append(line + "\n")

    for child in node.children:
        _format_tree_r(child, level + 1, out)


def node_to_dict(node: IdsNode) -> dict[str, Any]:
    expr = node.expr
    out: dict[str, Any] = {
        "char": node.char,
        "variant": node.variant,
        "strokes": node.strokes,
        "hint": node.hint,
        "op": None if isinstance(expr, Empty) else expr.op,
        "op_arg": expr.op_arg if isinstance(expr, BinExpr) else None,
        "children": [node_to_dict(c) for c in node.children],
    }
    return out
