from __future__ import annotations

from typing import NoReturn, Optional

from idstree.core.errors import IdsGrammarError
from idstree.core.model import (
    BINARY_OPS,
    TERNARY_OPS,
    UNARY_OPS,
    BinExpr,
    IdsNode,
    TerExpr,
    UnaryExpr,
)


SYNTAX_CHARS: frozenset[str] = frozenset("{}[]()#")
STROKE_PREFIX = "#("


def parse_ids(raw: str) -> IdsNode:
    """Parse one raw description into a node tree.

    Grammar (the whole string must be exactly one ``expr``):

      expr   := atom | stroke | unary | binary | ternary
      atom   := CHAR ['(' TAG ')']
      stroke := ['{' HINT '}'] '#(' STROKES ')'
      unary  := UNARY_OP expr
      binary := ['{' HINT '}'] BINARY_OP ['[' OVERLAY ']'] expr expr
      ternary:= ['{' HINT '}'] TERNARY_OP expr expr expr

    Atoms come back unresolved (character set, empty expression). Operators are
    kept as opaque tags; only their arity is interpreted.
    """
    parser = _Parser(raw)
    if not raw:
        parser.fail("empty description")
    node = parser.expr()
    if parser.pos != len(raw):
        parser.fail("unexpected trailing input")
    return node


class _Parser:
    def __init__(self, raw: str) -> None:
        self.raw = raw
        self.pos = 0

    def peek(self) -> Optional[str]:
        if self.pos < len(self.raw):
            return self.raw[self.pos]
        return None

    def fail(self, message: str) -> NoReturn:
        fragment = self.raw[self.pos :] or self.raw
        raise IdsGrammarError(
            code="E_GRAMMAR",
            message=f"{message} at offset {self.pos} in {self.raw!r}",
            subject=fragment,
        )

    def bracketed(self, close: str, what: str) -> str:
        # self.pos sits on the opening bracket
        end = self.raw.find(close, self.pos + 1)
        if end == -1:
            self.fail(f"unclosed {what}")
        text = self.raw[self.pos + 1 : end]
        if not text:
            self.fail(f"empty {what}")
        self.pos = end + 1
        return text

    def expr(self) -> IdsNode:
        hint: Optional[str] = None
        if self.peek() == "{":
            hint = self.bracketed("}", "hint")

        c = self.peek()
        if c is None:
            self.fail("unexpected end of description")

        if c in BINARY_OPS:
            self.pos += 1
            op_arg = self.bracketed("]", "overlay argument") if self.peek() == "[" else None
            args = [self.expr(), self.expr()]
            return IdsNode(hint=hint or "", expr=BinExpr(op=c, args=args, op_arg=op_arg))

        if c in TERNARY_OPS:
            self.pos += 1
            args = [self.expr(), self.expr(), self.expr()]
            return IdsNode(hint=hint or "", expr=TerExpr(op=c, args=args))

        if self.raw.startswith(STROKE_PREFIX, self.pos):
            self.pos += 1
            strokes = self.bracketed(")", "stroke sequence")
            return IdsNode(strokes=strokes, hint=hint or "")

        if hint is not None:
            self.fail("hint must precede a stroke sequence or a binary/ternary operator")

        if c in UNARY_OPS:
            self.pos += 1
            return IdsNode(expr=UnaryExpr(op=c, args=[self.expr()]))

        if c in SYNTAX_CHARS:
            self.fail(f"unexpected {c!r}")

        self.pos += 1
        variant = self.bracketed(")", "variant tag") if self.peek() == "(" else ""
        return IdsNode(char=c, variant=variant)
