"""Line scanner that splits Elm page source into top-level blocks."""

from __future__ import annotations

from typing import List, Optional

from .logging import get_logger
from .models import (
    Function,
    FunctionKind,
    ImportDecl,
    Module,
    ModuleDecl,
    Other,
    Page,
    function_block,
)

logger = get_logger("scanner")

_FUNCTION_PREFIXES: tuple[tuple[str, FunctionKind], ...] = (
    ("init ", FunctionKind.INIT),
    ("update ", FunctionKind.UPDATE),
    ("view ", FunctionKind.VIEW),
    ("subscriptions ", FunctionKind.SUBSCRIPTIONS),
    ("page ", FunctionKind.PAGE),
)


class ParseError(ValueError):
    """Raised when a recognised declaration lacks its name."""

    def __init__(self, line: str) -> None:
        super().__init__(f"Failed to parse: {line}")
        self.line = line


class LineCursor:
    """Cursor over right-trimmed source lines with one line of lookahead."""

    def __init__(self, text: str) -> None:
        self._lines = [line.rstrip() for line in text.splitlines()]
        self._index = 0

    def peek(self) -> Optional[str]:
        if self._index < len(self._lines):
            return self._lines[self._index]
        return None

    def next(self) -> Optional[str]:
        line = self.peek()
        if line is not None:
            self._index += 1
        return line

    @property
    def position(self) -> int:
        return self._index

    def rewind(self, position: int) -> None:
        self._index = position


def parse(text: str) -> Page:
    """Split source text into a Page of blocks."""
    page = Page()
    lines = LineCursor(text)
    seen_module = False

    while True:
        line = lines.next()
        if line is None:
            break

        if line.startswith("module ") and not seen_module:
            page.blocks.append(ModuleDecl(parse_module(line, lines)))
            seen_module = True
            continue
        if line.startswith("import "):
            page.blocks.append(ImportDecl(parse_module(line, lines)))
            continue

        kind = _function_kind(line)
        if kind is None:
            page.blocks.append(Other(line))
            continue

        function = parse_function(line, lines)
        # The blank line before a function is layout the renderer restores.
        if page.blocks and page.blocks[-1] == Other(""):
            page.blocks.pop()
        page.blocks.append(function_block(kind, function.lines))

    logger.debug("Scanned %d blocks", len(page.blocks))
    return page


def parse_module(line: str, lines: LineCursor) -> Module:
    """Parse a `module` or `import` line, consuming a multi-line exposing list."""
    tokens = line.split()
    if len(tokens) < 2:
        raise ParseError(line)
    name = tokens[1]

    if "exposing" not in line:
        return Module(name=name, exposing=None)

    _, paren, rest = line.partition("(")
    exposing = rest.partition(")")[0] if paren else ""

    if not line.endswith(")"):
        while True:
            following = lines.next()
            if following is None:
                break
            exposing += following.partition(")")[0]
            if following.endswith(")"):
                break

    return Module(name=name, exposing=exposing)


def parse_function(line: str, lines: LineCursor) -> Function:
    """Collect a function's clauses and continuation lines.

    Blank lines trailing the definition are not kept: the first one is
    consumed as layout and any further ones are left for the caller.
    """
    tokens = line.split()
    if not tokens:
        raise ParseError(line)
    clause_prefix = f"{tokens[0]} "

    collected: List[str] = [line]
    end = lines.position
    while True:
        following = lines.peek()
        if following is None or not _continues(following, clause_prefix):
            break
        lines.next()
        collected.append(following)
        if following.strip():
            end = lines.position

    kept = len(collected) - (lines.position - end)
    lines.rewind(end)
    if lines.peek() == "":
        lines.next()
    return Function(lines=collected[:kept])


def _continues(line: str, clause_prefix: str) -> bool:
    return (
        not line.strip()
        or line.startswith((" ", "\t"))
        or line.startswith(clause_prefix)
    )


def _function_kind(line: str) -> Optional[FunctionKind]:
    for prefix, kind in _FUNCTION_PREFIXES:
        if line.startswith(prefix):
            return kind
    return None


__all__ = ["LineCursor", "ParseError", "parse", "parse_function", "parse_module"]
