"""Serialises a block sequence back to Elm source text."""

from __future__ import annotations

from typing import Iterable, List

from .models import Block, FunctionBlock, ImportDecl, Module, ModuleDecl, Other, Page


def render(page: Page | Iterable[Block]) -> str:
    """Concatenate every block's text in sequence order."""
    return "".join(render_block(block) for block in page)


def render_block(block: Block) -> str:
    if isinstance(block, ModuleDecl):
        return _declaration("module", block.module)
    if isinstance(block, ImportDecl):
        return _declaration("import", block.module)
    if isinstance(block, FunctionBlock):
        lines: List[str] = ["", *block.function.lines, ""]
        return "".join(f"{line}\n" for line in lines)
    if isinstance(block, Other):
        return f"{block.text}\n"
    raise TypeError(f"Unknown block type: {type(block).__name__}")


def _declaration(keyword: str, module: Module) -> str:
    if module.exposing is None:
        return f"{keyword} {module.name}\n"
    return f"{keyword} {module.name} exposing ({module.exposing})\n"


__all__ = ["render", "render_block"]
