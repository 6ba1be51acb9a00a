"""Rewrites a parsed page into a requested archetype."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from .logging import get_logger
from .models import (
    Archetype,
    Block,
    FunctionBlock,
    FunctionKind,
    ImportDecl,
    Module,
    ModuleDecl,
    Other,
    Page,
    function_block,
)
from .renderer import render_block
from .templates import TemplateGenerator

logger = get_logger("transform")

SHARED_MODULE = "Shared"
REQUEST_MODULE = "Request"
PAGE_MODULE = "Page"
EFFECT_MODULE = "Effect"
COMMENT_PREFIX = "--"

MODEL_ALIAS = "type alias Model ="
DEFAULT_MODEL = "\ntype alias Model = {}\n"
DEFAULT_MSG = "\ntype Msg = ReplaceMe\n"

_default_generator: Optional[TemplateGenerator] = None


@dataclass(frozen=True)
class Namespaces:
    """Module namespaces used to derive a page's generated params module."""

    pages: str = "Pages"
    params: str = "Gen.Params"

    def params_module(self, page_module: str) -> str:
        name = page_module
        prefix = f"{self.pages}."
        while self.pages and name.startswith(prefix):
            name = name[len(prefix):]
        return f"{self.params}.{name}"


def transform(
    page: Page,
    archetype: Archetype,
    accepts_shared: bool,
    accepts_request: bool,
    *,
    generator: TemplateGenerator | None = None,
    namespaces: Namespaces | None = None,
) -> Page:
    """Return a new page rewritten to the archetype; the input is left untouched."""
    generator = generator or _shared_generator()
    namespaces = namespaces or Namespaces()

    def generate(kind: FunctionKind) -> List[str]:
        return generator.generate(
            archetype, kind, shared=accepts_shared, request=accepts_request
        )

    injected: List[ImportDecl] = []
    if accepts_shared and page.find_import(SHARED_MODULE) is None:
        injected.append(_import(SHARED_MODULE))
    if accepts_request and page.find_import(REQUEST_MODULE) is None:
        injected.append(_import(REQUEST_MODULE, REQUEST_MODULE))
    existing_page_import = page.find_import(PAGE_MODULE)
    if existing_page_import is None:
        injected.append(_import(PAGE_MODULE, PAGE_MODULE))
    if archetype is Archetype.ADVANCED and page.find_import(EFFECT_MODULE) is None:
        injected.append(_import(EFFECT_MODULE, EFFECT_MODULE))
    for decl in injected:
        logger.debug("Injecting import %s", decl.module.name)
    blocks: List[Block] = list(injected)

    module_decl = page.module_decl()
    params_name: Optional[str] = None
    existing_params_import: Optional[ImportDecl] = None
    if module_decl is not None:
        params_name = namespaces.params_module(module_decl.module.name)
        existing_params_import = page.find_import(params_name)

    standalone: List[Other] = []
    for block in page.blocks:
        if isinstance(block, ModuleDecl):
            if block is not module_decl:
                blocks.append(Other(render_block(block).rstrip("\n")))
                continue
            if existing_params_import is None and params_name is not None:
                logger.debug("Injecting import %s", params_name)
                blocks.append(_import(params_name, "Params"))
            blocks.insert(
                0,
                ModuleDecl(replace(block.module, exposing=archetype.exposing)),
            )
        elif isinstance(block, ImportDecl):
            if block is existing_page_import:
                blocks.append(_expose(block, PAGE_MODULE))
            elif block is existing_params_import:
                blocks.append(_expose(block, "Params"))
            else:
                blocks.append(block)
        elif isinstance(block, FunctionBlock):
            lines = generate(block.kind)
            comment = comment_out(block)
            if lines:
                blocks.append(function_block(block.kind, lines))
            else:
                logger.debug("No %s in a %s page; keeping it commented out", block.kind.value, archetype.value)
                standalone.append(comment)
            blocks.append(comment)
        else:
            blocks.append(block)

    result = Page(_spaced(blocks, standalone))
    _backfill(result, archetype, generate)
    return result


def comment_out(block: FunctionBlock) -> Other:
    """Return the function's lines as an inert commented block."""
    lines = [f"{COMMENT_PREFIX} {line}".rstrip() for line in block.function.lines]
    return Other("\n".join(lines))


def expose(exposing: Optional[str], name: str) -> str:
    """Add a name to an exposing list unless it is already exposed."""
    if exposing is None or not exposing.strip():
        return name
    exposed = [entry.split("(")[0].strip() for entry in exposing.split(",")]
    if name in exposed or ".." in exposed:
        return exposing
    return f"{name}, {exposing}"


def _expose(block: ImportDecl, name: str) -> ImportDecl:
    return ImportDecl(replace(block.module, exposing=expose(block.module.exposing, name)))


def _import(name: str, exposing: Optional[str] = None) -> ImportDecl:
    return ImportDecl(Module(name=name, exposing=exposing))


def _backfill(
    page: Page,
    archetype: Archetype,
    generate: Callable[[FunctionKind], List[str]],
) -> None:
    def append(kind: FunctionKind) -> None:
        if page.has_kind(kind):
            return
        lines = generate(kind)
        if lines:
            logger.debug("Back-filling %s", kind.value)
            page.blocks.append(function_block(kind, lines))

    append(FunctionKind.PAGE)

    if archetype is not Archetype.STATIC:
        if not _has_text(page, lambda text: text.startswith(MODEL_ALIAS)):
            logger.debug("Back-filling Model type alias")
            page.blocks.append(Other(DEFAULT_MODEL))
        if not _has_text(page, lambda text: text.startswith("type Msg ") or text == "type Msg"):
            logger.debug("Back-filling Msg type")
            page.blocks.append(Other(DEFAULT_MSG))
        if archetype is not Archetype.SANDBOX:
            append(FunctionKind.SUBSCRIPTIONS)
        append(FunctionKind.INIT)
        append(FunctionKind.UPDATE)

    append(FunctionKind.VIEW)


def _spaced(blocks: List[Block], standalone: List[Other]) -> List[Block]:
    """Surround commented functions that lost their replacement with blank lines."""
    marked = {id(block) for block in standalone}
    spaced: List[Block] = []
    for index, block in enumerate(blocks):
        if id(block) not in marked:
            spaced.append(block)
            continue
        if spaced and not _blank_edge(spaced[-1]):
            spaced.append(Other(""))
        spaced.append(block)
        following = blocks[index + 1] if index + 1 < len(blocks) else None
        if following is not None and not _blank_edge(following):
            spaced.append(Other(""))
    return spaced


def _blank_edge(block: Block) -> bool:
    # Rendered functions open and close with a blank line.
    return isinstance(block, FunctionBlock) or block == Other("")


def _has_text(page: Page, predicate: Callable[[str], bool]) -> bool:
    return any(
        isinstance(block, Other) and predicate(block.text.strip())
        for block in page.blocks
    )


def _shared_generator() -> TemplateGenerator:
    global _default_generator
    if _default_generator is None:
        _default_generator = TemplateGenerator()
    return _default_generator


__all__ = ["Namespaces", "comment_out", "expose", "transform"]
