"""Block model shared by the scanner, transformation engine, and renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator, List, Optional, Union


class FunctionKind(str, Enum):
    """Top-level functions the scanner recognises by name."""

    INIT = "init"
    UPDATE = "update"
    VIEW = "view"
    SUBSCRIPTIONS = "subscriptions"
    PAGE = "page"


class Archetype(str, Enum):
    """Canonical elm-spa page shapes."""

    STATIC = "static"
    SANDBOX = "sandbox"
    ELEMENT = "element"
    ADVANCED = "advanced"

    @classmethod
    def from_name(cls, name: str) -> Optional["Archetype"]:
        """Return the archetype for a CLI token, or None when unknown."""
        for archetype in cls:
            if archetype.value == name:
                return archetype
        return None

    @property
    def exposing(self) -> str:
        """Names the page module exposes for this archetype."""
        if self is Archetype.STATIC:
            return "page"
        return "page, Model, Msg"


@dataclass
class Module:
    """A `module` or `import` declaration."""

    name: str
    exposing: Optional[str] = None


@dataclass
class Function:
    """Raw source lines of one top-level definition, clauses included."""

    lines: List[str] = field(default_factory=list)


@dataclass
class ModuleDecl:
    module: Module


@dataclass
class ImportDecl:
    module: Module


@dataclass
class FunctionBlock:
    """Base for the recognised function blocks."""

    function: Function
    kind: ClassVar[FunctionKind]


@dataclass
class InitFn(FunctionBlock):
    kind: ClassVar[FunctionKind] = FunctionKind.INIT


@dataclass
class UpdateFn(FunctionBlock):
    kind: ClassVar[FunctionKind] = FunctionKind.UPDATE


@dataclass
class ViewFn(FunctionBlock):
    kind: ClassVar[FunctionKind] = FunctionKind.VIEW


@dataclass
class SubscriptionsFn(FunctionBlock):
    kind: ClassVar[FunctionKind] = FunctionKind.SUBSCRIPTIONS


@dataclass
class PageFn(FunctionBlock):
    kind: ClassVar[FunctionKind] = FunctionKind.PAGE


@dataclass
class Other:
    """Opaque source text carried through untouched."""

    text: str


Block = Union[ModuleDecl, ImportDecl, InitFn, UpdateFn, ViewFn, SubscriptionsFn, PageFn, Other]

FUNCTION_BLOCKS: dict[FunctionKind, type[FunctionBlock]] = {
    FunctionKind.INIT: InitFn,
    FunctionKind.UPDATE: UpdateFn,
    FunctionKind.VIEW: ViewFn,
    FunctionKind.SUBSCRIPTIONS: SubscriptionsFn,
    FunctionKind.PAGE: PageFn,
}


def function_block(kind: FunctionKind, lines: List[str]) -> FunctionBlock:
    """Build the block variant matching a function kind."""
    return FUNCTION_BLOCKS[kind](Function(list(lines)))


@dataclass
class Page:
    """Ordered block sequence for one source file."""

    blocks: List[Block] = field(default_factory=list)

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def module_decl(self) -> Optional[ModuleDecl]:
        for block in self.blocks:
            if isinstance(block, ModuleDecl):
                return block
        return None

    def imports(self) -> List[ImportDecl]:
        return [block for block in self.blocks if isinstance(block, ImportDecl)]

    def find_import(self, name: str) -> Optional[ImportDecl]:
        """Return the first import of the named module."""
        for block in self.imports():
            if block.module.name == name:
                return block
        return None

    def functions(self, kind: FunctionKind) -> List[FunctionBlock]:
        return [
            block
            for block in self.blocks
            if isinstance(block, FunctionBlock) and block.kind is kind
        ]

    def has_kind(self, kind: FunctionKind) -> bool:
        return bool(self.functions(kind))


__all__ = [
    "Archetype",
    "Block",
    "Function",
    "FunctionBlock",
    "FunctionKind",
    "ImportDecl",
    "InitFn",
    "Module",
    "ModuleDecl",
    "Other",
    "Page",
    "PageFn",
    "SubscriptionsFn",
    "UpdateFn",
    "ViewFn",
    "function_block",
]
