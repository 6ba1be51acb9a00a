"""Generates the canonical declarations for each page archetype."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, TemplateNotFound

from .models import Archetype, FunctionKind

SHARED_TYPE = "Shared.Model"
SHARED_ARG = "shared"
REQUEST_TYPE = "Request.With Params"
REQUEST_ARG = "req"


@dataclass(frozen=True)
class Declaration:
    """Signature types, parameters, and body lines after the toggle parameters."""

    signature: Tuple[str, ...]
    arguments: Tuple[str, ...]
    body: Tuple[str, ...]


def _update(result: str, returned: str) -> Declaration:
    return Declaration(
        signature=("Msg", "Model", result),
        arguments=("msg", "model"),
        body=("case msg of", "    _ ->", f"        {returned}"),
    )


_VIEW_BODY = ('View.placeholder "Hello World"',)

DECLARATIONS: Dict[Tuple[Archetype, FunctionKind], Declaration] = {
    (Archetype.SANDBOX, FunctionKind.INIT): Declaration(("Model",), (), ("{}",)),
    (Archetype.ELEMENT, FunctionKind.INIT): Declaration(
        ("(Model, Cmd Msg)",), (), ("({}, Cmd.none)",)
    ),
    (Archetype.ADVANCED, FunctionKind.INIT): Declaration(
        ("(Model, Effect Msg)",), (), ("({}, Effect.none)",)
    ),
    (Archetype.SANDBOX, FunctionKind.UPDATE): _update("Model", "model"),
    (Archetype.ELEMENT, FunctionKind.UPDATE): _update(
        "( Model, Cmd Msg )", "( model, Cmd.none )"
    ),
    (Archetype.ADVANCED, FunctionKind.UPDATE): _update(
        "( Model, Effect Msg )", "( model, Effect.none )"
    ),
    (Archetype.STATIC, FunctionKind.VIEW): Declaration(("View msg",), (), _VIEW_BODY),
    (Archetype.SANDBOX, FunctionKind.VIEW): Declaration(("Model", "View Msg"), ("model",), _VIEW_BODY),
    (Archetype.ELEMENT, FunctionKind.VIEW): Declaration(("Model", "View Msg"), ("model",), _VIEW_BODY),
    (Archetype.ADVANCED, FunctionKind.VIEW): Declaration(("Model", "View Msg"), ("model",), _VIEW_BODY),
    (Archetype.ELEMENT, FunctionKind.SUBSCRIPTIONS): Declaration(
        ("Model", "Sub Msg"), ("model",), ("Sub.none",)
    ),
    (Archetype.ADVANCED, FunctionKind.SUBSCRIPTIONS): Declaration(
        ("Model", "Sub Msg"), ("model",), ("Sub.none",)
    ),
}

# Functions each archetype's `page` hands to its Page combinator, in field order.
PAGE_WIRING: Dict[Archetype, Tuple[FunctionKind, ...]] = {
    Archetype.STATIC: (FunctionKind.VIEW,),
    Archetype.SANDBOX: (FunctionKind.INIT, FunctionKind.UPDATE, FunctionKind.VIEW),
    Archetype.ELEMENT: (
        FunctionKind.INIT,
        FunctionKind.UPDATE,
        FunctionKind.VIEW,
        FunctionKind.SUBSCRIPTIONS,
    ),
    Archetype.ADVANCED: (
        FunctionKind.INIT,
        FunctionKind.UPDATE,
        FunctionKind.VIEW,
        FunctionKind.SUBSCRIPTIONS,
    ),
}


class TemplateGenerator:
    """Renders declarations from the table above through Jinja templates.

    A project templates directory, when given, is searched before the packaged
    templates. A `<kind>.j2` file there replaces the generic declaration
    template for that kind.
    """

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)

    def supports(self, archetype: Archetype, kind: FunctionKind) -> bool:
        """Return True when the archetype declares a function of this kind."""
        if kind is FunctionKind.PAGE:
            return True
        return (archetype, kind) in DECLARATIONS

    def generate(
        self,
        archetype: Archetype,
        kind: FunctionKind,
        *,
        shared: bool,
        request: bool,
    ) -> List[str]:
        """Return the declaration lines, or an empty list for unsupported kinds."""
        if not self.supports(archetype, kind):
            return []
        toggle_types, toggle_args = _toggle_parameters(shared, request)

        if kind is FunctionKind.PAGE:
            result = self._template(kind).render(
                name=kind.value,
                archetype=archetype.value,
                combinator=archetype.value,
                signature=[SHARED_TYPE, REQUEST_TYPE, _page_type(archetype)],
                fields=[wired.value for wired in PAGE_WIRING[archetype]],
                arguments=toggle_args,
                shared=shared,
                request=request,
            )
        else:
            declaration = DECLARATIONS[(archetype, kind)]
            result = self._template(kind).render(
                name=kind.value,
                archetype=archetype.value,
                signature=toggle_types + list(declaration.signature),
                arguments=toggle_args + list(declaration.arguments),
                body=list(declaration.body),
                shared=shared,
                request=request,
            )
        return [line.rstrip() for line in result.splitlines()]

    def _template(self, kind: FunctionKind) -> Template:
        try:
            return self._env.get_template(f"{kind.value}.j2")
        except TemplateNotFound:
            return self._env.get_template("declaration.j2")

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )


def _toggle_parameters(shared: bool, request: bool) -> tuple[List[str], List[str]]:
    types: List[str] = []
    args: List[str] = []
    if shared:
        types.append(SHARED_TYPE)
        args.append(SHARED_ARG)
    if request:
        types.append(REQUEST_TYPE)
        args.append(REQUEST_ARG)
    return types, args


def _page_type(archetype: Archetype) -> str:
    if archetype is Archetype.STATIC:
        return "Page"
    return "Page.With Model Msg"


__all__ = ["DECLARATIONS", "PAGE_WIRING", "Declaration", "TemplateGenerator"]
