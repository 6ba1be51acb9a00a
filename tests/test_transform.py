"""Tests for spapage.transform."""

from __future__ import annotations

import copy
import textwrap

import pytest

from spapage.models import (
    Archetype,
    FunctionBlock,
    FunctionKind,
    ImportDecl,
    InitFn,
    ModuleDecl,
    Other,
    Page,
    PageFn,
    SubscriptionsFn,
    UpdateFn,
    ViewFn,
)
from spapage.renderer import render
from spapage.scanner import parse
from spapage.transform import Namespaces, expose, transform

HOME = "module Pages.Home exposing (page)\n\npage =\n    Page.static { view = view }\n"


def _source(text: str) -> str:
    return textwrap.dedent(text).lstrip("\n")


def _imports(page: Page) -> dict[str, str | None]:
    return {block.module.name: block.module.exposing for block in page.imports()}


def _kinds(page: Page) -> set[FunctionKind]:
    return {block.kind for block in page.blocks if isinstance(block, FunctionBlock)}


def test_static_page_without_toggles() -> None:
    result = transform(parse(HOME), Archetype.STATIC, False, False)

    assert render(result) == _source(
        '''
        module Pages.Home exposing (page)
        import Page exposing (Page)
        import Gen.Params.Home exposing (Params)

        page : Shared.Model -> Request.With Params -> Page
        page shared req =
            Page.static
                { view = view
                }

        -- page =
        --     Page.static { view = view }

        view : View msg
        view =
            View.placeholder "Hello World"

        '''
    )


def test_advanced_page_with_both_toggles_backfills_everything() -> None:
    result = transform(parse(HOME), Archetype.ADVANCED, True, True)

    assert result.blocks[0] == result.module_decl()
    assert result.module_decl().module.exposing == "page, Model, Msg"
    assert [block.module.name for block in result.imports()] == [
        "Shared",
        "Request",
        "Page",
        "Effect",
        "Gen.Params.Home",
    ]
    imports = _imports(result)
    assert imports["Shared"] is None
    assert imports["Request"] == "Request"
    assert imports["Effect"] == "Effect"
    assert _kinds(result) == set(FunctionKind)

    text = render(result)
    assert "\ntype alias Model = {}\n" in text
    assert "\ntype Msg = ReplaceMe\n" in text
    assert "-- page =\n--     Page.static { view = view }\n" in text
    assert "init shared req =\n    ({}, Effect.none)" in text
    assert "    Page.advanced\n" in text


def test_backfill_order_follows_page_then_types_then_functions() -> None:
    result = transform(parse("module Pages.A exposing (page)\n"), Archetype.ELEMENT, False, False)
    tail = result.blocks[-7:]

    assert isinstance(tail[0], PageFn)
    assert tail[1] == Other("\ntype alias Model = {}\n")
    assert tail[2] == Other("\ntype Msg = ReplaceMe\n")
    assert [type(block) for block in tail[3:]] == [SubscriptionsFn, InitFn, UpdateFn, ViewFn]


def test_existing_page_import_is_not_duplicated() -> None:
    source = "module Pages.Home exposing (page)\nimport Page exposing (Page)\n"
    result = transform(parse(source), Archetype.STATIC, False, False)

    assert _imports(result)["Page"] == "Page"
    assert len([b for b in result.imports() if b.module.name == "Page"]) == 1


@pytest.mark.parametrize(
    ("existing", "expected"),
    [
        (None, "Page"),
        ("", "Page"),
        ("Page", "Page"),
        ("Page(..)", "Page(..)"),
        ("..", ".."),
        ("Msg", "Page, Msg"),
        ("Protected, Page", "Protected, Page"),
    ],
)
def test_expose_adds_name_once(existing: str | None, expected: str) -> None:
    assert expose(existing, "Page") == expected


def test_existing_page_import_keeps_its_position() -> None:
    source = "module Pages.Home exposing (page)\nimport Html\nimport Page\n"
    result = transform(parse(source), Archetype.STATIC, False, False)

    names = [block.module.name for block in result.imports()]
    assert names == ["Gen.Params.Home", "Html", "Page"]
    assert _imports(result)["Page"] == "Page"


def test_existing_params_import_gains_params() -> None:
    source = "module Pages.Users.Id_ exposing (page)\nimport Gen.Params.Users.Id_ exposing (Other)\n"
    result = transform(parse(source), Archetype.STATIC, False, False)

    params = [b for b in result.imports() if b.module.name == "Gen.Params.Users.Id_"]
    assert len(params) == 1
    assert params[0].module.exposing == "Params, Other"


def test_custom_namespaces_derive_params_module() -> None:
    source = "module Screens.Home exposing (page)\n"
    result = transform(
        parse(source),
        Archetype.STATIC,
        False,
        False,
        namespaces=Namespaces(pages="Screens", params="Generated.Params"),
    )

    assert "Generated.Params.Home" in _imports(result)


def test_module_outside_pages_namespace_keeps_full_name() -> None:
    result = transform(parse("module Home exposing (main)\n"), Archetype.STATIC, False, False)

    assert "Gen.Params.Home" in _imports(result)


@pytest.mark.parametrize("archetype", list(Archetype))
def test_module_exposing_matches_archetype(archetype: Archetype) -> None:
    source = "import Html\nmodule Pages.Home exposing (page, view, helper)\n"
    result = transform(parse(source), archetype, True, False)

    assert isinstance(result.blocks[0], ModuleDecl)
    assert result.blocks[0].module.exposing == archetype.exposing


def test_replaced_functions_are_preserved_as_comments() -> None:
    source = _source(
        """
        module Pages.Counter exposing (page)

        init =
            0

        update Increment model = model + 1
        update Decrement model = model - 1

        view model =
            text (String.fromInt model)
        """
    )
    result = transform(parse(source), Archetype.SANDBOX, False, False)
    text = render(result)

    assert "-- init =\n--     0\n" in text
    assert "-- update Increment model = model + 1\n-- update Decrement model = model - 1\n" in text
    assert "-- view model =\n--     text (String.fromInt model)\n" in text

    index = result.blocks.index(Other("-- init =\n--     0"))
    assert isinstance(result.blocks[index - 1], InitFn)


def test_blank_lines_inside_functions_are_commented_without_trailing_space() -> None:
    source = "view =\n    let\n\n        x = 1\n    in\n    x\n"
    result = transform(parse(source), Archetype.STATIC, False, False)

    assert Other("-- view =\n--     let\n--\n--         x = 1\n--     in\n--     x") in result.blocks


def test_static_comments_out_init_update_and_subscriptions_without_replacement() -> None:
    source = _source(
        """
        module Pages.Home exposing (page)

        init =
            {}

        subscriptions model =
            Sub.none
        """
    )
    result = transform(parse(source), Archetype.STATIC, True, True)

    assert _kinds(result) == {FunctionKind.PAGE, FunctionKind.VIEW}
    assert Other("-- init =\n--     {}") in result.blocks
    assert Other("-- subscriptions model =\n--     Sub.none") in result.blocks
    assert (
        "import Gen.Params.Home exposing (Params)\n"
        "\n"
        "-- init =\n"
        "--     {}\n"
        "\n"
        "-- subscriptions model =\n"
        "--     Sub.none\n"
        "\n"
        "page : "
    ) in render(result)


def test_commented_function_without_replacement_keeps_blank_lines_around_it() -> None:
    source = "type Msg = A\n\ninit =\n    {}\n\nfoo = 1\n"
    result = transform(parse(source), Archetype.STATIC, False, False)

    assert "type Msg = A\n\n-- init =\n--     {}\n\nfoo = 1\n" in render(result)


def test_sandbox_never_has_subscriptions() -> None:
    source = "module Pages.Home exposing (page)\nsubscriptions model =\n    Sub.none\n"
    result = transform(parse(source), Archetype.SANDBOX, False, False)

    assert FunctionKind.SUBSCRIPTIONS not in _kinds(result)
    assert _kinds(result) == {FunctionKind.PAGE, FunctionKind.INIT, FunctionKind.UPDATE, FunctionKind.VIEW}


def test_existing_model_and_msg_types_are_not_backfilled() -> None:
    source = _source(
        """
        module Pages.Home exposing (page)

        type alias Model =
            { count : Int }

        type Msg
            = Increment
        """
    )
    result = transform(parse(source), Archetype.ELEMENT, False, False)

    assert Other("\ntype alias Model = {}\n") not in result.blocks
    assert Other("\ntype Msg = ReplaceMe\n") not in result.blocks


def test_transform_does_not_mutate_input() -> None:
    page = parse("module Pages.Home exposing (page)\nimport Page exposing (Msg)\n" + HOME[34:])
    snapshot = copy.deepcopy(page)

    transform(page, Archetype.ADVANCED, True, True)

    assert page == snapshot


def test_page_without_module_still_transforms() -> None:
    result = transform(parse("view =\n    x\n"), Archetype.STATIC, False, False)

    assert result.module_decl() is None
    assert isinstance(result.blocks[0], ImportDecl)
    assert _kinds(result) == {FunctionKind.PAGE, FunctionKind.VIEW}


@pytest.mark.parametrize("archetype", list(Archetype))
@pytest.mark.parametrize(("shared", "request_"), [(True, True), (True, False), (False, True), (False, False)])
def test_rerunning_does_not_duplicate_imports(archetype: Archetype, shared: bool, request_: bool) -> None:
    once = render(transform(parse(HOME), archetype, shared, request_))
    twice = transform(parse(once), archetype, shared, request_)

    names = [block.module.name for block in twice.imports()]
    for name in ("Shared", "Request", "Page", "Effect", "Gen.Params.Home"):
        assert names.count(name) <= 1
    assert _imports(twice)["Page"] == "Page"
    assert _imports(twice)["Gen.Params.Home"] == "Params"


@pytest.mark.parametrize("archetype", [Archetype.ELEMENT, Archetype.ADVANCED])
def test_element_and_advanced_have_all_kinds(archetype: Archetype) -> None:
    result = transform(parse("module Pages.Home exposing (page)\n"), archetype, False, False)

    assert _kinds(result) == set(FunctionKind)
