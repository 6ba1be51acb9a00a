"""Tests for spapage.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from spapage.config import ConfigError, SpaPageConfig, find_config, load_config
from spapage.transform import Namespaces
from tests._fixtures.page_builder import PageBuilder


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, SpaPageConfig)
    assert config.root == tmp_path.resolve()
    assert config.path is None
    assert config.templates_dir is None
    assert config.namespaces == Namespaces()
    assert config.defaults.shared is False
    assert config.defaults.request is False


def test_load_config_parses_expected_fields(page_builder: PageBuilder) -> None:
    config_file = page_builder.config(
        """
        templates_dir: "elm-templates"
        namespaces:
          pages: "Screens"
          params: "Generated.Params"
        defaults:
          shared: true
          request: "yes"
        """
    )

    config = load_config(config_file)

    assert config.path == config_file.resolve()
    assert config.templates_dir == page_builder.root.resolve() / "elm-templates"
    assert config.namespaces == Namespaces(pages="Screens", params="Generated.Params")
    assert config.defaults.shared is True
    assert config.defaults.request is True


def test_load_config_keeps_default_namespace_when_partially_set(page_builder: PageBuilder) -> None:
    page_builder.config(
        """
        namespaces:
          params: "Gen.Route"
        """
    )

    config = load_config(page_builder.root)

    assert config.namespaces == Namespaces(pages="Pages", params="Gen.Route")


def test_load_config_treats_empty_file_as_defaults(page_builder: PageBuilder) -> None:
    page_builder.config("\n")

    config = load_config(page_builder.root)

    assert config.namespaces == Namespaces()
    assert config.templates_dir is None


def test_load_config_rejects_non_mapping_root(page_builder: PageBuilder) -> None:
    page_builder.config("- one\n- two\n")

    with pytest.raises(ConfigError):
        load_config(page_builder.root)


def test_load_config_reports_yaml_errors(page_builder: PageBuilder) -> None:
    page_builder.config("namespaces: [unclosed\n")

    with pytest.raises(ConfigError, match="Failed to parse"):
        load_config(page_builder.root)


def test_find_config_walks_up_from_page(page_builder: PageBuilder) -> None:
    config_file = page_builder.config("defaults:\n  shared: true\n")
    page = page_builder.write("src/Pages/Home.elm", "module Pages.Home exposing (page)\n")

    assert find_config(page) == config_file.resolve()


def test_find_config_returns_none_without_file(tmp_path: Path) -> None:
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    found = find_config(nested)

    assert found is None
