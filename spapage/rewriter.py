"""Reads a page file, rewrites it to an archetype, and writes it back."""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from pathlib import Path

from .config import SpaPageConfig, find_config, load_config
from .logging import get_logger
from .models import Archetype
from .renderer import render
from .scanner import parse
from .templates import TemplateGenerator
from .transform import transform


@dataclass
class RewriteOutcome:
    """Result of rewriting one page file."""

    path: Path
    text: str
    diff: str
    dry_run: bool


class PageRewriter:
    """Runs scan, transform, and render for a page file."""

    def __init__(
        self,
        config: SpaPageConfig | None = None,
        *,
        generator: TemplateGenerator | None = None,
    ) -> None:
        self.config = config
        self._generator = generator
        self.logger = get_logger("rewriter")

    def rewrite_text(
        self,
        text: str,
        archetype: Archetype,
        *,
        shared: bool = False,
        request: bool = False,
        config: SpaPageConfig | None = None,
    ) -> str:
        """Return the source text rewritten as the archetype."""
        config = config or self.config
        page = parse(text)
        self.logger.debug("Parsed %d blocks", len(page))
        rewritten = transform(
            page,
            archetype,
            shared,
            request,
            generator=self._generator_for(config),
            namespaces=config.namespaces if config else None,
        )
        return render(rewritten)

    def rewrite_file(
        self,
        path: Path | str,
        archetype: Archetype,
        *,
        shared: bool | None = None,
        request: bool | None = None,
        dry_run: bool = False,
    ) -> RewriteOutcome:
        """Rewrite a page file in place unless dry_run is set.

        Toggles left as None fall back to the configuration defaults.
        """
        page_path = Path(path).expanduser()
        config = self.config or self._discover_config(page_path)
        if shared is None:
            shared = config.defaults.shared
        if request is None:
            request = config.defaults.request

        self.logger.info(
            "Rewriting %s as %s page (shared=%s, request=%s)",
            page_path,
            archetype.value,
            shared,
            request,
        )
        original = page_path.read_text(encoding="utf-8")
        updated = self.rewrite_text(
            original, archetype, shared=shared, request=request, config=config
        )
        diff = self._render_diff(page_path.name, original, updated)

        if dry_run:
            self.logger.info("Dry-run completed; %s not written", page_path)
        else:
            page_path.write_text(updated, encoding="utf-8")
            self.logger.info("Page updated at %s", page_path)

        return RewriteOutcome(
            path=page_path,
            text=updated,
            diff=diff,
            dry_run=dry_run,
        )

    def _discover_config(self, page_path: Path) -> SpaPageConfig:
        config_file = find_config(page_path)
        if config_file is None:
            return SpaPageConfig(root=page_path.expanduser().resolve().parent)
        self.logger.debug("Using configuration %s", config_file)
        return load_config(config_file)

    def _generator_for(self, config: SpaPageConfig | None) -> TemplateGenerator | None:
        if self._generator is not None:
            return self._generator
        if config is not None and config.templates_dir is not None:
            return TemplateGenerator(config.templates_dir)
        return None

    @staticmethod
    def _render_diff(name: str, original: str, updated: str) -> str:
        diff = difflib.unified_diff(
            original.splitlines(keepends=True),
            updated.splitlines(keepends=True),
            fromfile=f"{name} (original)",
            tofile=f"{name} (updated)",
        )
        return "".join(diff)


__all__ = ["PageRewriter", "RewriteOutcome"]
