"""Rewrite elm-spa page modules into canonical page templates."""

__version__ = "0.1.0"

from .models import Archetype, FunctionKind, Page  # noqa: E402
from .renderer import render  # noqa: E402
from .scanner import ParseError, parse  # noqa: E402
from .transform import transform  # noqa: E402

__all__ = ["Archetype", "FunctionKind", "Page", "ParseError", "__version__", "parse", "render", "transform"]
