"""Layout template engine."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import jinja2
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, meta

from ..core.errors import TemplateError

logger = logging.getLogger(__name__)

# Feed layouts may iterate items instead of using the joined document
INSERTION_POINTS = frozenset({"document", "items"})


@runtime_checkable
class TemplateEngine(Protocol):
    """Wraps rendered body content with a named layout."""

    def load(self, layout: Path) -> Any: ...

    def render(self, layout: Path, context: dict[str, Any]) -> str: ...


def load_template(template_path: Path) -> Template:
    """Load a layout and check that it has an insertion point.

    Args:
        template_path: Path to the layout file

    Returns:
        Compiled Jinja2 template
    """
    if not template_path.is_file():
        raise TemplateError("Layout not found", template_path)

    # Use template's parent directory as loader search path
    env = Environment(
        loader=FileSystemLoader(str(template_path.parent)),
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
    )

    try:
        source, _, _ = env.loader.get_source(env, template_path.name)
        variables = meta.find_undeclared_variables(env.parse(source))
        template = env.get_template(template_path.name)
    except jinja2.TemplateSyntaxError as exc:
        raise TemplateError(
            f"Syntax error on line {exc.lineno}: {exc.message}", template_path
        ) from exc
    except jinja2.TemplateNotFound as exc:
        raise TemplateError(f"Layout not found: {exc.name}", template_path) from exc

    if variables.isdisjoint(INSERTION_POINTS):
        raise TemplateError(
            "Layout has no insertion point (expected '{{ document }}' or 'items')",
            template_path,
        )

    return template


class JinjaTemplateEngine:
    """Jinja2-backed layouts, compiled once per path."""

    def __init__(self) -> None:
        self._cache: dict[Path, Template] = {}

    def load(self, layout: Path) -> Template:
        if layout not in self._cache:
            logger.debug(f"Loading layout: {layout}")
            self._cache[layout] = load_template(layout)
        return self._cache[layout]

    def render(self, layout: Path, context: dict[str, Any]) -> str:
        template = self.load(layout)
        try:
            return template.render(**context)
        except jinja2.TemplateError as exc:
            raise TemplateError(f"Layout failed to apply: {exc}", layout) from exc
