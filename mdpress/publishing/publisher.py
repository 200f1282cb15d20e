"""Static publisher: markdown sources to layout-wrapped pages and a feed."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

from ..core.errors import ConfigError, PublishError, PublishIOError, RenderingError
from ..core.models import (
    FeedTask,
    OutputDocument,
    PageTask,
    PublishConfig,
    SourceDocument,
)
from ..rendering.engine import JinjaTemplateEngine, TemplateEngine
from ..rendering.io import atomic_write_text, read_source_text
from ..rendering.markup import MarkdownRenderer, Renderer

logger = logging.getLogger(__name__)


def discover_sources(root: Path, task: PageTask) -> list[Path]:
    """Find the sources a page task selects.

    Args:
        root: Base directory for relative task paths
        task: Page task whose source_dir and pattern to match

    Returns:
        Sorted source paths, expressed under ``task.source_dir``
    """
    source_dir = root / task.source_dir
    if not source_dir.is_dir():
        raise PublishIOError("Source directory not found", task.source_dir)

    matches = []
    for match in source_dir.glob(task.pattern):
        relative = match.relative_to(source_dir)
        # Dotfiles (editor locks, scratch copies) are never sources
        if any(part.startswith(".") for part in relative.parts):
            continue
        if match.is_file():
            matches.append(relative)
    return [task.source_dir / p for p in sorted(matches)]


def map_outputs(task: PageTask, sources: list[Path]) -> list[tuple[Path, Path]]:
    """Pair each source with its output path.

    Raises:
        ConfigError: Two sources map to the same output
    """
    claimed: dict[Path, Path] = {}
    mapping = []
    for source in sources:
        output = task.output_path_for(source)
        if output in claimed:
            raise ConfigError(
                f"{claimed[output]} and {source} both map to this output; "
                "rename one or set extDot: last",
                output,
            )
        claimed[output] = source
        mapping.append((source, output))
    return mapping


class Publisher:
    """Publishes page and feed tasks relative to a root directory.

    The markdown renderer and layout engine are injected so either can be
    replaced without touching the publishing flow.
    """

    def __init__(
        self,
        root: Path,
        *,
        renderer: Renderer | None = None,
        templates: TemplateEngine | None = None,
        template_data: dict[str, Any] | None = None,
        file_mode: int = 0o644,
    ) -> None:
        self.root = root
        self.renderer = renderer or MarkdownRenderer()
        self.templates = templates or JinjaTemplateEngine()
        self.template_data = dict(template_data or {})
        self.file_mode = file_mode

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.root / path

    def read_source(self, path: Path) -> SourceDocument:
        try:
            text = read_source_text(self._resolve(path))
        except PublishError as exc:
            # Report the path as configured, not as resolved against root
            raise type(exc)(exc.message, path) from exc.__cause__
        extract_title = getattr(self.renderer, "extract_title", None)
        title = extract_title(text) if extract_title else None
        return SourceDocument(path=path, text=text, title=title or path.stem)

    def render_body(self, source: SourceDocument) -> str:
        try:
            return self.renderer.render(source.text)
        except RenderingError:
            raise
        except Exception as exc:
            raise RenderingError(f"Markup could not be rendered: {exc}", source.path) from exc

    def _base_path(self, output_path: Path) -> str:
        """Relative prefix from an output file back to the publish root."""
        rel = os.path.relpath(
            self.root.resolve(), self._resolve(output_path).resolve().parent
        )
        return "./" if rel == "." else f"{Path(rel).as_posix()}/"

    def _context(self, **values: Any) -> dict[str, Any]:
        context = dict(self.template_data)
        context.update(values)
        return context

    def _write(self, output: OutputDocument) -> Path:
        dest = self._resolve(output.path)
        atomic_write_text(dest, output.text, mode=self.file_mode)
        logger.info(f"Rendered {', '.join(map(str, output.sources))} → {output.path}")
        return dest

    def render_page(self, task: PageTask, path: Path) -> OutputDocument:
        source = self.read_source(path)
        output_path = task.output_path_for(path)
        text = self.templates.render(
            self._resolve(task.layout),
            self._context(
                document=self.render_body(source),
                title=source.title,
                slug=source.slug,
                source=path.as_posix(),
                output=output_path.as_posix(),
                base_path=self._base_path(output_path),
            ),
        )
        return OutputDocument(sources=[path], path=output_path, text=text)

    def publish_pages(self, task: PageTask) -> list[Path]:
        """Render every matched source through the page layout.

        Halts on the first failure; sources after it are not written.

        Args:
            task: Page task to execute

        Returns:
            Written output paths, in source order
        """
        # Fail on a bad layout before anything is written
        self.templates.load(self._resolve(task.layout))

        sources = discover_sources(self.root, task)
        if not sources:
            logger.warning(f"No sources match {task.pattern!r} in {task.source_dir}")
            return []

        mapping = map_outputs(task, sources)
        logger.info(f"Publishing {len(sources)} page(s) from {task.source_dir}")
        return [self._write(self.render_page(task, path)) for path, _ in mapping]

    def render_feed(self, task: FeedTask) -> OutputDocument:
        items = []
        for path in task.source_paths:
            source = self.read_source(path)
            items.append(
                {
                    "title": source.title,
                    "slug": source.slug,
                    "source": path.as_posix(),
                    "document": self.render_body(source),
                }
            )

        text = self.templates.render(
            self._resolve(task.layout),
            self._context(
                document="\n".join(item["document"] for item in items),
                title=items[0]["title"],
                slug=items[0]["slug"],
                items=items,
                source=items[0]["source"],
                output=task.dest_path.as_posix(),
                base_path=self._base_path(task.dest_path),
            ),
        )
        return OutputDocument(sources=list(task.source_paths), path=task.dest_path, text=text)

    def publish_feed(self, task: FeedTask) -> Path:
        """Render the listed sources into a single feed document.

        Args:
            task: Feed task to execute

        Returns:
            The feed output path
        """
        logger.info(f"Publishing feed from {len(task.source_paths)} source(s)")
        return self._write(self.render_feed(task))

    def publish_all(self, config: PublishConfig) -> list[Path]:
        """Run the page task, then the feed task.

        Args:
            config: Publish configuration

        Returns:
            Every written output path
        """
        outputs: list[Path] = []
        if config.pages is not None:
            outputs.extend(self.publish_pages(config.pages))
        if config.feed is not None:
            outputs.append(self.publish_feed(config.feed))

        logger.info(f"Successfully published {len(outputs)} file(s)")
        return outputs

    def plan(self, config: PublishConfig) -> list[tuple[list[Path], Path]]:
        """Source to output mapping for a run, without rendering or writing."""
        mapping: list[tuple[list[Path], Path]] = []
        if config.pages is not None:
            sources = discover_sources(self.root, config.pages)
            mapping.extend(
                ([path], output) for path, output in map_outputs(config.pages, sources)
            )
        if config.feed is not None:
            mapping.append((list(config.feed.source_paths), config.feed.dest_path))
        return mapping
