"""Domain models for publish tasks, sources and outputs."""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class _Frozen(BaseModel):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )


class PageTask(_Frozen):
    """Publish every matched source in a directory as its own page."""

    source_dir: Path = Field(default=Path("articles"), description="Source directory")
    pattern: str = Field(default="*.md", description="Glob pattern under source_dir")
    layout: Path = Field(default=Path("layout/layout.html"), description="Page layout")
    dest_dir: Path = Field(default=Path("."), description="Output directory")
    dest_ext: str = Field(default=".html", description="Output extension")
    ext_dot: Literal["first", "last"] = Field(
        default="first", description="Where the replaced extension starts"
    )

    @field_validator("dest_ext")
    @classmethod
    def _dotted(cls, value: str) -> str:
        if value and not value.startswith("."):
            return f".{value}"
        return value

    @field_validator("pattern")
    @classmethod
    def _relative_pattern(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("pattern must not be empty")
        pattern = PurePath(value)
        if pattern.is_absolute() or value.startswith(("/", "\\")):
            raise ValueError(f"pattern must be relative to sourceDir, got {value!r}")
        if ".." in pattern.parts:
            raise ValueError(f"pattern must not leave sourceDir, got {value!r}")
        return value

    def output_path_for(self, source: Path) -> Path:
        """Map a source path under source_dir to its output path."""
        return self.dest_dir / replace_ext(
            source.relative_to(self.source_dir), self.dest_ext, self.ext_dot
        )


class FeedTask(_Frozen):
    """Aggregate an explicit list of sources into a single feed document."""

    source_paths: list[Path] = Field(..., min_length=1, description="Feed sources")
    layout: Path = Field(default=Path("layout/rss.xml"), description="Feed layout")
    dest_path: Path = Field(default=Path("feed.xml"), description="Feed output file")


class PublishConfig(_Frozen):
    """Configuration for a publish run."""

    pages: PageTask | None = Field(default=None, description="Page task")
    feed: FeedTask | None = Field(default=None, description="Feed task")
    template_data: dict[str, Any] = Field(
        default_factory=dict, description="Extra variables for every layout"
    )

    @model_validator(mode="after")
    def _has_task(self) -> PublishConfig:
        if self.pages is None and self.feed is None:
            raise ValueError("at least one of 'pages' or 'feed' must be configured")
        return self

    @classmethod
    def default(cls) -> PublishConfig:
        """The blog's stock tasks: all articles as pages, one article as the feed."""
        return cls(
            pages=PageTask(),
            feed=FeedTask(source_paths=[Path("articles/json-all-the-things.md")]),
        )


class SourceDocument(BaseModel):
    """An authored markdown file read from disk."""

    model_config = ConfigDict(frozen=True)

    path: Path
    text: str
    title: str

    @property
    def slug(self) -> str:
        return replace_ext(PurePath(self.path.name), "", "first").name


class OutputDocument(BaseModel):
    """A rendered layout ready to be written."""

    model_config = ConfigDict(frozen=True)

    sources: list[Path]
    path: Path
    text: str


def replace_ext(path: PurePath, ext: str, ext_dot: str = "first") -> PurePath:
    """Replace the extension of ``path``'s final component.

    With ``ext_dot="first"`` everything after the first dot of the name is
    the extension (``a.min.md`` -> ``a``); with ``"last"`` only the final
    suffix is (``a.min.md`` -> ``a.min``). Leading dots of hidden files are
    not extension separators.
    """
    name = path.name
    stripped = name.lstrip(".")
    prefix = name[: len(name) - len(stripped)]
    if ext_dot == "first":
        base = stripped.split(".", 1)[0]
    else:
        base = stripped.rsplit(".", 1)[0]
    return path.with_name(f"{prefix}{base}{ext}")
