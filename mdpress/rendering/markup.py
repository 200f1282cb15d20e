"""Markdown rendering."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from markdown_it import MarkdownIt


@runtime_checkable
class Renderer(Protocol):
    """Turns markup text into an HTML fragment."""

    def render(self, text: str) -> str: ...


class MarkdownRenderer:
    """CommonMark renderer with raw HTML and tables enabled."""

    def __init__(self, md: MarkdownIt | None = None) -> None:
        self.md = md or MarkdownIt("commonmark", {"html": True}).enable(
            ["table", "strikethrough"]
        )

    def render(self, text: str) -> str:
        return self.md.render(text)

    def extract_title(self, text: str) -> str | None:
        """Return the plain text of the first heading, if any."""
        tokens = self.md.parse(text)
        for i, token in enumerate(tokens):
            if token.type == "heading_open" and i + 1 < len(tokens):
                inline = tokens[i + 1]
                return "".join(
                    child.content
                    for child in inline.children or []
                    if child.type in ("text", "code_inline")
                ).strip() or None
        return None
