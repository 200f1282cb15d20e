"""Shared fixtures: a small blog checkout on disk."""

from __future__ import annotations

from pathlib import Path

import pytest

PAGE_LAYOUT = """<!doctype html>
<html>
<head><title>{{ title }}</title><link rel="stylesheet" href="{{ base_path }}style.css"></head>
<body>
{{ document }}
</body>
</html>
"""

RSS_LAYOUT = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
<channel>
<title>{{ title }}</title>
{% for item in items %}
<item><title>{{ item.title }}</title><link>{{ site_url }}{{ item.slug }}.html</link>
<description><![CDATA[{{ item.document }}]]></description></item>
{% endfor %}
</channel>
</rss>
"""

ARTICLES = {
    "json-all-the-things.md": "# JSON all the things\n\nSerialize *everything*.\n",
    "a-spreadsheet-in-60-lines-of-javascript.md": (
        "# A spreadsheet in 60 lines of JavaScript\n\n"
        "```js\nvar cells = {};\n```\n\n"
        "See [the demo](http://example.org/demo).\n"
    ),
    "routing.md": "# Routing\n\nRoutes map _URLs_ to views.\n",
}


def write_site(root: Path) -> Path:
    (root / "articles").mkdir(parents=True, exist_ok=True)
    (root / "layout").mkdir(parents=True, exist_ok=True)
    for name, text in ARTICLES.items():
        (root / "articles" / name).write_text(text, encoding="utf-8")
    (root / "layout" / "layout.html").write_text(PAGE_LAYOUT, encoding="utf-8")
    (root / "layout" / "rss.xml").write_text(RSS_LAYOUT, encoding="utf-8")
    return root


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """A blog checkout with three articles, a page layout and a feed layout."""
    return write_site(tmp_path / "blog")
