from __future__ import annotations

from pathlib import Path

import pytest

from mdpress.core.errors import ConfigError
from mdpress.core.loader import load_config
from mdpress.core.models import PublishConfig


def test_missing_file_uses_default(tmp_path):
    assert load_config(tmp_path / "mdpress.yaml") == PublishConfig.default()


def test_loads_yaml(tmp_path):
    path = tmp_path / "mdpress.yaml"
    path.write_text(
        "pages:\n"
        "  sourceDir: posts\n"
        "  pattern: '**/*.md'\n"
        "  destDir: site\n"
        "templateData:\n"
        "  site_url: https://example.org/\n"
    )
    config = load_config(path)
    assert config.pages.source_dir == Path("posts")
    assert config.pages.pattern == "**/*.md"
    assert config.pages.dest_dir == Path("site")
    assert config.feed is None
    assert config.template_data["site_url"] == "https://example.org/"


def test_invalid_yaml(tmp_path):
    path = tmp_path / "mdpress.yaml"
    path.write_text("pages: [unclosed\n")
    with pytest.raises(ConfigError) as info:
        load_config(path)
    assert info.value.path == path


def test_validation_error_names_field(tmp_path):
    path = tmp_path / "mdpress.yaml"
    path.write_text("feed:\n  layout: layout/rss.xml\n")
    with pytest.raises(ConfigError) as info:
        load_config(path)
    assert "sourcePaths" in str(info.value) or "source_paths" in str(info.value)
    assert info.value.kind == "config"


def test_empty_file_has_no_tasks(tmp_path):
    path = tmp_path / "mdpress.yaml"
    path.write_text("")
    with pytest.raises(ConfigError, match="at least one"):
        load_config(path)


def test_non_mapping_rejected(tmp_path):
    path = tmp_path / "mdpress.yaml"
    path.write_text("- pages\n")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(path)


@pytest.mark.parametrize("pattern", ["''", "/etc/*.md"])
def test_bad_pattern_is_config_error(tmp_path, pattern):
    path = tmp_path / "mdpress.yaml"
    path.write_text(f"pages:\n  pattern: {pattern}\n")
    with pytest.raises(ConfigError, match="pattern"):
        load_config(path)
