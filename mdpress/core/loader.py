"""Publish configuration loading."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import ConfigError
from .models import PublishConfig

logger = logging.getLogger(__name__)


def load_config(path: Path) -> PublishConfig:
    """Load the publish configuration from a YAML file.

    A missing file yields the stock configuration.

    Args:
        path: Path to the YAML configuration file

    Returns:
        Validated, immutable publish configuration
    """
    if not path.exists():
        logger.debug(f"No config at {path}, using default tasks")
        return PublishConfig.default()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML: {exc}", path) from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config: {exc.strerror or exc}", path) from exc

    if not isinstance(data, dict):
        raise ConfigError("Top-level config must be a mapping", path)

    return parse_config(data, path)


def parse_config(data: dict[str, Any], path: Path | None = None) -> PublishConfig:
    try:
        config = PublishConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(_summarize(exc), path) from exc

    logger.debug(
        f"Config: pages={'yes' if config.pages else 'no'}, "
        f"feed={'yes' if config.feed else 'no'}"
    )
    return config


def _summarize(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        where = ".".join(str(loc) for loc in err["loc"]) or "<root>"
        parts.append(f"{where}: {err['msg']}")
    return "; ".join(parts)
