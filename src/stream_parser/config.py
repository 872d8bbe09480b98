"""Process configuration for the stream parser.

Settings live under the ``stream_parser`` key of a YAML file::

    stream_parser:
      agent_id: worker-1
      format: claude        # python | claude; anything else means detect
      max_line_length: 1048576

The file is optional. Command line arguments override file values.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .parser import DEFAULT_AGENT_ID

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MC_STREAM_PARSER_CONFIG"
CONFIG_SECTION = "stream_parser"


class ParserConfigError(RuntimeError):
    """Raised when the config file cannot be parsed or validated."""


@dataclass(frozen=True)
class ParserConfig:
    """Resolved parser settings.

    Attributes:
        agent_id: Identity stamped on every emitted event
        format_hint: Optional format token (``python`` or ``claude``)
        max_line_length: Truncation limit for input lines, None for no limit
    """

    agent_id: str = DEFAULT_AGENT_ID
    format_hint: str | None = None
    max_line_length: int | None = None

    def merged(
        self,
        *,
        agent_id: str | None = None,
        format_hint: str | None = None,
        max_line_length: int | None = None,
    ) -> ParserConfig:
        """Return a copy with the given overrides applied.

        ``None`` leaves a value unchanged; a ``max_line_length`` of 0
        removes the limit.
        """
        updated = self
        if agent_id is not None:
            updated = replace(updated, agent_id=agent_id)
        if format_hint is not None:
            updated = replace(updated, format_hint=format_hint)
        if max_line_length is not None:
            updated = replace(updated, max_line_length=max_line_length or None)
        return updated


def default_config_path() -> Path | None:
    """Locate the config file: env var first, then the per-user default."""
    if env_path := os.environ.get(CONFIG_ENV_VAR):
        return Path(env_path)
    home_default = Path.home() / ".mission-control" / "stream-parser.yaml"
    if home_default.exists():
        return home_default
    return None


def _optional_str(section: dict[str, Any], key: str) -> str | None:
    value = section.get(key)
    if value is None or isinstance(value, str):
        return value
    raise ParserConfigError(f"'{CONFIG_SECTION}.{key}' must be a string, got {type(value).__name__}")


def _optional_limit(section: dict[str, Any]) -> int | None:
    value = section.get("max_line_length")
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ParserConfigError(
            f"'{CONFIG_SECTION}.max_line_length' must be a non-negative integer, got {value!r}"
        )
    return value or None


def load_parser_config(config_file: Path | None) -> ParserConfig:
    """Load parser settings from ``config_file``.

    Args:
        config_file: YAML file path, or None to use defaults

    Returns:
        ParserConfig instance (defaults when the file or section is absent)

    Raises:
        ParserConfigError: If the file is unreadable or holds invalid values
    """
    if config_file is None:
        return ParserConfig()

    if not config_file.exists():
        logger.debug("Config file not found: %s", config_file)
        return ParserConfig()

    yaml = YAML(typ="safe")
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.load(f) or {}
    except (OSError, YAMLError) as e:
        raise ParserConfigError(f"Failed to read {config_file}: {e}") from e

    if not isinstance(data, dict):
        raise ParserConfigError(f"{config_file} must contain a mapping at the top level")

    section = data.get(CONFIG_SECTION) or {}
    if not isinstance(section, dict):
        raise ParserConfigError(f"'{CONFIG_SECTION}' in {config_file} must be a mapping")

    agent_id = _optional_str(section, "agent_id")
    return ParserConfig(
        agent_id=agent_id if agent_id is not None else DEFAULT_AGENT_ID,
        format_hint=_optional_str(section, "format"),
        max_line_length=_optional_limit(section),
    )
