"""
Project configuration loaded from ``mdspec.toml``.

Example:

    [grammar]
    language = "antlr"
    start_production = "start"

    [sections]
    max_heading_level = 4
"""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .errors import make_config_error

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "mdspec.toml"


@dataclass
class GrammarConfig:
    """Where grammar fragments live and how they are compared."""

    language: str = "antlr"  # code fence tag of embedded grammar fragments
    start_production: str = "start"  # sentinel skipped by the consistency check


@dataclass
class SectionsConfig:
    """Heading handling."""

    max_heading_level: int = 4


@dataclass
class MdspecConfig:
    """Complete mdspec configuration."""

    grammar: GrammarConfig = field(default_factory=GrammarConfig)
    sections: SectionsConfig = field(default_factory=SectionsConfig)
    path: Path | None = None


def _get(table: dict[str, Any], key: str, expected: type, default: Any, path: Path) -> Any:
    value = table.get(key, default)
    # bool is an int subclass; never accept it where a number is expected
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise make_config_error(
            f"Setting '{key}' must be of type {expected.__name__}, got {type(value).__name__}",
            path,
        )
    return value


def load_config(path: Path | None = None) -> MdspecConfig:
    """
    Load configuration from ``path`` (default: ./mdspec.toml).

    A missing file yields the defaults.

    Raises:
        ConfigError: If the file is not valid TOML or a value has the wrong type
    """
    path = path or Path.cwd() / CONFIG_FILENAME
    if not path.exists():
        logger.debug("No %s found, using defaults", path)
        return MdspecConfig()

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise make_config_error(f"Invalid TOML: {e}", path) from e

    grammar_data = data.get("grammar", {})
    sections_data = data.get("sections", {})

    grammar_config = GrammarConfig(
        language=_get(grammar_data, "language", str, "antlr", path),
        start_production=_get(grammar_data, "start_production", str, "start", path),
    )
    sections_config = SectionsConfig(
        max_heading_level=_get(sections_data, "max_heading_level", int, 4, path),
    )
    if sections_config.max_heading_level < 1:
        raise make_config_error("Setting 'max_heading_level' must be at least 1", path)

    logger.debug("Loaded configuration from %s", path)
    return MdspecConfig(grammar=grammar_config, sections=sections_config, path=path)
