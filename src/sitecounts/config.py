"""Block configuration loaded from .sitecounts.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from sitecounts.models import ListQuerySpec, TimeWindow

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".sitecounts.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG = Path.home() / ".config" / "sitecounts" / "config.toml"


class QuerySectionConfig(BaseModel):
    """[query] section — the filtered list query."""

    max_results: int = Field(default=6, ge=1)
    item_type: str = "post"
    category: str = "baz"
    tag: str = "foo"
    start_hour: int = Field(default=9, ge=0, le=23)
    end_hour: int = Field(default=17, ge=0, le=23)


class I18nSectionConfig(BaseModel):
    """[i18n] section — message catalogue lookup."""

    domain: str = "site-counts"
    locale_dir: str = ""
    language: str = ""


class BlockSectionConfig(BaseModel):
    """[block] section."""

    name: str = "xwp/site-counts"


class SiteCountsConfig(BaseModel):
    """Top-level configuration for the Site Counts block."""

    query: QuerySectionConfig = Field(default_factory=QuerySectionConfig)
    i18n: I18nSectionConfig = Field(default_factory=I18nSectionConfig)
    block: BlockSectionConfig = Field(default_factory=BlockSectionConfig)

    def to_query_spec(self) -> ListQuerySpec:
        """Build the immutable list query from the [query] section."""
        q = self.query
        return ListQuerySpec(
            max_results=q.max_results,
            item_type=q.item_type,
            category=q.category,
            tag=q.tag,
            time_window=TimeWindow(start_hour=q.start_hour, end_hour=q.end_hour),
        )


def load_config(path: str | Path | None = None) -> SiteCountsConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .sitecounts.toml in CWD
    3. ~/.config/sitecounts/config.toml

    Then overlay environment variables.

    Args:
        path: Explicit path to a TOML file.

    Returns:
        Merged SiteCountsConfig.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG.exists():
            data = _load_toml(GLOBAL_CONFIG)
            logger.info("Loaded config from %s", GLOBAL_CONFIG)

    config = SiteCountsConfig.model_validate(data) if data else SiteCountsConfig()

    return _apply_env_vars(config)


def merge_cli_overrides(config: SiteCountsConfig, **cli_kwargs: object) -> SiteCountsConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only overrides values where the CLI flag was explicitly provided
    (i.e., not None).  Keys are ``<section>_<field>`` (e.g.
    ``query_tag``, ``i18n_language``).
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "query_max_results": ("query", "max_results"),
        "query_item_type": ("query", "item_type"),
        "query_category": ("query", "category"),
        "query_tag": ("query", "tag"),
        "query_start_hour": ("query", "start_hour"),
        "query_end_hour": ("query", "end_hour"),
        "i18n_locale_dir": ("i18n", "locale_dir"),
        "i18n_language": ("i18n", "language"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = value

    return SiteCountsConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: SiteCountsConfig) -> SiteCountsConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "SITECOUNTS_CATEGORY": ("query", "category"),
        "SITECOUNTS_TAG": ("query", "tag"),
        "SITECOUNTS_ITEM_TYPE": ("query", "item_type"),
        "SITECOUNTS_LOCALE_DIR": ("i18n", "locale_dir"),
        "SITECOUNTS_LANGUAGE": ("i18n", "language"),
        "SITECOUNTS_BLOCK_NAME": ("block", "name"),
        "SITECOUNTS_MAX_RESULTS": ("query", "max_results"),
        "SITECOUNTS_START_HOUR": ("query", "start_hour"),
        "SITECOUNTS_END_HOUR": ("query", "end_hour"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    return SiteCountsConfig.model_validate(data)
