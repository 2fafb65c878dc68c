"""
Cached catalog lookup and freshness checks.

The catalog is a YAML list of authors, each with the cores previously
generated for them. Cores are identified by display name, never by
repository, because one repository can back several catalog entries.
"""

import os
from typing import Any, Dict, List, Optional

import yaml

from corecatalog.exceptions import ConfigFileError
from corecatalog.log_utils import logger

from .interfaces import ReleaseChannel


def load_catalog(path: str) -> List[Dict[str, Any]]:
    """
    Load the persisted catalog.

    Returns:
        List[Dict[str, Any]]: Author entries. A missing or empty file yields an empty list.

    Raises:
        ConfigFileError: If the file cannot be read, is not valid YAML, or is not a list.
    """
    if not os.path.exists(path):
        logger.debug(f"No cached catalog at {path}; every channel will be rebuilt")
        return []

    try:
        with open(path, "r", encoding="utf-8") as f:
            catalog = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigFileError(
            "Could not load cached catalog", path=path, details=str(e)
        ) from e

    if catalog is None:
        return []
    if not isinstance(catalog, list):
        raise ConfigFileError(
            "Cached catalog must be a list of authors",
            path=path,
            details=f"got {type(catalog).__name__}",
        )
    return catalog


def find_cached_record(
    catalog: List[Dict[str, Any]], username: str, display_name: str
) -> Optional[Dict[str, Any]]:
    """Return the cached record for `display_name` under `username`, or None."""
    author = next(
        (
            entry
            for entry in catalog
            if isinstance(entry, dict) and entry.get("username") == username
        ),
        None,
    )
    if author is None:
        return None

    cores = author.get("cores") or []
    return next(
        (
            core
            for core in cores
            if isinstance(core, dict) and core.get("display_name") == display_name
        ),
        None,
    )


def cached_tag_name(
    channel: ReleaseChannel, cached_record: Optional[Dict[str, Any]]
) -> Optional[str]:
    if not cached_record:
        return None
    channel_record = cached_record.get(channel.value)
    if not isinstance(channel_record, dict):
        return None
    return channel_record.get("tag_name")


def update_available(
    channel: ReleaseChannel,
    tag_name: str,
    cached_record: Optional[Dict[str, Any]],
) -> bool:
    """
    Whether `tag_name` differs from the tag cached for `channel`.

    A missing record or a record without that channel always needs an update.
    Tags are compared as plain strings.
    """
    return tag_name != cached_tag_name(channel, cached_record)
