"""
Core Data Generator

This module sequences release resolution, freshness checks, asset acquisition
and record building for one core.
"""

from typing import Any, Dict, List, Optional

from corecatalog.config import DEFAULT_CONFIG, get_github_token
from corecatalog.log_utils import logger

from .catalog import find_cached_record, load_catalog, update_available
from .files import download_asset
from .github_source import GithubReleaseSource, resolve_releases
from .interfaces import CoreIdentity, ReleaseChannel, ReleaseMetadata
from .record import build_record


class CoreDataGenerator:
    """
    Generates the catalog record for one core.

    Channels are processed in the order the resolver returns them (prerelease
    first when both need checking). The run ends at the first channel that is
    either already current, in which case the cached record is returned
    unchanged, or successfully rebuilt, in which case only that channel's fresh
    record is returned.
    """

    def __init__(
        self,
        username: str,
        repository: str,
        display_name: str,
        config: Optional[Dict[str, Any]] = None,
        catalog: Optional[List[Dict[str, Any]]] = None,
        release_source: Optional[GithubReleaseSource] = None,
    ):
        """
        Create a generator for one core.

        Parameters:
            username (str): Repository owner, also the catalog author key.
            repository (str): Repository hosting the core's releases.
            display_name (str): Catalog identity of the core.
            config (Optional[Dict[str, Any]]): Effective configuration; defaults apply when None.
            catalog (Optional[List[Dict[str, Any]]]): Previously persisted catalog. Loaded
                from CATALOG_FILE on first use when None.
            release_source (Optional[GithubReleaseSource]): Release listing source; one is
                built for the repository when None.
        """
        self.identity = CoreIdentity(username, repository, display_name)
        self.config = dict(DEFAULT_CONFIG, **(config or {}))
        self._catalog = catalog
        self.release_source = release_source or GithubReleaseSource(
            username, repository, self.config
        )

    @property
    def catalog(self) -> List[Dict[str, Any]]:
        if self._catalog is None:
            self._catalog = load_catalog(self.config["CATALOG_FILE"])
        return self._catalog

    @property
    def cached_record(self) -> Optional[Dict[str, Any]]:
        """The cached record for this core, looked up by display name."""
        return find_cached_record(
            self.catalog, self.identity.username, self.identity.display_name
        )

    def fetch_releases(self) -> Dict[ReleaseChannel, ReleaseMetadata]:
        return resolve_releases(
            self.release_source.get_releases(), self.identity.display_name
        )

    def run(self) -> Optional[Dict[str, Any]]:
        """
        Generate the record for this core.

        Returns:
            Optional[Dict[str, Any]]: A freshly built single-channel record, the cached
                record when it is already current, or None when no channel holds a core.

        Raises:
            CoreCatalogError: On API, download, extraction or descriptor failures.
        """
        repository = self.identity.repository
        cached_record = self.cached_record

        for channel, metadata in self.fetch_releases().items():
            if not update_available(channel, metadata.tag_name, cached_record):
                logger.info(f"{repository} ({metadata.tag_name}) is already up-to-date.")
                return cached_record

            logger.info(
                f"Updating {channel.value} data for {repository} ({metadata.tag_name})."
            )
            directory = download_asset(
                metadata.asset_file_name,
                metadata.asset_download_url,
                github_token=get_github_token(self.config),
                work_dir=self.config["WORK_DIR"] or "",
            )
            record = build_record(directory, self.identity, metadata)
            if record is not None:
                return record

            logger.info(
                f"{metadata.asset_file_name} in {repository} ({metadata.tag_name}) is not a core; skipping."
            )

        return None
