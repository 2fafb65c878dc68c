"""
GitHub Release Source

This module lists a repository's releases through the GitHub API and resolves
which release, and which asset within it, each catalog channel should use.
"""

from typing import Any, Dict, List, Mapping, Optional

from corecatalog.config import get_github_token
from corecatalog.constants import (
    ASSET_INDEX_OVERRIDES,
    DEFAULT_ASSET_INDEX,
    GITHUB_RELEASES_URL_TEMPLATE,
)
from corecatalog.exceptions import APIError
from corecatalog.log_utils import logger
from corecatalog.utils import make_github_api_request

from .interfaces import Asset, Release, ReleaseChannel, ReleaseMetadata


class GithubReleaseSource:
    """
    Lists releases for one GitHub repository.

    Usage:
        source = GithubReleaseSource("owner", "repo", config)
        releases = source.get_releases()
    """

    def __init__(self, username: str, repository: str, config: Dict[str, Any]):
        """
        Initialize the GitHub release source.

        Parameters:
            username (str): Repository owner.
            repository (str): Repository name.
            config (Dict[str, Any]): Configuration dictionary the API token is resolved from.
        """
        self.username = username
        self.repository = repository
        self.config = config
        self.releases_url = GITHUB_RELEASES_URL_TEMPLATE.format(
            username=username, repository=repository
        )

    def get_releases(self) -> List[Release]:
        """
        Fetch the repository's releases, most recent first.

        Entries that cannot be parsed are skipped with a warning. Releases without
        assets are kept so channel selection still sees them.

        Returns:
            List[Release]: Parsed releases in API order.

        Raises:
            APIError: If the listing request fails or the payload is not a list.
        """
        try:
            releases_data = make_github_api_request(
                self.releases_url, get_github_token(self.config)
            )
        except APIError:
            logger.error(
                f"Something went wrong while fetching the releases for {self.repository}."
            )
            raise

        if not isinstance(releases_data, list):
            raise APIError(
                "Invalid releases data received from GitHub API",
                endpoint=self.releases_url,
                details=f"expected list, got {type(releases_data).__name__}",
            )

        releases: List[Release] = []
        for release_data in releases_data:
            if not isinstance(release_data, dict):
                logger.warning(
                    "Skipping malformed release entry from %s: expected dict, got %s",
                    self.releases_url,
                    type(release_data).__name__,
                )
                continue
            release = create_release_from_github_data(release_data)
            if release is not None:
                releases.append(release)

        logger.debug(
            "Fetched %d releases for %s/%s",
            len(releases),
            self.username,
            self.repository,
        )
        return releases


def create_release_from_github_data(
    release_data: Dict[str, Any],
) -> Optional[Release]:
    """
    Create a Release object from GitHub API release data.

    Parameters:
        release_data (Dict[str, Any]): Raw release data from GitHub API.

    Returns:
        Optional[Release]: The parsed release, or None when the id or tag_name is
            missing or invalid.
    """
    release_id = release_data.get("id")
    if not isinstance(release_id, int) or isinstance(release_id, bool):
        logger.warning("Skipping release with missing or invalid id")
        return None

    tag_name = release_data.get("tag_name")
    if not isinstance(tag_name, str) or not tag_name.strip():
        logger.warning("Skipping release %s with missing or invalid tag_name", release_id)
        return None

    release = Release(
        id=release_id,
        tag_name=tag_name,
        prerelease=bool(release_data.get("prerelease", False)),
        published_at=release_data.get("published_at"),
    )

    assets_data = release_data.get("assets")
    if not isinstance(assets_data, list):
        assets_data = []

    for asset_data in assets_data:
        if not isinstance(asset_data, dict):
            logger.warning("Skipping malformed asset for release %s", tag_name)
            continue
        asset_name = asset_data.get("name")
        asset_url = asset_data.get("url")
        if not isinstance(asset_name, str) or not asset_name.strip():
            logger.warning("Skipping asset with invalid name for release %s", tag_name)
            continue
        if not isinstance(asset_url, str) or not asset_url:
            logger.warning(
                "Skipping asset %s without a download URL for release %s",
                asset_name,
                tag_name,
            )
            continue
        release.assets.append(Asset(name=asset_name, url=asset_url))

    return release


def select_releases(releases: List[Release]) -> List[Release]:
    """
    Pick the releases whose channels need to be considered.

    Only the first prerelease and the first stable release are looked at. When
    both exist, the prerelease is only kept if it was created after the stable
    release (higher id); it is then returned first.
    """
    prerelease = next((r for r in releases if r.prerelease), None)
    stable = next((r for r in releases if not r.prerelease), None)

    if stable is None:
        return [prerelease] if prerelease is not None else []
    if prerelease is None:
        return [stable]
    if prerelease.id > stable.id:
        return [prerelease, stable]
    return [stable]


def choose_asset(
    assets: List[Asset],
    display_name: str,
    overrides: Optional[Mapping[str, int]] = None,
) -> Optional[Asset]:
    """
    Return the asset holding the core for `display_name`.

    The first asset is used unless `overrides` maps the display name to another
    index. Returns None when the release has no asset at that index.
    """
    if overrides is None:
        overrides = ASSET_INDEX_OVERRIDES
    index = overrides.get(display_name, DEFAULT_ASSET_INDEX)
    if index >= len(assets):
        return None
    return assets[index]


def resolve_releases(
    releases: List[Release],
    display_name: str,
    overrides: Optional[Mapping[str, int]] = None,
) -> Dict[ReleaseChannel, ReleaseMetadata]:
    """
    Map each channel to check onto the release and asset it should be built from.

    Parameters:
        releases (List[Release]): Releases in API order, most recent first.
        display_name (str): Catalog display name, used for asset index overrides.
        overrides (Optional[Mapping[str, int]]): Display name to asset index table;
            defaults to ASSET_INDEX_OVERRIDES.

    Returns:
        Dict[ReleaseChannel, ReleaseMetadata]: Channels in processing order. A channel
            whose release has no usable asset is left out.
    """
    resolved: Dict[ReleaseChannel, ReleaseMetadata] = {}
    for release in select_releases(releases):
        asset = choose_asset(release.assets, display_name, overrides)
        if asset is None:
            logger.warning(
                f"Release {release.tag_name} has no usable asset for {display_name}; skipping."
            )
            continue
        resolved[release.channel] = ReleaseMetadata(
            channel=release.channel,
            tag_name=release.tag_name,
            release_date=release.published_at,
            asset_file_name=asset.name,
            asset_download_url=asset.url,
        )
    return resolved
