"""
Core Interfaces for the corecatalog Generation Subsystem

This module defines the data structures passed between the release source,
the asset resolver, acquisition and the record builder.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from corecatalog.constants import PRERELEASE_CHANNEL_KEY, STABLE_CHANNEL_KEY


class ReleaseChannel(str, Enum):
    """Release channel; the value is the key used in catalog records."""

    PRERELEASE = PRERELEASE_CHANNEL_KEY
    STABLE = STABLE_CHANNEL_KEY


@dataclass
class Asset:
    """Represents a file uploaded to a release."""

    name: str
    """The filename of the asset"""

    url: str
    """API URL that serves the binary when requested as application/octet-stream"""


@dataclass
class Release:
    """Represents a release as returned by the hosting API."""

    id: int
    """Numeric identifier, increasing in creation order"""

    tag_name: str
    """The release tag/version identifier (e.g., 'v1.2.0')"""

    prerelease: bool = False
    """Whether this is a prerelease version"""

    published_at: Optional[str] = None
    """ISO 8601 timestamp when the release was published"""

    assets: List[Asset] = field(default_factory=list)
    """Uploaded files, in API order"""

    @property
    def channel(self) -> ReleaseChannel:
        return ReleaseChannel.PRERELEASE if self.prerelease else ReleaseChannel.STABLE


@dataclass(frozen=True)
class ReleaseMetadata:
    """The release and asset chosen for one channel."""

    channel: ReleaseChannel
    tag_name: str
    release_date: Optional[str]
    asset_file_name: str
    asset_download_url: str


@dataclass(frozen=True)
class CoreIdentity:
    """
    Identifies one core in the catalog.

    `display_name` is the catalog identity. Two cores built from the same
    repository share `username` and `repository` but never `display_name`.
    """

    username: str
    repository: str
    display_name: str
