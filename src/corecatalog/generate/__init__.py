"""
corecatalog Generation Subsystem

This package builds the catalog record for one core from its GitHub releases.

Core Components:
- interfaces: Release, asset and identity data structures
- github_source: Release listing and the stable/prerelease asset resolver
- catalog: Cached catalog lookup and freshness checks
- files: Asset acquisition and descriptor lookup
- bitmap: Data slot parameter bitmask codec
- record: Catalog record construction from core descriptors
- generator: Per-channel orchestration
"""

from .bitmap import decode_parameters, encode_parameters
from .catalog import find_cached_record, load_catalog, update_available
from .files import download_asset, find_descriptor, read_descriptor
from .generator import CoreDataGenerator
from .github_source import GithubReleaseSource, choose_asset, resolve_releases
from .interfaces import (
    Asset,
    CoreIdentity,
    Release,
    ReleaseChannel,
    ReleaseMetadata,
)
from .record import build_asset_entries, build_record

__all__ = [
    # Interfaces
    "Asset",
    "CoreIdentity",
    "Release",
    "ReleaseChannel",
    "ReleaseMetadata",
    # Pipeline
    "CoreDataGenerator",
    "GithubReleaseSource",
    "build_asset_entries",
    "build_record",
    "choose_asset",
    "decode_parameters",
    "download_asset",
    "encode_parameters",
    "find_cached_record",
    "find_descriptor",
    "load_catalog",
    "read_descriptor",
    "resolve_releases",
    "update_available",
]
