"""
Catalog record construction.

Turns the descriptors of an unpacked core bundle into the catalog record for
one release channel.
"""

from typing import Any, Dict, List, Optional

from corecatalog.constants import (
    CORE_DESCRIPTOR_FILE,
    CORES_SUBDIR,
    DATA_DESCRIPTOR_FILE,
    PLATFORM_DESCRIPTOR_SUFFIX,
    PLATFORMS_SUBDIR,
    RESERVED_DATA_SLOT_PARAMETERS,
)
from corecatalog.exceptions import DescriptorError

from .bitmap import decode_parameters
from .files import read_descriptor
from .interfaces import CoreIdentity, ReleaseMetadata


def _dig(document: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(document, dict):
            return None
        document = document.get(key)
    return document


def build_record(
    directory: str, identity: CoreIdentity, metadata: ReleaseMetadata
) -> Optional[Dict[str, Any]]:
    """
    Build the catalog record for one channel from an unpacked asset.

    Parameters:
        directory (str): Directory the asset was unpacked into.
        identity (CoreIdentity): The core being generated.
        metadata (ReleaseMetadata): Release the asset came from.

    Returns:
        Optional[Dict[str, Any]]: The record, or None when the asset has no core
            descriptor. Some releases ship extra files next to the core; those are
            skipped this way.

    Raises:
        DescriptorError: If a descriptor is malformed or missing required fields.
    """
    core_metadata = _dig(
        read_descriptor(directory, CORE_DESCRIPTOR_FILE, CORES_SUBDIR),
        "core",
        "metadata",
    )
    if not isinstance(core_metadata, dict):
        return None

    platform_ids = core_metadata.get("platform_ids")
    if not isinstance(platform_ids, list) or not platform_ids:
        raise DescriptorError(
            f"{CORE_DESCRIPTOR_FILE} has no platform_ids",
            details=identity.display_name,
        )
    # Only the first platform is used. No published core lists more than one.
    platform_id = platform_ids[0]

    platform_file = f"{platform_id}{PLATFORM_DESCRIPTOR_SUFFIX}"
    platform = _dig(
        read_descriptor(directory, platform_file, PLATFORMS_SUBDIR), "platform"
    )
    if not isinstance(platform, dict):
        raise DescriptorError(
            f"Missing or invalid platform descriptor {platform_file}",
            details=identity.display_name,
        )

    return {
        "repository": identity.repository,
        "display_name": identity.display_name,
        "identifier": f"{core_metadata.get('author')}.{core_metadata.get('shortname')}",
        "platform": platform.get("name"),
        metadata.channel.value: {
            "tag_name": metadata.tag_name,
            "release_date": metadata.release_date,
            "platform": platform,
            "assets": build_asset_entries(directory, platform_id),
        },
    }


def build_asset_entries(directory: str, platform_id: str) -> List[Dict[str, Any]]:
    """
    List the files a user has to supply for the core.

    Every required data slot becomes an entry with the platform id, the slot's
    filename and extensions when present, and its enabled parameter flags.
    Slots flagged with a reserved parameter are generated by the host and are
    left out.

    Raises:
        DescriptorError: If the data slot descriptor is missing or malformed.
    """
    data_slots = _dig(
        read_descriptor(directory, DATA_DESCRIPTOR_FILE, CORES_SUBDIR),
        "data",
        "data_slots",
    )
    if not isinstance(data_slots, list):
        raise DescriptorError(
            f"Missing or invalid {DATA_DESCRIPTOR_FILE}", details=directory
        )

    entries: List[Dict[str, Any]] = []
    for slot in data_slots:
        if not isinstance(slot, dict) or not slot.get("required"):
            continue

        entry: Dict[str, Any] = {"platform": platform_id}
        if slot.get("filename") is not None:
            entry["filename"] = slot["filename"]
        if slot.get("extensions") is not None:
            entry["extensions"] = slot["extensions"]

        try:
            entry.update(decode_parameters(slot.get("parameters")))
        except ValueError as e:
            raise DescriptorError(
                "Invalid data slot parameters", details=str(e)
            ) from e

        if any(entry.get(name) for name in RESERVED_DATA_SLOT_PARAMETERS):
            continue
        entries.append(entry)
    return entries
