"""
File Operations for the corecatalog Generation Subsystem

This module downloads and unpacks release assets and locates the JSON
descriptors inside an unpacked core bundle.
"""

import json
import os
import shutil
import zipfile
from typing import Any, Optional

from corecatalog.constants import (
    CORES_SUBDIR,
    DESCRIPTOR_SEARCH_MAX_DEPTH,
    ZIP_EXTENSION,
)
from corecatalog.exceptions import DescriptorError, ExtractionError
from corecatalog.log_utils import logger
from corecatalog.utils import download_github_asset


def archive_dir_name(file_name: str) -> str:
    """
    Return the directory name an archive is unpacked into.

    Strips any leading path and a trailing `.zip` extension, so
    `"core_1.0.zip"` becomes `"core_1.0"`.
    """
    base_name = os.path.basename(file_name)
    if base_name.lower().endswith(ZIP_EXTENSION) and len(base_name) > len(
        ZIP_EXTENSION
    ):
        return base_name[: -len(ZIP_EXTENSION)]
    return base_name


def extract_archive(archive_path: str, extract_dir: str) -> None:
    """
    Extract every member of a zip archive into `extract_dir`.

    A partially written `extract_dir` is removed when extraction fails.

    Raises:
        ExtractionError: If the archive is corrupted or cannot be written out.
    """
    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            zf.extractall(extract_dir)
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as e:
        if os.path.isdir(extract_dir):
            shutil.rmtree(extract_dir, ignore_errors=True)
        raise ExtractionError(
            "Failed to extract archive", archive_path=archive_path, details=str(e)
        ) from e


def download_asset(
    file_name: str,
    url: str,
    github_token: Optional[str] = None,
    work_dir: str = "",
) -> str:
    """
    Download a release asset and unpack it, unless it was unpacked before.

    The archive is saved as `file_name` in `work_dir` and unpacked into a
    sibling directory named after it. An existing directory with that name is
    trusted as-is and returned without any network access; its contents are
    never checked or repaired.

    Parameters:
        file_name (str): Asset file name as published on the release.
        url (str): Asset API URL.
        github_token (Optional[str]): Credential for the download request.
        work_dir (str): Directory archives are written to; the current directory by default.

    Returns:
        str: Path of the directory holding the unpacked asset.

    Raises:
        DownloadError: If the download or writing the archive fails.
        ExtractionError: If the asset is not a zip archive or cannot be unpacked.
    """
    dir_name = archive_dir_name(file_name)
    if dir_name == os.path.basename(file_name):
        raise ExtractionError(
            "Unsupported archive type",
            archive_path=file_name,
            details=f"expected a {ZIP_EXTENSION} asset",
        )
    extract_dir = os.path.join(work_dir, dir_name)

    if os.path.isdir(extract_dir):
        logger.debug(f"Using previously extracted asset at {extract_dir}")
        return extract_dir

    archive_path = os.path.join(work_dir, os.path.basename(file_name))
    download_github_asset(url, archive_path, github_token)

    logger.debug(f"Extracting {archive_path} to {extract_dir}")
    extract_archive(archive_path, extract_dir)
    return extract_dir


def find_descriptor(
    directory: str, file_name: str, subdirectory: str = CORES_SUBDIR
) -> Optional[str]:
    """
    Find `file_name` anywhere below `<directory>/<subdirectory>/`.

    The tree is walked depth-first with directory names sorted, so ties go to
    the first match in that order. Files directly in a directory are checked
    before its subdirectories. The walk stops DESCRIPTOR_SEARCH_MAX_DEPTH
    levels below the search root.

    Returns:
        Optional[str]: Path of the first match, or None when there is none.
    """
    search_root = os.path.join(directory, subdirectory)
    if not os.path.isdir(search_root):
        return None

    root_depth = search_root.rstrip(os.sep).count(os.sep)
    for dirpath, dirnames, filenames in os.walk(search_root):
        if file_name in filenames:
            return os.path.join(dirpath, file_name)
        if dirpath.rstrip(os.sep).count(os.sep) - root_depth >= DESCRIPTOR_SEARCH_MAX_DEPTH:
            dirnames[:] = []
        else:
            dirnames.sort()
    return None


def read_descriptor(
    directory: str, file_name: str, subdirectory: str = CORES_SUBDIR
) -> Optional[Any]:
    """
    Locate and parse a JSON descriptor in an unpacked asset.

    Returns:
        The parsed JSON document, or None when no such file exists. A missing
        descriptor means the asset is not a core bundle.

    Raises:
        DescriptorError: If the file exists but cannot be read or is not valid JSON.
    """
    path = find_descriptor(directory, file_name, subdirectory)
    if path is None:
        return None

    logger.debug(f"Reading descriptor {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as e:
        raise DescriptorError(
            f"Could not parse {file_name}", path=path, details=str(e)
        ) from e
