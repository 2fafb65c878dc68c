"""
Constants and configuration values for corecatalog.

This module contains all hardcoded values, URLs, file names and other constants
used throughout the application.
"""

# GitHub API URLs
GITHUB_API_BASE = "https://api.github.com/repos"
GITHUB_RELEASES_URL_TEMPLATE = f"{GITHUB_API_BASE}/{{username}}/{{repository}}/releases"
GITHUB_API_ACCEPT = "application/vnd.github+json"
GITHUB_ASSET_ACCEPT = "application/octet-stream"
GITHUB_API_VERSION = "2022-11-28"

# Catalog and descriptor file names
DEFAULT_CATALOG_FILE = "_data/cores.yml"
CORE_DESCRIPTOR_FILE = "core.json"
DATA_DESCRIPTOR_FILE = "data.json"
CORES_SUBDIR = "Cores"
PLATFORMS_SUBDIR = "Platforms"
PLATFORM_DESCRIPTOR_SUFFIX = ".json"
ZIP_EXTENSION = ".zip"

# Download settings
DEFAULT_CHUNK_SIZE = 8192

# Maximum directory depth searched below Cores/ or Platforms/ for a descriptor
DESCRIPTOR_SEARCH_MAX_DEPTH = 8

# Output record keys for each release channel
STABLE_CHANNEL_KEY = "release"
PRERELEASE_CHANNEL_KEY = "prerelease"

# Some repositories publish two cores per release (e.g. GB and GBC).
# Maps a catalog display name to the index of the asset holding its core.
ASSET_INDEX_OVERRIDES = {
    "Spiritualized GB": 1,
}
DEFAULT_ASSET_INDEX = 0

# Data slot parameter bits, in published order.
# https://www.analogue.co/developer/docs/core-definition-files/data-json#parameters-bitmap
DATA_SLOT_PARAMETER_BITS = {
    "user_reloadable": 0b000000001,
    "core_specific": 0b000000010,
    "nonvolatile": 0b000000100,
    "read_only": 0b000001000,
    "instance_json": 0b000010000,
    "init_on_load": 0b000100000,
    "reset_while_load": 0b001000000,
    "reset_around_load": 0b010000000,
    "full_reload": 0b100000000,
}

# Only these parameters are reported in a core's catalog entry.
ENABLED_DATA_SLOT_PARAMETERS = (
    "core_specific",
    "instance_json",
)

# Slots with these flags are generated by the host, not shipped with the core.
RESERVED_DATA_SLOT_PARAMETERS = ("instance_json",)

# Configuration
CONFIG_APP_NAME = "corecatalog"
CONFIG_FILE_NAME = "corecatalog.yaml"
DEFAULT_ALLOW_ENV_TOKEN = True
GITHUB_TOKEN_ENV_VAR = "GITHUB_TOKEN"

# Logging configuration
LOGGER_NAME = "corecatalog"
LOG_FILE_NAME = "corecatalog.log"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
INFO_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s: %(message)s"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_FILE_BACKUP_COUNT = 5

# Environment variable names
LOG_LEVEL_ENV_VAR = "CORECATALOG_LOG_LEVEL"
