# src/corecatalog/utils.py
import importlib.metadata
import os
import time
from typing import Any, Dict, Optional

import requests

from corecatalog.constants import (
    DEFAULT_CHUNK_SIZE,
    GITHUB_API_ACCEPT,
    GITHUB_API_VERSION,
    GITHUB_ASSET_ACCEPT,
    GITHUB_TOKEN_ENV_VAR,
)
from corecatalog.exceptions import APIError, DownloadError
from corecatalog.log_utils import logger

# Cache for the User-Agent string to avoid repeated metadata lookups
_USER_AGENT_CACHE = None


def get_user_agent() -> str:
    """
    Get the User-Agent string used for HTTP requests.

    Returns:
        The string `corecatalog/{version}`, where `{version}` is the installed package version or `unknown` if the version cannot be determined.
    """
    global _USER_AGENT_CACHE

    if _USER_AGENT_CACHE is None:
        try:
            app_version = importlib.metadata.version("corecatalog")
        except importlib.metadata.PackageNotFoundError:
            app_version = "unknown"

        _USER_AGENT_CACHE = f"corecatalog/{app_version}"

    return _USER_AGENT_CACHE


def get_effective_github_token(
    github_token: Optional[str], allow_env_token: bool = True
) -> Optional[str]:
    """
    Determine the GitHub token to use, preferring the explicit argument over the environment.

    Parameters:
        github_token (Optional[str]): Explicit token to use; leading and trailing whitespace are ignored.
        allow_env_token (bool): If True, fall back to the `GITHUB_TOKEN` environment variable when no explicit token is provided.

    Returns:
        Optional[str]: The chosen token with surrounding whitespace removed, or `None` if no token is available.
    """
    candidate = (github_token or "").strip()
    if candidate:
        return candidate
    if not allow_env_token:
        return None
    env_token = os.environ.get(GITHUB_TOKEN_ENV_VAR)
    return env_token.strip() if env_token else None


def _build_headers(accept: str, github_token: Optional[str]) -> Dict[str, str]:
    headers = {
        "Accept": accept,
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
        "User-Agent": get_user_agent(),
    }
    if github_token:
        headers["Authorization"] = f"Bearer {github_token}"
    return headers


def make_github_api_request(
    url: str,
    github_token: Optional[str] = None,
    params: Optional[Dict[str, Any]] = None,
) -> Any:
    """
    Perform an authenticated GitHub API GET request and return the decoded JSON body.

    Only a 200 response counts as success. There is no retry and no timeout; the
    caller's process-level limits are the only bound.

    Parameters:
        url (str): GitHub API URL to request.
        github_token (Optional[str]): Token sent as a bearer credential when present.
        params (Optional[Dict[str, Any]]): Query parameters to include in the request.

    Returns:
        Any: The parsed JSON response body.

    Raises:
        APIError: If the request fails, the status is not 200, or the body is not JSON.
    """
    headers = _build_headers(GITHUB_API_ACCEPT, github_token)
    if github_token:
        logger.debug("Using GitHub token for API authentication")
    else:
        logger.debug("No GitHub token available - using unauthenticated API requests")

    logger.debug(f"Making GitHub API request: {url}")
    try:
        response = requests.get(url, headers=headers, params=params)
    except requests.RequestException as e:
        raise APIError("GitHub API request failed", endpoint=url, details=str(e)) from e

    if response.status_code != 200:
        raise APIError(
            "GitHub API returned an unexpected status",
            endpoint=url,
            status_code=response.status_code,
            details=f"HTTP {response.status_code}",
        )

    try:
        return response.json()
    except ValueError as e:
        raise APIError(
            "GitHub API returned invalid JSON",
            endpoint=url,
            status_code=response.status_code,
            details=str(e),
        ) from e


def download_github_asset(
    url: str, download_path: str, github_token: Optional[str] = None
) -> None:
    """
    Stream a release asset through the GitHub API to `download_path`.

    The asset's API URL only serves the file itself when requested with an
    `application/octet-stream` Accept header; GitHub then redirects to storage.
    Chunks are written to a temporary file next to `download_path`, which is
    moved into place only once the whole body has been received. The temporary
    file is removed on failure, so no partial archive is ever left behind.

    Raises:
        DownloadError: If the request fails, returns a non-success status, or the
            file cannot be written.
    """
    headers = _build_headers(GITHUB_ASSET_ACCEPT, github_token)
    temp_path = f"{download_path}.tmp.{os.getpid()}.{int(time.time() * 1000)}"
    response = None
    try:
        logger.debug(f"Downloading release asset {url} to temp path {temp_path}")
        response = requests.get(url, headers=headers, stream=True)
        response.raise_for_status()

        downloaded_bytes = 0
        with open(temp_path, "wb") as file:
            for chunk in response.iter_content(chunk_size=DEFAULT_CHUNK_SIZE):
                if chunk:
                    file.write(chunk)
                    downloaded_bytes += len(chunk)

        os.replace(temp_path, download_path)
        logger.debug(f"Downloaded {downloaded_bytes} bytes to {download_path}")
    # RequestException subclasses IOError, so it must be caught first
    except requests.RequestException as e:
        raise DownloadError("Failed to download asset", url=url, details=str(e)) from e
    except OSError as e:
        raise DownloadError(
            f"Failed to write {download_path}", url=url, details=str(e)
        ) from e
    finally:
        if response is not None:
            response.close()
        if os.path.exists(temp_path):
            try:
                os.remove(temp_path)
            except OSError as e_rm:
                logger.debug(f"Error removing temp file {temp_path}: {e_rm}")
