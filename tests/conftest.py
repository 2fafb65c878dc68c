import json
import zipfile
from pathlib import Path

import platformdirs
import pytest
import requests

_NETWORK_BLOCK_MSG = (
    "Network access is blocked during tests. Mock requests.* or Session.request."
)


def _block_network(*_args, **_kwargs):
    """
    Prevent network calls in tests by raising a RuntimeError.

    Raises:
        RuntimeError: with `_NETWORK_BLOCK_MSG` indicating that network access is blocked during tests.
    """
    raise RuntimeError(_NETWORK_BLOCK_MSG)


def pytest_configure(config):
    """Register the markers used to group tests."""
    for marker in (
        "unit: fast isolated tests",
        "integration: tests that run several components together",
        "core_generation: catalog record generation pipeline",
        "configuration: configuration and logging setup",
    ):
        config.addinivalue_line("markers", marker)


@pytest.fixture(autouse=True)
def _isolate_test_environment(tmp_path_factory, monkeypatch):
    """
    Point platformdirs at a temporary config directory and clear environment
    variables that would change token resolution or log levels.
    """
    base = tmp_path_factory.mktemp("corecatalog")
    config_dir = base / "config"
    config_dir.mkdir(parents=True, exist_ok=True)

    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_dir))
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("CORECATALOG_LOG_LEVEL", raising=False)
    monkeypatch.setattr(
        platformdirs, "user_config_dir", lambda *_args, **_kwargs: str(config_dir)
    )


def pytest_runtest_setup():
    """
    Prevent real network requests during tests by replacing HTTP entry points with blocking callables.
    """
    requests.get = _block_network
    requests.post = _block_network
    requests.head = _block_network
    requests.Session.request = _block_network


@pytest.fixture
def write_core_bundle():
    """
    Fixture that provides a function writing an unpacked core bundle.

    The returned function lays out `Cores/<author>.<shortname>/core.json`,
    `Cores/<author>.<shortname>/data.json` and `Platforms/<platform_id>.json`
    under `root` and returns `root`.
    """

    def _write(
        root,
        author="Spiritualized",
        shortname="GB",
        platform_id="gb",
        platform_name="Game Boy",
        data_slots=None,
    ):
        root = Path(root)
        core_dir = root / "Cores" / f"{author}.{shortname}"
        core_dir.mkdir(parents=True, exist_ok=True)
        platforms_dir = root / "Platforms"
        platforms_dir.mkdir(parents=True, exist_ok=True)

        core = {
            "core": {
                "magic": "APF_VER_1",
                "metadata": {
                    "platform_ids": [platform_id],
                    "shortname": shortname,
                    "author": author,
                    "version": "1.0.0",
                },
            }
        }
        data = {"data": {"magic": "APF_VER_1", "data_slots": data_slots or []}}
        platform = {
            "platform": {
                "category": "Handheld",
                "name": platform_name,
                "year": 1989,
                "manufacturer": "Nintendo",
            }
        }

        (core_dir / "core.json").write_text(json.dumps(core))
        (core_dir / "data.json").write_text(json.dumps(data))
        (platforms_dir / f"{platform_id}.json").write_text(json.dumps(platform))
        return root

    return _write


@pytest.fixture
def zip_directory():
    """Fixture that provides a function zipping a directory tree into `zip_path`."""

    def _zip(source_dir, zip_path):
        source_dir = Path(source_dir)
        with zipfile.ZipFile(zip_path, "w") as zf:
            for path in sorted(source_dir.rglob("*")):
                if path.is_file():
                    zf.write(path, path.relative_to(source_dir).as_posix())
        return Path(zip_path).read_bytes()

    return _zip


@pytest.fixture
def release_payload():
    """Fixture that provides a function building a GitHub API release dict."""

    def _release(
        release_id,
        tag_name,
        prerelease=False,
        asset_names=("core.zip",),
        published_at="2024-01-01T00:00:00Z",
    ):
        return {
            "id": release_id,
            "tag_name": tag_name,
            "prerelease": prerelease,
            "published_at": published_at,
            "assets": [
                {
                    "name": name,
                    "url": f"https://api.github.com/repos/owner/repo/releases/assets/{release_id}{index}",
                    "browser_download_url": f"https://github.com/owner/repo/releases/download/{tag_name}/{name}",
                }
                for index, name in enumerate(asset_names)
            ],
        }

    return _release


@pytest.fixture
def serve_asset():
    """
    Fixture that provides a function building a stand-in for download_github_asset.

    The stand-in writes `content` to the requested download path.
    """

    def _serve(content):
        def _download(url, download_path, github_token=None):
            Path(download_path).write_bytes(content)

        return _download

    return _serve
