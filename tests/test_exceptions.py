"""Tests for the corecatalog exception hierarchy."""

import pytest

from corecatalog.exceptions import (
    APIError,
    ArchiveError,
    ConfigFileError,
    ConfigurationError,
    CoreCatalogError,
    DescriptorError,
    DownloadError,
    ExtractionError,
)

pytestmark = [pytest.mark.unit]


class TestCoreCatalogError:
    """Test base CoreCatalogError exception."""

    def test_basic_message(self):
        error = CoreCatalogError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.details is None

    def test_message_with_details(self):
        error = CoreCatalogError("Operation failed", details="Connection timeout")
        assert str(error) == "Operation failed - Connection timeout"


@pytest.mark.parametrize(
    "error_cls",
    [
        ConfigurationError,
        ConfigFileError,
        APIError,
        DownloadError,
        ArchiveError,
        ExtractionError,
        DescriptorError,
    ],
)
def test_all_errors_share_base_class(error_cls):
    with pytest.raises(CoreCatalogError):
        raise error_cls("failure")


def test_error_attributes():
    assert APIError("x", endpoint="/e", status_code=502).status_code == 502
    assert DownloadError("x", url="https://u").url == "https://u"
    assert ExtractionError("x", archive_path="a.zip").archive_path == "a.zip"
    assert DescriptorError("x", path="core.json").path == "core.json"
    assert ConfigFileError("x", path="c.yaml").path == "c.yaml"
    assert issubclass(ConfigFileError, ConfigurationError)
    assert issubclass(ExtractionError, ArchiveError)
