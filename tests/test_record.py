"""Tests for catalog record construction."""

import json

import pytest

from corecatalog.exceptions import DescriptorError
from corecatalog.generate.interfaces import (
    CoreIdentity,
    ReleaseChannel,
    ReleaseMetadata,
)
from corecatalog.generate.record import build_asset_entries, build_record

pytestmark = [pytest.mark.unit, pytest.mark.core_generation]

IDENTITY = CoreIdentity("spiritualized1997", "openFPGA-GB-GBC", "Spiritualized GB")
METADATA = ReleaseMetadata(
    channel=ReleaseChannel.STABLE,
    tag_name="1.2.0",
    release_date="2024-02-03T04:05:06Z",
    asset_file_name="gb.zip",
    asset_download_url="https://api.github.com/repos/x/y/releases/assets/1",
)


class TestBuildRecord:
    """Tests for build_record."""

    def test_builds_channel_record(self, tmp_path, write_core_bundle):
        write_core_bundle(
            tmp_path,
            data_slots=[
                {
                    "name": "Cartridge",
                    "required": True,
                    "extensions": ["gb"],
                    "parameters": "0x0",
                }
            ],
        )

        record = build_record(str(tmp_path), IDENTITY, METADATA)

        assert record == {
            "repository": "openFPGA-GB-GBC",
            "display_name": "Spiritualized GB",
            "identifier": "Spiritualized.GB",
            "platform": "Game Boy",
            "release": {
                "tag_name": "1.2.0",
                "release_date": "2024-02-03T04:05:06Z",
                "platform": {
                    "category": "Handheld",
                    "name": "Game Boy",
                    "year": 1989,
                    "manufacturer": "Nintendo",
                },
                "assets": [{"platform": "gb", "extensions": ["gb"]}],
            },
        }

    def test_prerelease_channel_key(self, tmp_path, write_core_bundle):
        write_core_bundle(tmp_path)
        metadata = ReleaseMetadata(
            channel=ReleaseChannel.PRERELEASE,
            tag_name="1.3.0-beta",
            release_date=None,
            asset_file_name="gb.zip",
            asset_download_url="url",
        )

        record = build_record(str(tmp_path), IDENTITY, metadata)

        assert "prerelease" in record
        assert "release" not in record
        assert record["prerelease"]["tag_name"] == "1.3.0-beta"

    def test_not_a_core_bundle(self, tmp_path):
        (tmp_path / "Assets").mkdir()
        assert build_record(str(tmp_path), IDENTITY, METADATA) is None

    def test_core_descriptor_without_metadata_is_skipped(self, tmp_path):
        (tmp_path / "Cores").mkdir()
        (tmp_path / "Cores" / "core.json").write_text(json.dumps({"core": {}}))
        assert build_record(str(tmp_path), IDENTITY, METADATA) is None

    def test_only_first_platform_id_is_used(self, tmp_path, write_core_bundle):
        write_core_bundle(tmp_path, platform_id="gb")
        core_path = tmp_path / "Cores" / "Spiritualized.GB" / "core.json"
        core = json.loads(core_path.read_text())
        core["core"]["metadata"]["platform_ids"] = ["gb", "gbc"]
        core_path.write_text(json.dumps(core))

        record = build_record(str(tmp_path), IDENTITY, METADATA)

        assert record["platform"] == "Game Boy"

    def test_missing_platform_ids_raises(self, tmp_path, write_core_bundle):
        write_core_bundle(tmp_path)
        core_path = tmp_path / "Cores" / "Spiritualized.GB" / "core.json"
        core = json.loads(core_path.read_text())
        core["core"]["metadata"]["platform_ids"] = []
        core_path.write_text(json.dumps(core))

        with pytest.raises(DescriptorError, match="platform_ids"):
            build_record(str(tmp_path), IDENTITY, METADATA)

    def test_missing_platform_descriptor_raises(self, tmp_path, write_core_bundle):
        write_core_bundle(tmp_path)
        (tmp_path / "Platforms" / "gb.json").unlink()

        with pytest.raises(DescriptorError, match="gb.json"):
            build_record(str(tmp_path), IDENTITY, METADATA)


class TestBuildAssetEntries:
    """Tests for build_asset_entries."""

    def test_only_required_slots(self, tmp_path, write_core_bundle):
        write_core_bundle(
            tmp_path,
            data_slots=[
                {"name": "Save", "required": False, "filename": "save.sav"},
                {"name": "BIOS", "required": True, "filename": "gb_bios.bin"},
                {"name": "Other"},
            ],
        )

        assert build_asset_entries(str(tmp_path), "gb") == [
            {"platform": "gb", "filename": "gb_bios.bin"}
        ]

    def test_parameter_flags_are_merged(self, tmp_path, write_core_bundle):
        write_core_bundle(
            tmp_path,
            data_slots=[
                {
                    "required": True,
                    "filename": "boot.rom",
                    "extensions": ["rom"],
                    "parameters": 0x02,
                }
            ],
        )

        assert build_asset_entries(str(tmp_path), "gb") == [
            {
                "platform": "gb",
                "filename": "boot.rom",
                "extensions": ["rom"],
                "core_specific": True,
            }
        ]

    def test_instance_json_slots_are_dropped(self, tmp_path, write_core_bundle):
        write_core_bundle(
            tmp_path,
            data_slots=[
                {"required": True, "extensions": ["json"], "parameters": "0x12"},
                {"required": True, "filename": "bios.bin", "parameters": 0x01},
            ],
        )

        assert build_asset_entries(str(tmp_path), "gb") == [
            {"platform": "gb", "filename": "bios.bin"}
        ]

    def test_empty_filename_and_extensions_are_kept(self, tmp_path, write_core_bundle):
        write_core_bundle(
            tmp_path,
            data_slots=[{"required": True, "filename": "", "extensions": []}],
        )

        assert build_asset_entries(str(tmp_path), "gb") == [
            {"platform": "gb", "filename": "", "extensions": []}
        ]

    def test_required_slot_without_parameters(self, tmp_path, write_core_bundle):
        write_core_bundle(tmp_path, data_slots=[{"required": True}])

        assert build_asset_entries(str(tmp_path), "gb") == [{"platform": "gb"}]

    def test_invalid_parameters_raise(self, tmp_path, write_core_bundle):
        write_core_bundle(
            tmp_path, data_slots=[{"required": True, "parameters": "zz"}]
        )

        with pytest.raises(DescriptorError, match="parameters"):
            build_asset_entries(str(tmp_path), "gb")

    def test_missing_data_descriptor_raises(self, tmp_path, write_core_bundle):
        write_core_bundle(tmp_path)
        (tmp_path / "Cores" / "Spiritualized.GB" / "data.json").unlink()

        with pytest.raises(DescriptorError, match="data.json"):
            build_asset_entries(str(tmp_path), "gb")
