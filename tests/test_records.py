"""Tests for rfcindex.metadata.records module."""

import json

import pytest

from rfcindex.lib.errors import (
    MetadataNotFound,
    SerializationError,
    UnsupportedMetadataVersion,
)
from rfcindex.metadata.models import METADATA_VERSION, RfcMetadata, Team
from rfcindex.metadata.records import RecordStore, upgrade_record_data


def make_record(number=50, **kwargs) -> RfcMetadata:
    fields = dict(
        number=number,
        filename=f"{number:04d}-foo.md",
        start_date="2020-01-01",
        feature_name=["foo"],
        issues=["rust-lang/rust#1234"],
        title="Foo",
        teams=[Team.LANG],
        tags=["A-traits"],
    )
    fields.update(kwargs)
    return RfcMetadata(**fields)


def write_raw(store: RecordStore, number: int, data) -> None:
    store.metadata_dir.mkdir(parents=True, exist_ok=True)
    store.path_for(number).write_text(json.dumps(data))


@pytest.fixture
def store(tmp_path):
    return RecordStore(tmp_path / "metadata")


class TestSaveAndOpen:
    """Test save/open round trip and path layout."""

    def test_round_trip(self, store):
        record = make_record()
        store.save(record)
        assert store.open(50) == record

    def test_round_trip_minimal(self, store):
        record = RfcMetadata(number=7, filename="0007-x.md", start_date="")
        store.save(record)
        assert store.open(7) == record

    def test_path_is_zero_padded(self, store):
        store.save(make_record(number=5))
        assert (store.metadata_dir / "0005.json").exists()

    def test_large_numbers_not_truncated(self, store):
        store.save(make_record(number=12345, filename="12345-big.md"))
        assert (store.metadata_dir / "12345.json").exists()
        assert store.open(12345).number == 12345

    def test_file_has_stable_field_names(self, store):
        store.save(make_record())
        data = json.loads(store.path_for(50).read_text())
        assert set(data) == {
            "version", "number", "filename", "start_date", "merge_date",
            "feature_name", "issues", "title", "teams", "tags",
        }
        assert data["version"] == METADATA_VERSION
        assert data["teams"] == ["lang"]

    def test_save_overwrites(self, store):
        store.save(make_record(title="Old"))
        store.save(make_record(title="New"))
        assert store.open(50).title == "New"

    def test_save_rejects_duplicate_tags(self, store):
        record = make_record()
        record.tags = ["A-traits", "A-traits"]
        with pytest.raises(SerializationError):
            store.save(record)
        assert not store.exists(50)


class TestOpenFailures:
    """Test open() error kinds."""

    def test_missing_record(self, store):
        with pytest.raises(MetadataNotFound):
            store.open(999)

    def test_newer_version_rejected_before_fields_are_checked(self, store):
        write_raw(store, 50, {"version": METADATA_VERSION + 1, "number": "garbage"})
        with pytest.raises(UnsupportedMetadataVersion) as exc:
            store.open(50)
        assert exc.value.version == METADATA_VERSION + 1

    def test_malformed_json(self, store):
        store.metadata_dir.mkdir(parents=True)
        store.path_for(50).write_text("{not json")
        with pytest.raises(SerializationError):
            store.open(50)

    def test_schema_mismatch(self, store):
        data = make_record().to_dict()
        data["teams"] = ["marketing"]
        write_raw(store, 50, data)
        with pytest.raises(SerializationError):
            store.open(50)

    def test_missing_version(self, store):
        data = make_record().to_dict()
        del data["version"]
        write_raw(store, 50, data)
        with pytest.raises(SerializationError, match="version"):
            store.open(50)


class TestUpgrade:
    """Test the version upgrade chain."""

    def test_v1_record_is_upgraded_on_open(self, store):
        data = make_record().to_dict()
        data["version"] = 1
        del data["merge_date"]
        data["teams"] = ["cargo", "tools", "lang"]
        write_raw(store, 50, data)

        record = store.open(50)
        assert record.version == METADATA_VERSION
        assert record.merge_date is None
        assert record.teams == [Team.TOOLS, Team.LANG]

    def test_current_version_untouched(self):
        data = make_record().to_dict()
        assert upgrade_record_data(dict(data)) == data

    def test_unknown_old_version(self):
        with pytest.raises(SerializationError, match="No upgrade path"):
            upgrade_record_data({"version": 0})


class TestExistsAndDelete:
    """Test exists() and delete()."""

    def test_exists(self, store):
        assert store.exists(50) is False
        store.save(make_record())
        assert store.exists(50) is True

    def test_exists_does_not_parse(self, store):
        store.metadata_dir.mkdir(parents=True)
        store.path_for(50).write_text("garbage")
        assert store.exists(50) is True

    def test_delete(self, store):
        store.save(make_record())
        store.delete(50)
        assert not store.exists(50)

    def test_delete_missing(self, store):
        with pytest.raises(MetadataNotFound):
            store.delete(50)


class TestAll:
    """Test all() and all_numbers()."""

    def test_empty_when_directory_missing(self, store):
        assert store.all() == []
        assert store.all_numbers() == []

    def test_sorted_by_number(self, store):
        for n in (30, 2, 100):
            store.save(make_record(number=n))
        assert [r.number for r in store.all()] == [2, 30, 100]
        assert store.all_numbers() == [2, 30, 100]

    def test_ignores_tag_dictionary_and_other_files(self, store):
        store.save(make_record(number=1))
        (store.metadata_dir / "tags.json").write_text("[]")
        (store.metadata_dir / "notes.txt").write_text("hi")
        (store.metadata_dir / "0002.json").mkdir()
        assert store.all_numbers() == [1]
        assert len(store.all()) == 1

    def test_one_bad_record_fails_everything(self, store):
        store.save(make_record(number=1))
        store.path_for(2).write_text("{broken")
        with pytest.raises(SerializationError):
            store.all()

    def test_all_numbers_does_not_parse(self, store):
        store.save(make_record(number=1))
        store.path_for(2).write_text("{broken")
        assert store.all_numbers() == [1, 2]

    def test_skips_unpadded_duplicates(self, store, caplog):
        store.save(make_record(number=50))
        (store.metadata_dir / "50.json").write_text(store.path_for(50).read_text())
        (store.metadata_dir / "00050.json").write_text(store.path_for(50).read_text())

        assert store.all_numbers() == [50]
        assert [r.number for r in store.all()] == [50]
        assert "50.json" in caplog.text

    def test_five_digit_numbers_are_canonical(self, store):
        store.save(make_record(number=12345))
        assert store.all_numbers() == [12345]

    def test_number_inside_file_must_match_name(self, store):
        store.save(make_record(number=51))
        store.metadata_dir.joinpath("0050.json").write_text(store.path_for(51).read_text())

        with pytest.raises(SerializationError, match="expected RFC 50"):
            store.all()
        with pytest.raises(SerializationError):
            store.open(50)
