"""
Record store: one JSON file per RFC.

Records live in <metadata_dir>/NNNN.json (number zero-padded to 4 digits).
Reads check the stored version before anything else, upgrade older records
step by step, then validate against record.schema.json.
"""

import json
import logging
import re
from pathlib import Path
from typing import Callable

from rfcindex.lib.errors import (
    MetadataIOError,
    MetadataNotFound,
    SerializationError,
    UnsupportedMetadataVersion,
)
from rfcindex.lib.validate import ValidationError, validate, validate_before_write
from rfcindex.metadata.models import METADATA_VERSION, RfcMetadata

logger = logging.getLogger(__name__)

RECORD_FILE_PATTERN = re.compile(r'^(\d+)\.json$')


def _upgrade_v1(data: dict) -> dict:
    """v1 had no merge_date and still allowed the retired cargo team."""
    data.setdefault("merge_date", None)
    teams = []
    for team in data.get("teams", []):
        if team == "cargo":
            team = "tools"
        if team not in teams:
            teams.append(team)
    data["teams"] = teams
    return data


# Maps a stored version to the step that lifts it to version + 1.
UPGRADES: dict[int, Callable[[dict], dict]] = {
    1: _upgrade_v1,
}


def upgrade_record_data(data: dict) -> dict:
    """Bring decoded record data up to METADATA_VERSION.

    Raises:
        SerializationError: if version is missing or has no upgrade path
        UnsupportedMetadataVersion: if version is newer than this build
    """
    version = data.get("version") if isinstance(data, dict) else None
    if not isinstance(version, int) or isinstance(version, bool):
        raise SerializationError("Record has no integer 'version' field")
    if version > METADATA_VERSION:
        raise UnsupportedMetadataVersion(version, METADATA_VERSION)

    while version < METADATA_VERSION:
        step = UPGRADES.get(version)
        if step is None:
            raise SerializationError(f"No upgrade path from metadata version {version}")
        data = step(data)
        version += 1
        data["version"] = version
    return data


class RecordStore:
    """Directory of per-RFC JSON records.

    Single writer: no locking is done here.
    """

    def __init__(self, metadata_dir: Path):
        self.metadata_dir = Path(metadata_dir)

    def path_for(self, number: int) -> Path:
        return self.metadata_dir / f"{number:04d}.json"

    def save(self, record: RfcMetadata) -> None:
        """Write record, overwriting any existing file."""
        path = self.path_for(record.number)
        data = record.to_dict()
        try:
            validate_before_write(data, "record", path)
        except ValidationError as e:
            raise SerializationError(str(e)) from e

        try:
            self.metadata_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(data, indent=2) + "\n")
        except OSError as e:
            raise MetadataIOError(f"Failed to write {path}: {e}") from e
        logger.debug(f"Saved metadata for RFC {record.number} to {path}")

    def open(self, number: int) -> RfcMetadata:
        """Load the record for number.

        Raises:
            MetadataNotFound: no record for number
            UnsupportedMetadataVersion: record written by a newer build
            SerializationError: malformed JSON or schema mismatch
            MetadataIOError: other read failures
        """
        return self._read(self.path_for(number), number)

    def exists(self, number: int) -> bool:
        return self.path_for(number).is_file()

    def delete(self, number: int) -> None:
        path = self.path_for(number)
        try:
            path.unlink()
        except FileNotFoundError:
            raise MetadataNotFound(f"RFC {number} does not have metadata") from None
        except OSError as e:
            raise MetadataIOError(f"Failed to delete {path}: {e}") from e
        logger.debug(f"Deleted metadata for RFC {number}")

    def all(self) -> list[RfcMetadata]:
        """Load every record, sorted by number.

        Any unreadable record fails the whole call.
        """
        return [self._read(path, number) for number, path in self._record_files()]

    def all_numbers(self) -> list[int]:
        """Numbers of all stored records, from file names only."""
        return [number for number, _ in self._record_files()]

    def _record_files(self) -> list[tuple[int, Path]]:
        if not self.metadata_dir.exists():
            return []
        try:
            entries = list(self.metadata_dir.iterdir())
        except OSError as e:
            raise MetadataIOError(f"Failed to list {self.metadata_dir}: {e}") from e

        found = []
        for path in entries:
            match = RECORD_FILE_PATTERN.match(path.name)
            if not match:
                continue
            number = int(match.group(1))
            # Only the canonical padded name counts, so 50.json never shadows 0050.json
            if path.name != self.path_for(number).name:
                logger.warning(f"Skipping non-canonical record file {path}")
                continue
            # is_file() reports False for entries it cannot stat
            if not path.is_file():
                logger.warning(f"Skipping non-file entry {path}")
                continue
            found.append((number, path))
        return sorted(found)

    def _read(self, path: Path, number: int) -> RfcMetadata:
        try:
            text = path.read_text()
        except FileNotFoundError:
            raise MetadataNotFound(f"RFC {number} does not have metadata") from None
        except OSError as e:
            raise MetadataIOError(f"Failed to read {path}: {e}") from e

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SerializationError(f"Invalid JSON in {path}: {e}") from e

        data = upgrade_record_data(data)

        try:
            validate(data, "record")
        except ValidationError as e:
            raise SerializationError(f"{path}: {e}") from e

        if data["number"] != number:
            raise SerializationError(
                f"{path} holds metadata for RFC {data['number']}, expected RFC {number}"
            )

        return RfcMetadata.from_dict(data)
