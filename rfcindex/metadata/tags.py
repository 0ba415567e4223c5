"""
Tag dictionary store (metadata/tags.json).

The file holds the by-team view only; the by-tag index is rebuilt on every
read. Writes replace the whole file. There is no locking, callers serialize
access.
"""

import json
import logging
from pathlib import Path

from rfcindex.lib.errors import MetadataIOError, MetadataNotFound, SerializationError
from rfcindex.lib.validate import ValidationError, validate, validate_before_write
from rfcindex.metadata.models import TagDictionary, TeamTags

logger = logging.getLogger(__name__)

TAG_METADATA_FILENAME = "tags.json"


class TagDictionaryStore:
    """Reads and writes the team/tag dictionary."""

    def __init__(self, metadata_dir: Path):
        self.path = Path(metadata_dir) / TAG_METADATA_FILENAME

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> TagDictionary:
        """Load tags.json and derive the by-tag index.

        Raises:
            MetadataNotFound: tags.json missing (run init-tags first)
            SerializationError: malformed JSON or schema mismatch
        """
        try:
            text = self.path.read_text()
        except FileNotFoundError:
            raise MetadataNotFound(f"Tag dictionary not found: {self.path}") from None
        except OSError as e:
            raise MetadataIOError(f"Failed to read {self.path}: {e}") from e

        try:
            data = json.loads(text)
            validate(data, "tags")
        except json.JSONDecodeError as e:
            raise SerializationError(f"Invalid JSON in {self.path}: {e}") from e
        except ValidationError as e:
            raise SerializationError(f"{self.path}: {e}") from e

        return TagDictionary.from_entries([TeamTags.from_dict(d) for d in data])

    def write(self, entries: list[TeamTags]) -> None:
        """Replace tags.json with entries."""
        data = [entry.to_dict() for entry in entries]
        try:
            validate_before_write(data, "tags", self.path)
        except ValidationError as e:
            raise SerializationError(str(e)) from e

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2) + "\n")
        except OSError as e:
            raise MetadataIOError(f"Failed to write {self.path}: {e}") from e

        total = sum(len(e.tags) for e in entries)
        logger.info(f"Wrote tag dictionary: {len(entries)} team(s), {total} tag(s)")
