"""
Metadata reconciliation engine.

Merges three sources into per-RFC records:
  - existing records in the record store (hand-curated, authoritative),
  - the RFC texts in the source repository (start date, feature names, issues),
  - tracker labels (teams and tags, via the label classifier).

Policy:
  - scan_merged only creates records that don't exist yet, unless forced.
  - update_tags refreshes teams/tags only where they are empty, unless
    overwrite_all is set, so hand-curated values survive re-scans.
  - Batches run in number order and stop at the first error; records saved
    before the failure stay saved, so re-running is safe.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol, Sequence

from rfcindex.git.source import SourceDocument, number_from_filename
from rfcindex.lib.errors import (
    MetadataAlreadyExists,
    MissingMetadata,
    ParseArgError,
    ParseError,
    TrackerError,
)
from rfcindex.lib.tokens import parse_multiple
from rfcindex.metadata.classify import (
    DEFAULT_LABEL_RULES,
    LabelRule,
    build_tag_dictionary,
    classify,
)
from rfcindex.metadata.header import parse_header
from rfcindex.metadata.models import RfcMetadata, TagDictionary, Team, TeamTags

logger = logging.getLogger(__name__)


class RecordStoreLike(Protocol):
    def save(self, record: RfcMetadata) -> None: ...
    def open(self, number: int) -> RfcMetadata: ...
    def exists(self, number: int) -> bool: ...
    def delete(self, number: int) -> None: ...
    def all(self) -> list[RfcMetadata]: ...
    def all_numbers(self) -> list[int]: ...


class TagDictionaryStoreLike(Protocol):
    def exists(self) -> bool: ...
    def read(self) -> TagDictionary: ...
    def write(self, entries: list[TeamTags]) -> None: ...


class LabelTracker(Protocol):
    def fetch_labels(self, number: int) -> list[str]: ...


class DocumentSource(Protocol):
    def list_tracked_documents(self) -> list[SourceDocument]: ...


@dataclass
class ScanReport:
    """Outcome of a scan_merged run."""
    created: list[int] = field(default_factory=list)
    overwritten: list[int] = field(default_factory=list)
    skipped: list[int] = field(default_factory=list)

    @property
    def changed(self) -> list[int]:
        return sorted(self.created + self.overwritten)


class ReconciliationEngine:
    """Applies add/set/scan/tag operations to the record store."""

    def __init__(
        self,
        records: RecordStoreLike,
        tags: TagDictionaryStoreLike,
        source: Optional[DocumentSource] = None,
        tracker: Optional[LabelTracker] = None,
        label_rules: Sequence[LabelRule] = DEFAULT_LABEL_RULES,
    ):
        self.records = records
        self.tags = tags
        self.source = source
        self.tracker = tracker
        self.label_rules = tuple(label_rules)

    # Reads for the renderer

    def all_records(self) -> list[RfcMetadata]:
        return self.records.all()

    def record(self, number: int) -> RfcMetadata:
        return self.records.open(number)

    def delete(self, number: int) -> None:
        self.records.delete(number)
        logger.info(f"Deleted metadata for RFC {number}")

    # Manual edits

    def add(
        self,
        number: int,
        filename: str,
        start_date: str,
        *,
        merge_date: Optional[str] = None,
        title: Optional[str] = None,
        feature_name: Optional[str] = None,
        issues: Optional[str] = None,
        force: bool = False,
    ) -> RfcMetadata:
        """Create a record from caller-supplied fields.

        Raises:
            MetadataAlreadyExists: record exists and force is False
            ParseArgError: filename prefix does not match number
        """
        _check_filename(number, filename)
        if not force and self.records.exists(number):
            raise MetadataAlreadyExists(number)

        record = RfcMetadata(
            number=number,
            filename=filename,
            start_date=start_date,
            merge_date=merge_date,
            title=title,
        )
        if feature_name is not None:
            record.feature_name = parse_multiple(feature_name)
        if issues is not None:
            record.issues = parse_multiple(issues)

        self.records.save(record)
        logger.info(f"Added metadata for RFC {number}")
        return record

    def set(
        self,
        number: int,
        *,
        filename: Optional[str] = None,
        start_date: Optional[str] = None,
        merge_date: Optional[str] = None,
        title: Optional[str] = None,
        feature_name: Optional[str] = None,
        issues: Optional[str] = None,
        teams: Optional[str] = None,
        tags: Optional[str] = None,
    ) -> RfcMetadata:
        """Overwrite the supplied fields of an existing record.

        Arguments left as None are untouched. List fields take free text.

        Raises:
            MetadataNotFound: no record for number
            ParseTagError: teams names an unknown team
            ParseArgError: filename prefix does not match number
        """
        record = self.records.open(number)

        if filename is not None:
            _check_filename(number, filename)
            record.filename = filename
        if start_date is not None:
            record.start_date = start_date
        if merge_date is not None:
            record.merge_date = merge_date
        if title is not None:
            record.title = title
        if feature_name is not None:
            record.feature_name = parse_multiple(feature_name)
        if issues is not None:
            record.issues = parse_multiple(issues)
        if teams is not None:
            record.set_teams([Team.parse(t) for t in parse_multiple(teams)])
        if tags is not None:
            record.set_tags(parse_multiple(tags))

        self.records.save(record)
        logger.info(f"Updated metadata for RFC {number}")
        return record

    # Source and tracker reconciliation

    def record_from_source(
        self,
        document: SourceDocument,
        dictionary: TagDictionary,
    ) -> RfcMetadata:
        """Build a fresh record from an RFC text and its tracker labels."""
        number = number_from_filename(document.filename)
        header = parse_header(document.text)
        record = RfcMetadata(
            number=number,
            filename=document.filename,
            start_date=header.start_date,
            feature_name=header.feature_name,
            issues=header.issues,
        )

        labels = self._require_tracker().fetch_labels(number)
        result = classify(labels, dictionary, self.label_rules, number=number)
        record.set_teams(result.teams)
        record.set_tags(result.tags)
        return record

    def scan_merged(self, force: bool = False) -> ScanReport:
        """Create records for tracked RFCs that don't have one yet.

        With force, existing records are rebuilt from the source as well.
        The first failure aborts the run.
        """
        dictionary = self.tags.read()
        report = ScanReport()

        for document in self._require_source().list_tracked_documents():
            number = number_from_filename(document.filename)
            existed = self.records.exists(number)
            if existed and not force:
                logger.debug(f"RFC {number}: metadata exists, skipping")
                report.skipped.append(number)
                continue

            record = self.record_from_source(document, dictionary)
            self.records.save(record)
            if existed:
                report.overwritten.append(number)
                logger.info(f"RFC {number}: metadata rebuilt from source")
            else:
                report.created.append(number)
                logger.info(f"RFC {number}: metadata created from source")

        return report

    def update_tags(
        self,
        numbers: Sequence[int] = (),
        *,
        tag: Optional[str] = None,
        scan: bool = False,
        overwrite_all: bool = False,
    ) -> list[int]:
        """Add a tag and/or refresh teams and tags from tracker labels.

        Args:
            numbers: RFCs to update; empty means every stored record
            tag: Tag to append where absent
            scan: Re-classify tracker labels
            overwrite_all: With scan, replace teams and tags even if non-empty

        Returns:
            Numbers of records that changed and were saved
        """
        targets = list(numbers) or self.records.all_numbers()
        dictionary = self.tags.read() if scan else None
        changed = []

        for number in targets:
            record = self.records.open(number)
            before = (list(record.teams), list(record.tags))

            if scan:
                labels = self._require_tracker().fetch_labels(number)
                result = classify(labels, dictionary, self.label_rules, number=number)
                if overwrite_all or not record.teams:
                    record.set_teams(result.teams)
                if overwrite_all or not record.tags:
                    record.set_tags(result.tags)

            if tag is not None:
                record.add_tag(tag)

            if (record.teams, record.tags) != before:
                self.records.save(record)
                changed.append(number)
                logger.info(f"RFC {number}: teams/tags updated")
            else:
                logger.debug(f"RFC {number}: no tag changes")

        return changed

    def init_tag_dictionary(self) -> list[TeamTags]:
        """Rebuild tags.json from the labels of every tracked RFC.

        All labels are fetched before anything is written.
        """
        tracker = self._require_tracker()
        labels_by_number = {}
        for document in self._require_source().list_tracked_documents():
            number = number_from_filename(document.filename)
            labels_by_number[number] = tracker.fetch_labels(number)

        entries = build_tag_dictionary(labels_by_number, self.label_rules)
        self.tags.write(entries)
        return entries

    def _require_tracker(self) -> LabelTracker:
        if self.tracker is None:
            raise TrackerError("No label tracker configured")
        return self.tracker

    def _require_source(self) -> DocumentSource:
        if self.source is None:
            raise MissingMetadata("No source repository configured")
        return self.source


def _check_filename(number: int, filename: str) -> None:
    """Raise ParseArgError unless filename starts with number's 4-digit prefix."""
    try:
        prefix = number_from_filename(filename)
    except ParseError as e:
        raise ParseArgError(str(e)) from None
    if prefix != number:
        raise ParseArgError(f"Filename '{filename}' belongs to RFC {prefix}, not RFC {number}")
