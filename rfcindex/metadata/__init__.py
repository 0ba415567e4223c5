"""
RFC metadata: records, the team/tag dictionary, label classification and
the reconciliation engine that ties them together.
"""

from rfcindex.metadata.models import (
    METADATA_VERSION,
    RfcMetadata,
    TagDictionary,
    Team,
    TeamTags,
    tag_display,
)
from rfcindex.metadata.records import RecordStore
from rfcindex.metadata.tags import TagDictionaryStore
from rfcindex.metadata.classify import (
    DEFAULT_LABEL_RULES,
    Classification,
    LabelRule,
    build_tag_dictionary,
    classify,
)
from rfcindex.metadata.engine import ReconciliationEngine, ScanReport

__all__ = [
    "METADATA_VERSION",
    "RfcMetadata",
    "TagDictionary",
    "Team",
    "TeamTags",
    "tag_display",
    "RecordStore",
    "TagDictionaryStore",
    "DEFAULT_LABEL_RULES",
    "Classification",
    "LabelRule",
    "build_tag_dictionary",
    "classify",
    "ReconciliationEngine",
    "ScanReport",
]
