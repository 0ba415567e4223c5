"""
Read-only queries over the record set.

Counts, filters and a consistency audit used by the stats, list and check
commands.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from rfcindex.git.source import number_from_filename
from rfcindex.lib.errors import ParseError
from rfcindex.metadata.models import RfcMetadata, TagDictionary, Team, tag_display

logger = logging.getLogger(__name__)

# Field names accepted by filter_records(missing=...)
MISSING_FIELDS = ("title", "teams", "tags", "feature_name", "issues", "merge_date")


@dataclass
class IndexStats:
    """Aggregated counts over all records."""
    total: int
    with_title: int
    with_teams: int
    with_tags: int
    by_team: dict[Team, int] = field(default_factory=dict)
    by_tag: dict[str, int] = field(default_factory=dict)


def summarize(records: list[RfcMetadata]) -> IndexStats:
    """Count records overall, per team and per tag.

    by_team lists every team (zero counts included) in enum order; by_tag is
    ordered by descending count, then tag.
    """
    team_counts: Counter = Counter()
    tag_counts: Counter = Counter()
    for r in records:
        team_counts.update(r.teams)
        tag_counts.update(r.tags)

    return IndexStats(
        total=len(records),
        with_title=sum(1 for r in records if r.title),
        with_teams=sum(1 for r in records if r.teams),
        with_tags=sum(1 for r in records if r.tags),
        by_team={team: team_counts.get(team, 0) for team in Team},
        by_tag=dict(sorted(tag_counts.items(), key=lambda kv: (-kv[1], kv[0]))),
    )


def filter_records(
    records: list[RfcMetadata],
    team: Optional[Team] = None,
    tag: Optional[str] = None,
    missing: Optional[str] = None,
) -> list[RfcMetadata]:
    """Filter records by team, tag, and/or an empty field.

    Raises:
        ValueError: missing is not one of MISSING_FIELDS
    """
    if missing is not None and missing not in MISSING_FIELDS:
        raise ValueError(f"Unknown field '{missing}', expected one of {', '.join(MISSING_FIELDS)}")

    result = []
    for r in records:
        if team is not None and team not in r.teams:
            continue
        if tag is not None and tag not in r.tags:
            continue
        if missing is not None and getattr(r, missing):
            continue
        result.append(r)
    return result


@dataclass
class CheckIssue:
    """A consistency problem found by check_records."""
    number: int
    kind: str  # "number_mismatch", "missing_title", "no_teams", "no_tags", "unknown_tag"
    detail: str


def check_records(
    records: list[RfcMetadata],
    dictionary: Optional[TagDictionary] = None,
) -> list[CheckIssue]:
    """Audit records for problems a maintainer should fix by hand.

    Unknown tags are only reported when a dictionary is given.
    """
    issues = []
    for r in records:
        try:
            if number_from_filename(r.filename) != r.number:
                issues.append(CheckIssue(r.number, "number_mismatch",
                                         f"filename '{r.filename}' does not match number {r.number}"))
        except ParseError as e:
            issues.append(CheckIssue(r.number, "number_mismatch", str(e)))

        if not r.title:
            issues.append(CheckIssue(r.number, "missing_title",
                                     f"no title (displayed as '{r.display_title}')"))
        if not r.teams:
            issues.append(CheckIssue(r.number, "no_teams", "no teams"))
        if not r.tags:
            issues.append(CheckIssue(r.number, "no_tags", "no tags"))
        if dictionary is not None:
            for tag in r.tags:
                if not dictionary.knows(tag):
                    issues.append(CheckIssue(r.number, "unknown_tag",
                                             f"tag '{tag}' is not in the tag dictionary"))
    return issues


def format_stats_summary(stats: IndexStats, top_tags: int = 10) -> list[str]:
    """Format stats summary as list of lines for display."""
    lines = [
        f"  Total RFCs:    {stats.total}",
        f"  With title:    {stats.with_title}",
        f"  With teams:    {stats.with_teams}",
        f"  With tags:     {stats.with_tags}",
    ]
    if stats.by_team:
        lines.append("")
        lines.append("  Teams:")
        for team, count in stats.by_team.items():
            lines.append(f"    {team.value:<10} {count}")
    if stats.by_tag:
        lines.append("")
        lines.append("  Top tags:")
        for tag, count in list(stats.by_tag.items())[:top_tags]:
            lines.append(f"    {tag_display(tag):<24} {count}")
    return lines
