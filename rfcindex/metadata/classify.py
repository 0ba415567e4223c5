"""
Label classification.

Maps tracker labels onto teams (through an ordered rule list) and onto tags
(through the tag dictionary). Also builds a fresh dictionary from the labels
of every tracked RFC.
"""

import fnmatch
import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

from rfcindex.lib.errors import TrackerError
from rfcindex.metadata.models import TAG_PREFIXES, TagDictionary, Team, TeamTags

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LabelRule:
    """Label glob (case-insensitive) that marks an RFC as owned by team."""
    pattern: str
    team: Team

    def matches(self, label: str) -> bool:
        return fnmatch.fnmatchcase(label.lower(), self.pattern.lower())


# Several labels may map to one team. Order matters: first match wins.
DEFAULT_LABEL_RULES: tuple[LabelRule, ...] = (
    LabelRule("T-lang", Team.LANG),
    LabelRule("T-libs", Team.LIBS),
    LabelRule("T-libs-api", Team.LIBS),
    LabelRule("T-core", Team.CORE),
    LabelRule("T-dev-tools", Team.TOOLS),
    LabelRule("T-cargo", Team.TOOLS),
    LabelRule("T-rustdoc", Team.TOOLS),
    LabelRule("T-compiler", Team.COMPILER),
    LabelRule("T-doc", Team.DOCS),
    LabelRule("T-docs", Team.DOCS),
)


@dataclass
class Classification:
    """Teams and recognised tags for one RFC."""
    teams: list[Team] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


def team_for_label(label: str, rules=DEFAULT_LABEL_RULES) -> Optional[Team]:
    for rule in rules:
        if rule.matches(label):
            return rule.team
    return None


def classify_teams(labels: list[str], rules=DEFAULT_LABEL_RULES) -> list[Team]:
    """Teams named by labels, in label order, without duplicates."""
    teams: list[Team] = []
    for label in labels:
        team = team_for_label(label, rules)
        if team is not None and team not in teams:
            teams.append(team)
    return teams


def classify_tags(labels: list[str], dictionary: TagDictionary) -> list[str]:
    """Labels the dictionary knows as tags, in label order, without duplicates."""
    tags: list[str] = []
    for label in labels:
        if dictionary.knows(label) and label not in tags:
            tags.append(label)
    return tags


def classify(
    labels: Optional[list[str]],
    dictionary: TagDictionary,
    rules=DEFAULT_LABEL_RULES,
    number: Optional[int] = None,
) -> Classification:
    """Classify one RFC's labels.

    Raises:
        TrackerError: labels is None (no label data, as opposed to no labels)
    """
    if labels is None:
        raise TrackerError(f"No label data for RFC {number}" if number else "No label data")
    return Classification(
        teams=classify_teams(labels, rules),
        tags=classify_tags(labels, dictionary),
    )


def is_tag_label(label: str) -> bool:
    return label[:2] in TAG_PREFIXES


def build_tag_dictionary(
    labels_by_number: Mapping[int, Optional[list[str]]],
    rules=DEFAULT_LABEL_RULES,
) -> list[TeamTags]:
    """
    Build tag dictionary entries from the labels of many RFCs.

    Each RFC's team labels pick its team; its other A-/T- labels become tags
    of that team. RFCs with no team or with several teams are skipped with a
    warning since their tags can't be attributed.

    Args:
        labels_by_number: Labels per RFC number, iterated in number order
        rules: Label-to-team rules

    Returns:
        One TeamTags per team that received tags, in team order

    Raises:
        TrackerError: an RFC has no label data
    """
    by_team: dict[Team, list[str]] = {}

    for number in sorted(labels_by_number):
        labels = labels_by_number[number]
        if labels is None:
            raise TrackerError(f"No label data for RFC {number}")

        teams: list[Team] = []
        tags: list[str] = []
        for label in labels:
            team = team_for_label(label, rules)
            if team is not None:
                if team not in teams:
                    teams.append(team)
            elif is_tag_label(label):
                tags.append(label)

        if not tags:
            continue
        if not teams:
            logger.warning(f"RFC {number}: no team label, skipping tags {tags}")
            continue
        if len(teams) > 1:
            names = ", ".join(str(t) for t in teams)
            logger.warning(f"RFC {number}: multiple teams ({names}), skipping tags {tags}")
            continue

        bucket = by_team.setdefault(teams[0], [])
        for tag in tags:
            if tag not in bucket:
                bucket.append(tag)

    return [TeamTags(team=t, tags=by_team[t]) for t in sorted(by_team, key=Team.order)]
