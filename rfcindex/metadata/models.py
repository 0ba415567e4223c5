"""
Data models for RFC metadata.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from rfcindex.lib.errors import ParseTagError

# Bump together with record.schema.json and add an upgrade step in records.py.
METADATA_VERSION = 2

TAG_PREFIXES = ("A-", "T-")


class Team(str, Enum):
    """Owning team. The value is both the stored and the displayed form."""
    LANG = "lang"
    LIBS = "libs"
    CORE = "core"
    TOOLS = "tools"
    COMPILER = "compiler"
    DOCS = "docs"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> "Team":
        """Parse a team name, accepting 'lang', 'Lang' or 'T-lang'."""
        name = text.strip().lower()
        if name.startswith("t-"):
            name = name[2:]
        try:
            return cls(name)
        except ValueError:
            raise ParseTagError(text) from None

    @classmethod
    def order(cls, team: "Team") -> int:
        """Position in declaration order, for stable sorting."""
        return list(cls).index(team)


def tag_display(tag: str) -> str:
    """Human form of a tag: 'A-traits' -> 'traits'."""
    if tag[:2] in TAG_PREFIXES:
        tag = tag[2:]
    return tag.lower()


def title_from_filename(filename: str) -> str:
    """Derive a title from an RFC filename: '0050-foo-bar.md' -> 'foo bar'."""
    stem = filename.rsplit(".", 1)[0] if "." in filename else filename
    head, sep, rest = stem.partition("-")
    if sep and head.isdigit():
        stem = rest
    return stem.replace("-", " ").replace("_", " ").strip()


@dataclass
class RfcMetadata:
    """Curated metadata for one RFC, stored as metadata/NNNN.json."""
    number: int
    filename: str
    start_date: str
    merge_date: Optional[str] = None
    feature_name: list[str] = field(default_factory=list)
    issues: list[str] = field(default_factory=list)
    title: Optional[str] = None
    teams: list[Team] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    version: int = METADATA_VERSION

    @property
    def display_title(self) -> str:
        return self.title or title_from_filename(self.filename)

    def add_team(self, team: Team) -> bool:
        """Append team if absent. Returns True if the record changed."""
        if team in self.teams:
            return False
        self.teams.append(team)
        return True

    def add_tag(self, tag: str) -> bool:
        """Append tag if absent. Returns True if the record changed."""
        if tag in self.tags:
            return False
        self.tags.append(tag)
        return True

    def set_teams(self, teams: list[Team]) -> None:
        self.teams = []
        for team in teams:
            self.add_team(team)

    def set_tags(self, tags: list[str]) -> None:
        self.tags = []
        for tag in tags:
            self.add_tag(tag)

    def to_dict(self) -> dict:
        """Serialize with the stable on-disk field names."""
        return {
            "version": self.version,
            "number": self.number,
            "filename": self.filename,
            "start_date": self.start_date,
            "merge_date": self.merge_date,
            "feature_name": list(self.feature_name),
            "issues": list(self.issues),
            "title": self.title,
            "teams": [team.value for team in self.teams],
            "tags": list(self.tags),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RfcMetadata":
        """Build from an already validated dict."""
        return cls(
            version=data["version"],
            number=data["number"],
            filename=data["filename"],
            start_date=data["start_date"],
            merge_date=data.get("merge_date"),
            feature_name=list(data.get("feature_name", [])),
            issues=list(data.get("issues", [])),
            title=data.get("title"),
            teams=[Team(t) for t in data.get("teams", [])],
            tags=list(data.get("tags", [])),
        )


@dataclass
class TeamTags:
    """One entry of tags.json: the tags known to belong to a team."""
    team: Team
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"team": self.team.value, "tags": list(self.tags)}

    @classmethod
    def from_dict(cls, data: dict) -> "TeamTags":
        return cls(team=Team(data["team"]), tags=list(data["tags"]))


@dataclass
class TagDictionary:
    """Team <-> tag taxonomy.

    by_team is what gets persisted; by_tag is always derived from it.
    """
    by_team: dict[Team, list[str]] = field(default_factory=dict)
    by_tag: dict[str, list[Team]] = field(default_factory=dict)

    @classmethod
    def from_entries(cls, entries: list[TeamTags]) -> "TagDictionary":
        """Index entries. Repeated teams are merged, tags de-duplicated."""
        by_team: dict[Team, list[str]] = {}
        for entry in entries:
            bucket = by_team.setdefault(entry.team, [])
            for tag in entry.tags:
                if tag not in bucket:
                    bucket.append(tag)

        by_tag: dict[str, list[Team]] = {}
        for team, tags in by_team.items():
            for tag in tags:
                by_tag.setdefault(tag, []).append(team)

        return cls(by_team=by_team, by_tag=by_tag)

    def to_entries(self) -> list[TeamTags]:
        teams = sorted(self.by_team, key=Team.order)
        return [TeamTags(team=t, tags=list(self.by_team[t])) for t in teams]

    def knows(self, tag: str) -> bool:
        return tag in self.by_tag
