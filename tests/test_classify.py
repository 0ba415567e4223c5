"""Tests for rfcindex.metadata.classify module."""

import logging

import pytest

from rfcindex.lib.errors import TrackerError
from rfcindex.metadata.classify import (
    DEFAULT_LABEL_RULES,
    LabelRule,
    build_tag_dictionary,
    classify,
    classify_tags,
    classify_teams,
    team_for_label,
)
from rfcindex.metadata.models import TagDictionary, Team, TeamTags


@pytest.fixture
def dictionary():
    return TagDictionary.from_entries([
        TeamTags(Team.LANG, ["A-traits", "A-closures"]),
        TeamTags(Team.LIBS, ["A-collections"]),
    ])


class TestTeamRules:
    """Test label -> team mapping."""

    @pytest.mark.parametrize("label,team", [
        ("T-lang", Team.LANG),
        ("t-LANG", Team.LANG),
        ("T-libs-api", Team.LIBS),
        ("T-dev-tools", Team.TOOLS),
        ("T-cargo", Team.TOOLS),
        ("T-rustdoc", Team.TOOLS),
        ("T-compiler", Team.COMPILER),
        ("T-doc", Team.DOCS),
    ])
    def test_default_rules(self, label, team):
        assert team_for_label(label) is team

    def test_unknown_label_has_no_team(self):
        assert team_for_label("A-traits") is None
        assert team_for_label("T-infra") is None

    def test_custom_rules_with_glob(self):
        rules = (LabelRule("T-libs*", Team.LIBS), LabelRule("WG-*", Team.TOOLS))
        assert team_for_label("T-libs-api", rules) is Team.LIBS
        assert team_for_label("wg-async", rules) is Team.TOOLS
        assert team_for_label("T-lang", rules) is None

    def test_first_matching_rule_wins(self):
        rules = (LabelRule("T-*", Team.CORE), LabelRule("T-lang", Team.LANG))
        assert team_for_label("T-lang", rules) is Team.CORE

    def test_classify_teams_dedupes_in_label_order(self):
        labels = ["T-cargo", "T-lang", "T-dev-tools", "A-traits"]
        assert classify_teams(labels) == [Team.TOOLS, Team.LANG]


class TestTagClassification:
    """Test dictionary-driven tag recognition."""

    def test_only_dictionary_tags(self, dictionary):
        labels = ["T-lang", "A-traits", "A-unknown", "A-collections"]
        assert classify_tags(labels, dictionary) == ["A-traits", "A-collections"]

    def test_tag_known_under_other_team_still_recognised(self, dictionary):
        assert classify_tags(["T-lang", "A-collections"], dictionary) == ["A-collections"]

    def test_duplicates_removed(self, dictionary):
        assert classify_tags(["A-traits", "A-traits"], dictionary) == ["A-traits"]

    def test_classify(self, dictionary):
        result = classify(["T-lang", "A-traits"], dictionary)
        assert result.teams == [Team.LANG]
        assert result.tags == ["A-traits"]

    def test_empty_labels_are_fine(self, dictionary):
        result = classify([], dictionary)
        assert result.teams == []
        assert result.tags == []

    def test_absent_labels_raise(self, dictionary):
        with pytest.raises(TrackerError, match="RFC 12"):
            classify(None, dictionary, number=12)


class TestBuildTagDictionary:
    """Test dictionary-init partitioning."""

    def test_single_team_contributes_tags(self):
        entries = build_tag_dictionary({
            1: ["T-lang", "A-traits", "A-closures"],
            2: ["T-lang", "A-traits", "A-macros"],
            3: ["T-libs-api", "A-collections"],
        })
        assert entries == [
            TeamTags(Team.LANG, ["A-traits", "A-closures", "A-macros"]),
            TeamTags(Team.LIBS, ["A-collections"]),
        ]

    def test_team_labels_are_not_tags(self):
        entries = build_tag_dictionary({1: ["T-lang", "T-infra", "A-traits"]})
        assert entries == [TeamTags(Team.LANG, ["T-infra", "A-traits"])]

    def test_unprefixed_labels_ignored(self):
        entries = build_tag_dictionary({1: ["T-lang", "final-comment-period", "A-traits"]})
        assert entries == [TeamTags(Team.LANG, ["A-traits"])]

    def test_no_team_skipped_with_warning(self, caplog):
        caplog.set_level(logging.WARNING)
        entries = build_tag_dictionary({7: ["A-traits"]})
        assert entries == []
        assert "RFC 7: no team label" in caplog.text

    def test_multiple_teams_skipped_with_warning(self, caplog):
        caplog.set_level(logging.WARNING)
        entries = build_tag_dictionary({
            8: ["T-lang", "T-libs", "A-traits"],
            9: ["T-core", "A-governance"],
        })
        assert entries == [TeamTags(Team.CORE, ["A-governance"])]
        assert "RFC 8: multiple teams (lang, libs)" in caplog.text

    def test_two_labels_for_same_team_count_once(self):
        entries = build_tag_dictionary({1: ["T-cargo", "T-dev-tools", "A-registry"]})
        assert entries == [TeamTags(Team.TOOLS, ["A-registry"])]

    def test_absent_labels_raise(self):
        with pytest.raises(TrackerError):
            build_tag_dictionary({1: ["T-lang"], 2: None})

    def test_result_round_trips_through_dictionary(self):
        entries = build_tag_dictionary({
            1: ["T-lang", "A-traits"],
            2: ["T-libs", "A-traits"],
        })
        d = TagDictionary.from_entries(entries)
        assert d.by_tag["A-traits"] == [Team.LANG, Team.LIBS]

    def test_defaults_are_ordered_pairs(self):
        assert all(isinstance(r, LabelRule) for r in DEFAULT_LABEL_RULES)
