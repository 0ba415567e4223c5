"""
Configuration loaders for rfcindex.

Index settings come from rfcindex.env in the index root; label-to-team rules
optionally come from labels.yaml next to it. Both files are optional.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import yaml

from . import envparse
from rfcindex.lib.github import DEFAULT_GITHUB_REPO, GH_TIMEOUT_SECONDS
from rfcindex.git.source import GIT_TIMEOUT_SECONDS
from rfcindex.metadata.classify import DEFAULT_LABEL_RULES, LabelRule
from rfcindex.metadata.models import Team

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "rfcindex.env"
LABELS_FILENAME = "labels.yaml"


@dataclass
class IndexConfig:
    """Index-level configuration from rfcindex.env"""
    root: Path
    metadata_dir: Path
    working_dir: Path  # Local clone of the RFC repository
    text_dir: str  # Relative to working_dir
    git_url: str
    git_branch: str
    github_repo: str  # owner/name used for label lookups
    gh_timeout: int
    git_timeout: int


def _int_setting(env: dict, key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got '{raw}'") from None
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return value


def load_index_config(root: Path) -> IndexConfig:
    """Load rfcindex.env from root, falling back to defaults for missing keys."""
    root = Path(root)
    config_path = root / CONFIG_FILENAME
    env = envparse.load_env(config_path) if config_path.exists() else {}

    return IndexConfig(
        root=root,
        metadata_dir=root / env.get("METADATA_DIR", "metadata"),
        working_dir=root / env.get("WORKING_DIR", "work"),
        text_dir=env.get("TEXT_DIR", "text"),
        git_url=env.get("GIT_URL", "https://github.com/rust-lang/rfcs.git"),
        git_branch=env.get("GIT_MAIN_BRANCH", "master"),
        github_repo=env.get("GITHUB_REPO", DEFAULT_GITHUB_REPO),
        gh_timeout=_int_setting(env, "GH_TIMEOUT", GH_TIMEOUT_SECONDS),
        git_timeout=_int_setting(env, "GIT_TIMEOUT", GIT_TIMEOUT_SECONDS),
    )


def load_label_rules(root: Path) -> tuple[LabelRule, ...]:
    """Load labels.yaml and return label rules.

    Format:

        teams:
          lang: [T-lang]
          tools: [T-dev-tools, T-cargo, T-rustdoc]

    Rules keep file order. If the file is missing or unparsable, the default
    rules are returned.

    Raises:
        ParseTagError: a key under teams is not a known team
    """
    labels_path = Path(root) / LABELS_FILENAME
    if not labels_path.exists():
        return DEFAULT_LABEL_RULES

    try:
        data = yaml.safe_load(labels_path.read_text())
    except yaml.YAMLError as e:
        logger.warning(f"Failed to parse {labels_path}: {e}")
        return DEFAULT_LABEL_RULES

    teams = data.get("teams") if isinstance(data, dict) else None
    if not isinstance(teams, dict) or not teams:
        logger.warning(f"{labels_path} has no 'teams' mapping, using default label rules")
        return DEFAULT_LABEL_RULES

    rules = []
    for name, patterns in teams.items():
        team = Team.parse(str(name))
        if isinstance(patterns, str):
            patterns = [patterns]
        for pattern in patterns or []:
            rules.append(LabelRule(str(pattern), team))
    return tuple(rules)
