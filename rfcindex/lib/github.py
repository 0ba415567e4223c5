"""
GitHub label tracker.

Fetches the labels attached to an RFC's pull request via the gh CLI. The RFC
number is the PR number in the RFC repository.
"""

import json
import logging
import subprocess

from rfcindex.lib.errors import TrackerError

logger = logging.getLogger(__name__)


# Timeout for GitHub CLI operations (seconds)
GH_TIMEOUT_SECONDS = 30

DEFAULT_GITHUB_REPO = "rust-lang/rfcs"


def check_gh_available() -> tuple[bool, str]:
    """Check gh CLI is installed and authenticated.

    Returns: (ok, error_message)
    """
    try:
        result = subprocess.run(
            ["gh", "--version"],
            capture_output=True,
            timeout=5,
        )
        if result.returncode != 0:
            return False, "GitHub CLI (gh) not installed\n  Install: https://cli.github.com/"

        result = subprocess.run(
            ["gh", "auth", "status"],
            capture_output=True,
            text=True,
            timeout=10,
        )
        if result.returncode != 0:
            return False, "GitHub CLI not authenticated\n  Run: gh auth login"

        return True, ""

    except FileNotFoundError:
        return False, "GitHub CLI (gh) not found\n  Install: https://cli.github.com/"
    except subprocess.TimeoutExpired:
        return False, "GitHub CLI timed out"


def parse_labels_response(stdout: str, number: int) -> list[str]:
    """Extract label names from `gh pr view --json labels` output.

    Raises:
        TrackerError: invalid JSON, or no label data in the response
    """
    try:
        data = json.loads(stdout)
    except json.JSONDecodeError as e:
        raise TrackerError(f"Invalid JSON from gh for RFC {number}") from e

    labels = data.get("labels") if isinstance(data, dict) else None
    if labels is None:
        raise TrackerError(f"No label data for RFC {number}")

    names = []
    for label in labels:
        name = label.get("name") if isinstance(label, dict) else label
        if isinstance(name, str) and name:
            names.append(name)
    return names


class GitHubLabelTracker:
    """Label source backed by `gh pr view`.

    Each fetch is a single blocking gh call bounded by timeout.
    """

    def __init__(self, repo: str = DEFAULT_GITHUB_REPO, timeout: int = GH_TIMEOUT_SECONDS):
        self.repo = repo
        self.timeout = timeout

    def fetch_labels(self, number: int) -> list[str]:
        """Return label names for RFC number.

        Raises:
            TrackerError: gh failed, timed out, or returned no label data
        """
        cmd = ["gh", "pr", "view", str(number), "--repo", self.repo, "--json", "labels"]
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise TrackerError(f"GitHub API timeout fetching labels for RFC {number}") from e
        except (OSError, subprocess.SubprocessError) as e:
            raise TrackerError(f"GitHub operation failed for RFC {number}: {e}") from e

        if result.returncode != 0:
            raise TrackerError(
                f"Failed to fetch labels for RFC {number}: {result.stderr.strip()}"
            )

        labels = parse_labels_response(result.stdout, number)
        logger.debug(f"RFC {number}: labels {labels}")
        return labels
