"""
Source repository working copy.

The RFC repository is cloned into the working directory and kept current
with pull. Tracked documents are the markdown files in its text directory,
named NNNN-slug.md.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from rfcindex.git.runner import run_git
from rfcindex.lib.errors import MetadataIOError, MetadataNotFound, ParseError

logger = logging.getLogger(__name__)

GIT_TIMEOUT_SECONDS = 120

NUMBER_PREFIX_LEN = 4


def number_from_filename(filename: str) -> int:
    """RFC number from the first four characters of filename.

    Raises:
        ParseError: prefix is not an integer
    """
    prefix = filename[:NUMBER_PREFIX_LEN]
    if len(prefix) < NUMBER_PREFIX_LEN or not prefix.isdigit():
        raise ParseError(f"Filename '{filename}' does not start with a 4-digit RFC number")
    return int(prefix)


@dataclass
class SourceDocument:
    """One RFC text from the working copy."""
    number: int
    filename: str
    path: Path
    text: str


class SourceRepository:
    """Local clone of the RFC repository."""

    def __init__(
        self,
        working_dir: Path,
        git_url: str,
        branch: str = "master",
        text_dir: str = "text",
        timeout: int = GIT_TIMEOUT_SECONDS,
    ):
        self.working_dir = Path(working_dir)
        self.git_url = git_url
        self.branch = branch
        self.text_dir = text_dir
        self.timeout = timeout

    @property
    def text_path(self) -> Path:
        return self.working_dir / self.text_dir

    def sync(self) -> None:
        """Clone the repository if needed, then pull the main branch.

        Raises:
            MetadataIOError: clone or pull failed
        """
        if not (self.working_dir / ".git").exists():
            self.working_dir.mkdir(parents=True, exist_ok=True)
            logger.info(f"Cloning {self.git_url} into {self.working_dir}")
            result = run_git(["clone", self.git_url, "."], self.working_dir, timeout=self.timeout)
            if not result.success:
                raise MetadataIOError(f"git clone failed: {result.stderr.strip()}")

        logger.info(f"Pulling {self.branch} in {self.working_dir}")
        result = run_git(["pull", "origin", self.branch], self.working_dir, timeout=self.timeout)
        if not result.success:
            raise MetadataIOError(f"git pull failed: {result.stderr.strip()}")

    def list_tracked_documents(self) -> list[SourceDocument]:
        """Read every RFC text in the working copy, sorted by number.

        Raises:
            MetadataNotFound: text directory missing (sync first)
            ParseError: a file name has no numeric prefix
            MetadataIOError: a file could not be read
        """
        if not self.text_path.is_dir():
            raise MetadataNotFound(f"RFC text directory not found: {self.text_path}")

        documents = []
        for path in sorted(self.text_path.glob("*.md")):
            if not path.is_file():
                logger.warning(f"Skipping non-file entry {path}")
                continue
            number = number_from_filename(path.name)
            try:
                text = path.read_text(encoding="utf-8")
            except OSError as e:
                raise MetadataIOError(f"Failed to read {path}: {e}") from e
            documents.append(SourceDocument(number=number, filename=path.name, path=path, text=text))

        documents.sort(key=lambda d: d.number)
        return documents
