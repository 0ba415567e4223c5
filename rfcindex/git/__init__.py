"""Git access for the RFC source repository.

run_git never raises; SourceRepository turns failures into MetadataIOError.
"""

from rfcindex.git.runner import GitResult, run_git
from rfcindex.git.source import (
    SourceDocument,
    SourceRepository,
    number_from_filename,
)

__all__ = [
    "GitResult",
    "run_git",
    "SourceDocument",
    "SourceRepository",
    "number_from_filename",
]
