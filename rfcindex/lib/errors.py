"""
Error types for rfcindex.

Every engine operation raises one of these instead of exiting. The CLI maps
them to exit codes.
"""


class MetadataError(Exception):
    """Base class for all rfcindex failures."""


class SerializationError(MetadataError):
    """Stored data could not be encoded, decoded or validated."""


class MetadataNotFound(MetadataError):
    """A record or dictionary file does not exist."""


class MetadataIOError(MetadataError):
    """Filesystem failure other than a missing file."""


class UnsupportedMetadataVersion(MetadataError):
    """Record was written by a newer version of rfcindex."""

    def __init__(self, version: int, supported: int):
        self.version = version
        self.supported = supported
        super().__init__(
            f"Unsupported metadata version {version} (this build supports up to {supported})"
        )


class MetadataAlreadyExists(MetadataError):
    """Add was called for a number that already has a record."""

    def __init__(self, number: int):
        self.number = number
        super().__init__(f"RFC {number} already has metadata (use --force to overwrite)")


class ParseError(MetadataError):
    """Malformed source text, e.g. a filename without a numeric prefix."""


class TrackerError(MetadataError):
    """The label tracker is unavailable or returned no label data."""


class MissingMetadata(MetadataError):
    """A required external input, such as the RFC source repository, is not available."""


class ParseTagError(MetadataError):
    """User-supplied team or tag token is not recognised."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Unrecognised team or tag: '{token}'")


class ParseArgError(MetadataError):
    """User-supplied argument could not be parsed."""
