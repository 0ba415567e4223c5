"""Shared constants for rfcindex."""

# CLI exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_MISSING_METADATA = 2
