"""
rfcindex set - Overwrite selected fields of an RFC's metadata.
"""

from rfcindex.metadata.engine import ReconciliationEngine

SETTABLE_FIELDS = (
    "filename",
    "start_date",
    "merge_date",
    "title",
    "feature_name",
    "issues",
    "teams",
    "tags",
)


def cmd_set(args, engine: ReconciliationEngine) -> int:
    """Update only the fields given on the command line."""
    updates = {name: getattr(args, name) for name in SETTABLE_FIELDS if getattr(args, name) is not None}
    if not updates:
        print("Nothing to set. Pass at least one field, e.g. --title.")
        return 1

    engine.set(args.number, **updates)
    print(f"Updated RFC {args.number}: {', '.join(updates)}")
    return 0
