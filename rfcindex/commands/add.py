"""
rfcindex add - Create metadata for an RFC.
"""

from rfcindex.metadata.engine import ReconciliationEngine


def cmd_add(args, engine: ReconciliationEngine) -> int:
    """Add a new record; --force overwrites an existing one."""
    record = engine.add(
        args.number,
        args.filename,
        args.start_date,
        merge_date=args.merge_date,
        title=args.title,
        feature_name=args.feature_name,
        issues=args.issues,
        force=args.force,
    )
    print(f"Added RFC {record.number}: {record.display_title}")
    return 0
