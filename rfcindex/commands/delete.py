"""
rfcindex delete - Remove an RFC's metadata.
"""

from rfcindex.metadata.engine import ReconciliationEngine


def cmd_delete(args, engine: ReconciliationEngine) -> int:
    engine.delete(args.number)
    print(f"Deleted metadata for RFC {args.number}")
    return 0
