"""
rfcindex check - Report inconsistencies in the metadata index.
"""

from rfcindex.lib.stats import check_records
from rfcindex.metadata.engine import ReconciliationEngine


def cmd_check(args, engine: ReconciliationEngine) -> int:
    """Exit 1 if any issue is found, so CI can gate on it."""
    dictionary = engine.tags.read() if engine.tags.exists() else None
    if dictionary is None:
        print("[WARN] No tag dictionary, skipping unknown-tag checks")

    issues = check_records(engine.all_records(), dictionary)
    if args.kind:
        issues = [i for i in issues if i.kind in args.kind]

    for issue in issues:
        print(f"  RFC {issue.number:>4}  {issue.kind:<16} {issue.detail}")

    if issues:
        print(f"\n{len(issues)} issue(s) found")
        return 1
    print("No issues found")
    return 0
