"""
rfcindex scan - Create metadata for merged RFCs from the source repository.
"""

from rfcindex.lib.constants import EXIT_ERROR
from rfcindex.lib.github import check_gh_available
from rfcindex.metadata.engine import ReconciliationEngine


def cmd_scan(args, engine: ReconciliationEngine) -> int:
    """Pull the RFC repository and create records for RFCs without one."""
    gh_ok, gh_msg = check_gh_available()
    if not gh_ok:
        print(f"ERROR: {gh_msg}")
        return EXIT_ERROR

    if not args.no_pull:
        print("Updating RFC repository...")
        engine.source.sync()

    report = engine.scan_merged(force=args.force)

    print(f"Created:     {len(report.created)}")
    if report.overwritten:
        print(f"Overwritten: {len(report.overwritten)}")
    print(f"Unchanged:   {len(report.skipped)}")
    for number in report.changed:
        print(f"  RFC {number}")
    return 0
