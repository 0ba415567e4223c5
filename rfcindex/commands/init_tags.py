"""
rfcindex init-tags - Rebuild the team/tag dictionary from tracker labels.
"""

from rfcindex.lib.constants import EXIT_ERROR
from rfcindex.lib.github import check_gh_available
from rfcindex.metadata.engine import ReconciliationEngine


def cmd_init_tags(args, engine: ReconciliationEngine) -> int:
    """Replace tags.json with tags gathered from every tracked RFC."""
    gh_ok, gh_msg = check_gh_available()
    if not gh_ok:
        print(f"ERROR: {gh_msg}")
        return EXIT_ERROR

    if not args.no_pull:
        print("Updating RFC repository...")
        engine.source.sync()

    entries = engine.init_tag_dictionary()

    print("Tag dictionary")
    print("-" * 60)
    for entry in entries:
        print(f"  {entry.team.value:<10} {len(entry.tags)} tag(s)")
    if not entries:
        print("  (empty - no RFC had exactly one team label)")
    return 0
