"""
rfcindex list - List RFCs, optionally filtered by team, tag or missing field.
"""

from rfcindex.lib.stats import filter_records
from rfcindex.metadata.engine import ReconciliationEngine
from rfcindex.metadata.models import Team, tag_display


def cmd_list(args, engine: ReconciliationEngine) -> int:
    team = Team.parse(args.team) if args.team else None
    records = filter_records(engine.all_records(), team=team, tag=args.tag, missing=args.missing)

    for r in records:
        title = r.display_title
        title = title[:40] + "..." if len(title) > 40 else title
        teams = ",".join(t.value for t in r.teams) or "-"
        tags = ",".join(tag_display(t) for t in r.tags)
        print(f"  {r.number:>4}  {title:<44} {teams:<14} {tags}")

    print()
    print(f"{len(records)} RFC(s)")
    return 0
