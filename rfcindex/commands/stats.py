"""
rfcindex stats - Summarize the metadata index.
"""

from rfcindex.lib.stats import format_stats_summary, summarize
from rfcindex.metadata.engine import ReconciliationEngine


def cmd_stats(args, engine: ReconciliationEngine) -> int:
    stats = summarize(engine.all_records())
    print("RFC index")
    print("-" * 60)
    for line in format_stats_summary(stats, top_tags=args.top):
        print(line)
    return 0
