"""
rfcindex tags - Add a tag and/or refresh teams and tags from tracker labels.
"""

from rfcindex.lib.constants import EXIT_ERROR
from rfcindex.lib.errors import ParseArgError
from rfcindex.lib.github import check_gh_available
from rfcindex.lib.tokens import parse_multiple
from rfcindex.metadata.engine import ReconciliationEngine


def parse_numbers(values: list[str]) -> list[int]:
    """Parse RFC numbers given as separate args or lists like '12,34'.

    Raises:
        ParseArgError: a token is not a positive integer
    """
    numbers = []
    for value in values:
        for token in parse_multiple(value):
            token = token.lstrip("#")
            if not token.isdigit() or int(token) == 0:
                raise ParseArgError(f"Invalid RFC number: '{token}'")
            numbers.append(int(token))
    return numbers


def cmd_tags(args, engine: ReconciliationEngine) -> int:
    if args.all and not args.scan:
        print("ERROR: --all only applies together with --scan")
        return 1
    if args.add is None and not args.scan:
        print("Nothing to do. Use --add TAG and/or --scan.")
        return 1

    numbers = parse_numbers(args.numbers)
    if args.scan:
        gh_ok, gh_msg = check_gh_available()
        if not gh_ok:
            print(f"ERROR: {gh_msg}")
            return EXIT_ERROR

    changed = engine.update_tags(
        numbers,
        tag=args.add,
        scan=args.scan,
        overwrite_all=args.all,
    )

    print(f"Updated {len(changed)} RFC(s)")
    for number in changed:
        print(f"  RFC {number}")
    return 0
