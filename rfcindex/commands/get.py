"""
rfcindex get - Print fields of an RFC's metadata.
"""

from rfcindex.metadata.engine import ReconciliationEngine

GET_FIELDS = (
    "filename",
    "start_date",
    "merge_date",
    "feature_name",
    "issues",
    "title",
    "teams",
    "tags",
)


def format_value(value) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return "[" + ", ".join(str(v) for v in value) + "]"
    return str(value)


def cmd_get(args, engine: ReconciliationEngine) -> int:
    """Print requested fields, or all of them if none are requested.

    Non-verbose output prints bare values, one per line, for scripting.
    """
    record = engine.record(args.number)

    requested = [name for name in GET_FIELDS if getattr(args, name, False)]
    verbose = args.field_names or not requested
    fields = requested or list(GET_FIELDS)

    if verbose and not requested:
        print(f"RFC {record.number}: {record.display_title}")
        print("=" * 60)

    for name in fields:
        value = format_value(getattr(record, name))
        if verbose:
            print(f"{name}: {value}")
        else:
            print(value)
    return 0
