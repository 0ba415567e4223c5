#!/usr/bin/env python3
"""rfcindex CLI entrypoint."""

import argparse
import logging
import sys
from pathlib import Path

from rfcindex import __version__
from rfcindex.git.source import SourceRepository
from rfcindex.lib.config import IndexConfig, load_index_config, load_label_rules
from rfcindex.lib.constants import EXIT_ERROR, EXIT_MISSING_METADATA
from rfcindex.lib.errors import MetadataError, MetadataNotFound, MissingMetadata
from rfcindex.lib.github import GitHubLabelTracker
from rfcindex.lib.stats import MISSING_FIELDS
from rfcindex.metadata.engine import ReconciliationEngine
from rfcindex.metadata.records import RecordStore
from rfcindex.metadata.tags import TagDictionaryStore
from rfcindex.commands import add as cmd_add_module
from rfcindex.commands import set as cmd_set_module
from rfcindex.commands import get as cmd_get_module
from rfcindex.commands import delete as cmd_delete_module
from rfcindex.commands import scan as cmd_scan_module
from rfcindex.commands import tags as cmd_tags_module
from rfcindex.commands import init_tags as cmd_init_tags_module
from rfcindex.commands import stats as cmd_stats_module
from rfcindex.commands import list as cmd_list_module
from rfcindex.commands import check as cmd_check_module

CHECK_KINDS = ["number_mismatch", "missing_title", "no_teams", "no_tags", "unknown_tag"]


def build_engine(config: IndexConfig) -> ReconciliationEngine:
    """Wire stores, source repository and tracker from config."""
    return ReconciliationEngine(
        records=RecordStore(config.metadata_dir),
        tags=TagDictionaryStore(config.metadata_dir),
        source=SourceRepository(
            config.working_dir,
            config.git_url,
            branch=config.git_branch,
            text_dir=config.text_dir,
            timeout=config.git_timeout,
        ),
        tracker=GitHubLabelTracker(config.github_repo, timeout=config.gh_timeout),
        label_rules=load_label_rules(config.root),
    )


def run_command(args, command) -> int:
    """Load config, build the engine and run command, mapping errors to exit codes."""
    try:
        config = load_index_config(Path(args.root))
        engine = build_engine(config)
        return command(args, engine)
    except (MetadataNotFound, MissingMetadata) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_MISSING_METADATA
    except MetadataError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_ERROR
    except ValueError as e:
        print(f"ERROR: Invalid configuration: {e}", file=sys.stderr)
        return EXIT_ERROR


def cmd_add(args):
    return run_command(args, cmd_add_module.cmd_add)


def cmd_set(args):
    return run_command(args, cmd_set_module.cmd_set)


def cmd_get(args):
    return run_command(args, cmd_get_module.cmd_get)


def cmd_delete(args):
    return run_command(args, cmd_delete_module.cmd_delete)


def cmd_scan(args):
    return run_command(args, cmd_scan_module.cmd_scan)


def cmd_tags(args):
    return run_command(args, cmd_tags_module.cmd_tags)


def cmd_init_tags(args):
    return run_command(args, cmd_init_tags_module.cmd_init_tags)


def cmd_stats(args):
    return run_command(args, cmd_stats_module.cmd_stats)


def cmd_list(args):
    return run_command(args, cmd_list_module.cmd_list)


def cmd_check(args):
    return run_command(args, cmd_check_module.cmd_check)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid RFC number: '{value}'") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"RFC number must be positive: {number}")
    return number


def add_record_fields(parser, required: bool) -> None:
    """Field flags shared by add and set."""
    parser.add_argument('--filename', '-f', required=required, help='Source filename, e.g. 0050-foo.md')
    parser.add_argument('--start-date', required=required, help='Start date (free text)')
    parser.add_argument('--merge-date', help='Merge date (free text)')
    parser.add_argument('--feature-name', help='Feature names, e.g. "foo, bar"')
    parser.add_argument('--issues', help='Tracking issues, e.g. "#123 and #456"')
    parser.add_argument('--title', '-t', help='Human title')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='rfcindex', description='Maintain the RFC index metadata')
    parser.add_argument('--root', '-r', default='.', help='Index root (holds rfcindex.env and metadata/)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Log progress')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    subparsers = parser.add_subparsers(dest='command', required=True)

    # rfcindex add
    p_add = subparsers.add_parser('add', help='Add metadata for an RFC')
    p_add.add_argument('number', type=positive_int, help='RFC number')
    add_record_fields(p_add, required=True)
    p_add.add_argument('--force', action='store_true', help='Overwrite existing metadata')
    p_add.set_defaults(func=cmd_add)

    # rfcindex set
    p_set = subparsers.add_parser('set', help='Update metadata fields of an RFC')
    p_set.add_argument('number', type=positive_int, help='RFC number')
    add_record_fields(p_set, required=False)
    p_set.add_argument('--teams', help='Replace teams, e.g. "lang, libs"')
    p_set.add_argument('--tags', help='Replace tags, e.g. "A-traits A-closures"')
    p_set.set_defaults(func=cmd_set)

    # rfcindex get
    p_get = subparsers.add_parser('get', help='Query metadata of an RFC')
    p_get.add_argument('number', type=positive_int, help='RFC number')
    p_get.add_argument('--verbose', '-v', dest='field_names', action='store_true',
                       help='Prefix values with field names')
    for name in cmd_get_module.GET_FIELDS:
        p_get.add_argument(f"--{name.replace('_', '-')}", dest=name, action='store_true',
                           help=f'Print {name}')
    p_get.set_defaults(func=cmd_get)

    # rfcindex delete
    p_delete = subparsers.add_parser('delete', help='Delete metadata of an RFC')
    p_delete.add_argument('number', type=positive_int, help='RFC number')
    p_delete.set_defaults(func=cmd_delete)

    # rfcindex scan
    p_scan = subparsers.add_parser('scan', help='Create metadata for merged RFCs from the RFC repository')
    p_scan.add_argument('--force', action='store_true', help='Rebuild existing metadata too')
    p_scan.add_argument('--no-pull', action='store_true', help='Use the working copy as is')
    p_scan.set_defaults(func=cmd_scan)

    # rfcindex tags
    p_tags = subparsers.add_parser('tags', help='Add a tag or refresh teams/tags from labels')
    p_tags.add_argument('numbers', nargs='*', help='RFC numbers (all if omitted)')
    p_tags.add_argument('--add', '-a', metavar='TAG', help='Tag to add')
    p_tags.add_argument('--scan', action='store_true', help='Refresh empty teams/tags from labels')
    p_tags.add_argument('--all', action='store_true', help='With --scan, overwrite non-empty teams/tags')
    p_tags.set_defaults(func=cmd_tags)

    # rfcindex init-tags
    p_init = subparsers.add_parser('init-tags', help='Rebuild the tag dictionary from labels')
    p_init.add_argument('--no-pull', action='store_true', help='Use the working copy as is')
    p_init.set_defaults(func=cmd_init_tags)

    # rfcindex stats
    p_stats = subparsers.add_parser('stats', help='Show index statistics')
    p_stats.add_argument('--top', type=int, default=10, help='Number of tags to show')
    p_stats.set_defaults(func=cmd_stats)

    # rfcindex list
    p_list = subparsers.add_parser('list', help='List RFCs')
    p_list.add_argument('--team', help='Only RFCs owned by team')
    p_list.add_argument('--tag', help='Only RFCs with tag')
    p_list.add_argument('--missing', choices=MISSING_FIELDS, help='Only RFCs with this field empty')
    p_list.set_defaults(func=cmd_list)

    # rfcindex check
    p_check = subparsers.add_parser('check', help='Report metadata inconsistencies')
    p_check.add_argument('--kind', action='append', choices=CHECK_KINDS, help='Only report this kind')
    p_check.set_defaults(func=cmd_check)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return args.func(args)


if __name__ == '__main__':
    sys.exit(main())
