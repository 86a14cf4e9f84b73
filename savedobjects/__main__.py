"""
Build and check the mapping of the saved objects index
"""

import argparse
import asyncio
import inspect
import json
import logging
import sys
from pathlib import Path

from savedobjects.config import ENV_PREFIX, PERMISSION_FLAG, WORKSPACE_FLAG, FeatureFlags, feature_flags, get_settings
from savedobjects.elastic import check_index_mapping, close_elastic, mapping_from_response
from savedobjects.mappings import MappingDiff, MappingError, build_active_mappings, diff_mappings

# exit status if the mapping differs, so scripts can tell it apart from errors (1)
EXIT_DIFFERENT = 2


def read_json(path: str) -> dict:
    with Path(path).open(encoding="utf-8") as f:
        return json.load(f)


def flags_from_args(args) -> FeatureFlags:
    """Feature flags from settings, with --permissions / --workspaces forcing them on"""
    from_settings = feature_flags()
    forced = {PERMISSION_FLAG: args.permissions, WORKSPACE_FLAG: args.workspaces}

    def has_flag(name: str) -> bool:
        return forced.get(name, False) or from_settings(name)

    return has_flag


def report(diff: MappingDiff | None) -> int:
    if diff is None:
        print("Mapping is up to date")
        return 0
    print(f"Mapping differs: {diff.changed_prop}")
    return EXIT_DIFFERENT


def build(args) -> int:
    mapping = build_active_mappings(read_json(args.types), flags_from_args(args))
    print(json.dumps(mapping, indent=2))
    return 0


def diff(args) -> int:
    expected = build_active_mappings(read_json(args.types), flags_from_args(args))
    # accept a saved get_mapping response as well
    actual = mapping_from_response(read_json(args.actual)) or {}
    return report(diff_mappings(actual, expected))


async def check(args) -> int:
    index = args.index or get_settings().index
    try:
        return report(await check_index_mapping(index, read_json(args.types), flags_from_args(args)))
    finally:
        await close_elastic()


def config(args) -> int:
    # Echo the settings
    for k, v in get_settings().model_dump().items():
        print(f"{ENV_PREFIX.upper()}{k.upper()}={v}")
    return 0


def _add_flag_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("--permissions", action="store_true", help="Add the permissions field (overrides settings)")
    p.add_argument("--workspaces", action="store_true", help="Add the workspaces field (overrides settings)")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__, prog="python -m savedobjects")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")

    subparsers = parser.add_subparsers(dest="action", title="action", help="Action to perform:", required=True)
    p = subparsers.add_parser("build", help="Print the active mapping for the given type definitions")
    p.add_argument("types", help="JSON file with the type mappings, keyed by type name")
    _add_flag_arguments(p)
    p.set_defaults(func=build)

    p = subparsers.add_parser("diff", help="Check whether a stored mapping needs to be migrated")
    p.add_argument("actual", help="JSON file with the stored mapping")
    p.add_argument("types", help="JSON file with the type mappings, keyed by type name")
    _add_flag_arguments(p)
    p.set_defaults(func=diff)

    p = subparsers.add_parser("check", help="Check whether the mapping of the live index needs to be migrated")
    p.add_argument("types", help="JSON file with the type mappings, keyed by type name")
    p.add_argument("-i", "--index", help="The index to check (default: from settings)")
    _add_flag_arguments(p)
    p.set_defaults(func=check)

    p = subparsers.add_parser("config", help="Show the current settings")
    p.set_defaults(func=config)

    args = parser.parse_args(argv)

    logging.basicConfig(
        format="[%(levelname)-7s:%(name)-15s] %(message)s", level=logging.DEBUG if args.verbose else logging.INFO
    )
    es_logger = logging.getLogger("elasticsearch")
    es_logger.setLevel(logging.WARNING)

    try:
        if inspect.iscoroutinefunction(args.func):
            return asyncio.run(args.func(args))
        else:
            return args.func(args)
    except MappingError as e:
        logging.error(f"Invalid type mappings: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
