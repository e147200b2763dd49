"""Command line interface for building and maintaining lexicon databases."""
from __future__ import annotations

import argparse
import logging
import sys

from .builder.build import (
    create_lexicon_database,
    fix_definitions,
    fix_lexicon_symbols,
)
from .common.config import get_config_paths, load_environment
from .db.migrate import migrate_lexicon_database
from .db.schema import CURRENT_VERSION
from .errors import LexiconDbError
from .lexicon.registry import LexiconRegistry

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def _load_registry(args: argparse.Namespace) -> LexiconRegistry:
    return LexiconRegistry.load(args.registry_path)


def _run_build(args: argparse.Namespace) -> int:
    registry = _load_registry(args)
    built = 0
    for name in args.lexica:
        summary = create_lexicon_database(
            name,
            registry,
            args.output_path,
            quit_if_exists=not args.force,
            progress=not args.no_progress,
        )
        built += 1
        print(
            "[{}] {} alphagrams, {} words, {} deleted -> {}".format(
                summary.lexicon,
                summary.alphagrams,
                summary.words,
                summary.deleted,
                summary.path,
            )
        )
    return built


def _run_migrate(args: argparse.Namespace) -> int:
    registry = _load_registry(args)
    for name in args.lexica:
        result = migrate_lexicon_database(name, registry, args.output_path)
        if result.migrated:
            print(f"[{name}] migrated version {result.start_version} -> {result.version}")
        else:
            print(f"[{name}] already at version {result.version}")
        if not result.up_to_date:
            print(f"[{name}] run again to continue towards version {CURRENT_VERSION}")
    return len(args.lexica)


def _run_fix_definitions(args: argparse.Namespace) -> int:
    registry = _load_registry(args)
    for name in args.lexica:
        count = fix_definitions(name, registry, args.output_path)
        print(f"[{name}] updated definitions for {count} words")
    return len(args.lexica)


def _run_fix_symbols(args: argparse.Namespace) -> int:
    registry = _load_registry(args)
    for name in args.lexica:
        count = fix_lexicon_symbols(name, registry, args.output_path)
        print(f"[{name}] recomputed lexicon symbols for {count} alphagrams")
    return len(args.lexica)


def _run_list(args: argparse.Namespace) -> int:
    registry = _load_registry(args)
    header = f"{'Lexicon':<12} | {'Family':<6} | {'Order':>5} | Prior"
    print(header)
    print("-" * len(header))
    for family in registry.families:
        for lex in registry.editions(family.name):
            prior = registry.prior_edition(family.name, lex.name)
            print(
                f"{lex.name:<12} | {family.name:<6} | {lex.order:>5} | "
                f"{prior.name if prior else '-'}"
            )
    return len(registry.lexica)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lexicon-db",
        description="Build and migrate SQLite word databases for lexica",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--registry",
        default=None,
        help="Lexicon registry JSON (default: $LEXICON_DB_REGISTRY or ./lexica.json)",
    )
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory holding <LEXICON>.db files (default: $LEXICON_DB_OUTPUT_DIR or cwd)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Create databases from word lists")
    build.add_argument("lexica", nargs="+", help="Lexicon names from the registry")
    build.add_argument(
        "--force", action="store_true", help="Overwrite databases that already exist"
    )
    build.add_argument("--no-progress", action="store_true", help="Hide progress bars")
    build.set_defaults(handler=_run_build)

    migrate = subparsers.add_parser(
        "migrate", help="Advance existing databases by one schema version"
    )
    migrate.add_argument("lexica", nargs="+", help="Lexicon names from the registry")
    migrate.set_defaults(handler=_run_migrate)

    fixdefs = subparsers.add_parser(
        "fix-definitions", help="Reload definitions from the word list"
    )
    fixdefs.add_argument("lexica", nargs="+", help="Lexicon names from the registry")
    fixdefs.set_defaults(handler=_run_fix_definitions)

    fixsyms = subparsers.add_parser(
        "fix-symbols", help="Recompute lexicon symbols and provenance flags"
    )
    fixsyms.add_argument("lexica", nargs="+", help="Lexicon names from the registry")
    fixsyms.set_defaults(handler=_run_fix_symbols)

    listing = subparsers.add_parser("list", help="Show registered lexica")
    listing.set_defaults(handler=_run_list)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    load_environment()

    paths = get_config_paths(args.registry, args.output_dir)
    args.registry_path = paths["registry"]
    args.output_path = paths["output_dir"]

    try:
        args.handler(args)
    except (LexiconDbError, OSError, ValueError) as error:
        logger.error("Command failed: %s", error, extra={"command": args.command})
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
