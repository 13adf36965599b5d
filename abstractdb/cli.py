#!/usr/bin/env python
# ============================================================================
# SCHEMA COMPILER CLI
# ============================================================================
# EPOCH: 1 - ABSTRACT SCHEMA
# PURPOSE: Compile GraphQL SDL files into an abstract database JSON document
# USAGE:
#   abstractdb compile schema.graphql                 # JSON to stdout
#   abstractdb compile a.graphql b.graphql -o db.json # Several SDL files
#   abstractdb compile schema.graphql --strict        # Fail on diagnostics
# ============================================================================

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from abstractdb.__version__ import __version__
from abstractdb.config import CompilerOptions
from abstractdb.contracts import SchemaInputError
from abstractdb.logging import ComponentType, configure_logging, get_logger
from abstractdb.schema import LoggingDiagnosticSink, generate_abstract_database

logger = get_logger("abstractdb.cli", ComponentType.CLI)

EXIT_OK = 0
EXIT_DIAGNOSTICS = 1
EXIT_INPUT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="abstractdb",
        description="Compile annotated GraphQL schemas into abstract relational schemas",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  abstractdb compile schema.graphql                  # Print JSON
  abstractdb compile schema.graphql -o database.json # Write JSON file
  abstractdb compile schema.graphql --map-lists-to-json

Environment Variables:
  SCHEMA_NORMALIZE_NAMES        Lowercase derived identifiers (default: true)
  SCHEMA_MAP_LISTS_TO_JSON      Store scalar lists as json (default: false)
  SCHEMA_ANNOTATION_NAMESPACE   Annotation namespace (default: db)
  LOG_FORMAT                    "json" for structured log output
        """
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    compile_parser = subparsers.add_parser("compile", help="Compile SDL files")
    compile_parser.add_argument(
        "schema",
        nargs="+",
        type=Path,
        help="GraphQL SDL file(s); several files are concatenated"
    )
    compile_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Write JSON here instead of stdout"
    )
    compile_parser.add_argument(
        "--no-normalize-names",
        action="store_true",
        help="Keep the case of type and field names"
    )
    compile_parser.add_argument(
        "--map-lists-to-json",
        action="store_true",
        help="Store scalar/enum lists as json columns instead of dropping them"
    )
    compile_parser.add_argument(
        "--namespace",
        help="Annotation namespace (default: db)"
    )
    compile_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any diagnostic was reported"
    )
    compile_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging"
    )
    compile_parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit logs as JSON"
    )
    return parser


def _options_from_args(args: argparse.Namespace) -> CompilerOptions:
    base = CompilerOptions.from_env()
    return CompilerOptions(
        normalize_names=base.normalize_names and not args.no_normalize_names,
        map_lists_to_json=base.map_lists_to_json or args.map_lists_to_json,
        annotation_namespace=args.namespace or base.annotation_namespace,
    )


def run_compile(args: argparse.Namespace) -> int:
    try:
        sources = [path.read_text(encoding="utf-8") for path in args.schema]
    except OSError as e:
        logger.error(f"Cannot read schema: {e}")
        return EXIT_INPUT_ERROR

    diagnostics = LoggingDiagnosticSink()
    try:
        database = generate_abstract_database(
            "\n".join(sources),
            _options_from_args(args),
            diagnostics=diagnostics,
        )
    except SchemaInputError as e:
        logger.error(str(e))
        return EXIT_INPUT_ERROR

    document = json.dumps(database.to_dict(), indent=2)
    if args.output:
        args.output.write_text(document + "\n", encoding="utf-8")
        logger.info(f"Wrote {len(database.tables)} tables to {args.output}")
    else:
        sys.stdout.write(document + "\n")

    if args.strict and diagnostics.count:
        logger.error(f"{diagnostics.count} diagnostic(s) reported")
        return EXIT_DIAGNOSTICS
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        level="DEBUG" if args.verbose else "INFO",
        json_output=args.json_logs,
    )

    if args.command == "compile":
        return run_compile(args)
    parser.error(f"Unknown command {args.command}")
    return EXIT_INPUT_ERROR


if __name__ == "__main__":
    sys.exit(main())
