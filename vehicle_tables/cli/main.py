"""
Vehicle Tables CLI.

Converts vehicle component tables into a JSON document:

  vehicle-tables "data/**/*.lua" out/components.json

Writes the compact document to the output path and an indented copy to
``<stem>.debug.json`` beside it.
"""

import argparse
import logging
import sys

from vehicle_tables.ingest.parse_config import (
    ProfileError,
    load_parse_config,
    profile_from_env,
)
from vehicle_tables.ingest.pipeline import (
    ConversionError,
    convert_pattern,
    write_outputs,
)
from vehicle_tables.ingest.validate import DocumentValidationError


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def convert_cmd(args) -> int:
    """Convert every file matching the input pattern."""
    try:
        config = load_parse_config(args.profile or profile_from_env())
    except ProfileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Converting {args.input} to {args.output}...")

    try:
        result = convert_pattern(args.input, config)
        output_path, debug_path = write_outputs(
            result, args.output, strict=args.strict
        )
    except DocumentValidationError as e:
        print(f"Error: output failed validation: {e}", file=sys.stderr)
        return 1
    except ConversionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    counts = result.count
    print(f"Successfully wrote {output_path} (debug copy: {debug_path})")
    print(f"  Sources merged: {len(result.sources)}")
    print(f"  Guns:    {counts['guns']}")
    print(f"  Turrets: {counts['turrets']}")
    print(f"  Hulls:   {counts['hulls']}")
    print(f"  Total:   {counts['total']}")
    return 0


def build_parser():
    parser = argparse.ArgumentParser(
        prog="vehicle-tables",
        description="Convert vehicle component tables (guns, turrets, hulls) to JSON",
    )
    parser.add_argument(
        "input",
        help="Input file or glob pattern (quote it; ** is supported)",
    )
    parser.add_argument(
        "output",
        help="Output JSON path; a .debug copy is written beside it",
    )
    parser.add_argument(
        "--profile",
        default=None,
        help="Parse profile YAML merged over the base profile "
             "(default: $VEHICLE_TABLES_PROFILE)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Validate the document against the output schema before writing",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every component, section and shell found",
    )
    parser.set_defaults(func=convert_cmd)
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
