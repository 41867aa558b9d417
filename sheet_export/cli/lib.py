"""Command line interface for sheet-export.

Reads a JSON snapshot from disk and exports one of its components, prints
its tree, validates it, or lists the configuration variables.

Example:
    $ sheet-export react sheet.json --dialect css-modules -o Sheet.tsx
    $ sheet-export tree sheet.json --target card
    $ sheet-export validate sheet.json
"""

import argparse
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

from sheet_export.config import (
    get_environment,
    get_environment_info,
    get_log_level,
    list_environment_variables,
)
from sheet_export.core import ExportError, InputError, get_logger, setup_logging
from sheet_export.export import ExportFormat
from sheet_export.output import OutputGenerator, format_component_tree
from sheet_export.providers import get_provider
from sheet_export.schema import ComponentTree, load_tree
from sheet_export.validation import validate_tree
from sheet_export.walker import walk

logger = get_logger("cli")


# =============================================================================
# Helpers
# =============================================================================


def _read_snapshot(path: Path) -> ComponentTree:
    """Load and validate a JSON snapshot file.

    Raises:
        InputError: If the file cannot be read or is not a valid snapshot.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise InputError(f"Cannot read snapshot {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise InputError(f"Snapshot {path} is not valid JSON: {e}") from e
    return load_tree(data)


def _pick_target(tree: ComponentTree, target: str | None) -> str:
    """Return the requested target, or the first root of the snapshot."""
    if target:
        return target
    if not tree.root_ids:
        raise InputError("Snapshot has no root component; pass --target")
    return tree.root_ids[0]


# =============================================================================
# Commands
# =============================================================================


def cmd_export(args: argparse.Namespace) -> int:
    """Handle the svg, react and flutter commands."""
    try:
        tree = _read_snapshot(args.snapshot)
        target = _pick_target(tree, args.target)
        generator = OutputGenerator(default_format=args.command)
        output = generator.generate(target, tree, option=getattr(args, "option", None))
    except ExportError as e:
        logger.error(f"Export failed: {e}")
        return 1

    if args.summary:
        print(output.text_tree, file=sys.stderr)
        print(
            f"{len(output.warnings)} warning(s), "
            f"{output.provider}/{output.option}",
            file=sys.stderr,
        )

    if args.output:
        args.output.write_text(output.code, encoding="utf-8")
        logger.info(f"{output.provider} output saved to {args.output}")
    else:
        print(output.code, end="")
    return 0


def cmd_tree(args: argparse.Namespace) -> int:
    """Handle the tree command."""
    try:
        tree = _read_snapshot(args.snapshot)
        result = walk(_pick_target(tree, args.target), tree)
    except ExportError as e:
        logger.error(f"Cannot walk snapshot: {e}")
        return 1

    print(format_component_tree(result))
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle the validate command."""
    try:
        tree = _read_snapshot(args.snapshot)
    except ExportError as e:
        logger.error(f"Invalid snapshot: {e}")
        return 1

    errors = validate_tree(tree)
    if not errors:
        print(f"{args.snapshot}: {len(tree)} components, no problems found")
        return 0

    for error in errors:
        print(f"{error.node_id}: [{error.error_type}] {error.message}")
    print(f"{len(errors)} problem(s) found")
    return 1


def cmd_env(args: argparse.Namespace) -> int:
    """Handle the env command."""
    variables = list_environment_variables(args.category)
    if not variables:
        logger.error(f"Unknown category: {args.category}")
        return 1

    category = None
    for var in variables:
        info = get_environment_info(var)
        if info.category != category:
            category = info.category
            print(f"\n[{category}]")
        print(f"  {info.name}={get_environment(var)}")
        print(f"      {info.description} (default: {info.default})")
    return 0


# =============================================================================
# Parser
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="sheet-export",
        description="Export bottom-sheet component trees as SVG, React or Flutter",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    for export_format in ExportFormat:
        provider = get_provider(export_format.value)
        export_parser = subparsers.add_parser(
            export_format.value,
            help=f"Export a component as {export_format.value}",
        )
        _add_snapshot_arguments(export_parser)
        if export_format == ExportFormat.REACT:
            export_parser.add_argument(
                "--dialect",
                "-d",
                dest="option",
                choices=provider.options,
                default=None,
                help="Styling dialect (default: SHEET_EXPORT_REACT_DIALECT)",
            )
        elif export_format == ExportFormat.FLUTTER:
            export_parser.add_argument(
                "--theme",
                dest="option",
                choices=provider.options,
                default=None,
                help="Widget theme (default: SHEET_EXPORT_FLUTTER_THEME)",
            )
        export_parser.add_argument(
            "--output",
            "-o",
            type=Path,
            default=None,
            help="Output file path (prints to stdout if not specified)",
        )
        export_parser.add_argument(
            "--summary",
            "-s",
            action="store_true",
            help="Print the component tree and warning count to stderr",
        )
        export_parser.set_defaults(func=cmd_export)

    tree_parser = subparsers.add_parser(
        "tree",
        help="Print the component tree under a target",
    )
    _add_snapshot_arguments(tree_parser)
    tree_parser.set_defaults(func=cmd_tree)

    validate_parser = subparsers.add_parser(
        "validate",
        help="Report structural problems in a snapshot",
    )
    validate_parser.add_argument(
        "snapshot",
        type=Path,
        help="JSON snapshot file",
    )
    validate_parser.set_defaults(func=cmd_validate)

    env_parser = subparsers.add_parser(
        "env",
        help="List configuration variables and their current values",
    )
    env_parser.add_argument(
        "--category",
        "-c",
        type=str,
        default=None,
        help="Only show one category (logging, react, flutter, svg)",
    )
    env_parser.set_defaults(func=cmd_env)

    return parser


def _add_snapshot_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "snapshot",
        type=Path,
        help="JSON snapshot file",
    )
    parser.add_argument(
        "--target",
        "-t",
        type=str,
        default=None,
        help="Component id to export (default: first root)",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    load_dotenv()
    setup_logging(get_log_level())

    parser = build_parser()
    try:
        args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    except SystemExit as e:
        # argparse exits 0 for --help and 2 for usage errors
        return 1 if e.code else 0

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


__all__ = [
    "build_parser",
    "main",
]
