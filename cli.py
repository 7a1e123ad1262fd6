#!/usr/bin/env python3
"""
Dependency Tree CLI

A tool for listing every file a source file pulls in through its
import/include statements, transitively.
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from walker.builder import resolve_dependency_tree
from walker.errors import DeptreeError
from walker.resolver import absolute_path
from exporters import to_text, to_ascii, to_json


logger = logging.getLogger("deptree")


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="deptree",
        description="List the transitive dependencies of a JavaScript or Sass file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  deptree src/app.js --root src             # One absolute path per line
  deptree src/app.js -f ascii               # Indented dependency tree
  deptree src/app.js -f json -o deps.json   # JSON output to file
  deptree src/app.js --config src/config.js # Resolve RequireJS aliases
  deptree styles/main.scss --relative-to .  # Paths relative to the cwd
        """,
    )

    # Positional arguments
    parser.add_argument(
        "filename",
        help="File whose dependency tree to traverse",
    )

    # Resolution options
    parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Directory non-relative specifiers resolve against (default: the file's directory)",
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Module alias configuration (RequireJS paths/baseUrl as .js, .json, .yaml or .toml)",
    )

    # Output options
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output file (default: stdout)",
    )

    parser.add_argument(
        "-f", "--format",
        choices=["text", "ascii", "json"],
        default="text",
        help="Output format (default: text)",
    )

    # ASCII-specific options
    parser.add_argument(
        "--ascii-style",
        choices=["tree", "ascii"],
        default="tree",
        help="ASCII output style: 'tree' (Unicode) or 'ascii' (pure ASCII)",
    )

    parser.add_argument(
        "--relative-to",
        type=str,
        default=None,
        help="Base path for relative path display",
    )

    parser.add_argument(
        "--show-missing",
        action="store_true",
        help="Show dependencies that resolve to files that do not exist",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v for info, -vv for debug)",
    )

    return parser.parse_args(args)


def configure_logging(verbosity: int) -> None:
    """Send log records to stderr at the requested verbosity."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)
    configure_logging(parsed.verbose)

    filename = Path(absolute_path(parsed.filename))
    if not filename.is_file():
        print(f"Error: '{parsed.filename}' is not a file", file=sys.stderr)
        return 1

    root = Path(absolute_path(parsed.root)) if parsed.root else filename.parent
    if not root.is_dir():
        print(f"Error: '{parsed.root}' is not a directory", file=sys.stderr)
        return 1

    base = absolute_path(parsed.relative_to) if parsed.relative_to else None

    # Walk the tree
    try:
        tree = asyncio.run(
            resolve_dependency_tree(str(filename), str(root), config=parsed.config)
        )
    except DeptreeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info("%s", tree)

    # Generate output
    if parsed.format == "json":
        output = to_json(tree, base=base, include_missing=parsed.show_missing)
    elif parsed.format == "ascii":
        output = to_ascii(
            tree,
            base=base,
            style=parsed.ascii_style,
            include_missing=parsed.show_missing,
        )
    else:  # text (default)
        output = to_text(tree, base=base)

    # Write output
    if parsed.output:
        try:
            output_path = Path(parsed.output)
            output_path.write_text(output + "\n", encoding="utf-8")
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
