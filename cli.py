#!/usr/bin/env python3
"""
file-tgf CLI

A tool for scanning a directory tree for identifier references with
regular expressions and writing the resulting graph in Trivial Graph
Format (TGF).
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Set

from scanner.builder import scan_to_tgf
from scanner.config import ConfigError, load_config
from scanner.discovery import DEFAULT_EXCLUDE_DIRS, normalize_extensions
from scanner.resolver import ExtractionRule, PatternError


def parse_args(args=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="file-tgf",
        description="Scan a directory tree for identifier references and print the graph as TGF.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  file-tgf 'use crate::(\\w+)'               # Which file uses which module
  file-tgf '(\\w+)\\(' -i src --include-ext .py  # Call-like mentions in Python files
  file-tgf '.*' -m                           # Keep duplicate edges
  file-tgf 'import (\\S+)' -o graph.tgf      # Append the document to a file
  file-tgf -c rules.yaml                     # Read options from a YAML rules file
        """,
    )

    # Positional arguments
    parser.add_argument(
        "extract_regex",
        nargs="?",
        default=None,
        help="Regex extracting target node names from each line; the first capture group is used if present",
    )

    # Input/output options
    parser.add_argument(
        "-i", "--input",
        type=str,
        default=None,
        help="Directory to scan (default: current directory)",
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Append the output to this file (default: stdout)",
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="YAML rules file; command line options take precedence",
    )

    # Extraction options
    parser.add_argument(
        "--extract-replace",
        type=str,
        default=None,
        help="Regex applied to each extracted name; matches are replaced with --extract-replacement",
    )

    parser.add_argument(
        "--extract-replacement",
        type=str,
        default=None,
        help="Replacement text for --extract-replace (default: empty)",
    )

    parser.add_argument(
        "--path-regex",
        type=str,
        default=None,
        help="Regex extracting a file's node name from its relative path (default: the file stem)",
    )

    parser.add_argument(
        "--path-replace",
        type=str,
        default=None,
        help="Regex applied to each file's node name; matches are replaced with --path-replacement",
    )

    parser.add_argument(
        "--path-replacement",
        type=str,
        default=None,
        help="Replacement text for --path-replace (default: empty)",
    )

    parser.add_argument(
        "-m", "--multiple",
        action="store_true",
        default=None,
        help="Allow multiple edges with the same source and target node",
    )

    parser.add_argument(
        "--keep-hashes",
        action="store_true",
        default=None,
        help="Do not strip '#' from node names (may produce ambiguous TGF)",
    )

    # Scanning options
    parser.add_argument(
        "--include-ext",
        nargs="+",
        default=None,
        help="File extensions to include (default: all files)",
    )

    parser.add_argument(
        "--exclude-dir",
        nargs="+",
        default=None,
        help="Additional directory names to exclude",
    )

    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        help="Maximum directory depth to scan",
    )

    return parser.parse_args(args)


def merge_options(parsed: argparse.Namespace, config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Combine command line options with values from a rules file.

    Options given on the command line win; the rules file fills in the rest.
    """
    options: Dict[str, Any] = dict(config)
    for key, value in vars(parsed).items():
        if key == "config":
            continue
        if value is not None:
            options[key] = value
    return options


def build_rules(options: Dict[str, Any]):
    """
    Compile the extraction and path rules from merged options.

    Returns:
        Tuple of (extract_rule, path_rule). path_rule has no pattern when
        no path regex is configured, in which case file stems are used.

    Raises:
        PatternError: If any configured pattern is invalid.
    """
    strip_hashes = not options.get("keep_hashes", False)

    extract_rule = ExtractionRule(
        pattern=options["extract_regex"],
        replace=options.get("extract_replace"),
        replacement=options.get("extract_replacement") or "",
        strip_hashes=strip_hashes,
        option="extract",
    )

    path_rule = ExtractionRule(
        pattern=options.get("path_regex"),
        replace=options.get("path_replace"),
        replacement=options.get("path_replacement") or "",
        strip_hashes=strip_hashes,
        option="path",
    )

    return extract_rule, path_rule


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    # Load the rules file, if any
    config: Dict[str, Any] = {}
    if parsed.config:
        try:
            config = load_config(parsed.config)
        except ConfigError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    options = merge_options(parsed, config)

    if not options.get("extract_regex"):
        print("Error: an extract regex is required (argument or 'extract_regex' in the rules file)", file=sys.stderr)
        return 1

    # Compile every pattern before scanning
    try:
        extract_rule, path_rule = build_rules(options)
    except PatternError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Resolve paths
    root = Path(options.get("input") or ".").resolve()
    if not root.is_dir():
        print(f"Error: '{options.get('input')}' is not a directory", file=sys.stderr)
        return 1

    # Prepare scanning options
    include_ext = normalize_extensions(options.get("include_ext"))

    exclude_dirs: Optional[Set[str]] = None
    if options.get("exclude_dir"):
        exclude_dirs = set(options["exclude_dir"]) | DEFAULT_EXCLUDE_DIRS

    output = scan_to_tgf(
        root=root,
        extract_rule=extract_rule,
        path_rule=path_rule,
        multiple=bool(options.get("multiple", False)),
        include_ext=include_ext,
        exclude_dirs=exclude_dirs,
        max_depth=options.get("max_depth"),
    )

    # Write output
    if options.get("output"):
        try:
            output_path = Path(options["output"])
            with output_path.open("a", encoding="utf-8") as handle:
                handle.write(output)
            print(f"Output written to: {output_path}", file=sys.stderr)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        sys.stdout.write(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
