"""Main CLI entry point for the simple-xml command-line tool.

Provides event listings, DOM dumps, re-serialization, syntax checking and
profiling of documents written in the simplified XML dialect.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from simple_xml_parser import __version__
from simple_xml_parser.api.parser import XMLParser
from simple_xml_parser.dom.serializer import XMLSerializer
from simple_xml_parser.parsing.events import EventPrinter
from simple_xml_parser.shared.config import ConfigError, SerializerConfig, XMLConfig
from simple_xml_parser.shared.errors import SerializationError
from simple_xml_parser.shared.logging import get_logger
from simple_xml_parser.shared.result import ParseResult
from simple_xml_parser.tools.profiling import ParseProfiler

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2

logger = get_logger(__name__, None, "cli")


def non_negative_int(value: str) -> int:
    """argparse type for counts that may be zero but not negative."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="simple-xml",
        description="Callback-driven parser and DOM tools for a simplified XML dialect"
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--config", "-c",
        type=Path,
        help="JSON configuration file"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    events_parser = subparsers.add_parser("events", help="Print the parse events of a file")
    events_parser.add_argument("path", type=Path, help="XML file ('-' for stdin)")

    tree_parser = subparsers.add_parser("tree", help="Print the DOM tree of a file")
    tree_parser.add_argument("path", type=Path, help="XML file ('-' for stdin)")
    tree_parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )

    format_parser = subparsers.add_parser("format", help="Parse and re-serialize a file")
    format_parser.add_argument("path", type=Path, help="XML file ('-' for stdin)")
    format_parser.add_argument(
        "--indent", "-i",
        type=non_negative_int,
        help="Indent nested tags by this many spaces"
    )
    format_parser.add_argument(
        "--no-declaration",
        action="store_true",
        help="Omit the <?xml?> declaration"
    )
    format_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )

    check_parser = subparsers.add_parser("check", help="Check files for syntax errors")
    check_parser.add_argument("paths", nargs="+", type=Path, help="XML files")
    check_parser.add_argument(
        "--format", "-f",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text)"
    )

    profile_parser = subparsers.add_parser("profile", help="Profile parsing of a file")
    profile_parser.add_argument("path", type=Path, help="XML file ('-' for stdin)")
    profile_parser.add_argument(
        "--iterations", "-n",
        type=int,
        default=10,
        help="Number of parses (default: 10)"
    )

    return parser


def read_input(path: Path) -> str:
    """Read a whole document from ``path`` or stdin for ``-``."""
    if str(path) == "-":
        return sys.stdin.read()
    return path.read_text(encoding="utf-8")


def load_config(config_path: Optional[Path]) -> XMLConfig:
    """Load the configuration file if one was given."""
    if config_path is None:
        return XMLConfig()
    return XMLConfig.from_file(config_path)


def report_failure(path: Path, result: ParseResult) -> None:
    """Print a parse failure to stderr."""
    print(f"{path}: {result.error}", file=sys.stderr)


def cmd_events(args: argparse.Namespace, config: XMLConfig) -> int:
    """Handle events command."""
    result = XMLParser(config).parse(read_input(args.path), EventPrinter(sys.stdout))
    if not result.success:
        report_failure(args.path, result)
        return EXIT_FAILURE
    return EXIT_OK


def cmd_tree(args: argparse.Namespace, config: XMLConfig) -> int:
    """Handle tree command."""
    result = XMLParser(config).parse_to_dom(read_input(args.path))
    if not result.success:
        report_failure(args.path, result)
        return EXIT_FAILURE
    if args.format == "json":
        print(json.dumps(result.document.to_dict(), indent=2))
    else:
        print(result.document.dump())
    return EXIT_OK


def cmd_format(args: argparse.Namespace, config: XMLConfig) -> int:
    """Handle format command."""
    result = XMLParser(config).parse_to_dom(read_input(args.path))
    if not result.success:
        report_failure(args.path, result)
        return EXIT_FAILURE

    serializer_config = SerializerConfig(
        include_declaration=(
            config.serializer.include_declaration and not args.no_declaration
        ),
        indent=args.indent if args.indent is not None else config.serializer.indent,
    )
    try:
        output = XMLSerializer(serializer_config).serialize(result.document)
    except SerializationError as e:
        print(f"{args.path}: {e}", file=sys.stderr)
        return EXIT_FAILURE

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Output written to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(output)
    return EXIT_OK


def check_file(parser: XMLParser, path: Path) -> Dict[str, Any]:
    """Parse one file and describe the outcome."""
    try:
        buffer = read_input(path)
    except OSError as e:
        return {"file": str(path), "valid": False, "error": str(e)}
    result = parser.parse_to_dom(buffer)
    entry: Dict[str, Any] = {"file": str(path), "valid": result.success}
    entry.update(result.summary())
    return entry


def format_check_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format check results for output."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    valid_count = sum(1 for r in results if r["valid"])
    lines = [f"Checked {len(results)} files, {valid_count} valid", "-" * 50]
    for result in results:
        status = "ok" if result["valid"] else "FAIL"
        lines.append(f"{status:4} {result['file']}")
        error = result.get("error")
        if isinstance(error, dict):
            lines.append(f"     line {error['line']}: {error['message']}")
        elif error:
            lines.append(f"     {error}")
    return "\n".join(lines)


def cmd_check(args: argparse.Namespace, config: XMLConfig) -> int:
    """Handle check command."""
    parser = XMLParser(config)
    results = [check_file(parser, path) for path in args.paths]
    print(format_check_results(results, args.format))
    return EXIT_OK if all(r["valid"] for r in results) else EXIT_FAILURE


def cmd_profile(args: argparse.Namespace, config: XMLConfig) -> int:
    """Handle profile command."""
    if args.iterations <= 0:
        print("--iterations must be > 0", file=sys.stderr)
        return EXIT_USAGE
    report = ParseProfiler(config).profile(read_input(args.path), args.iterations)
    print(json.dumps(report.to_dict(), indent=2))
    return EXIT_OK if report.success else EXIT_FAILURE


COMMANDS = {
    "events": cmd_events,
    "tree": cmd_tree,
    "format": cmd_format,
    "check": cmd_check,
    "profile": cmd_profile,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_USAGE

    try:
        config = load_config(args.config)
    except ConfigError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_USAGE

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
    elif args.quiet:
        logging.basicConfig(level=logging.ERROR)
    else:
        logging.basicConfig(level=getattr(logging, config.logging_level))

    try:
        return COMMANDS[args.command](args, config)
    except OSError as e:
        logger.error("Could not read input", extra={"error": str(e)})
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
