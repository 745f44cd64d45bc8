"""replaydict CLI: inspect and verify response dictionaries."""

import argparse
import json
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path


def _dumps(obj) -> str:
    return json.dumps(obj, sort_keys=True, indent=2, ensure_ascii=False)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: '{value}'")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def main():
    """Main CLI entry point for replaydict commands."""
    try:
        replaydict_version = get_version("replaydict")
    except PackageNotFoundError:
        replaydict_version = "dev"

    parser = argparse.ArgumentParser(
        prog="replaydict",
        description="replaydict: record/replay dictionaries of known-correct responses"
    )
    parser.add_argument("--version", action="version", version=f"replaydict {replaydict_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging."
    )
    parent_parser.add_argument(
        "--index",
        default="index",
        help="Index file name inside the dictionary directory (default: index)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # verify command
    verify_parser = subparsers.add_parser(
        "verify",
        help="Check a dictionary directory for missing, corrupt and orphan files",
        parents=[parent_parser]
    )
    verify_parser.add_argument("directory", type=Path, help="Path to the dictionary directory")
    verify_parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Write verify_report.json to this directory"
    )

    # show command
    show_parser = subparsers.add_parser(
        "show",
        help="Print the index entries as JSON",
        parents=[parent_parser]
    )
    show_parser.add_argument("directory", type=Path, help="Path to the dictionary directory")

    # lookup command
    lookup_parser = subparsers.add_parser(
        "lookup",
        help="Print the recorded response for an original message payload",
        parents=[parent_parser]
    )
    lookup_parser.add_argument("directory", type=Path, help="Path to the dictionary directory")
    lookup_parser.add_argument(
        "--original",
        required=True,
        help="Original message payload text"
    )

    # bench command
    bench_parser = subparsers.add_parser(
        "bench",
        help="Record and validate synthetic messages, reporting throughput",
        parents=[parent_parser]
    )
    bench_parser.add_argument("directory", type=Path, help="Empty directory to record into")
    bench_parser.add_argument(
        "--count",
        type=_positive_int,
        default=500,
        help="Number of messages per pass (default: 500)"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "verify":
        from .api import verify_dictionary

        try:
            report = verify_dictionary(args.directory, index=args.index)
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        if args.output_dir is not None:
            args.output_dir.mkdir(parents=True, exist_ok=True)
            report_out = args.output_dir / "verify_report.json"
            report_out.write_text(_dumps(report.model_dump()) + "\n", encoding="utf-8")
            if not args.quiet:
                print(f"  Report: {report_out}")
        if not args.quiet:
            status = "OK" if report.ok else "FAILED"
            print(f"[{status}] Verification complete")
            print(f"  Status: {status}")
            print(f"  Entries: {report.entries}")
            print(f"  Errors: {len(report.errors)}")
            print(f"  Warnings: {len(report.warnings)}")
            for issue in report.errors:
                print(f"  ERROR {issue.code}: {issue.message}")
            for issue in report.warnings:
                print(f"  WARNING {issue.code}: {issue.message}")
        if not report.ok:
            sys.exit(1)
    elif args.command == "show":
        from .api import load_index
        from .exceptions import DictionaryIOError

        try:
            entries = load_index(args.directory, index=args.index)
        except DictionaryIOError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        print(_dumps(entries))
    elif args.command == "lookup":
        from .api import load_index
        from .exceptions import DictionaryIOError
        from .kernel.store import read_response

        try:
            entries = load_index(args.directory, index=args.index)
            response_id = entries.get(args.original)
            if response_id is None:
                print(f"Error: no recorded response for '{args.original}'", file=sys.stderr)
                sys.exit(1)
            content = read_response(args.directory, response_id)
        except DictionaryIOError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        if not args.quiet:
            print(f"# {response_id}", file=sys.stderr)
        sys.stdout.write(content)
    elif args.command == "bench":
        from ._internal.benchmarks import run_benchmarks
        from .reporting.destinations import ConsoleDestination

        index_path = args.directory / args.index
        if index_path.exists():
            print(f"Error: index file '{index_path}' already exists", file=sys.stderr)
            sys.exit(1)
        recorded, validated = run_benchmarks(
            args.directory, ConsoleDestination(), count=args.count, index=args.index
        )
        failed = (args.count - recorded.get("passed")) + (args.count - validated.get("passed"))
        if failed:
            print(f"Error: {failed} messages failed", file=sys.stderr)
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
