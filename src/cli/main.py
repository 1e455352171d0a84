"""Statdata CLI entry points.
This module exposes commands for inspecting saved sequence stores.
It maps argparse commands onto SequenceStore calls.
"""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import Any, Sequence

from core.config import StatDataConfig
from core.constants import SUPPORTED_SERIALIZERS
from core.errors import StatDataError
from core.logging_config import configure_logging
from store.sequence_store import SequenceStore


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="statdata", description="Sequence store inspection CLI")
    parser.add_argument("--log-level", help="Override STATDATA_LOG_LEVEL for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_list_command(subparsers)
    _add_dump_command(subparsers)
    _add_check_command(subparsers)
    _add_lag_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the statdata CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        store = _build_store(args)
        if args.command == "list":
            return _run_list_command(store)
        if args.command == "dump":
            return _run_dump_command(store, args)
        if args.command == "check":
            return _run_check_command(store, args)
        if args.command == "lag":
            return _run_lag_command(store, args)
    except StatDataError as error:
        print(f"statdata: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_store(args: argparse.Namespace) -> SequenceStore:
    """Build a store loaded from the command's file argument.

    Args:
        args: Parsed CLI args.

    Returns:
        Loaded sequence store.
    """
    config = StatDataConfig.from_env()
    if args.log_level:
        config = replace(config, log_level=args.log_level.upper())
    configure_logging(config.log_level)
    store = SequenceStore(config)
    store.load_from_file(args.file, serializer=args.serializer)
    return store


def _run_list_command(store: SequenceStore) -> int:
    """Handle list command."""
    store.dump_list()
    return 0


def _run_dump_command(store: SequenceStore, args: argparse.Namespace) -> int:
    """Handle dump command.

    Args:
        store: Loaded store.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    store.dump_vals(index=args.index, label=args.label, delim=args.delim)
    return 0


def _run_check_command(store: SequenceStore, args: argparse.Namespace) -> int:
    """Handle check command.

    Args:
        store: Loaded store.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    values = store.access(index=args.index, label=args.label)
    checks = (
        ("full", store.all_full(values)),
        ("numeric", store.all_numeric(values)),
        ("proportions", store.all_proportions(values)),
    )
    for name, passed in checks:
        print(f"{name}\t{'true' if passed else 'false'}")
    return 0


def _run_lag_command(store: SequenceStore, args: argparse.Namespace) -> int:
    """Handle lag command.

    Args:
        store: Loaded store.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    target, response = store.crosslag(
        args.lag,
        loop=args.loop,
        target=_parse_selector(args.target),
        response=_parse_selector(args.response),
    )
    delimiter = args.delim or store.config.delimiter
    print(delimiter.join("" if value is None else str(value) for value in target))
    print(delimiter.join("" if value is None else str(value) for value in response))
    return 0


def _parse_selector(raw_value: str) -> int | str:
    # digits address a position, anything else a label
    return int(raw_value) if raw_value.isdigit() else raw_value


def _add_file_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("file", help="Store file written by SequenceStore.save")
    parser.add_argument(
        "--serializer",
        choices=SUPPORTED_SERIALIZERS,
        help="File serializer; inferred from the suffix when omitted",
    )


def _add_selector_arguments(parser: argparse.ArgumentParser) -> None:
    selector = parser.add_mutually_exclusive_group()
    selector.add_argument("--index", type=int, help="Slot index (default 0)")
    selector.add_argument("--label", help="Slot label")


def _add_list_command(subparsers: Any) -> None:
    """Register list subcommand."""
    parser = subparsers.add_parser("list", help="List slots with label and value count")
    _add_file_arguments(parser)


def _add_dump_command(subparsers: Any) -> None:
    """Register dump subcommand."""
    parser = subparsers.add_parser("dump", help="Print one sequence as a delimited line")
    _add_file_arguments(parser)
    _add_selector_arguments(parser)
    parser.add_argument("--delim", help="Value delimiter (default STATDATA_DELIMITER)")


def _add_check_command(subparsers: Any) -> None:
    """Register check subcommand."""
    parser = subparsers.add_parser("check", help="Report validity checks for one sequence")
    _add_file_arguments(parser)
    _add_selector_arguments(parser)


def _add_lag_command(subparsers: Any) -> None:
    """Register lag subcommand."""
    parser = subparsers.add_parser("lag", help="Realign two sequences by a signed lag")
    _add_file_arguments(parser)
    parser.add_argument("--lag", type=int, required=True, help="Signed lag of target")
    parser.add_argument("--loop", action="store_true", help="Rotate target instead of trimming")
    parser.add_argument("--target", default="0", help="Target slot index or label")
    parser.add_argument("--response", default="1", help="Response slot index or label")
    parser.add_argument("--delim", help="Value delimiter (default STATDATA_DELIMITER)")
