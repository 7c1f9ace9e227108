from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TextIO

from stream_plumbing.adapters.file_io import FileLineSource, FileOutputSink, open_source, open_target
from stream_plumbing.adapters.log_sinks import build_log_sink
from stream_plumbing.config.loader import ConfigError, load_settings
from stream_plumbing.config.models import AppSettings
from stream_plumbing.domain.errors import StreamError
from stream_plumbing.domain.logging import LogMessage
from stream_plumbing.streams._io import guarded
from stream_plumbing.streams.release import close_quietly
from stream_plumbing.util import StreamUtil

# Exit codes: 0 success or equal content, 1 content differs, 2 I/O, encoding or config failure.
EXIT_OK = 0
EXIT_DIFFERENT = 1
EXIT_FAILURE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stream-plumbing", description="Stream copy, compare and line tools")
    parser.add_argument("--config", help="Path to YAML settings")
    parser.add_argument("--encoding", help="Override io.encoding from settings")
    commands = parser.add_subparsers(dest="command", required=True)

    copy_cmd = commands.add_parser("copy", help="Copy bytes from SOURCE to TARGET")
    copy_cmd.add_argument("source")
    copy_cmd.add_argument("target")
    copy_cmd.add_argument("--offset", type=int, default=0, help="Bytes to skip first")
    copy_cmd.add_argument("--length", type=int, default=-1, help="Bytes to copy (-1 for all)")

    compare_cmd = commands.add_parser("compare", help="Exit 0 when both files hold identical content")
    compare_cmd.add_argument("first")
    compare_cmd.add_argument("second")
    compare_cmd.add_argument("--ignore-eol", action="store_true", help="Treat \\n, \\r and \\r\\n alike")

    lines_cmd = commands.add_parser("lines", help="Print lines of FILE, normalizing terminators")
    lines_cmd.add_argument("path")
    lines_cmd.add_argument("--number", action="store_true", help="Prefix lines with 1-based numbers")
    lines_cmd.add_argument("--output", help="Write lines to this file instead of stdout")

    cat_cmd = commands.add_parser("cat", help="Decode FILE and print it unchanged")
    cat_cmd.add_argument("path")
    return parser


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    # Parse CLI arguments; caller passes argv for testability.
    return build_parser().parse_args(argv)


def apply_encoding_override(settings: AppSettings, args: argparse.Namespace) -> None:
    # CLI flag takes precedence over the settings file.
    if args.encoding is not None:
        settings.io = settings.io.model_copy(update={"encoding": args.encoding})


def run(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    out = sys.stdout
    try:
        settings = load_settings(Path(args.config) if args.config else None)
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    apply_encoding_override(settings, args)

    try:
        log_sink = build_log_sink(settings.logging)
    except OSError as exc:
        print(f"error: cannot open log sink: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    util = StreamUtil(settings=settings.io, log_sink=log_sink)
    try:
        return _COMMANDS[args.command](util, args, out)
    except (StreamError, ValueError) as exc:
        if log_sink is not None:
            log_sink.emit(
                LogMessage(
                    level="ERROR",
                    message="command failed",
                    fields={"command": args.command, "error": str(exc)},
                )
            )
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    finally:
        close_quietly(log_sink)


def _copy(util: StreamUtil, args: argparse.Namespace, out: TextIO) -> int:
    source = open_source(Path(args.source))
    target = None
    try:
        target = open_target(Path(args.target))
        copied = util.copy_large(source, target, offset=args.offset, length=args.length)
        # Close the target on the success path so flush failures are reported.
        with guarded("close"):
            target.close()
    finally:
        util.close_quietly(source, target)
    if util.log_sink is not None:
        util.log_sink.emit(
            LogMessage(level="INFO", message="copied", fields={"units": copied, "target": args.target})
        )
    return EXIT_OK


def _compare(util: StreamUtil, args: argparse.Namespace, out: TextIO) -> int:
    first = open_source(Path(args.first))
    second = None
    try:
        second = open_source(Path(args.second))
        if args.ignore_eol:
            equal = util.content_equals_ignore_eol(first, second)
        else:
            equal = util.content_equals(first, second)
    finally:
        util.close_quietly(first, second)
    util.write("identical\n" if equal else "different\n", out)
    return EXIT_OK if equal else EXIT_DIFFERENT


def _lines(util: StreamUtil, args: argparse.Namespace, out: TextIO) -> int:
    settings = util.settings
    source = FileLineSource(
        path=Path(args.path),
        encoding=settings.encoding,
        buffer_size=settings.buffer_size,
        errors=settings.decode_errors,
    )
    lines = source.read()
    if args.number:
        lines = (f"{idx}\t{line}" for idx, line in enumerate(lines, start=1))
    if args.output is None:
        util.write_lines(lines, out)
        return EXIT_OK
    sink = FileOutputSink(
        path=Path(args.output),
        encoding=settings.encoding,
        line_ending=settings.line_ending,
    )
    try:
        sink.write_lines(lines)
        sink.close()
    finally:
        util.close_quietly(sink)
    return EXIT_OK


def _cat(util: StreamUtil, args: argparse.Namespace, out: TextIO) -> int:
    source = open_source(Path(args.path))
    try:
        util.copy(source, out)
    finally:
        util.close_quietly(source)
    return EXIT_OK


_COMMANDS: dict[str, Callable[[StreamUtil, argparse.Namespace, TextIO], int]] = {
    "copy": _copy,
    "compare": _compare,
    "lines": _lines,
    "cat": _cat,
}
