"""Command-line front door for cscopejump.

Parses CLI options, builds the resolver/lookup pair from config plus flags,
then dispatches into ``find``, ``goto``, ``add-index`` or the interactive
``shell``.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from collections.abc import Callable
from typing import TextIO

from . import config
from .buffer import TextBuffer
from .commands import COMMAND_ITEMS, run_command
from .editor import launch_editor
from .lookup import CscopeLookup
from .prompt import TerminalChooser
from .resolver import IndexResolver
from .selector import select_match
from .session import TagNavigator
from .syntax import DEFAULT_STYLE, colorize_line, sanitize_terminal_text

SHELL_HELP = "commands: goto [TAG], back, forward, where, open FILE [LINE], menu [N], help, quit"


def _positive_float(value: str) -> float:
    """argparse type for positive timeouts."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cscopejump",
        description="Jump to symbol definitions using cscope.out index files.",
    )
    parser.add_argument("--cscope", default=None, help="cscope executable (default from config or 'cscope').")
    parser.add_argument(
        "--index",
        action="append",
        default=[],
        metavar="PATH",
        help="Extra cscope.out file searched for every lookup (repeatable).",
    )
    parser.add_argument("--timeout", type=_positive_float, default=None, help="Seconds allowed per index file.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for match previews.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log lookup details to stderr.")

    sub = parser.add_subparsers(dest="command", required=True)

    find = sub.add_parser("find", help="Print every match for TAG.")
    find.add_argument("tag")
    find.add_argument("--file", default=None, help="File the lookup is made from (defaults to the cwd).")

    goto = sub.add_parser("goto", help="Pick a match for TAG and open it in $EDITOR.")
    goto.add_argument("tag")
    goto.add_argument("--file", default=None, help="File the lookup is made from (defaults to the cwd).")
    goto.add_argument("--no-edit", action="store_true", help="Print the chosen location instead of editing.")

    shell = sub.add_parser("shell", help="Interactive session with back/forward jump history.")
    shell.add_argument("--file", default=None, help="File to open first.")

    add_index = sub.add_parser("add-index", help="Register a cscope.out file in the config.")
    add_index.add_argument("path")
    add_index.add_argument(
        "--project",
        default=None,
        metavar="ROOT",
        help="Only search PATH for files under project ROOT (default: every lookup).",
    )
    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _build_resolver(args: argparse.Namespace) -> IndexResolver:
    index_config = config.load_index_config()
    index_config.global_indexes.extend(args.index)
    return IndexResolver(index_config)


def _build_lookup(args: argparse.Namespace) -> CscopeLookup:
    executable = args.cscope or config.load_cscope_executable()
    timeout = args.timeout if args.timeout is not None else config.load_timeout_seconds()
    return CscopeLookup(executable, timeout)


def _checked_file(path: str | None) -> str | None:
    if path is None:
        return None
    if not os.path.isfile(path):
        raise SystemExit(f"File not found: {path}")
    return os.path.abspath(path)


def _notify_stderr(message: str) -> None:
    sys.stderr.write(message + "\n")


def run_find(args: argparse.Namespace, out: TextIO, color: bool) -> int:
    resolver = _build_resolver(args)
    sources = resolver.resolve(_checked_file(args.file))
    result = _build_lookup(args).find_tags(args.tag, sources)
    if result.notice:
        _notify_stderr(result.notice)
    for match in result.matches:
        text = colorize_line(match.line_text, match.file_path, args.style) if color else sanitize_terminal_text(match.line_text)
        out.write(f"{match.file_path}:{match.line_number}: {match.kind}: {text}\n")
    return 0 if result.matches else 1


def run_goto(args: argparse.Namespace, out: TextIO, color: bool) -> int:
    resolver = _build_resolver(args)
    sources = resolver.resolve(_checked_file(args.file))
    result = _build_lookup(args).find_tags(args.tag, sources)
    if result.notice:
        _notify_stderr(result.notice)
    match = select_match(result.matches, TerminalChooser(output=out, color=color, style=args.style))
    if match is None:
        return 1
    if args.no_edit:
        out.write(f"{match.file_path}:{match.line_number}\n")
        return 0
    error = launch_editor(match.file_path, match.line_number)
    if error:
        _notify_stderr(error)
        return 1
    return 0


def run_add_index(args: argparse.Namespace, out: TextIO) -> int:
    """Persist an index path; both paths are made absolute to match resolved project roots."""
    path = os.path.abspath(args.path)
    if args.project is None:
        config.add_global_index(path)
        out.write(f"Added global index {path}\n")
        return 0
    root = os.path.abspath(args.project)
    config.add_project_index(root, path)
    out.write(f"Added index {path} for project {root}\n")
    return 0


def _describe(buffer: TextBuffer) -> str:
    if buffer.file_path is None:
        return "[no file]"
    return f"{buffer.file_path}:{buffer.line_number} (offset {buffer.caret_offset})"


def run_shell(
    args: argparse.Namespace,
    out: TextIO,
    color: bool,
    input_fn: Callable[[str], str] = input,
) -> int:
    buffer = TextBuffer(_checked_file(args.file))
    navigator = TagNavigator(
        context=buffer,
        sink=buffer,
        chooser=TerminalChooser(input_fn=input_fn, output=out, color=color, style=args.style),
        resolver=_build_resolver(args),
        lookup=_build_lookup(args),
        notify=lambda message: out.write(message + "\n"),
    )

    def ask_tag() -> str | None:
        try:
            return input_fn("Goto: ").strip()
        except EOFError:
            return None

    out.write(SHELL_HELP + "\n")
    while True:
        try:
            line = input_fn("cscope> ").strip()
        except EOFError:
            return 0
        if not line:
            continue
        command, _, rest = line.partition(" ")
        rest = rest.strip()

        if command in {"quit", "exit", "q"}:
            return 0
        if command == "help":
            out.write(SHELL_HELP + "\n")
            continue
        if command == "where":
            out.write(_describe(buffer) + "\n")
            continue
        if command == "open":
            path, _, line_text = rest.partition(" ")
            if not path or not os.path.isfile(path):
                out.write(f"File not found: {path}\n")
                continue
            buffer.open_file(os.path.abspath(path))
            if line_text.strip().isdigit():
                buffer.goto_line(int(line_text) - 1)
            out.write(_describe(buffer) + "\n")
            continue
        if command == "menu":
            if not rest:
                for number, (_command_id, label) in enumerate(COMMAND_ITEMS, start=1):
                    out.write(f"{number}. {label}\n")
                continue
            if not rest.isdigit() or not 1 <= int(rest) <= len(COMMAND_ITEMS):
                out.write(f"No menu item {rest}.\n")
                continue
            moved = run_command(navigator, COMMAND_ITEMS[int(rest) - 1][0], ask_tag)
        elif command == "goto":
            moved = navigator.goto_tag(rest or None)
        elif command == "back":
            moved = navigator.jump_back()
        elif command == "forward":
            moved = navigator.jump_forward()
        else:
            out.write(f"Unknown command: {command}. {SHELL_HELP}\n")
            continue

        if moved:
            out.write(_describe(buffer) + "\n")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the selected subcommand.

    Exits with status 1 when a lookup finds nothing or the prompt is dismissed.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    out = sys.stdout
    color = not args.no_color and out.isatty()
    if args.command == "find":
        status = run_find(args, out, color)
    elif args.command == "goto":
        status = run_goto(args, out, color)
    elif args.command == "add-index":
        status = run_add_index(args, out)
    else:
        status = run_shell(args, out, color)
    if status:
        raise SystemExit(status)
