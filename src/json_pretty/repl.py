"""FormatterSession — paste-and-format helper for interactive use.

Also provides the ``json-pretty`` CLI entry point via ``main()``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import IO

from .errors import JSONPrettyError
from .formatter import INDENT_WIDTH, FormatOptions, format_json
from .reader import read_json, read_json_file

logger = logging.getLogger(__name__)

PROMPT = "JSON> "
CONTINUATION_PROMPT = "....> "


# ---------------------------------------------------------------------------
# FormatterSession class (programmatic use)
# ---------------------------------------------------------------------------

class FormatterSession:
    """Formats pasted JSON text and keeps the inputs that formatted cleanly.

    Usage::

        session = FormatterSession()
        session.format_text('{"a": 1}')   # → '{\\n  "a": 1\\n}'
        session.format_text('{"a": ')     # → 'error: Expecting value: ...'

        session.history   # successful inputs, oldest first
        session.reset()   # clear state
    """

    def __init__(self, options: FormatOptions | None = None) -> None:
        self.options = options or FormatOptions()
        self.history: list[str] = []
        self.last_input: str | None = None
        self.last_output: str | None = None

    def format_text(self, text: str) -> str:
        """Format *text*, or return ``"error: <message>"`` if it cannot be."""
        self.last_input = text
        try:
            output = format_json(read_json(text), self.options)
        except JSONPrettyError as exc:
            logger.debug("formatting failed: %s", exc)
            output = f"error: {exc}"
        else:
            self.history.append(text)
        self.last_output = output
        return output

    def format_file(self, path: str) -> str:
        """Format the JSON file at *path*, or return ``"error: <message>"``.

        Files are not recorded in ``history``.
        """
        self.last_input = path
        try:
            output = format_json(read_json_file(path), self.options)
        except JSONPrettyError as exc:
            logger.debug("formatting %s failed: %s", path, exc)
            output = f"error: {exc}"
        self.last_output = output
        return output

    def reset(self) -> None:
        """Clear history and the last input/output."""
        self.history = []
        self.last_input = None
        self.last_output = None


# ---------------------------------------------------------------------------
# Interactive shell helpers
# ---------------------------------------------------------------------------

def _emit(text: str, dest: IO[str]) -> None:
    """Write *text* to *dest*, ending with exactly one line break."""
    dest.write(text if text.endswith("\n") else text + "\n")


def _show_history(session: FormatterSession, dest: IO[str]) -> None:
    if not session.history:
        print("  (no history)", file=dest)
        return
    for i, text in enumerate(session.history, 1):
        first_line = text.strip().splitlines()[0] if text.strip() else ""
        print(f"  {i}: {first_line}", file=dest)


def _format_file(session: FormatterSession, filepath: str, dest: IO[str]) -> None:
    _emit(session.format_file(filepath), dest)


def _process_line(session: FormatterSession, line: str, dest: IO[str]) -> bool:
    """Handle one shell command.  Returns False when the session should end."""
    line = line.strip()
    if not line:
        return True

    # ── Exit ──────────────────────────────────────────────────────────────
    if line in (":q", ":quit"):
        return False

    # ── Control commands ──────────────────────────────────────────────────
    if line == ":history":
        _show_history(session, dest)
        return True

    if line == ":reset":
        session.reset()
        return True

    # ── Format a file: ?<< filepath ───────────────────────────────────────
    if line.startswith("?<< "):
        _format_file(session, line[4:].strip(), dest)
        return True

    # ── Single-line JSON ──────────────────────────────────────────────────
    _emit(session.format_text(line), dest)
    return True


def _is_command(line: str) -> bool:
    return line.startswith(":") or line.startswith("?<< ") or line.startswith("?>>")


def run_shell(session: FormatterSession, source: IO[str] | None = None) -> None:
    """Interactive loop.

    A line starting with ``:`` or ``?`` is a command; anything else is JSON,
    which may span several lines and is submitted with a blank line.
    """
    dest: IO[str] = sys.stdout
    _file: IO[str] | None = None
    buffer: list[str] = []

    def read(prompt: str) -> str:
        if source is None:
            return input(prompt)
        line = source.readline()
        if not line:
            raise EOFError
        return line.rstrip("\n")

    print("JSON pretty-printer  (:q to quit  |  :history  :reset  |  ?<< <file>  ?>> <file>)")

    while True:
        try:
            line = read(CONTINUATION_PROMPT if buffer else PROMPT)
        except EOFError:
            if buffer:
                _emit(session.format_text("\n".join(buffer)), dest)
            print()
            break
        except KeyboardInterrupt:
            buffer = []
            print()
            continue

        # ── Multi-line JSON input ─────────────────────────────────────────
        if buffer:
            if line.strip():
                buffer.append(line)
            else:
                _emit(session.format_text("\n".join(buffer)), dest)
                buffer = []
            continue

        stripped = line.strip()
        if not stripped:
            continue

        # ── Output redirect: ?>> filepath  /  ?>> ─────────────────────────
        if stripped.startswith("?>> "):
            filepath = stripped[4:].strip()
            if _file:
                _file.close()
                _file = None
                dest = sys.stdout
            try:
                _file = open(filepath, "w", encoding="utf-8")
                dest = _file
            except OSError as exc:
                print(f"Error opening '{filepath}': {exc}", file=sys.stderr)
            continue

        if stripped == "?>>":
            if _file:
                _file.close()
                _file = None
            dest = sys.stdout
            continue

        if _is_command(stripped):
            if not _process_line(session, stripped, dest):
                break
            continue

        # Complete on one line → format now; otherwise keep reading.
        try:
            read_json(stripped)
        except JSONPrettyError:
            buffer = [line]
            continue
        _emit(session.format_text(stripped), dest)

    if _file:
        _file.close()


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="json-pretty",
        description="Pretty-print JSON with 2-space indentation, keeping key order.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default="-",
        help="JSON file to format ('-' or omitted reads stdin).",
    )
    parser.add_argument("-i", "--interactive", action="store_true", help="Start the interactive shell.")
    parser.add_argument("-o", "--output", help="Write the result to this file instead of stdout.")
    parser.add_argument(
        "--indent",
        type=int,
        default=INDENT_WIDTH,
        help=f"Spaces per indentation level (default: {INDENT_WIDTH}).",
    )
    parser.add_argument(
        "--escape",
        action="store_true",
        help="Escape quotes, backslashes and control characters inside strings.",
    )
    parser.add_argument(
        "--allow-nan",
        action="store_true",
        help="Write NaN/Infinity instead of failing on non-finite numbers.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Format JSON from a file or stdin (``json-pretty`` / ``python -m json_pretty``)."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.indent < 0:
        parser.error("--indent must be >= 0")
    options = FormatOptions(
        indent_width=args.indent,
        escape_strings=args.escape,
        allow_nan=args.allow_nan,
    )

    if args.interactive:
        run_shell(FormatterSession(options))
        return 0

    try:
        if args.file == "-":
            value = read_json(sys.stdin.read())
        else:
            value = read_json_file(args.file)
        text = format_json(value, options)
    except JSONPrettyError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.output:
        try:
            with open(args.output, "w", encoding="utf-8") as fh:
                _emit(text, fh)
        except OSError as exc:
            print(f"error: cannot write '{args.output}': {exc.strerror}", file=sys.stderr)
            return 1
        logger.debug("wrote %s", args.output)
    else:
        _emit(text, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
