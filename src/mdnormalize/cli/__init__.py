"""Command-line interface for the mdnormalize Markdown normalizer.

Reads Markdown from a file or stdin, normalizes it to the canonical style,
and writes the result to stdout or back to the file.

Configuration
-------------
Defaults for ``--log-level``, ``--log-file``, ``--trace``, ``--rich`` and
``--force-rich`` can be stored in ``.mdnormalize.toml`` (or ``.yaml``,
``.yml``, ``.json``) or in ``[tool.mdnormalize]`` of a ``pyproject.toml``,
found by walking up from the working directory. ``--config PATH`` or the
``MDNORMALIZE_CONFIG`` environment variable select a file explicitly.
Command-line flags always win.

Examples
--------
Print the normalized document::

    $ mdnormalize README.md

Rewrite the file in place::

    $ mdnormalize --write README.md
    Formatted README.md

Read from stdin::

    $ cat notes.md | mdnormalize

"""

import argparse
import logging
import os
import sys
from typing import Any

from mdnormalize import __version__
from mdnormalize.cli.config import load_config_with_priority
from mdnormalize.cli.output import render_rich_markdown, should_use_rich_output
from mdnormalize.constants import CONFIG_ENV_VAR, DEFAULT_LOG_LEVEL, EXIT_ERROR, EXIT_SUCCESS, LOG_LEVEL_CHOICES
from mdnormalize.exceptions import MdNormalizeError
from mdnormalize.logging_utils import configure_logging
from mdnormalize.normalizer import normalize_markdown
from mdnormalize.utils.encoding import decode_markdown_bytes
from mdnormalize.utils.io_utils import read_markdown_file, write_markdown_file

logger = logging.getLogger(__name__)

__all__ = ["main", "create_parser"]

STDIN_MARKER = "-"


def create_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the ``mdnormalize`` command."""
    parser = argparse.ArgumentParser(
        prog="mdnormalize",
        description="Normalize Markdown to a canonical style, including Markdown inside "
        "```markdown / ```md fenced code blocks.",
    )
    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="Markdown file to format. Reads stdin when omitted or '-'.",
    )
    parser.add_argument(
        "-w",
        "--write",
        action="store_true",
        help="Write the result back to the file instead of printing it.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=None, help="Path to a configuration file (TOML, YAML or JSON).")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVEL_CHOICES,
        default=None,
        help=f"Logging level for diagnostics on stderr (default: {DEFAULT_LOG_LEVEL}).",
    )
    parser.add_argument("--log-file", default=None, help="Also write log records to this file.")
    parser.add_argument(
        "--trace",
        action="store_true",
        default=None,
        help="Debug logging with timestamps and logger names.",
    )
    parser.add_argument(
        "--rich",
        action="store_true",
        default=None,
        help="Render the printed result with Rich when stdout is a terminal.",
    )
    parser.add_argument(
        "--force-rich",
        action="store_true",
        default=None,
        help="Render the printed result with Rich even when stdout is not a terminal.",
    )
    return parser


def _apply_config_defaults(parsed_args: argparse.Namespace, config: dict[str, Any]) -> None:
    """Fill options not given on the command line from the config file."""
    defaults: dict[str, Any] = {
        "log_level": DEFAULT_LOG_LEVEL,
        "log_file": None,
        "trace": False,
        "rich": False,
        "force_rich": False,
    }
    for key, default in defaults.items():
        if getattr(parsed_args, key) is None:
            value = config.get(key, default)
            if key == "log_level" and isinstance(value, str):
                value = value.upper()
            setattr(parsed_args, key, value)


def _setup_logging_level(parsed_args: argparse.Namespace) -> None:
    """Set up logging based on command-line arguments.

    ``--trace`` takes precedence over ``--log-level``.
    """
    log_level = logging.DEBUG if parsed_args.trace else parsed_args.log_level
    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=bool(parsed_args.trace))


def _read_input(file_arg: str | None) -> str:
    if file_arg is None or file_arg == STDIN_MARKER:
        data = sys.stdin.buffer.read() if hasattr(sys.stdin, "buffer") else sys.stdin.read()
        if isinstance(data, str):
            return data
        return decode_markdown_bytes(data)
    return read_markdown_file(file_arg)


def main(args: list[str] | None = None) -> int:
    """Run the ``mdnormalize`` command.

    Parameters
    ----------
    args : list of str, optional
        Command-line arguments; ``sys.argv[1:]`` when omitted

    Returns
    -------
    int
        Exit code: 0 on success, 1 on any error

    """
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    try:
        config = load_config_with_priority(parsed_args.config, os.environ.get(CONFIG_ENV_VAR))
    except argparse.ArgumentTypeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    _apply_config_defaults(parsed_args, config)
    _setup_logging_level(parsed_args)

    reading_stdin = parsed_args.file is None or parsed_args.file == STDIN_MARKER
    if parsed_args.write and reading_stdin:
        print("Error: --write requires a file path; it cannot be used with stdin", file=sys.stderr)
        return EXIT_ERROR

    try:
        source = _read_input(parsed_args.file)
        formatted = normalize_markdown(source)

        if parsed_args.write:
            write_markdown_file(parsed_args.file, formatted)
            print(f"Formatted {parsed_args.file}")
        elif should_use_rich_output(parsed_args):
            render_rich_markdown(formatted)
        else:
            sys.stdout.write(formatted)
            sys.stdout.flush()
    except MdNormalizeError as e:
        logger.debug("Normalization failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
