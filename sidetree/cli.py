"""Command-line front door for sidetree.

Parses CLI options, runs the startup script and ``--exec`` commands, applies
``--select`` and then hands the terminal to the interactive loop. Startup
failures exit with a message; runtime errors are shown on the status line.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .commands import parse_commands
from .errors import SidetreeError
from .file_tree_model import absolute_path
from .render import render_app
from .runtime import (
    App,
    Cache,
    EventPump,
    default_script_path,
    load_cache,
    run_main_loop,
    save_cache,
)
from .runtime.terminal import TerminalController

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sidetree",
        description="Interactive file tree for a terminal side panel.",
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="PATH",
        default=None,
        help="Startup script to run (default: sidetreerc in the user config dir).",
    )
    parser.add_argument("--no-cache", action="store_true", help="Do not read or write the expansion cache.")
    parser.add_argument("-s", "--select", metavar="PATH", default=None, help="Reveal and select PATH on startup.")
    parser.add_argument("-e", "--exec", dest="exec_cmds", metavar="CMDS", default=None, help="Commands to run after the startup script.")
    parser.add_argument("--log-file", metavar="PATH", default=None, help="Append debug logs to PATH.")
    return parser


def configure_logging(log_file: str | None) -> None:
    """Send package logs to ``log_file``; without one logging stays silent."""
    if log_file is None:
        return
    try:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as exc:
        raise SystemExit(f"sidetree: --log-file: {exc}") from exc
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("sidetree")
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)


def prepare_app(args: argparse.Namespace, root: Path | None = None) -> App:
    """Build the app and run the startup sequence up to the interactive loop."""
    cache = Cache() if args.no_cache else load_cache()
    app = App(cache, root=root)

    script = Path(args.config) if args.config is not None else default_script_path()
    logger.debug("running startup script %s", script)
    try:
        app.run_script_file(script)
    except SidetreeError as exc:
        raise SystemExit(f"sidetree: {exc}") from exc

    if args.exec_cmds is not None:
        try:
            commands = parse_commands(args.exec_cmds)
        except SidetreeError as exc:
            raise SystemExit(f"sidetree: --exec: {exc}") from exc
        app.run_commands(commands)

    if args.select is not None:
        target = absolute_path(args.select)
        app.tree.expand_to_path(target)
        app.update()
        app.tree.select_path(target)
    return app


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)

    app = prepare_app(args)
    if not app.exit:
        stdin_fd = sys.stdin.fileno()
        if not os.isatty(stdin_fd):
            raise SystemExit("sidetree: stdin is not a terminal")
        terminal = TerminalController(stdin_fd, sys.stdout.fileno())
        run_main_loop(app=app, terminal=terminal, pump=EventPump(stdin_fd), draw=render_app)

    if not args.no_cache:
        save_cache(app.get_cache())


if __name__ == "__main__":
    main()
