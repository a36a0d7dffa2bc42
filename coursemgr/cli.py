"""
CLI (Command Line Interface).

Single-dash flags, one action per invocation:

    coursemgr -lc              list courses, current one highlighted
    coursemgr -cc <course>     change the current course
    coursemgr -sPdf            open the PDF of the current course
    coursemgr -cn -d           print the course name every few seconds

If several flags are given, the first one in DISPATCH_ORDER wins.
If none is given, the help text is printed.
"""

from __future__ import annotations

import argparse
import logging
import signal
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.markup import escape

from coursemgr import actions
from coursemgr.config import ConfigError, Settings
from coursemgr.diagnostics import open_diagnostics

logger = logging.getLogger(__name__)

# (argparse dest, action name) in precedence order
DISPATCH_ORDER = (
    ("help", "help"),
    ("list_courses", "list"),
    ("change_course", "change"),
    ("new_course", "new"),
    ("show_pdf", "pdf"),
    ("open_folder", "open_folder"),
    ("open_link", "open_link"),
    ("course_name", "name"),
    ("show_courses", "show"),
)


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse parser. -h is a regular flag so it goes through dispatch.
    """
    parser = argparse.ArgumentParser(
        prog="coursemgr",
        description="Manage the current-course symlink",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("-cc", dest="change_course", metavar="COURSE", help="Change the current course")
    parser.add_argument("-nc", dest="new_course", metavar="COURSE", help="Create a new course")
    parser.add_argument("-lc", dest="list_courses", action="store_true", help="List all the courses")
    parser.add_argument("-sc", dest="show_courses", action="store_true", help="Show the courses")
    parser.add_argument("-sPdf", dest="show_pdf", action="store_true", help="Show the pdf of the current course")
    parser.add_argument("-oc", dest="open_folder", action="store_true", help="Open the folder of the current course")
    parser.add_argument("-cl", dest="open_link", action="store_true", help="Open the link of the current course")
    parser.add_argument("-cn", dest="course_name", action="store_true", help="Get the name of the current course")
    parser.add_argument("-d", dest="repeat", action="store_true", help="Repeat -cn until interrupted")
    parser.add_argument("-h", dest="help", action="store_true", help="Print the help message")
    return parser


def _requested_action(args: argparse.Namespace) -> Optional[str]:
    for dest, action in DISPATCH_ORDER:
        value = getattr(args, dest)
        if value:
            if action == "name" and args.repeat:
                return "watch"
            return action
    return None


@contextmanager
def _stop_on_signals() -> Iterator[threading.Event]:
    """
    Yield an Event that gets set on SIGINT/SIGTERM; handlers are restored after.
    """
    stop = threading.Event()

    def _handler(signum, frame) -> None:
        stop.set()

    previous = {sig: signal.signal(sig, _handler) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        yield stop
    finally:
        for sig, old in previous.items():
            signal.signal(sig, old)


def dispatch(args: argparse.Namespace, settings: Settings, console: Console) -> int:
    """
    Run the one requested action and return its exit status.
    """
    action = _requested_action(args)

    if action is None:
        logger.info("No flag used")
        return actions.print_help(settings, console)

    if not settings.is_enabled(action):
        console.print(f"[red]This action is not available in the {settings.profile} profile[/red]")
        logger.warning("Action %s disabled by profile %s", action, settings.profile)
        return 2

    if action == "help":
        return actions.print_help(settings, console)
    if action == "list":
        return actions.list_courses(settings, console)
    if action == "show":
        return actions.show_courses(settings, console)
    if action == "change":
        return actions.change_course(settings, console, args.change_course)
    if action == "new":
        return actions.new_course(settings, console, args.new_course)
    if action == "pdf":
        return actions.show_pdf(settings, console)
    if action == "open_folder":
        return actions.open_folder(settings, console)
    if action == "open_link":
        return actions.open_link(settings, console)
    if action == "name":
        return actions.course_name(settings, console)
    if action == "watch":
        with _stop_on_signals() as stop:
            return actions.watch_course_name(settings, console, stop)

    return 2


def run(argv: list[str] | None, settings: Settings, console: Console) -> int:
    """
    Parse argv and run the action with the log file open.
    """
    args = build_parser().parse_args(argv)
    with open_diagnostics(settings):
        return dispatch(args, settings, console)


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Exits via SystemExit with the action's status.
    """
    console = Console(highlight=False)
    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        console.print(f"[red]Configuration error:[/red] {escape(str(exc))}")
        raise SystemExit(2)

    raise SystemExit(run(argv, settings, console))
