"""
The actions behind the CLI flags.

Each action:
- takes the Settings and a rich Console
- prints its result (or an error message) on the console
- logs failures via the package logger
- returns an exit status (0 ok, 1 failed)

No action raises for filesystem or subprocess problems.
"""

from __future__ import annotations

import logging
import subprocess
import threading
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape

from coursemgr.config import BUILD_DIR_NAME, Settings
from coursemgr.metadata import current_title, normalize_title, read_metadata
from coursemgr.scan import iter_courses
from coursemgr.selector import select_course

logger = logging.getLogger(__name__)


HELP_TEXT = """\
Usage: coursemgr [options]
Options:
  -cc <course>  Change the current course
  -nc <course>  Create a new course (not implemented yet)
  -lc           List all the courses
  -sc           Show the courses
  -sPdf         Show the pdf of the current course
  -oc           Open the folder of the current course
  -cl           Open the link of the current course
  -cn           Get the name of the current course
  -d            Repeat -cn every few seconds until interrupted
  -h            Print the help message"""


def _run_external(cmd: Sequence[str]) -> bool:
    """
    Run an external program and wait for it. Failures are logged.
    """
    try:
        subprocess.run(list(cmd), check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        logger.error("Command %s failed: %s", " ".join(cmd), exc)
        return False
    return True


def print_help(settings: Settings, console: Console) -> int:
    console.print(HELP_TEXT, markup=False, highlight=False)
    return 0


def list_courses(settings: Settings, console: Console) -> int:
    """
    Print "semester -> course" for every course, highlighting the current one.
    """
    current = current_title(settings, normalize=True)

    console.print("Courses:")
    for course in iter_courses(settings.root):
        semester = escape(course.semester)
        name = escape(course.name)
        if current and course.name == current:
            console.print(f"{semester} -> [green]{name}[/green] (current course)")
        else:
            console.print(f"{semester} -> {name}")
    return 0


def show_courses(settings: Settings, console: Console) -> int:
    for course in iter_courses(settings.root):
        console.print(escape(course.name))
    return 0


def change_course(settings: Settings, console: Console, name: str) -> int:
    return 0 if select_course(settings, name, console) else 1


def new_course(settings: Settings, console: Console, name: str) -> int:
    # placeholder until course creation is specified
    logger.info("New course requested: %s", name)
    console.print(f"Creating the course {escape(name)} is not implemented yet")
    return 0


def _first_pdf(directory: Path) -> Optional[Path]:
    try:
        names = sorted(entry.name for entry in directory.iterdir())
    except OSError as exc:
        logger.error("Could not list %s: %s", directory, exc)
        return None
    for name in names:
        if Path(name).suffix == ".pdf":
            return directory / name
    return None


def find_pdf(course_dir: Path) -> Optional[Path]:
    """
    First .pdf (by name) in the course folder, else in its build/ folder.
    """
    pdf = _first_pdf(course_dir)
    if pdf is None and (course_dir / BUILD_DIR_NAME).is_dir():
        pdf = _first_pdf(course_dir / BUILD_DIR_NAME)
    return pdf


def show_pdf(settings: Settings, console: Console) -> int:
    pdf = find_pdf(settings.pointer)
    if pdf is None:
        console.print("[red]The pdf file has not been found[/red]")
        logger.error("The pdf file has not been found in %s", settings.pointer)
        return 1
    return 0 if _run_external([*settings.pdf_viewer, str(pdf)]) else 1


def open_folder(settings: Settings, console: Console) -> int:
    if not settings.pointer.is_dir():
        console.print("[red]There is no current course[/red]")
        logger.error("Current course %s is missing or broken", settings.pointer)
        return 1
    return 0 if _run_external([*settings.editor, str(settings.pointer)]) else 1


def open_link(settings: Settings, console: Console) -> int:
    """
    Open the link from info.yaml in the browser.

    A course without a link is reported instead of starting the browser with
    an empty argument.
    """
    link = read_metadata(settings.pointer).link.strip()
    if not link:
        console.print("[red]The current course has no link[/red]")
        logger.error("No link in the metadata of %s", settings.pointer)
        return 1
    return 0 if _run_external([*settings.browser, link]) else 1


def course_name(settings: Settings, console: Console) -> int:
    console.print(escape(current_title(settings, normalize=settings.normalize_name)), highlight=False)
    return 0


def watch_course_name(settings: Settings, console: Console, stop: threading.Event) -> int:
    """
    Print the course name every settings.interval seconds until `stop` is set.

    The metadata is re-read on every round, so a course change shows up on
    the next print.
    """
    while not stop.is_set():
        course_name(settings, console)
        stop.wait(settings.interval)
    return 0
