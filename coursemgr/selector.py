"""
Changing the current course.

The pointer is replaced by creating a temporary symlink next to it and renaming
it over the old one, so readers see either the old or the new course, never
a missing pointer.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.markup import escape

from coursemgr.config import POINTER_NAME, Settings
from coursemgr.scan import scan_courses

logger = logging.getLogger(__name__)


def select_course(settings: Settings, name: str, console: Console) -> bool:
    """
    Point current-course at <root>/<semester>/<name>.

    Returns False (and leaves the pointer alone) if the course does not exist
    or the link could not be replaced.
    """
    valid = scan_courses(settings.root)

    if name not in valid:
        console.print(f"[red]The course {escape(name)} is an invalid course[/red]")
        console.print("Use the flag -lc to list all the courses")
        logger.error("The course %s is an invalid course", name)
        return False

    target = settings.course_path(valid[name], name)
    tmp_link = settings.root / f".{POINTER_NAME}.tmp"

    try:
        if tmp_link.is_symlink():
            tmp_link.unlink()
        os.symlink(target, tmp_link)
        os.replace(tmp_link, settings.pointer)
    except OSError as exc:
        logger.error("Could not change the current course to %s: %s", name, exc)
        try:
            tmp_link.unlink()
        except FileNotFoundError:
            pass
        except OSError as cleanup_exc:
            logger.error("Could not remove %s: %s", tmp_link, cleanup_exc)
        return False

    console.print(f"The current course has been changed to {escape(name)}")
    return True
