"""
Course repository scanner.

Walks the two levels below the root directory:

    <root>/<semester>/<course>

Read errors never propagate: a directory that cannot be listed is logged and
treated as empty, so the callers simply see fewer courses.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator

from coursemgr.model import Course

logger = logging.getLogger(__name__)


def list_folders(path: str | Path) -> list[str]:
    """
    Return the names of the sub-directories of `path`, sorted by name.

    Symlinks are not followed, so the current-course pointer living in the
    root is never reported as a semester.
    Returns [] (and logs) if the directory is missing or unreadable.
    """
    try:
        with os.scandir(path) as it:
            names = [entry.name for entry in it if entry.is_dir(follow_symlinks=False)]
    except OSError as exc:
        logger.error("Could not list %s: %s", path, exc)
        return []
    return sorted(names)


def iter_courses(root: str | Path) -> Iterator[Course]:
    """
    Yield every (semester, course) pair below root, semesters in order.
    """
    root = Path(root)
    for semester in list_folders(root):
        for name in list_folders(root / semester):
            yield Course(semester=semester, name=name)


def scan_courses(root: str | Path) -> dict[str, str]:
    """
    Map course name -> semester name.

    Course names are expected to be unique over all semesters. If they are not,
    the later semester wins and a warning is logged.
    """
    out: dict[str, str] = {}
    for course in iter_courses(root):
        previous = out.get(course.name)
        if previous is not None:
            logger.warning(
                "Course %s exists in %s and %s, using %s", course.name, previous, course.semester, course.semester
            )
        out[course.name] = course.semester
    return out
