"""
Central data model definitions used across the project.

The course tree on disk looks like this:

    <root>/<semester>/<course>/info.yaml
    <root>/current-course -> <root>/<semester>/<course>

Semesters and courses are identified by their folder names only.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Course:
    """
    One course folder inside a semester folder.
    """

    semester: str
    name: str


@dataclass(frozen=True)
class CourseMetadata:
    """
    Contents of a course's info.yaml.

    Both fields are empty strings when the file is missing or broken.
    """

    title: str = ""
    link: str = ""
