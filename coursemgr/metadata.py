"""
Reading info.yaml of a course folder.

Expected format (flat mapping, extra keys are ignored):

    title: Linear Algebra
    link: https://moodle.example.org/course/view.php?id=42

The reader is deliberately forgiving: a missing or broken file gives an empty
CourseMetadata instead of an exception.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from coursemgr.config import METADATA_NAME, Settings
from coursemgr.model import CourseMetadata

logger = logging.getLogger(__name__)


def _field(data: dict[Any, Any], key: str) -> str:
    value = data.get(key)
    return "" if value is None else str(value)


def read_metadata(course_path: str | Path) -> CourseMetadata:
    """
    Load title and link from <course_path>/info.yaml.

    Missing keys become "". Any read or parse problem is logged and an empty
    record is returned.
    """
    path = Path(course_path) / METADATA_NAME
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Could not read %s: %s", path, exc)
        return CourseMetadata()

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        logger.error("Could not parse %s: %s", path, exc)
        return CourseMetadata()

    if data is None:
        data = {}
    if not isinstance(data, dict):
        logger.error("Could not parse %s: expected a mapping, got %s", path, type(data).__name__)
        return CourseMetadata()

    return CourseMetadata(title=_field(data, "title"), link=_field(data, "link"))


def normalize_title(title: str) -> str:
    """
    Turn a title into the folder-name form (spaces -> hyphens).
    """
    return title.replace(" ", "-")


def current_title(settings: Settings, normalize: bool = False) -> str:
    # title of whatever the pointer currently targets
    title = read_metadata(settings.pointer).title
    return normalize_title(title) if normalize else title
