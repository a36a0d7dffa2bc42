"""
Runtime configuration.

All paths and external programs are fixed by default (they match the layout of
the original personal setup) but can be overridden through environment
variables, which is also how the tests point the tool at a temporary tree.

Settings are built once in cli.main() and passed to every action explicitly.
"""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional


POINTER_NAME = "current-course"
METADATA_NAME = "info.yaml"
LOG_NAME = "log.txt"
BUILD_DIR_NAME = "build"

DEFAULT_INTERVAL = 5.0

# action names used by the profiles and the dispatcher
ALL_ACTIONS = frozenset(
    {
        "help",
        "list",
        "show",
        "change",
        "new",
        "pdf",
        "open_folder",
        "open_link",
        "name",
        "watch",
    }
)

PROFILES: dict[str, frozenset[str]] = {
    "full": ALL_ACTIONS,
    "basic": frozenset({"help", "list", "show", "change", "new", "name"}),
}


class ConfigError(ValueError):
    """
    Raised for invalid configuration values (bad profile, bad interval, ...).
    """


@dataclass(frozen=True)
class Settings:
    root: Path
    program_dir: Path
    interval: float = DEFAULT_INTERVAL
    pdf_viewer: tuple[str, ...] = ("zathura",)
    browser: tuple[str, ...] = ("firefox",)
    editor: tuple[str, ...] = ("alacritty", "-e", "nvim")
    profile: str = "full"
    enabled_actions: frozenset[str] = field(default=ALL_ACTIONS)
    # basic profile: also print errors on the console, print hyphenated names
    echo_errors: bool = False
    normalize_name: bool = False

    @property
    def pointer(self) -> Path:
        return self.root / POINTER_NAME

    @property
    def log_file(self) -> Path:
        return self.program_dir / LOG_NAME

    def course_path(self, semester: str, name: str) -> Path:
        return self.root / semester / name

    def is_enabled(self, action: str) -> bool:
        return action in self.enabled_actions

    @classmethod
    def for_profile(cls, profile: str, root: Path, program_dir: Path, **kwargs) -> "Settings":
        """
        Build Settings for one of the named profiles ("full" or "basic").
        """
        if profile not in PROFILES:
            raise ConfigError(f"Unknown profile {profile!r} (expected one of: {', '.join(sorted(PROFILES))})")
        basic = profile == "basic"
        kwargs.setdefault("echo_errors", basic)
        kwargs.setdefault("normalize_name", basic)
        return cls(
            root=Path(root),
            program_dir=Path(program_dir),
            profile=profile,
            enabled_actions=PROFILES[profile],
            **kwargs,
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build Settings from the defaults plus COURSEMGR_* environment overrides.
        """
        env = os.environ if environ is None else environ
        home = Path.home()

        root = Path(env.get("COURSEMGR_ROOT") or home / "university").expanduser()
        program_dir = Path(env.get("COURSEMGR_HOME") or home / ".schedule-manager").expanduser()
        profile = (env.get("COURSEMGR_PROFILE") or "full").strip().lower()

        kwargs: dict[str, object] = {}

        raw_interval = env.get("COURSEMGR_INTERVAL")
        if raw_interval:
            try:
                interval = float(raw_interval)
            except ValueError:
                raise ConfigError(f"COURSEMGR_INTERVAL must be a number, got {raw_interval!r}") from None
            if interval <= 0:
                raise ConfigError(f"COURSEMGR_INTERVAL must be positive, got {raw_interval!r}")
            kwargs["interval"] = interval

        for key, attr in (
            ("COURSEMGR_PDF_VIEWER", "pdf_viewer"),
            ("COURSEMGR_BROWSER", "browser"),
            ("COURSEMGR_EDITOR", "editor"),
        ):
            raw = env.get(key)
            if raw is None:
                continue
            cmd = tuple(shlex.split(raw))
            if not cmd:
                raise ConfigError(f"{key} must not be empty")
            kwargs[attr] = cmd

        return cls.for_profile(profile, root, program_dir, **kwargs)
