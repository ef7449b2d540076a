"""Run configuration for stepwise.

Defaults come from STEPWISE_* environment variables; CLI options override
them. ``RunConfig.behave_args()`` turns a config into the command line that
behave runs with.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

_TRUE_VALUES = ("1", "true", "yes", "on")

RICH_FORMATTER = "stepwise.reporter:RichFormatter"


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUE_VALUES


@dataclass
class RunConfig:
    """Settings for one invocation of the runner."""

    # What to run: a features directory, a .feature file, or 'file.feature:LINE'.
    target: Path = field(default_factory=lambda: Path(os.environ.get("STEPWISE_FEATURES_DIR", "features")))
    line: Optional[int] = None
    verbose: bool = False
    stop_on_failure: bool = False
    dry_run: bool = False
    tags: list[str] = field(default_factory=list)
    # -D name=value pairs, readable from context.config.userdata in steps and hooks.
    userdata: dict[str, str] = field(default_factory=dict)
    no_color: bool = field(default_factory=lambda: _env_flag("STEPWISE_NO_COLOR") or "NO_COLOR" in os.environ)

    @classmethod
    def from_target(cls, target: Optional[str] = None, **kwargs) -> RunConfig:
        """Build a config from a CLI-style target ('dir', 'x.feature', 'x.feature:12')."""
        config = cls(**kwargs)
        if target:
            config.target, config.line = split_target(target)
        return config

    @property
    def location(self) -> str:
        if self.line is None:
            return str(self.target)
        return f"{self.target}:{self.line}"

    def behave_args(self) -> list[str]:
        """Command-line arguments for behave's main()."""
        args = [self.location]
        # Plain prints every step; the Rich formatter always adds marks and the summary.
        if self.verbose:
            args += ["--format", "plain"]
        args += ["--format", RICH_FORMATTER, "--no-summary", "--no-skipped"]
        if self.stop_on_failure:
            args.append("--stop")
        if self.dry_run:
            args.append("--dry-run")
        for tag in self.tags:
            args += ["--tags", tag]
        for name, value in self.userdata.items():
            args += ["-D", f"{name}={value}"]
        if self.no_color:
            args.append("--no-color")
        return args


def split_target(target: str) -> tuple[Path, Optional[int]]:
    """'a/b.feature:12' → (Path('a/b.feature'), 12); anything else → (Path, None)."""
    head, sep, tail = target.rpartition(":")
    if sep and tail.isdigit() and head.endswith(".feature"):
        return Path(head), int(tail)
    return Path(target), None


def parse_defines(defines: Optional[list[str]]) -> dict[str, str]:
    """['tolerance=1e-6', 'flag'] → {'tolerance': '1e-6', 'flag': 'true'}.

    A bare name means 'true', like behave's own -D.
    """
    userdata = {}
    for define in defines or []:
        name, sep, value = define.partition("=")
        userdata[name.strip()] = value if sep else "true"
    return userdata
