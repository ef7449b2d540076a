"""Discovery and parsing of feature files.

A features directory looks like::

    features/
        calculator.feature   # Gherkin feature files (any depth)
        steps/               # behave step modules
        environment.py       # (optional) behave hooks

Parsing goes through behave's own parser, so ``stepwise list`` and a
pre-flight check before ``stepwise run`` see exactly what behave will run.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from behave.model import Feature
from behave.parser import ParserError, parse_feature


class FeatureLoadError(Exception):
    """A feature file is missing, unreadable or not valid Gherkin."""


def find_feature_files(target: Path) -> list[Path]:
    """Feature files under a directory (sorted, recursive), or the file itself.

    Raises FeatureLoadError if the target does not exist.
    """
    if target.is_file():
        return [target]
    if target.is_dir():
        return sorted(target.rglob("*.feature"))
    raise FeatureLoadError(f"No such feature file or directory: {target}")


def find_base_dir(target: Path, steps_dirname: str = "steps") -> Optional[Path]:
    """The directory behave will load steps/ and environment.py from.

    Walks up from the target to the nearest directory with a steps/
    subdirectory. None if there is none.
    """
    start = target.resolve()
    if not start.is_dir():
        start = start.parent
    for candidate in (start, *start.parents):
        if (candidate / steps_dirname).is_dir():
            return candidate
    return None


def parse_feature_file(path: Path) -> Optional[Feature]:
    """Parse one .feature file. None if it holds no Feature.

    Raises FeatureLoadError for bad encoding or Gherkin syntax.
    """
    try:
        text = path.read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise FeatureLoadError(f"{path}: not valid UTF-8 ({e.reason} at byte {e.start})") from e
    except OSError as e:
        raise FeatureLoadError(f"{path}: {e.strerror}") from e
    try:
        return parse_feature(text, filename=str(path))
    except ParserError as e:
        raise FeatureLoadError(f"{path}: {str(e).strip()}") from e


def load_features(target: Path) -> list[Feature]:
    """Parse every feature file for a target. Raises FeatureLoadError."""
    features = (parse_feature_file(path) for path in find_feature_files(target))
    return [feature for feature in features if feature is not None]
