"""Assertions for step code that report both the expected and actual value."""

from __future__ import annotations

import math


def assert_equal(actual, expected, what: str = "") -> None:
    if actual != expected:
        prefix = f"{what}: " if what else ""
        raise AssertionError(f"{prefix}expected {expected!r}, got {actual!r}")


def assert_close(actual: float, expected: float, tol: float = 1e-9, what: str = "") -> None:
    """Like assert_equal but within an absolute-or-relative tolerance."""
    if actual is None or not math.isclose(actual, expected, rel_tol=tol, abs_tol=tol):
        prefix = f"{what}: " if what else ""
        raise AssertionError(f"{prefix}expected {expected!r} (±{tol}), got {actual!r}")
