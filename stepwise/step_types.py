"""Custom parse field types for step patterns.

behave matches steps with the ``parse`` library. Its built-in ``f`` type
rejects integers ("0", "32") and ``d`` rejects decimals, so step patterns
use ``{x:Number}`` instead. ``{u:Unit}`` accepts a temperature unit name.

Step modules call ``register_step_types()`` before their decorators run,
since behave compiles each pattern when the step is registered.
"""

from __future__ import annotations

from typing import Union

import parse
from behave import register_type

from stepwise.calculator import Unit

NUMBER_PATTERN = r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?"


@parse.with_pattern(NUMBER_PATTERN)
def parse_number(text: str) -> Union[int, float]:
    """'8' -> 8, '3.75' -> 3.75, '-2.0' -> -2.0."""
    text = text.strip()
    try:
        return int(text)
    except ValueError:
        return float(text)


@parse.with_pattern(r"Celsius|Fahrenheit|Kelvin")
def parse_unit(text: str) -> Unit:
    return Unit.lookup(text)


STEP_TYPES = {"Number": parse_number, "Unit": parse_unit}


def register_step_types() -> None:
    register_type(**STEP_TYPES)
