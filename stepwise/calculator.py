"""The system under test: a four-function calculator and a temperature converter.

Module-level functions are pure. Calculator and TemperatureConverter wrap
them and remember the last result, which is what the feature steps assert on.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

Number = Union[int, float]

ABSOLUTE_ZERO_C = -273.15


class DivisionByZero(ZeroDivisionError):
    """Raised by divide() when the divisor is zero."""


# --- Arithmetic ---

def add(a: Number, b: Number) -> Number:
    return a + b


def subtract(a: Number, b: Number) -> Number:
    return a - b


def multiply(a: Number, b: Number) -> Number:
    return a * b


def divide(a: Number, b: Number) -> float:
    if b == 0:
        raise DivisionByZero(f"cannot divide {a} by zero")
    return a / b


# --- Temperature ---

def celsius_to_fahrenheit(c: float) -> float:
    return c * 9 / 5 + 32


def fahrenheit_to_celsius(f: float) -> float:
    return (f - 32) * 5 / 9


def celsius_to_kelvin(c: float) -> float:
    return c - ABSOLUTE_ZERO_C


def kelvin_to_celsius(k: float) -> float:
    return k + ABSOLUTE_ZERO_C


def fahrenheit_to_kelvin(f: float) -> float:
    return celsius_to_kelvin(fahrenheit_to_celsius(f))


def kelvin_to_fahrenheit(k: float) -> float:
    return celsius_to_fahrenheit(kelvin_to_celsius(k))


class Unit(str, Enum):
    """Temperature scales."""

    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"
    KELVIN = "kelvin"

    @classmethod
    def lookup(cls, name: Union[str, Unit]) -> Unit:
        """Resolve 'celsius', 'Celsius', 'C' or '°C' to a Unit.

        Raises ValueError for anything else.
        """
        if isinstance(name, Unit):
            return name
        key = name.strip().lstrip("°").lower()
        for unit in cls:
            if key in (unit.value, unit.value[0]):
                return unit
        raise ValueError(f"Unknown temperature unit: {name!r}")

    @property
    def symbol(self) -> str:
        if self is Unit.KELVIN:
            return "K"
        return f"°{self.value[0].upper()}"


# Unit pairs map to the pure conversion functions above. Same-unit
# conversions are the identity.
_CONVERSIONS = {
    (Unit.CELSIUS, Unit.FAHRENHEIT): celsius_to_fahrenheit,
    (Unit.FAHRENHEIT, Unit.CELSIUS): fahrenheit_to_celsius,
    (Unit.CELSIUS, Unit.KELVIN): celsius_to_kelvin,
    (Unit.KELVIN, Unit.CELSIUS): kelvin_to_celsius,
    (Unit.FAHRENHEIT, Unit.KELVIN): fahrenheit_to_kelvin,
    (Unit.KELVIN, Unit.FAHRENHEIT): kelvin_to_fahrenheit,
}


def convert(value: float, from_unit: Union[str, Unit], to_unit: Union[str, Unit]) -> float:
    """Convert a temperature between any two of Celsius, Fahrenheit and Kelvin."""
    src = Unit.lookup(from_unit)
    dst = Unit.lookup(to_unit)
    if src is dst:
        return float(value)
    return _CONVERSIONS[(src, dst)](value)


class Calculator:
    """Arithmetic with a memory of the last result."""

    def __init__(self) -> None:
        self.result: Optional[Number] = None

    def _record(self, value: Number) -> Number:
        self.result = value
        return value

    def add(self, a: Number, b: Number) -> Number:
        return self._record(add(a, b))

    def subtract(self, a: Number, b: Number) -> Number:
        return self._record(subtract(a, b))

    def multiply(self, a: Number, b: Number) -> Number:
        return self._record(multiply(a, b))

    def divide(self, a: Number, b: Number) -> float:
        # A failed division leaves the previous result in place.
        return self._record(divide(a, b))


class TemperatureConverter:
    """Temperature conversion with a memory of the last result."""

    def __init__(self) -> None:
        self.result: Optional[float] = None

    def convert(self, value: float, from_unit: Union[str, Unit], to_unit: Union[str, Unit]) -> float:
        self.result = convert(value, from_unit, to_unit)
        return self.result
