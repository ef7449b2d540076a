"""Steps for temperature.feature."""

from behave import given, then, when

from stepwise.calculator import TemperatureConverter, celsius_to_fahrenheit, fahrenheit_to_celsius
from stepwise.expect import assert_close
from stepwise.step_types import register_step_types

register_step_types()


@given("I have a temperature converter")
def step_have_converter(context):
    context.converter = TemperatureConverter()


@when("I convert {value:Number} degrees {src:Unit} to {dst:Unit}")
def step_convert(context, value, src, dst):
    context.converter.convert(value, src, dst)


@when("I convert {value:Number} degrees Celsius to Fahrenheit and back")
def step_round_trip(context, value):
    context.converter.result = fahrenheit_to_celsius(celsius_to_fahrenheit(value))


@then("the converted temperature should be {expected:Number}")
def step_converted_is(context, expected):
    assert_close(context.converter.result, expected, tol=context.tolerance)
