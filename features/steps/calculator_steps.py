"""Steps for calculator.feature."""

from behave import given, then, when

from stepwise.calculator import Calculator, DivisionByZero, add
from stepwise.expect import assert_equal
from stepwise.step_types import parse_number, register_step_types

register_step_types()


@given("I have a calculator")
def step_have_calculator(context):
    context.calculator = Calculator()


@when("I add {a:Number} and {b:Number}")
def step_add(context, a, b):
    context.calculator.add(a, b)


@when("I subtract {b:Number} from {a:Number}")
def step_subtract(context, a, b):
    context.calculator.subtract(a, b)


@when("I multiply {a:Number} by {b:Number}")
def step_multiply(context, a, b):
    context.calculator.multiply(a, b)


@when("I divide {a:Number} by {b:Number}")
def step_divide(context, a, b):
    """A zero divisor is kept on context.error for the Then step to check."""
    try:
        context.calculator.divide(a, b)
    except DivisionByZero as e:
        context.error = e


@then("the result should be {expected:Number}")
def step_result_is(context, expected):
    assert_equal(context.calculator.result, expected)


@then("the result should be empty")
def step_result_empty(context):
    assert_equal(context.calculator.result, None)


@then("I should see a division by zero error")
def step_division_error(context):
    assert isinstance(context.error, DivisionByZero), f"expected DivisionByZero, got {context.error!r}"


@then("these sums should hold:")
def step_sums_table(context):
    """Table columns: a | b | sum."""
    for row in context.table:
        a, b, expected = (parse_number(row[k]) for k in ("a", "b", "sum"))
        assert_equal(add(a, b), expected, what=f"{a} + {b}")
