"""Shared fixtures: throwaway feature directories under tmp_path."""

import textwrap
from pathlib import Path

import pytest
from behave import runner as behave_runner
# Import before any run so the steps catalog binds the same registry as the runner.
import behave.formatter.steps  # noqa: F401


COUNTER_STEPS = '''
from behave import given, then, when

from stepwise.expect import assert_equal


@given("a counter at {n:d}")
def step_counter(context, n):
    context.count = n


@when("I increment it")
def step_increment(context):
    context.count += 1


@when("it explodes")
def step_explode(context):
    raise RuntimeError("boom")


@then("the counter is {n:d}")
def step_counter_is(context, n):
    assert_equal(context.count, n)
'''


@pytest.fixture(autouse=True)
def fresh_step_registry(monkeypatch):
    """behave keeps step definitions in one module-level registry.

    Each test starts with it empty so trees from different tmp_paths that
    define the same sentences do not collide.
    """
    # behave's main() rebinds step_registry.registry on each run; the runner
    # and the @given/@when/@then decorators keep the one imported here.
    registry = behave_runner.the_step_registry
    monkeypatch.setattr(registry, "steps", {step_type: [] for step_type in registry.steps})


@pytest.fixture
def feature_tree(tmp_path):
    """Build a features directory from {relative path: text} and return it.

    A steps/counter_steps.py module is always included.
    """
    def build(files: dict[str, str], steps: str = COUNTER_STEPS) -> Path:
        root = tmp_path / "features"
        (root / "steps").mkdir(parents=True, exist_ok=True)
        (root / "steps" / "counter_steps.py").write_text(textwrap.dedent(steps), encoding="utf-8")
        for name, text in files.items():
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(text), encoding="utf-8")
        return root

    return build
