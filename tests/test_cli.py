"""Tests for the Typer CLI: arguments, flags and exit codes.

Runs go through behave in-process, so the shipped features and the
throwaway trees from the feature_tree fixture are real behave runs.
"""

import sys
from pathlib import Path

from typer.testing import CliRunner

from stepwise.__main__ import app

ROOT = Path(__file__).parent.parent
FEATURES_DIR = ROOT / "features"

runner = CliRunner()

FAILING = """\
    Feature: Failing
      Scenario: Good
        Given a counter at 1
        Then the counter is 1

      Scenario: Bad
        Given a counter at 1
        Then the counter is 5

      Scenario: After bad
        Given a counter at 2
        Then the counter is 2
"""


def _invoke(*args, **kwargs):
    return runner.invoke(app, list(args), env={"COLUMNS": "200"}, **kwargs)


# --- run: shipped examples ---

def test_bare_invocation_runs_all(monkeypatch):
    monkeypatch.chdir(ROOT)
    monkeypatch.delenv("STEPWISE_FEATURES_DIR", raising=False)
    result = _invoke()
    assert result.exit_code == 0, result.output
    assert "Feature: Calculator" in result.output
    assert "Feature: Temperature conversion" in result.output
    assert "PASSED" in result.output


def test_run_with_no_target_runs_all(monkeypatch):
    monkeypatch.chdir(ROOT)
    monkeypatch.delenv("STEPWISE_FEATURES_DIR", raising=False)
    result = _invoke("run")
    assert result.exit_code == 0, result.output
    assert "Add two numbers" in result.output
    assert "Absolute zero in Kelvin" in result.output


def test_run_features_dir_from_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STEPWISE_FEATURES_DIR", str(FEATURES_DIR))
    result = _invoke("run")
    assert result.exit_code == 0, result.output


def test_run_single_file():
    result = _invoke("run", str(FEATURES_DIR / "temperature.feature"))
    assert result.exit_code == 0, result.output
    assert "Absolute zero in Kelvin" in result.output
    assert "Feature: Calculator" not in result.output


def test_run_single_scenario_by_line():
    result = _invoke("run", f"{FEATURES_DIR / 'calculator.feature'}:10")
    assert result.exit_code == 0, result.output
    assert "Add two numbers" in result.output
    assert "Subtract two numbers" not in result.output


def test_verbose_prints_steps():
    result = _invoke("run", f"{FEATURES_DIR / 'calculator.feature'}:10", "--verbose")
    assert result.exit_code == 0, result.output
    assert "I add 5 and 3" in result.output


def test_run_tags():
    result = _invoke("run", str(FEATURES_DIR), "--tags", "@edge")
    assert result.exit_code == 0, result.output
    assert "Absolute zero in Kelvin" in result.output
    assert "Freezing point" not in result.output


def test_userdata_reaches_hooks(feature_tree):
    root = feature_tree({
        "start.feature": """\
            Feature: Start
              Scenario: Counter starts from userdata
                When I increment it
                Then the counter is 8
        """,
        "environment.py": """\
            def before_scenario(context, scenario):
                context.count = int(context.config.userdata.get("start", "0"))
        """,
    })
    result = _invoke("run", str(root), "-D", "start=7")
    assert result.exit_code == 0, result.output


# --- run: failures and exit codes ---

def test_failing_run_exits_1_and_shows_values(feature_tree):
    root = feature_tree({"failing.feature": FAILING})
    result = _invoke("run", str(root))
    assert result.exit_code == 1
    assert "expected 5, got 1" in result.output
    assert "After bad" in result.output
    assert "FAILED" in result.output


def test_exception_in_step_reports_type_and_message(feature_tree):
    root = feature_tree({"boom.feature": """\
        Feature: Boom
          Scenario: Explodes
            Given a counter at 1
            When it explodes
            Then the counter is 1
    """})
    result = _invoke("run", str(root))
    assert result.exit_code == 1
    assert "RuntimeError: boom" in result.output


def test_stop_flag(feature_tree):
    root = feature_tree({"failing.feature": FAILING})
    result = _invoke("run", str(root), "-x")
    assert result.exit_code == 1
    assert "After bad" not in result.output
    assert "--stop" in result.output


def test_undefined_step_exits_1_with_snippet(feature_tree):
    root = feature_tree({"todo.feature": """\
        Feature: Todo
          Scenario: Not written yet
            Given a counter at 1
            When I double it

          Scenario: Still fine
            Given a counter at 3
            Then the counter is 3
    """})
    result = _invoke("run", str(root))
    assert result.exit_code == 1
    assert "undefined step" in result.output
    assert "I double it" in result.output
    assert "NotImplementedError" in result.output
    assert "Still fine" in result.output


def test_dry_run(feature_tree):
    root = feature_tree({"failing.feature": FAILING})
    result = _invoke("run", str(root), "--dry-run")
    assert result.exit_code == 0, result.output
    assert "Dry run" in result.output


# --- run: load errors ---

def test_syntax_error_exits_2(feature_tree):
    root = feature_tree({"bad.feature": "Scenario: Lost\n  Given a counter at 1\n"})
    result = _invoke("run", str(root))
    assert result.exit_code == 2
    assert "Error:" in result.output
    assert "bad.feature" in result.output


def test_invalid_utf8_exits_2(feature_tree):
    root = feature_tree({})
    (root / "binary.feature").write_bytes(b"Feature: x\n  Scenario: \xff\xfe\n")
    result = _invoke("run", str(root))
    assert result.exit_code == 2
    assert "not valid UTF-8" in result.output


def test_missing_path_exits_2(tmp_path):
    result = _invoke("run", str(tmp_path / "missing.feature"))
    assert result.exit_code == 2
    assert "No such feature file or directory" in result.output


def test_no_feature_files_exits_0(tmp_path):
    result = _invoke("run", str(tmp_path))
    assert result.exit_code == 0
    assert "No feature files found" in result.output


# --- list / steps ---

def test_list_shows_scenarios():
    result = _invoke("list", str(FEATURES_DIR))
    assert result.exit_code == 0, result.output
    assert "Add two numbers" in result.output
    assert "Absolute zero in Kelvin" in result.output
    assert "@edge" in result.output


def test_list_missing_path(tmp_path):
    result = _invoke("list", str(tmp_path / "nowhere"))
    assert result.exit_code == 2


def test_list_invalid_utf8(tmp_path):
    (tmp_path / "binary.feature").write_bytes(b"\xff\xfeFeature: x\n")
    result = _invoke("list", str(tmp_path))
    assert result.exit_code == 2
    assert "not valid UTF-8" in result.output


def test_steps_catalog():
    result = _invoke("steps", str(FEATURES_DIR))
    assert result.exit_code == 0, result.output
    assert "I add {a:Number} and {b:Number}" in result.output


def test_steps_catalog_empty(tmp_path):
    result = _invoke("steps", str(tmp_path))
    assert result.exit_code == 0
    assert "No step definitions found" in result.output


def test_step_modules_are_not_left_in_sys_modules():
    result = _invoke("run", str(FEATURES_DIR / "calculator.feature"))
    assert result.exit_code == 0, result.output
    assert not [name for name in sys.modules if name.endswith("calculator_steps")]
