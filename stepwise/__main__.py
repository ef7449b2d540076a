"""CLI for the stepwise BDD harness.

Features live in features/*.feature, steps in features/steps/*.py and hooks
in features/environment.py, all written against behave. The CLI checks the
feature files, then hands the run to behave with a Rich formatter attached.

Usage:
    python -m stepwise                                  # Run every feature under ./features
    python -m stepwise run features/calculator.feature  # Run one file
    python -m stepwise run features/calculator.feature:12
    python -m stepwise run -v -x                        # Every step, stop on first failure
    python -m stepwise run --dry-run                    # Find undefined steps only
    python -m stepwise run --tags @edge                 # Filter scenarios by tag
    python -m stepwise run -D tolerance=1e-6            # Userdata for steps and hooks
    python -m stepwise list                             # Show features and scenarios
    python -m stepwise steps                            # Show step definitions

Exit codes: 0 all scenarios passed, 1 a scenario failed or had undefined
steps, 2 the feature files could not be loaded.
"""

from __future__ import annotations

from typing import List, Optional

import typer
from behave.__main__ import main as behave_main
from rich.console import Console
from rich.markup import escape

from stepwise.config import RunConfig, parse_defines
from stepwise.features import FeatureLoadError, find_base_dir, load_features
from stepwise.reporter import render_outline

USAGE_ERROR = 2

app = typer.Typer(
    name="stepwise",
    help="Run Gherkin feature files against behave step definitions",
)


def _console(no_color: bool = False) -> Console:
    # soft_wrap keeps long step lines on one line for copy/paste and grep.
    return Console(no_color=no_color, highlight=False, soft_wrap=True)


def _fail(console: Console, message: str) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(USAGE_ERROR)


def run_features(config: RunConfig) -> int:
    """Check the feature files for a config, then run them with behave.

    Returns behave's exit code, or USAGE_ERROR if the files do not load.
    """
    console = _console(config.no_color)
    try:
        features = load_features(config.target)
    except FeatureLoadError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return USAGE_ERROR
    if not features:
        console.print(f"[yellow]No feature files found in {escape(str(config.target))}.[/yellow]")
        return 0
    return behave_main(config.behave_args())


@app.callback(invoke_without_command=True)
def default(ctx: typer.Context) -> None:
    """With no command, run every feature."""
    if ctx.invoked_subcommand is None:
        raise typer.Exit(run_features(RunConfig()))


@app.command("run")
def cmd_run(
    target: Optional[str] = typer.Argument(
        None, help="Features directory, .feature file, or file.feature:LINE (default: ./features)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print every step and full tracebacks"),
    stop: bool = typer.Option(False, "--stop", "-x", help="Stop after the first failing scenario"),
    dry_run: bool = typer.Option(False, "--dry-run", "-d", help="Match steps without running them"),
    tags: Optional[List[str]] = typer.Option(None, "--tags", "-t", help="behave tag expression, e.g. @edge or ~@slow"),
    define: Optional[List[str]] = typer.Option(None, "--define", "-D", help="Userdata as name=value"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
) -> None:
    """Run scenarios and report passed / failed / undefined steps."""
    config = RunConfig.from_target(
        target,
        verbose=verbose,
        stop_on_failure=stop,
        dry_run=dry_run,
        tags=list(tags or []),
        userdata=parse_defines(define),
    )
    config.no_color = config.no_color or no_color
    raise typer.Exit(run_features(config))


@app.command("list")
def cmd_list(
    target: Optional[str] = typer.Argument(None, help="Features directory or .feature file"),
) -> None:
    """Show features and their scenarios."""
    config = RunConfig.from_target(target)
    console = _console(config.no_color)
    try:
        features = load_features(config.target)
    except FeatureLoadError as e:
        raise _fail(console, str(e))
    render_outline(features, console)


@app.command("steps")
def cmd_steps(
    target: Optional[str] = typer.Argument(None, help="Features directory whose steps/ to load"),
) -> None:
    """Show every step definition behave would use, with its docstring."""
    config = RunConfig.from_target(target)
    console = _console(config.no_color)
    if not config.target.exists():
        raise _fail(console, f"No such feature file or directory: {config.target}")
    if find_base_dir(config.target) is None:
        console.print("[yellow]No step definitions found.[/yellow]")
        return
    raise typer.Exit(behave_main([str(config.target), "--steps-catalog", "--no-color"]))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
