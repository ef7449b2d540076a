"""Rich reporting: a behave formatter for runs and the table behind `list`.

``RichFormatter`` is passed to behave as
``--format stepwise.reporter:RichFormatter``. behave hands it each feature
as it starts; once the run is over it prints a line per scenario, failure
details and a summary table.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from behave.formatter.base import Formatter
from behave.model import Feature, Scenario, Step
from rich.console import Console
from rich.markup import escape
from rich.table import Table

# Display order; behave versions that know more statuses get extra columns.
STATUS_ORDER = ["passed", "failed", "undefined", "skipped", "untested"]

STATUS_STYLES = {
    "passed": "green",
    "failed": "red",
    "undefined": "yellow",
    "skipped": "cyan",
    "untested": "dim",
}

STATUS_MARKS = {
    "passed": "✔",
    "failed": "✘",
    "undefined": "?",
    "skipped": "-",
    "untested": "·",
}

OK_STATUSES = ("passed", "skipped", "untested")


def _styled(status: str, text: str) -> str:
    style = STATUS_STYLES.get(status, "red")
    return f"[{style}]{text}[/{style}]"


def _fmt_duration(seconds: float) -> str:
    """Format a duration: '850ms' below a second, '1.2s' above."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.1f}s"


def scenario_status(scenario: Scenario) -> str:
    """Status name of a scenario, with undefined steps reported as 'undefined'."""
    step_statuses = [step.status.name for step in scenario.all_steps]
    if "undefined" in step_statuses:
        return "undefined"
    return scenario.status.name


def problem_step(scenario: Scenario) -> Step | None:
    """The first step that failed or is undefined."""
    for step in scenario.all_steps:
        if step.status.name not in OK_STATUSES:
            return step
    return None


def _error_lines(step: Step, verbose: bool) -> list[str]:
    if step.status.name == "undefined":
        return ["undefined step"]
    lines = (step.error_message or "").strip().splitlines()
    exc = getattr(step, "exception", None)
    if verbose or exc is None:
        return lines
    if isinstance(exc, AssertionError):
        return [str(exc) or "assertion failed"]
    return [f"{type(exc).__name__}: {exc}"]


class RichFormatter(Formatter):
    name = "rich"
    description = "Scenario marks, failure details and a summary table"

    def __init__(self, stream_opener, config):
        super().__init__(stream_opener, config)
        self.features: list[Feature] = []

    def feature(self, feature):
        self.features.append(feature)

    def close(self):
        console = Console(
            file=self.open(),
            no_color=not getattr(self.config, "color", True),
            highlight=False,
            soft_wrap=True,
        )
        self.render(console)
        super().close()

    # -- rendering ----------------------------------------------------------

    @property
    def dry_run(self) -> bool:
        return bool(getattr(self.config, "dry_run", False))

    @property
    def verbose(self) -> bool:
        return "plain" in (getattr(self.config, "format", None) or [])

    def shown_scenarios(self, feature: Feature) -> list[Scenario]:
        """Scenarios that ran: not filtered out by tags, not cut off by --stop."""
        hidden = ("skipped",) if self.dry_run else ("skipped", "untested")
        return [s for s in feature.walk_scenarios() if scenario_status(s) not in hidden]

    def render(self, console: Console) -> None:
        counts = {"feature": Counter(), "scenario": Counter(), "step": Counter()}
        for feature in self.features:
            scenarios = self.shown_scenarios(feature)
            if not scenarios:
                continue
            console.print(
                f"\n[bold]Feature:[/bold] {escape(feature.name)}  [dim]# {escape(str(feature.location))}[/dim]"
            )
            statuses = []
            for scenario in scenarios:
                status = scenario_status(scenario)
                statuses.append(status)
                counts["scenario"][status] += 1
                counts["step"].update(step.status.name for step in scenario.all_steps)
                self._print_scenario(console, scenario, status)
            worst = next((s for s in statuses if s not in OK_STATUSES), statuses[0])
            counts["feature"][worst] += 1

        self._print_summary(console, counts)

    def _print_scenario(self, console: Console, scenario: Scenario, status: str) -> None:
        mark = STATUS_MARKS.get(status, "!")
        console.print(
            f"  {_styled(status, mark + ' ' + escape(scenario.name))}"
            f"  [dim]# {escape(str(scenario.location))}[/dim]"
        )
        step = problem_step(scenario)
        if step is None:
            return
        step_status = step.status.name
        console.print(
            f"      {_styled(step_status, escape(f'{step.keyword} {step.name}'))}"
            f"  [dim]# {escape(str(step.location))}[/dim]"
        )
        for line in _error_lines(step, self.verbose):
            console.print(f"        {_styled(step_status, escape(line))}")

    def _print_summary(self, console: Console, counts: dict[str, Counter]) -> None:
        seen = set().union(*counts.values())
        columns = [s for s in STATUS_ORDER if s in seen] + sorted(seen - set(STATUS_ORDER))

        table = Table(title="Summary", show_header=True, header_style="bold")
        table.add_column("", style="dim", min_width=10)
        for status in columns:
            table.add_column(status, style=STATUS_STYLES.get(status, "red"), justify="right")
        table.add_column("total", justify="right")
        for level, label in (("feature", "Features"), ("scenario", "Scenarios"), ("step", "Steps")):
            level_counts = counts[level]
            table.add_row(label, *(str(level_counts[s]) for s in columns), str(sum(level_counts.values())))

        console.print()
        console.print(table)

        passed = all(s in OK_STATUSES for s in counts["scenario"])
        if getattr(self.config, "stop", False) and not passed:
            console.print("[yellow]Stopped after the first failing scenario (--stop).[/yellow]")
        if self.dry_run:
            console.print("[dim]Dry run: no steps were executed.[/dim]")

        duration = sum(feature.duration for feature in self.features)
        verdict = "[bold green]PASSED[/bold green]" if passed else "[bold red]FAILED[/bold red]"
        console.print(f"{verdict} in {_fmt_duration(duration)}")


def _tag_list(tags: Iterable[str]) -> str:
    return " ".join(f"@{tag}" for tag in sorted(set(tags)))


def render_outline(features: list[Feature], console: Console) -> None:
    """Print features and their scenarios (the `list` command).

    Outlines are shown expanded, one row per Examples row.
    """
    if not features:
        console.print("[yellow]No feature files found.[/yellow]")
        return

    table = Table(title="Features", show_header=True, header_style="bold")
    table.add_column("Feature", style="green", min_width=15)
    table.add_column("Scenario", min_width=30)
    table.add_column("Tags", style="cyan")
    table.add_column("Steps", justify="right")
    table.add_column("Location", style="dim")
    for feature in features:
        scenarios = list(feature.walk_scenarios())
        for i, scenario in enumerate(scenarios):
            table.add_row(
                escape(feature.name) if i == 0 else "",
                escape(scenario.name),
                _tag_list([*feature.tags, *scenario.tags]),
                str(len(scenario.steps)),
                escape(str(scenario.location)),
            )
        if not scenarios:
            table.add_row(escape(feature.name), "[dim]no scenarios[/dim]", "", "0", escape(str(feature.location)))
    console.print()
    console.print(table)
    console.print()
