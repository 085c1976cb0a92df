"""Step results, the run report and its summary table.

Every unit of work a phase performs yields a ``StepResult``. The orchestrator
collects them, in execution order, into a ``RunReport`` that is rendered as a
Rich table at the end of the run so partial failures are visible instead of
scrolling past in the log.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class StepStatus(str, Enum):
    """Outcome of a single step."""

    OK = "ok"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class StepResult:
    """Outcome of one step of one phase.

    Attributes
    ----------
    name : str
        Short human-readable step name (e.g. ``"link .zshrc"``).
    status : StepStatus
        Outcome.
    detail : str
        Why the step was skipped or failed, or what it did.
    phase : str
        Phase id the step belongs to; filled in by the orchestrator.
    """

    name: str
    status: StepStatus
    detail: str = ""
    phase: str = ""

    @classmethod
    def ok(cls, name: str, detail: str = "") -> "StepResult":
        return cls(name, StepStatus.OK, detail)

    @classmethod
    def skipped(cls, name: str, detail: str = "") -> "StepResult":
        return cls(name, StepStatus.SKIPPED, detail)

    @classmethod
    def failed(cls, name: str, detail: str = "") -> "StepResult":
        return cls(name, StepStatus.FAILED, detail)


@dataclass
class RunReport:
    """All step results of one run, in execution order."""

    results: list[StepResult] = field(default_factory=list)

    def extend(self, phase: str, results: list[StepResult]) -> None:
        for result in results:
            self.results.append(
                StepResult(result.name, result.status, result.detail, phase)
            )

    def count(self, status: StepStatus) -> int:
        return sum(1 for r in self.results if r.status is status)

    @property
    def failed(self) -> list[StepResult]:
        return [r for r in self.results if r.status is StepStatus.FAILED]


def _status_label(status: StepStatus) -> str:
    """Return a styled label for a step status.

    Examples
    --------
    >>> _status_label(StepStatus.OK)
    '[green]✅ Done[/green]'
    """
    labels = {
        StepStatus.OK: "[green]✅ Done[/green]",
        StepStatus.SKIPPED: "[dim]⏭  Skipped[/dim]",
        StepStatus.FAILED: "[red]❌ Failed[/red]",
    }
    return labels[status]


def _render_summary_table(report: RunReport) -> Any:
    """Construct a Rich table summarising every step of the run.

    Parameters
    ----------
    report : RunReport
        Results to render.

    Returns
    -------
    rich.table.Table
        One row per step plus a caption with per-status counts.
    """
    from dotfiles.bootstrap.console_helpers import Table

    table = Table(
        title="Bootstrap summary",
        show_header=True,
        header_style="bold blue",
        caption=(
            f"{report.count(StepStatus.OK)} done, "
            f"{report.count(StepStatus.SKIPPED)} skipped, "
            f"{report.count(StepStatus.FAILED)} failed"
        ),
    )
    table.add_column("Phase", style="bold")
    table.add_column("Step")
    table.add_column("Status")
    table.add_column("Detail", overflow="fold")
    for result in report.results:
        table.add_row(
            result.phase, result.name, _status_label(result.status), result.detail
        )
    return table


__all__ = [
    "RunReport",
    "StepResult",
    "StepStatus",
    "_render_summary_table",
    "_status_label",
]
