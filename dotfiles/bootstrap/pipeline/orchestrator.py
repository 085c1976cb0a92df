"""Orchestrator sequencing the bootstrap phases.

Runs the packages, tools, fonts and links phases in strict order, collects
their step results into a ``RunReport`` and renders the summary table at the
end. External failures never stop the run: a phase function that lets an
``ExternalCommandError``, a ``LinkError`` or an ``OSError`` escape is recorded
as a single failed step and the next phase starts. Any other application
error is an internal error and propagates to the entry point.

Typical usage::

    from dotfiles.bootstrap.pipeline import orchestrator
    report = orchestrator.run_phases(ctx)

"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Sequence
from dataclasses import dataclass

from dotfiles import config as _config
from dotfiles.bootstrap.console_helpers import _RICH_CONSOLE
from dotfiles.bootstrap.context import BootstrapContext
from dotfiles.bootstrap.fonts import run_fonts_phase
from dotfiles.bootstrap.linker import link_dotfiles
from dotfiles.bootstrap.provision import run_packages_phase
from dotfiles.bootstrap.toolchain import run_tools_phase
from dotfiles.bootstrap.ui.basic import ui_rule, ui_success, ui_warning
from dotfiles.exceptions import ExternalCommandError, LinkError

from .status import RunReport, StepResult, StepStatus, _render_summary_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Phase:
    """A named unit of the run.

    Attributes
    ----------
    phase_id : str
        Identifier used on the command line (``--skip``).
    title : str
        Caption shown in the section rule.
    run : Callable[[BootstrapContext], list[StepResult]]
        Phase implementation.
    """

    phase_id: str
    title: str
    run: Callable[[BootstrapContext], list[StepResult]]


def default_phases() -> list[Phase]:
    return [
        Phase(_config.PHASE_PACKAGES, "Package sources and packages", run_packages_phase),
        Phase(_config.PHASE_TOOLS, "Toolchain and shell", run_tools_phase),
        Phase(_config.PHASE_FONTS, "Fonts", run_fonts_phase),
        Phase(_config.PHASE_LINKS, "Dotfile links", link_dotfiles),
    ]


def run_phases(
    ctx: BootstrapContext,
    phases: Sequence[Phase] | None = None,
    skip: Collection[str] = (),
) -> RunReport:
    r"""Run every phase in order and aggregate the results.

    Parameters
    ----------
    ctx : BootstrapContext
        Run configuration shared by all phases.
    phases : Sequence[Phase] or None, optional
        Phases to run; defaults to :func:`default_phases`.
    skip : Collection[str], optional
        Phase ids not to run; each is reported as skipped.

    Returns
    -------
    RunReport
        All step results in execution order.

    Raises
    ------
    AppError
        Internal errors other than ``ExternalCommandError``/``LinkError``.
    """
    phases = default_phases() if phases is None else phases
    report = RunReport()
    for phase in phases:
        ui_rule(phase.title)
        if phase.phase_id in skip:
            logger.info("Skipping phase %s", phase.phase_id)
            report.extend(
                phase.phase_id,
                [StepResult.skipped(phase.title, "skipped on command line")],
            )
            continue
        logger.info("Running phase %s", phase.phase_id)
        try:
            results = phase.run(ctx)
        except (ExternalCommandError, LinkError) as error:
            logger.error("Phase %s aborted: %s", phase.phase_id, error)
            results = [StepResult.failed(phase.title, error.message)]
        except OSError as error:
            logger.error("Phase %s aborted: %s", phase.phase_id, error)
            results = [StepResult.failed(phase.title, str(error))]
        report.extend(phase.phase_id, results)
    return report


def render_summary(report: RunReport) -> None:
    """Print the summary table and a closing line."""
    _RICH_CONSOLE.print(_render_summary_table(report))
    failed = report.count(StepStatus.FAILED)
    if failed:
        ui_warning(f"{failed} step(s) failed; re-run the bootstrap to retry.")
    else:
        ui_success("Done.")


__all__ = ["Phase", "default_phases", "render_summary", "run_phases"]
