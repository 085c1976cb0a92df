"""Hack Nerd Font installation into the target's user font directory."""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path

from dotfiles import config as _config
from dotfiles.bootstrap.commands import attempt
from dotfiles.bootstrap.context import BootstrapContext
from dotfiles.bootstrap.pipeline.status import StepResult, StepStatus
from dotfiles.bootstrap.target import hand_over
from dotfiles.bootstrap.ui.basic import ui_status

logger = logging.getLogger(__name__)

STEP_NAME = "install Hack Nerd Font"


def font_installed(font_dir: Path) -> bool:
    return font_dir.is_dir() and any(font_dir.glob(_config.FONT_INSTALLED_GLOB))


def run_fonts_phase(ctx: BootstrapContext) -> list[StepResult]:
    r"""Download and unpack the font unless a copy is already installed.

    The archive is fetched into a scratch directory, extracted over the font
    directory and the font cache is refreshed when ``fc-cache`` exists.

    Returns
    -------
    list[StepResult]
        The install step and, when it ran, the font cache refresh.
    """
    font_dir = ctx.home / _config.FONT_DIR_RELATIVE
    if font_installed(font_dir):
        return [StepResult.skipped(STEP_NAME, "already installed")]

    try:
        if not ctx.dry_run:
            font_dir.mkdir(parents=True, exist_ok=True)
            hand_over(font_dir, ctx.target)
        scratch = Path(tempfile.mkdtemp(prefix="dotfiles-font-"))
    except OSError as error:
        logger.error("%s failed: %s", STEP_NAME, error)
        return [StepResult.failed(STEP_NAME, str(error))]

    logger.info("Installing Hack Nerd Font into %s", font_dir)
    runner = ctx.runner
    try:
        hand_over(scratch, ctx.target)
        archive = scratch / _config.FONT_ARCHIVE_NAME
        with ui_status("Downloading Hack Nerd Font..."):
            download = attempt(
                runner,
                STEP_NAME,
                ["curl", "-fLo", str(archive), _config.FONT_URL],
                as_user=True,
            )
        if download.status is StepStatus.FAILED:
            return [download]
        results = [
            attempt(
                runner,
                STEP_NAME,
                ["unzip", "-o", str(archive), "-d", str(font_dir)],
                as_user=True,
            )
        ]
    except OSError as error:
        logger.error("%s failed: %s", STEP_NAME, error)
        return [StepResult.failed(STEP_NAME, str(error))]
    finally:
        shutil.rmtree(scratch, ignore_errors=True)

    if runner.which("fc-cache") is None:
        results.append(StepResult.skipped("refresh font cache", "fc-cache not found"))
    else:
        results.append(
            attempt(
                runner,
                "refresh font cache",
                ["fc-cache", "-f", str(font_dir)],
                as_user=True,
            )
        )
    return results


__all__ = ["font_installed", "run_fonts_phase"]
