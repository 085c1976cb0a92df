"""Templated global git configuration with an operator-supplied identity.

The repository ships ``home/.gitconfig`` without a personal identity. On
confirmation the template is copied to a generated file under the target's
state directory, ``user.name`` and ``user.email`` are written into the copy
with ``git config -f``, and ``~/.gitconfig`` is linked to the copy.
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass

from dotfiles import config as _config
from dotfiles.bootstrap.context import BootstrapContext
from dotfiles.bootstrap.linker import link
from dotfiles.bootstrap.pipeline.status import StepResult
from dotfiles.bootstrap.target import hand_over

logger = logging.getLogger(__name__)

STEP_NAME = "link ~/.gitconfig"


@dataclass(frozen=True)
class GitIdentity:
    name: str = ""
    email: str = ""


def ask_identity(ctx: BootstrapContext) -> GitIdentity:
    """Ask for ``user.name``/``user.email``; environment values are defaults."""
    name = ctx.prompts.ask_text(
        "  Git user.name  (e.g. jdoe):",
        default=os.environ.get(_config.GIT_NAME_ENV_VAR, ""),
    )
    email = ctx.prompts.ask_text(
        "  Git user.email (e.g. jdoe@example.com):",
        default=os.environ.get(_config.GIT_EMAIL_ENV_VAR, ""),
    )
    return GitIdentity(name=name.strip(), email=email.strip())


def configure_gitconfig(ctx: BootstrapContext) -> StepResult:
    r"""Generate the personal git config from the template and link it.

    Parameters
    ----------
    ctx : BootstrapContext
        Run configuration.

    Returns
    -------
    StepResult
        ``skipped`` when the template is missing or the operator declines,
        ``failed`` when the copy cannot be written or ``git config`` fails,
        otherwise the result of linking ``~/.gitconfig``.

    Notes
    -----
    An empty answer keeps the template's value for that field.
    """
    template = ctx.dotfiles_dir / _config.GITCONFIG_TEMPLATE
    if not template.is_file():
        return StepResult.skipped(STEP_NAME, "no template in repository")

    if not ctx.prompts.confirm(_config.GITCONFIG_PROMPT):
        logger.info("Skipping git config; existing ~/.gitconfig left untouched")
        return StepResult.skipped(STEP_NAME, "declined; left untouched")

    identity = ask_identity(ctx)
    generated_dir = ctx.home / _config.GENERATED_DIR_RELATIVE
    generated = generated_dir / _config.GENERATED_GITCONFIG_NAME

    if ctx.dry_run:
        logger.info("Would write %s from %s", generated, template)
    else:
        try:
            generated_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(template, generated)
        except OSError as error:
            logger.error("Could not write %s: %s", generated, error)
            return StepResult.failed(STEP_NAME, str(error))

    for key, value in (("user.name", identity.name), ("user.email", identity.email)):
        if not value:
            continue
        result = ctx.runner.run(["git", "config", "-f", str(generated), key, value])
        if not result.ok:
            logger.error("git config %s failed: %s", key, result.summary())
            return StepResult.failed(STEP_NAME, f"git config {key}: {result.summary()}")

    if ctx.dry_run:
        return StepResult.ok(STEP_NAME, f"would link -> {generated}")
    try:
        for path in (generated_dir, generated):
            hand_over(path, ctx.target)
    except OSError as error:
        logger.error("Could not hand over %s: %s", generated, error)
        return StepResult.failed(STEP_NAME, str(error))

    return link(
        generated,
        ctx.home / _config.GITCONFIG_DESTINATION,
        target=ctx.target,
        dry_run=ctx.dry_run,
        name=STEP_NAME,
    )


__all__ = ["GitIdentity", "ask_identity", "configure_gitconfig"]
