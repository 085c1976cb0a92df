"""Explicit run configuration handed to every phase."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from dotfiles.bootstrap.commands import CommandRunner
from dotfiles.bootstrap.target import Target
from dotfiles.bootstrap.ui.prompts import PromptProvider


@dataclass(frozen=True)
class BootstrapContext:
    """Everything a phase needs, resolved once by the entry point.

    Attributes
    ----------
    target : Target
        Account being provisioned.
    dotfiles_dir : Path
        Repository root holding ``home/`` and ``config/``.
    runner : CommandRunner
        Executes external commands for ``target``.
    prompts : PromptProvider
        Answers gated questions.
    dry_run : bool
        When True nothing on disk is changed.
    """

    target: Target
    dotfiles_dir: Path
    runner: CommandRunner
    prompts: PromptProvider
    dry_run: bool = False

    @property
    def home(self) -> Path:
        return self.target.home


__all__ = ["BootstrapContext"]
