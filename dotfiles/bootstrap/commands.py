"""External command execution with consistent logging.

All package-manager, network and VCS work goes through ``CommandRunner.run``.
The runner logs every command line, captures output, applies ``sudo`` for
privileged commands (unless already root) and for user-scoped commands when
running elevated on behalf of another user, and honours dry-run.

``attempt`` and ``attempt_piped`` turn a command into a ``StepResult``: a
non-zero exit or a missing executable is logged at ERROR and reported as a
failed step, and the caller carries on.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from dotfiles.bootstrap.pipeline.status import StepResult
from dotfiles.bootstrap.target import Target
from dotfiles.exceptions import ExternalCommandError

logger = logging.getLogger(__name__)

COMMAND_NOT_EXECUTABLE: int = 126
COMMAND_NOT_FOUND: int = 127


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def summary(self) -> str:
        """Return a one-line description of a failure for the run report."""
        lines = [ln for ln in (self.stderr or self.stdout).strip().splitlines() if ln]
        tail = f": {lines[-1]}" if lines else ""
        return f"exit {self.returncode}{tail}"


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


class CommandRunner:
    """Run external commands on behalf of a ``Target``.

    Parameters
    ----------
    target : Target
        Account the commands act for; its home is exported as ``HOME``.
    dry_run : bool, optional
        Log commands without executing them.
    """

    def __init__(self, target: Target, *, dry_run: bool = False) -> None:
        self.target = target
        self.dry_run = dry_run

    def which(self, name: str) -> str | None:
        return shutil.which(name)

    def _build_argv(
        self,
        argv: Sequence[str],
        *,
        privileged: bool,
        as_user: bool,
        env: Mapping[str, str] | None,
    ) -> list[str]:
        argv_list = list(argv)
        if privileged:
            if os.geteuid() != 0:
                argv_list = ["sudo", *argv_list]
        elif as_user and self.target.elevated:
            if env:
                argv_list = ["env", *(f"{k}={v}" for k, v in env.items()), *argv_list]
            argv_list = ["sudo", "-u", self.target.user, "-H", *argv_list]
        return argv_list

    def run(
        self,
        argv: Sequence[str],
        *,
        privileged: bool = False,
        as_user: bool = False,
        input_text: str | None = None,
        env: Mapping[str, str] | None = None,
        check: bool = False,
        capture: bool = True,
    ) -> CmdResult:
        """Run a command and capture its output.

        Parameters
        ----------
        argv : Sequence[str]
            Command and arguments.
        privileged : bool, optional
            Run through ``sudo`` unless the process is already root.
        as_user : bool, optional
            Run as the target user (``sudo -u``) when elevated.
        input_text : str or None, optional
            Text fed to the command's standard input.
        env : Mapping[str, str] or None, optional
            Extra environment variables.
        check : bool, optional
            Raise ``ExternalCommandError`` instead of returning a failed
            result.
        capture : bool, optional
            Capture output. Pass False for commands that talk to the
            operator (password prompts).

        Returns
        -------
        CmdResult
            Exit status and captured output. A missing executable yields
            return code 127, one that cannot be executed 126.

        Raises
        ------
        ExternalCommandError
            Only when ``check`` is True and the command failed.
        """
        argv_list = self._build_argv(
            argv, privileged=privileged, as_user=as_user, env=env
        )
        logger.info("CMD %s", _fmt_argv(argv_list))

        if self.dry_run:
            return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

        full_env = dict(os.environ, HOME=str(self.target.home), **(env or {}))
        try:
            p = subprocess.run(
                argv_list,
                input=input_text,
                text=True,
                stdout=subprocess.PIPE if capture else None,
                stderr=subprocess.PIPE if capture else None,
                env=full_env,
                check=False,
            )
            result = CmdResult(
                argv=argv_list,
                returncode=p.returncode,
                stdout=p.stdout or "",
                stderr=p.stderr or "",
            )
        except FileNotFoundError:
            result = CmdResult(
                argv=argv_list,
                returncode=COMMAND_NOT_FOUND,
                stdout="",
                stderr=f"command not found: {argv_list[0]}",
            )
        except OSError as error:
            result = CmdResult(
                argv=argv_list,
                returncode=COMMAND_NOT_EXECUTABLE,
                stdout="",
                stderr=f"cannot execute {argv_list[0]}: {error.strerror or error}",
            )

        if result.stdout:
            logger.debug("STDOUT %s", result.stdout.strip())
        if result.stderr:
            logger.debug("STDERR %s", result.stderr.strip())

        if check and not result.ok:
            raise ExternalCommandError(
                f"Command failed ({result.returncode}): {_fmt_argv(argv_list)}",
                context={"stderr": result.stderr.strip()},
            )
        return result

    def fetch(self, url: str) -> str:
        """Download ``url`` as text with curl.

        Raises
        ------
        ExternalCommandError
            If the download fails.
        """
        return self.run(["curl", "-fsSL", url], check=True).stdout


def attempt(
    runner: CommandRunner,
    name: str,
    argv: Sequence[str],
    **kwargs,
) -> StepResult:
    """Run ``argv`` best-effort and report the outcome as a step result."""
    result = runner.run(argv, **kwargs)
    if result.ok:
        return StepResult.ok(name)
    logger.error("%s failed: %s", name, result.summary())
    return StepResult.failed(name, result.summary())


def attempt_piped(
    runner: CommandRunner,
    name: str,
    url: str,
    argv: Sequence[str],
    **kwargs,
) -> StepResult:
    """Download ``url`` and feed it to ``argv`` on stdin, best-effort.

    This is the ``curl ... | sh`` idiom with both halves checked.
    """
    try:
        payload = runner.fetch(url)
    except ExternalCommandError as error:
        logger.error("%s failed: could not download %s (%s)", name, url, error)
        return StepResult.failed(name, f"download failed: {url}")
    return attempt(runner, name, argv, input_text=payload, **kwargs)


__all__ = [
    "COMMAND_NOT_EXECUTABLE",
    "COMMAND_NOT_FOUND",
    "CmdResult",
    "CommandRunner",
    "attempt",
    "attempt_piped",
]
