"""Entrypoint and orchestration helpers for the bootstrap.

This module parses the command line, configures logging, resolves the target
account once, builds the ``BootstrapContext`` every phase receives and runs
the orchestrator. It owns the exit-code contract:

- ``0`` when the run completes, even if individual external steps failed;
- ``1`` on an internal error (``AppError``), e.g. an unresolvable target;
- ``130`` when interrupted.

Examples
--------
>>> import dotfiles.bootstrap.app_runner as runner
>>> args = runner.parse_cli_args(['--assume-no', '--skip', 'packages'])
>>> runner.run(args)  # doctest: +SKIP
0

"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from dotfiles import config as _config
from dotfiles.bootstrap.commands import CommandRunner
from dotfiles.bootstrap.context import BootstrapContext
from dotfiles.bootstrap.pipeline import orchestrator
from dotfiles.bootstrap.target import resolve_target
from dotfiles.bootstrap.ui.basic import ui_error, ui_header, ui_info
from dotfiles.bootstrap.ui.prompts import (
    AssumePrompts,
    InteractivePrompts,
    PromptProvider,
)
from dotfiles.exceptions import AppError

logger = logging.getLogger(__name__)


def configure_logging(
    level: str = "INFO", enable_file: bool = True, log_dir: Path | None = None
) -> None:
    """Configure root logging: stderr always, plus the install log file.

    The log file is written to ``log_dir`` (default ``config.LOG_DIR``).
    """
    log_dir = _config.LOG_DIR if log_dir is None else log_dir
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if enable_file:
        try:
            log_dir.mkdir(exist_ok=True)
            handlers.insert(
                0,
                logging.FileHandler(log_dir / _config.LOG_FILENAME_INSTALL, mode="a"),
            )
        except OSError as error:
            print(f"File logging disabled: {error}", file=sys.stderr)
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=_config.LOG_FORMAT,
        handlers=handlers,
    )


def parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    r"""Parse command-line arguments for the bootstrap.

    Parameters
    ----------
    argv : list of str or None, optional
        Argument strings to parse; defaults to ``sys.argv[1:]``.

    Returns
    -------
    argparse.Namespace
        Fields ``assume``, ``skip``, ``dry_run``, ``log_level`` and
        ``dotfiles_dir``.

    Examples
    --------
    >>> ns = parse_cli_args(['-y', '--skip', 'fonts', '--skip', 'tools'])
    >>> ns.assume, ns.skip
    ('yes', ['fonts', 'tools'])
    """
    parser = argparse.ArgumentParser(
        prog="dotfiles-bootstrap",
        description="Install packages and tools, then link dotfiles into $HOME.",
    )
    answers = parser.add_mutually_exclusive_group()
    answers.add_argument(
        "-y",
        "--assume-yes",
        dest="assume",
        action="store_const",
        const="yes",
        help="Answer yes to every confirmation (unattended)",
    )
    answers.add_argument(
        "--assume-no",
        dest="assume",
        action="store_const",
        const="no",
        help="Answer no to every confirmation (unattended)",
    )
    parser.add_argument(
        "--skip",
        action="append",
        choices=_config.PHASES,
        default=[],
        metavar="PHASE",
        help=f"Skip a phase ({', '.join(_config.PHASES)}); repeatable",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log commands and links without executing them",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
    )
    parser.add_argument(
        "--dotfiles-dir",
        type=Path,
        default=_config.PROJECT_ROOT,
        help="Repository root holding home/ and config/",
    )
    return parser.parse_args(argv)


def build_prompts(assume: str | None) -> PromptProvider:
    if assume == "yes":
        return AssumePrompts(True)
    if assume == "no":
        return AssumePrompts(False)
    return InteractivePrompts()


def build_context(args: argparse.Namespace) -> BootstrapContext:
    """Resolve the target and assemble the run configuration.

    Raises
    ------
    TargetResolutionError
        If the target account cannot be resolved.
    """
    target = resolve_target()
    dotfiles_dir = Path(args.dotfiles_dir).expanduser().resolve()
    return BootstrapContext(
        target=target,
        dotfiles_dir=dotfiles_dir,
        runner=CommandRunner(target, dry_run=args.dry_run),
        prompts=build_prompts(args.assume),
        dry_run=args.dry_run,
    )


def run(args: argparse.Namespace) -> int:
    r"""Run the bootstrap with parsed CLI arguments.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed arguments (see :func:`parse_cli_args`).

    Returns
    -------
    int
        Process exit code.
    """
    ui_header("Dotfiles bootstrap")
    try:
        ctx = build_context(args)
        ui_info(f"Linking {ctx.home} from {ctx.dotfiles_dir}")
        report = orchestrator.run_phases(ctx, skip=set(args.skip))
    except AppError as error:
        logger.error("Bootstrap aborted: %s", error, extra={"error": error.to_dict()})
        ui_error(str(error))
        return 1
    orchestrator.render_summary(report)
    return 0


def entry_point(argv: list[str] | None = None) -> int:
    """Parse the command line, configure logging and run the bootstrap."""
    args = parse_cli_args(argv)
    configure_logging(
        args.log_level,
        enable_file=not bool(os.environ.get("DISABLE_FILE_LOGS")),
        log_dir=Path(args.dotfiles_dir).expanduser() / _config.LOG_DIRNAME,
    )
    try:
        return run(args)
    except KeyboardInterrupt:
        logger.warning("Interrupted; partially created state is left as is")
        return 130


__all__ = [
    "build_context",
    "build_prompts",
    "configure_logging",
    "entry_point",
    "parse_cli_args",
    "run",
]
