"""Idempotent symlinking of tracked dotfiles into the target home.

``link`` makes a destination path a symlink to a source path inside the
repository. Re-running it any number of times leaves the same filesystem:

- a missing source is skipped and nothing is created;
- a destination already pointing at the source is left alone;
- a file or a symlink pointing elsewhere is replaced (no backup);
- a real directory at the destination is reported as a failure and left
  untouched.

The replacement is done by creating the new link under a temporary name in
the destination directory and renaming it over the destination, so the
destination never disappears half-way.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotfiles import config as _config
from dotfiles.bootstrap.context import BootstrapContext
from dotfiles.bootstrap.pipeline.status import StepResult
from dotfiles.bootstrap.target import Target, hand_over
from dotfiles.exceptions import LinkError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkSpec:
    """One declared mapping from the repository into the home directory.

    Attributes
    ----------
    source : Path
        Path relative to the repository root.
    destination : Path
        Path relative to the target home directory.
    prompt : str or None
        Confirmation question gating the link; ``None`` links unconditionally.
    """

    source: Path
    destination: Path
    prompt: str | None = None

    @property
    def label(self) -> str:
        return f"link ~/{self.destination.as_posix()}"


def default_link_specs() -> list[LinkSpec]:
    """Return the fixed mapping list, in the order links are made."""
    specs = [
        LinkSpec(Path(src), Path(dst), prompt)
        for src, dst, prompt in _config.HOME_LINKS
    ]
    specs += [
        LinkSpec(Path("config") / name, Path(".config") / name)
        for name in _config.CONFIG_DIRS
    ]
    return specs


def _make_parents(directory: Path, target: Target | None) -> None:
    missing: list[Path] = []
    current = directory
    while not current.exists():
        missing.append(current)
        current = current.parent
    directory.mkdir(parents=True, exist_ok=True)
    if target is not None:
        for created in reversed(missing):
            hand_over(created, target)


def _replace_with_symlink(source: Path, destination: Path) -> None:
    if destination.is_dir() and not destination.is_symlink():
        raise LinkError(
            f"{destination} is a directory; move it away and re-run",
            context={"destination": str(destination)},
        )
    tmp = destination.with_name(f".{destination.name}.dotfiles-{os.getpid()}")
    if tmp.is_symlink() or tmp.exists():
        tmp.unlink()
    tmp.symlink_to(source)
    try:
        os.replace(tmp, destination)
    except OSError:
        tmp.unlink()
        raise


def link(
    source: Path,
    destination: Path,
    *,
    target: Target | None = None,
    dry_run: bool = False,
    name: str | None = None,
) -> StepResult:
    r"""Ensure ``destination`` is a symlink to ``source``.

    Parameters
    ----------
    source : Path
        Absolute path of the file or directory to link to.
    destination : Path
        Absolute path of the symlink to create or replace.
    target : Target or None, optional
        When given and elevated, created parents and the link are handed
        over to the target user.
    dry_run : bool, optional
        Report what would happen without touching the filesystem.
    name : str or None, optional
        Step name for the result; defaults to ``"link <destination>"``.

    Returns
    -------
    StepResult
        ``skipped`` for a missing source or an existing correct link,
        ``failed`` for a directory destination or an OS error, else ``ok``.

    Examples
    --------
    >>> from pathlib import Path
    >>> link(Path("/repo/home/.zshrc"), Path("/home/me/.zshrc"))  # doctest: +SKIP
    StepResult(name='link /home/me/.zshrc', status=<StepStatus.OK: 'ok'>, ...)
    """
    step = name or f"link {destination}"
    if not source.exists():
        logger.info("Source %s not found; skipping %s", source, destination)
        return StepResult.skipped(step, "source not in repository")

    if destination.is_symlink() and os.readlink(destination) == str(source):
        return StepResult.skipped(step, "already linked")

    if dry_run:
        logger.info("Would link %s -> %s", destination, source)
        return StepResult.ok(step, f"would link -> {source}")

    logger.info("Linking %s -> %s", destination, source)
    try:
        _make_parents(destination.parent, target)
        _replace_with_symlink(source, destination)
        if target is not None:
            hand_over(destination, target)
    except LinkError as error:
        logger.error("%s failed: %s", step, error.message)
        return StepResult.failed(step, error.message)
    except OSError as error:
        logger.error("%s failed: %s", step, error)
        return StepResult.failed(step, str(error))
    return StepResult.ok(step, f"-> {source}")


def link_dotfiles(
    ctx: BootstrapContext, specs: list[LinkSpec] | None = None
) -> list[StepResult]:
    """Link every declared mapping plus the templated git config.

    Order follows the declared list with the git identity step placed right
    after the first entry (``.zshrc``).
    """
    # local import to avoid cycles
    from dotfiles.bootstrap.gitconfig import configure_gitconfig

    specs = default_link_specs() if specs is None else specs
    results = [_link_spec(ctx, spec) for spec in specs[:1]]
    results.append(configure_gitconfig(ctx))
    results += [_link_spec(ctx, spec) for spec in specs[1:]]
    return results


def _link_spec(ctx: BootstrapContext, spec: LinkSpec) -> StepResult:
    source = ctx.dotfiles_dir / spec.source
    destination = ctx.home / spec.destination
    if spec.prompt is not None:
        if not source.exists():
            return StepResult.skipped(spec.label, "source not in repository")
        if not ctx.prompts.confirm(spec.prompt):
            logger.info("Declined; existing %s left untouched", destination)
            return StepResult.skipped(spec.label, "declined; left untouched")
    return link(
        source, destination, target=ctx.target, dry_run=ctx.dry_run, name=spec.label
    )


__all__ = ["LinkSpec", "default_link_specs", "link", "link_dotfiles"]
