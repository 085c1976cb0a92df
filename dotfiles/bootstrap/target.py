"""Resolution of the user account and home directory being provisioned.

When the bootstrap runs under ``sudo`` the process belongs to root, but the
files must land in the invoking user's home. ``SUDO_USER`` names that user;
its home comes from the system user database, never from ``$HOME`` (which
``sudo`` may have preserved or reset).
"""

from __future__ import annotations

import logging
import os
import pwd
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from dotfiles import config as _config
from dotfiles.exceptions import TargetResolutionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Target:
    """The account the bootstrap provisions.

    Attributes
    ----------
    user : str
        Login name.
    home : Path
        Home directory all destinations are resolved against.
    uid, gid : int
        Numeric ids used to hand created files over to the user when the
        process runs elevated.
    shell : str
        Current login shell from the user database.
    elevated : bool
        True when the process runs as root on behalf of a non-root user.
    """

    user: str
    home: Path
    uid: int
    gid: int
    shell: str = ""
    elevated: bool = False


def _from_passwd(entry: pwd.struct_passwd, *, home: str | None = None) -> Target:
    home_dir = home or entry.pw_dir
    if not home_dir:
        raise TargetResolutionError(
            f"User '{entry.pw_name}' has no home directory",
            context={"user": entry.pw_name},
        )
    return Target(
        user=entry.pw_name,
        home=Path(home_dir),
        uid=entry.pw_uid,
        gid=entry.pw_gid,
        shell=entry.pw_shell,
    )


def resolve_target(environ: Mapping[str, str] | None = None) -> Target:
    r"""Determine the user and home directory to operate on.

    Parameters
    ----------
    environ : Mapping[str, str] or None, optional
        Environment to inspect; defaults to ``os.environ``.

    Returns
    -------
    Target
        The resolved account.

    Raises
    ------
    TargetResolutionError
        If the elevated-for user is unknown to the user database, or no home
        directory can be determined for the invoking user.

    Examples
    --------
    >>> resolve_target({"SUDO_USER": "alice"}).home  # doctest: +SKIP
    PosixPath('/home/alice')
    """
    env = os.environ if environ is None else environ
    sudo_user = env.get(_config.ELEVATION_ENV_VAR, "")

    if sudo_user and sudo_user != _config.SUPERUSER:
        try:
            entry = pwd.getpwnam(sudo_user)
        except KeyError:
            raise TargetResolutionError(
                f"{_config.ELEVATION_ENV_VAR} names unknown user '{sudo_user}'",
                context={"user": sudo_user},
            ) from None
        target = _from_passwd(entry)
        target = replace(target, elevated=os.geteuid() == 0 and target.uid != 0)
        logger.info("Running for %s (elevated=%s)", target.user, target.elevated)
        return target

    try:
        entry = pwd.getpwuid(os.getuid())
    except KeyError:
        raise TargetResolutionError(
            f"Invoking uid {os.getuid()} is not in the user database",
            context={"uid": os.getuid()},
        ) from None
    target = _from_passwd(entry, home=env.get("HOME") or None)
    logger.info("Running for %s (home=%s)", target.user, target.home)
    return target


def hand_over(path: Path, target: Target) -> None:
    """Give ``path`` (not following symlinks) to the target user when elevated."""
    if not target.elevated:
        return
    os.lchown(path, target.uid, target.gid)


__all__ = ["Target", "hand_over", "resolve_target"]
