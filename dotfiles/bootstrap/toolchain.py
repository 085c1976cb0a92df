"""User toolchain: nvm, global npm packages, talosctl, zsh plugins, login shell.

Each install is guarded by an existence check so re-runs are cheap and do
not clobber what is already there. User-scoped installs run as the target
user. Changing the login shell is a gated operation.
"""

from __future__ import annotations

import logging
import os
import shlex

from dotfiles import config as _config
from dotfiles.bootstrap.commands import attempt, attempt_piped
from dotfiles.bootstrap.context import BootstrapContext
from dotfiles.bootstrap.pipeline.status import StepResult

logger = logging.getLogger(__name__)


def _nvm_env(ctx: BootstrapContext) -> dict[str, str]:
    return {"NVM_DIR": str(ctx.home / _config.NVM_DIRNAME)}


def install_nvm(ctx: BootstrapContext) -> StepResult:
    name = "install nvm"
    if (ctx.home / _config.NVM_DIRNAME).is_dir():
        return StepResult.skipped(name, "~/.nvm already present")
    return attempt_piped(
        ctx.runner,
        name,
        _config.NVM_INSTALL_URL,
        ["bash"],
        as_user=True,
        env=_nvm_env(ctx),
    )


def install_npm_globals(ctx: BootstrapContext) -> StepResult:
    """Install the global npm packages through nvm's npm when one is available."""
    name = "npm install -g " + " ".join(_config.NPM_GLOBAL_PACKAGES)
    nvm_sh = ctx.home / _config.NVM_DIRNAME / "nvm.sh"
    if not nvm_sh.is_file() and ctx.runner.which("npm") is None:
        return StepResult.skipped(name, "npm not available")
    packages = " ".join(shlex.quote(p) for p in _config.NPM_GLOBAL_PACKAGES)
    script = (
        f'[ -s "$NVM_DIR/nvm.sh" ] && . "$NVM_DIR/nvm.sh"; '
        f"command -v npm >/dev/null 2>&1 || exit 3; "
        f"npm install -g {packages}"
    )
    result = ctx.runner.run(["bash", "-c", script], as_user=True, env=_nvm_env(ctx))
    if result.returncode == 3:
        return StepResult.skipped(name, "npm not available")
    if not result.ok:
        logger.error("%s failed: %s", name, result.summary())
        return StepResult.failed(name, result.summary())
    return StepResult.ok(name)


def install_talosctl(ctx: BootstrapContext) -> StepResult:
    name = "install talosctl"
    if ctx.runner.which("talosctl") is not None:
        return StepResult.skipped(name, "already on PATH")
    return attempt_piped(
        ctx.runner, name, _config.TALOSCTL_INSTALL_URL, ["sh"], as_user=True
    )


def install_shell_plugins(ctx: BootstrapContext) -> list[StepResult]:
    """Clone the zsh plugins that are not already present."""
    results = []
    for dirname, url, shallow in _config.SHELL_PLUGINS:
        name = f"clone {dirname}"
        destination = ctx.home / dirname
        if destination.is_dir():
            results.append(StepResult.skipped(name, "already cloned"))
            continue
        argv = ["git", "clone"]
        if shallow:
            argv.append("--depth=1")
        argv += [url, str(destination)]
        results.append(attempt(ctx.runner, name, argv, as_user=True))
    return results


def resolve_login_shell(ctx: BootstrapContext) -> str | None:
    """Return the shell to switch to: the override variable, else ``zsh`` on PATH."""
    override = os.environ.get(_config.LOGIN_SHELL_ENV_VAR)
    if override:
        return override
    return ctx.runner.which(_config.DEFAULT_LOGIN_SHELL)


def _same_executable(a: str, b: str) -> bool:
    # /bin is a symlink to /usr/bin on merged-usr systems
    return bool(a) and os.path.realpath(a) == os.path.realpath(b)


def change_login_shell(ctx: BootstrapContext) -> StepResult:
    r"""Offer to make zsh the target user's login shell.

    Returns
    -------
    StepResult
        ``skipped`` when no shell is found, it is already the login shell, or
        the operator declines; ``failed`` when ``chsh`` fails.
    """
    name = "set login shell"
    shell = resolve_login_shell(ctx)
    if not shell:
        return StepResult.skipped(name, f"{_config.DEFAULT_LOGIN_SHELL} not found")
    if _same_executable(ctx.target.shell, shell):
        return StepResult.skipped(name, f"already {shell}")
    user = ctx.target.user
    if not ctx.prompts.confirm(f"Set default shell to {shell} for user {user}?"):
        logger.info("Skipping default shell change; run 'chsh -s %s' later", shell)
        return StepResult.skipped(name, f"declined; run 'chsh -s {shell}' later")
    result = ctx.runner.run(
        ["chsh", "-s", shell, user], privileged=ctx.target.elevated, capture=False
    )
    if not result.ok:
        logger.warning(
            "Failed to change default shell; run 'chsh -s %s' manually", shell
        )
        return StepResult.failed(name, f"run 'chsh -s {shell}' manually")
    return StepResult.ok(name, shell)


def run_tools_phase(ctx: BootstrapContext) -> list[StepResult]:
    """Install the user toolchain and offer the login shell change."""
    results = [
        install_nvm(ctx),
        install_npm_globals(ctx),
        install_talosctl(ctx),
    ]
    results += install_shell_plugins(ctx)
    results.append(change_login_shell(ctx))
    return results


__all__ = [
    "change_login_shell",
    "install_npm_globals",
    "install_nvm",
    "install_shell_plugins",
    "install_talosctl",
    "resolve_login_shell",
    "run_tools_phase",
]
