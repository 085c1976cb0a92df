"""Package sources and system packages through dnf.

Every command here is best-effort: a failure is logged and recorded as a
failed step, and the next command still runs. The operator re-runs the
bootstrap to retry. On systems without ``dnf`` the whole phase is skipped.
"""

from __future__ import annotations

import logging

from dotfiles import config as _config
from dotfiles.bootstrap.commands import attempt, attempt_piped
from dotfiles.bootstrap.context import BootstrapContext
from dotfiles.bootstrap.pipeline.status import StepResult
from dotfiles.bootstrap.ui.basic import ui_status

logger = logging.getLogger(__name__)


def _dnf_install(ctx: BootstrapContext, name: str, packages: list[str]) -> StepResult:
    with ui_status(f"{name}..."):
        return attempt(
            ctx.runner, name, ["dnf", "install", "-y", *packages], privileged=True
        )


def register_sources(ctx: BootstrapContext) -> list[StepResult]:
    """Enable COPR repositories and add the Microsoft and HashiCorp repos."""
    runner = ctx.runner
    results = [
        attempt(
            runner,
            "install dnf-plugins-core",
            ["dnf", "-y", "install", "dnf-plugins-core"],
            privileged=True,
        )
    ]
    for copr in _config.COPR_REPOSITORIES:
        results.append(
            attempt(
                runner,
                f"enable copr {copr}",
                ["dnf", "copr", "enable", "-y", copr],
                privileged=True,
            )
        )
    results.append(
        attempt(
            runner,
            "import Microsoft key",
            ["rpm", "--import", _config.MICROSOFT_KEY_URL],
            privileged=True,
        )
    )
    for filename, url in _config.REPO_FILES.items():
        destination = _config.YUM_REPO_DIR / filename
        results.append(
            attempt_piped(
                runner,
                f"add {filename}",
                url,
                ["tee", str(destination)],
                privileged=True,
            )
        )
    results.append(
        attempt(runner, "refresh metadata", ["dnf", "makecache", "-y"], privileged=True)
    )
    return results


def install_packages(ctx: BootstrapContext) -> list[StepResult]:
    """Install the base package list and the HashiCorp tools."""
    return [
        _dnf_install(ctx, "install base packages", _config.BASE_PACKAGES),
        _dnf_install(ctx, "install HashiCorp tools", _config.HASHICORP_PACKAGES),
    ]


def install_docker(ctx: BootstrapContext) -> list[StepResult]:
    """Install Docker Engine and add the target user to the docker group."""
    runner = ctx.runner
    return [
        attempt(
            runner,
            "add docker-ce repo",
            [
                "dnf",
                "config-manager",
                "addrepo",
                f"--from-repofile={_config.DOCKER_REPO_URL}",
            ],
            privileged=True,
        ),
        _dnf_install(ctx, "install Docker Engine", _config.DOCKER_PACKAGES),
        attempt(
            runner,
            f"add {ctx.target.user} to {_config.DOCKER_GROUP} group",
            ["usermod", "-aG", _config.DOCKER_GROUP, ctx.target.user],
            privileged=True,
        ),
    ]


def install_aks_cli(ctx: BootstrapContext) -> StepResult:
    """Run ``az aks install-cli`` when the Azure CLI is present."""
    name = "install AKS CLI"
    if ctx.runner.which("az") is None:
        return StepResult.skipped(name, "az not installed")
    return attempt(ctx.runner, name, ["az", "aks", "install-cli"], privileged=True)


def run_packages_phase(ctx: BootstrapContext) -> list[StepResult]:
    r"""Register package sources and install the fixed package list.

    Parameters
    ----------
    ctx : BootstrapContext
        Run configuration.

    Returns
    -------
    list[StepResult]
        One result per command, or a single skipped result when ``dnf`` is
        not available.
    """
    if ctx.runner.which("dnf") is None:
        logger.warning("dnf not found; skipping Fedora package install")
        return [StepResult.skipped("dnf packages", "dnf not found")]
    results = register_sources(ctx)
    results += install_packages(ctx)
    results += install_docker(ctx)
    results.append(install_aks_cli(ctx))
    return results


__all__ = [
    "install_aks_cli",
    "install_docker",
    "install_packages",
    "register_sources",
    "run_packages_phase",
]
