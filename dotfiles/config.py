"""Global configuration constants for the bootstrap.

Defines paths, package lists, download URLs and the dotfile link mapping
used across the provisioning phases.
"""

from __future__ import annotations

from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
LOG_DIRNAME: str = "logs"
LOG_DIR: Path = PROJECT_ROOT / LOG_DIRNAME

# Logging
LOG_FILENAME_INSTALL: str = "install.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Phase identifiers, in execution order
PHASE_PACKAGES: str = "packages"
PHASE_TOOLS: str = "tools"
PHASE_FONTS: str = "fonts"
PHASE_LINKS: str = "links"
PHASES: tuple[str, ...] = (PHASE_PACKAGES, PHASE_TOOLS, PHASE_FONTS, PHASE_LINKS)

# Environment variables
ELEVATION_ENV_VAR: str = "SUDO_USER"
LOGIN_SHELL_ENV_VAR: str = "DOTFILES_LOGIN_SHELL"
GIT_NAME_ENV_VAR: str = "GIT_AUTHOR_NAME"
GIT_EMAIL_ENV_VAR: str = "GIT_AUTHOR_EMAIL"
SUPERUSER: str = "root"

# Package sources (Fedora / dnf)
COPR_REPOSITORIES: list[str] = ["varlad/zellij"]
MICROSOFT_KEY_URL: str = "https://packages.microsoft.com/keys/microsoft.asc"
YUM_REPO_DIR: Path = Path("/etc/yum.repos.d")
REPO_FILES: dict[str, str] = {
    "microsoft.repo": "https://packages.microsoft.com/config/fedora/42/prod.repo",
    "hashicorp.repo": "https://rpm.releases.hashicorp.com/fedora/hashicorp.repo",
}
DOCKER_REPO_URL: str = "https://download.docker.com/linux/fedora/docker-ce.repo"

BASE_PACKAGES: list[str] = [
    "dnf-plugins-core",
    "wget",
    "openssl",
    "kubectl",
    "k9s",
    "azure-cli",
    "helm",
    "zsh",
    "git",
    "nvim",
    "p7zip",
    "p7zip-plugins",
    "unzip",
    "btop",
    "jq",
    "nmap",
    "ripgrep",
    "zellij",
    "zoxide",
    "powershell",
]
HASHICORP_PACKAGES: list[str] = ["packer", "terraform"]
DOCKER_PACKAGES: list[str] = [
    "docker-ce",
    "docker-ce-cli",
    "containerd.io",
    "docker-buildx-plugin",
    "docker-compose-plugin",
]
DOCKER_GROUP: str = "docker"

# User toolchain
NVM_INSTALL_URL: str = "https://raw.githubusercontent.com/nvm-sh/nvm/v0.40.3/install.sh"
NVM_DIRNAME: str = ".nvm"
NPM_GLOBAL_PACKAGES: list[str] = ["npm@11", "@github/copilot"]
TALOSCTL_INSTALL_URL: str = "https://talos.dev/install"

# (destination relative to home, clone url, shallow)
SHELL_PLUGINS: list[tuple[str, str, bool]] = [
    ("powerlevel10k", "https://github.com/romkatv/powerlevel10k.git", True),
    (".zsh-vi-mode", "https://github.com/jeffreytse/zsh-vi-mode.git", False),
]
DEFAULT_LOGIN_SHELL: str = "zsh"

# Fonts
FONT_URL: str = "https://github.com/ryanoasis/nerd-fonts/releases/latest/download/Hack.zip"
FONT_ARCHIVE_NAME: str = "Hack.zip"
FONT_DIR_RELATIVE: Path = Path(".local") / "share" / "fonts"
FONT_INSTALLED_GLOB: str = "*Hack*Nerd*Font*"

# Dotfiles
GITCONFIG_TEMPLATE: Path = Path("home") / ".gitconfig"
GITCONFIG_DESTINATION: Path = Path(".gitconfig")
GENERATED_DIR_RELATIVE: Path = Path(".local") / "state" / "dotfiles"
GENERATED_GITCONFIG_NAME: str = "gitconfig"

GITCONFIG_PROMPT: str = "Configure global Git for this user from this repo?"
SSH_CONFIG_PROMPT: str = "Apply SSH config for GitHub (~/.ssh/config) from this repo?"

# (source relative to the repository, destination relative to home, prompt)
HOME_LINKS: list[tuple[str, str, str | None]] = [
    ("home/.zshrc", ".zshrc", None),
    ("home/.p10k.zsh", ".p10k.zsh", None),
    ("home/.ssh/config", ".ssh/config", SSH_CONFIG_PROMPT),
]
CONFIG_DIRS: list[str] = ["nvim", "ghostty", "zellij", "lsd"]
