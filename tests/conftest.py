"""Pytest configuration for test environment setup.

- Forces ``DISABLE_FILE_LOGS=1`` to avoid writing log files during tests.
- Ensures the project root is available on ``sys.path`` for imports.
- Provides a throwaway home directory, a throwaway repository checkout and a
  recording ``FakeRunner`` so no test touches the real system.
"""

import os
import signal
import sys

os.environ.setdefault("DISABLE_FILE_LOGS", "1")  # Avoid creating log files during tests
from pathlib import Path

import pytest

# Ensure project root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
root_str = str(ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from dotfiles.bootstrap.commands import CmdResult, CommandRunner  # noqa: E402
from dotfiles.bootstrap.context import BootstrapContext  # noqa: E402
from dotfiles.bootstrap.target import Target  # noqa: E402
from dotfiles.bootstrap.ui.prompts import AssumePrompts  # noqa: E402
from dotfiles.exceptions import ExternalCommandError  # noqa: E402

_TEST_TIMEOUT = int(os.environ.get("PYTEST_TEST_TIMEOUT", "10"))


def _timeout_handler(signum, frame):
    """Test Timeout handler."""
    raise TimeoutError(f"Test exceeded {_TEST_TIMEOUT} seconds timeout")


def pytest_runtest_setup(item):
    """Test Pytest runtest setup."""
    signal.signal(signal.SIGALRM, _timeout_handler)
    signal.alarm(_TEST_TIMEOUT)


def pytest_runtest_teardown(item, nextitem):
    """Test Pytest runtest teardown."""
    signal.alarm(0)


class FakeRunner(CommandRunner):
    """Command runner that records calls instead of executing them.

    ``returncodes`` maps a program name (``argv[0]``) to the exit code every
    call of that program reports. ``available`` lists the programs ``which``
    finds. ``fetched`` is the body every download returns.
    """

    def __init__(self, target, *, dry_run=False):
        super().__init__(target, dry_run=dry_run)
        self.calls = []
        self.returncodes = {}
        self.available = set()
        self.fetched = "#!/bin/sh\necho installed\n"

    def which(self, name):
        return f"/usr/bin/{name}" if name in self.available else None

    def run(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append((argv, kwargs))
        rc = self.returncodes.get(argv[0], 0)
        stdout = self.fetched if argv[0] == "curl" and "-fsSL" in argv else ""
        result = CmdResult(argv, rc, stdout, "boom" if rc else "")
        if kwargs.get("check") and rc:
            raise ExternalCommandError(f"Command failed ({rc}): {' '.join(argv)}")
        return result

    def programs(self):
        """Return the program name of every recorded call, in order."""
        return [argv[0] for argv, _ in self.calls]


@pytest.fixture
def home(tmp_path):
    """Empty home directory of the fake target user."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def repo(tmp_path):
    """Repository checkout holding the tracked dotfiles."""
    path = tmp_path / "repo"
    (path / "home" / ".ssh").mkdir(parents=True)
    (path / "home" / ".zshrc").write_text("export EDITOR=nvim\n")
    (path / "home" / ".p10k.zsh").write_text("# p10k\n")
    (path / "home" / ".ssh" / "config").write_text("Host github.com\n")
    (path / "home" / ".gitconfig").write_text("[user]\n\tname =\n\temail =\n")
    (path / "config" / "nvim").mkdir(parents=True)
    (path / "config" / "nvim" / "init.lua").write_text("vim.o.number = true\n")
    (path / "config" / "zellij").mkdir()
    (path / "config" / "zellij" / "config.kdl").write_text("theme \"nord\"\n")
    return path


@pytest.fixture
def target(home):
    """Non-elevated target owning ``home``."""
    return Target(
        user="tester",
        home=home,
        uid=os.getuid(),
        gid=os.getgid(),
        shell="/bin/bash",
    )


@pytest.fixture
def runner(target):
    return FakeRunner(target)


@pytest.fixture
def make_ctx(target, repo, runner):
    """Build a ``BootstrapContext``; prompts answer yes unless overridden."""

    def _make(prompts=None, dry_run=False, dotfiles_dir=None):
        runner.dry_run = dry_run
        return BootstrapContext(
            target=target,
            dotfiles_dir=dotfiles_dir or repo,
            runner=runner,
            prompts=prompts or AssumePrompts(True),
            dry_run=dry_run,
        )

    return _make
