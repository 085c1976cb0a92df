"""Minimal launcher for the dotfiles bootstrap.

Its single responsibility is to delegate to
``dotfiles.bootstrap.app_runner.entry_point`` so the bootstrap can be started
from a fresh clone without installing the package first.

Usage:
    python install.py [--assume-yes | --assume-no] [--skip PHASE] [--dry-run]

"""

from __future__ import annotations

import sys


def entry_point(argv: list[str] | None = None) -> int:
    """Run the bootstrap and return its exit code.

    The import happens inside the function so importing this launcher stays
    cheap.
    """
    from dotfiles.bootstrap.app_runner import entry_point as app_entry_point

    return app_entry_point(argv)


if __name__ == "__main__":
    sys.exit(entry_point())
