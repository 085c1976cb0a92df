"""Rich/Questionary integration point for the terminal UI.

This module is the single place where the bootstrap imports Rich and
Questionary. UI modules import the console, renderable types and the
questionary module from here so tests can monkeypatch one location.

Canonical Usage
---------------
>>> from dotfiles.bootstrap.console_helpers import rprint
>>> rprint("Hello Rich!")
Hello Rich!

References
----------
- Rich Docs: https://rich.readthedocs.io/en/latest/
- Questionary Docs: https://github.com/tmbo/questionary

"""

from __future__ import annotations

import sys
from typing import IO, Any

import questionary
from rich.console import Console
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

_RICH_CONSOLE: Console = Console()
_RICH_ERR_CONSOLE: Console = Console(stderr=True)


def stdin_is_tty() -> bool:
    """Return True when standard input is attached to a terminal."""
    try:
        return sys.stdin.isatty()
    except (AttributeError, ValueError):
        return False


def rprint(
    *objects: Any,
    sep: str = " ",
    end: str = "\n",
    file: IO[str] | None = None,
    flush: bool = False,
) -> None:
    r"""Print objects to the terminal using Rich.

    All parameters mirror Python's builtin print.

    Parameters
    ----------
    *objects : Any
        Objects to be printed, separated by sep.
    sep : str, optional
        Separator between objects, default ' '.
    end : str, optional
        Line ending, default newline.
    file : IO[str], optional
        File-like object to print to, default sys.stdout.
    flush : bool, optional
        Forcibly flush output.

    Examples
    --------
    >>> import io
    >>> buf = io.StringIO()
    >>> rprint("FileOut", file=buf)
    >>> "FileOut" in buf.getvalue()
    True
    """
    from rich import print as rich_print

    rich_print(*objects, sep=sep, end=end, file=file, flush=flush)


__all__ = [
    "_RICH_CONSOLE",
    "_RICH_ERR_CONSOLE",
    "Console",
    "Panel",
    "Rule",
    "Table",
    "questionary",
    "rprint",
    "stdin_is_tty",
]
