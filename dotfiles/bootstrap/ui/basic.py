"""Minimal UI output primitives for the bootstrap terminal interface.

Rendering helpers for section rules, the header banner, status spinners and
info/success/warning/error lines. No logic beyond rendering lives here; the
phases report through logging and these helpers only decorate the run for a
human operator.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager

from dotfiles.bootstrap.console_helpers import (
    _RICH_CONSOLE,
    _RICH_ERR_CONSOLE,
    Panel,
    Rule,
    rprint,
)


def ui_rule(title: str) -> None:
    r"""Render a horizontal rule or section header.

    Parameters
    ----------
    title : str
        Title text to display as the rule caption.

    Examples
    --------
    >>> ui_rule("Linking dotfiles")
    # Displays a blue rule with the caption.
    """
    _RICH_CONSOLE.print(Rule(title, style="bold blue"))


def ui_header(title: str) -> None:
    r"""Render a prominent header banner.

    Parameters
    ----------
    title : str
        Banner text to display.
    """
    _RICH_CONSOLE.print(
        Panel.fit(title, style="bold white on blue", border_style="blue")
    )


def ui_status(message: str) -> AbstractContextManager[None]:
    r"""Provide a context manager showing a spinner while work is running.

    Parameters
    ----------
    message : str
        Status text shown for the duration of the context.

    Returns
    -------
    AbstractContextManager[None]
        Context manager yielding control while the status is active.

    Examples
    --------
    >>> with ui_status("Downloading..."):
    ...     pass
    """

    @contextmanager
    def _ctx() -> Iterator[None]:
        with _RICH_CONSOLE.status(message, spinner="dots"):
            yield

    return _ctx()


def ui_info(message: str) -> None:
    """Display an informational message."""
    rprint(f"[cyan]{message}[/cyan]")


def ui_success(message: str) -> None:
    """Display a success message."""
    rprint(f"[green]✓ {message}[/green]")


def ui_warning(message: str) -> None:
    """Display a warning message."""
    rprint(f"[yellow]⚠ {message}[/yellow]")


def ui_error(message: str) -> None:
    """Display an error message on stderr."""
    _RICH_ERR_CONSOLE.print(f"[bold red]✗ {message}[/bold red]")


__all__ = [
    "ui_error",
    "ui_header",
    "ui_info",
    "ui_rule",
    "ui_status",
    "ui_success",
    "ui_warning",
]
