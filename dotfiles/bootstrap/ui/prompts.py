"""Prompt interaction helpers and prompt providers.

Gated operations (global git identity, SSH client config, login shell) ask
for explicit confirmation through a ``PromptProvider``. Two providers exist:

- ``InteractivePrompts`` reads from the operator: questionary on a TTY, the
  builtin ``input`` otherwise (so answers can be piped in).
- ``AssumePrompts`` answers every confirmation with a fixed value and every
  text question with its default, for unattended runs.

Every confirmation defaults to "no" on empty input, end of input or an
aborted questionary prompt.
"""

from __future__ import annotations

from typing import Protocol

from dotfiles.bootstrap import console_helpers as ch

_YES = ("y", "yes")


class PromptProvider(Protocol):
    """Capability interface for blocking operator questions."""

    def confirm(self, prompt: str) -> bool:
        ...

    def ask_text(self, prompt: str, default: str = "") -> str:
        ...


def ask_text(prompt: str, default: str | None = None) -> str:
    r"""Prompt the user for a line of text.

    Uses questionary when standard input is a terminal and the builtin
    ``input`` otherwise.

    Parameters
    ----------
    prompt : str
        The user-facing prompt string.
    default : str or None, optional
        Value returned when the answer is empty or input is unavailable.

    Returns
    -------
    str
        The stripped answer, or ``default`` when the answer is empty.

    Examples
    --------
    >>> import builtins
    >>> builtins.input = lambda _="": "  jdoe "
    >>> ask_text("Git user.name: ")  # doctest: +SKIP
    'jdoe'
    """
    fallback = default or ""
    if ch.stdin_is_tty():
        answer = ch.questionary.text(prompt, default=fallback).ask()
        return (answer or "").strip() or fallback
    try:
        return input(f"{prompt} ").strip() or fallback
    except (EOFError, OSError):
        return fallback


def ask_confirm(prompt: str, default_yes: bool = False) -> bool:
    r"""Prompt the user to confirm yes/no.

    Parameters
    ----------
    prompt : str
        The yes/no prompt string to present.
    default_yes : bool, optional
        Answer used for empty input, end of input or an aborted prompt
        (default: False).

    Returns
    -------
    bool
        True only for an affirmative answer ('y' or 'yes', any case).

    Notes
    -----
    questionary returns ``None`` when the prompt is cancelled with Ctrl-C;
    that is treated like an empty answer.
    """
    if ch.stdin_is_tty():
        answer = ch.questionary.confirm(prompt, default=default_yes).ask()
        return default_yes if answer is None else bool(answer)
    suffix = "[Y/n]" if default_yes else "[y/N]"
    try:
        val = input(f"{prompt} {suffix}: ").strip().lower()
    except (EOFError, OSError):
        return default_yes
    if not val:
        return default_yes
    return val in _YES


class InteractivePrompts:
    """Ask the operator; empty answers mean "no"."""

    def confirm(self, prompt: str) -> bool:
        return ask_confirm(prompt, default_yes=False)

    def ask_text(self, prompt: str, default: str = "") -> str:
        return ask_text(prompt, default=default)


class AssumePrompts:
    """Answer every question without blocking.

    Parameters
    ----------
    answer : bool
        Value returned by every ``confirm`` call.
    """

    def __init__(self, answer: bool) -> None:
        self.answer = answer

    def confirm(self, prompt: str) -> bool:
        return self.answer

    def ask_text(self, prompt: str, default: str = "") -> str:
        return default


__all__ = [
    "AssumePrompts",
    "InteractivePrompts",
    "PromptProvider",
    "ask_confirm",
    "ask_text",
]
