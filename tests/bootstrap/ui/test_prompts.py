"""Tests for ``dotfiles.bootstrap.ui.prompts``."""

from types import SimpleNamespace

import pytest

import dotfiles.bootstrap.console_helpers as ch
from dotfiles.bootstrap.ui.prompts import (
    AssumePrompts,
    InteractivePrompts,
    ask_confirm,
    ask_text,
)


@pytest.fixture
def piped(monkeypatch):
    """Simulate piped standard input; returns a setter for the next answer."""
    monkeypatch.setattr(ch, "stdin_is_tty", lambda: False)

    def _answer(value):
        def _input(_prompt=""):
            if isinstance(value, BaseException):
                raise value
            return value

        monkeypatch.setattr("builtins.input", _input)

    return _answer


@pytest.mark.parametrize(
    "answer, expected",
    [("y", True), ("YES", True), (" yes ", True), ("n", False), ("", False), ("maybe", False)],
)
def test_confirm_accepts_only_yes(piped, answer, expected):
    piped(answer)

    assert ask_confirm("Apply?") is expected


def test_confirm_end_of_input_means_no(piped):
    piped(EOFError())

    assert ask_confirm("Apply?") is False
    assert InteractivePrompts().confirm("Apply?") is False


def test_confirm_uses_questionary_on_tty(monkeypatch):
    asked = []

    def _confirm(prompt, default=False):
        asked.append((prompt, default))
        return SimpleNamespace(ask=lambda: None)

    monkeypatch.setattr(ch, "stdin_is_tty", lambda: True)
    monkeypatch.setattr(ch, "questionary", SimpleNamespace(confirm=_confirm))

    assert ask_confirm("Set default shell?") is False
    assert asked == [("Set default shell?", False)]


def test_questionary_yes_is_honoured(monkeypatch):
    monkeypatch.setattr(ch, "stdin_is_tty", lambda: True)
    monkeypatch.setattr(
        ch,
        "questionary",
        SimpleNamespace(confirm=lambda p, default=False: SimpleNamespace(ask=lambda: True)),
    )

    assert InteractivePrompts().confirm("Apply?") is True


def test_text_answer_is_stripped(piped):
    piped("  jdoe ")

    assert ask_text("Git user.name:") == "jdoe"


def test_text_empty_answer_returns_default(piped):
    piped("")

    assert ask_text("Git user.name:", default="Env Name") == "Env Name"
    assert InteractivePrompts().ask_text("Git user.email:") == ""


def test_text_on_tty_uses_questionary(monkeypatch):
    monkeypatch.setattr(ch, "stdin_is_tty", lambda: True)
    monkeypatch.setattr(
        ch,
        "questionary",
        SimpleNamespace(text=lambda p, default="": SimpleNamespace(ask=lambda: "Jane")),
    )

    assert ask_text("Git user.name:") == "Jane"


def test_assume_prompts_never_block(monkeypatch):
    def _boom(*a, **k):
        raise AssertionError("input called")

    monkeypatch.setattr("builtins.input", _boom)

    assert AssumePrompts(True).confirm("Apply?") is True
    assert AssumePrompts(False).confirm("Apply?") is False
    assert AssumePrompts(True).ask_text("name", default="x") == "x"
