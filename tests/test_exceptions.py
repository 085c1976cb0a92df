"""Tests for ``dotfiles.exceptions``."""

from dotfiles.exceptions import (
    AppError,
    ConfigurationError,
    ExternalCommandError,
    LinkError,
    TargetResolutionError,
)


def test_app_error_str_and_dict():
    e = AppError("CODE", "message", context={"k": "v"}, transient=True)

    assert str(e) == "CODE: message"
    assert e.to_dict() == {
        "error_code": "CODE",
        "message": "message",
        "context": {"k": "v"},
        "is_transient": True,
    }


def test_subclass_codes_and_tiers():
    assert ConfigurationError("x").code == "CONFIGURATION_ERROR"
    assert TargetResolutionError("x").code == "TARGET_RESOLUTION_ERROR"
    assert ExternalCommandError("x").transient is True
    assert LinkError("x", context={"destination": "/h/.zshrc"}).context == {
        "destination": "/h/.zshrc"
    }
    assert all(
        issubclass(cls, AppError)
        for cls in (ConfigurationError, TargetResolutionError, ExternalCommandError, LinkError)
    )
