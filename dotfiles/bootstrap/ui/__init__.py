"""UI layer for the bootstrap: output primitives and prompt providers.

Re-exports the rendering helpers from ``basic.py`` and the prompt helpers
from ``prompts.py`` so callers can write::

    from dotfiles.bootstrap.ui import ui_rule, InteractivePrompts

"""

from .basic import (
    ui_error,
    ui_header,
    ui_info,
    ui_rule,
    ui_status,
    ui_success,
    ui_warning,
)
from .prompts import (
    AssumePrompts,
    InteractivePrompts,
    PromptProvider,
    ask_confirm,
    ask_text,
)

__all__ = [
    "AssumePrompts",
    "InteractivePrompts",
    "PromptProvider",
    "ask_confirm",
    "ask_text",
    "ui_error",
    "ui_header",
    "ui_info",
    "ui_rule",
    "ui_status",
    "ui_success",
    "ui_warning",
]
