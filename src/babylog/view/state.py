"""Per-invocation display switches shared by the views."""

# SPDX-License-Identifier: MIT

from contextvars import ContextVar

# Cleared by the global --no-header option
_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)


def set_show_header(value: bool) -> None:
    _show_header_var.set(value)


def get_show_header() -> bool:
    """Whether views print the babylog header above their tables."""
    return _show_header_var.get()
