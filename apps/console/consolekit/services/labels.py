from __future__ import annotations

from typing import Any

from consolekit.config import settings
from consolekit.errors import LabelTypeError


class _Missing:
    def __repr__(self) -> str:
        return "<missing>"


MISSING: Any = _Missing()


class Symbol:
    """Opaque identifier. Two symbols are never equal unless they are the same object.

    A symbol has no string form, so it cannot be used as a timer or counter label.
    """

    __slots__ = ("description",)

    def __init__(self, description: str | None = None) -> None:
        self.description = description

    def __repr__(self) -> str:
        return f"Symbol({self.description or ''})"

    def __str__(self) -> str:
        raise TypeError("Cannot convert a Symbol value to a string")


def to_label(value: Any = MISSING, *, operation: str = "label") -> str:
    if value is MISSING or value is None:
        return settings.default_label
    if isinstance(value, str):
        return value
    if isinstance(value, Symbol):
        raise LabelTypeError(operation)
    return str(value)
