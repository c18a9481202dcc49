from __future__ import annotations

import json
import pprint
import re
from types import ModuleType
from typing import Any

from consolekit.config import settings
from consolekit.services.labels import Symbol

_SPECIFIER = re.compile(r"%[sdifjoOc%]")


class Formatter:
    def __init__(self, *, depth: int | None = None, width: int | None = None) -> None:
        self._depth = depth
        self._width = width

    @property
    def depth(self) -> int:
        return settings.inspect_depth if self._depth is None else self._depth

    @property
    def width(self) -> int:
        return settings.inspect_width if self._width is None else self._width

    def format_args(self, *args: Any) -> str:
        if not args:
            return ""
        first = args[0]
        if not isinstance(first, str):
            return " ".join(self._display(arg) for arg in args)
        if len(args) == 1:
            return first

        remaining = list(args[1:])

        def substitute(match: re.Match[str]) -> str:
            specifier = match.group(0)
            if specifier == "%%":
                return "%"
            if not remaining:
                return specifier
            return self._convert(specifier[1], remaining.pop(0))

        text = _SPECIFIER.sub(substitute, first)
        return " ".join([text, *(self._display(arg) for arg in remaining)])

    def inspect(
        self,
        value: Any,
        *,
        depth: int | None = None,
        show_hidden: bool = False,
        custom_inspect: bool = True,
    ) -> str:
        """Render ``value`` for display.

        ``depth`` counts nested levels below the top-level value; ``0`` (or anything
        lower) expands none of them and ``None`` means the configured default.
        Values customise their rendering through ``__repr__``. With
        ``custom_inspect=False`` an object that carries instance attributes is
        shown as ``ClassName({...attributes})`` instead, and ``show_hidden``
        adds its underscore-prefixed attributes.
        """
        levels = max(self.depth if depth is None else depth, 0)
        attributes = None if custom_inspect else _instance_attributes(value, show_hidden)
        if attributes is not None:
            rendered = self._pformat(attributes, levels + 1)
            return f"{type(value).__name__}({rendered})"
        return self._pformat(value, levels + 1)

    def _pformat(self, value: Any, pprint_depth: int) -> str:
        return pprint.pformat(value, width=self.width, depth=pprint_depth, sort_dicts=False)

    def _display(self, value: Any) -> str:
        if isinstance(value, str):
            return value
        return self.inspect(value)

    def _convert(self, kind: str, value: Any) -> str:
        if kind == "s":
            return repr(value) if isinstance(value, Symbol) else str(value)
        if kind in "di":
            return _number(int, value)
        if kind == "f":
            return _number(float, value)
        if kind == "j":
            try:
                return json.dumps(value, separators=(",", ":"), default=str)
            except ValueError:
                return "[Circular]"
        if kind == "c":
            return ""
        return self.inspect(value)


def _number(kind: type, value: Any) -> str:
    try:
        return str(kind(value))
    except (TypeError, ValueError, OverflowError):
        return "nan"


def _instance_attributes(value: Any, show_hidden: bool) -> dict[str, Any] | None:
    attributes = getattr(value, "__dict__", None)
    if not isinstance(attributes, dict) or callable(value) or isinstance(value, ModuleType):
        return None
    if show_hidden:
        return dict(attributes)
    return {key: item for key, item in attributes.items() if not key.startswith("_")}


formatter = Formatter()
