from __future__ import annotations

import sys
import time
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from consolekit.services.formatter import Formatter, formatter as default_formatter
from consolekit.services.labels import MISSING, to_label
from consolekit.services.warning_channel import WarningChannel, warning_channel

MS_PER_SECOND = 1000

DEFAULT_OPERATION_NAMES = {
    "start": "start()",
    "log": "log()",
    "stop": "stop()",
    "count": "count()",
    "count_reset": "count_reset()",
}


def format_elapsed(seconds: float) -> str:
    elapsed_ms = seconds * MS_PER_SECOND
    if elapsed_ms < MS_PER_SECOND:
        return f"{elapsed_ms:.3f}".rstrip("0").rstrip(".") + "ms"
    return f"{seconds:.3f}s"


def _write_stdout(line: str) -> None:
    sys.stdout.write(f"{line}\n")


class LabelTracker:
    """Label-keyed timers and counters.

    Misuse (starting a running timer, reading or stopping an unknown timer,
    resetting an unknown counter) is reported on the warning channel and never
    raised. The only hard failure is a label that cannot be turned into a string.
    """

    def __init__(
        self,
        *,
        write: Callable[[str], None] | None = None,
        channel: WarningChannel | None = None,
        formatter: Formatter | None = None,
        clock: Callable[[], float] = time.perf_counter,
        operation_names: Mapping[str, str] | None = None,
    ) -> None:
        self._timers: dict[str, float] = {}
        self._counters: dict[str, int] = {}
        self._write = write or _write_stdout
        self._channel = channel or warning_channel
        self._formatter = formatter or default_formatter
        self._clock = clock
        self._operation_names = {**DEFAULT_OPERATION_NAMES, **(operation_names or {})}

    @property
    def timers(self) -> Mapping[str, float]:
        return MappingProxyType(self._timers)

    @property
    def counters(self) -> Mapping[str, int]:
        return MappingProxyType(self._counters)

    def elapsed(self, label: Any = MISSING) -> float | None:
        started = self._timers.get(to_label(label, operation=self._operation_names["log"]))
        if started is None:
            return None
        return self._clock() - started

    def start(self, label: Any = MISSING) -> None:
        operation = self._operation_names["start"]
        key = to_label(label, operation=operation)
        if key in self._timers:
            self._channel.publish(f"Label '{key}' already exists for {operation}")
            return
        self._timers[key] = self._clock()

    def log(self, label: Any = MISSING, *extra: Any) -> float | None:
        operation = self._operation_names["log"]
        key = to_label(label, operation=operation)
        elapsed = self._lookup(key, operation)
        if elapsed is None:
            return None
        self._write_timing(key, elapsed, extra)
        return elapsed

    def stop(self, label: Any = MISSING) -> float | None:
        operation = self._operation_names["stop"]
        key = to_label(label, operation=operation)
        elapsed = self._lookup(key, operation)
        if elapsed is None:
            return None
        self._write_timing(key, elapsed, ())
        del self._timers[key]
        return elapsed

    def count(self, label: Any = MISSING) -> int:
        key = to_label(label, operation=self._operation_names["count"])
        current = self._counters.get(key, 0) + 1
        self._counters[key] = current
        self._write(f"{key}: {current}")
        return current

    def count_reset(self, label: Any = MISSING) -> None:
        key = to_label(label, operation=self._operation_names["count_reset"])
        if key not in self._counters:
            self._channel.publish(f"Count for '{key}' does not exist")
            return
        del self._counters[key]

    def reset(self) -> None:
        self._timers.clear()
        self._counters.clear()

    def _lookup(self, key: str, operation: str) -> float | None:
        started = self._timers.get(key)
        if started is None:
            self._channel.publish(f"No such label '{key}' for {operation}")
            return None
        return self._clock() - started

    def _write_timing(self, key: str, elapsed: float, extra: tuple[Any, ...]) -> None:
        line = f"{key}: {format_elapsed(elapsed)}"
        if extra:
            line = f"{line} {self._formatter.format_args(*extra)}"
        self._write(line)
