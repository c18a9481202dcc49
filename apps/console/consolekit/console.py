from __future__ import annotations

import sys
import traceback
from collections.abc import Callable, Mapping
from time import perf_counter
from typing import Any, TextIO

from consolekit.observability import metrics_store
from consolekit.services.formatter import Formatter, formatter as default_formatter
from consolekit.services.label_tracker import LabelTracker
from consolekit.services.labels import MISSING
from consolekit.services.warning_channel import WarningChannel

CONSOLE_OPERATION_NAMES = {
    "start": "console.time()",
    "log": "console.time_log()",
    "stop": "console.time_end()",
    "count": "console.count()",
    "count_reset": "console.count_reset()",
}


class Console:
    """Writes formatted lines to a primary (stdout) and a secondary (stderr) stream.

    When no stream is given, ``sys.stdout`` / ``sys.stderr`` are looked up on every
    write, so redirecting them after construction is honoured.
    """

    def __init__(
        self,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
        *,
        channel: WarningChannel | None = None,
        formatter: Formatter | None = None,
        clock: Callable[[], float] = perf_counter,
    ) -> None:
        self._stdout = stdout
        self._stderr = stderr
        self._formatter = formatter or default_formatter
        self.tracker = LabelTracker(
            write=self._write_stdout,
            channel=channel,
            formatter=self._formatter,
            clock=clock,
            operation_names=CONSOLE_OPERATION_NAMES,
        )

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    @property
    def stderr(self) -> TextIO:
        return self._stderr if self._stderr is not None else sys.stderr

    def log(self, *args: Any) -> None:
        self._write_stdout(self._formatter.format_args(*args))

    info = log
    debug = log
    dirxml = log

    def error(self, *args: Any) -> None:
        self._write_stderr(self._formatter.format_args(*args))

    warn = error

    def dir(self, value: Any, options: Mapping[str, Any] | None = None) -> None:
        options = dict(options or {})
        show_hidden = bool(options.get("show_hidden", options.get("showHidden", False)))
        self._write_stdout(
            self._formatter.inspect(
                value,
                depth=options.get("depth"),
                show_hidden=show_hidden,
                custom_inspect=False,
            )
        )

    def trace(self, *args: Any) -> None:
        message = self._formatter.format_args(*args)
        header = f"Trace: {message}" if message else "Trace"
        stack = "".join(traceback.format_stack()[:-1]).rstrip("\n")
        self._write_stderr(f"{header}\n{stack}" if stack else header)

    def assert_(self, condition: Any = False, *args: Any) -> None:
        if condition:
            return
        if args and isinstance(args[0], str):
            args = (f"Assertion failed: {args[0]}", *args[1:])
        else:
            args = ("Assertion failed", *args)
        self.warn(*args)

    def time(self, label: Any = MISSING) -> None:
        self.tracker.start(label)

    def time_log(self, label: Any = MISSING, *extra: Any) -> None:
        self.tracker.log(label, *extra)

    def time_end(self, label: Any = MISSING) -> None:
        elapsed = self.tracker.stop(label)
        if elapsed is not None:
            metrics_store.observe("console_timer_seconds", elapsed)

    def count(self, label: Any = MISSING) -> None:
        self.tracker.count(label)

    def count_reset(self, label: Any = MISSING) -> None:
        self.tracker.count_reset(label)

    def _write_stdout(self, text: str) -> None:
        self.stdout.write(f"{text}\n")
        metrics_store.increment("console_stdout_lines_total")

    def _write_stderr(self, text: str) -> None:
        self.stderr.write(f"{text}\n")
        metrics_store.increment("console_stderr_lines_total")


console = Console()


def reset_console() -> None:
    console.tracker.reset()
