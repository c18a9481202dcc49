from __future__ import annotations

import asyncio
import logging
import sys
import warnings
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from consolekit.config import settings
from consolekit.observability import log_event, logger, metrics_store

_PACKAGE_PREFIX = "consolekit."


class ConsoleWarning(UserWarning):
    @property
    def message(self) -> str:
        return str(self.args[0]) if self.args else ""


WarningListener = Callable[[ConsoleWarning], None]


@dataclass
class CallSite:
    filename: str
    lineno: int
    module_globals: dict[str, Any]


class WarningChannel:
    """Process-wide channel for recoverable console misuse warnings.

    ``publish`` never raises into the caller. With delivery mode ``deferred`` and a
    running asyncio loop, listeners are called on the next loop iteration in publish
    order, so an observer has to yield (``await asyncio.sleep(0)``) first. Without a
    running loop delivery completes before ``publish`` returns.
    """

    def __init__(self) -> None:
        self._listeners: list[WarningListener] = []

    @property
    def listeners(self) -> tuple[WarningListener, ...]:
        return tuple(self._listeners)

    def subscribe(self, listener: WarningListener) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: WarningListener) -> None:
        try:
            self._listeners.remove(listener)
        except ValueError:
            return None

    def clear(self) -> None:
        self._listeners.clear()

    def publish(self, message: str) -> ConsoleWarning:
        warning = ConsoleWarning(message)
        call_site = _caller_outside_package()
        loop = _running_loop() if settings.warning_delivery == "deferred" else None
        if loop is None:
            self._deliver(warning, call_site)
        else:
            loop.call_soon(self._deliver, warning, call_site)
        return warning

    def _deliver(self, warning: ConsoleWarning, call_site: CallSite | None = None) -> None:
        metrics_store.increment("console_warnings_total")
        log_event(warning.message, level=logging.WARNING, operation="console_warning")

        # Snapshot so a listener may unsubscribe itself while being called.
        for listener in tuple(self._listeners):
            try:
                listener(warning)
            except Exception:
                logger.exception("console_warning_listener_failed")

        if settings.forward_python_warnings:
            try:
                _forward(warning, call_site)
            except Exception:
                logger.exception("console_warning_forward_failed")


def _forward(warning: ConsoleWarning, call_site: CallSite | None) -> None:
    if call_site is None:
        warnings.warn(warning, stacklevel=3)
        return
    module_globals = call_site.module_globals
    warnings.warn_explicit(
        warning,
        ConsoleWarning,
        call_site.filename,
        call_site.lineno,
        module=module_globals.get("__name__"),
        registry=module_globals.setdefault("__warningregistry__", {}),
        module_globals=module_globals,
    )


def _caller_outside_package() -> CallSite | None:
    frame = sys._getframe(1)
    while frame is not None and frame.f_globals.get("__name__", "").startswith(_PACKAGE_PREFIX):
        frame = frame.f_back
    if frame is None:
        return None
    return CallSite(frame.f_code.co_filename, frame.f_lineno, frame.f_globals)


def _running_loop() -> asyncio.AbstractEventLoop | None:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


warning_channel = WarningChannel()
