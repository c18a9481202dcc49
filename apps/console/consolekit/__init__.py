from consolekit.console import Console, console, reset_console
from consolekit.errors import ConsoleError, LabelTypeError
from consolekit.services.labels import Symbol
from consolekit.services.warning_channel import ConsoleWarning, warning_channel

__all__ = [
    "Console",
    "ConsoleError",
    "ConsoleWarning",
    "LabelTypeError",
    "Symbol",
    "console",
    "reset_console",
    "warning_channel",
]
