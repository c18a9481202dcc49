import asyncio
import inspect
from dataclasses import dataclass, field

import pytest
from fastapi.testclient import TestClient

from consolekit.config import settings
from consolekit.console import Console, reset_console
from consolekit.main import app
from consolekit.observability import metrics_store
from consolekit.services.warning_channel import warning_channel


class RecordingStream:
    def __init__(self) -> None:
        self.writes: list[str] = []

    def write(self, data: str) -> int:
        self.writes.append(data)
        return len(data)

    def flush(self) -> None:
        return None


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class Outputs:
    console: Console
    stdout: RecordingStream = field(default_factory=RecordingStream)
    stderr: RecordingStream = field(default_factory=RecordingStream)

    @property
    def strings(self) -> list[str]:
        return self.stdout.writes

    @property
    def err_strings(self) -> list[str]:
        return self.stderr.writes


@pytest.fixture(autouse=True)
def reset_console_state():
    reset_console()
    warning_channel.clear()
    yield
    reset_console()
    warning_channel.clear()


@pytest.fixture(autouse=True)
def reset_metrics_store():
    metrics_store.reset()
    yield


@pytest.fixture(scope="session", autouse=True)
def disable_python_warning_forwarding():
    original = settings.forward_python_warnings
    settings.forward_python_warnings = False
    yield
    settings.forward_python_warnings = original


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def outputs():
    stdout = RecordingStream()
    stderr = RecordingStream()
    return Outputs(console=Console(stdout, stderr), stdout=stdout, stderr=stderr)


@pytest.fixture
def clocked_outputs(fake_clock):
    stdout = RecordingStream()
    stderr = RecordingStream()
    return Outputs(console=Console(stdout, stderr, clock=fake_clock), stdout=stdout, stderr=stderr)


@pytest.fixture
def run_and_get_warnings():
    """Run ``fn`` inside an event loop and collect the warning messages it triggered.

    ``fn`` may return an awaitable. Delivery is deferred to the next loop iteration,
    so the collector yields once before unsubscribing.
    """

    def run(fn) -> list[str]:
        async def scenario() -> list[str]:
            messages: list[str] = []

            def listener(warning) -> None:
                messages.append(warning.message)

            warning_channel.subscribe(listener)
            try:
                result = fn()
                if inspect.isawaitable(result):
                    await result
                await asyncio.sleep(0)
            finally:
                warning_channel.unsubscribe(listener)
            return messages

        return asyncio.run(scenario())

    return run


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
