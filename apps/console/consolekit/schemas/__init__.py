from consolekit.schemas.console import CountersResponse, TimerEntry, TimersResponse
from consolekit.schemas.health import HealthResponse
from consolekit.schemas.metrics import MetricsResponse, TimingMetricStats

__all__ = [
    "CountersResponse",
    "HealthResponse",
    "MetricsResponse",
    "TimerEntry",
    "TimersResponse",
    "TimingMetricStats",
]
