from pydantic import BaseModel, Field


class TimingMetricStats(BaseModel):
    count: int = Field(ge=1)
    total_s: float
    avg_s: float
    min_s: float
    max_s: float


class MetricsResponse(BaseModel):
    counters: dict[str, int]
    timings: dict[str, TimingMetricStats]
