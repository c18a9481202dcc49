from pydantic import BaseModel, Field


class TimerEntry(BaseModel):
    label: str
    elapsed_ms: float = Field(ge=0)
    display: str


class TimersResponse(BaseModel):
    count: int
    timers: list[TimerEntry]


class CountersResponse(BaseModel):
    count: int
    counters: dict[str, int]
