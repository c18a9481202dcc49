from fastapi import APIRouter, Depends

from consolekit.console import Console, console
from consolekit.schemas.console import CountersResponse, TimerEntry, TimersResponse
from consolekit.services.label_tracker import MS_PER_SECOND, format_elapsed

router = APIRouter(prefix="/console", tags=["console"])


def get_console() -> Console:
    return console


@router.get("/timers", summary="Active console timers", response_model=TimersResponse)
def list_timers(target: Console = Depends(get_console)) -> TimersResponse:
    """
    Read-only view of running timers. Listing a timer never stops it and never
    emits a warning.
    """
    entries: list[TimerEntry] = []
    for label in list(target.tracker.timers):
        elapsed = target.tracker.elapsed(label)
        if elapsed is None:
            continue
        entries.append(
            TimerEntry(
                label=label,
                elapsed_ms=round(elapsed * MS_PER_SECOND, 3),
                display=format_elapsed(elapsed),
            )
        )
    return TimersResponse(count=len(entries), timers=entries)


@router.get("/counters", summary="Console counters", response_model=CountersResponse)
def list_counters(target: Console = Depends(get_console)) -> CountersResponse:
    counters = dict(target.tracker.counters)
    return CountersResponse(count=len(counters), counters=counters)
