"""Core module for the year-over-year event continuity check."""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

FOUND = 'FOUND'
MISSING = 'MISSING'


@dataclass(frozen=True)
class Event:
    """Represents an event record from the event store snapshot."""

    date: date
    municipality: str
    venue: str = ''           # Empty means the town centre ("Casco")
    performers: tuple[str, ...] = field(default_factory=tuple)
    event_type: str = ''
    start_time: str = ''      # Local time of day, passed through
    event_id: str = ''
    cancelled: bool = False


@dataclass
class MatchResult:
    """Outcome of looking for a reference event in the current year."""

    reference: Event
    matched: Optional[Event]
    status: str               # FOUND, MISSING
    is_carnival: bool = False
    distance: Optional[int] = None

    @property
    def found(self) -> bool:
        return self.status == FOUND


@dataclass
class MonthComparison:
    """All results of one continuity query for a (year, month)."""

    year: int                 # Current year; references come from year - 1
    month: int                # 1-12
    carnival_tuesday: date    # Carnival Tuesday of the current year
    results: list[MatchResult] = field(default_factory=list)
    stats: dict = field(default_factory=dict)

    @property
    def found(self) -> list[MatchResult]:
        return [r for r in self.results if r.found]

    @property
    def missing(self) -> list[MatchResult]:
        return [r for r in self.results if not r.found]
