"""Data models for the commute lateness planner."""

from dataclasses import dataclass, field
from datetime import time
from enum import Enum
from typing import List, Optional

GOOD_SERVICE = "GOOD SERVICE"

# Separator between class name and class time in display strings (en dash)
CLASS_DISPLAY_SEPARATOR = " – "


@dataclass
class Station:
    """Represents a subway station and the lines listed for it."""
    name: str
    lines: List[str]  # First entry is the primary line


@dataclass
class TravelTime:
    """Travel minutes from a station when riding a given line."""
    station_name: str
    line_name: str
    minutes: int


@dataclass
class ServiceAlert:
    """Service status for a single line."""
    line_name: str
    status: str  # GOOD_SERVICE means no degradation


@dataclass
class StationLines:
    """Every line serving a station, used for alternative routes."""
    station_name: str
    lines: List[str]


@dataclass
class ClassInfo:
    """One class on a student's schedule."""
    class_name: str
    class_time: str  # e.g. "10:00 AM - 11:40 AM"
    professor: str
    prof_email: str

    @property
    def display_text(self) -> str:
        return f"{self.class_name}{CLASS_DISPLAY_SEPARATOR}{self.class_time}"


@dataclass
class Student:
    """A student from the roster."""
    name: str
    email: str
    cuny_id: str
    classes: List[ClassInfo] = field(default_factory=list)


@dataclass(frozen=True)
class LatenessResult:
    """Everything computed by a single planning run."""
    station: str
    class_text: str
    class_start: time
    start_time: time
    primary_line: str
    base_minutes: int
    travel_minutes: int  # base_minutes plus delay penalty
    service_status: str
    arrival_time: time
    will_be_late: bool
    minutes: int  # Minutes late when late, minutes early otherwise
    professor: str
    prof_email: str
    alternatives: List[str]
    email_body: str

    @property
    def service_label(self) -> str:
        return f"{self.primary_line} Line – {self.service_status}"

    @property
    def arrival_label(self) -> str:
        return self.arrival_time.strftime("%I:%M %p")

    @property
    def arrival_message(self) -> str:
        if self.will_be_late:
            return f"You may be {self.minutes} minutes late."
        if self.minutes > 0:
            return f"You will be {self.minutes} minutes early."
        return "You will arrive on time."

    @property
    def confirmation_prompt(self) -> str:
        return (
            f"You may be {self.minutes} minutes late. "
            "Would you like to notify your professor?"
        )


class PlanState(Enum):
    """Where a planning flow currently stands."""
    AWAITING_SELECTION = "awaiting_selection"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    RESULT_READY = "result_ready"


@dataclass(frozen=True)
class Session:
    """
    Per-login planning state.

    Sessions are never mutated in place; the planner swaps in a new value
    (via dataclasses.replace) each time the flow advances.
    """
    student: Student
    delay_penalty: int = 0
    state: PlanState = PlanState.AWAITING_SELECTION
    result: Optional[LatenessResult] = None
    draft_email: str = ""

    @property
    def selected_station(self) -> str:
        return self.result.station if self.result else ""

    @property
    def selected_class(self) -> str:
        return self.result.class_text if self.result else ""
