"""LateTrack - Will a subway commute make a student late for class?"""

__version__ = "0.1.0"

from .models import (
    Station,
    TravelTime,
    ServiceAlert,
    StationLines,
    ClassInfo,
    Student,
    LatenessResult,
    PlanState,
    Session,
)
from .reference_loader import ReferenceDataLoader
from .roster import RosterLoader
from .lateness import compute_lateness
from .planner import LatenessPlanner

__all__ = [
    "LatenessPlanner",
    "ReferenceDataLoader",
    "RosterLoader",
    "compute_lateness",
    "Station",
    "TravelTime",
    "ServiceAlert",
    "StationLines",
    "ClassInfo",
    "Student",
    "LatenessResult",
    "PlanState",
    "Session",
]
