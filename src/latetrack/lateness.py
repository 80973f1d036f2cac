"""Lateness calculation for a single commute."""

import logging
import re
from datetime import datetime, time
from typing import List, Optional

from .exceptions import ClassTimeFormatError, EmptySelectionError, LineResolutionError
from .models import (
    CLASS_DISPLAY_SEPARATOR,
    GOOD_SERVICE,
    ClassInfo,
    LatenessResult,
    Student,
)
from .reference_loader import ReferenceDataLoader

logger = logging.getLogger(__name__)

# Used when a station/line pair has no travel time entry
DEFAULT_TRAVEL_MINUTES = 30
DEFAULT_DELAY_PENALTY = 0

# %I accepts both "9:05" and "09:05"
CLASS_TIME_FORMAT = "%I:%M %p"

SECONDS_PER_DAY = 24 * 60 * 60

EMAIL_TEMPLATE = (
    "Hello {professor},\n\n"
    "I may arrive a few minutes late to class today due to subway delays.\n"
    "Based on my commute, I might be about {minutes} minutes late.\n\n"
    "Thank you for your understanding.\n\n"
    "Best regards,\n"
    "{student}"
)


def _seconds(t: time) -> int:
    return t.hour * 3600 + t.minute * 60 + t.second


def add_minutes(t: time, minutes: int) -> time:
    """Add minutes to a time of day, wrapping past midnight."""
    total = (_seconds(t) + minutes * 60) % SECONDS_PER_DAY
    return time(total // 3600, total % 3600 // 60, total % 60)


def minutes_between(start: time, end: time) -> int:
    """Whole minutes from start to end within the same day (negative if end is earlier)."""
    return int((_seconds(end) - _seconds(start)) / 60)


def parse_class_start_time(display_text: str) -> time:
    """
    Extract the class start time from a display string.

    Args:
        display_text: Text like "Calculus I – 10:00 AM - 11:40 AM".

    Returns:
        The start time of the class.

    Raises:
        ClassTimeFormatError: If the separator is missing or the time does
            not parse as a 12-hour clock time.
    """
    parts = display_text.split(CLASS_DISPLAY_SEPARATOR)
    if len(parts) < 2:
        raise ClassTimeFormatError("Invalid class time format.")

    full_time = parts[1].strip()
    start_text = re.split(r"\s*-\s*", full_time)[0].strip()

    try:
        return datetime.strptime(start_text, CLASS_TIME_FORMAT).time()
    except ValueError:
        raise ClassTimeFormatError("Could not read class start time.") from None


def resolve_primary_line(reference: ReferenceDataLoader, station_name: str) -> str:
    """
    Get the primary (first listed) line for a station, upper-cased.

    Raises:
        LineResolutionError: If the station is unknown or lists no lines.
    """
    try:
        station = reference.get_station(station_name)
    except ValueError:
        raise LineResolutionError("Could not determine train line.") from None

    if not station.lines:
        raise LineResolutionError("Could not determine train line.")

    line = station.lines[0].strip().upper()
    if not line:
        raise LineResolutionError("Could not determine train line.")
    return line


def find_professor(student: Student, class_text: str) -> Optional[ClassInfo]:
    """
    Find the class record behind a selected display string.

    An exact display-text match wins; otherwise the first class whose name
    appears anywhere in the text is used.
    """
    for info in student.classes:
        if info.display_text == class_text:
            return info
    for info in student.classes:
        if info.class_name in class_text:
            return info
    return None


def find_alternatives(
    reference: ReferenceDataLoader, station_name: str, primary_line: str, status: str
) -> List[str]:
    """
    Suggest other lines at the station when the primary line is degraded.

    Returns:
        Lines rendered as "Take <line> Train instead"; empty when service is good.
    """
    if status == GOOD_SERVICE:
        return []

    lines = reference.lines_for_station(station_name)
    if primary_line in lines:
        lines.remove(primary_line)

    return [f"Take {line} Train instead" for line in lines]


def build_email_body(professor: str, minutes_late: int, student_name: str) -> str:
    return EMAIL_TEMPLATE.format(
        professor=professor, minutes=minutes_late, student=student_name
    )


def compute_lateness(
    selected_station: str,
    selected_class_text: str,
    start_time: time,
    student: Student,
    reference: ReferenceDataLoader,
    delay_penalty: int = DEFAULT_DELAY_PENALTY,
) -> LatenessResult:
    """
    Project arrival at class and decide whether the student will be late.

    Args:
        selected_station: Station name the student leaves from.
        selected_class_text: Class display text ("<name> – <start> - <end>").
        start_time: When the student sets off.
        student: The logged-in student.
        reference: Loaded reference tables.
        delay_penalty: Extra minutes added to the base travel time.

    Returns:
        LatenessResult with the verdict. When late, ``minutes`` is the count
        of minutes late and ``email_body`` holds a draft notice; otherwise
        ``minutes`` is the count of minutes early (0 when exactly on time).

    Raises:
        EmptySelectionError: If station or class is blank.
        ClassTimeFormatError: If the class start time cannot be read.
        LineResolutionError: If the station's primary line is unknown.
    """
    station = selected_station.strip()
    if not station:
        raise EmptySelectionError("Please select a station.")

    class_text = selected_class_text.strip()
    if not class_text:
        raise EmptySelectionError("Please select a class.")

    class_start = parse_class_start_time(class_text)
    primary_line = resolve_primary_line(reference, station)

    base_minutes = reference.travel_minutes(station, primary_line)
    if base_minutes is None:
        logger.debug(f"No travel time for {station} / {primary_line}, using default")
        base_minutes = DEFAULT_TRAVEL_MINUTES
    travel_minutes = base_minutes + delay_penalty

    status = reference.service_status(primary_line)
    if status is None:
        status = GOOD_SERVICE

    arrival_time = add_minutes(start_time, travel_minutes)
    diff = minutes_between(class_start, arrival_time)

    if arrival_time > class_start:
        will_be_late = True
        minutes = diff
    else:
        will_be_late = False
        minutes = -diff

    info = find_professor(student, class_text)
    professor = info.professor if info else ""
    prof_email = info.prof_email if info else ""

    email_body = build_email_body(professor, minutes, student.name) if will_be_late else ""

    result = LatenessResult(
        station=station,
        class_text=class_text,
        class_start=class_start,
        start_time=start_time,
        primary_line=primary_line,
        base_minutes=base_minutes,
        travel_minutes=travel_minutes,
        service_status=status,
        arrival_time=arrival_time,
        will_be_late=will_be_late,
        minutes=minutes,
        professor=professor,
        prof_email=prof_email,
        alternatives=find_alternatives(reference, station, primary_line, status),
        email_body=email_body,
    )
    logger.info(
        f"{station} via {primary_line}: arrive {result.arrival_label}, "
        f"{'late' if will_be_late else 'not late'} ({minutes} min)"
    )
    return result
