"""Planning controller tying the loaders, session and lateness calculator together."""

import logging
import os
from dataclasses import replace
from datetime import time
from typing import List, Optional

from .exceptions import LoadError, LoginError
from .lateness import DEFAULT_DELAY_PENALTY, compute_lateness
from .mail import build_mailto_uri, open_mail_client
from .models import LatenessResult, PlanState, Session, Station
from .reference_loader import ReferenceDataLoader
from .roster import ROSTER_FILE, RosterLoader

logger = logging.getLogger(__name__)


class LatenessPlanner:
    """
    UI-agnostic controller for one student's planning flow.

    This class provides methods to:
    - Load reference tables and the student roster
    - Log a student in and list their classes
    - Compute lateness for a station/class/start time
    - Accept or decline the late notice and hand it to a mail client

    Every flow step replaces ``session`` with a new value; a failed step
    leaves it untouched.
    """

    def __init__(self, reference: Optional[ReferenceDataLoader] = None,
                 roster: Optional[RosterLoader] = None):
        self.reference = reference if reference is not None else ReferenceDataLoader()
        self.roster = roster if roster is not None else RosterLoader()
        self.session: Optional[Session] = None
        self.roster_error: Optional[str] = None
        self.delay_penalty = DEFAULT_DELAY_PENALTY

    def load_data(self, data_dir: str = ".") -> None:
        """
        Load reference tables and the roster from data_dir.

        Reference tables degrade to empty lists on failure. A roster failure
        is logged and kept in ``roster_error`` for the caller to show.
        """
        self.reference.load_from_files(data_dir)

        self.roster_error = None
        try:
            self.roster.load_from_file(os.path.join(data_dir, ROSTER_FILE))
        except LoadError as e:
            self.roster_error = f"An error occurred while loading {ROSTER_FILE}:\n{e}"
            logger.error(f"Student load error: {e}")

    def login(self, cuny_id: str) -> Session:
        """
        Start a session for the student with the given CUNY ID.

        Raises:
            LoginError: If the ID is blank or matches no student.
        """
        cuny_id = cuny_id.strip()
        if not cuny_id:
            raise LoginError("Please enter your CUNY ID.")

        student = self.roster.find_student_by_id(cuny_id)
        if student is None:
            raise LoginError("Account not found.")

        self.session = Session(student=student, delay_penalty=self.delay_penalty)
        logger.info(f"Logged in {student.name}")
        return self.session

    def logout(self) -> None:
        self.session = None

    def _require_session(self) -> Session:
        if self.session is None:
            raise LoginError("No student is logged in.")
        return self.session

    def class_options(self) -> List[str]:
        """Display strings for the current student's classes."""
        session = self._require_session()
        return [info.display_text for info in session.student.classes]

    def station_suggestions(self, text: str) -> List[Station]:
        if not text.strip():
            return list(self.reference.stations)
        return self.reference.find_stations_by_name(text.strip())

    def set_delay_penalty(self, minutes: int) -> None:
        """Set the extra minutes added to every travel time."""
        if minutes < 0:
            raise ValueError("Delay penalty cannot be negative")
        self.delay_penalty = minutes
        if self.session is not None:
            self.session = replace(self.session, delay_penalty=minutes)

    def plan(self, station: str, class_text: str, start_time: time) -> LatenessResult:
        """
        Compute lateness and advance the session.

        A late result waits for confirm_notification()/decline_notification();
        anything else goes straight to RESULT_READY.

        Raises:
            ValidationError: On bad input; the session is unchanged.
        """
        session = self._require_session()
        result = compute_lateness(
            station,
            class_text,
            start_time,
            session.student,
            self.reference,
            delay_penalty=session.delay_penalty,
        )

        if result.will_be_late:
            state = PlanState.AWAITING_CONFIRMATION
        else:
            state = PlanState.RESULT_READY

        self.session = replace(session, state=state, result=result, draft_email="")
        return result

    def _require_confirmation(self) -> Session:
        session = self._require_session()
        if session.state is not PlanState.AWAITING_CONFIRMATION:
            raise ValueError("No late notice is waiting for confirmation")
        return session

    def confirm_notification(self) -> str:
        """Accept the late notice; returns the draft email body."""
        session = self._require_confirmation()
        self.session = replace(
            session, state=PlanState.RESULT_READY, draft_email=session.result.email_body
        )
        return self.session.draft_email

    def decline_notification(self) -> None:
        """Skip the late notice and keep the late result."""
        session = self._require_confirmation()
        self.session = replace(session, state=PlanState.RESULT_READY, draft_email="")

    def update_draft(self, body: str) -> None:
        session = self._require_session()
        self.session = replace(session, draft_email=body)

    def mailto_uri(self) -> str:
        session = self._require_session()
        prof_email = session.result.prof_email if session.result else ""
        return build_mailto_uri(prof_email, session.draft_email)

    def send_email(self) -> bool:
        """Open the mail client with the current draft."""
        return open_mail_client(self.mailto_uri())
