"""Student roster loader."""

import json
import logging
from typing import List, Optional

from .exceptions import LoadFormatError, LoadIOError
from .models import ClassInfo, Student

logger = logging.getLogger(__name__)

ROSTER_FILE = "students.json"

STUDENT_FIELDS = ("name", "email", "cuny_id")
CLASS_FIELDS = ("class_name", "class_time", "professor", "prof_email")


class RosterLoader:
    """
    Loads students and their class schedules from students.json.

    Unlike the reference tables, the roster is validated strictly: the first
    bad record aborts the load with a LoadFormatError naming its index.
    Students parsed before that record are kept in ``students``.
    """

    def __init__(self):
        self.students: List[Student] = []

    def load_from_file(self, path: str) -> None:
        """
        Load the roster from a JSON file.

        Raises:
            LoadIOError: If the file cannot be opened.
            LoadFormatError: If the content is invalid (see load_from_string).
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except OSError as e:
            raise LoadIOError(f"Could not open {ROSTER_FILE}") from e
        self.load_from_string(content)

    def load_from_string(self, content: str) -> None:
        """
        Parse roster JSON text.

        Raises:
            LoadFormatError: If the text is not JSON, the root is not an array,
                or a student or class record lacks a required field.
        """
        try:
            doc = json.loads(content)
        except ValueError as e:
            raise LoadFormatError(f"JSON parsing error in {ROSTER_FILE}: {e}") from e

        if not isinstance(doc, list):
            raise LoadFormatError(f"The root of {ROSTER_FILE} must be a JSON array.")

        self.students = []

        for i, obj in enumerate(doc):
            if not isinstance(obj, dict) or any(key not in obj for key in STUDENT_FIELDS):
                raise LoadFormatError(
                    f"Missing required student fields in entry #{i}", entry_index=i
                )

            student = Student(
                name=_text(obj["name"]),
                email=_text(obj["email"]),
                cuny_id=_text(obj["cuny_id"]),
            )

            classes = obj.get("classes")
            if not isinstance(classes, list):
                classes = []

            for j, c_obj in enumerate(classes):
                if not isinstance(c_obj, dict) or any(key not in c_obj for key in CLASS_FIELDS):
                    raise LoadFormatError(
                        f"Missing class fields for student #{i}, class #{j}",
                        entry_index=i,
                        class_index=j,
                    )
                student.classes.append(
                    ClassInfo(
                        class_name=_text(c_obj["class_name"]),
                        class_time=_text(c_obj["class_time"]),
                        professor=_text(c_obj["professor"]),
                        prof_email=_text(c_obj["prof_email"]),
                    )
                )

            self.students.append(student)

        logger.info(f"Loaded {len(self.students)} students")

    def find_student_by_id(self, cuny_id: str) -> Optional[Student]:
        for student in self.students:
            if student.cuny_id == cuny_id:
                return student
        return None


def _text(value) -> str:
    # Non-string JSON values read as empty text
    return value if isinstance(value, str) else ""
