"""Tests for the reference data and roster loaders."""

import json
import os
import sys
import tempfile
import unittest
from pathlib import Path

# Add src to path so we can import latetrack
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from latetrack.exceptions import LoadFormatError, LoadIOError
from latetrack.models import Station
from latetrack.reference_loader import ReferenceDataLoader
from latetrack.roster import RosterLoader


class TestReferenceDataLoader(unittest.TestCase):
    """Test parsing of the four static lookup tables."""

    def test_load_stations_json(self):
        """Test parsing of stations.json data."""
        loader = ReferenceDataLoader()
        loader._load_stations(json.dumps({
            "stations": [
                {"Station Name": "Times Sq-42 St", "Train Lines": ["N", "Q", "R"]},
                {"Station Name": "Court Sq", "Train Lines": ["G", "7"]},
            ]
        }))

        self.assertEqual(len(loader.stations), 2)
        station = loader.stations[0]
        self.assertEqual(station.name, "Times Sq-42 St")
        self.assertEqual(station.lines, ["N", "Q", "R"])

    def test_load_stations_missing_fields_default(self):
        loader = ReferenceDataLoader()
        loader._load_stations(json.dumps({"stations": [{"Train Lines": ["A"]}, {"Station Name": "Court Sq"}]}))

        self.assertEqual(loader.stations[0].name, "")
        self.assertEqual(loader.stations[1].lines, [])

    def test_load_stations_wrong_root_is_ignored(self):
        """An array root leaves the table empty and logs a warning."""
        loader = ReferenceDataLoader()
        with self.assertLogs("latetrack.reference_loader", level="WARNING"):
            loader._load_stations(json.dumps([{"Station Name": "Court Sq"}]))
        self.assertEqual(loader.stations, [])

    def test_load_invalid_json_is_ignored(self):
        loader = ReferenceDataLoader()
        with self.assertLogs("latetrack.reference_loader", level="WARNING"):
            loader._load_service_alerts("{not json")
        self.assertEqual(loader.service_alerts, [])

    def test_load_travel_times_flattens(self):
        loader = ReferenceDataLoader()
        loader._load_travel_times(json.dumps({
            "Times Sq-42 St": {"N": 25, "1": 35},
            "Court Sq": {"G": "soon"},
        }))

        self.assertEqual(len(loader.travel_times), 3)
        self.assertEqual(loader.travel_minutes("Times Sq-42 St", "1"), 35)
        self.assertEqual(loader.travel_minutes("Court Sq", "G"), 0)
        self.assertIsNone(loader.travel_minutes("Court Sq", "7"))

    def test_service_status_exact_match(self):
        loader = ReferenceDataLoader()
        loader._load_service_alerts(json.dumps({"N": "DELAYS", "A": "GOOD SERVICE"}))

        self.assertEqual(loader.service_status("N"), "DELAYS")
        self.assertIsNone(loader.service_status("n"))

    def test_lines_for_station_case_insensitive(self):
        loader = ReferenceDataLoader()
        loader._load_station_lines(json.dumps({"Times Sq-42 St": ["N", "Q", "R", "W"]}))

        lines = loader.lines_for_station("times sq-42 st")
        self.assertEqual(lines, ["N", "Q", "R", "W"])

        # Returned list is a copy
        lines.remove("N")
        self.assertEqual(loader.station_lines[0].lines, ["N", "Q", "R", "W"])
        self.assertEqual(loader.lines_for_station("Nowhere"), [])

    def test_find_stations_by_name(self):
        """Test finding stations by partial name match."""
        loader = ReferenceDataLoader()
        loader.stations = [
            Station(name="Times Sq-42 St", lines=["N"]),
            Station(name="42 St-Port Authority", lines=["A"]),
            Station(name="Court Sq", lines=["G"]),
        ]

        self.assertEqual(len(loader.find_stations_by_name("42 st")), 2)
        self.assertEqual(len(loader.find_stations_by_name("SQ")), 2)

    def test_get_station_not_found(self):
        loader = ReferenceDataLoader()
        with self.assertRaises(ValueError):
            loader.get_station("NONEXISTENT")

    def test_get_station_first_match_wins(self):
        loader = ReferenceDataLoader()
        loader.stations = [
            Station(name="Court Sq", lines=["G"]),
            Station(name="Court Sq", lines=["7"]),
        ]
        self.assertEqual(loader.get_station("Court Sq").lines, ["G"])

    def test_load_from_files_missing_directory(self):
        """Missing files degrade to empty tables instead of raising."""
        loader = ReferenceDataLoader()
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertLogs("latetrack.reference_loader", level="WARNING"):
                loader.load_from_files(os.path.join(tmp, "missing"))

        self.assertEqual(loader.stations, [])
        self.assertEqual(loader.travel_times, [])
        self.assertEqual(loader.service_alerts, [])
        self.assertEqual(loader.station_lines, [])

    def test_load_from_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            files = {
                "stations.json": {"stations": [{"Station Name": "Court Sq", "Train Lines": ["G"]}]},
                "travel_times.json": {"Court Sq": {"G": 28}},
                "alerts.json": {"G": "GOOD SERVICE"},
                "station_to_lines.json": {"Court Sq": ["G", "7"]},
            }
            for name, content in files.items():
                with open(os.path.join(tmp, name), "w", encoding="utf-8") as f:
                    json.dump(content, f)

            loader = ReferenceDataLoader()
            loader.load_from_files(tmp)

        self.assertEqual(loader.station_names(), ["Court Sq"])
        self.assertEqual(loader.travel_minutes("Court Sq", "G"), 28)
        self.assertEqual(loader.service_status("G"), "GOOD SERVICE")
        self.assertEqual(loader.lines_for_station("Court Sq"), ["G", "7"])

        loader.clear()
        self.assertEqual(loader.stations, [])


def _student(cuny_id, **overrides):
    record = {
        "name": f"Student {cuny_id}",
        "email": f"{cuny_id}@example.edu",
        "cuny_id": cuny_id,
        "classes": [
            {
                "class_name": "Algorithms",
                "class_time": "10:00 AM - 11:40 AM",
                "professor": "Dr. Ruiz",
                "prof_email": "ruiz@example.edu",
            }
        ],
    }
    record.update(overrides)
    return record


class TestRosterLoader(unittest.TestCase):
    """Test strict loading of students.json."""

    def test_load_students(self):
        loader = RosterLoader()
        loader.load_from_string(json.dumps([_student("111"), _student("222", classes=[])]))

        self.assertEqual(len(loader.students), 2)
        student = loader.students[0]
        self.assertEqual(student.name, "Student 111")
        self.assertEqual(student.classes[0].professor, "Dr. Ruiz")
        self.assertEqual(student.classes[0].display_text, "Algorithms – 10:00 AM - 11:40 AM")

    def test_find_student_by_id(self):
        loader = RosterLoader()
        loader.load_from_string(json.dumps([_student("111"), _student("222")]))

        self.assertEqual(loader.find_student_by_id("222").email, "222@example.edu")
        self.assertIsNone(loader.find_student_by_id("999"))

    def test_missing_student_field_names_entry(self):
        """A record without cuny_id stops the load; earlier students are kept."""
        bad = _student("333")
        del bad["cuny_id"]
        loader = RosterLoader()

        with self.assertRaises(LoadFormatError) as ctx:
            loader.load_from_string(json.dumps([_student("111"), _student("222"), bad, _student("444")]))

        self.assertIn("entry #2", str(ctx.exception))
        self.assertEqual(ctx.exception.entry_index, 2)
        self.assertEqual([s.cuny_id for s in loader.students], ["111", "222"])

    def test_missing_class_field_names_student_and_class(self):
        bad = _student("222")
        del bad["classes"][0]["prof_email"]
        loader = RosterLoader()

        with self.assertRaises(LoadFormatError) as ctx:
            loader.load_from_string(json.dumps([_student("111"), bad]))

        self.assertEqual(str(ctx.exception), "Missing class fields for student #1, class #0")
        self.assertEqual(ctx.exception.class_index, 0)
        self.assertEqual(len(loader.students), 1)

    def test_root_must_be_array(self):
        loader = RosterLoader()
        with self.assertRaises(LoadFormatError):
            loader.load_from_string(json.dumps({"students": []}))

    def test_invalid_json(self):
        loader = RosterLoader()
        with self.assertRaises(LoadFormatError) as ctx:
            loader.load_from_string("[{")
        self.assertIn("JSON parsing error", str(ctx.exception))

    def test_missing_file(self):
        loader = RosterLoader()
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(LoadIOError):
                loader.load_from_file(os.path.join(tmp, "students.json"))


if __name__ == "__main__":
    unittest.main()
