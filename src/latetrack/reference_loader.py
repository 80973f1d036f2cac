"""Static reference data loader: stations, travel times, alerts, station lines."""

import json
import logging
import os
from typing import Any, List, Optional

from .models import Station, TravelTime, ServiceAlert, StationLines

logger = logging.getLogger(__name__)

STATIONS_FILE = "stations.json"
TRAVEL_TIMES_FILE = "travel_times.json"
ALERTS_FILE = "alerts.json"
STATION_TO_LINES_FILE = "station_to_lines.json"


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _as_str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [_as_str(item) for item in value]


class ReferenceDataLoader:
    """
    Loads and searches the four static lookup tables.

    Loading never raises: a table that cannot be read or parsed is left
    empty and the problem is logged, so the planner keeps working with
    whatever data is available.
    """

    def __init__(self):
        """Initialize an empty loader."""
        self.stations: List[Station] = []
        self.travel_times: List[TravelTime] = []
        self.service_alerts: List[ServiceAlert] = []
        self.station_lines: List[StationLines] = []

    def load_from_files(self, data_dir: str = ".") -> None:
        """Load every table from JSON files in data_dir."""
        logger.info(f"Loading reference data from {os.path.abspath(data_dir)}")
        parsers = [
            (STATIONS_FILE, self._load_stations),
            (STATION_TO_LINES_FILE, self._load_station_lines),
            (ALERTS_FILE, self._load_service_alerts),
            (TRAVEL_TIMES_FILE, self._load_travel_times),
        ]
        for filename, parse in parsers:
            path = os.path.join(data_dir, filename)
            try:
                with open(path, "r", encoding="utf-8") as f:
                    content = f.read()
            except OSError as e:
                logger.warning(f"Could not open {filename}: {e}")
                continue
            parse(content)

    @staticmethod
    def _parse_object(content: str, filename: str) -> Optional[dict]:
        """Parse JSON text whose root must be an object; None if it is not."""
        try:
            doc = json.loads(content)
        except ValueError as e:
            logger.warning(f"{filename} is not valid JSON: {e}")
            return None
        if not isinstance(doc, dict):
            logger.warning(f"{filename} is not an object!")
            return None
        return doc

    def _load_stations(self, content: str) -> None:
        """Parse stations.json into Station objects."""
        self.stations = []
        doc = self._parse_object(content, STATIONS_FILE)
        if doc is None:
            return

        entries = doc.get("stations")
        if not isinstance(entries, list):
            entries = []

        for entry in entries:
            if not isinstance(entry, dict):
                entry = {}
            self.stations.append(
                Station(
                    name=_as_str(entry.get("Station Name")),
                    lines=_as_str_list(entry.get("Train Lines")),
                )
            )

        logger.info(f"Loaded {len(self.stations)} stations")

    def _load_travel_times(self, content: str) -> None:
        """Parse travel_times.json, flattening station -> line -> minutes."""
        self.travel_times = []
        doc = self._parse_object(content, TRAVEL_TIMES_FILE)
        if doc is None:
            return

        for station_name, by_line in doc.items():
            if not isinstance(by_line, dict):
                continue
            for line_name, minutes in by_line.items():
                self.travel_times.append(
                    TravelTime(
                        station_name=station_name,
                        line_name=line_name,
                        minutes=_as_int(minutes),
                    )
                )

        logger.info(f"Loaded {len(self.travel_times)} travel time entries")

    def _load_service_alerts(self, content: str) -> None:
        """Parse alerts.json."""
        self.service_alerts = []
        doc = self._parse_object(content, ALERTS_FILE)
        if doc is None:
            return

        for line_name, status in doc.items():
            self.service_alerts.append(ServiceAlert(line_name=line_name, status=_as_str(status)))

        logger.info(f"Loaded {len(self.service_alerts)} service alerts")

    def _load_station_lines(self, content: str) -> None:
        """Parse station_to_lines.json."""
        self.station_lines = []
        doc = self._parse_object(content, STATION_TO_LINES_FILE)
        if doc is None:
            return

        for station_name, lines in doc.items():
            self.station_lines.append(
                StationLines(station_name=station_name, lines=_as_str_list(lines))
            )

        logger.info(f"Loaded {len(self.station_lines)} station line groups")

    def get_station(self, name: str) -> Station:
        """Get station by exact name."""
        for station in self.stations:
            if station.name == name:
                return station
        raise ValueError(f"Station {name} not found")

    def find_stations_by_name(self, name: str) -> List[Station]:
        """Find stations by name (case-insensitive partial match)."""
        name_lower = name.lower()
        return [s for s in self.stations if name_lower in s.name.lower()]

    def station_names(self) -> List[str]:
        return [s.name for s in self.stations]

    def travel_minutes(self, station_name: str, line_name: str) -> Optional[int]:
        """Minutes for an exact (station, line) pair, or None if not listed."""
        for entry in self.travel_times:
            if entry.station_name == station_name and entry.line_name == line_name:
                return entry.minutes
        return None

    def service_status(self, line_name: str) -> Optional[str]:
        """Status for an exact line name, or None if no alert is listed."""
        for alert in self.service_alerts:
            if alert.line_name == line_name:
                return alert.status
        return None

    def lines_for_station(self, station_name: str) -> List[str]:
        """All lines serving a station (case-insensitive station match)."""
        wanted = station_name.casefold()
        for entry in self.station_lines:
            if entry.station_name.casefold() == wanted:
                return list(entry.lines)
        return []

    def clear(self) -> None:
        """Clear all loaded data."""
        self.stations.clear()
        self.travel_times.clear()
        self.service_alerts.clear()
        self.station_lines.clear()
        logger.info("Cleared reference data")
