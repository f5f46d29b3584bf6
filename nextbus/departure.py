from typing import Dict, Any, List, Optional

from .envelope import require_field
from .errors import ServerError
from .stop import Stop


class ArrivalAndDeparture:
    def __init__(self, record_dict: Dict[str, Any]) -> None:
        # Initialize from one entry of ``entry.arrivalsAndDepartures``
        self.scheduled_arrival_time = require_field(record_dict, 'scheduledArrivalTime', 'arrival and departure')
        self.scheduled_departure_time = require_field(record_dict, 'scheduledDepartureTime', 'arrival and departure')
        self.predicted_arrival_time = record_dict.get('predictedArrivalTime') or 0
        self.predicted_departure_time = record_dict.get('predictedDepartureTime') or 0

        # Real-time prediction is only active when the trip status says so
        trip_status = record_dict.get('tripStatus') or {}
        if not isinstance(trip_status, dict):
            raise ServerError("Malformed arrival and departure: 'tripStatus' is not an object")
        self.predicted = bool(trip_status.get('predicted', False))

        self.route_id = record_dict.get('routeId')
        self.route_short_name = record_dict.get('routeShortName')
        self.trip_id = record_dict.get('tripId')
        self.trip_headsign = record_dict.get('tripHeadsign')

    def has_prediction(self):
        """True if the record carries enough data to compare prediction and schedule."""
        return self.predicted and bool(self.predicted_arrival_time) and bool(self.scheduled_arrival_time)

    def __eq__(self, other):
        return isinstance(other, ArrivalAndDeparture) and vars(self) == vars(other)

    def __repr__(self):
        return (f"ArrivalAndDeparture({self.trip_id}, scheduled={self.scheduled_departure_time}, "
                f"predicted={self.predicted_departure_time if self.predicted else None})")


class StopDepartures:
    """The arrivals and departures for one resolved stop, in the API's order."""

    def __init__(self, stop: Stop, arrivals_and_departures: List[ArrivalAndDeparture]) -> None:
        self.stop = stop
        self.arrivals_and_departures = arrivals_and_departures

    def __len__(self):
        return len(self.arrivals_and_departures)

    def __eq__(self, other):
        return (isinstance(other, StopDepartures) and self.stop == other.stop
                and self.arrivals_and_departures == other.arrivals_and_departures)

    def __repr__(self):
        return f"StopDepartures({self.stop!r}, {len(self)} departures)"


class NextDeparture:
    """The summary of one upcoming departure as shown to the rider."""

    def __init__(
        self,
        scheduled_departure_time: str,
        is_predicted: bool,
        predicted_departure_time: Optional[str] = None,
        time_offset: Optional[str] = None,
        is_early: Optional[bool] = None,
        is_late: Optional[bool] = None,
    ) -> None:
        self.scheduled_departure_time = scheduled_departure_time
        self.is_predicted = is_predicted
        self.predicted_departure_time = predicted_departure_time
        self.time_offset = time_offset
        self.is_early = is_early
        self.is_late = is_late

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary, leaving out fields that were never set."""
        result = {
            "scheduledDepartureTime": self.scheduled_departure_time,
            "isPredicted": self.is_predicted,
        }
        if self.predicted_departure_time is not None:
            result["predictedDepartureTime"] = self.predicted_departure_time
        if self.time_offset is not None:
            result["timeOffset"] = self.time_offset
        if self.is_early:
            result["isEarly"] = True
        if self.is_late:
            result["isLate"] = True
        return result

    def __eq__(self, other):
        return isinstance(other, NextDeparture) and vars(self) == vars(other)

    def __repr__(self):
        return f"NextDeparture({self.to_dict()})"
