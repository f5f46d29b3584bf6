"""
Summarizes raw arrivals and departures into what a rider needs to know.

For each departure: when it is scheduled, whether a real-time prediction is
active, and if so how far the prediction is from the schedule.
"""
import datetime
import logging

import pytz

from .departure import NextDeparture

TIME_FORMAT = "%I:%M %p"


def format_duration(milliseconds):
    """
    Formats a duration as e.g. "1h 2m 5s".

    The sign is dropped and zero-valued parts are left out, so a duration of
    zero formats as an empty string.
    """
    total_seconds = abs(int(milliseconds)) // 1000
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    parts = []
    if hours:
        parts.append(f"{hours}h")
    if minutes:
        parts.append(f"{minutes}m")
    if seconds:
        parts.append(f"{seconds}s")
    return " ".join(parts)


def format_timestamp(milliseconds, timezone=None):
    """Formats an epoch-milliseconds timestamp as a wall-clock time."""
    if timezone:
        tz = pytz.timezone(timezone) if isinstance(timezone, str) else timezone
        dt = datetime.datetime.fromtimestamp(milliseconds / 1000, tz=pytz.utc).astimezone(tz)
    else:
        dt = datetime.datetime.fromtimestamp(milliseconds / 1000)
    return dt.strftime(TIME_FORMAT)


class DepartureAnalyzer:
    def __init__(self, max_departures, timezone=None):
        self.max_departures = max_departures
        self.timezone = timezone

    def summarize(self, arrival):
        """Builds the NextDeparture for one ArrivalAndDeparture."""
        next_departure = NextDeparture(
            scheduled_departure_time=format_timestamp(arrival.scheduled_departure_time, self.timezone),
            is_predicted=arrival.predicted,
        )
        if not arrival.has_prediction():
            return next_departure

        offset = arrival.predicted_arrival_time - arrival.scheduled_arrival_time
        next_departure.predicted_departure_time = format_timestamp(
            arrival.predicted_departure_time or arrival.predicted_arrival_time, self.timezone
        )
        next_departure.time_offset = format_duration(offset)
        # A positive offset is reported as early
        if offset > 0:
            next_departure.is_early = True
        elif offset < 0:
            next_departure.is_late = True
        return next_departure

    def analyze(self, stop_departures):
        """
        Summarizes the first ``max_departures`` departures of a stop.

        The API's order is kept as-is; nothing is re-sorted.
        """
        arrivals = stop_departures.arrivals_and_departures[:self.max_departures]
        summaries = [self.summarize(arrival) for arrival in arrivals]
        logging.info(
            "Next departures from %s (%s): %s",
            stop_departures.stop.name,
            stop_departures.stop.group,
            [summary.to_dict() for summary in summaries],
        )
        return summaries
