NO_DEPARTURES = "No upcoming departures"


def group_departures(stop_departures_list, analyzer):
    """
    Maps each direction group to its summarized departures.

    Groups keep the order they were first seen in. If two stops share a
    group label their departures are listed together, still capped at
    ``analyzer.max_departures`` for the group.
    """
    groups = {}
    for stop_departures in stop_departures_list:
        groups.setdefault(stop_departures.stop.group, []).extend(analyzer.analyze(stop_departures))
    return {group: departures[:analyzer.max_departures] for group, departures in groups.items()}


def format_departure(next_departure):
    """Formats one departure as a single line (without indentation)."""
    if not next_departure.is_predicted or next_departure.predicted_departure_time is None:
        return next_departure.scheduled_departure_time

    line = next_departure.predicted_departure_time
    if next_departure.time_offset and (next_departure.is_early or next_departure.is_late):
        status = "early" if next_departure.is_early else "late"
        line += f" ({next_departure.time_offset} {status}, scheduled {next_departure.scheduled_departure_time})"
    return line


def format_report(stop_name, groups):
    """
    Renders the departures for a stop as plain text.

    Args:
        stop_name: Name of the stop, used for the header.
        groups: Mapping of direction group label to a list of NextDeparture.

    Returns:
        str: The report, e.g.

            Main St & 3rd Ave
              Eastbound:
                10:02 AM (2m early, scheduled 10:04 AM)
              Westbound:
                10:15 AM
    """
    lines = [stop_name]
    for group, departures in groups.items():
        lines.append(f"  {group}:")
        if not departures:
            lines.append(f"    {NO_DEPARTURES}")
            continue
        for next_departure in departures:
            lines.append(f"    {format_departure(next_departure)}")
    return "\n".join(lines)
