import json
import logging
import time

from .config import DEFAULT_MINUTES_AFTER
from .departure import ArrivalAndDeparture, StopDepartures
from .envelope import check_detail_envelope, check_list_envelope, require_field, require_objects
from .errors import EmptyResultError, ResolutionError, ServerError
from .route import Agency, Route
from .stop import StopReference


class EntityResolver:
    def __init__(self, api_client, agency_name, route_short_name, stop_name,
                 minutes_after=DEFAULT_MINUTES_AFTER, trace_requests=False, clock=time.time):
        """
        Resolve one stop (both directions) from its human-readable names.

        Args:
            api_client: An APIClient (or anything with the same four methods).
            agency_name: Exact agency name, e.g. "Metro Transit".
            route_short_name: Exact rider-facing route code, e.g. "5".
            stop_name: Exact stop name as it appears in the route's stop list.
            minutes_after: Look-ahead window for departures, in minutes.
            trace_requests: Log every call and its decoded response at DEBUG level.
            clock: Returns the current time in seconds since the epoch.
        """
        self.api_client = api_client
        self.agency_name = agency_name
        self.route_short_name = route_short_name
        self.stop_name = stop_name
        self.minutes_after = minutes_after
        self.trace_requests = trace_requests
        self.clock = clock

    def _call(self, name, fn, *args, **kwargs):
        if self.trace_requests:
            logging.debug("===REQUEST=== %s %s %s", name, args, kwargs)
        envelope = fn(*args, **kwargs)
        if self.trace_requests:
            logging.debug("===RESPONSE=== %s\n%s", name, json.dumps(envelope, indent=2, sort_keys=True)[:5000])
        return envelope

    def resolve_agency(self):
        """Finds the agency whose name matches exactly (no normalization)."""
        envelope = self._call("agencies-with-coverage", self.api_client.list_agencies_with_coverage)
        data = check_list_envelope(envelope)

        agencies = require_objects(_references(data).get('agencies'), 'agency references')
        for agency_dict in agencies:
            if agency_dict.get('name') == self.agency_name:
                agency = Agency.from_dict(agency_dict)
                logging.info("Target agency: %s", agency)
                return agency

        logging.error("No agency named '%s' among %d agencies", self.agency_name, len(agencies))
        raise ResolutionError("Agency not found")

    def resolve_route(self, agency):
        """Finds the agency's route whose short name matches exactly."""
        envelope = self._call("routes-for-agency", self.api_client.list_routes_for_agency, agency.agency_id)
        data = check_list_envelope(envelope)

        for route_dict in require_objects(data['list'], 'route list'):
            if route_dict.get('shortName') == self.route_short_name:
                route = Route.from_dict(route_dict)
                logging.info("Target route: %s", route)
                return route

        logging.error("No route '%s' for agency %s", self.route_short_name, agency.agency_id)
        raise ResolutionError("Route not found")

    def resolve_stops(self, route):
        """
        Finds the stops named ``stop_name`` on the route and labels each with
        its direction group.

        A stop name usually appears once per direction, but any number of
        matches is accepted. Each stop id gets at most one label (the first
        group that lists it).

        Returns:
            list: Stop objects, in the order the groups list them.
        """
        now_ms = int(self.clock() * 1000)
        envelope = self._call(
            "stops-for-route", self.api_client.get_stops_for_route,
            route.route_id, include_polylines=False, time=now_ms,
        )
        data = check_detail_envelope(envelope)

        stop_refs = {}
        for stop_dict in require_objects(_references(data).get('stops'), 'stop references'):
            if stop_dict.get('name') == self.stop_name:
                ref = StopReference.from_dict(stop_dict)
                stop_refs.setdefault(ref.stop_id, ref)
        logging.debug("Stop references named '%s': %s", self.stop_name, list(stop_refs.values()))

        # The documented response shape doesn't match what servers send: groups
        # live under entry.stopGroupings[].stopGroups[], labelled by name.name
        entry = data.get('entry') or {}
        if not isinstance(entry, dict):
            raise ServerError(f"Malformed stops for route {route.route_id}: 'entry' is not an object")
        stops = []
        for stop_grouping in require_objects(entry.get('stopGroupings'), 'stop groupings'):
            for stop_group in require_objects(stop_grouping.get('stopGroups'), 'stop groups'):
                name = stop_group.get('name') or {}
                if not isinstance(name, dict):
                    raise ServerError(f"Malformed stop group {stop_group.get('id')}: 'name' is not an object")
                label = name.get('name')
                if not label:
                    logging.debug("Ignoring unlabelled stop group %s", stop_group.get('id'))
                    continue
                stop_ids = stop_group.get('stopIds') or []
                if not isinstance(stop_ids, list):
                    raise ServerError(f"Malformed stop group {stop_group.get('id')}: 'stopIds' is not a list")
                for stop_id in stop_ids:
                    ref = stop_refs.pop(str(stop_id), None)
                    if ref is not None:
                        stops.append(ref.with_group(label))

        for ref in stop_refs.values():
            logging.warning("Stop %s is not in any direction group of route %s", ref, route.route_id)

        logging.info("Target stops: %s", stops)
        if not stops:
            raise ResolutionError("Stop groups not found")
        return stops

    def fetch_departures(self, stop, route=None):
        """Fetches the upcoming arrivals and departures for one stop."""
        envelope = self._call(
            "arrivals-and-departures-for-stop", self.api_client.get_arrivals_and_departures,
            stop.stop_id, minutes_before=0, minutes_after=self.minutes_after,
        )
        data = check_detail_envelope(envelope)

        entry = data.get('entry')
        if not isinstance(entry, dict):
            raise ServerError(f"Malformed arrivals and departures for stop {stop.stop_id}: missing 'entry'")
        records = require_objects(
            require_field(entry, 'arrivalsAndDepartures', 'arrivals and departures'), 'arrivals and departures'
        )

        arrivals_and_departures = []
        for record in records:
            arrival = ArrivalAndDeparture(record)
            # Stops are often shared between routes
            if route is not None and arrival.route_id and arrival.route_id != route.route_id:
                continue
            arrivals_and_departures.append(arrival)
        return StopDepartures(stop, arrivals_and_departures)

    def resolve_departures(self, stops, route=None, on_departures=None):
        """
        Fetches departures for each stop in turn.

        Args:
            stops: Stops from ``resolve_stops``.
            route: If given, departures of other routes serving the stop are dropped.
            on_departures: Optional callback, called with each StopDepartures
                as soon as it has been fetched.

        Returns:
            list: One StopDepartures per stop, in the same order as ``stops``.
        """
        results = []
        for stop in stops:
            stop_departures = self.fetch_departures(stop, route)
            if on_departures is not None:
                on_departures(stop_departures)
            results.append(stop_departures)

        if sum(len(stop_departures) for stop_departures in results) == 0:
            raise EmptyResultError("Departures not found")
        check_same_stop_name(results)
        return results

    def resolve(self, on_departures=None):
        """Runs all four stages and returns the StopDepartures for the target stop."""
        agency = self.resolve_agency()
        route = self.resolve_route(agency)
        stops = self.resolve_stops(route)
        return self.resolve_departures(stops, route, on_departures=on_departures)


def _references(data):
    references = data['references']
    if not isinstance(references, dict):
        raise ServerError("Malformed response: 'references' is not an object")
    return references


def check_same_stop_name(stop_departures_list):
    """Raises ResolutionError unless every entry is for a stop with the same name."""
    names = {stop_departures.stop.name for stop_departures in stop_departures_list}
    if len(names) > 1:
        raise ResolutionError(f"Inconsistent stop names in departures: {sorted(names)}")
