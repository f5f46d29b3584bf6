import copy
from unittest.mock import MagicMock

import pytest

# 2024-01-01 10:00:00 UTC
T0 = 1704103200000
MINUTE = 60 * 1000

STOP_NAME = "Main St & 3rd Ave"

AGENCIES = {
    "code": 200,
    "data": {
        "limitExceeded": False,
        "list": [{"agencyId": "40"}, {"agencyId": "1"}],
        "references": {
            "agencies": [
                {"id": "40", "name": "Sound Transit"},
                {"id": "1", "name": "Metro Transit"},
            ],
            "routes": [],
            "stops": [],
        },
    },
}

ROUTES = {
    "code": 200,
    "data": {
        "limitExceeded": False,
        "list": [
            {"id": "1_100", "shortName": "4", "agencyId": "1"},
            {"id": "1_102", "shortName": "5", "agencyId": "1"},
            {"id": "1_103", "shortName": "5X", "agencyId": "1"},
        ],
        "references": {"agencies": [{"id": "1", "name": "Metro Transit"}]},
    },
}

STOPS_FOR_ROUTE = {
    "code": 200,
    "data": {
        "entry": {
            "routeId": "1_102",
            "stopIds": ["1_10", "1_11", "1_12", "1_20", "1_21"],
            "stopGroupings": [
                {
                    "type": "direction",
                    "ordered": True,
                    "stopGroups": [
                        {"id": "0", "name": {"name": "Eastbound", "type": "destination"},
                         "stopIds": ["1_10", "1_11", "1_12"]},
                        {"id": "1", "name": {"name": "Westbound", "type": "destination"},
                         "stopIds": ["1_20", "1_21"]},
                    ],
                }
            ],
        },
        "references": {
            "stops": [
                {"id": "1_10", "name": "Main St & 1st Ave", "code": "10", "direction": "E"},
                {"id": "1_11", "name": STOP_NAME, "code": "11", "direction": "E"},
                {"id": "1_12", "name": "Main St & 5th Ave", "code": "12", "direction": "E"},
                {"id": "1_20", "name": "Main St & 5th Ave", "code": "20", "direction": "W"},
                {"id": "1_21", "name": STOP_NAME, "code": "21", "direction": "W"},
            ],
        },
    },
}


def make_arrival(scheduled, predicted=None, route_id="1_102", trip_id="1_trip"):
    """Builds one arrivals-and-departures record; ``predicted`` turns on the trip status flag."""
    return {
        "routeId": route_id,
        "tripId": trip_id,
        "tripHeadsign": "Downtown",
        "scheduledArrivalTime": scheduled,
        "scheduledDepartureTime": scheduled,
        "predictedArrivalTime": predicted or 0,
        "predictedDepartureTime": predicted or 0,
        "tripStatus": {"predicted": predicted is not None},
    }


def make_arrivals_envelope(stop_id, records):
    return {
        "code": 200,
        "data": {
            "entry": {"stopId": stop_id, "arrivalsAndDepartures": records},
            "references": {"stops": [], "trips": []},
        },
    }


# Eastbound: scheduled 10:04, predicted 10:06. Westbound: scheduled 10:15, no prediction.
ARRIVALS = {
    "1_11": make_arrivals_envelope("1_11", [make_arrival(T0 + 4 * MINUTE, T0 + 6 * MINUTE, trip_id="1_east")]),
    "1_21": make_arrivals_envelope("1_21", [make_arrival(T0 + 15 * MINUTE, trip_id="1_west")]),
}


@pytest.fixture
def arrivals():
    return copy.deepcopy(ARRIVALS)


@pytest.fixture
def stub_client(arrivals):
    """An APIClient stand-in serving the Metro Transit route 5 responses."""
    client = MagicMock()
    client.list_agencies_with_coverage.side_effect = lambda: copy.deepcopy(AGENCIES)
    client.list_routes_for_agency.side_effect = lambda agency_id: copy.deepcopy(ROUTES)
    client.get_stops_for_route.side_effect = lambda route_id, **kwargs: copy.deepcopy(STOPS_FOR_ROUTE)
    client.get_arrivals_and_departures.side_effect = lambda stop_id, **kwargs: copy.deepcopy(arrivals[stop_id])
    return client


@pytest.fixture
def environ(tmp_path):
    return {
        "AGENCY_NAME": "Metro Transit",
        "ROUTE_SHORTNAME": "5",
        "STOP_NAME": STOP_NAME,
        "MAX_DEPARTURES": "3",
        "OBA_API_KEY": "TEST",
        "OBA_API_URL": "https://api.example.org",
        "TIMEZONE": "UTC",
        "LOG_DIR": str(tmp_path / "logs"),
        "LOG_REQ_RESP": "False",
    }
