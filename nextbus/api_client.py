import requests
import logging

from .errors import ServerError

API_PATH = "/api/where"


def mask_api_key(params):
    """Return a copy of ``params`` that is safe to write to logs."""
    masked = dict(params)
    if masked.get("key"):
        masked["key"] = "***"
    return masked


class APIClient:
    """
    Client for the OneBusAway REST API.

    Each method returns the decoded JSON envelope as-is. Validating the envelope
    is up to the caller (see ``nextbus.envelope``).

    ``hooks`` are objects with ``before_request(url, options)`` and
    ``after_response(url, status_code, body)`` methods. They are called around
    every request, whether or not it succeeds, and are only used to observe
    traffic (e.g. the audit log).
    """

    def __init__(self, api_key: str, base_url: str, hooks=None, timeout=None):
        """
        Initialize the API client.
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.hooks = list(hooks or [])
        self.timeout = timeout

    def add_hook(self, hook):
        self.hooks.append(hook)

    def _get(self, method: str, params=None):
        """
        Sends a GET request for an API method such as ``routes-for-agency/1``.

        Raises ServerError on connection failures, HTTP errors or bodies that
        aren't JSON. There are no retries.
        """
        url = f"{self.base_url}{API_PATH}/{method}.json"
        query = {"key": self.api_key}
        query.update(params or {})
        headers = {"accept": "application/json"}

        options = {"method": "GET", "params": mask_api_key(query), "headers": headers}
        for hook in self.hooks:
            hook.before_request(url, options)

        try:
            response = requests.get(url, params=query, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error("Request to %s failed: %s", url, e)
            for hook in self.hooks:
                hook.after_response(url, None, None)
            raise ServerError(f"Request to {method} failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = None

        for hook in self.hooks:
            hook.after_response(url, response.status_code, body if body is not None else response.text)

        if not 200 <= response.status_code < 300:
            text = body.get("text") if isinstance(body, dict) else response.text[:200]
            logging.error("%s returned HTTP %s: %s", method, response.status_code, text)
            raise ServerError(f"Server error: HTTP {response.status_code} from {method}")
        if body is None:
            logging.error("%s returned a body that isn't JSON: %s", method, response.text[:200])
            raise ServerError(f"Server error: invalid JSON from {method}")

        logging.debug("%s returned %d bytes", method, len(response.content))
        return body

    def list_agencies_with_coverage(self):
        """Lists every agency the server has data for."""
        return self._get("agencies-with-coverage")

    def list_routes_for_agency(self, agency_id: str):
        """Lists the routes operated by one agency."""
        return self._get(f"routes-for-agency/{agency_id}")

    def get_stops_for_route(self, route_id: str, include_polylines=False, time=None):
        """
        Fetches the stops of a route and how they are grouped by direction.

        ``time`` (epoch milliseconds) selects the service date, since groupings
        can vary with the time of day.
        """
        params = {"includePolylines": "true" if include_polylines else "false"}
        if time is not None:
            params["time"] = str(time)
        return self._get(f"stops-for-route/{route_id}", params)

    def get_arrivals_and_departures(self, stop_id: str, minutes_before=0, minutes_after=1440):
        """
        Fetches arrivals and departures at a stop within a window around now.
        """
        params = {"minutesBefore": minutes_before, "minutesAfter": minutes_after}
        return self._get(f"arrivals-and-departures-for-stop/{stop_id}", params)
