import math
import os
import pytz
from dotenv import load_dotenv

from .errors import ConfigError

# Load environment variables from .env file if it exists
load_dotenv()

DEFAULT_MINUTES_AFTER = 1440


def _parse_non_negative_int(name, raw):
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid value for {name}: {raw!r} (expected a non-negative integer)") from None
    if value < 0:
        raise ConfigError(f"Invalid value for {name}: {raw!r} (expected a non-negative integer)")
    return value


class Config:
    """
    Configuration for a NextBus run.

    Values are read from environment variables (a .env file is loaded first).
    Pass ``environ`` to read from another mapping instead, e.g. in tests or when
    the CLI overrides some of the values.

    Raises ConfigError if a required value is missing or malformed.
    """
    REQUIRED = ('AGENCY_NAME', 'ROUTE_SHORTNAME', 'STOP_NAME', 'MAX_DEPARTURES', 'OBA_API_KEY', 'OBA_API_URL')

    def __init__(self, environ=None):
        if environ is None:
            environ = os.environ

        missing = [name for name in self.REQUIRED if not environ.get(name)]
        if missing:
            raise ConfigError(f"Missing env var: {', '.join(missing)}")

        # The one stop we are interested in, both directions
        self.agency_name = environ['AGENCY_NAME']
        self.route_short_name = environ['ROUTE_SHORTNAME']
        self.stop_name = environ['STOP_NAME']
        self.max_departures = _parse_non_negative_int('MAX_DEPARTURES', environ['MAX_DEPARTURES'])

        # OneBusAway API endpoint
        self.api_key = environ['OBA_API_KEY']
        self.api_url = environ['OBA_API_URL']

        self.minutes_after = _parse_non_negative_int(
            'MINUTES_AFTER', environ.get('MINUTES_AFTER', DEFAULT_MINUTES_AFTER)
        )
        timeout = environ.get('REQUEST_TIMEOUT')
        if timeout:
            try:
                self.request_timeout = float(timeout)
            except ValueError:
                raise ConfigError(f"Invalid value for REQUEST_TIMEOUT: {timeout!r}") from None
            if not math.isfinite(self.request_timeout) or self.request_timeout <= 0:
                raise ConfigError(f"Invalid value for REQUEST_TIMEOUT: {timeout!r} (expected a positive number of seconds)")
        else:
            self.request_timeout = None

        # Timezone used to display departure times; None means the machine's local zone
        self.timezone = environ.get('TIMEZONE') or None
        if self.timezone:
            try:
                pytz.timezone(self.timezone)
            except pytz.UnknownTimeZoneError:
                raise ConfigError(f"Unknown TIMEZONE: {self.timezone!r}") from None

        # Debugging
        self.debug = environ.get('DEBUG', 'False') == 'True'
        self.trace_requests = environ.get('TRACE_REQUESTS', 'False') == 'True'
        self.log_req_resp = environ.get('LOG_REQ_RESP', 'True') == 'True'
        self.log_dir = environ.get('LOG_DIR', './logs')

    def __repr__(self):
        return (f"Config(agency={self.agency_name!r}, route={self.route_short_name!r}, "
                f"stop={self.stop_name!r}, max_departures={self.max_departures})")
