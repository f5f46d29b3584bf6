"""
NextBus

Finds the upcoming departures, in both directions, for one transit stop on a
OneBusAway server. The stop is named the way a rider knows it: agency name,
route short name and stop name.

The agency, route and stop are resolved in turn (each lookup narrowing the
next), then each direction's departures are summarized: scheduled time,
real-time prediction and how far ahead of or behind schedule the bus is.

Example:
    from nextbus.config import Config
    from nextbus.next_bus import NextBus

    config = Config()  # reads AGENCY_NAME, ROUTE_SHORTNAME, STOP_NAME, ...
    print(NextBus(config).run())
"""

from .next_bus import NextBus
from .config import Config
from .errors import NextBusError, ConfigError, ServerError, ResolutionError, EmptyResultError

__all__ = ['NextBus', 'Config', 'NextBusError', 'ConfigError', 'ServerError', 'ResolutionError', 'EmptyResultError']
