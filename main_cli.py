#!/usr/bin/env python3
import argparse
import logging
import sys
import os

# Add the parent directory to the path so we can import the package
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from nextbus.config import Config
from nextbus.errors import ConfigError, NextBusError
from nextbus.next_bus import NextBus


def setup_logging(debug=False):
    """Configure logging based on debug flag."""
    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def build_environ(args):
    """Environment variables, with any values given on the command line taking precedence."""
    environ = dict(os.environ)
    overrides = {
        'AGENCY_NAME': args.agency,
        'ROUTE_SHORTNAME': args.route,
        'STOP_NAME': args.stop,
        'MAX_DEPARTURES': args.max_departures,
    }
    for name, value in overrides.items():
        if value is not None:
            environ[name] = str(value)
    if args.trace:
        environ['TRACE_REQUESTS'] = 'True'
    if args.no_audit_log:
        environ['LOG_REQ_RESP'] = 'False'
    return environ


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="NextBus - upcoming departures in both directions for one stop",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Settings are read from the environment (or a .env file):
  AGENCY_NAME, ROUTE_SHORTNAME, STOP_NAME, MAX_DEPARTURES, OBA_API_KEY, OBA_API_URL

Examples:
  # Use the settings from .env
  ./main_cli.py

  # Look up another stop on the same server
  ./main_cli.py --agency "Metro Transit" --route 5 --stop "Main St & 3rd Ave" --max-departures 3
        """
    )

    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--trace', action='store_true', help='Log every API request and response (implies --debug)')
    parser.add_argument('--no-audit-log', action='store_true', help="Don't write requests and responses to a log file")
    parser.add_argument('--agency', type=str, help='Agency name (overrides AGENCY_NAME)')
    parser.add_argument('--route', type=str, help='Route short name (overrides ROUTE_SHORTNAME)')
    parser.add_argument('--stop', type=str, help='Stop name (overrides STOP_NAME)')
    parser.add_argument('--max-departures', type=str, help='Departures to show per direction (overrides MAX_DEPARTURES)')

    args = parser.parse_args(argv)

    try:
        config = Config(build_environ(args))
    except ConfigError as e:
        setup_logging(args.debug or args.trace)
        logging.error("Configuration error: %s", e)
        print(f"❌ {e}")
        return 1

    setup_logging(args.debug or config.debug or config.trace_requests)
    logging.debug("Loaded %s", config)

    try:
        report = NextBus(config).run()
    except NextBusError as e:
        logging.error("%s: %s", type(e).__name__, e)
        print(f"❌ {e}")
        return 1

    print(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
