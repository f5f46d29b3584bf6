import logging

from .analyzer import DepartureAnalyzer
from .api_client import APIClient
from .audit_log import AuditLog
from .report import format_report, group_departures
from .resolver import EntityResolver


class NextBus:
    def __init__(self, config, api_client=None, audit_log=None):
        """
        Initialize one run of the pipeline.

        Args:
            config: A Config with the target stop and API settings.
            api_client: Defaults to an APIClient built from ``config``.
            audit_log: Hook that records raw traffic. Defaults to a new
                AuditLog in ``config.log_dir`` when ``config.log_req_resp`` is set.
        """
        self.config = config
        if api_client is None:
            api_client = APIClient(config.api_key, config.api_url, timeout=config.request_timeout)
        if audit_log is None and config.log_req_resp:
            audit_log = AuditLog(config.log_dir)
        if audit_log is not None:
            api_client.add_hook(audit_log)
            logging.info("Logging requests and responses to %s", getattr(audit_log, 'path', audit_log))
        self.api_client = api_client
        self.resolver = EntityResolver(
            api_client,
            config.agency_name,
            config.route_short_name,
            config.stop_name,
            minutes_after=config.minutes_after,
            trace_requests=config.trace_requests,
        )
        self.analyzer = DepartureAnalyzer(config.max_departures, timezone=config.timezone)

    def _log_departures(self, stop_departures):
        logging.info("Fetched %d departures for %s", len(stop_departures), stop_departures.stop)

    def run(self):
        """
        Resolves the stop, fetches its departures and returns the report text.

        Raises a NextBusError subclass if any stage fails; nothing is reported
        for a partial run.
        """
        stop_departures_list = self.resolver.resolve(on_departures=self._log_departures)
        groups = group_departures(stop_departures_list, self.analyzer)
        return format_report(stop_departures_list[0].stop.name, groups)
