import datetime
import json
import logging
import os

SEPARATOR = "-" * 78


def generate_log_filename(log_dir, now=None):
    """
    Builds the audit log path for a run started at ``now``.

    The timestamp is UTC, so names sort the same on every machine. Colons
    and dots are replaced so the name is valid on every filesystem, e.g.
    ``logs/log-2025-01-01T09-30-00_123Z.txt``.
    """
    now = now or datetime.datetime.now(datetime.timezone.utc)
    utc = now.astimezone(datetime.timezone.utc).replace(tzinfo=None)
    timestamp = (utc.isoformat(timespec="milliseconds") + "Z").replace(":", "-").replace(".", "_")
    return os.path.join(log_dir, f"log-{timestamp}.txt")


class AuditLog:
    """
    Appends every API request and raw response to one text file per run.

    The file is meant for a human debugging a run, not for parsing. Writing
    to it must never interrupt a run, so I/O errors are only logged.
    """

    def __init__(self, log_dir="./logs", now=None):
        self.path = generate_log_filename(log_dir, now)

    def _append(self, text):
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(text)
        except OSError as e:
            logging.warning("Could not write audit log %s: %s", self.path, e)

    def before_request(self, url, options):
        self._append(f"\n{SEPARATOR}\nRequest:\n{url}\n{_dump(options)}")

    def after_response(self, url, status_code, body):
        if status_code is None:
            self._append("\n\nResponse:\n(no response received)\n\n")
            return
        self._append(f"\n\nResponse ({status_code}):\n{_dump(body)}\n\n")


def _dump(obj):
    if isinstance(obj, str):
        return obj
    try:
        return json.dumps(obj, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(obj)
