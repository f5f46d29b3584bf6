"""
Validation of OneBusAway response envelopes.

Every response wraps its payload in ``data``. List-shaped responses (agencies,
routes) carry ``data.list`` plus ``data.references``; detail-shaped responses
(stops for a route, arrivals and departures) carry ``data.entry`` plus
``data.references``. An envelope that fails these checks is never retried or
patched up: the run aborts with a ServerError.
"""
from typing import Any, Dict

from .errors import ServerError


def is_valid_list_envelope(envelope: Dict[str, Any]) -> bool:
    """True if ``envelope`` is a usable list-shaped response."""
    if not isinstance(envelope, dict):
        return False
    data = envelope.get('data')
    if not data or not isinstance(data, dict):
        return False
    if not data.get('list') or data.get('references') is None:
        return False
    return data.get('limitExceeded') is not True


def is_valid_detail_envelope(envelope: Dict[str, Any]) -> bool:
    """True if ``envelope`` is a usable detail-shaped (single ``entry``) response."""
    if not isinstance(envelope, dict):
        return False
    data = envelope.get('data')
    if not data or not isinstance(data, dict):
        return False
    return data.get('references') is not None


def check_list_envelope(envelope, msg="Server error"):
    if not is_valid_list_envelope(envelope):
        raise ServerError(msg)
    return envelope['data']


def check_detail_envelope(envelope, msg="Server error"):
    if not is_valid_detail_envelope(envelope):
        raise ServerError(msg)
    return envelope['data']


def require_field(record, key, what):
    """
    Return ``record[key]``, raising ServerError if the field is absent or null.

    The API's documented types don't always match what it sends, so each
    response shape is checked field by field as it is decoded.
    """
    if not isinstance(record, dict):
        raise ServerError(f"Malformed {what}: expected an object, got {type(record).__name__}")
    value = record.get(key)
    if value is None:
        raise ServerError(f"Malformed {what}: missing '{key}'")
    return value


def require_objects(value, what):
    """
    Return ``value`` as a list of objects, raising ServerError otherwise.

    A missing (null) collection is treated as empty.
    """
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, dict) for item in value):
        raise ServerError(f"Malformed {what}: expected a list of objects")
    return value
