"""
Security event logging.

Security events are written as structured records on the ``trackprofit.security``
logger; the event fields travel in ``extra`` so JSON or Logfire handlers can pick
them up. Each event is also queued until the server stores it in the
``security_events`` audit table.
"""

import datetime as dt
import logging
import threading
from collections import deque
from typing import Any, Deque, Dict, Iterable, List, Literal, Optional

logger = logging.getLogger("trackprofit.security")

Severity = Literal["low", "medium", "high", "critical"]

_SEVERITY_LEVELS: Dict[str, int] = {
    "low": logging.INFO,
    "medium": logging.WARNING,
    "high": logging.ERROR,
    "critical": logging.CRITICAL,
}

# Oldest events are dropped first when the audit table is unreachable for long
MAX_PENDING_EVENTS = 1000

_pending: Deque[Dict[str, Any]] = deque(maxlen=MAX_PENDING_EVENTS)
_pending_lock = threading.Lock()


def log_security_event(
    event_type: str,
    severity: Severity,
    description: str,
    user_id: Optional[str] = None,
    additional_data: Optional[Dict[str, Any]] = None,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Record a security event.

    Args:
        event_type: Machine readable event name (e.g. ``RATE_LIMIT_EXCEEDED``)
        severity: low, medium, high or critical
        description: Human readable description
        user_id: The user involved, when known
        additional_data: Extra context for the event
        ip_address: Client address, when known
        user_agent: Client user agent, when known

    Returns:
        The event as it was logged
    """
    event = {
        "event_type": event_type,
        "severity": severity,
        "description": description,
        "user_id": user_id,
        "ip_address": ip_address or "unknown",
        "user_agent": user_agent or "unknown",
        "additional_data": additional_data or {},
    }
    logger.log(
        _SEVERITY_LEVELS.get(severity, logging.WARNING),
        f"[SECURITY EVENT] {event_type}: {description}",
        extra={"security_event": event},
    )
    with _pending_lock:
        _pending.append({**event, "created_at": dt.datetime.now(dt.timezone.utc)})
    return event


def drain_pending_events() -> List[Dict[str, Any]]:
    """Take every queued event, oldest first."""
    with _pending_lock:
        events = list(_pending)
        _pending.clear()
    return events


def requeue_events(events: Iterable[Dict[str, Any]]) -> None:
    """Put events back in front of the queue after a failed store."""
    with _pending_lock:
        _pending.extendleft(reversed(list(events)))


def pending_event_count() -> int:
    return len(_pending)
