"""Journal events, log entries and the journal interface."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone


class Event(enum.IntEnum):
    ORDER_CREATED = 0
    ORDER_VALIDATED = 1
    ORDER_REJECTED = 2
    ORDER_SUBMITTED = 3
    ORDER_ACCEPTED = 4
    ORDER_CANCELLED = 5
    ORDER_REPLACED = 6
    ORDER_EXPIRED = 7
    KILL_SWITCH_ACTIVATED = 8
    SYSTEM_STARTED = 9
    SYSTEM_STOPPED = 10
    GATEWAY_CONNECTED = 11
    GATEWAY_DISCONNECTED = 12
    ERROR_OCCURRED = 13
    SIGNAL_RECEIVED = 14
    SIGNAL_PROCESSED = 15
    SIGNAL_IGNORED = 16
    ORDER_FILLED = 17
    ORDER_PARTIALLY_FILLED = 18

    def __str__(self) -> str:
        return self.name


def now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


def timestamp_to_string(ts: datetime) -> str:
    """Format as ``YYYY-MM-DD HH:MM:SS.<ms>`` in UTC; milliseconds are not padded."""
    if ts.tzinfo is not None:
        ts = ts.astimezone(timezone.utc)
    return f"{ts.strftime('%Y-%m-%d %H:%M:%S')}.{ts.microsecond // 1000}"


def string_to_timestamp(text: str) -> datetime:
    """Parse the whole-second part of a journal timestamp as UTC."""
    parsed = datetime.strptime(text[:19], "%Y-%m-%d %H:%M:%S")
    return parsed.replace(tzinfo=timezone.utc)


@dataclass
class LogEntry:
    id: int
    timestamp: datetime
    event_type: Event
    data: str
    correlation_id: str = ""


class Journal(ABC):
    """An append-only record of engine events."""

    @abstractmethod
    def log(self, event: Event, data: str, correlation_id: str = "") -> None:
        """Record an event."""

    @abstractmethod
    def get_history(
        self, start: datetime, end: datetime, event_filter: Event | None = None
    ) -> list[LogEntry]:
        """Entries between ``start`` and ``end``, optionally of one event type."""

    @abstractmethod
    def get_order_history(self, order_id: str) -> list[LogEntry]:
        """Entries correlated with the given order id, oldest first."""

    @abstractmethod
    def flush(self) -> None:
        """Make recorded entries durable."""