"""Order identifiers: generation and local/broker mapping."""

from __future__ import annotations

import itertools
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone

from quarcc.errors import TradingError

LocalOrderId = str
BrokerOrderId = str


@dataclass
class OrderId:
    """A local order id together with the broker id once it is known."""

    local_id: LocalOrderId
    broker_id: BrokerOrderId | None = None

    def broker_id_or_raise(self) -> BrokerOrderId:
        if self.broker_id is None:
            raise TradingError(f"Broker ID not yet assigned for local ID: {self.local_id}")
        return self.broker_id

    def __str__(self) -> str:
        if self.broker_id is not None:
            return f"{self.local_id} [broker: {self.broker_id}]"
        return f"{self.local_id} [pending]"


class OrderIdGenerator:
    """Produces ids of the form ``PREFIX_<epoch-ms>_<counter>``."""

    def __init__(self, prefix: str = "ORD") -> None:
        self.prefix = prefix
        self._counter = itertools.count()
        self._lock = threading.Lock()

    def generate(self) -> LocalOrderId:
        timestamp = time.time_ns() // 1_000_000
        with self._lock:
            n = next(self._counter)
        return f"{self.prefix}_{timestamp}_{n:06d}"


class OrderIdMapper:
    """Thread-safe two-way map between local and broker order ids."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._local_to_broker: dict[LocalOrderId, BrokerOrderId] = {}
        self._broker_to_local: dict[BrokerOrderId, LocalOrderId] = {}

    def add_mapping(self, local_id: LocalOrderId, broker_id: BrokerOrderId) -> None:
        with self._lock:
            self._local_to_broker[local_id] = broker_id
            self._broker_to_local[broker_id] = local_id

    def get_broker_id(self, local_id: LocalOrderId) -> BrokerOrderId | None:
        with self._lock:
            return self._local_to_broker.get(local_id)

    def get_local_id(self, broker_id: BrokerOrderId) -> LocalOrderId | None:
        with self._lock:
            return self._broker_to_local.get(broker_id)

    def remove_mapping(self, local_id: LocalOrderId) -> None:
        with self._lock:
            broker_id = self._local_to_broker.pop(local_id, None)
            if broker_id is not None:
                self._broker_to_local.pop(broker_id, None)

    def local_to_broker(self) -> dict[LocalOrderId, BrokerOrderId]:
        """Return a snapshot of the local-to-broker mapping."""
        with self._lock:
            return dict(self._local_to_broker)


def current_time() -> str:
    """Current UTC time as an ISO 8601 string ending in ``Z``."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")