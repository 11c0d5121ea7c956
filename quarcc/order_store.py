"""Order status, stored order records and the order store interface."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass

from quarcc.messages import Order


class OrderStatus(enum.IntEnum):
    PENDING_SUBMISSION = 0
    SUBMITTED = 1
    ACCEPTED = 2
    PARTIALLY_FILLED = 3
    FILLED = 4
    CANCELLED = 5
    REPLACED = 6
    REJECTED = 7
    EXPIRED = 8

    def __str__(self) -> str:
        return self.name

    @property
    def is_open(self) -> bool:
        """True for statuses an order can still be cancelled from."""
        return self in OPEN_STATUSES


OPEN_STATUSES = frozenset(
    {
        OrderStatus.PENDING_SUBMISSION,
        OrderStatus.SUBMITTED,
        OrderStatus.ACCEPTED,
        OrderStatus.PARTIALLY_FILLED,
    }
)


@dataclass
class StoredOrder:
    order: Order
    local_id: str
    status: OrderStatus = OrderStatus.PENDING_SUBMISSION
    broker_id: str | None = None
    created_at: str = ""
    updated_at: str | None = None
    filled_quantity: float = 0.0
    avg_fill_price: float = 0.0


class OrderStore(ABC):
    """Persistent storage of orders; failing operations raise TradingError."""

    @abstractmethod
    def store_order(self, stored: StoredOrder) -> None:
        """Insert a new order record."""

    @abstractmethod
    def update_order_status(self, local_id: str, new_status: OrderStatus) -> None:
        """Set the status of an order."""

    @abstractmethod
    def update_broker_id(self, local_id: str, broker_id: str) -> None:
        """Record the broker's id for an order."""

    @abstractmethod
    def update_fill_info(self, local_id: str, filled_quantity: float, avg_price: float) -> None:
        """Record filled quantity and average fill price."""

    @abstractmethod
    def get_order(self, local_id: str) -> StoredOrder:
        """Fetch one order; raises TradingError if it is not found."""

    @abstractmethod
    def get_open_orders(self) -> list[StoredOrder]:
        """Orders whose status is open, oldest first."""

    @abstractmethod
    def get_orders_by_status(self, status: OrderStatus) -> list[StoredOrder]:
        """Orders with the given status, oldest first."""