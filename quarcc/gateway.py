"""The execution gateway interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from quarcc.messages import ExecutionReport, Order


class ExecutionGateway(ABC):
    """Route orders to a broker; failing calls raise TradingError."""

    @abstractmethod
    def submit_order(self, order: Order) -> str:
        """Submit an order and return the broker's order id."""

    @abstractmethod
    def cancel_order(self, broker_id: str) -> None:
        """Cancel the order with the given broker id."""

    @abstractmethod
    def replace_order(self, broker_id: str, new_order: Order) -> str:
        """Replace an order and return the new broker order id."""

    @abstractmethod
    def get_fills(self) -> list[ExecutionReport]:
        """Fills that arrived since the previous call."""