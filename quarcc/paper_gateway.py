"""A simulated gateway that accepts and fills every order at once."""

from __future__ import annotations

import threading

from quarcc.gateway import ExecutionGateway
from quarcc.ids import OrderIdGenerator, current_time
from quarcc.messages import ExecutionReport, Order


class PaperGateway(ExecutionGateway):
    """Accepts, cancels and replaces instantly; every pending order fills in full."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pending: dict[str, Order] = {}
        self._ids = OrderIdGenerator("BROKER")

    def submit_order(self, order: Order) -> str:
        broker_id = self._ids.generate()
        with self._lock:
            self._pending[broker_id] = order
        return broker_id

    def cancel_order(self, broker_id: str) -> None:
        with self._lock:
            self._pending.pop(broker_id, None)

    def replace_order(self, broker_id: str, new_order: Order) -> str:
        new_id = self._ids.generate()
        with self._lock:
            self._pending.pop(broker_id, None)
            self._pending[new_id] = new_order
        return new_id

    def get_fills(self) -> list[ExecutionReport]:
        with self._lock:
            pending, self._pending = self._pending, {}
        return [
            ExecutionReport(
                broker_order_id=broker_id,
                symbol=order.symbol,
                side=order.side,
                filled_quantity=order.quantity,
                fill_time=current_time(),
            )
            for broker_id, order in pending.items()
        ]