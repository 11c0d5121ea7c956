"""In-memory positions maintained from broker fills."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from quarcc.errors import TradingError
from quarcc.messages import Position, Side


@dataclass
class _Holding:
    symbol: str
    quantity: float = 0.0
    avg_price: float = 0.0


class PositionKeeper:
    """Tracks signed quantity (long > 0, short < 0) and average entry price."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._positions: dict[str, _Holding] = {}

    def on_fill(self, symbol: str, fill_qty: float, fill_price: float, side: Side) -> None:
        """Apply a fill; a zero price updates the quantity only."""
        if fill_qty <= 0.0:
            return

        with self._lock:
            pos = self._positions.setdefault(symbol, _Holding(symbol))
            signed_fill = fill_qty if side == Side.BUY else -fill_qty
            old_qty = pos.quantity
            new_qty = old_qty + signed_fill

            if fill_price > 0.0:
                if new_qty == 0.0:
                    pos.avg_price = 0.0
                elif old_qty == 0.0:
                    pos.avg_price = fill_price
                elif (old_qty > 0.0 > new_qty) or (old_qty < 0.0 < new_qty):
                    pos.avg_price = fill_price
                elif (old_qty > 0.0 and signed_fill > 0.0) or (old_qty < 0.0 and signed_fill < 0.0):
                    pos.avg_price = (old_qty * pos.avg_price + signed_fill * fill_price) / new_qty
                # Reducing without flipping leaves the average unchanged.

            pos.quantity = new_qty

    def get_position(self, symbol: str) -> Position:
        with self._lock:
            pos = self._positions.get(symbol)
            if pos is None:
                raise TradingError("Position not found")
            return Position(pos.symbol, pos.quantity, pos.avg_price)

    def get_all_positions(self) -> list[Position]:
        with self._lock:
            return [Position(p.symbol, p.quantity, p.avg_price) for p in self._positions.values()]