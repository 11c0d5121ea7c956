"""An order store kept in an SQLite database."""

from __future__ import annotations

import logging
import sqlite3
import threading

from quarcc.errors import TradingError
from quarcc.messages import decode_order, encode_order
from quarcc.order_store import OPEN_STATUSES, OrderStatus, OrderStore, StoredOrder

_log = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS orders (
  local_id TEXT PRIMARY KEY,
  broker_id TEXT UNIQUE,
  symbol TEXT NOT NULL,
  side INTEGER NOT NULL,
  quantity REAL NOT NULL,
  price REAL,
  order_type INTEGER NOT NULL,
  status INTEGER NOT NULL,
  time_in_force INTEGER NOT NULL,
  account_id TEXT NOT NULL,
  strategy_id TEXT NOT NULL,
  created_at TEXT NOT NULL,
  updated_at TEXT,
  filled_quantity REAL DEFAULT 0.0,
  avg_fill_price REAL DEFAULT 0.0,
  order_proto BLOB NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_status ON orders(status);
CREATE INDEX IF NOT EXISTS idx_strategy ON orders(strategy_id);
CREATE INDEX IF NOT EXISTS idx_broker_id ON orders(broker_id);
CREATE INDEX IF NOT EXISTS idx_created_at ON orders(created_at);
"""

_SELECT = (
    "SELECT local_id, broker_id, status, created_at, updated_at, "
    "filled_quantity, avg_fill_price, order_proto FROM orders"
)

_OPEN_ORDER = sorted(int(s) for s in OPEN_STATUSES)


def _parse_order(row: tuple) -> StoredOrder:
    local_id, broker_id, status, created_at, updated_at, filled, avg, blob = row
    return StoredOrder(
        order=decode_order(blob),
        local_id=local_id,
        status=OrderStatus(status),
        broker_id=broker_id,
        created_at=created_at,
        updated_at=updated_at,
        filled_quantity=filled or 0.0,
        avg_fill_price=avg or 0.0,
    )


class SQLiteOrderStore(OrderStore):
    """Order store backed by an SQLite file (or ``":memory:"``)."""

    def __init__(self, db_path: str) -> None:
        self._lock = threading.Lock()
        self._closed = False
        try:
            self._conn = sqlite3.connect(
                str(db_path), check_same_thread=False, isolation_level=None
            )
        except sqlite3.Error as exc:
            raise TradingError(f"Failed to open order store database: {exc}") from exc
        try:
            self._conn.executescript(_SCHEMA)
        except sqlite3.Error as exc:
            self._conn.close()
            raise TradingError(f"Failed to create order store schema: {exc}") from exc

    def _execute(self, what: str, sql: str, params: tuple) -> None:
        with self._lock:
            try:
                self._conn.execute(sql, params)
            except sqlite3.Error as exc:
                raise TradingError(f"Failed to {what}: {exc}") from exc

    def store_order(self, stored: StoredOrder) -> None:
        order = stored.order
        self._execute(
            "insert order",
            "INSERT INTO orders ("
            "local_id, broker_id, symbol, side, quantity, price, "
            "order_type, status, time_in_force, account_id, strategy_id, "
            "created_at, filled_quantity, avg_fill_price, order_proto"
            ") VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                stored.local_id,
                stored.broker_id,
                order.symbol,
                int(order.side),
                order.quantity,
                order.price,
                int(order.order_type),
                int(stored.status),
                int(order.time_in_force),
                order.account_id,
                order.strategy_id,
                stored.created_at,
                stored.filled_quantity,
                stored.avg_fill_price,
                encode_order(order),
            ),
        )

    def update_order_status(self, local_id: str, new_status: OrderStatus) -> None:
        self._execute(
            "update order status",
            "UPDATE orders SET status = ?, updated_at = datetime('now') WHERE local_id = ?",
            (int(new_status), local_id),
        )

    def update_broker_id(self, local_id: str, broker_id: str) -> None:
        self._execute(
            "update broker ID",
            "UPDATE orders SET broker_id = ?, updated_at = datetime('now') WHERE local_id = ?",
            (broker_id, local_id),
        )

    def update_fill_info(self, local_id: str, filled_quantity: float, avg_price: float) -> None:
        self._execute(
            "update fill info",
            "UPDATE orders SET filled_quantity = ?, avg_fill_price = ?, "
            "updated_at = datetime('now') WHERE local_id = ?",
            (filled_quantity, avg_price, local_id),
        )

    def get_order(self, local_id: str) -> StoredOrder:
        with self._lock:
            try:
                row = self._conn.execute(
                    f"{_SELECT} WHERE local_id = ?", (local_id,)
                ).fetchone()
            except sqlite3.Error as exc:
                raise TradingError(f"Failed to select order: {exc}") from exc
        if row is None:
            raise TradingError(f"Order not found: {local_id}")
        return _parse_order(row)

    def _select_many(self, sql: str, params: tuple) -> list[StoredOrder]:
        with self._lock:
            try:
                rows = self._conn.execute(sql, params).fetchall()
            except sqlite3.Error as exc:
                _log.error("Failed to query orders: %s", exc)
                return []
        return [_parse_order(row) for row in rows]

    def get_open_orders(self) -> list[StoredOrder]:
        placeholders = ", ".join("?" for _ in _OPEN_ORDER)
        return self._select_many(
            f"{_SELECT} WHERE status IN ({placeholders}) ORDER BY created_at ASC",
            tuple(_OPEN_ORDER),
        )

    def get_orders_by_status(self, status: OrderStatus) -> list[StoredOrder]:
        return self._select_many(
            f"{_SELECT} WHERE status = ? ORDER BY created_at ASC", (int(status),)
        )

    def close(self) -> None:
        """Close the database; further calls do nothing."""
        with self._lock:
            if not self._closed:
                self._conn.close()
                self._closed = True

    def __enter__(self) -> SQLiteOrderStore:
        return self

    def __exit__(self, *args) -> None:
        self.close()