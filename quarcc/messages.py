"""Message types exchanged between strategies, the engine and gateways."""

from __future__ import annotations

import enum
import json
from dataclasses import asdict, dataclass


class Side(enum.IntEnum):
    UNSPECIFIED = 0
    BUY = 1
    SELL = 2


class OrderType(enum.IntEnum):
    UNSPECIFIED = 0
    MARKET = 1
    LIMIT = 2
    STOP = 3
    STOP_LIMIT = 4


class TimeInForce(enum.IntEnum):
    UNSPECIFIED = 0
    DAY = 1
    GTC = 2
    IOC = 3
    FOK = 4


@dataclass
class Order:
    id: str = ""
    symbol: str = ""
    side: Side = Side.UNSPECIFIED
    quantity: float = 0.0
    price: float = 0.0
    order_type: OrderType = OrderType.UNSPECIFIED
    time_in_force: TimeInForce = TimeInForce.UNSPECIFIED
    account_id: str = ""
    strategy_id: str = ""


@dataclass
class StrategySignal:
    strategy_id: str = ""
    symbol: str = ""
    side: Side = Side.UNSPECIFIED
    target_quantity: float = 0.0
    confidence: float = 0.0


@dataclass
class CancelSignal:
    strategy_id: str = ""
    order_id: str = ""


@dataclass
class ReplaceSignal:
    strategy_id: str = ""
    order_id: str = ""
    symbol: str = ""
    side: Side = Side.UNSPECIFIED
    target_quantity: float = 0.0


@dataclass
class ExecutionReport:
    broker_order_id: str = ""
    symbol: str = ""
    side: Side = Side.UNSPECIFIED
    filled_quantity: float = 0.0
    avg_fill_price: float = 0.0
    fill_time: str = ""


@dataclass
class Position:
    symbol: str = ""
    quantity: float = 0.0
    avg_price: float = 0.0


@dataclass
class GetPositionRequest:
    symbol: str = ""


@dataclass
class KillSwitchRequest:
    reason: str = ""
    initiated_by: str = ""


_ENUM_FIELDS = {"side": Side, "order_type": OrderType, "time_in_force": TimeInForce}
_FLOAT_FIELDS = ("quantity", "price")
_STR_FIELDS = ("id", "symbol", "account_id", "strategy_id")


def encode_order(order: Order) -> bytes:
    """Serialise an order to bytes."""
    payload = asdict(order)
    for name in _ENUM_FIELDS:
        payload[name] = int(payload[name])
    return json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")


def decode_order(data: bytes) -> Order:
    """Rebuild an order from bytes produced by :func:`encode_order`."""
    try:
        raw = json.loads(bytes(data).decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValueError(f"Malformed order data: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError("Malformed order data: expected an object")

    fields: dict = {}
    try:
        for name in _STR_FIELDS:
            fields[name] = str(raw.get(name, ""))
        for name in _FLOAT_FIELDS:
            fields[name] = float(raw.get(name, 0.0))
        for name, enum_cls in _ENUM_FIELDS.items():
            fields[name] = enum_cls(int(raw.get(name, 0)))
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Malformed order data: {exc}") from exc
    return Order(**fields)