"""Error types raised by the trading engine."""

from __future__ import annotations

import enum


class ErrorType(enum.Enum):
    """Broad category of a trading error."""

    ERROR = "error"
    FAILED_ORDER = "failed_order"


class TradingError(Exception):
    """Raised when an engine operation cannot be completed."""

    def __init__(self, message: str, error_type: ErrorType = ErrorType.ERROR) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type

    def __repr__(self) -> str:
        return f"TradingError({self.message!r}, {self.error_type})"