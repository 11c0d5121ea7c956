# quarcc

Building blocks for a small trading engine. It has order and signal messages,
order ID generation and mapping, in-memory position keeping, an event journal
and an order store kept in SQLite, and a simulated broker gateway.

## Components

- `quarcc.messages` holds the message dataclasses `Order`, `StrategySignal`,
  `CancelSignal`, `ReplaceSignal`, `ExecutionReport`, `Position`,
  `GetPositionRequest` and `KillSwitchRequest`, and the enums `Side`, `OrderType`
  and `TimeInForce`. `encode_order` and `decode_order` turn an `Order` into bytes
  and back. `decode_order` raises `ValueError` on malformed data.
- `quarcc.ids`:
  - `OrderIdGenerator(prefix="ORD")` makes IDs such as `ORD_<epoch-ms>_000000`,
    with a counter that increases.
  - `OrderIdMapper` is a thread-safe two-way map between local and broker IDs,
    with `add_mapping`, `get_broker_id`, `get_local_id`, `remove_mapping` and
    `local_to_broker`. The last returns a snapshot.
  - `OrderId` holds a local ID and an optional broker ID.
  - `current_time()` returns the current UTC time as an ISO 8601 string.
- `quarcc.position_keeper.PositionKeeper` keeps signed-quantity positions (long
  above zero, short below) with a weighted-average entry price:
  - Adding to a side averages the price.
  - Reducing a position leaves the price unchanged.
  - Flipping sides sets the price to the fill price.
  - Going flat sets the price to 0.
  - A fill price of 0 changes only the quantity.
  - A fill quantity of 0 or less is ignored.
- `quarcc.journal` defines the `Event` enum, `LogEntry`, the abstract `Journal`
  interface and the timestamp helpers `now`, `timestamp_to_string` and
  `string_to_timestamp`.
- `quarcc.sqlite_journal.SQLiteJournal` is a `Journal` backed by SQLite. Entries
  can be queried by time range (`get_history`, with an optional event filter) or
  by correlation ID (`get_order_history`). Failed writes and queries are logged,
  not raised.
- `quarcc.order_store` defines the `OrderStatus` enum, the `StoredOrder` record
  and the abstract `OrderStore` interface.
- `quarcc.sqlite_order_store.SQLiteOrderStore` is an `OrderStore` backed by
  SQLite. It stores orders and updates their status, broker ID and fill
  information. `get_open_orders` returns orders that are pending submission,
  submitted, accepted or partially filled, oldest first.
- `quarcc.gateway.ExecutionGateway` is the abstract broker interface.
- `quarcc.paper_gateway.PaperGateway` is a simulated broker. It accepts, cancels
  and replaces orders at once, using IDs such as `BROKER_<epoch-ms>_000000`.
  Every pending order is reported as fully filled at the next `get_fills()` call.

Failures raise `quarcc.errors.TradingError`, which carries an `ErrorType`.

Both SQLite classes accept a file path or `":memory:"`. They are context
managers, and they can also be closed with `close()`.

## Installation

```
pip install .
```

To install with the test dependencies:

```
pip install .[test]
```

## Example

```python
from quarcc.messages import Order, Side, OrderType, TimeInForce
from quarcc.paper_gateway import PaperGateway
from quarcc.position_keeper import PositionKeeper
from quarcc.sqlite_order_store import SQLiteOrderStore
from quarcc.order_store import StoredOrder, OrderStatus

gateway = PaperGateway()
keeper = PositionKeeper()

order = Order(id="L1", symbol="AAPL", side=Side.BUY, quantity=10.0,
              order_type=OrderType.MARKET, time_in_force=TimeInForce.DAY)

with SQLiteOrderStore(":memory:") as store:
    store.store_order(StoredOrder(order=order, local_id="L1",
                                  created_at="2024-01-01 00:00:00.000"))
    broker_id = gateway.submit_order(order)
    store.update_broker_id("L1", broker_id)
    store.update_order_status("L1", OrderStatus.SUBMITTED)

    for fill in gateway.get_fills():
        keeper.on_fill(fill.symbol, fill.filled_quantity, 150.0, fill.side)
        store.update_order_status("L1", OrderStatus.FILLED)

print(keeper.get_position("AAPL"))
```

## What this package does not do

- It has no command-line program.
- It has no network service for receiving signals.
- It has no component that turns strategy signals into orders, applies fills
  automatically, or cancels everything as a kill switch.

The parts above have to be wired together by the caller, as in the example.
There is no connection to a real broker. `PaperGateway` is the only gateway
provided.

## Tests

```
pytest
```