import pytest

from quarcc.messages import (
    CancelSignal,
    ExecutionReport,
    Order,
    OrderType,
    Position,
    ReplaceSignal,
    Side,
    StrategySignal,
    TimeInForce,
    decode_order,
    encode_order,
)


def _order():
    return Order(
        id="ORD_001",
        symbol="AAPL",
        side=Side.BUY,
        quantity=10.0,
        price=0.0,
        order_type=OrderType.MARKET,
        time_in_force=TimeInForce.DAY,
        account_id="acct",
        strategy_id="TEST",
    )


def test_round_trip_preserves_every_field():
    order = _order()
    assert decode_order(encode_order(order)) == order


def test_decoded_enums_keep_their_types():
    decoded = decode_order(encode_order(_order()))
    assert decoded.side is Side.BUY
    assert decoded.order_type is OrderType.MARKET
    assert decoded.time_in_force is TimeInForce.DAY


@pytest.mark.parametrize("side", list(Side))
@pytest.mark.parametrize("order_type", list(OrderType))
def test_round_trip_all_sides_and_types(side, order_type):
    order = Order(symbol="MSFT", side=side, order_type=order_type, quantity=3.5)
    assert decode_order(encode_order(order)) == order


def test_encoding_is_deterministic_bytes():
    first = encode_order(_order())
    second = encode_order(_order())
    assert isinstance(first, bytes)
    assert first == second


def test_default_order_round_trips():
    assert decode_order(encode_order(Order())) == Order()


def test_missing_fields_take_defaults():
    assert decode_order(b"{}") == Order()


@pytest.mark.parametrize("data", [b"not json", b"[1, 2]", b"\xff\xfe", b'{"side": 99}'])
def test_malformed_data_raises_value_error(data):
    with pytest.raises(ValueError):
        decode_order(data)


def test_signal_defaults_are_empty():
    sig = StrategySignal()
    assert sig.side is Side.UNSPECIFIED
    assert sig.target_quantity == 0.0
    assert CancelSignal().order_id == ""
    assert ReplaceSignal().symbol == ""


def test_position_and_report_fields_hold_values():
    pos = Position(symbol="AAPL", quantity=10.0, avg_price=150.0)
    report = ExecutionReport(broker_order_id="BROKER_001", symbol="AAPL", filled_quantity=10.0)
    assert (pos.symbol, pos.quantity, pos.avg_price) == ("AAPL", 10.0, 150.0)
    assert report.broker_order_id == "BROKER_001"
    assert report.avg_fill_price == 0.0