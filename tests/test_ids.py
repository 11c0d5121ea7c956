import threading
from datetime import datetime, timezone

import pytest

from quarcc.errors import TradingError
from quarcc.ids import OrderId, OrderIdGenerator, OrderIdMapper, current_time


def test_add_mapping_and_retrieve_broker_id():
    mapper = OrderIdMapper()
    mapper.add_mapping("LOCAL_1", "BROKER_1")
    assert mapper.get_broker_id("LOCAL_1") == "BROKER_1"


def test_add_mapping_and_retrieve_local_id():
    mapper = OrderIdMapper()
    mapper.add_mapping("LOCAL_1", "BROKER_1")
    assert mapper.get_local_id("BROKER_1") == "LOCAL_1"


def test_unknown_local_id_returns_none():
    assert OrderIdMapper().get_broker_id("NO_SUCH_ID") is None


def test_unknown_broker_id_returns_none():
    assert OrderIdMapper().get_local_id("NO_SUCH_BROKER") is None


def test_remove_mapping_makes_both_lookups_fail():
    mapper = OrderIdMapper()
    mapper.add_mapping("LOCAL_2", "BROKER_2")
    mapper.remove_mapping("LOCAL_2")
    assert mapper.get_broker_id("LOCAL_2") is None
    assert mapper.get_local_id("BROKER_2") is None


def test_remove_nonexistent_mapping_is_noop():
    mapper = OrderIdMapper()
    mapper.add_mapping("A", "X")
    mapper.remove_mapping("GHOST_ID")
    assert mapper.local_to_broker() == {"A": "X"}


def test_overwriting_mapping_updates_lookup():
    mapper = OrderIdMapper()
    mapper.add_mapping("LOCAL_3", "BROKER_OLD")
    mapper.add_mapping("LOCAL_3", "BROKER_NEW")
    assert mapper.get_broker_id("LOCAL_3") == "BROKER_NEW"


def test_multiple_independent_mappings():
    mapper = OrderIdMapper()
    mapper.add_mapping("A", "X")
    mapper.add_mapping("B", "Y")
    mapper.add_mapping("C", "Z")
    assert mapper.get_broker_id("A") == "X"
    assert mapper.get_broker_id("B") == "Y"
    assert mapper.get_broker_id("C") == "Z"
    assert mapper.get_local_id("X") == "A"
    assert mapper.get_local_id("Y") == "B"
    assert mapper.get_local_id("Z") == "C"


def test_local_to_broker_is_a_snapshot():
    mapper = OrderIdMapper()
    mapper.add_mapping("A", "X")
    snapshot = mapper.local_to_broker()
    snapshot["B"] = "Y"
    assert mapper.get_broker_id("B") is None


def test_generator_default_prefix_and_format():
    generated = OrderIdGenerator().generate()
    prefix, stamp, counter = generated.split("_")
    assert prefix == "ORD"
    assert stamp.isdigit()
    assert counter == "000000"


def test_generator_counter_increments():
    gen = OrderIdGenerator("BROKER")
    first, second = gen.generate(), gen.generate()
    assert first.startswith("BROKER_") and first.endswith("_000000")
    assert second.endswith("_000001")


def test_generator_is_unique_across_threads():
    gen = OrderIdGenerator()
    results = []
    lock = threading.Lock()

    def work():
        ids = [gen.generate() for _ in range(200)]
        with lock:
            results.extend(ids)

    threads = [threading.Thread(target=work) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    counters = sorted(int(value.rsplit("_", 1)[1]) for value in results)
    assert counters == list(range(800))
    next_id = gen.generate()
    assert next_id.endswith("_000800")


def test_order_id_pending_and_assigned():
    oid = OrderId("L1")
    assert str(oid) == "L1 [pending]"
    with pytest.raises(TradingError):
        oid.broker_id_or_raise()
    oid.broker_id = "B1"
    assert str(oid) == "L1 [broker: B1]"
    assert oid.broker_id_or_raise() == "B1"


def test_current_time_format():
    value = current_time()
    assert value.endswith("Z")
    parsed = datetime.strptime(value, "%Y-%m-%dT%H:%M:%S.%fZ").replace(tzinfo=timezone.utc)
    delta = abs((datetime.now(timezone.utc) - parsed).total_seconds())
    assert delta < 5.0