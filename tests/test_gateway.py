import pytest

from quarcc.gateway import ExecutionGateway

_METHODS = {
    "submit_order": lambda self, order: "B1",
    "cancel_order": lambda self, broker_id: None,
    "replace_order": lambda self, broker_id, new_order: "B2",
    "get_fills": lambda self: [],
}


def test_gateway_is_abstract():
    with pytest.raises(TypeError):
        ExecutionGateway()


@pytest.mark.parametrize("missing", sorted(_METHODS))
def test_subclass_missing_a_method_cannot_be_built(missing):
    namespace = {name: fn for name, fn in _METHODS.items() if name != missing}
    partial = type("PartialGateway", (ExecutionGateway,), namespace)
    with pytest.raises(TypeError, match=missing):
        ExecutionGateway.__new__(partial)