from globaledge.utils.hashing import payload_hash


def test_key_order_does_not_matter():
    assert payload_hash({"a": 1, "b": 2}) == payload_hash({"b": 2, "a": 1})


def test_different_payloads_differ():
    assert payload_hash({"weight_kg": 1.0}) != payload_hash({"weight_kg": 1.5})
    assert len(payload_hash({})) == 64
