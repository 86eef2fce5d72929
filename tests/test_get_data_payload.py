import pytest

from btcwire.get_data_payload import GetDataPayload, unmarshalling
from btcwire.inventory import Inventory
from btcwire.message_header import MessageError


def test_payload_with_one_inventory_has_matching_count():
    inventories = [Inventory.new_block(bytes(32))]
    payload = GetDataPayload.from_inventories(inventories)
    assert payload.count == len(inventories)


def test_payload_with_two_inventories_has_matching_count():
    inventories = [Inventory.new_block(bytes(32)), Inventory.new_block(bytes(32))]
    payload = GetDataPayload.from_inventories(inventories)
    assert payload.count == len(inventories)


def test_bytes_start_with_count_followed_by_inventories():
    block = Inventory.new_block(bytes(range(32)))
    tx = Inventory.new_tx(bytes([7]) * 32)
    payload = GetDataPayload.from_inventories([block, tx])
    assert payload.to_bytes() == b"\x02" + block.to_bytes() + tx.to_bytes()


def test_size_matches_encoded_length():
    payload = GetDataPayload.from_inventories([Inventory.new_block(bytes(32))] * 3)
    assert payload.size() == 1 + 3 * 36
    assert payload.size() == len(payload.to_bytes())


def test_empty_payload_is_a_zero_count():
    payload = GetDataPayload.from_inventories([])
    assert payload.to_bytes() == b"\x00"
    assert unmarshalling(payload.to_bytes()) == []


def test_unmarshalling_round_trip():
    inventories = [Inventory.new_tx(bytes([i]) * 32) for i in range(5)]
    payload = GetDataPayload.from_inventories(inventories)
    assert unmarshalling(payload.to_bytes()) == inventories


def test_unmarshalling_truncated_payload_raises():
    payload = GetDataPayload.from_inventories([Inventory.new_block(bytes(32))] * 2)
    with pytest.raises(MessageError):
        unmarshalling(payload.to_bytes()[:-1])


def test_unmarshalling_empty_input_raises():
    with pytest.raises(MessageError):
        unmarshalling(b"")