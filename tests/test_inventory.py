import pytest

from btcwire.inventory import Inventory, inv_marshalling
from btcwire.message_header import (
    START_STRING_TESTNET,
    HeaderMessage,
    MessageError,
    decode_compact_size,
    get_checksum,
)


def test_new_block_and_new_tx_types():
    digest = bytes(range(32))
    assert Inventory.new_block(digest).type_identifier == 2
    assert Inventory.new_tx(digest).type_identifier == 1
    assert Inventory.new_tx(digest).hash == digest


def test_to_bytes_layout():
    inv = Inventory.new_block(bytes(32))
    data = inv.to_bytes()
    assert data == b"\x02\x00\x00\x00" + bytes(32)


def test_round_trip():
    inv = Inventory.new_tx(bytes(range(32)))
    parsed = Inventory.from_bytes(inv.to_bytes())
    assert parsed == inv


def test_from_bytes_reads_only_first_36_bytes():
    inv = Inventory.new_block(bytes(range(1, 33)))
    parsed = Inventory.from_bytes(inv.to_bytes() + b"extra")
    assert parsed == inv


def test_from_bytes_too_short_raises():
    with pytest.raises(MessageError):
        Inventory.from_bytes(bytes(35))


def test_hash_must_be_32_bytes():
    with pytest.raises(MessageError):
        Inventory.new_block(bytes(31))


@pytest.mark.parametrize("count", [0, 1, 3])
def test_inv_marshalling_structure(count):
    inventories = [Inventory.new_tx(bytes([i]) * 32) for i in range(count)]
    message = inv_marshalling(inventories)
    header = HeaderMessage.from_bytes(message[:24])
    payload = message[24:]
    assert header.start_string == START_STRING_TESTNET
    assert header.command_name.rstrip("\0") == "inv"
    assert header.payload_size == len(payload)
    assert header.checksum == get_checksum(payload)
    decoded_count, offset = decode_compact_size(payload, 0)
    assert decoded_count == count
    parsed = [
        Inventory.from_bytes(payload[offset + 36 * i : offset + 36 * (i + 1)]) for i in range(count)
    ]
    assert parsed == inventories