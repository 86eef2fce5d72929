import io

import pytest

from btcwire.getheaders_message import GetHeadersMessage
from btcwire.getheaders_payload import GetHeadersPayload
from btcwire.message_header import HeaderMessage, MessageError, get_checksum

LOCATOR = bytes(range(32))


def test_build_uses_single_hash_count_and_zero_stop_hash():
    message = GetHeadersMessage.build(70015, [LOCATOR])
    assert message.payload.hash_count == 1
    assert message.payload.locator_hashes == [LOCATOR]
    assert message.payload.stop_hash == bytes(32)
    assert message.payload.version == 70015


def test_build_header_describes_payload():
    message = GetHeadersMessage.build(70015, [LOCATOR])
    raw_payload = message.payload.to_bytes()
    assert message.header.command_name == "getheaders"
    assert message.header.payload_size == len(raw_payload)
    assert message.header.checksum == get_checksum(raw_payload)


def test_write_to_emits_header_then_payload():
    message = GetHeadersMessage.build(70015, [LOCATOR])
    stream = io.BytesIO()
    message.write_to(stream)
    raw = stream.getvalue()
    header = HeaderMessage.from_bytes(raw[:24])
    assert header.command_name == "getheaders\0\0"
    assert header.payload_size == len(raw) - 24
    assert GetHeadersPayload.from_bytes(raw[24:]) == message.payload


def test_from_payload_bytes_round_trip():
    original = GetHeadersMessage.build(70015, [LOCATOR])
    parsed = GetHeadersMessage.from_payload_bytes(original.payload.to_bytes())
    assert parsed.payload == original.payload
    assert parsed.header.to_bytes() == original.header.to_bytes()


def test_from_payload_bytes_invalid_raises():
    with pytest.raises(MessageError):
        GetHeadersMessage.from_payload_bytes(b"\x7f\x11\x01\x00\x01")