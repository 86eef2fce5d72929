"""Payload of the getheaders message."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from btcwire.message_header import MessageError, decode_compact_size, encode_compact_size

SIZE_OF_HASH = 32


@dataclass
class GetHeadersPayload:
    """Protocol version, locator hashes (newest first) and the stop hash."""

    version: int
    hash_count: int
    locator_hashes: list[bytes] = field(default_factory=list)
    stop_hash: bytes = bytes(SIZE_OF_HASH)

    def __post_init__(self) -> None:
        if not 0 <= self.version <= 0xFFFFFFFF:
            raise MessageError("version does not fit in 32 bits")
        self.locator_hashes = [bytes(item) for item in self.locator_hashes]
        self.stop_hash = bytes(self.stop_hash)
        if any(len(item) != SIZE_OF_HASH for item in self.locator_hashes):
            raise MessageError("locator hashes must be 32 bytes long")
        if len(self.stop_hash) != SIZE_OF_HASH:
            raise MessageError("the stop hash must be 32 bytes long")

    def to_bytes(self) -> bytes:
        """Serialise the payload to wire bytes."""
        return (
            struct.pack("<I", self.version)
            + encode_compact_size(self.hash_count)
            + b"".join(self.locator_hashes)
            + self.stop_hash
        )

    @classmethod
    def from_bytes(cls, payload: bytes) -> "GetHeadersPayload":
        """Parse a getheaders payload."""
        if len(payload) < 4:
            raise MessageError("payload too short for a protocol version")
        (version,) = struct.unpack("<I", bytes(payload[0:4]))
        hash_count, offset = decode_compact_size(payload, 4)
        locator_hashes = []
        for _ in range(hash_count):
            locator_hashes.append(_take_hash(payload, offset))
            offset += SIZE_OF_HASH
        stop_hash = _take_hash(payload, offset)
        return cls(version, hash_count, locator_hashes, stop_hash)


def _take_hash(payload: bytes, offset: int) -> bytes:
    end = offset + SIZE_OF_HASH
    if end > len(payload):
        raise MessageError("payload ends in the middle of a hash")
    return bytes(payload[offset:end])