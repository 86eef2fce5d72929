"""Inventory vectors and the inv message."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Iterable

from btcwire.message_header import HeaderMessage, MessageError, encode_compact_size

INVENTORY_SIZE = 36
MSG_TX = 1
MSG_BLOCK = 2


@dataclass
class Inventory:
    """A typed 32-byte hash announcing or requesting an object."""

    type_identifier: int
    hash: bytes

    def __post_init__(self) -> None:
        self.hash = bytes(self.hash)
        if len(self.hash) != 32:
            raise MessageError("an inventory hash must be 32 bytes long")

    @classmethod
    def new_block(cls, hash: bytes) -> "Inventory":
        """Inventory for a block hash."""
        return cls(MSG_BLOCK, hash)

    @classmethod
    def new_tx(cls, hash: bytes) -> "Inventory":
        """Inventory for a transaction hash."""
        return cls(MSG_TX, hash)

    def to_bytes(self) -> bytes:
        """Serialise as a little-endian type followed by the hash."""
        return struct.pack("<I", self.type_identifier) + self.hash

    @classmethod
    def from_bytes(cls, data: bytes) -> "Inventory":
        """Parse the first 36 bytes of ``data``."""
        if len(data) < INVENTORY_SIZE:
            raise MessageError(f"an inventory needs {INVENTORY_SIZE} bytes, got {len(data)}")
        (type_identifier,) = struct.unpack("<I", bytes(data[0:4]))
        return cls(type_identifier, bytes(data[4:INVENTORY_SIZE]))


def inv_marshalling(inventories: Iterable[Inventory]) -> bytes:
    """Build a complete inv message, header included, for the inventories."""
    items = list(inventories)
    payload = encode_compact_size(len(items)) + b"".join(item.to_bytes() for item in items)
    header = HeaderMessage.for_payload("inv", payload)
    return header.to_bytes() + payload