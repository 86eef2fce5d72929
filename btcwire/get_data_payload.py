"""Payload of the getdata message: a counted list of inventories."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from btcwire.inventory import INVENTORY_SIZE, Inventory
from btcwire.message_header import MessageError, decode_compact_size, encode_compact_size


@dataclass
class GetDataPayload:
    """The inventories requested by a getdata message, with their serialised form."""

    inventories: tuple[Inventory, ...]
    count: int = field(init=False)
    _encoded: bytes = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.inventories = tuple(self.inventories)
        self.count = len(self.inventories)
        self._encoded = encode_compact_size(self.count) + b"".join(
            inventory.to_bytes() for inventory in self.inventories
        )

    @classmethod
    def from_inventories(cls, inventories: Iterable[Inventory]) -> "GetDataPayload":
        """Build the getdata payload for the given inventories."""
        return cls(tuple(inventories))

    def to_bytes(self) -> bytes:
        """The payload as wire bytes."""
        return self._encoded

    def size(self) -> int:
        """Length of the payload in bytes."""
        return len(self._encoded)


def unmarshalling(payload: bytes) -> list[Inventory]:
    """Parse a getdata (or inv) payload into its inventories."""
    count, offset = decode_compact_size(payload, 0)
    inventories = []
    for _ in range(count):
        end = offset + INVENTORY_SIZE
        if end > len(payload):
            raise MessageError("payload ends before all announced inventories")
        inventories.append(Inventory.from_bytes(payload[offset:end]))
        offset = end
    return inventories