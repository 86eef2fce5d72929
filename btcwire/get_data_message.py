"""The getdata message, used to request blocks or transactions from a peer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Iterable

from btcwire.get_data_payload import GetDataPayload
from btcwire.inventory import Inventory
from btcwire.message_header import HeaderMessage


@dataclass
class GetDataMessage:
    """A getdata message: header plus inventory payload."""

    header: HeaderMessage
    payload: GetDataPayload

    @classmethod
    def from_inventories(cls, inventories: Iterable[Inventory]) -> "GetDataMessage":
        """Build a getdata message requesting the given inventories."""
        payload = GetDataPayload.from_inventories(inventories)
        header = HeaderMessage.for_payload("getdata", payload.to_bytes())
        return cls(header, payload)

    def marshalling(self) -> bytes:
        """Serialise the whole message to wire bytes."""
        return self.header.to_bytes() + self.payload.to_bytes()

    def write_to(self, stream: BinaryIO) -> None:
        """Write the serialised message to the stream and flush it."""
        stream.write(self.marshalling())
        stream.flush()