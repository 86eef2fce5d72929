"""The getheaders message."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO, Iterable

from btcwire.getheaders_payload import SIZE_OF_HASH, GetHeadersPayload
from btcwire.message_header import HeaderMessage


@dataclass
class GetHeadersMessage:
    """A getheaders message: header plus payload."""

    header: HeaderMessage
    payload: GetHeadersPayload

    def write_to(self, stream: BinaryIO) -> None:
        """Write the serialised message to the stream and flush it."""
        stream.write(self.header.to_bytes() + self.payload.to_bytes())
        stream.flush()

    @classmethod
    def from_payload_bytes(cls, payload_bytes: bytes) -> "GetHeadersMessage":
        """Interpret ``payload_bytes`` as a getheaders payload and wrap it in a message."""
        payload = GetHeadersPayload.from_bytes(payload_bytes)
        header = HeaderMessage.for_payload("getheaders", bytes(payload_bytes))
        return cls(header, payload)

    @classmethod
    def build(
        cls, protocol_version: int, locator_hashes: Iterable[bytes]
    ) -> "GetHeadersMessage":
        """Request headers after the locator hash with a zero stop hash.

        The zero stop hash asks the peer for as many headers as it will send
        (at most 2000). The hash count is always one.
        """
        payload = GetHeadersPayload(
            version=protocol_version,
            hash_count=1,
            locator_hashes=list(locator_hashes),
            stop_hash=bytes(SIZE_OF_HASH),
        )
        header = HeaderMessage.for_payload("getheaders", payload.to_bytes())
        return cls(header, payload)