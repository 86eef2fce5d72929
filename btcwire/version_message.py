"""The version message: header plus version payload."""

from __future__ import annotations

from dataclasses import dataclass
from typing import BinaryIO

from btcwire.message_header import HeaderMessage, get_checksum, read_exact
from btcwire.version_fields import AddressLike
from btcwire.version_payload import VersionPayload, get_version_payload


@dataclass
class VersionMessage:
    """A version message with its 24-byte header and payload."""

    header: HeaderMessage
    payload: VersionPayload

    def write_to(self, stream: BinaryIO) -> None:
        """Write the serialised message to the stream and flush it."""
        stream.write(self.header.to_bytes() + self.payload.to_bytes())
        stream.flush()

    @classmethod
    def read_from(cls, stream: BinaryIO) -> "VersionMessage":
        """Read messages until a version message arrives and parse it."""
        header = HeaderMessage.read_from(stream, "version", None)
        payload_bytes = read_exact(stream, header.payload_size)
        return cls(header, VersionPayload.from_bytes(payload_bytes))


def get_version_message(
    start_string: bytes,
    protocol_version: int,
    user_agent: str,
    peer_address: AddressLike,
    local_address: AddressLike,
) -> VersionMessage:
    """Build the version message this node sends to ``peer_address``."""
    payload = get_version_payload(protocol_version, user_agent, peer_address, local_address)
    payload_bytes = payload.to_bytes()
    header = HeaderMessage(
        start_string=start_string,
        command_name="version",
        payload_size=len(payload_bytes),
        checksum=get_checksum(payload_bytes),
    )
    return VersionMessage(header, payload)