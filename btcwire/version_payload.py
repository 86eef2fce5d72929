"""Payload of the version message exchanged during the handshake."""

from __future__ import annotations

import random
import struct
import time
from dataclasses import dataclass

from btcwire.message_header import MessageError, encode_compact_size
from btcwire.version_fields import (
    AddressLike,
    get_addr_ip_from_bytes,
    get_addr_port_from_bytes,
    get_addr_services_from_bytes,
    get_ipv6_address_ip,
    get_nonce_from_bytes,
    get_relay_from_bytes,
    get_services_from_bytes,
    get_start_height_from_bytes,
    get_timestamp_from_bytes,
    get_user_agent_bytes_from_bytes,
    get_user_agent_from_bytes,
    get_version_from_bytes,
)

DEFAULT_PORT = 18333
DEFAULT_USER_AGENT_BYTES = 16


@dataclass
class VersionPayload:
    """All fields of a version payload (protocol version 70015)."""

    version: int
    services: int
    timestamp: int
    addr_recv_service: int
    addr_recv_ip: bytes
    addr_recv_port: int
    addr_trans_service: int
    addr_trans_ip: bytes
    addr_trans_port: int
    nonce: int
    user_agent_bytes: int
    user_agent: str
    start_height: int
    relay: bool

    def __post_init__(self) -> None:
        self.addr_recv_ip = bytes(self.addr_recv_ip)
        self.addr_trans_ip = bytes(self.addr_trans_ip)
        if len(self.addr_recv_ip) != 16 or len(self.addr_trans_ip) != 16:
            raise MessageError("network addresses must be 16 bytes long")

    def to_bytes(self) -> bytes:
        """Serialise the payload to wire bytes."""
        try:
            head = struct.pack(
                "<iQqQ", self.version, self.services, self.timestamp, self.addr_recv_service
            )
            recv_port = struct.pack(">H", self.addr_recv_port)
            trans_service = struct.pack("<Q", self.addr_trans_service)
            trans_port = struct.pack(">H", self.addr_trans_port)
            nonce = struct.pack("<Q", self.nonce)
            start_height = struct.pack("<i", self.start_height)
        except struct.error as err:
            raise MessageError(f"a version payload field is out of range: {err}") from err
        return (
            head
            + self.addr_recv_ip
            + recv_port
            + trans_service
            + self.addr_trans_ip
            + trans_port
            + nonce
            + encode_compact_size(self.user_agent_bytes)
            + self.user_agent.encode("utf-8")
            + start_height
            + bytes([1 if self.relay else 0])
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "VersionPayload":
        """Parse a version payload; raises MessageError on short or invalid data."""
        offset = 0
        version, offset = get_version_from_bytes(data, offset)
        services, offset = get_services_from_bytes(data, offset)
        timestamp, offset = get_timestamp_from_bytes(data, offset)
        addr_recv_service, offset = get_addr_services_from_bytes(data, offset)
        addr_recv_ip, offset = get_addr_ip_from_bytes(data, offset)
        addr_recv_port, offset = get_addr_port_from_bytes(data, offset)
        addr_trans_service, offset = get_addr_services_from_bytes(data, offset)
        addr_trans_ip, offset = get_addr_ip_from_bytes(data, offset)
        addr_trans_port, offset = get_addr_port_from_bytes(data, offset)
        nonce, offset = get_nonce_from_bytes(data, offset)
        user_agent_bytes, offset = get_user_agent_bytes_from_bytes(data, offset)
        user_agent, offset = get_user_agent_from_bytes(data, offset, user_agent_bytes)
        start_height, offset = get_start_height_from_bytes(data, offset)
        relay = get_relay_from_bytes(data, offset)
        return cls(
            version=version,
            services=services,
            timestamp=timestamp,
            addr_recv_service=addr_recv_service,
            addr_recv_ip=addr_recv_ip,
            addr_recv_port=addr_recv_port,
            addr_trans_service=addr_trans_service,
            addr_trans_ip=addr_trans_ip,
            addr_trans_port=addr_trans_port,
            nonce=nonce,
            user_agent_bytes=user_agent_bytes,
            user_agent=user_agent,
            start_height=start_height,
            relay=relay,
        )


def get_current_unix_epoch_time() -> int:
    """Current Unix time in whole seconds."""
    seconds = int(time.time())
    if seconds < 0:
        raise MessageError("system clock is set before the Unix epoch")
    return seconds


def get_version_payload(
    protocol_version: int,
    user_agent: str,
    peer_address: AddressLike,
    local_address: AddressLike,
) -> VersionPayload:
    """Build the version payload this node sends to ``peer_address``."""
    return VersionPayload(
        version=protocol_version,
        services=0,
        timestamp=get_current_unix_epoch_time(),
        addr_recv_service=1,
        addr_recv_ip=get_ipv6_address_ip(peer_address),
        addr_recv_port=DEFAULT_PORT,
        addr_trans_service=0,
        addr_trans_ip=get_ipv6_address_ip(local_address),
        addr_trans_port=DEFAULT_PORT,
        nonce=random.getrandbits(64),
        user_agent_bytes=DEFAULT_USER_AGENT_BYTES,
        user_agent=user_agent,
        start_height=1,
        relay=True,
    )