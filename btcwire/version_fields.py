"""Field readers for the version message payload.

Each reader takes the payload bytes and the offset of its field and returns
the decoded value together with the offset just past the field.
"""

from __future__ import annotations

import ipaddress
import struct
from typing import Tuple, Union

from btcwire.message_header import MessageError, decode_compact_size

AddressLike = Union[str, ipaddress.IPv4Address, ipaddress.IPv6Address, Tuple]

_IPV4_MAPPED_PREFIX = bytes(10) + b"\xff\xff"


def _unpack(fmt: str, data: bytes, offset: int, field_name: str) -> tuple[int, int]:
    try:
        (value,) = struct.unpack_from(fmt, data, offset)
    except struct.error as err:
        raise MessageError(f"not enough bytes to read the {field_name} field") from err
    return value, offset + struct.calcsize(fmt)


def _take(data: bytes, offset: int, length: int, field_name: str) -> tuple[bytes, int]:
    if offset < 0 or offset + length > len(data):
        raise MessageError(f"not enough bytes to read the {field_name} field")
    return bytes(data[offset:offset + length]), offset + length


def get_version_from_bytes(data: bytes, offset: int) -> tuple[int, int]:
    """Read the signed 32-bit protocol version."""
    return _unpack("<i", data, offset, "version")


def get_services_from_bytes(data: bytes, offset: int) -> tuple[int, int]:
    """Read the 64-bit services bit field."""
    return _unpack("<Q", data, offset, "services")


def get_timestamp_from_bytes(data: bytes, offset: int) -> tuple[int, int]:
    """Read the signed 64-bit Unix timestamp."""
    return _unpack("<q", data, offset, "timestamp")


def get_addr_services_from_bytes(data: bytes, offset: int) -> tuple[int, int]:
    """Read the services of a network address (receiving or transmitting node)."""
    return _unpack("<Q", data, offset, "address services")


def get_addr_ip_from_bytes(data: bytes, offset: int) -> tuple[bytes, int]:
    """Read a 16-byte IPv6 (or IPv4-mapped) address in network byte order."""
    return _take(data, offset, 16, "address ip")


def get_addr_port_from_bytes(data: bytes, offset: int) -> tuple[int, int]:
    """Read a port number stored big-endian."""
    return _unpack(">H", data, offset, "address port")


def get_nonce_from_bytes(data: bytes, offset: int) -> tuple[int, int]:
    """Read the 64-bit random nonce."""
    return _unpack("<Q", data, offset, "nonce")


def get_user_agent_bytes_from_bytes(data: bytes, offset: int) -> tuple[int, int]:
    """Read the compact size giving the user agent length.

    A compact size that cannot be decoded counts as zero and consumes nothing.
    """
    try:
        return decode_compact_size(data, offset)
    except MessageError:
        return 0, offset


def get_user_agent_from_bytes(data: bytes, offset: int, length: int) -> tuple[str, int]:
    """Read ``length`` bytes of UTF-8 user agent text."""
    raw, end = _take(data, offset, length, "user agent")
    try:
        return raw.decode("utf-8"), end
    except UnicodeDecodeError as err:
        raise MessageError(f"user agent is not valid UTF-8: {err}") from err


def get_start_height_from_bytes(data: bytes, offset: int) -> tuple[int, int]:
    """Read the signed 32-bit start height."""
    return _unpack("<i", data, offset, "start height")


def get_relay_from_bytes(data: bytes, offset: int) -> bool:
    """Read the relay flag; only a byte equal to 1 means true."""
    if not 0 <= offset < len(data):
        raise MessageError("not enough bytes to read the relay field")
    return data[offset] == 1


def get_ipv6_address_ip(address: AddressLike) -> bytes:
    """Return the 16-byte wire form of an address, mapping IPv4 into IPv6.

    ``address`` may be a socket address tuple, an IP address string or an
    ``ipaddress`` address object.
    """
    host = address[0] if isinstance(address, tuple) else address
    try:
        ip = ipaddress.ip_address(host)
    except ValueError as err:
        raise MessageError(f"invalid ip address: {host!r}") from err
    if isinstance(ip, ipaddress.IPv4Address):
        return _IPV4_MAPPED_PREFIX + ip.packed
    return ip.packed