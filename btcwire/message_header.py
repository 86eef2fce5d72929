"""Message header framing shared by every message of the wire protocol."""

from __future__ import annotations

import hashlib
import logging
import struct
import threading
from dataclasses import dataclass
from typing import BinaryIO, Optional

logger = logging.getLogger(__name__)

START_STRING_TESTNET = bytes([0x0B, 0x11, 0x09, 0x07])
CHECKSUM_EMPTY_PAYLOAD = bytes([0x5D, 0xF6, 0xE0, 0xE2])
HEADER_SIZE = 24
COMMAND_NAME_SIZE = 12
BLOCK_READ_TIMEOUT_SECONDS = 2.0


class MessageError(ValueError):
    """Raised when a message cannot be encoded, decoded or read."""


@dataclass
class HeaderMessage:
    """The 24-byte header that precedes every protocol message."""

    start_string: bytes
    command_name: str
    payload_size: int
    checksum: bytes

    def __post_init__(self) -> None:
        self.start_string = bytes(self.start_string)
        self.checksum = bytes(self.checksum)
        if len(self.start_string) != 4:
            raise MessageError("start string must be 4 bytes long")
        if len(self.checksum) != 4:
            raise MessageError("checksum must be 4 bytes long")
        if not 0 <= self.payload_size <= 0xFFFFFFFF:
            raise MessageError("payload size does not fit in 32 bits")

    @classmethod
    def for_payload(cls, command_name: str, payload: Optional[bytes]) -> "HeaderMessage":
        """Build the header for a command; ``None`` means the message has no payload."""
        if payload is None:
            return cls(START_STRING_TESTNET, command_name, 0, CHECKSUM_EMPTY_PAYLOAD)
        return cls(START_STRING_TESTNET, command_name, len(payload), get_checksum(payload))

    def to_bytes(self) -> bytes:
        """Serialise the header to its 24 wire bytes."""
        return (
            self.start_string
            + command_name_to_bytes(self.command_name)
            + struct.pack("<I", self.payload_size)
            + self.checksum
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "HeaderMessage":
        """Parse 24 wire bytes; the command name keeps its NUL padding."""
        if len(data) != HEADER_SIZE:
            raise MessageError(f"a header is {HEADER_SIZE} bytes, got {len(data)}")
        try:
            command_name = bytes(data[4:16]).decode("utf-8")
        except UnicodeDecodeError as err:
            raise MessageError(f"command name is not valid UTF-8: {err}") from err
        (payload_size,) = struct.unpack("<I", data[16:20])
        return cls(bytes(data[0:4]), command_name, payload_size, bytes(data[20:24]))

    def write_to(self, stream: BinaryIO) -> None:
        """Write the serialised header to the stream and flush it."""
        stream.write(self.to_bytes())
        stream.flush()

    @classmethod
    def read_from(
        cls,
        stream: BinaryIO,
        command_name: str,
        finish: Optional[threading.Event] = None,
    ) -> "HeaderMessage":
        """Read headers until one for ``command_name`` arrives.

        Payloads of other messages are discarded; pings are answered with a
        pong. Reading stops early once ``finish`` is set.
        """
        if command_name == "block":
            settimeout = getattr(stream, "settimeout", None)
            if callable(settimeout):
                settimeout(BLOCK_READ_TIMEOUT_SECONDS)
        wanted = command_name_to_bytes(command_name).decode("utf-8")
        header = cls.from_bytes(read_exact(stream, HEADER_SIZE))
        while header.command_name != wanted and not is_terminated(finish):
            payload = read_payload(stream, header)
            if "ping" in header.command_name:
                logger.info("Received: ping")
                write_pong_message(stream, payload)
            logger.info("Ignored -- received: %s", header.command_name.rstrip("\0"))
            header = cls.from_bytes(read_exact(stream, HEADER_SIZE))
        if not is_terminated(finish):
            logger.info("Received: %s", command_name)
        return header


def is_terminated(finish: Optional[threading.Event]) -> bool:
    """Tell whether the shared finish flag has been raised."""
    return finish is not None and finish.is_set()


def read_exact(stream: BinaryIO, size: int) -> bytes:
    """Read exactly ``size`` bytes, raising MessageError if the stream ends first."""
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(remaining)
        if not chunk:
            raise MessageError(f"stream ended with {remaining} of {size} bytes unread")
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def read_payload(stream: BinaryIO, header: HeaderMessage) -> bytes:
    """Read the payload that follows ``header``."""
    return read_exact(stream, header.payload_size)


def write_verack_message(stream: BinaryIO) -> None:
    """Write a verack message."""
    HeaderMessage.for_payload("verack", None).write_to(stream)


def write_pong_message(stream: BinaryIO, payload: bytes) -> None:
    """Write a pong message echoing the ping payload."""
    header = HeaderMessage.for_payload("pong", payload)
    stream.write(header.to_bytes() + bytes(payload))
    stream.flush()


def write_sendheaders_message(stream: BinaryIO) -> None:
    """Write a sendheaders message."""
    HeaderMessage.for_payload("sendheaders", None).write_to(stream)


def read_verack_message(stream: BinaryIO) -> HeaderMessage:
    """Read messages until a verack header arrives and return it."""
    return HeaderMessage.read_from(stream, "verack", None)


def command_name_to_bytes(command: str) -> bytes:
    """Encode a command name as ASCII padded with NUL bytes to 12 bytes."""
    encoded = command.encode("utf-8")
    if len(encoded) > COMMAND_NAME_SIZE:
        raise MessageError(f"command name {command!r} is longer than {COMMAND_NAME_SIZE} bytes")
    return encoded.ljust(COMMAND_NAME_SIZE, b"\0")


def get_checksum(payload: bytes) -> bytes:
    """First four bytes of SHA256(SHA256(payload))."""
    return hashlib.sha256(hashlib.sha256(payload).digest()).digest()[:4]


def encode_compact_size(value: int) -> bytes:
    """Encode a variable-length compact size unsigned integer."""
    if value < 0:
        raise MessageError("compact size cannot be negative")
    if value < 0xFD:
        return bytes([value])
    if value <= 0xFFFF:
        return b"\xfd" + struct.pack("<H", value)
    if value <= 0xFFFFFFFF:
        return b"\xfe" + struct.pack("<I", value)
    if value <= 0xFFFFFFFFFFFFFFFF:
        return b"\xff" + struct.pack("<Q", value)
    raise MessageError("compact size does not fit in 64 bits")


def decode_compact_size(data: bytes, offset: int = 0) -> tuple[int, int]:
    """Decode a compact size at ``offset``; return the value and the next offset."""
    if offset >= len(data):
        raise MessageError("no bytes left to read a compact size")
    prefix = data[offset]
    widths = {0xFD: ("<H", 2), 0xFE: ("<I", 4), 0xFF: ("<Q", 8)}
    if prefix not in widths:
        return prefix, offset + 1
    fmt, width = widths[prefix]
    start = offset + 1
    end = start + width
    if end > len(data):
        raise MessageError("not enough bytes to read a compact size")
    (value,) = struct.unpack(fmt, bytes(data[start:end]))
    return value, end