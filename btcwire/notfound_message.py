"""The notfound message."""

from __future__ import annotations

from typing import Iterable

from btcwire.inventory import Inventory, inv_marshalling
from btcwire.message_header import HeaderMessage


def get_notfound_message(inventories: Iterable[Inventory]) -> bytes:
    """Serialise a notfound message whose payload is the inv message for ``inventories``."""
    payload = inv_marshalling(inventories)
    header = HeaderMessage.for_payload("notfound", payload)
    return header.to_bytes() + payload