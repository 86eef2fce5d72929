# btcwire

Building and parsing messages of the Bitcoin peer-to-peer protocol, with the
testnet start string by default. Every message is a 24-byte header (start
string, command name, payload size and checksum) followed by a payload.

It has no dependencies outside the Python standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `btcwire.message_header`: `HeaderMessage` has `for_payload`, `to_bytes`,
  `from_bytes`, `write_to` and `read_from`. The module also has
  `get_checksum`, `command_name_to_bytes`, `encode_compact_size` and
  `decode_compact_size`, `read_exact` and `read_payload`, `is_terminated`,
  and helpers for the `verack`, `pong` and `sendheaders` messages
  (`write_verack_message`, `read_verack_message`, `write_pong_message`,
  `write_sendheaders_message`). `HeaderMessage.read_from` reads past any
  messages that are not the one asked for and answers a `ping` with a
  `pong` as it goes. It stops early if an optional `threading.Event` named
  `finish` is set. When it waits for a `block`, it sets a two-second timeout
  on streams that have `settimeout`. Problems are raised as `MessageError`,
  which is a subclass of `ValueError`.
- `btcwire.inventory`: `Inventory` entries for blocks (`Inventory.new_block`)
  and transactions (`Inventory.new_tx`), with `to_bytes` and `from_bytes`.
  `inv_marshalling` builds a full `inv` message.
- `btcwire.notfound_message`: `get_notfound_message` wraps the `inv` message
  for the given inventories in a `notfound` header.
- `btcwire.get_data_payload`: `GetDataPayload` (`from_inventories`,
  `to_bytes`, `size`), and `unmarshalling` to parse a payload back into
  inventories.
- `btcwire.get_data_message`: `GetDataMessage` (`from_inventories`,
  `marshalling`, `write_to`).
- `btcwire.getheaders_payload`: `GetHeadersPayload` (`to_bytes`,
  `from_bytes`).
- `btcwire.getheaders_message`: `GetHeadersMessage` (`build`,
  `from_payload_bytes`, `write_to`). `build` always writes a hash count of
  one and a zero stop hash.
- `btcwire.version_fields`: readers for single fields of a version payload.
  Each one takes the payload bytes and an offset. Most return the value
  together with the next offset; `get_relay_from_bytes` returns only the
  flag. The module also has `get_ipv6_address_ip`, which maps IPv4
  addresses into IPv6.
- `btcwire.version_payload`: `VersionPayload` (`to_bytes`, `from_bytes`),
  `get_version_payload` and `get_current_unix_epoch_time`.
- `btcwire.version_message`: `VersionMessage` (`write_to`, `read_from`) and
  `get_version_message`.
- `btcwire.network`: `get_active_nodes` and `get_nodes_from_dns_seed` find
  peer IPv4 addresses from a DNS seed and from a list of addresses you give.
  Entries in the list that are not IPv4 addresses are logged and skipped.

Streams are binary file-like objects with `read`, `write` and `flush`, such
as `io.BytesIO` or `socket.makefile("rwb")`.

## Example

```python
from btcwire.inventory import Inventory
from btcwire.get_data_message import GetDataMessage
from btcwire.message_header import HeaderMessage

block_hash = bytes(32)
message = GetDataMessage.from_inventories([Inventory.new_block(block_hash)])
raw = message.marshalling()

header = HeaderMessage.from_bytes(raw[:24])
print(header.command_name.rstrip("\0"), header.payload_size)  # getdata 37
```

Making a handshake over a socket:

```python
import socket
from btcwire.version_message import VersionMessage, get_version_message
from btcwire.message_header import read_verack_message, write_verack_message

with socket.create_connection(("127.0.0.1", 18333)) as sock:
    stream = sock.makefile("rwb")
    version = get_version_message(
        bytes([0x0B, 0x11, 0x09, 0x07]),
        70015,
        "/btcwire:0.1.0/",
        sock.getpeername(),
        sock.getsockname(),
    )
    version.write_to(stream)
    VersionMessage.read_from(stream)
    read_verack_message(stream)
    write_verack_message(stream)
```

Finding peers:

```python
from btcwire.network import get_active_nodes

nodes = get_active_nodes("seed.testnet.example.com", 18333, ["127.0.0.1"], False)
```

## What it does not do

This is a library of message encoders and decoders. It does not include the
parts of a full node:

- no node or listening server, and no connection management
- no block, block-header or transaction types, and no `block` or `headers`
  messages
- no blockchain or UTXO storage
- no wallet and no command-line program

You open the sockets yourself and pass the streams to these functions.