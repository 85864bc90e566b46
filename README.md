# smoserve

Building blocks for an online multiplayer game server. The package covers:

- the binary packet format
- TCP and UDP packet connections over asyncio
- server settings stored as JSON
- stage and kingdom name lookups
- helpers for a JSON status API

It has no runtime dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Packets (`smoserve.packet`)

Every frame starts with a 20-byte header:

1. a 16-byte client id
2. a little-endian u16 packet type
3. a little-endian u16 payload size

The payload comes after the header. Each payload kind is a frozen
dataclass:

- `Init`
- `Player`
- `Cap`
- `Game`
- `Tag`
- `GameModeUpdate`
- `Connect`
- `Disconnect`
- `CostumeData`
- `Shine`
- `Capture`
- `ChangeStage`
- `Command`
- `UdpInit`
- `HolePunch`
- `JsonApi`
- `Unhandled`, for packet types the codec does not know

Useful functions and methods:

- `Packet.create(id, data)` builds a packet and sets its declared size from the payload.
- `Packet.encode()` returns the frame bytes.
- `Packet.decode(data)` reads the frame at the start of `data`. Bytes after the frame are ignored.

```python
import uuid
from smoserve.packet import Packet, Shine

packet = Packet.create(uuid.uuid4().bytes, Shine(shine_id=42, is_grand=False))
raw = packet.encode()
assert Packet.decode(raw) == packet
```

Helpers:

- `payload_size(data)` returns the number of payload bytes for a payload.
- `type_id(data)` returns the type number written in the header.
- `type_name(data)` returns a short name such as `"shine"` or `"changeStage"`.
- `check_frame(data)` returns how many bytes a complete frame at the start of `data` takes up. It raises `NotEnoughDataError` if the frame is not complete yet.
- `Packet.resize()` sets `data_size` again after the payload has changed.

Text fields are fixed-width and padded with NUL bytes.

A frame whose type bytes spell `ST` is treated as the start of a JSON API request:

- `Packet.decode` returns the whole buffer as text in a `JsonApi` payload.
- `check_frame` counts only the id and type bytes for such a frame.

Cap packets do not round-trip exactly. When decoding a `Cap` packet, only the
first 32 bytes of the 48-byte animation field are read, and their padding is
kept.

Type 5 packets decode as follows:

- A `Tag` for hide-and-seek or sardines.
- A `Tag` for legacy mode with update type 3.
- A `GameModeUpdate` for every other game mode.

## Connections (`smoserve.connection`, `smoserve.udp_conn`)

`Connection(reader, writer)` wraps an asyncio `StreamReader` and `StreamWriter`.
It buffers incoming bytes and provides `read_packet()` and `write_packet(packet)`.
When the peer goes away, `read_packet()` raises one of two errors:

- `ConnectionClosedError` if the peer closed between frames.
- `ConnectionResetError_` if it closed partway through a frame.

`UdpConnection(sock, ip)` wraps a UDP socket for one client. Its client port
starts out unknown, and while it is unknown:

- reads never complete;
- writes raise `UdpNotInitializedError`.

To give the connection a port, either call `set_client_port(port)` or build it
with `UdpConnection.from_connection(sock, (ip, port))`. Datagrams from any
other address are dropped.

`is_client_udp()` reports whether the client's address is known and data has
arrived from it.

## Settings (`smoserve.settings`)

```python
from smoserve.settings import Settings, load_settings, save_settings

settings = Settings()
save_settings(settings, "settings.json")
settings = load_settings("settings.json")
```

`load_settings` and `save_settings` default to `./settings.json`.

In the JSON file:

- Keys are in PascalCase, for example `"BanList"` and `"MaxPlayers"`.
- Every field must be present when loading.
- Sets are written as sorted lists.

Errors from `load_settings`:

- A file that cannot be opened raises `OSError`.
- Malformed JSON or invalid values raise `SMOError`.

Defaults:

| Setting | Default |
| --- | --- |
| Address | `0.0.0.0` |
| Port | 1027 |
| MaxPlayers | 8 |
| Shine table | enabled, with moon 496 excluded |
| Discord prefix | `$` |
| Moons file | `./moons.json`, with persistence disabled |
| JSON API port | 1027, with the API disabled |

`FlipPov.parse` accepts `both`, `self`, `players` and `others`. It raises
`InvalidConsoleArgError` for any other value.

## Game modes (`smoserve.game_mode`)

`GameMode` is an `IntEnum` with the wire values 0 to 15. The value 15, `NONE`,
is shown as -1 by `to_i8()`.

`GameMode.parse` accepts either form:

- a number from `"-1"` to `"14"`;
- one of the names `None`, `Legacy`, `HideAndSeek`, `Sardines` or `FreezeTag`.

## Stages (`smoserve.stages`)

```python
from smoserve.stages import input_to_stage, stage_to_kingdom, stages_by_input

input_to_stage("cap")                  # "CapWorldHomeStage"
input_to_stage("SomeStage!")           # "SomeStage" (forced with a trailing "!")
stage_to_kingdom("SandWorldHomeStage") # "Sand Kingdom"
stages_by_input("cloud")               # every stage of the Cloud Kingdom
```

The module also provides `is_alias` and `is_stage`.

## JSON API helpers

`smoserve.block_clients.BlockClients` counts failed requests per IP address:

- `fail(ip)` records a failure and returns the new count.
- `is_blocked(ip)` is true once an address has five or more failures.
- `redeem(ip)` clears the count for an address.

`smoserve.status_settings.status_settings(settings, permissions)` builds the
settings part of a status reply:

- Each `Status/Settings/<path>` permission, for example
  `Status/Settings/Server/MaxPlayers`, copies the value at that path.
- Values are nested in the result as they are in the settings file.
- It returns `None` when no permission yields a value.

## Errors (`smoserve.errors`)

All errors derive from `SMOError`. Encoding problems derive from
`EncodingError`. `severity(error)` returns
`ErrorSeverity.CLIENT_FATAL` for:

- closed or reset connections;
- channel errors.

It returns `ErrorSeverity.NON_CRITICAL` for every other error.

## What is not included

The package provides parts, not a running server. It does not include:

- a command to start a server;
- a TCP listener that accepts clients;
- a lobby or player registry;
- a coordinator that routes packets between players;
- an operator console;
- shine (moon) persistence.

The JSON API is only partly covered. The package can block clients and build
the settings part of a status reply. It does not serve API requests, build
player status, or run console commands.