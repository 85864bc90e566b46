"""Binary packets exchanged with game clients.

Every frame starts with a 20 byte header: a 16 byte client id, a little-endian
u16 packet type and a little-endian u16 payload size.  The payload layout
depends on the type.  A frame whose type bytes spell ``ST`` is the start of a
JSON API request and is taken whole as text.
"""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from typing import Union

from .errors import EncodingError, NotEnoughDataError
from .game_mode import GameMode
from .geometry import Costume, Quaternion, Vector3

MAX_PACKET_SIZE = 0x100
ID_SIZE = 16
HEADER_SIZE = ID_SIZE + 2 + 2
JSON_API_TYPE = 0x5453

COSTUME_NAME_SIZE = 0x20
CAP_ANIM_SIZE = 0x30
STAGE_GAME_NAME_SIZE = 0x40
STAGE_CHANGE_NAME_SIZE = 0x30
STAGE_ID_SIZE = 0x10
CLIENT_NAME_SIZE = COSTUME_NAME_SIZE

_HEADER = struct.Struct("<16sHH")
_TYPE_AND_SIZE = struct.Struct("<HH")


class ConnectionType(enum.IntEnum):
    """Whether a client connects for the first time or comes back."""

    FIRST_CONNECTION = 0
    RECONNECTING = 1


class TagUpdate(enum.IntEnum):
    """Which parts of a tag packet carry new information."""

    UNKNOWN = 0
    TIME = 1
    STATE = 2
    BOTH = 3


@dataclass(frozen=True)
class Unhandled:
    """A packet of a type the server does not interpret."""

    tag: int
    data: bytes


@dataclass(frozen=True)
class Init:
    max_players: int


@dataclass(frozen=True)
class Player:
    pos: Vector3
    rot: Quaternion
    animation_blend_weights: tuple[float, ...]
    act: int
    sub_act: int

    def __post_init__(self) -> None:
        if len(self.animation_blend_weights) != 6:
            raise ValueError("a player packet carries exactly 6 blend weights")


@dataclass(frozen=True)
class Cap:
    pos: Vector3
    rot: Quaternion
    cap_out: bool
    cap_anim: str


@dataclass(frozen=True)
class Game:
    is_2d: bool
    scenario_num: int
    stage: str


@dataclass(frozen=True)
class Tag:
    game_mode: GameMode
    update_type: TagUpdate
    is_it: bool
    seconds: int
    minutes: int


@dataclass(frozen=True)
class GameModeUpdate:
    """A type 5 packet for a game mode that is not a tag mode."""

    game_mode: GameMode
    update_type: int
    data: bytes


@dataclass(frozen=True)
class Connect:
    c_type: ConnectionType
    max_player: int
    client_name: str


@dataclass(frozen=True)
class Disconnect:
    pass


@dataclass(frozen=True)
class CostumeData:
    costume: Costume


@dataclass(frozen=True)
class Shine:
    shine_id: int
    is_grand: bool


@dataclass(frozen=True)
class Capture:
    model: str


@dataclass(frozen=True)
class ChangeStage:
    stage: str
    id: str
    scenario: int
    sub_scenario: int


@dataclass(frozen=True)
class Command:
    pass


@dataclass(frozen=True)
class UdpInit:
    port: int


@dataclass(frozen=True)
class HolePunch:
    pass


@dataclass(frozen=True)
class JsonApi:
    """A JSON API request that arrived on the game port."""

    json: str


PacketData = Union[
    Unhandled, Init, Player, Cap, Game, Tag, GameModeUpdate, Connect, Disconnect,
    CostumeData, Shine, Capture, ChangeStage, Command, UdpInit, HolePunch, JsonApi,
]

_FIXED_SIZES: dict[type, int] = {
    Init: 2,
    Player: 0x38,
    Cap: 29 + CAP_ANIM_SIZE,
    Game: 2 + STAGE_GAME_NAME_SIZE,
    Tag: 5,
    Connect: 6 + CLIENT_NAME_SIZE,
    Disconnect: 0,
    CostumeData: COSTUME_NAME_SIZE * 2,
    Shine: 5,
    Capture: COSTUME_NAME_SIZE,
    ChangeStage: STAGE_ID_SIZE + STAGE_CHANGE_NAME_SIZE + 2,
    Command: 0,
    UdpInit: 2,
    HolePunch: 0,
}

_TYPE_IDS: dict[type, int] = {
    Init: 1,
    Player: 2,
    Cap: 3,
    Game: 4,
    Tag: 5,
    GameModeUpdate: 5,
    Connect: 6,
    Disconnect: 7,
    CostumeData: 8,
    Shine: 9,
    Capture: 10,
    ChangeStage: 11,
    Command: 12,
    UdpInit: 13,
    HolePunch: 14,
    JsonApi: JSON_API_TYPE,
}

_TYPE_NAMES: dict[type, str] = {
    Unhandled: "unhandled",
    Init: "init",
    Player: "player",
    Cap: "cap",
    Game: "game",
    Tag: "tag",
    GameModeUpdate: "gamemode",
    Connect: "connect",
    Disconnect: "disconnect",
    CostumeData: "costume",
    Shine: "shine",
    Capture: "capture",
    ChangeStage: "changeStage",
    Command: "command",
    UdpInit: "udpInit",
    HolePunch: "holePunch",
    JsonApi: "jsonApi",
}


def payload_size(data: PacketData) -> int:
    """The number of payload bytes ``data`` occupies on the wire."""
    match data:
        case Unhandled(data=raw):
            return len(raw)
        case GameModeUpdate(data=raw):
            return 1 + len(raw)
        case JsonApi(json=text):
            return len(text.encode("utf-8"))
    return _FIXED_SIZES[type(data)]


def type_id(data: PacketData) -> int:
    """The packet type number written in the header."""
    if isinstance(data, Unhandled):
        return data.tag
    return _TYPE_IDS[type(data)]


def type_name(data: PacketData) -> str:
    """A short lower-camel-case name of the packet kind."""
    return _TYPE_NAMES[type(data)]


def check_frame(data: bytes) -> int:
    """Check that ``data`` starts with a complete frame.

    Returns the number of bytes a connection consumes for the frame: the
    header plus the payload, or just the id and type for a JSON API request.
    Raises NotEnoughDataError if more bytes are needed.
    """
    if len(data) < HEADER_SIZE:
        raise NotEnoughDataError()
    p_type, size = _TYPE_AND_SIZE.unpack_from(data, ID_SIZE)
    if p_type == JSON_API_TYPE:
        return ID_SIZE + 2
    if len(data) - HEADER_SIZE < size:
        raise NotEnoughDataError()
    return HEADER_SIZE + size


class _Reader:
    """Sequential little-endian reads over a payload."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def _unpack(self, fmt: str) -> tuple:
        layout = struct.Struct(fmt)
        if self._pos + layout.size > len(self._data):
            raise NotEnoughDataError()
        values = layout.unpack_from(self._data, self._pos)
        self._pos += layout.size
        return values

    def u8(self) -> int:
        return self._unpack("<B")[0]

    def i8(self) -> int:
        return self._unpack("<b")[0]

    def u16(self) -> int:
        return self._unpack("<H")[0]

    def i32(self) -> int:
        return self._unpack("<i")[0]

    def u32(self) -> int:
        return self._unpack("<I")[0]

    def f32(self) -> float:
        return self._unpack("<f")[0]

    def take(self, count: int) -> bytes:
        if self._pos + count > len(self._data):
            raise NotEnoughDataError()
        chunk = self._data[self._pos:self._pos + count]
        self._pos += count
        return chunk

    def vector(self) -> Vector3:
        return Vector3.from_bytes(self.take(Vector3.SIZE))

    def quaternion(self) -> Quaternion:
        return Quaternion.from_bytes(self.take(Quaternion.SIZE))

    def raw_text(self, size: int) -> str:
        return _utf8(self.take(size))

    def text(self, size: int) -> str:
        return self.raw_text(size).strip("\0")


def _utf8(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError("Invalid string data") from exc


def _sized(text: str, size: int) -> bytes:
    return text.encode("utf-8")[:size].ljust(size, b"\0")


def _decode_tag(reader: _Reader, p_size: int) -> Tag | GameModeUpdate:
    if p_size < 1:
        raise EncodingError("Game mode packet without payload")
    both = reader.u8()
    game_mode = GameMode.from_u8(both >> 4)
    update_type = both & 0x0F
    is_tag = game_mode in (GameMode.HIDE_AND_SEEK, GameMode.SARDINES) or (
        game_mode is GameMode.LEGACY and update_type == 3
    )
    if not is_tag:
        return GameModeUpdate(game_mode, update_type, reader.take(p_size - 1))
    if p_size < _FIXED_SIZES[Tag]:
        raise EncodingError("Declared size too small for a tag packet")
    try:
        update = TagUpdate(update_type)
    except ValueError:
        update = TagUpdate.UNKNOWN
    return Tag(
        game_mode=game_mode,
        update_type=update,
        is_it=reader.u8() != 0,
        seconds=reader.u8(),
        minutes=reader.u16(),
    )


def _decode_player(r: _Reader) -> Player:
    return Player(
        pos=r.vector(),
        rot=r.quaternion(),
        animation_blend_weights=tuple(r.f32() for _ in range(6)),
        act=r.u16(),
        sub_act=r.u16(),
    )


def _decode_cap(r: _Reader) -> Cap:
    pos, rot, cap_out = r.vector(), r.quaternion(), r.u8() != 0
    # Only the first 0x20 bytes of the 0x30 byte animation field are read,
    # and they are not trimmed of padding.
    return Cap(pos, rot, cap_out, r.raw_text(COSTUME_NAME_SIZE))


def _decode_connect(r: _Reader) -> Connect:
    c_type = ConnectionType.FIRST_CONNECTION if r.u32() == 0 else ConnectionType.RECONNECTING
    return Connect(c_type, r.u16(), r.text(CLIENT_NAME_SIZE))


_DECODERS = {
    1: (Init, lambda r: Init(r.u16())),
    2: (Player, _decode_player),
    3: (Cap, _decode_cap),
    4: (Game, lambda r: Game(r.u8() != 0, r.i8(), r.text(STAGE_GAME_NAME_SIZE))),
    6: (Connect, _decode_connect),
    7: (Disconnect, lambda r: Disconnect()),
    8: (CostumeData, lambda r: CostumeData(
        Costume(r.text(COSTUME_NAME_SIZE), r.text(COSTUME_NAME_SIZE)))),
    9: (Shine, lambda r: Shine(r.i32(), r.u8() != 0)),
    10: (Capture, lambda r: Capture(r.text(COSTUME_NAME_SIZE))),
    11: (ChangeStage, lambda r: ChangeStage(
        r.text(STAGE_CHANGE_NAME_SIZE), r.text(STAGE_ID_SIZE), r.i8(), r.u8())),
    12: (Command, lambda r: Command()),
    13: (UdpInit, lambda r: UdpInit(r.u16())),
    14: (HolePunch, lambda r: HolePunch()),
}


def _encode_payload(data: PacketData) -> bytes:
    match data:
        case Unhandled(data=raw):
            return bytes(raw)
        case Init(max_players=max_players):
            return struct.pack("<H", max_players)
        case Player():
            return (
                data.pos.to_bytes()
                + data.rot.to_bytes()
                + struct.pack("<6fHH", *data.animation_blend_weights, data.act, data.sub_act)
            )
        case Cap():
            return (
                data.pos.to_bytes()
                + data.rot.to_bytes()
                + struct.pack("<B", int(data.cap_out))
                + _sized(data.cap_anim, CAP_ANIM_SIZE)
            )
        case Game():
            return struct.pack("<Bb", int(data.is_2d), data.scenario_num) + _sized(
                data.stage, STAGE_GAME_NAME_SIZE
            )
        case Tag():
            head = (int(data.game_mode) << 4) | int(data.update_type)
            return struct.pack("<BBBH", head, int(data.is_it), data.seconds, data.minutes)
        case GameModeUpdate():
            head = (int(data.game_mode) << 4) | data.update_type
            return struct.pack("<B", head) + bytes(data.data)
        case Connect():
            return struct.pack("<IH", int(data.c_type), data.max_player) + _sized(
                data.client_name, CLIENT_NAME_SIZE
            )
        case CostumeData(costume=costume):
            return _sized(costume.body_name, COSTUME_NAME_SIZE) + _sized(
                costume.cap_name, COSTUME_NAME_SIZE
            )
        case Shine():
            return struct.pack("<iB", data.shine_id, 1 if data.is_grand else 0)
        case Capture(model=model):
            return _sized(model, COSTUME_NAME_SIZE)
        case ChangeStage():
            return (
                _sized(data.stage, STAGE_CHANGE_NAME_SIZE)
                + _sized(data.id, STAGE_ID_SIZE)
                + struct.pack("<bB", data.scenario, data.sub_scenario)
            )
        case UdpInit(port=port):
            return struct.pack("<H", port)
    # Disconnect, Command, HolePunch and JsonApi carry no payload.
    return b""


@dataclass
class Packet:
    """One frame: the sender's id, the declared payload size and the payload."""

    id: bytes
    data_size: int
    data: PacketData

    @classmethod
    def create(cls, id: bytes, data: PacketData) -> "Packet":
        """Build a packet whose declared size matches its payload."""
        size = payload_size(data)
        if size > 0xFFFF:
            raise EncodingError("Extremely large data size")
        return cls(bytes(id), size, data)

    def resize(self) -> None:
        """Set the declared size from the current payload."""
        self.data_size = payload_size(self.data) & 0xFFFF

    @classmethod
    def decode(cls, data: bytes) -> "Packet":
        """Decode the frame at the start of ``data``; trailing bytes are ignored."""
        data = bytes(data)
        if len(data) < HEADER_SIZE:
            raise NotEnoughDataError()
        guid, p_type, p_size = _HEADER.unpack_from(data)

        if p_type == JSON_API_TYPE:
            text = "".join(
                _utf8(part)
                for part in (data[:ID_SIZE], data[ID_SIZE:ID_SIZE + 2],
                             data[ID_SIZE + 2:HEADER_SIZE], data[HEADER_SIZE:])
            )
            return cls(guid, len(data) & 0xFFFF, JsonApi(text))

        if len(data) - HEADER_SIZE < p_size:
            raise NotEnoughDataError()
        reader = _Reader(data[HEADER_SIZE:HEADER_SIZE + p_size])

        if p_type == 5:
            body: PacketData = _decode_tag(reader, p_size)
        elif p_type in _DECODERS:
            kind, decoder = _DECODERS[p_type]
            if p_size < _FIXED_SIZES[kind]:
                raise EncodingError(f"Declared size too small for a {_TYPE_NAMES[kind]} packet")
            body = decoder(reader)
        else:
            body = Unhandled(p_type, reader.take(p_size))
        return cls(guid, p_size, body)

    def encode(self) -> bytes:
        """The frame as bytes: header followed by the payload."""
        if len(self.id) != ID_SIZE:
            raise EncodingError("A packet id is 16 bytes long")
        try:
            header = _HEADER.pack(self.id, type_id(self.data), self.data_size)
            return header + _encode_payload(self.data)
        except struct.error as exc:
            raise EncodingError(str(exc)) from exc