"""Server settings and their JSON file."""

from __future__ import annotations

import copy
import enum
import ipaddress
import json
import logging
from dataclasses import dataclass, field, fields
from typing import Any, Callable, NamedTuple

from .errors import InvalidConsoleArgError, SMOError

_log = logging.getLogger(__name__)

DEFAULT_PATH = "./settings.json"

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


class FlipPov(enum.Enum):
    """Whose view is flipped for flipped players."""

    BOTH = "Both"
    PLAYER = "Player"
    OTHERS = "Others"

    @classmethod
    def parse(cls, text: str) -> "FlipPov":
        """Parse the console spelling: both, self or players, others."""
        if text == "both":
            return cls.BOTH
        if text in ("self", "players"):
            return cls.PLAYER
        if text == "others":
            return cls.OTHERS
        raise InvalidConsoleArgError("Invalid Flip POV Settings")

    def is_self_flip(self) -> bool:
        return self in (FlipPov.BOTH, FlipPov.PLAYER)

    def is_others_flip(self) -> bool:
        return self in (FlipPov.BOTH, FlipPov.OTHERS)

    def __str__(self) -> str:
        return {FlipPov.BOTH: "both", FlipPov.PLAYER: "self", FlipPov.OTHERS: "others"}[self]


class _Codec(NamedTuple):
    encode: Callable[[Any], Any]
    decode: Callable[[Any], Any]


def _invalid(what: str, value: Any) -> SMOError:
    return SMOError(f"Invalid settings value for {what}: {value!r}")


def _decode_bool(value: Any) -> bool:
    if not isinstance(value, bool):
        raise _invalid("boolean", value)
    return value


def _decode_str(value: Any) -> str:
    if not isinstance(value, str):
        raise _invalid("string", value)
    return value


def _decode_opt_str(value: Any) -> str | None:
    return None if value is None else _decode_str(value)


def _int_decoder(low: int, high: int) -> Callable[[Any], int]:
    def decode(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
            raise _invalid(f"integer in {low}..{high}", value)
        return value

    return decode


def _decode_ip(value: Any) -> IPAddress:
    try:
        return ipaddress.ip_address(_decode_str(value))
    except ValueError as exc:
        raise _invalid("IP address", value) from exc


def _identity(value: Any) -> Any:
    return value


def _set_codec(item: Callable[[Any], Any], encode_item: Callable[[Any], Any] = _identity,
               key: Callable[[Any], Any] | None = None) -> _Codec:
    def encode(values: set) -> list:
        return [encode_item(v) for v in sorted(values, key=key)]

    def decode(value: Any) -> set:
        if not isinstance(value, list):
            raise _invalid("list", value)
        return {item(v) for v in value}

    return _Codec(encode, decode)


def _decode_tokens(value: Any) -> dict[str, set[str]]:
    if not isinstance(value, dict):
        raise _invalid("token table", value)
    return {_decode_str(k): _STR_SET.decode(v) for k, v in value.items()}


def _encode_tokens(tokens: dict[str, set[str]]) -> dict[str, list[str]]:
    return {name: _STR_SET.encode(perms) for name, perms in sorted(tokens.items())}


def _decode_pov(value: Any) -> FlipPov:
    try:
        return FlipPov(value)
    except ValueError as exc:
        raise _invalid("flip pov", value) from exc


_BOOL = _Codec(_identity, _decode_bool)
_STR = _Codec(_identity, _decode_str)
_OPT_STR = _Codec(_identity, _decode_opt_str)
_U16 = _Codec(_identity, _int_decoder(0, 0xFFFF))
_STR_SET = _set_codec(_decode_str)
_IP = _Codec(str, _decode_ip)
_IP_SET = _set_codec(_decode_ip, str, key=lambda ip: (ip.version, ip))
_I8_SET = _set_codec(_int_decoder(-128, 127))
_I32_SET = _set_codec(_int_decoder(-(2**31), 2**31 - 1))
_TOKENS = _Codec(_encode_tokens, _decode_tokens)
_POV = _Codec(lambda pov: pov.value, _decode_pov)


def _pascal(name: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in name.split("_"))


def _with(codec: _Codec, **kwargs: Any) -> Any:
    return field(metadata={"codec": codec}, **kwargs)


class _Record:
    """Mixin that maps dataclass fields to PascalCase JSON keys."""

    def to_json_dict(self) -> dict[str, Any]:
        """The settings as a JSON-ready dictionary."""
        return {
            _pascal(f.name): f.metadata["codec"].encode(getattr(self, f.name))
            for f in fields(self)  # type: ignore[arg-type]
        }

    @classmethod
    def from_json_dict(cls, data: Any):
        """Build from a JSON dictionary; every field must be present."""
        if not isinstance(data, dict):
            raise _invalid(cls.__name__, data)
        values = {}
        for f in fields(cls):  # type: ignore[arg-type]
            key = _pascal(f.name)
            if key not in data:
                raise SMOError(f"Missing settings field {key!r} in {cls.__name__}")
            values[f.name] = f.metadata["codec"].decode(data[key])
        return cls(**values)


def _record(kind: type) -> _Codec:
    return _Codec(lambda value: value.to_json_dict(), kind.from_json_dict)


@dataclass
class ServerSettings(_Record):
    address: IPAddress = _with(_IP, default=ipaddress.ip_address("0.0.0.0"))
    port: int = _with(_U16, default=1027)
    max_players: int = _with(_U16, default=8)


@dataclass
class FlipSettings(_Record):
    enabled: bool = _with(_BOOL, default=False)
    players: set[str] = _with(_STR_SET, default_factory=set)
    pov: FlipPov = _with(_POV, default=FlipPov.BOTH)


@dataclass
class ScenarioSettings(_Record):
    merge_enabled: bool = _with(_BOOL, default=False)


@dataclass
class BanListSettings(_Record):
    enabled: bool = _with(_BOOL, default=False)
    players: set[str] = _with(_STR_SET, default_factory=set)
    ip_addresses: set[IPAddress] = _with(_IP_SET, default_factory=set)
    stages: set[str] = _with(_STR_SET, default_factory=set)
    game_modes: set[int] = _with(_I8_SET, default_factory=set)


@dataclass
class DiscordSettings(_Record):
    token: str | None = _with(_OPT_STR, default=None)
    prefix: str = _with(_STR, default="$")
    log_channel: str | None = _with(_OPT_STR, default=None)


@dataclass
class ShineTable(_Record):
    enabled: bool = _with(_BOOL, default=True)
    excluded: set[int] = _with(_I32_SET, default_factory=lambda: {496})
    clear_on_new_saves: bool = _with(_BOOL, default=False)


@dataclass
class PersistShine(_Record):
    enabled: bool = _with(_BOOL, default=False)
    filename: str = _with(_STR, default="./moons.json")


@dataclass
class Udp(_Record):
    initiate_handshake: bool = _with(_BOOL, default=False)
    base_port: int = _with(_U16, default=0)
    port_count: int = _with(_U16, default=1)


@dataclass
class JsonApiSettings(_Record):
    enabled: bool = _with(_BOOL, default=False)
    port: int = _with(_U16, default=1027)
    tokens: dict[str, set[str]] = _with(_TOKENS, default_factory=dict)


@dataclass
class Settings(_Record):
    """Everything the server is configured with."""

    server: ServerSettings = _with(_record(ServerSettings), default_factory=ServerSettings)
    flip: FlipSettings = _with(_record(FlipSettings), default_factory=FlipSettings)
    scenario: ScenarioSettings = _with(_record(ScenarioSettings), default_factory=ScenarioSettings)
    ban_list: BanListSettings = _with(_record(BanListSettings), default_factory=BanListSettings)
    discord: DiscordSettings = _with(_record(DiscordSettings), default_factory=DiscordSettings)
    shines: ShineTable = _with(_record(ShineTable), default_factory=ShineTable)
    persist_shines: PersistShine = _with(_record(PersistShine), default_factory=PersistShine)
    udp: Udp = _with(_record(Udp), default_factory=Udp)
    json_api: JsonApiSettings = _with(_record(JsonApiSettings), default_factory=JsonApiSettings)

    def to_json_dict(self) -> dict[str, Any]:
        """The whole settings object as a JSON-ready dictionary."""
        return super().to_json_dict()

    @classmethod
    def from_json_dict(cls, data: Any) -> "Settings":
        """Build settings from a JSON dictionary; every section must be present."""
        return super().from_json_dict(data)

    def copy(self) -> "Settings":
        return copy.deepcopy(self)


def load_settings(path: str = DEFAULT_PATH) -> Settings:
    """Read settings from a JSON file; OSError if it cannot be opened."""
    with open(path, encoding="utf-8") as handle:
        try:
            data = json.load(handle)
        except json.JSONDecodeError as exc:
            raise SMOError(f"Invalid settings file: {exc}") from exc
    _log.debug("Loading settings")
    return Settings.from_json_dict(data)


def save_settings(settings: Settings, path: str = DEFAULT_PATH) -> None:
    """Write settings to a JSON file, pretty printed."""
    _log.debug("Saving settings")
    with open(path, "w", encoding="utf-8") as handle:
        json.dump(settings.to_json_dict(), handle, indent=2)