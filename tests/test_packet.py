import struct

import pytest
from hypothesis import given, strategies as st

from smoserve.errors import EncodingError, NotEnoughDataError
from smoserve.game_mode import GameMode
from smoserve.geometry import Costume, Quaternion, Vector3
from smoserve.packet import (
    Cap,
    Capture,
    ChangeStage,
    Command,
    Connect,
    ConnectionType,
    CostumeData,
    Disconnect,
    Game,
    GameModeUpdate,
    HolePunch,
    Init,
    JsonApi,
    Packet,
    Player,
    Shine,
    Tag,
    TagUpdate,
    UdpInit,
    Unhandled,
    check_frame,
    payload_size,
    type_id,
    type_name,
)

ZERO_ID = bytes(16)

# Payload sizes per packet type, as used by the source's own generator.
_SIZES = {
    1: 2, 2: 0x38, 3: 29 + 0x30, 4: 2 + 0x40, 5: 5, 6: 6 + 0x20, 7: 0,
    8: 0x20 * 2, 9: 5, 10: 0x20, 11: 0x10 + 0x30 + 2, 12: 0, 13: 2,
}


def frame(p_type, payload, size=None, guid=ZERO_ID):
    if size is None:
        size = len(payload)
    return guid + struct.pack("<HH", p_type, size) + payload


@st.composite
def random_frames(draw):
    p_type = draw(st.sampled_from(sorted(_SIZES)))
    size = _SIZES[p_type]
    guid = draw(st.binary(min_size=16, max_size=16))
    raw = draw(st.binary(min_size=size, max_size=size))
    return frame(p_type, bytes(b % 128 for b in raw), size, guid)


@given(random_frames())
def test_round_trip(raw):
    packet = Packet.decode(raw)
    packet.resize()
    assert Packet.decode(packet.encode()) == packet


def test_init_encoding_is_pinned():
    assert Packet.create(ZERO_ID, Init(8)).encode() == ZERO_ID + b"\x01\x00\x02\x00\x08\x00"


def test_shine_encoding_is_pinned():
    guid = b"\x01" * 16
    encoded = Packet.create(guid, Shine(42, True)).encode()
    assert encoded == guid + b"\x09\x00\x05\x00" + b"\x2a\x00\x00\x00\x01"


def test_game_decode_trims_stage():
    payload = b"\x01\xff" + b"CapWorldHomeStage".ljust(0x40, b"\0")
    packet = Packet.decode(frame(4, payload))
    assert packet.data == Game(True, -1, "CapWorldHomeStage")
    assert packet.data_size == 0x42


def test_tag_decode_hide_and_seek():
    packet = Packet.decode(frame(5, bytes([0x12, 1, 30, 2, 0])))
    assert packet.data == Tag(GameMode.HIDE_AND_SEEK, TagUpdate.STATE, True, 30, 2)


def test_legacy_with_both_update_is_tag():
    packet = Packet.decode(frame(5, bytes([0x03, 0, 5, 1, 0])))
    assert packet.data == Tag(GameMode.LEGACY, TagUpdate.BOTH, False, 5, 1)


def test_legacy_other_update_is_game_mode_update():
    packet = Packet.decode(frame(5, b"\x01abcd"))
    assert packet.data == GameModeUpdate(GameMode.LEGACY, 1, b"abcd")


def test_freeze_tag_is_game_mode_update_and_round_trips():
    raw = frame(5, b"\x31xy")
    packet = Packet.decode(raw)
    assert packet.data == GameModeUpdate(GameMode.FREEZE_TAG, 1, b"xy")
    assert packet.encode() == raw


def test_unknown_tag_update_maps_to_unknown():
    packet = Packet.decode(frame(5, bytes([0x27, 0, 0, 0, 0])))
    assert packet.data.update_type is TagUpdate.UNKNOWN


def test_player_round_trip_and_quaternion_order():
    data = Player(Vector3(1.0, 2.0, 3.0), Quaternion(w=1.0, i=0.0, j=0.0, k=0.0),
                  (0.5,) * 6, 7, 9)
    packet = Packet.create(ZERO_ID, data)
    encoded = packet.encode()
    assert len(encoded) == 20 + 0x38
    assert encoded[20 + 12 + 12:20 + 12 + 16] == struct.pack("<f", 1.0)
    assert Packet.decode(encoded) == packet


def test_player_needs_six_weights():
    with pytest.raises(ValueError):
        Player(Vector3(), Quaternion(), (0.0,) * 5, 0, 0)


def test_cap_anim_is_read_untrimmed_from_first_32_bytes():
    payload = bytes(12 + 16) + b"\x01" + b"abc".ljust(0x30, b"\0")
    packet = Packet.decode(frame(3, payload))
    assert packet.data.cap_out is True
    assert packet.data.cap_anim == "abc" + "\0" * 29


def test_connect_and_costume_round_trip():
    for data in (
        Connect(ConnectionType.RECONNECTING, 8, "Luigi"),
        CostumeData(Costume("Mario64", "MarioTail")),
        ChangeStage("SandWorldHomeStage", "start", -1, 2),
        Capture("Frog"),
        UdpInit(51888),
    ):
        packet = Packet.create(ZERO_ID, data)
        assert Packet.decode(packet.encode()) == packet


def test_connect_nonzero_type_is_reconnecting():
    payload = struct.pack("<IH", 7, 4) + b"Peach".ljust(0x20, b"\0")
    assert Packet.decode(frame(6, payload)).data == Connect(
        ConnectionType.RECONNECTING, 4, "Peach")


def test_empty_packets_decode():
    assert Packet.decode(frame(7, b"")).data == Disconnect()
    assert Packet.decode(frame(12, b"")).data == Command()
    assert Packet.decode(frame(14, b"")).data == HolePunch()


def test_unhandled_round_trip():
    raw = frame(99, b"xyz")
    packet = Packet.decode(raw)
    assert packet.data == Unhandled(99, b"xyz")
    assert packet.encode() == raw


def test_padding_is_accepted():
    packet = Packet.decode(frame(1, b"\x05\x00\xaa\xbb"))
    assert packet.data == Init(5)
    assert packet.data_size == 4


def test_json_api_request_is_taken_whole():
    text = '{"API_JSON_REQUEST":{"Type":"Status","Token":"token"}}'
    raw = text.encode()
    assert check_frame(raw) == 18
    packet = Packet.decode(raw)
    assert packet.data == JsonApi(text)
    assert packet.data_size == len(raw)
    assert packet.encode() == raw[:16] + b"ST" + struct.pack("<H", len(raw))


def test_check_frame_complete():
    assert check_frame(frame(1, b"\x01\x00") + b"extra") == 22


def test_check_frame_incomplete():
    with pytest.raises(NotEnoughDataError):
        check_frame(frame(1, b"\x01", size=2))
    with pytest.raises(NotEnoughDataError):
        check_frame(bytes(10))


def test_decode_short_header():
    with pytest.raises(NotEnoughDataError):
        Packet.decode(bytes(19))


def test_decode_short_payload():
    with pytest.raises(NotEnoughDataError):
        Packet.decode(frame(9, b"\x01\x00", size=5))


def test_declared_size_too_small():
    with pytest.raises(EncodingError):
        Packet.decode(frame(1, b"", size=0) + b"\x01\x00")


def test_bad_utf8_raises():
    with pytest.raises(EncodingError):
        Packet.decode(frame(10, b"\xff\xfe".ljust(0x20, b"\0")))


def test_encode_truncates_long_names():
    encoded = Packet.create(ZERO_ID, Capture("x" * 40)).encode()
    assert encoded[20:] == b"x" * 32


def test_encode_rejects_bad_id():
    with pytest.raises(EncodingError):
        Packet(b"short", 2, Init(1)).encode()


def test_create_rejects_huge_payload():
    with pytest.raises(EncodingError):
        Packet.create(ZERO_ID, Unhandled(3, bytes(70000)))


def test_resize_follows_payload():
    packet = Packet.create(ZERO_ID, Init(1))
    packet.data = Unhandled(40, b"abcdef")
    packet.resize()
    assert packet.data_size == 6


@pytest.mark.parametrize(
    ("data", "size"),
    [
        (Init(1), 2),
        (Player(Vector3(), Quaternion(), (0.0,) * 6, 0, 0), 0x38),
        (Cap(Vector3(), Quaternion(), False, ""), 77),
        (Game(False, 0, ""), 66),
        (Connect(ConnectionType.FIRST_CONNECTION, 0, ""), 38),
        (CostumeData(Costume()), 64),
        (ChangeStage("", "", 0, 0), 66),
        (GameModeUpdate(GameMode.FREEZE_TAG, 0, b"abc"), 4),
        (JsonApi("{}"), 2),
    ],
)
def test_payload_sizes(data, size):
    assert payload_size(data) == size


@pytest.mark.parametrize(
    ("data", "number", "name"),
    [
        (Unhandled(77, b""), 77, "unhandled"),
        (Tag(GameMode.SARDINES, TagUpdate.TIME, False, 0, 0), 5, "tag"),
        (GameModeUpdate(GameMode.LEGACY, 0, b""), 5, "gamemode"),
        (ChangeStage("", "", 0, 0), 11, "changeStage"),
        (UdpInit(0), 13, "udpInit"),
        (HolePunch(), 14, "holePunch"),
        (JsonApi(""), 0x5453, "jsonApi"),
    ],
)
def test_type_ids_and_names(data, number, name):
    assert type_id(data) == number
    assert type_name(data) == name