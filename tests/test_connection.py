import asyncio

import pytest

from smoserve.connection import Connection
from smoserve.errors import ConnectionClosedError, ConnectionResetError_
from smoserve.packet import Game, Init, JsonApi, Packet, Shine

GUID = bytes(range(16))


class FakeWriter:
    def __init__(self):
        self.data = bytearray()
        self.drained = 0

    def write(self, chunk):
        self.data.extend(chunk)

    async def drain(self):
        self.drained += 1

    def get_extra_info(self, name):
        return ("127.0.0.1", 5000) if name == "peername" else None


def make_connection():
    return Connection(asyncio.StreamReader(), FakeWriter())


@pytest.mark.asyncio
async def test_addr_comes_from_peer():
    conn = make_connection()
    assert conn.addr == ("127.0.0.1", 5000)


@pytest.mark.asyncio
async def test_parse_packet_incomplete_returns_none():
    conn = make_connection()
    frame = Packet.create(GUID, Init(8)).encode()
    conn.buff.extend(frame[:-1])
    assert conn.parse_packet() is None
    assert conn.buff == bytearray(frame[:-1])


@pytest.mark.asyncio
async def test_read_packet_round_trip():
    conn = make_connection()
    packet = Packet.create(GUID, Game(True, 3, "CapWorldHomeStage"))
    conn.reader.feed_data(packet.encode())
    assert await conn.read_packet() == packet
    assert conn.buff == bytearray()


@pytest.mark.asyncio
async def test_two_packets_in_one_chunk():
    conn = make_connection()
    first = Packet.create(GUID, Init(8))
    second = Packet.create(GUID, Shine(42, True))
    conn.reader.feed_data(first.encode() + second.encode())
    assert await conn.read_packet() == first
    assert await conn.read_packet() == second


@pytest.mark.asyncio
async def test_packet_split_over_reads():
    conn = make_connection()
    packet = Packet.create(GUID, Shine(7, False))
    frame = packet.encode()
    conn.reader.feed_data(frame[:10])
    await conn.read_socket()
    assert conn.parse_packet() is None
    conn.reader.feed_data(frame[10:])
    assert await conn.read_packet() == packet


@pytest.mark.asyncio
async def test_eof_between_frames_is_close():
    conn = make_connection()
    conn.reader.feed_eof()
    with pytest.raises(ConnectionClosedError):
        await conn.read_packet()


@pytest.mark.asyncio
async def test_eof_inside_frame_is_reset():
    conn = make_connection()
    conn.reader.feed_data(Packet.create(GUID, Init(8)).encode()[:5])
    conn.reader.feed_eof()
    with pytest.raises(ConnectionResetError_):
        await conn.read_packet()


@pytest.mark.asyncio
async def test_json_api_request_on_game_port():
    conn = make_connection()
    text = "x" * 16 + "ST" + '{"Type":"Status"}'
    conn.reader.feed_data(text.encode())
    packet = await conn.read_packet()
    assert packet.data == JsonApi(text)


@pytest.mark.asyncio
async def test_write_packet_sends_encoded_frame():
    conn = make_connection()
    packet = Packet.create(GUID, Init(8))
    await conn.write_packet(packet)
    assert bytes(conn.writer.data) == packet.encode()
    assert conn.writer.drained == 1