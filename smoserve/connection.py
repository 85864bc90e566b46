"""A framed packet connection over an asyncio TCP stream."""

from __future__ import annotations

import asyncio
from typing import Any

from .errors import ConnectionClosedError, ConnectionResetError_, NotEnoughDataError
from .packet import Packet, check_frame

_READ_SIZE = 4096


class Connection:
    """Reads and writes whole packets on a TCP stream."""

    def __init__(self, reader: asyncio.StreamReader, writer: Any) -> None:
        self.reader = reader
        self.writer = writer
        self.addr = writer.get_extra_info("peername")
        self.buff = bytearray()

    def parse_packet(self) -> Packet | None:
        """Take one packet from the buffer, or None if it is not complete yet."""
        try:
            length = check_frame(self.buff)
        except NotEnoughDataError:
            return None
        packet = Packet.decode(self.buff)
        del self.buff[:length]
        return packet

    async def read_socket(self) -> None:
        """Append the next chunk of the stream to the buffer.

        Raises ConnectionClosedError when the peer closed between frames and
        ConnectionResetError_ when it closed in the middle of one.
        """
        chunk = await self.reader.read(_READ_SIZE)
        if not chunk:
            if not self.buff:
                raise ConnectionClosedError()
            raise ConnectionResetError_()
        self.buff.extend(chunk)

    async def read_packet(self) -> Packet:
        """Wait for and return the next complete packet."""
        while True:
            packet = self.parse_packet()
            if packet is not None:
                return packet
            await self.read_socket()

    async def write_packet(self, packet: Packet) -> None:
        """Send one packet and flush it."""
        self.writer.write(packet.encode())
        await self.writer.drain()