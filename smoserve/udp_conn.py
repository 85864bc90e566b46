"""A packet connection over UDP, bound to one client's address."""

from __future__ import annotations

import asyncio
import socket

from .errors import NotEnoughDataError, UdpNotInitializedError
from .packet import Packet, check_frame

_DATAGRAM_SIZE = 100


class UdpConnection:
    """Exchanges packets with one client over a UDP socket.

    Until the client's port is known the connection is pending: reads never
    complete and writes fail.
    """

    def __init__(self, sock: socket.socket, ip: str) -> None:
        sock.setblocking(False)
        self.sock = sock
        self.ip = ip
        self.send_addr: tuple[str, int] | None = None
        self.buff = bytearray()
        self.has_recv_data = False

    @classmethod
    def from_connection(cls, sock: socket.socket, addr: tuple[str, int]) -> "UdpConnection":
        """A connection whose client address is already known."""
        conn = cls(sock, addr[0])
        conn.send_addr = (addr[0], addr[1])
        return conn

    def parse_packet(self) -> Packet | None:
        """Take one packet from the buffer, or None if it is not complete yet."""
        try:
            length = check_frame(self.buff)
        except NotEnoughDataError:
            return None
        packet = Packet.decode(self.buff)
        del self.buff[:length]
        return packet

    def is_client_udp(self) -> bool:
        """Whether the client's address is known and data came from it."""
        return self.send_addr is not None and self.has_recv_data

    def set_client_port(self, port: int) -> None:
        """Fix the client's UDP port, keeping its IP address."""
        ip = self.send_addr[0] if self.send_addr is not None else self.ip
        self.send_addr = (ip, port)

    async def read_socket(self) -> None:
        """Receive one datagram; only data from the client's address is kept."""
        if self.send_addr is None:
            await asyncio.Event().wait()
            return
        loop = asyncio.get_running_loop()
        data, addr = await loop.sock_recvfrom(self.sock, _DATAGRAM_SIZE)
        if (addr[0], addr[1]) == self.send_addr:
            self.buff.extend(data)
            self.has_recv_data = True

    async def read_packet(self) -> Packet:
        """Wait for and return the next complete packet from the client."""
        while True:
            packet = self.parse_packet()
            if packet is not None:
                return packet
            await self.read_socket()

    async def write_packet(self, packet: Packet) -> None:
        """Send one packet to the client as a datagram."""
        if self.send_addr is None:
            raise UdpNotInitializedError()
        loop = asyncio.get_running_loop()
        await loop.sock_sendto(self.sock, packet.encode(), self.send_addr)