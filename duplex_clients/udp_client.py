"""
Datagram client. Sends each console line as one UDP datagram to a fixed destination, and prints
datagrams arriving from any sender
"""

import socket
from typing import Optional, Tuple

from duplex_clients.duplex import ClientClosed, DuplexClient


class UDPClient(DuplexClient):
    """Connectionless client, 127.0.0.1:8889 unless told otherwise"""

    transport = 'UDP'
    default_port = 8889
    buffer_size = 65535
    """Large enough for any single datagram"""
    destination: Optional[Tuple[str, int]] = None
    """Resolved remote sockaddr, recorded on open and used for every send"""

    def open(self) -> None:
        # Create client socket, using IPv4 and UDP socket type
        sock = socket.socket(family=socket.AF_INET, type=socket.SOCK_DGRAM)
        try:
            # Bind an ephemeral local port so replies can arrive before the first send
            sock.bind(('', 0))
            # Resolve the destination now, so a bad target fails on open rather than on send
            resolved = socket.getaddrinfo(self.target, self.port, socket.AF_INET, socket.SOCK_DGRAM)
        except OSError:
            sock.close()
            raise
        # Receive poll. Shutdown does not reliably wake recvfrom on an unconnected socket
        sock.settimeout(self.poll_interval)
        self.destination = resolved[0][4]
        self.sock = sock

    def send(self, data: bytes) -> None:
        if self.sock is None or self.closing.is_set():
            raise ClientClosed(f"{self.transport} client is closed")
        self.sock.sendto(data, self.destination)

    def receive(self) -> Optional[bytes]:
        data, addr = self.sock.recvfrom(self.buffer_size)
        self.verprint(f"[<--] {len(data)} bytes from {addr}")
        return data
