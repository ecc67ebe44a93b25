"""
Stream client. Connects to a TCP server, echoes console lines to it, and prints its replies
"""

import socket
from typing import Optional

from duplex_clients.duplex import ClientClosed, DuplexClient


class TCPClient(DuplexClient):
    """Connection oriented client, 127.0.0.1:8888 unless told otherwise"""

    transport = 'TCP'
    default_port = 8888
    buffer_size = 1024

    def open(self) -> None:
        # Create client socket, using IPv4 and TCP socket type
        sock = socket.socket(family=socket.AF_INET, type=socket.SOCK_STREAM)
        try:
            sock.connect(self.address)
        except OSError:
            sock.close()
            raise
        self.sock = sock

    def send(self, data: bytes) -> None:
        if self.sock is None or self.closing.is_set():
            raise ClientClosed(f"{self.transport} client is closed")
        self.sock.sendall(data)

    def receive(self) -> Optional[bytes]:
        # Blocking, woken by shutdown in stop()
        data = self.sock.recv(self.buffer_size)
        if not data:
            # Zero bytes, remote end closed the stream
            return None
        return data
