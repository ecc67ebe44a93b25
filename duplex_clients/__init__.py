"""
Raw TCP and UDP example clients, sharing one concurrent send/receive loop
"""

from duplex_clients.duplex import ClientClosed, DuplexClient
from duplex_clients.tcp_client import TCPClient
from duplex_clients.udp_client import UDPClient

__version__ = '0.1.0'

__all__ = ['ClientClosed', 'DuplexClient', 'TCPClient', 'UDPClient']
