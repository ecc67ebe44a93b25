"""
Raw socket example clients. Pick a transport, type lines to send them, read what comes back

Usage: duplex-client [-h] [-v] tcp|udp
"""

import sys
import getopt
from textwrap import dedent
from typing import Dict, List, Optional, Type

from duplex_clients.duplex import DuplexClient
from duplex_clients.tcp_client import TCPClient
from duplex_clients.udp_client import UDPClient


CLIENTS: Dict[str, Type[DuplexClient]] = {
    'tcp': TCPClient,
    'udp': UDPClient,
}
"""Client type selector -> client class"""


def usage():
    """Default usage screen"""
    print(dedent("""
    Raw socket example clients

    Usage: duplex-client [-h] [-v] tcp|udp

    -h --help                 - Show this help page
    -v --verbose              - Increased Verbosity

    tcp                       - Stream client, connects to 127.0.0.1:8888
    udp                       - Datagram client, sends to 127.0.0.1:8889

    Type a line to send it. Type 'exit' (or end input) to quit.
    """))


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parse arguments, start the selected client

    Args:
        argv: Arguments without the program name. Defaults to sys.argv[1:]
    Returns:
        Exit status. Usage problems are not treated as failures
    """
    if argv is None:
        argv = sys.argv[1:]

    verbose = False
    try:
        opts, args = getopt.getopt(argv, "hv", ['help', 'verbose'])
    except getopt.GetoptError as err:
        print(err)
        usage()
        return 0

    for opt, arg in opts:
        if opt in ('-h', '--help'):
            usage()
            return 0

        elif opt in ('-v', '--verbose'):
            verbose = True

    if not args:
        print("Please specify a client type (tcp or udp)")
        return 0

    if len(args) > 1:
        print(f"Expected one client type, got {len(args)}: {' '.join(args)}")
        usage()
        return 0

    client_class = CLIENTS.get(args[0].lower())
    if client_class is None:
        print(f"Invalid client type specified: {args[0]}")
        return 0

    client = client_class(verbose=verbose)
    try:
        client.start()
    except OSError as err:
        print(f"Error connecting to {client.transport} server: {err}")
        return 1

    return 0


def run():
    sys.exit(main())
