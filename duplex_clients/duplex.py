"""
Line oriented duplex client. One thread reads console lines and sends them to the remote end,
a second thread blocks on the socket and prints whatever arrives.

Transport specifics (open, send, receive, close) are left to subclasses, see TCPClient and
UDPClient
"""

import sys
import socket
import threading
from typing import Optional, TextIO, Tuple

from duplex_clients.helpers import Helpers


class ClientClosed(socket.error):
    """Custom error raised when sending through a client that has already been stopped"""


class DuplexClient:
    """
    Generic line oriented duplex transport client. Subclasses implement open, send, receive
    and close; start runs the send loop in the calling thread and the receive loop beside it
    """

    transport: str = 'duplex'
    """Transport name used in console output"""
    default_port: int = 0
    """Remote port used when none is given"""
    buffer_size: int = 1024
    """Max bytes read per receive call"""

    def __init__(self, *,
                 target: str = '127.0.0.1', port: Optional[int] = None,
                 exit_command: str = 'exit', input_stream: Optional[TextIO] = None,
                 poll_interval: float = 0.5, verbose: bool = False):
        """
        Args:
            target: Remote host IP
            port: Remote port, defaults to the transport's default_port
            exit_command: Console line (any case) that ends the send loop without being sent
            input_stream: Where lines are read from. Defaults to sys.stdin
            poll_interval: Receive timeout, in seconds, for transports whose shutdown may not wake
                a blocked receive
            verbose: Enable on screen verbosity
        """

        self.target = target
        """Remote host IP"""
        self.port = self.default_port if port is None else port
        """Remote port"""
        self.exit_command = exit_command.lower()
        """Command to stop sending and close the session"""
        self.input_stream = input_stream
        """Console lines source. None reads sys.stdin once the send loop starts"""
        self.poll_interval = poll_interval
        """Receive timeout, so the receive loop notices shutdown"""
        self.verbose = verbose
        """Enable on screen verbosity"""

        self.sock: Optional[socket.socket] = None
        """Session socket, owned by this client alone"""
        self.receive_thread: Optional[threading.Thread] = None
        """Background receive task"""
        self.closing = threading.Event()
        """Set once shutdown begins. Checked by the receive loop after each blocking call"""

    @property
    def address(self) -> Tuple[str, int]:
        """Remote (host, port) pair"""
        return self.target, self.port

    # # # Transport functions, provided by subclasses

    def open(self) -> None:
        """Create the socket and establish the session. Errors are left to propagate"""
        raise NotImplementedError

    def send(self, data: bytes) -> None:
        """Transmit one message in full"""
        raise NotImplementedError

    def receive(self) -> Optional[bytes]:
        """
        Block for inbound data

        Returns:
            Received bytes, or None once the remote end has closed the session
        """
        raise NotImplementedError

    def close(self) -> None:
        """Release the socket. Safe to call more than once"""
        if self.sock is not None:
            self.sock.close()
            self.sock = None

    # # # Shared functions

    def start(self) -> None:
        """
        Open the session, spool the receive thread, and run the send loop until the user exits.
        Always waits for the receive thread before returning
        """
        self.open()
        self.verprint(f"[*] {self.transport} session open to {self.target}:{self.port}")

        self.receive_thread = threading.Thread(target=self.receive_loop,
                                               name=f"{self.transport}-receive", daemon=True)
        self.receive_thread.start()

        print(f"Enter messages to send (type '{self.exit_command}' to quit):", flush=True)
        try:
            self.send_loop()
        except KeyboardInterrupt:
            print("\nReceived stop signal, exiting.", flush=True)
        finally:
            self.stop()

    def stop(self) -> None:
        """
        Signal the receive thread, wake it by shutting the socket down, wait for it, then close
        """
        self.closing.set()
        if self.sock is not None:
            try:
                self.sock.shutdown(socket.SHUT_RDWR)
            except OSError:
                # Not connected, or already torn down by the peer
                pass

        if self.receive_thread is not None and self.receive_thread is not threading.current_thread():
            self.receive_thread.join()

        self.close()
        self.verprint(f"[*] Exiting {self.transport} client")

    def console_input(self) -> TextIO:
        """
        Stream console lines are read from. Falls back to sys.stdin, switched to UTF-8 with
        replacement characters so undecodable input is sent rather than raised

        Returns:
            The input stream
        """
        if self.input_stream is None:
            stream = sys.stdin
            if hasattr(stream, 'reconfigure'):
                stream.reconfigure(encoding='utf-8', errors='replace')
            self.input_stream = stream
        return self.input_stream

    def read_line(self) -> Optional[str]:
        """
        Read one console line

        Returns:
            The line without its line ending, or None at end of input
        """
        line = self.console_input().readline()
        if not line:
            return None
        return line.rstrip('\r\n')

    def send_loop(self) -> None:
        """
        Read console lines and send each one. Broken by end of input, the exit command, or a
        failed send
        """
        while True:
            message = self.read_line()
            if message is None:
                break

            if message.lower() == self.exit_command:
                break

            try:
                self.send(Helpers.bin_encode(message))
            except OSError as err:
                print(f"Error sending message: {err}", flush=True)
                break

            print(f"Sent: {message}", flush=True)

    def receive_loop(self) -> None:
        """
        Print everything the remote end sends. Broken by orderly remote closure, a receive error,
        or shutdown
        """
        try:
            while not self.closing.is_set():
                try:
                    data = self.receive()
                except socket.timeout:
                    continue

                if data is None:
                    if not self.closing.is_set():
                        self.verprint(f"[*] {self.transport} server disconnected")
                    break

                if self.closing.is_set():
                    break

                print(f"Received: {Helpers.bin_text(data)}", flush=True)

        except OSError as err:
            if not self.closing.is_set():
                print(f"Error receiving messages: {err}", flush=True)

    def verprint(self, *to_print) -> None:
        """
        Default check against verbosity attribute, to see if allowed to print

        Args:
            *to_print: emulation of print *args. pass as normal
        """
        if self.verbose:
            print(*to_print, flush=True)
