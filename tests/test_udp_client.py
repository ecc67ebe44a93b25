import socket

import pytest

from duplex_clients.udp_client import UDPClient


@pytest.fixture
def server():
    srv = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    srv.bind(('127.0.0.1', 0))
    srv.settimeout(5)
    yield srv
    srv.close()


@pytest.fixture
def client(server, input_stream):
    return UDPClient(port=server.getsockname()[1], input_stream=input_stream, poll_interval=0.1)


def test_defaults():
    client = UDPClient()
    assert client.address == ('127.0.0.1', 8889)


def test_line_sent_as_single_datagram(client, server, input_stream, run_client, console):
    thread = run_client(client)

    input_stream.put('ping\n')
    data, addr = server.recvfrom(65535)
    assert data == b'ping'
    console.wait_for('Sent: ping')

    input_stream.put('exit\n')
    thread.join(timeout=5)
    assert not thread.is_alive()

    # exit never goes on the wire
    server.settimeout(0.2)
    with pytest.raises(socket.timeout):
        server.recvfrom(65535)
    assert console.lines().count('Sent: ping') == 1


def test_replies_are_printed(client, server, input_stream, run_client, console):
    thread = run_client(client)

    input_stream.put('ping\n')
    _, addr = server.recvfrom(65535)
    server.sendto(b'pong', addr)
    console.wait_for('Received: pong')

    input_stream.put(None)
    thread.join(timeout=5)
    assert not thread.is_alive()


def test_datagrams_from_any_sender(client, input_stream, run_client, console):
    thread = run_client(client)
    console.wait_for('Enter messages to send')

    stranger = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        stranger.sendto(b'from elsewhere', ('127.0.0.1', client.sock.getsockname()[1]))
        console.wait_for('Received: from elsewhere')
    finally:
        stranger.close()

    input_stream.put(None)
    thread.join(timeout=5)


def test_receive_thread_joined_on_exit(client, input_stream, run_client, console):
    thread = run_client(client)
    console.wait_for('Enter messages to send')
    receive_thread = client.receive_thread

    input_stream.put('EXIT\n')
    thread.join(timeout=5)

    assert not thread.is_alive()
    assert not receive_thread.is_alive()
    assert client.sock is None
    assert 'Error receiving messages' not in console.read()


def test_bad_target_is_fatal():
    client = UDPClient(target='no-such-host.invalid')
    with pytest.raises(OSError):
        client.start()
    assert client.sock is None


def test_empty_line_sent_as_empty_datagram(client, server, input_stream, run_client, console):
    thread = run_client(client)

    input_stream.put('\n')
    data, _ = server.recvfrom(65535)
    assert data == b''
    console.wait_for('Sent: \n')

    input_stream.put(None)
    thread.join(timeout=5)
    assert 'Sent: ' in console.lines()


def test_destination_recorded_on_open(client, server):
    client.open()
    try:
        assert client.destination == ('127.0.0.1', server.getsockname()[1])
    finally:
        client.close()
