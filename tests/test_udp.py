import socket

import pytest

from osdemos.udp import udp_close, udp_fill_sock_addr, udp_open, udp_read, udp_write


@pytest.fixture
def pair():
    server = udp_open(0)
    client = udp_open(0)
    server.settimeout(5)
    client.settimeout(5)
    yield server, client
    udp_close(server)
    udp_close(client)


def test_fill_sock_addr_localhost():
    host, port = udp_fill_sock_addr("localhost", 10000)
    assert port == 10000
    assert host.startswith("127.")


def test_fill_sock_addr_without_host_is_zero():
    assert udp_fill_sock_addr(None, 10000) == ("0.0.0.0", 0)


def test_fill_sock_addr_unknown_host():
    with pytest.raises(OSError):
        udp_fill_sock_addr("no-such-host.invalid", 10000)


def test_round_trip(pair):
    server, client = pair
    server_port = server.getsockname()[1]
    addr = udp_fill_sock_addr("127.0.0.1", server_port)
    message = b"hello world".ljust(1000, b"\0")
    assert udp_write(client, addr, message) == len(message)
    data, sender = udp_read(server, 1000)
    assert data == message
    assert sender[1] == client.getsockname()[1]


def test_reply_reaches_sender(pair):
    server, client = pair
    udp_write(client, ("127.0.0.1", server.getsockname()[1]), b"ping")
    _, sender = udp_read(server, 1000)
    udp_write(server, sender, b"goodbye world")
    data, _ = udp_read(client, 1000)
    assert data == b"goodbye world"


def test_read_truncates_to_n(pair):
    server, client = pair
    udp_write(client, ("127.0.0.1", server.getsockname()[1]), b"abcdef")
    data, _ = udp_read(server, 3)
    assert data == b"abc"


def test_open_bound_port_fails():
    first = udp_open(0)
    try:
        with pytest.raises(OSError):
            udp_open(first.getsockname()[1])
    finally:
        udp_close(first)


def test_open_returns_udp_socket():
    sock = udp_open(0)
    try:
        assert sock.type == socket.SOCK_DGRAM
        assert sock.getsockname()[1] > 0
    finally:
        udp_close(sock)


def test_close_releases_socket():
    sock = udp_open(0)
    udp_close(sock)
    assert sock.fileno() == -1