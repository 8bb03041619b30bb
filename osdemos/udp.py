"""Thin helpers for sending and receiving UDP datagrams."""

import socket

_ZERO_ADDR = ("0.0.0.0", 0)


def udp_open(port):
    """Create a UDP socket bound to ``port`` on all local interfaces."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        sock.bind(("", port))
    except OSError:
        sock.close()
        raise
    return sock


def udp_fill_sock_addr(hostname, port):
    """Resolve ``hostname`` to an IPv4 (address, port) pair.

    With no hostname, return the all-zero address.
    """
    if hostname is None:
        return _ZERO_ADDR
    return (socket.gethostbyname(hostname), port)


def udp_write(sock, addr, buffer):
    """Send ``buffer`` to ``addr``; return the number of bytes sent."""
    return sock.sendto(buffer, addr)


def udp_read(sock, n):
    """Receive up to ``n`` bytes; return (data, sender address)."""
    return sock.recvfrom(n)


def udp_close(sock):
    """Close the socket."""
    sock.close()