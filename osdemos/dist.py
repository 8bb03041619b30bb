"""A UDP client and server that exchange one greeting each."""

import sys

from osdemos.udp import udp_close, udp_fill_sock_addr, udp_open, udp_read, udp_write

BUFFER_SIZE = 1000
SERVER_PORT = 10000
CLIENT_PORT = 20000


def pad_message(text, size=BUFFER_SIZE):
    """Encode ``text`` as a NUL-terminated message filling exactly ``size`` bytes."""
    data = text.encode()
    if len(data) >= size:
        raise ValueError(f"message of {len(data)} bytes does not fit in {size} bytes")
    return data + b"\0" * (size - len(data))


def decode_message(data):
    """Return the text of a message, up to its first NUL byte."""
    return data.split(b"\0", 1)[0].decode(errors="replace")


def serve_once(sock):
    """Wait for one message, answer it, and return the text that arrived."""
    print("server:: waiting...", flush=True)
    data, addr = udp_read(sock, BUFFER_SIZE)
    text = decode_message(data)
    print(f"server:: read message [size:{len(data)} contents:({text})]", flush=True)
    if data:
        udp_write(sock, addr, pad_message("goodbye world"))
        print("server:: reply", flush=True)
    return text


def run_client(host="localhost", server_port=SERVER_PORT, client_port=CLIENT_PORT):
    """Send a greeting to the server and return the text of its reply."""
    sock = udp_open(client_port)
    try:
        addr = udp_fill_sock_addr(host, server_port)
        message = "hello world"
        print(f"client:: send message [{message}]", flush=True)
        try:
            udp_write(sock, addr, pad_message(message))
        except OSError:
            print("client:: failed to send", flush=True)
            raise
        print("client:: wait for reply...", flush=True)
        data, _ = udp_read(sock, BUFFER_SIZE)
        reply = decode_message(data)
        print(f"client:: got reply [size:{len(data)} contents:({reply})", flush=True)
        return reply
    finally:
        udp_close(sock)


def client_main(argv=None):
    """Command-line entry point of the client."""
    try:
        run_client("localhost", SERVER_PORT, CLIENT_PORT)
    except OSError:
        return 1
    return 0


def server_main(argv=None):
    """Command-line entry point of the server; answers messages forever."""
    sock = udp_open(SERVER_PORT)
    try:
        while True:
            serve_once(sock)
    finally:
        udp_close(sock)


if __name__ == "__main__":
    sys.exit(client_main())