import errno
import socket

import pytest

from modelhttp.sockets import ServerSocket, Socket, SocketError


def _free_port():
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


def test_send_and_recv_round_trip():
    a, b = socket.socketpair()
    with Socket(a) as left, Socket(b) as right:
        assert left.send(b"hello") == len(b"hello")
        assert right.recv(1024) == b"hello"


def test_closed_socket_refuses_use():
    a, b = socket.socketpair()
    b.close()
    sock = Socket(a)
    sock.close()
    with pytest.raises(SocketError) as info:
        sock.recv(1)
    assert str(info.value) == "Socket was closed"
    assert info.value.code == -1


def test_close_twice_is_harmless():
    a, b = socket.socketpair()
    b.close()
    sock = Socket(a)
    sock.close()
    sock.close()
    assert sock.closed
    with pytest.raises(SocketError):
        sock.send(b"x")


def test_context_manager_closes():
    a, b = socket.socketpair()
    b.close()
    with Socket(a) as sock:
        assert not sock.closed
    assert sock.closed


def test_accept_gives_connected_socket():
    port = _free_port()
    with ServerSocket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.bind(("127.0.0.1", port))
        server.listen(1)
        with socket.create_connection(("127.0.0.1", port), timeout=5) as client:
            with server.accept() as conn:
                assert conn.peername() == client.getsockname()
                client.sendall(b"ping")
                assert conn.recv(16) == b"ping"
                conn.send(b"pong")
                assert client.recv(16) == b"pong"


def test_bind_to_busy_port_fails():
    port = _free_port()
    with ServerSocket() as first, ServerSocket() as second:
        first.bind(("127.0.0.1", port))
        first.listen(1)
        with pytest.raises(SocketError) as info:
            second.bind(("127.0.0.1", port))
    assert str(info.value).startswith("bind(): ")
    assert info.value.code == errno.EADDRINUSE


def test_peername_of_unconnected_socket_fails():
    with ServerSocket() as server:
        with pytest.raises(SocketError) as info:
            server.peername()
    assert str(info.value).startswith("getpeername(): ")
    assert info.value.code == errno.ENOTCONN


def test_listen_after_close_fails():
    server = ServerSocket()
    server.close()
    with pytest.raises(SocketError) as info:
        server.listen(1)
    assert info.value.code == -1