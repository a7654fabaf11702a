"""Thin socket wrappers that raise SocketError on failure."""

from __future__ import annotations

import socket
from typing import Optional, Tuple


class SocketError(RuntimeError):
    """A failed socket operation, carrying the system error code."""

    def __init__(self, message: str, code: int) -> None:
        super().__init__(message)
        self.code = code


def _failure(prefix: str, exc: OSError) -> SocketError:
    code = exc.errno if exc.errno is not None else -1
    return SocketError(prefix + (exc.strerror or str(exc)), code)


class Socket:
    """A connected stream socket that can be closed once and then refuses use."""

    def __init__(self, sock: Optional[socket.socket] = None) -> None:
        self._sock = sock

    def _checked(self) -> socket.socket:
        sock = self._sock
        if sock is None:
            raise SocketError("Socket was closed", -1)
        return sock

    @property
    def closed(self) -> bool:
        return self._sock is None

    def fileno(self) -> int:
        return self._checked().fileno()

    def send(self, data: bytes) -> int:
        """Send all of data and return how many bytes went out."""
        sock = self._checked()
        try:
            sock.sendall(data)
        except OSError as exc:
            raise _failure("send(): ", exc) from exc
        return len(data)

    def recv(self, size: int) -> bytes:
        """Receive at most size bytes; b"" means the peer closed."""
        sock = self._checked()
        try:
            return sock.recv(size)
        except OSError as exc:
            raise _failure("recv(): ", exc) from exc

    def peername(self):
        """The peer's address, as (host, port) for internet sockets."""
        sock = self._checked()
        try:
            address = sock.getpeername()
        except OSError as exc:
            raise _failure("getpeername(): ", exc) from exc
        if isinstance(address, tuple):
            return address[:2]
        return address

    def close(self) -> None:
        """Shut the connection down and release it; closing twice is harmless."""
        sock, self._sock = self._sock, None
        if sock is None:
            return
        try:
            sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        sock.close()

    def __enter__(self) -> "Socket":
        return self

    def __exit__(self, *args) -> None:
        self.close()


class ServerSocket(Socket):
    """A listening socket that hands out connected Sockets."""

    def __init__(
        self,
        family: int = socket.AF_INET,
        type_: int = socket.SOCK_STREAM,
    ) -> None:
        try:
            sock = socket.socket(family, type_)
        except OSError as exc:
            raise _failure("socket(): ", exc) from exc
        super().__init__(sock)

    def bind(self, address: Tuple[str, int]) -> None:
        sock = self._checked()
        try:
            sock.bind(address)
        except OSError as exc:
            raise _failure("bind(): ", exc) from exc

    def listen(self, backlog: int) -> None:
        sock = self._checked()
        try:
            sock.listen(backlog)
        except OSError as exc:
            raise _failure("listen(): ", exc) from exc

    def accept(self) -> Socket:
        """Wait for a client and return its connection."""
        sock = self._checked()
        try:
            conn, _ = sock.accept()
        except OSError as exc:
            raise _failure("accept(): ", exc) from exc
        return Socket(conn)