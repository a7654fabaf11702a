"""The HTTP server: accepts connections and serves each in its own thread."""

from __future__ import annotations

import argparse
import contextlib
import os
import select
import signal
import socket
import sys
import threading
from typing import Iterator, Optional, Set

from modelhttp.config import DEFAULT_PORT
from modelhttp.session import session
from modelhttp.sockets import ServerSocket, Socket

_BACKLOG = 32
_POLL_INTERVAL = 0.2
_STOP_SIGNALS = tuple(
    getattr(signal, name)
    for name in ("SIGINT", "SIGQUIT", "SIGTERM", "SIGUSR1")
    if hasattr(signal, name)
)


@contextlib.contextmanager
def _stop_on_signals(stop: threading.Event) -> Iterator[None]:
    """Set stop on termination signals; only possible from the main thread."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return
    previous = {sig: signal.signal(sig, lambda *_: stop.set()) for sig in _STOP_SIGNALS}
    try:
        yield
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)


def _watch_stdin(stop: threading.Event) -> None:
    """Stop the server once anything, or end of file, arrives on standard input."""
    stream = sys.stdin
    if stream is None:
        return

    def wait() -> None:
        try:
            stream.read(1)
        except (OSError, ValueError):
            return
        stop.set()

    threading.Thread(target=wait, name="stdin-watch", daemon=True).start()


def _serve_client(conn: Socket, root: str, clients: Set[Socket], lock: threading.Lock) -> None:
    try:
        session(conn, root)
    finally:
        with lock:
            clients.discard(conn)
        conn.close()


def run(port: int = DEFAULT_PORT, root: Optional[str] = None) -> None:
    """Serve files and CGI scripts under root until stopped.

    The server stops on SIGINT, SIGQUIT, SIGTERM or SIGUSR1 and when a
    character (or end of file) is read from standard input. Open client
    connections are closed on the way out.
    """
    document_root = os.fspath(root) if root is not None else os.getcwd()
    stop = threading.Event()
    clients: Set[Socket] = set()
    lock = threading.Lock()

    with ServerSocket(socket.AF_INET, socket.SOCK_STREAM) as server, _stop_on_signals(stop):
        server.bind(("", port))
        server.listen(_BACKLOG)
        print(f"Server listening on port {port}", flush=True)
        _watch_stdin(stop)

        while not stop.is_set():
            readable, _, _ = select.select([server], [], [], _POLL_INTERVAL)
            if not readable:
                continue
            conn = server.accept()
            with lock:
                clients.add(conn)
            threading.Thread(
                target=_serve_client,
                args=(conn, document_root, clients, lock),
                daemon=True,
            ).start()

        with lock:
            remaining = list(clients)
        for conn in remaining:
            conn.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="modelhttp",
        description="Serve files and CGI scripts over HTTP.",
    )
    parser.add_argument("-p", "--port", type=int, default=DEFAULT_PORT,
                        help="port to listen on")
    parser.add_argument("-r", "--root", default=None,
                        help="document root (default: current directory)")
    args = parser.parse_args(argv)
    run(args.port, args.root)
    return 0