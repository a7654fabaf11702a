"""Serving one client connection: reading requests and answering them."""

from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from typing import Optional, Union

from modelhttp.cgihandler import handle_cgi_request
from modelhttp.config import SERVER_NAME
from modelhttp.method import Method, UnknownMethod
from modelhttp.request import HttpRequest
from modelhttp.response import HttpResponse
from modelhttp.sockets import Socket, SocketError
from modelhttp.status import Status

_CHUNK = 1024
_ENCODING = "latin-1"

_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def http_date(moment: Union[datetime, float, None] = None) -> str:
    """Format a moment as an HTTP date; naive datetimes count as UTC.

    A number is taken as a Unix timestamp; None means now.
    """
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif isinstance(moment, (int, float)):
        moment = datetime.fromtimestamp(moment, timezone.utc)
    elif moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    else:
        moment = moment.astimezone(timezone.utc)
    return (
        f"{_DAYS[moment.weekday()]}, {moment.day:02d} {_MONTHS[moment.month - 1]} "
        f"{moment.year} {moment:%H:%M:%S} GMT"
    )


def _content_type(path: str) -> str:
    if path.endswith("html"):
        return "text/html"
    if path.endswith(("jpg", "jpeg")):
        return "image/jpeg"
    return "text/plain"


def process_request(request: HttpRequest, peer, root: Optional[str] = None) -> HttpResponse:
    """Answer a request with a file under root or the output of a CGI script."""
    print(request.uri, flush=True)
    if request.uri.startswith("/cgi-bin"):
        return handle_cgi_request(request, peer, root)

    base = os.fspath(root) if root is not None else os.getcwd()
    path = base + request.uri
    try:
        with open(path, "rb") as stream:
            contents = stream.read() if request.method is not Method.HEAD else b""
            modified = os.fstat(stream.fileno()).st_mtime
    except OSError:
        return HttpResponse(Status.NOT_FOUND, "Not found")

    response = HttpResponse(Status.OK)
    response.body = contents.decode(_ENCODING)
    response["Content-Length"] = str(len(response.body))
    response["Last-Modified"] = http_date(modified)
    response["Allow"] = "GET,HEAD"
    response["Content-Type"] = _content_type(request.uri)
    return response


def _read_request(conn: Socket) -> str:
    chunks = []
    while True:
        chunk = conn.recv(_CHUNK)
        if not chunk:
            break
        chunks.append(chunk)
        if len(chunk) < _CHUNK:
            break
    return b"".join(chunks).decode(_ENCODING)


def session(conn: Socket, root: Optional[str] = None) -> None:
    """Answer requests on a connection until the client stops sending."""
    while True:
        try:
            contents = _read_request(conn)
        except SocketError as exc:
            print(f"Error occurred while recv() from client:{exc}", file=sys.stderr)
            return

        if not contents:
            return

        try:
            request = HttpRequest(contents)
            response = process_request(request, conn.peername(), root)
        except UnknownMethod:
            response = HttpResponse(Status.NOT_IMPLEMENTED, "Not implemented")
        except MemoryError:
            response = HttpResponse(Status.SERVICE_UNAVAILABLE, "Unavailable")
        except Exception:
            response = HttpResponse(Status.BAD_REQUEST, "Bad request")

        response["Date"] = http_date()
        response["Content-Length"] = str(len(response.body))
        response["Server"] = SERVER_NAME
        if not response["Content-Type"]:
            response["Content-Type"] = "text/plain"

        conn.send(str(response).encode(_ENCODING))