"""Running CGI scripts on behalf of a request."""

from __future__ import annotations

import errno
import os
import subprocess
from typing import Optional

from modelhttp.config import DEFAULT_PORT, SERVER_NAME
from modelhttp.request import HttpRequest
from modelhttp.response import HttpResponse
from modelhttp.status import Status


def handle_cgi_request(request: HttpRequest, peer, root: Optional[str] = None) -> HttpResponse:
    """Run the script named by the request URI and pass its output through.

    The script lives at root + URI, where root defaults to the current
    directory. Its whole standard output becomes the response verbatim.
    """
    document_root = os.fspath(root) if root is not None else os.getcwd()
    script_filename = document_root + request.uri

    if not os.path.exists(script_filename):
        return HttpResponse(Status.NOT_FOUND, "CGI script not found")

    host, port = peer[:2] if isinstance(peer, tuple) else ("", 0)
    variables = {
        "SCRIPT_NAME": request.uri,
        "DOCUMENT_ROOT": document_root,
        "SCRIPT_FILENAME": script_filename,
        "CONTENT_TYPE": "text/plain",
        "GATEWAY_INTERFACE": "CGI/1.1",
        "SERVER_PORT": str(DEFAULT_PORT),
        "SERVER_PROTOCOL": "HTTP/1.0",
        "SERVER_SOFTWARE": SERVER_NAME,
        "SERVER_NAME": "localhost",
        "HTTP_REFERER": request["Referer"],
        "HTTP_USER_AGENT": request["User-Agent"],
        "REMOTE_PORT": str(port),
        "REMOTE_ADDR": str(host),
    }
    environment = {**os.environ, **variables}

    try:
        completed = subprocess.run(
            [script_filename],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            env=environment,
            cwd=document_root,
            check=False,
        )
    except OSError as exc:
        if exc.errno in (errno.EAGAIN, errno.ENOMEM):
            return HttpResponse(Status.SERVICE_UNAVAILABLE, "Unavailable: fork() = -1")
        return HttpResponse(
            Status.INTERNAL_ERROR,
            f"Internal error: execl('{script_filename}') = -1",
        )

    return HttpResponse.raw(completed.stdout.decode("latin-1"))