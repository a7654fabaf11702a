"""HTTP status codes the server can answer with."""

from __future__ import annotations

import enum


class Status(enum.IntEnum):
    """Status codes used in responses."""

    OK = 200
    BAD_REQUEST = 400
    FORBIDDEN = 403
    NOT_FOUND = 404
    INTERNAL_ERROR = 500
    NOT_IMPLEMENTED = 501
    SERVICE_UNAVAILABLE = 503