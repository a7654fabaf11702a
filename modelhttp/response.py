"""HTTP responses sent back to clients."""

from __future__ import annotations

from modelhttp.message import HttpMessage
from modelhttp.status import Status

HTTP_VERSION = "HTTP/1.0"


class HttpResponse(HttpMessage):
    """A response with a status line, or raw text passed through verbatim."""

    def __init__(
        self,
        status: Status = Status.OK,
        comment: str = "OK",
        version: str = HTTP_VERSION,
    ) -> None:
        super().__init__()
        self.status = Status(status)
        self.comment = comment
        self.version = version
        self.is_raw = False

    @classmethod
    def raw(cls, text: str) -> "HttpResponse":
        """A response whose text form is exactly the given text."""
        response = cls(Status.OK, "", "")
        response.is_raw = True
        response.body = text
        return response

    @property
    def title(self) -> str:
        """The status line built from version, status code and comment."""
        return f"{self.version} {int(self.status)} {self.comment}"

    def __str__(self) -> str:
        if self.is_raw:
            return self.body.split("\0", 1)[0]
        return super().__str__()