"""HTTP request methods the server understands."""

from __future__ import annotations

import enum


class UnknownMethod(ValueError):
    """Raised for a request method the server does not support."""


class Method(enum.Enum):
    """Supported request methods."""

    GET = "GET"
    HEAD = "HEAD"

    @classmethod
    def parse(cls, name: str) -> "Method":
        """Look up a method by its exact, case-sensitive name."""
        try:
            return cls(name)
        except ValueError:
            raise UnknownMethod(name) from None

    def __str__(self) -> str:
        return self.value