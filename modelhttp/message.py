"""Generic HTTP message: a title line, headers and a body."""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Tuple


def _split_message(text: str) -> Tuple[str, Dict[str, str], str]:
    """Split raw message text into title, headers and body.

    Header lines run until a line of at most one character. Each header line
    is split on whitespace: the first word minus its last character is the
    name, the second word is the value.
    """
    text = text.split("\0", 1)[0]
    lines = text.split("\n")
    title = lines[0]
    headers: Dict[str, str] = {}
    index = 1
    while index < len(lines) and len(lines[index]) > 1:
        words = lines[index].split()
        if words:
            headers[words[0][:-1]] = words[1] if len(words) > 1 else ""
        index += 1
    body = "\n".join(lines[index + 1:])
    return title, headers, body


class HttpMessage:
    """A message with a title line, headers and a body."""

    def __init__(
        self,
        title: str = "",
        headers: Optional[Mapping[str, str]] = None,
        body: str = "",
    ) -> None:
        self._title = title
        self.headers: Dict[str, str] = dict(headers) if headers else {}
        self.body = body

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._title = value

    @classmethod
    def parse(cls, text: str) -> "HttpMessage":
        """Build a message from its text form."""
        title, headers, body = _split_message(text)
        return cls(title, headers, body)

    def __getitem__(self, name: str) -> str:
        """Return a header's value, or "" when it is absent."""
        return self.headers.get(name, "")

    def __setitem__(self, name: str, value: str) -> None:
        self.headers[name] = value

    def __str__(self) -> str:
        lines = [self.title + "\n"]
        lines.extend(f"{name}: {self.headers[name]}\n" for name in sorted(self.headers))
        lines.append("\n")
        lines.append(self.body)
        return "".join(lines)