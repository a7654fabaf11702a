"""HTTP requests parsed from client text."""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from modelhttp.message import HttpMessage, _split_message
from modelhttp.method import Method

_SPACE = frozenset(" \t\n\v\f\r")
_BLANK = frozenset(" \t")


class _TitleReader:
    """Cursor over a request line."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def word(self) -> str:
        """Skip whitespace and return the following run of non-whitespace."""
        text, end = self.text, len(self.text)
        while self.pos < end and text[self.pos] in _SPACE:
            self.pos += 1
        start = self.pos
        while self.pos < end and text[self.pos] not in _SPACE:
            self.pos += 1
        return text[start:self.pos]

    def scroll(self, delims: str) -> Tuple[str, Optional[str]]:
        """Read up to a delimiter, skipping leading blanks.

        Returns the text read and the delimiter that ended it, or None at the
        end of the line.
        """
        part = []
        prefix = True
        while self.pos < len(self.text):
            char = self.text[self.pos]
            self.pos += 1
            if prefix and char in _BLANK:
                continue
            prefix = False
            if char in delims:
                return "".join(part), char
            part.append(char)
        return "".join(part), None


class HttpRequest(HttpMessage):
    """A request: method, URI with query parameters, and version."""

    def __init__(self, text: str) -> None:
        title, headers, body = _split_message(text)
        super().__init__(headers=headers, body=body)
        reader = _TitleReader(title)
        self.method: Method = Method.parse(reader.word())
        self.params: Dict[str, str] = {}

        self.uri, stop = reader.scroll("? ")
        if stop == "?":
            while True:
                key, stop = reader.scroll("=& ")
                if stop == "=":
                    value, stop = reader.scroll("& ")
                    self.params[key] = value
                elif stop in (" ", "&") and key:
                    self.params[key] = ""
                if stop != "&":
                    break

        self.version = reader.word()

    @classmethod
    def parse(cls, text: str) -> "HttpRequest":
        return cls(text)

    @property
    def title(self) -> str:
        """The request line rebuilt from method, URI and version."""
        return f"{self.method} {self.uri} {self.version}"

    def param(self, key: str) -> Optional[str]:
        """Return a query parameter, or None when it was not given."""
        return self.params.get(key)