from __future__ import annotations

from typing import Iterator

from .ir import ALPHABET

EOF = ''


class Scanner:
    """
    Single-pass walk over raw source that only ever shows significant symbols.

    ``current`` holds one symbol of lookahead (``EOF`` once input runs out).
    ``offset``, ``line`` and ``column`` locate ``current`` in the raw text and
    are only used to report errors.
    """

    def __init__(self, source: str):
        self.source = source
        self._pos = 0
        self._line = 1
        self._column = 1
        self.current = EOF
        self.offset = 0
        self.line = 1
        self.column = 1
        self.advance()

    def advance(self) -> str:
        src = self.source
        n = len(src)
        while self._pos < n:
            ch = src[self._pos]
            offset, line, column = self._pos, self._line, self._column
            self._pos += 1
            if ch == '\n':
                self._line += 1
                self._column = 1
            else:
                self._column += 1
            if ch in ALPHABET:
                self.current = ch
                self.offset, self.line, self.column = offset, line, column
                return ch

        self.current = EOF
        self.offset, self.line, self.column = n, self._line, self._column
        return EOF

    def at_end(self) -> bool:
        return self.current == EOF

    def __iter__(self) -> Iterator[str]:
        while self.current != EOF:
            ch = self.current
            self.advance()
            yield ch
