"""
Line reader and tokenizer for Kconfig files.

Lines are normalized before they reach the parser: every whitespace run is
collapsed to a single space, blank lines and comment lines are dropped.

Physical lines are read in chunks of at most ``line_size - 1`` characters.
A longer line is split and its remainder is returned as a separate line, so
an over-long ``bool "..."`` prompt will lose its tail. This is a known
limitation of the format reader and is not reported.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Iterator, List, Optional, TextIO

LINE_SIZE = 1024


class Keyword(Enum):
    NOTRESERVED = auto()
    CONFIG = auto()
    BOOL = auto()
    INT = auto()
    HEX = auto()
    STRING = auto()
    DEFAULT = auto()
    HELP = auto()
    MENU = auto()
    ENDMENU = auto()
    CHOICE = auto()
    ENDCHOICE = auto()
    SOURCE = auto()
    IF = auto()
    ENDIF = auto()


RESERVED_WORDS = {
    "config": Keyword.CONFIG,
    "bool": Keyword.BOOL,
    "int": Keyword.INT,
    "hex": Keyword.HEX,
    "string": Keyword.STRING,
    "default": Keyword.DEFAULT,
    "help": Keyword.HELP,
    "---help---": Keyword.HELP,
    "menu": Keyword.MENU,
    "endmenu": Keyword.ENDMENU,
    "choice": Keyword.CHOICE,
    "endchoice": Keyword.ENDCHOICE,
    "source": Keyword.SOURCE,
    "if": Keyword.IF,
    "endif": Keyword.ENDIF,
}


def tokenize(word: str) -> Keyword:
    """Classify a word against the reserved set."""
    return RESERVED_WORDS.get(word, Keyword.NOTRESERVED)


@dataclass(frozen=True)
class Line:
    """One normalized Kconfig line and where it came from."""

    text: str
    path: str = "<string>"
    lineno: int = 0

    @property
    def word(self) -> str:
        return self.text.split(" ", 1)[0]

    @property
    def rest(self) -> str:
        parts = self.text.split(" ", 1)
        return parts[1] if len(parts) > 1 else ""

    @property
    def keyword(self) -> Keyword:
        return tokenize(self.word)


def read_lines(stream: TextIO, path: str = "<string>", line_size: int = LINE_SIZE) -> Iterator[Line]:
    """Lazily yield the non-blank, non-comment lines of a Kconfig stream."""
    # At most line_size - 1 characters per read, like a fixed-size line buffer
    chunk_size = max(line_size - 1, 1)
    for lineno, raw in enumerate(stream, start=1):
        for start in range(0, len(raw), chunk_size):
            text = " ".join(raw[start:start + chunk_size].split())
            if not text or text.startswith("#"):
                continue
            yield Line(text, path, lineno)


class TokenCursor:
    """Peekable cursor over lines with single-line push-back.

    The config extractor peeks ahead and stops at the first line that
    belongs to the next construct, leaving it for the parser to dispatch.
    """

    def __init__(self, lines: Iterable[Line]):
        self._lines = iter(lines)
        self._pending: List[Line] = []

    def __iter__(self):
        return self

    def __next__(self) -> Line:
        line = self.next()
        if line is None:
            raise StopIteration
        return line

    def next(self) -> Optional[Line]:
        """Return the next line, or None at end of input."""
        if self._pending:
            return self._pending.pop()
        return next(self._lines, None)

    def peek(self) -> Optional[Line]:
        line = self.next()
        if line is not None:
            self.push_back(line)
        return line

    def push_back(self, line: Line) -> None:
        self._pending.append(line)
