"""Config entry records and the forward scan that fills them in."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .reader import Keyword, TokenCursor

logger = logging.getLogger(__name__)


class ValueType(Enum):
    NONE = None
    BOOL = "Boolean"
    INT = "Integer"
    HEX = "Hexadecimal"
    STRING = "String"


TYPE_KEYWORDS = {
    Keyword.BOOL: ValueType.BOOL,
    Keyword.INT: ValueType.INT,
    Keyword.HEX: ValueType.HEX,
    Keyword.STRING: ValueType.STRING,
}

ENTRY_KEYWORDS = set(TYPE_KEYWORDS) | {Keyword.DEFAULT, Keyword.HELP}


@dataclass
class ConfigEntry:
    name: str
    kconfig_dir: str
    value_type: ValueType = ValueType.NONE
    description: Optional[str] = None
    default: Optional[str] = None
    has_help: bool = False
    dependencies: Tuple[str, ...] = ()

    @property
    def is_hidden(self) -> bool:
        return not self.description


def find_unescaped(text: str, char: str, start: int = 0) -> int:
    """Index of the first `char` not preceded by a backslash escape, or -1."""
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif ch == char:
            return i
    return -1


def get_string(text: str) -> Optional[str]:
    """
    Extract the first double-quoted string from text.

    Escaped quotes do not terminate the string and are kept as written, so
    '"Foo \\"bar\\" baz"' yields 'Foo \\"bar\\" baz'. A missing closing quote
    takes the rest of the line.
    """
    begin = find_unescaped(text, '"')
    if begin < 0:
        return None
    end = find_unescaped(text, '"', begin + 1)
    if end < 0:
        return text[begin + 1:]
    return text[begin + 1:end]


def extract_config(
    cursor: TokenCursor,
    name: str,
    kconfig_dir: str,
    dependencies: Tuple[str, ...] = (),
) -> ConfigEntry:
    """
    Scan the attribute lines that follow `config NAME`.

    Stops at the first line that is not a type, default or help line and
    leaves it on the cursor so the caller dispatches it next.
    """
    entry = ConfigEntry(name=name, kconfig_dir=kconfig_dir, dependencies=dependencies)

    while True:
        line = cursor.peek()
        if line is None:
            break

        keyword = line.keyword
        if keyword not in ENTRY_KEYWORDS:
            logger.debug("Unhandled token: %s", line.word)
            break
        cursor.next()

        if keyword in TYPE_KEYWORDS:
            entry.value_type = TYPE_KEYWORDS[keyword]
            description = get_string(line.rest)
            if description:
                entry.description = description
        elif keyword == Keyword.DEFAULT:
            entry.default = line.rest
        else:
            # Help body lines are not reserved words; the parser skips them
            entry.has_help = True

    return entry
