"""Block nesting, paragraph numbering and the `if` dependency stack."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .errors import (
    DependencyOverflowError,
    DependencyUnderflowError,
    NestingOverflowError,
    NestingUnderflowError,
)
from .reader import LINE_SIZE
from .renderer import HtmlDocument, HtmlGenerator

MAX_DEPENDENCIES = 100
MAX_LEVELS = 100


class DependencyStack:
    """Raw `if` condition texts currently in force, outermost first."""

    def __init__(self, capacity: int = MAX_DEPENDENCIES):
        self.capacity = capacity
        self._items: List[str] = []

    def __len__(self) -> int:
        return len(self._items)

    def push(self, condition: str, path: Optional[str] = None, lineno: Optional[int] = None) -> None:
        if len(self._items) >= self.capacity:
            raise DependencyOverflowError("Too many dependencies, aborting", path, lineno)
        self._items.append(condition)

    def pop(self, path: Optional[str] = None, lineno: Optional[int] = None) -> str:
        if not self._items:
            raise DependencyUnderflowError("Dependency underflow, aborting", path, lineno)
        return self._items.pop()

    def snapshot(self) -> Tuple[str, ...]:
        return tuple(self._items)


@dataclass
class NestingState:
    """Per-depth paragraph counters plus the menu/choice anchor counters.

    Entering a depth seeds its counter at 1. Leaving a depth does not touch
    the parent; the caller advances the parent afterwards so that the closed
    block's own number is consumed.
    """

    max_levels: int = MAX_LEVELS
    counters: List[int] = field(default_factory=list)
    in_choice: int = 0
    menu_number: int = 0
    choice_number: int = 0

    @property
    def level(self) -> int:
        return len(self.counters)

    @property
    def paragraph(self) -> str:
        return ".".join(str(n) for n in self.counters)

    def enter(self, path: Optional[str] = None, lineno: Optional[int] = None) -> None:
        if self.level >= self.max_levels:
            raise NestingOverflowError("Nesting level is too deep, aborting", path, lineno)
        self.counters.append(1)

    def leave(self, path: Optional[str] = None, lineno: Optional[int] = None) -> None:
        if not self.counters:
            raise NestingUnderflowError("Nesting level underflow, aborting", path, lineno)
        self.counters.pop()

    def advance(self, path: Optional[str] = None, lineno: Optional[int] = None) -> None:
        if not self.counters:
            raise NestingUnderflowError("Nesting level underflow, aborting", path, lineno)
        self.counters[-1] += 1

    def next_menu_anchor(self) -> str:
        anchor = f"menu_{self.menu_number}"
        self.menu_number += 1
        return anchor

    def next_choice_anchor(self) -> str:
        anchor = f"choice_{self.choice_number}"
        self.choice_number += 1
        return anchor


@dataclass
class ParserState:
    """Everything one traversal mutates, threaded through the recursion."""

    document: HtmlDocument
    generator: HtmlGenerator
    nesting: NestingState = field(default_factory=NestingState)
    dependencies: DependencyStack = field(default_factory=DependencyStack)
    show_internal: bool = False
    line_size: int = LINE_SIZE
    files_processed: int = 0

    @classmethod
    def from_config(cls, document: HtmlDocument, config: Dict[str, Any]) -> "ParserState":
        return cls(
            document=document,
            generator=HtmlGenerator(config),
            nesting=NestingState(max_levels=config["max_levels"]),
            dependencies=DependencyStack(capacity=config["max_dependencies"]),
            show_internal=config["show_internal"],
            line_size=config["line_size"],
        )
