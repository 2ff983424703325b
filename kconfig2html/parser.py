"""
Recursive-descent walk over a Kconfig tree.

Each `menu` and `choice` recurses on the same line cursor until its closer
returns; each `source` opens the included file and recurses on a fresh
cursor. Block nesting and the `if` dependency stack are tracked
independently of each other.
"""

import logging
from typing import Optional

from .entry import ConfigEntry, extract_config, get_string
from .errors import KconfigOpenError
from .paths import SourceResolver
from .reader import Keyword, Line, TokenCursor, read_lines
from .state import ParserState

logger = logging.getLogger(__name__)


class KconfigParser:
    """Drives block structure and writes both output streams."""

    def __init__(self, state: ParserState, resolver: SourceResolver):
        self.state = state
        self.resolver = resolver

    @property
    def nesting(self):
        return self.state.nesting

    def toc(self, text: str) -> None:
        self.state.document.toc(text)

    def body(self, text: str) -> None:
        self.state.document.body(text)

    def run(self, root_dir: Optional[str] = None) -> None:
        """Walk the whole tree starting at the root Kconfig file."""
        root_dir = root_dir or self.resolver.kconfig_root
        generator = self.state.generator

        # The root of the tree is numbered like a menu at the first level
        self.nesting.enter()
        anchor = self.nesting.next_menu_anchor()
        label = f"{self.nesting.paragraph} {generator.config['banner']}"
        self.toc(generator.toc_link(anchor, label))
        self.body(generator.menu_heading(anchor, label))

        self.process_file(root_dir)

        # Terminate the table of contents
        self.toc("</ul>\n")

        if self.nesting.level != 1:
            logger.warning("Unbalanced menu/choice blocks at end of input (level %d)", self.nesting.level)
        if len(self.state.dependencies):
            logger.warning("Unbalanced if/endif at end of input (%d open)", len(self.state.dependencies))

        logger.info("Processed %d Kconfig files", self.state.files_processed)

    def process_file(self, kconfig_dir: str) -> None:
        """Open <kconfig_dir>/Kconfig and parse it to the end."""
        path = self.resolver.kconfig_path(kconfig_dir)
        logger.debug("Processing %s (level %d)", path, self.nesting.level)

        try:
            # Stray non-UTF-8 bytes (often in help bodies) decode to U+FFFD
            stream = open(path, 'r', encoding='utf-8', errors='replace')
        except OSError as e:
            raise KconfigOpenError(f"open failed: {e.strerror or e}", path)

        with stream:
            self.state.files_processed += 1
            cursor = TokenCursor(read_lines(stream, path, self.state.line_size))
            self.parse_block(cursor, kconfig_dir)

    def parse_block(self, cursor: TokenCursor, kconfig_dir: str) -> None:
        """Dispatch lines until the block's closer or end of file."""
        for line in cursor:
            keyword = line.keyword

            if keyword == Keyword.SOURCE:
                self.handle_source(line)

            elif keyword == Keyword.CONFIG:
                self.handle_config(cursor, line, kconfig_dir)

            elif keyword == Keyword.MENU:
                self.open_menu(line)
                logger.debug("Recursing for menu in %s (level %d)", kconfig_dir, self.nesting.level)
                self.parse_block(cursor, kconfig_dir)

            elif keyword == Keyword.CHOICE:
                self.open_choice(line)
                logger.debug("Recursing for choice in %s (level %d)", kconfig_dir, self.nesting.level)
                self.parse_block(cursor, kconfig_dir)

            elif keyword == Keyword.ENDMENU:
                self.close_menu(line)
                return

            elif keyword == Keyword.ENDCHOICE:
                self.close_choice(line)
                return

            elif keyword == Keyword.IF:
                self.state.dependencies.push(line.rest, line.path, line.lineno)

            elif keyword == Keyword.ENDIF:
                self.state.dependencies.pop(line.path, line.lineno)

            else:
                logger.debug("Unhandled token: %s", line.word)

    def handle_source(self, line: Line) -> None:
        argument = line.rest.split(" ", 1)[0]
        dirpath = self.resolver.resolve(argument)
        if dirpath is None:
            logger.debug("%s:%d: empty source directive skipped", line.path, line.lineno)
            return
        self.process_file(dirpath)

    def handle_config(self, cursor: TokenCursor, line: Line, kconfig_dir: str) -> None:
        name = line.rest.split(" ", 1)[0]
        if not name:
            logger.debug("%s:%d: config without a name skipped", line.path, line.lineno)
            return
        entry = extract_config(cursor, name, kconfig_dir, self.state.dependencies.snapshot())
        self.render_config(entry)

    def render_config(self, entry: ConfigEntry) -> None:
        """Write one entry to the body and, outside a choice, to the TOC."""
        if entry.is_hidden and not self.state.show_internal:
            logger.debug("Skipping internal variable %s", entry.name)
            return

        generator = self.state.generator
        paranum = None
        if not self.nesting.in_choice:
            paranum = self.nesting.paragraph
            self.toc(generator.config_toc(entry, paranum))
            self.nesting.advance()

        self.body(generator.config_heading(entry, paranum))
        self.body(generator.config_details(entry, self.resolver.kconfig_path(entry.kconfig_dir)))

    def open_menu(self, line: Line) -> None:
        generator = self.state.generator
        label = generator.block_label(self.nesting.paragraph, "Menu", get_string(line.rest))
        anchor = self.nesting.next_menu_anchor()

        self.toc(generator.toc_link(anchor, label))
        self.toc("<ul>\n")
        self.body(generator.menu_heading(anchor, label))

        self.nesting.enter(line.path, line.lineno)

    def close_menu(self, line: Line) -> None:
        self.toc("</ul>\n")
        self.nesting.leave(line.path, line.lineno)
        self.nesting.advance(line.path, line.lineno)

    def open_choice(self, line: Line) -> None:
        generator = self.state.generator
        label = generator.block_label(self.nesting.paragraph, "Choice", get_string(line.rest))
        anchor = self.nesting.next_choice_anchor()

        # Entries inside the choice stay out of the TOC; the choice itself does not
        self.toc(generator.toc_link(anchor, label))
        self.body(generator.choice_heading(anchor, label))
        self.body("<ul>\n")

        self.nesting.enter(line.path, line.lineno)
        self.nesting.in_choice += 1

    def close_choice(self, line: Line) -> None:
        self.body("</ul>\n")
        self.nesting.in_choice = max(self.nesting.in_choice - 1, 0)
        self.nesting.leave(line.path, line.lineno)
        self.nesting.advance(line.path, line.lineno)
