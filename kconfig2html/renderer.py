"""
HTML output for the configuration reference.

The table of contents and the body are produced during the same
depth-first pass. TOC fragments are collected in traversal order; body
fragments go to a staging buffer that is copied after the TOC once the
whole tree has been walked.
"""

import html
import io
import tempfile
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from .entry import ConfigEntry, ValueType
from .errors import StagingError

HIDDEN_NOTE = ("This is a hidden, internal configuration variable that cannot be "
               "explicitly set by the user.")

# Body staging stays in memory up to this size, then spills to a temp file
STAGING_MAX_SIZE = 4 * 1024 * 1024


def escape_html_entities(text: str) -> str:
    """Escape &, < and > so Kconfig prompts cannot inject markup."""
    return html.escape(text, quote=False)


class HtmlDocument:
    """Two output streams composed into one document.

    Use as a context manager; the staging buffer is released on exit,
    whether or not the traversal finished.
    """

    def __init__(self, max_size: int = STAGING_MAX_SIZE):
        self.max_size = max_size
        self._toc = io.StringIO()
        self._staging = None

    def __enter__(self) -> "HtmlDocument":
        try:
            self._staging = tempfile.SpooledTemporaryFile(max_size=self.max_size, mode="w+", encoding="utf-8")
        except OSError as e:
            raise StagingError(f"create staging buffer failed: {e.strerror or e}")
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        if self._staging is not None:
            self._staging.close()
            self._staging = None

    def toc(self, text: str) -> None:
        self._toc.write(text)

    def body(self, text: str) -> None:
        if self._staging is None:
            raise StagingError("staging buffer is not open")
        try:
            self._staging.write(text)
        except OSError as e:
            raise StagingError(f"write staging buffer failed: {e.strerror or e}")

    def toc_text(self) -> str:
        return self._toc.getvalue()

    def body_text(self) -> str:
        if self._staging is None:
            raise StagingError("staging buffer is not open")
        self._staging.seek(0)
        text = self._staging.read()
        self._staging.seek(0, io.SEEK_END)
        return text

    def compose(self, header: str = "", trailer: str = "") -> str:
        """Header, table of contents, staged body and trailer, in that order."""
        return "".join([header, self.toc_text(), self.body_text(), trailer])


class HtmlGenerator:
    """Produces the HTML fragments for headings, TOC lines and entry metadata."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config

    def header(self, today: Optional[date] = None) -> str:
        """Fixed page header and banner, up to the opening TOC list."""
        title = escape_html_entities(self.config["title"])
        banner = escape_html_entities(self.config["banner"])
        lines = [
            "<html>",
            "<head>",
            f"<title>{title}</title>",
            "</head>",
            f"<body background=\"{self.config['background']}\">",
            "<hr><hr>",
            "<table width =\"100%\">",
            "<tr align=\"center\" bgcolor=\"#e4e4e4\">",
            "<td>",
            f"<h1><big><font color=\"#3c34ec\"><i>{banner}</i></font></big></h1>",
        ]
        if self.config.get("include_date"):
            today = today or date.today()
            lines.append(f"<p>Last Updated: {today.strftime(self.config['date_format'])}</p>")
        lines.extend([
            "</td>",
            "</tr>",
            "</table>",
            "<center><h1>Table of contents</h1></center>",
            "<ul>",
        ])
        return "\n".join(lines) + "\n"

    def trailer(self) -> str:
        return "</body>\n</html>\n"

    def toc_link(self, anchor: str, label: str) -> str:
        return f"<li><a href=\"#{anchor}\">{label}</a></li>\n"

    def block_label(self, paranum: str, kind: str, title: Optional[str] = None) -> str:
        if title:
            return f"{paranum} {kind}: {escape_html_entities(title)}"
        return f"{paranum} {kind}"

    def menu_heading(self, anchor: str, label: str) -> str:
        return f"\n<h1><a name=\"{anchor}\">{label}</a></h1>\n"

    def choice_heading(self, anchor: str, label: str) -> str:
        return f"\n<h3><a name=\"{anchor}\">{label}</a></h3>\n"

    def config_toc(self, entry: ConfigEntry, paranum: str) -> str:
        text = f"<li><a href=\"#{entry.name}\">{paranum} <code>CONFIG_{entry.name}</code>"
        if entry.description:
            text += f": {escape_html_entities(entry.description)}"
        return text + "</a></li>\n"

    def config_heading(self, entry: ConfigEntry, paranum: Optional[str]) -> str:
        text = f"<h3><a name=\"{entry.name}\">"
        if paranum is not None:
            text += f"{paranum} "
        text += f"<code>CONFIG_{entry.name}</code>"
        if entry.description:
            text += f": {escape_html_entities(entry.description)}"
        return text + "</a></h3>\n"

    def config_details(self, entry: ConfigEntry, kconfig_path: str) -> str:
        """Bulleted metadata list for one entry."""
        items: List[str] = []

        if entry.value_type != ValueType.NONE:
            items.append(f"  <li><i>Type</i>:         {entry.value_type.value}</li>")

        if entry.default is not None:
            items.append(f"  <li><i>Default</i>:      {escape_html_entities(entry.default)}</li>")

        if entry.dependencies:
            items.append(f"  <li><i>Dependencies</i>: {self.join_dependencies(entry.dependencies)}</li>")

        items.append(f"  <li><i>Kconfig file</i>: <code>{escape_html_entities(kconfig_path)}</code></li>")

        if not entry.has_help and not entry.description:
            items.append(f"<p>{HIDDEN_NOTE}</p>")

        return "<ul>\n" + "\n".join(items) + "\n</ul>\n"

    def join_dependencies(self, dependencies: Iterable[str]) -> str:
        return ", ".join(escape_html_entities(d) for d in dependencies)
