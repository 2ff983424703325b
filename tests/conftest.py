import textwrap

import pytest

from kconfig2html.config import get_default_config
from kconfig2html.parser import KconfigParser
from kconfig2html.paths import SourceResolver
from kconfig2html.renderer import HtmlDocument
from kconfig2html.state import ParserState


@pytest.fixture
def write_kconfig(tmp_path):
    """Write a Kconfig file below tmp_path; `relpath` defaults to the root file."""

    def _write(text, relpath="Kconfig"):
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text))
        return path

    return _write


@pytest.fixture
def config():
    cfg = get_default_config()
    cfg["include_date"] = False
    return cfg


@pytest.fixture
def render(tmp_path, config):
    """Parse the tree under tmp_path; return (state, toc, body)."""

    def _render(**overrides):
        cfg = dict(config, **overrides)
        resolver = SourceResolver(str(tmp_path), apps_dir=cfg["apps_dir"])
        with HtmlDocument() as document:
            state = ParserState.from_config(document, cfg)
            KconfigParser(state, resolver).run()
            return state, document.toc_text(), document.body_text()

    return _render
