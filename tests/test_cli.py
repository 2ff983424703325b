import tempfile
import textwrap

import pytest

from kconfig2html import generate_html
from kconfig2html.cli import main
from kconfig2html.config import get_default_config
from kconfig2html.errors import ExitCode

KCONFIG = """
menu "Drivers"
config SERIAL
\tbool "Serial support"
\tdefault y
endmenu
"""


def write_tree(root, text=KCONFIG):
    (root / "Kconfig").write_text(textwrap.dedent(text))


def test_writes_document_to_file(tmp_path):
    write_tree(tmp_path)
    out = tmp_path / "config.html"

    assert main(["-o", str(out), str(tmp_path)]) == ExitCode.SUCCESS

    text = out.read_text()
    assert text.startswith("<html>\n")
    assert text.endswith("</body>\n</html>\n")
    toc_start = text.index("Table of contents")
    assert toc_start < text.index('href="#SERIAL"') < text.index('name="SERIAL"')


def test_writes_document_to_stdout(tmp_path, capsys):
    write_tree(tmp_path)

    assert main([str(tmp_path)]) == ExitCode.SUCCESS

    assert '<h3><a name="SERIAL">1.1 <code>CONFIG_SERIAL</code>: Serial support</a></h3>' in capsys.readouterr().out


def test_title_flag_and_yaml_template(tmp_path):
    write_tree(tmp_path)
    template = tmp_path / "settings.yaml"
    template.write_text("banner: Board Variables\ninclude_date: false\n")
    out = tmp_path / "config.html"

    assert main(["-t", str(template), "--title", "Board Options", "-o", str(out), str(tmp_path)]) == 0

    text = out.read_text()
    assert "<title>Board Options</title>" in text
    assert "Board Variables" in text
    assert "Last Updated" not in text


def test_internal_flag(tmp_path):
    write_tree(tmp_path, "config HIDDEN\n\tbool\n")
    out = tmp_path / "config.html"

    assert main(["-o", str(out), str(tmp_path)]) == 0
    assert "HIDDEN" not in out.read_text()

    assert main(["-i", "-o", str(out), str(tmp_path)]) == 0
    assert 'href="#HIDDEN"' in out.read_text()


def test_usage_errors(tmp_path, capsys):
    assert main(["--bogus"]) == ExitCode.UNRECOGNIZED_OPTION
    assert main([str(tmp_path), "-o"]) == ExitCode.MISSING_OPTION_ARGUMENT
    assert main([str(tmp_path), "extra"]) == ExitCode.TOO_MANY_ARGUMENTS

    assert "usage: kconfig2html" in capsys.readouterr().err


def test_output_open_failure(tmp_path):
    write_tree(tmp_path)
    out = tmp_path / "missing" / "config.html"

    assert main(["-o", str(out), str(tmp_path)]) == ExitCode.OUTFILE_OPEN_FAILURE


def test_missing_root_kconfig(tmp_path):
    assert main([str(tmp_path)]) == ExitCode.KCONFIG_OPEN_FAILURE


def test_template_failure(tmp_path):
    write_tree(tmp_path)
    template = tmp_path / "settings.ini"
    template.write_text("[x]\n")

    assert main(["-t", str(template), str(tmp_path)]) == ExitCode.TEMPLATE_LOAD_FAILURE


def test_nesting_overflow_leaves_no_output(tmp_path):
    write_tree(tmp_path, 'menu "Deep"\n' * 100)
    out = tmp_path / "config.html"

    assert main(["-o", str(out), str(tmp_path)]) == ExitCode.NESTING_TOO_DEEP
    assert not out.exists()


def test_dependency_underflow_exit_code(tmp_path):
    write_tree(tmp_path, "endif\n")

    assert main([str(tmp_path)]) == ExitCode.DEPENDENCIES_UNDERFLOW


def test_generate_html_is_reentrant(tmp_path):
    write_tree(tmp_path)
    config = dict(get_default_config(), include_date=False)

    assert generate_html(config, str(tmp_path)) == generate_html(config, str(tmp_path))


def test_non_utf8_help_text(tmp_path):
    (tmp_path / "Kconfig").write_bytes(b'config FOO\n\tbool "Foo"\n\thelp\n\t  Author: Jos\xe9\n')
    out = tmp_path / "config.html"

    assert main(["-o", str(out), str(tmp_path)]) == ExitCode.SUCCESS
    assert 'href="#FOO"' in out.read_text()


def test_unexpected_failure_removes_output(tmp_path, monkeypatch):
    write_tree(tmp_path)
    out = tmp_path / "config.html"

    def explode(config, kconfig_root):
        raise RuntimeError("boom")

    monkeypatch.setattr("kconfig2html.cli.generate_html", explode)

    with pytest.raises(RuntimeError):
        main(["-o", str(out), str(tmp_path)])
    assert not out.exists()


def test_staging_file_failure(tmp_path, monkeypatch):
    write_tree(tmp_path)
    out = tmp_path / "config.html"

    def no_space(*args, **kwargs):
        raise OSError(28, "No space left on device")

    monkeypatch.setattr(tempfile, "SpooledTemporaryFile", no_space)

    assert main(["-o", str(out), str(tmp_path)]) == ExitCode.TMPFILE_OPEN_FAILURE
    assert not out.exists()


def test_broken_python_template(tmp_path):
    write_tree(tmp_path)
    template = tmp_path / "settings.py"
    template.write_text("CONFIG = {\n")
    out = tmp_path / "config.html"

    assert main(["-o", str(out), "-t", str(template), str(tmp_path)]) == ExitCode.TEMPLATE_LOAD_FAILURE
    assert not out.exists()
