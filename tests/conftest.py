"""Shared fixtures for the test suite."""

import pytest

from svelte_gettext.extraction.scanner import Scanner
from svelte_gettext.catalog.reference_rewriter import ReferenceRewriter


SAMPLE_POT = """\
# SOME DESCRIPTIVE TITLE.
msgid ""
msgstr ""
"Content-Type: text/plain; charset=UTF-8\\n"

#: lib/my_app_web/svelte_strings.ex:39
#, elixir-autogen, elixir-format
msgid "Save"
msgstr ""

#: lib/my_app_web/svelte_strings.ex:40
#, elixir-autogen, elixir-format
msgid "%{n} item"
msgid_plural "%{n} items"
msgstr[0] ""
msgstr[1] ""

#: lib/my_app_web/live/page_live.ex:12
msgid "Hello"
msgstr ""
"""


@pytest.fixture
def scanner():
    return Scanner()


@pytest.fixture
def rewriter():
    return ReferenceRewriter(intermediate_marker="svelte_strings.ex")


@pytest.fixture
def sample_pot():
    return SAMPLE_POT


@pytest.fixture
def svelte_project(tmp_path, monkeypatch):
    """A project directory with a few Svelte components, used as cwd."""
    monkeypatch.chdir(tmp_path)
    svelte = tmp_path / "assets" / "svelte"
    (svelte / "forms").mkdir(parents=True)

    (svelte / "Button.svelte").write_text(
        '<script>\n'
        '  export let label;\n'
        '</script>\n'
        '<button>{gettext("Save")}</button>\n',
        encoding="utf-8",
    )
    (svelte / "forms" / "Form.svelte").write_text(
        '<!-- {gettext("Draft")} -->\n'
        '<p>{gettext("Save")}</p>\n'
        '<p>{ngettext("%{n} item", "%{n} items", count)}</p>\n',
        encoding="utf-8",
    )
    (svelte / "notes.txt").write_text('gettext("Ignored")\n', encoding="utf-8")
    return tmp_path
