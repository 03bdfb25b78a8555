"""Tests for PO/POT reference rewriting."""

import pytest

from svelte_gettext.catalog.reference_rewriter import (
    ReferenceRewriter,
    build_reference_map,
    extract_string,
    format_reference_line,
    read_string,
    unescape_po,
)
from svelte_gettext.models.extraction import ExtractionUnit, Kind, Location


@pytest.fixture
def reference_map():
    return {
        ("gettext", "Save"): [
            Location("assets/svelte/Button.svelte", 3),
            Location("assets/svelte/Form.svelte", 10),
        ],
        ("ngettext", "%{n} item", "%{n} items"): [Location("assets/svelte/List.svelte", 7)],
        ("gettext", "Hello"): [Location("assets/svelte/Hello.svelte", 1)],
    }


class TestRewrite:
    def test_replaces_intermediate_references(self, rewriter, sample_pot, reference_map):
        new_text, count = rewriter.rewrite(sample_pot, reference_map)
        lines = new_text.split("\n")

        assert count == 2
        assert "#: assets/svelte/Button.svelte:3 assets/svelte/Form.svelte:10" in lines
        assert "#: assets/svelte/List.svelte:7" in lines
        assert "svelte_strings.ex" not in new_text

    def test_other_references_untouched(self, rewriter, sample_pot, reference_map):
        new_text, _ = rewriter.rewrite(sample_pot, reference_map)
        assert "#: lib/my_app_web/live/page_live.ex:12" in new_text.split("\n")
        assert "assets/svelte/Hello.svelte" not in new_text

    def test_everything_else_byte_identical(self, rewriter, sample_pot, reference_map):
        new_text, _ = rewriter.rewrite(sample_pot, reference_map)

        old_lines = sample_pot.split("\n")
        new_lines = new_text.split("\n")
        assert len(old_lines) == len(new_lines)
        for old, new in zip(old_lines, new_lines):
            if "svelte_strings.ex" not in old:
                assert old == new

    def test_idempotent(self, rewriter, sample_pot, reference_map):
        first_text, first_count = rewriter.rewrite(sample_pot, reference_map)
        second_text, second_count = rewriter.rewrite(first_text, reference_map)

        assert first_count == 2
        assert second_count == 0
        assert second_text == first_text

    def test_unknown_key_left_alone(self, rewriter, sample_pot):
        new_text, count = rewriter.rewrite(sample_pot, {("gettext", "Other"): [Location("x.svelte", 1)]})

        assert count == 0
        assert new_text == sample_pot

    def test_plural_entry_not_matched_by_simple_key(self, rewriter, sample_pot):
        reference_map = {("gettext", "%{n} item"): [Location("x.svelte", 1)]}
        new_text, count = rewriter.rewrite(sample_pot, reference_map)

        assert count == 0
        assert "#: lib/my_app_web/svelte_strings.ex:40" in new_text

    def test_escaped_msgid(self, rewriter):
        text = '#: lib/app/svelte_strings.ex:5\nmsgid "Say \\"hi\\""\nmsgstr ""\n'
        reference_map = {("gettext", 'Say "hi"'): [Location("a.svelte", 2)]}

        new_text, count = rewriter.rewrite(text, reference_map)

        assert count == 1
        assert new_text == '#: a.svelte:2\nmsgid "Say \\"hi\\""\nmsgstr ""\n'

    def test_blank_line_resets_pending_references(self, rewriter):
        text = '#: lib/app/svelte_strings.ex:5\n\nmsgid "Save"\nmsgstr ""\n'
        new_text, count = rewriter.rewrite(text, {("gettext", "Save"): [Location("a.svelte", 1)]})

        assert count == 0
        assert new_text == text

    def test_lookahead_keeps_lines_between_msgid_and_plural(self, rewriter):
        text = (
            "#: lib/app/svelte_strings.ex:9\n"
            'msgid "One"\n'
            "# translator note\n"
            'msgid_plural "Many"\n'
            'msgstr[0] ""\n'
            'msgstr[1] ""\n'
        )
        new_text, count = rewriter.rewrite(text, {("ngettext", "One", "Many"): [Location("a.svelte", 4)]})

        assert count == 1
        assert new_text == text.replace("lib/app/svelte_strings.ex:9", "a.svelte:4")

    def test_lookahead_stops_at_next_entry(self, rewriter):
        text = (
            "#: lib/app/svelte_strings.ex:1\n"
            'msgid "First"\n'
            'msgstr ""\n'
            "\n"
            'msgid "Second"\n'
            'msgid_plural "Seconds"\n'
            'msgstr[0] ""\n'
        )
        new_text, count = rewriter.rewrite(text, {("gettext", "First"): [Location("a.svelte", 1)]})

        assert count == 1
        assert new_text.startswith("#: a.svelte:1\n")

    def test_header_entry_is_not_an_entry(self, rewriter):
        text = '#: lib/app/svelte_strings.ex:1\nmsgid ""\nmsgstr ""\n'
        new_text, count = rewriter.rewrite(text, {("gettext", ""): [Location("a.svelte", 1)]})

        assert count == 0
        assert new_text == text

    def test_crlf_line_endings_preserved(self, rewriter):
        text = '#: lib/app/svelte_strings.ex:3\r\nmsgid "Save"\r\nmsgstr ""\r\n'
        new_text, count = rewriter.rewrite(text, {("gettext", "Save"): [Location("a.svelte", 8)]})

        assert count == 1
        assert new_text == '#: a.svelte:8\r\nmsgid "Save"\r\nmsgstr ""\r\n'

    def test_multiple_reference_lines(self, rewriter):
        text = (
            "#: lib/app/svelte_strings.ex:3\n"
            "#: lib/app/live/page.ex:20\n"
            'msgid "Save"\n'
            'msgstr "Speichern"\n'
        )
        new_text, count = rewriter.rewrite(text, {("gettext", "Save"): [Location("a.svelte", 8)]})

        assert count == 1
        assert new_text.split("\n")[:2] == ["#: a.svelte:8", "#: lib/app/live/page.ex:20"]

    def test_mixed_reference_line_untouched(self, rewriter):
        text = (
            "#: lib/app/live/page.ex:12 lib/app/svelte_strings.ex:40\n"
            'msgid "Save"\n'
            'msgstr ""\n'
        )
        new_text, count = rewriter.rewrite(text, {("gettext", "Save"): [Location("a.svelte", 8)]})

        assert count == 0
        assert new_text == text

    def test_similar_file_name_is_not_the_marker(self, rewriter):
        text = '#: lib/not_svelte_strings.ex:3\nmsgid "Save"\nmsgstr ""\n'
        new_text, count = rewriter.rewrite(text, {("gettext", "Save"): [Location("a.svelte", 8)]})

        assert count == 0
        assert new_text == text

    def test_several_marker_references_on_one_line(self, rewriter):
        text = '#: lib/app/svelte_strings.ex:3 lib/app/svelte_strings.ex:9\nmsgid "Save"\nmsgstr ""\n'
        new_text, count = rewriter.rewrite(text, {("gettext", "Save"): [Location("a.svelte", 8)]})

        assert count == 1
        assert new_text.startswith("#: a.svelte:8\n")

    def test_wrapped_msgid(self, rewriter):
        text = (
            "#: lib/app/svelte_strings.ex:1\n"
            'msgid ""\n'
            '"A rather long sentence that "\n'
            '"continues here"\n'
            'msgstr ""\n'
        )
        reference_map = {
            ("gettext", "A rather long sentence that continues here"): [Location("a.svelte", 2)]
        }
        new_text, count = rewriter.rewrite(text, reference_map)

        assert count == 1
        assert new_text == text.replace("lib/app/svelte_strings.ex:1", "a.svelte:2")

    def test_custom_marker(self):
        rewriter = ReferenceRewriter(intermediate_marker="generated/strings.py")
        text = '#: generated/strings.py:3\nmsgid "Save"\nmsgstr ""'
        new_text, count = rewriter.rewrite(text, {("gettext", "Save"): [Location("a.svelte", 8)]})

        assert count == 1
        assert new_text == '#: a.svelte:8\nmsgid "Save"\nmsgstr ""'

    def test_empty_text(self, rewriter):
        assert rewriter.rewrite("", {}) == ("", 0)


class TestHelpers:
    def test_unescape_po(self):
        assert unescape_po("a\\nb") == "a\nb"
        assert unescape_po("tab\\there") == "tab\there"
        assert unescape_po('\\"q\\"') == '"q"'
        assert unescape_po("\\\\n") == "\\n"

    def test_extract_string(self):
        assert extract_string('msgid "Hello"') == "Hello"
        assert extract_string('msgid_plural "Hellos"') == "Hellos"
        assert extract_string("msgstr \"x\"") == ""

    def test_read_string_joins_continuation_lines(self):
        lines = ['msgid ""', '"Hello, "', '"world\\n"', 'msgstr ""']
        assert read_string(lines, 0) == "Hello, world\n"

    def test_is_intermediate(self, rewriter):
        assert rewriter.is_intermediate("svelte_strings.ex")
        assert rewriter.is_intermediate("lib/app_web/svelte_strings.ex")
        assert not rewriter.is_intermediate("lib/my_svelte_strings.ex")
        assert not rewriter.is_intermediate("lib/svelte_strings.exs")

    def test_format_reference_line(self):
        line = format_reference_line([Location("a.svelte", 1), ("b.svelte", 22)])
        assert line == "#: a.svelte:1 b.svelte:22"

    def test_build_reference_map(self):
        units = [
            ExtractionUnit("Save", Kind.GETTEXT, locations=(Location("b.svelte", 2),)),
            ExtractionUnit("Save", Kind.GETTEXT, locations=(Location("a.svelte", 1),)),
            ExtractionUnit("Item", Kind.NGETTEXT, "Items", (Location("c.svelte", 3),)),
        ]
        reference_map = build_reference_map(units)

        assert reference_map[("gettext", "Save")] == [Location("a.svelte", 1), Location("b.svelte", 2)]
        assert reference_map[("ngettext", "Item", "Items")] == [Location("c.svelte", 3)]
