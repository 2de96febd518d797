"""Tests for smarttabs.host.BufferHost -- the in-memory reference editor."""

from __future__ import annotations

import pytest

from smarttabs.host import BufferHost, Cursor, EditorHost, HostOptions

from .helpers import failing_oracle, fixed_oracle


class TestBufferBasics:
    def test_satisfies_editor_host_protocol(self) -> None:
        assert isinstance(BufferHost(), EditorHost)

    def test_empty_buffer_has_one_line(self) -> None:
        host = BufferHost()
        assert host.line_count() == 1
        assert host.get_line(1) == ""

    def test_from_text_keeps_trailing_newline(self) -> None:
        host = BufferHost.from_text("a\n\tb\n")
        assert host.lines == ["a", "\tb"]
        assert host.text == "a\n\tb\n"

    def test_from_text_without_trailing_newline(self) -> None:
        host = BufferHost.from_text("a\nb")
        assert host.text == "a\nb"

    def test_from_text_keeps_crlf_out_of_line_bodies(self) -> None:
        host = BufferHost.from_text("a\r\n\tb\r\nc")
        assert host.lines == ["a", "\tb", "c"]
        assert host.text == "a\r\n\tb\r\nc"

    def test_from_text_keeps_mixed_endings(self) -> None:
        host = BufferHost.from_text("a\r\nb\nc\r\n")
        host.set_line(2, "\tb")
        assert host.text == "a\r\n\tb\nc\r\n"

    def test_line_break_reuses_crlf_ending(self) -> None:
        host = BufferHost.from_text("ab\r\n")
        host.set_cursor(1, 2)
        host.insert_line_break()
        assert host.text == "a\r\nb\r\n"

    def test_line_break_on_unterminated_last_line(self) -> None:
        host = BufferHost.from_text("x\r\nab")
        host.set_cursor(2, 2)
        host.insert_line_break()
        assert host.text == "x\r\na\r\nb"

    def test_out_of_range_line(self) -> None:
        host = BufferHost(["a"])
        with pytest.raises(IndexError):
            host.get_line(2)
        with pytest.raises(IndexError):
            host.set_line(0, "x")

    def test_newline_in_line_rejected(self) -> None:
        with pytest.raises(ValueError):
            BufferHost(["a"]).set_line(1, "a\nb")


class TestCursor:
    def test_set_cursor_clamps_to_line(self) -> None:
        host = BufferHost(["abc"])
        host.set_cursor(1, 10)
        assert host.get_cursor() == Cursor(1, 4)
        host.set_cursor(1, 0)
        assert host.get_cursor() == Cursor(1, 1)

    def test_virtual_column_of_uses_tabstop(self) -> None:
        host = BufferHost(["\tx"], options=HostOptions(tabstop=4))
        assert host.virtual_column_of(1, 2) == 4

    def test_insert_text_moves_cursor(self) -> None:
        host = BufferHost(["ac"])
        host.set_cursor(1, 2)
        host.insert_text("b")
        assert host.get_line(1) == "abc"
        assert host.get_cursor() == Cursor(1, 3)


class TestNativeLineBreak:
    """Enter splits the line and applies the host's own auto-indent."""

    def test_copies_previous_indent_without_oracle(self) -> None:
        host = BufferHost(["\tfoo bar"])
        host.set_cursor(1, 5)
        host.insert_line_break()
        assert host.lines == ["\tfoo", "\tbar"]
        assert host.get_cursor() == Cursor(2, 2)

    def test_uses_oracle_width_with_display_tabs(self) -> None:
        host = BufferHost(["x"], options=HostOptions(tabstop=4), oracle=fixed_oracle(6))
        host.set_cursor(1, 2)
        host.insert_line_break()
        assert host.lines == ["x", "\t  "]
        assert host.get_cursor() == Cursor(2, 4)

    def test_expandtab_indents_with_spaces(self) -> None:
        host = BufferHost(
            ["x"], options=HostOptions(tabstop=4, expandtab=True), oracle=fixed_oracle(6)
        )
        host.set_cursor(1, 2)
        host.insert_line_break()
        assert host.get_line(2) == " " * 6

    def test_oracle_failure_falls_back_to_previous_indent(self) -> None:
        host = BufferHost(["\tx"], oracle=failing_oracle(RuntimeError("boom")))
        host.set_cursor(1, 3)
        host.insert_line_break()
        assert host.get_line(2) == "\t"


class TestNativeOpenLine:
    """Opening a line continues line comments."""

    def test_open_below_continues_comment(self) -> None:
        host = BufferHost(["\t// note"])
        host.open_line_below()
        assert host.lines == ["\t// note", "\t// "]
        assert host.get_cursor() == Cursor(2, 5)

    def test_open_above_inserts_before_cursor_line(self) -> None:
        host = BufferHost(["# note"])
        host.open_line_above()
        assert host.lines == ["# ", "# note"]
        assert host.get_cursor() == Cursor(1, 3)

    def test_comment_continuation_can_be_disabled(self) -> None:
        host = BufferHost(["\t// note"], options=HostOptions(continue_comments=False))
        host.open_line_below()
        assert host.get_line(2) == "\t"

    def test_plain_line_opens_empty(self) -> None:
        host = BufferHost(["foo"])
        host.open_line_below()
        assert host.lines == ["foo", ""]
        assert host.get_cursor() == Cursor(2, 1)
