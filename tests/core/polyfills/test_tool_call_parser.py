"""Tests for in-band tool-call extraction."""

from agentwire.core.interface.models import ToolCallSite
from agentwire.core.polyfills.tool_call_parser import (
    ToolCallParser,
    drop_rehearsals,
    extract_tool_calls,
)


class TestToolCallParser:
    def setup_method(self) -> None:
        self.parser = ToolCallParser()

    def test_plain_text(self) -> None:
        result = self.parser.parse("  Just an answer.  ")
        assert result.text_parts == ["Just an answer."]
        assert result.tool_calls == []

    def test_trailing_text_dropped_after_call(self) -> None:
        result = self.parser.parse('before <tool_call>{"name":"x","arguments":{}}</tool_call> after')
        assert result.text_parts == ["before"]
        assert result.tool_calls == [ToolCallSite(name="x", arguments={})]

    def test_multiple_calls_with_text_between(self) -> None:
        text = (
            "Step one.\n"
            '<tool_call>\n{"name": "read", "arguments": {"path": "a.txt"}}\n</tool_call>\n'
            "Step two.\n"
            '<tool_call>{"name": "read", "arguments": {"path": "b.txt"}}</tool_call>'
        )
        result = self.parser.parse(text)
        assert result.text_parts == ["Step one.", "Step two."]
        assert [c.arguments["path"] for c in result.tool_calls] == ["a.txt", "b.txt"]

    def test_hallucinated_results_removed(self) -> None:
        text = (
            '<tool_call>{"name": "search", "arguments": {"q": "x"}}</tool_call>'
            "<tool_result>fake data</tool_result>"
            "So the answer is 42."
        )
        result = self.parser.parse(text)
        assert result.text_parts == []
        assert result.tool_calls[0].name == "search"

    def test_tool_result_removed_from_plain_text(self) -> None:
        result = self.parser.parse("A <tool_result>\nnoise\n</tool_result> B")
        assert result.text_parts == ["A  B"]

    def test_invalid_json_kept_as_text(self) -> None:
        marker = "<tool_call>{not json}</tool_call>"
        result = self.parser.parse(f"Try {marker} done")
        assert result.tool_calls == []
        assert result.text_parts == ["Try", marker, "done"]

    def test_non_object_json_kept_as_text(self) -> None:
        result = self.parser.parse("<tool_call>[1, 2]</tool_call>")
        assert result.tool_calls == []
        assert result.text_parts == ["<tool_call>[1, 2]</tool_call>"]

    def test_code_point_escapes_repaired(self) -> None:
        text = '<tool_call>{"name": "say", "arguments": {"text": "hi \\u{1F600}"}}</tool_call>'
        result = self.parser.parse(text)
        assert result.tool_calls[0].arguments == {"text": "hi \U0001F600"}

    def test_code_point_escapes_for_json_syntax_characters(self) -> None:
        text = '<tool_call>{"name": "say", "arguments": {"text": "a\\u{22}b\\u{5C}c\\u{A}"}}</tool_call>'
        result = self.parser.parse(text)
        assert result.tool_calls[0].arguments == {"text": "a\"b\\c\n"}

    def test_out_of_range_code_point_kept_as_text(self) -> None:
        text = '<tool_call>{"name": "say", "arguments": {"text": "\\u{FFFFFFFFFF}"}}</tool_call>'
        result = self.parser.parse(text)
        assert result.tool_calls == []
        assert result.text_parts == [text]

    def test_missing_name_and_bad_arguments(self) -> None:
        result = self.parser.parse('<tool_call>{"arguments": "oops"}</tool_call>')
        assert result.tool_calls == [ToolCallSite(name="unknown", arguments={})]

    def test_rehearsal_applied(self) -> None:
        text = (
            '<tool_call>{"name": "search", "arguments": {}}</tool_call>'
            '<tool_call>{"name": "search", "arguments": {"query": "cats"}}</tool_call>'
        )
        result = extract_tool_calls(text)
        assert result.tool_calls == [ToolCallSite(name="search", arguments={"query": "cats"})]


class TestDropRehearsals:
    def test_search_and_ping(self) -> None:
        calls = [
            ToolCallSite(name="search", arguments={}),
            ToolCallSite(name="ping", arguments={}),
            ToolCallSite(name="search", arguments={"query": "cats"}),
        ]
        assert drop_rehearsals(calls) == [
            ToolCallSite(name="ping", arguments={}),
            ToolCallSite(name="search", arguments={"query": "cats"}),
        ]

    def test_repeated_empty_calls_kept(self) -> None:
        calls = [ToolCallSite(name="ping"), ToolCallSite(name="ping")]
        assert drop_rehearsals(calls) == calls

    def test_empty(self) -> None:
        assert drop_rehearsals([]) == []
