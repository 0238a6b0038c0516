"""Tests for ``agentwire convert`` CLI command."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from click.testing import CliRunner

from agentwire.cli import main

if TYPE_CHECKING:
    from pathlib import Path

HISTORY = [
    {"role": "user", "content": "What is the weather?", "turnId": "t1"},
    {
        "role": "assistant",
        "content": [{"type": "tool_use", "id": "c1", "name": "forecast", "input": {"city": "Rome"}}],
    },
    {"role": "user", "content": [{"type": "tool_result", "tool_use_id": "c1", "content": "sunny"}]},
]


def _write(tmp_path: Path, name: str, data: object) -> Path:
    f = tmp_path / name
    f.write_text(json.dumps(data))
    return f


class TestConvertCommand:
    def test_openai_request(self, tmp_path: Path) -> None:
        f = _write(tmp_path, "history.json", HISTORY)
        result = CliRunner().invoke(
            main, ["convert", "openai", str(f), "--model", "gpt-4o", "--system", "Be brief"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["path"] == "/api/openai/v1/chat/completions"
        messages = data["body"]["messages"]
        assert [m["role"] for m in messages] == ["system", "user", "assistant", "tool"]
        assert "turnId" not in json.dumps(messages)

    def test_gemini_request_with_tools(self, tmp_path: Path) -> None:
        f = _write(tmp_path, "history.json", HISTORY)
        tools = _write(
            tmp_path,
            "tools.json",
            [{"name": "forecast", "input_schema": {"type": "object", "properties": {"city": {"type": "string"}}}}],
        )
        result = CliRunner().invoke(
            main, ["convert", "gemini", str(f), "--model", "gemini-2.5-flash", "--tools", str(tools)]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        response = data["body"]["contents"][2]["parts"][0]["functionResponse"]
        assert response == {"name": "forecast", "response": {"result": "sunny"}}
        assert data["body"]["tools"][0]["functionDeclarations"][0]["parameters"]["type"] == "OBJECT"

    def test_normalize(self, tmp_path: Path) -> None:
        f = _write(
            tmp_path,
            "openai.json",
            [
                {"role": "user", "content": "hi"},
                {"role": "assistant", "content": None, "tool_calls": [
                    {"id": "c1", "type": "function", "function": {"name": "f", "arguments": "{\"a\": 1}"}}
                ]},
                {"role": "tool", "tool_call_id": "c1", "content": "done"},
            ],
        )
        result = CliRunner().invoke(main, ["convert", "openai", str(f), "--normalize"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data[1]["content"][0] == {"type": "tool_use", "id": "c1", "name": "f", "input": {"a": 1}}
        assert data[2]["content"][0]["tool_use_id"] == "c1"

    def test_not_a_list(self, tmp_path: Path) -> None:
        f = _write(tmp_path, "bad.json", {"role": "user"})
        result = CliRunner().invoke(main, ["convert", "anthropic", str(f)])

        assert result.exit_code == 1
        assert "Conversion error" in result.output

    def test_invalid_message(self, tmp_path: Path) -> None:
        f = _write(tmp_path, "bad.json", [{"role": "system", "content": "x"}])
        result = CliRunner().invoke(main, ["convert", "anthropic", str(f)])

        assert result.exit_code == 1
        assert "Conversion error" in result.output
