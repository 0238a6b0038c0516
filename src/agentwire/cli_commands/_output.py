"""Shared CLI output formatters."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.table import Table

from agentwire.core.interface.models import (  # noqa: TC001
    CanonicalMessage,
    ParsedAssistantResult,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)
from agentwire.core.pricing.models import CostEstimate  # noqa: TC001

console = Console()


def print_json(data: Any) -> None:
    console.print_json(json.dumps(data, default=str))


def print_parse_result(
    result: ParsedAssistantResult,
    cost: CostEstimate | None = None,
    *,
    as_json: bool = False,
) -> None:
    """Pretty-print a parsed assistant turn."""
    if as_json:
        data = result.model_dump(mode="json", by_alias=True, exclude_none=True)
        if cost is not None:
            data["cost"] = cost.model_dump()
        print_json(data)
        return

    console.print(f"\n[bold]Stop reason:[/bold] {result.stop_reason}")
    if result.usage is not None:
        console.print(
            f"  Tokens: {result.usage.input_tokens} in / {result.usage.output_tokens} out"
        )
    if cost is not None and cost.total_cost:
        console.print(f"  Cost: ${cost.total_cost:.6f}")
    print_blocks_table([result.message])


def print_blocks_table(messages: list[CanonicalMessage]) -> None:
    """Pretty-print the content blocks of *messages* as a table."""
    table = Table(title="Content Blocks")
    table.add_column("#", justify="right")
    table.add_column("Role", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Content")

    row = 0
    for msg in messages:
        for block in msg.content:
            table.add_row(str(row), msg.role, block.type, _summarize(block))
            row += 1

    console.print(table)


def _summarize(block: Any) -> str:
    if isinstance(block, TextBlock):
        return _truncate(block.text)
    if isinstance(block, ToolUseBlock):
        return _truncate(f"{block.name}({json.dumps(block.input)}) id={block.id}")
    if isinstance(block, ToolResultBlock):
        prefix = "error: " if block.is_error else ""
        return _truncate(f"{prefix}{block.content} -> {block.tool_use_id}")
    return f"{block.source.media_type} image"


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
