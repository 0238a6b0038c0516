"""Flatten canonical history into the plain-text prompt fed to the CLI.

Tool blocks are rendered with the same ``<tool_call>`` / ``<tool_result>``
markers the model is told to emit, so the transcript and the model's own
output share one format. Images are written to disk and referenced by path.

Image files are never removed by this module; a long-running host must
sweep the image directory itself.
"""

from __future__ import annotations

import base64
import json
import secrets
import tempfile
import time
from collections.abc import Sequence
from pathlib import Path

from agentwire.core.interface.models import (
    CanonicalMessage,
    ContentBlock,
    ImageBlock,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)

IMAGE_DIR_NAME = "agentwire-cli-images"


def format_messages_as_prompt(
    messages: Sequence[CanonicalMessage], image_dir: str | Path | None = None
) -> str:
    """Render *messages* as ``Human:`` / ``Assistant:`` turns."""
    turns = []
    for msg in messages:
        speaker = "Human" if msg.role == "user" else "Assistant"
        parts = (_format_block(block, image_dir) for block in msg.content)
        body = "\n".join(part for part in parts if part)
        turns.append(f"{speaker}: {body}")
    return "\n\n".join(turns)


def _format_block(block: ContentBlock, image_dir: str | Path | None) -> str:
    if isinstance(block, TextBlock):
        return block.text
    if isinstance(block, ToolUseBlock):
        call = json.dumps({"name": block.name, "arguments": block.input}, ensure_ascii=False)
        return f"<tool_call>\n{call}\n</tool_call>"
    if isinstance(block, ToolResultBlock):
        return f"<tool_result>\n{block.content}\n</tool_result>"
    image: ImageBlock = block
    path = write_temp_image(image.source.media_type, image.source.data, image_dir)
    return f"[Image: {path}]"


def write_temp_image(
    media_type: str, data: str, image_dir: str | Path | None = None
) -> Path:
    """Decode base64 *data* into a new file and return its path."""
    subtype = media_type.split("/", 1)[1] if "/" in media_type else ""
    ext = subtype.replace("jpeg", "jpg") or "png"
    directory = Path(image_dir) if image_dir else Path(tempfile.gettempdir()) / IMAGE_DIR_NAME
    directory.mkdir(parents=True, exist_ok=True)

    path = directory / f"img-{int(time.time() * 1000)}-{secrets.token_hex(6)}.{ext}"
    path.write_bytes(base64.b64decode(data))
    return path
