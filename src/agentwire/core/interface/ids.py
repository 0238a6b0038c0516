"""Per-request tool-use id generation."""

import secrets


class ToolUseIdFactory:
    """Issue tool-use ids unique within the owning request.

    Each factory holds its own counter and a random token, so ids from
    concurrently running requests never collide and no state is shared
    between them.
    """

    def __init__(self, prefix: str = "toolu_cli") -> None:
        self._prefix = prefix
        self._token = secrets.token_hex(4)
        self._counter = 0

    def next_id(self) -> str:
        self._counter += 1
        return f"{self._prefix}_{self._counter}_{self._token}"

    def __call__(self) -> str:
        return self.next_id()
