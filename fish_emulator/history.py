"""Recall buffer behind the previous/next command keys."""

from typing import List, Optional


class RecallBuffer:
    """Raw submitted lines plus a cursor for walking back and forth.

    The cursor sits at ``len(prev_commands)`` when no recall is in progress.
    The buffer is independent from the transcript: it holds every submitted
    line as typed, including failures and empty lines.
    """

    def __init__(self, prev_commands: Optional[List[str]] = None):
        self.prev_commands: List[str] = list(prev_commands or [])
        self.prev_commands_index: int = len(self.prev_commands)

    def append(self, raw: str) -> None:
        self.prev_commands.append(raw)
        self.prev_commands_index = len(self.prev_commands)

    def has_prev_command(self) -> bool:
        return self.prev_commands_index > 0

    def get_prev_command(self) -> str:
        """Step back and return the line under the cursor.

        Callers check ``has_prev_command`` first.
        """
        self.prev_commands_index -= 1
        return self.prev_commands[self.prev_commands_index]

    def has_next_command(self) -> bool:
        # Only the last recorded line counts as "no further history"; an
        # empty buffer, or a cursor past the end, still reports True.
        return self.prev_commands_index != len(self.prev_commands) - 1

    def get_next_command(self) -> Optional[str]:
        """Step forward and return the line under the cursor.

        Stepping past the last line leaves the cursor at the end and
        returns None.
        """
        self.prev_commands_index = min(self.prev_commands_index + 1, len(self.prev_commands))
        if self.prev_commands_index < len(self.prev_commands):
            return self.prev_commands[self.prev_commands_index]
        return None
