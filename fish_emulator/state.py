"""Session snapshot threaded through every command."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional, Tuple

from fish_emulator.vfs import Directory


@dataclass(frozen=True)
class HistoryEntry:
    """One transcript line.

    ``cwd`` is only set on the echo of a submitted line and holds the working
    directory at submission time.
    """
    value: str
    cwd: Optional[str] = None


@dataclass(frozen=True)
class SessionState:
    history: Tuple[HistoryEntry, ...] = ()
    structure: Directory = field(default_factory=lambda: Directory(""))
    cwd: str = ""
    settings: Dict[str, Any] = field(default_factory=dict)

    def append(self, *entries: HistoryEntry) -> "SessionState":
        return replace(self, history=self.history + tuple(entries))

    def output(self, value: str) -> "SessionState":
        """Append a plain output line."""
        return self.append(HistoryEntry(value))

    def update(self, **changes: Any) -> "SessionState":
        return replace(self, **changes)
