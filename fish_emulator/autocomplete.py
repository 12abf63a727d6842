"""
Tab completion.

A lone word is completed against the command names. Once a command is
followed by another word, the last word is completed against the entries of
the directory it points into; command names are no longer candidates. A
suggestion is only made when exactly one candidate matches (prefix match,
case-sensitive).
"""

import re
from typing import Iterable, List, Optional

from fish_emulator.state import SessionState
from fish_emulator.vfs import SEP, Directory, resolve_path

_WHITESPACE = re.compile(r"\s+")


def _unique(candidates: Iterable[str], prefix: str) -> Optional[str]:
    matches = [c for c in candidates if c.startswith(prefix)]
    return matches[0] if len(matches) == 1 else None


def complete_command(partial: str, names: Iterable[str]) -> Optional[str]:
    return _unique(names, partial)


def complete_path(token: str, state: SessionState) -> Optional[str]:
    """Complete the final segment of ``token`` against the filesystem."""
    idx = token.rfind(SEP)
    head, tail = token[:idx + 1], token[idx + 1:]
    directory = resolve_path(state.structure, state.cwd, head or ".")
    if not isinstance(directory, Directory):
        return None
    match = _unique(directory.children, tail)
    return head + match if match is not None else None


def autocomplete(partial: str, state: SessionState, names: Iterable[str]) -> Optional[str]:
    """Return the completed line, or None when there is no single match."""
    tokens: List[str] = _WHITESPACE.split(partial.lstrip())
    if len(tokens) <= 1:
        return complete_command(tokens[0] if tokens else "", names)
    completed = complete_path(tokens[-1], state)
    if completed is None:
        return None
    return " ".join(tokens[:-1] + [completed])
