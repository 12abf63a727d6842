"""
Fish Emulator

An in-process shell simulator: it parses typed command lines, runs them
against an in-memory filesystem and keeps the session transcript, the
working directory and a recall buffer of submitted lines.

    >>> from fish_emulator import Fish, SessionState
    >>> fish = Fish()
    >>> state = fish.execute("mkdir work; cd work && pwd", SessionState())
    >>> state.history[-1].value
    '/work'
"""

from fish_emulator.autocomplete import autocomplete
from fish_emulator.commands import BUILTINS, HELP_TEXT
from fish_emulator.fish import Fish
from fish_emulator.history import RecallBuffer
from fish_emulator.messages import MESSAGES, CommandError
from fish_emulator.parser import ParsedInvocation, parse, parse_input
from fish_emulator.state import HistoryEntry, SessionState
from fish_emulator.vfs import Directory, File, resolve_path

__all__ = [
    "BUILTINS",
    "HELP_TEXT",
    "MESSAGES",
    "CommandError",
    "Directory",
    "File",
    "Fish",
    "HistoryEntry",
    "ParsedInvocation",
    "RecallBuffer",
    "SessionState",
    "autocomplete",
    "parse",
    "parse_input",
    "resolve_path",
]
