"""
Command executor.

``Fish`` owns the command registry and the recall buffer and runs submitted
lines against a ``SessionState``. It never raises for bad input: unknown
commands, missing paths and handler failures all end up as transcript lines.
"""

import logging
from collections import OrderedDict
from functools import partial
from typing import Any, Dict, Optional, Tuple

from fish_emulator.autocomplete import autocomplete
from fish_emulator.commands import BUILTINS, Handler, h_help
from fish_emulator.history import RecallBuffer
from fish_emulator.messages import MESSAGES, CommandError, render
from fish_emulator.parser import ParsedInvocation, parse
from fish_emulator.state import HistoryEntry, SessionState

logger = logging.getLogger(__name__)


class Fish:
    def __init__(
        self,
        extensions: Optional[Dict[str, Handler]] = None,
        messages: Optional[Dict[str, str]] = None,
        recall: Optional[RecallBuffer] = None,
    ):
        self.commands: "OrderedDict[str, Handler]" = OrderedDict(BUILTINS)
        # help lists this registry, including extensions added later
        self.commands["help"] = partial(h_help, registry=self.commands)
        # extensions override same-named built-ins
        self.commands.update(extensions or {})
        self.messages: Dict[str, str] = dict(MESSAGES)
        self.messages.update(messages or {})
        self.recall = recall if recall is not None else RecallBuffer()

    # ---- execution
    def execute(self, raw: str, state: SessionState) -> SessionState:
        """Run a submitted line and return the resulting snapshot."""
        self.recall.append(raw)
        new_state = state.append(HistoryEntry(raw, cwd=state.cwd))
        if not raw.strip():
            return new_state
        for group in parse(raw):
            for inv in group:
                new_state, ok = self._run(inv, new_state)
                if not ok:
                    logger.debug("skipping rest of group after %r", inv.input)
                    break
        return new_state

    def _run(self, inv: ParsedInvocation, state: SessionState) -> Tuple[SessionState, bool]:
        # stray separators leave empty steps behind; they do nothing
        if not inv.name:
            return state, True
        handler = self.commands.get(inv.name)
        if handler is None:
            logger.info("unknown command %r", inv.name)
            return self._fail(state, CommandError("COMMAND_NOT_FOUND", inv.name)), False
        logger.debug("running %r args=%s named=%s flags=%s", inv.name, inv.args, inv.named, inv.flags)
        try:
            out = handler(state, inv)
        except CommandError as e:
            logger.info("%s failed: %s", inv.name, e)
            return self._fail(state, e), False
        except Exception:
            logger.exception("handler for %r raised", inv.name)
            return self._fail(state, CommandError("COMMAND_FAILED", inv.name)), False
        return self._apply(state, out), True

    def _fail(self, state: SessionState, error: CommandError) -> SessionState:
        return state.output(render(error, self.messages))

    @staticmethod
    def _apply(state: SessionState, out: Any) -> SessionState:
        if out is None:
            return state
        if isinstance(out, SessionState):
            return out
        return state.output(str(out))

    # ---- completion
    def autocomplete(self, partial_input: str, state: SessionState) -> Optional[str]:
        return autocomplete(partial_input, state, self.commands.keys())

    # ---- recall
    def has_prev_command(self) -> bool:
        return self.recall.has_prev_command()

    def get_prev_command(self) -> str:
        return self.recall.get_prev_command()

    def has_next_command(self) -> bool:
        return self.recall.has_next_command()

    def get_next_command(self) -> Optional[str]:
        return self.recall.get_next_command()
