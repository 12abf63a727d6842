#!/usr/bin/env python3
"""
Fish Emulator - interactive front end

A small ``cmd.Cmd`` loop around ``Fish``. Each line typed at the prompt is
handed to ``Fish.execute`` and the new transcript lines are printed in
colour. Tab completion asks ``Fish.autocomplete`` for a suggestion when the
readline module is present. Nothing here touches the real filesystem apart
from reading the optional YAML config.

Run:
  python -m fish_emulator.shell                  # uses ./fish.yaml if present
  python -m fish_emulator.shell --config my.yaml
  python -m fish_emulator.shell -c "mkdir work; cd work && pwd"
"""

import argparse
import logging
import sys
from cmd import Cmd
from typing import List, Optional

from colorama import Fore, Style, init as colorama_init

from fish_emulator.config import DEFAULT_CONFIG, ShellConfig, load_config
from fish_emulator.fish import Fish
from fish_emulator.state import HistoryEntry, SessionState

# optional module
try:
    import readline
except ImportError:
    readline = None

EXIT_WORDS = {"exit", "quit"}


# ---------- Utilities ----------
def c(text: str, color: str = Fore.CYAN) -> str:
    """Colourise text for terminal display."""
    lines = str(text).splitlines() or [""]
    return "\n".join(f"{color}{ln}{Style.RESET_ALL}" for ln in lines)


def render_entry(entry: HistoryEntry, prefix: str) -> str:
    """Render a transcript line the way the prompt shows it."""
    if entry.cwd is not None:
        return f"{Fore.GREEN}{prefix} ~{entry.cwd} ${Style.RESET_ALL} {entry.value}"
    return c(entry.value, Fore.CYAN)


# ---------- Shell ----------
class FishShell(Cmd):
    intro = c("Fish Emulator - type 'help' to list commands, 'exit' to leave.", Fore.MAGENTA)

    def __init__(self, config: Optional[ShellConfig] = None, fish: Optional[Fish] = None, **kwargs):
        super().__init__(**kwargs)
        self.config = config or ShellConfig()
        self.fish = fish or Fish(self.config.extensions(), self.config.messages)
        self.state: SessionState = self.config.initial_state()

    @property
    def prompt(self) -> str:
        return f"{Fore.GREEN}{self.config.prefix} ~{self.state.cwd} ${Style.RESET_ALL} "

    def write(self, text: str) -> None:
        self.stdout.write(text + "\n")

    # ---- core overrides
    def preloop(self):
        if readline:
            # only whitespace ends a word, so paths complete as one token
            readline.set_completer_delims(" \t\n")
        for entry in self.state.history:
            self.write(render_entry(entry, self.config.prefix))

    def onecmd(self, line: str):
        if line == "EOF":
            self.write("")
            return True
        if line.strip() in EXIT_WORDS:
            self.write(c("Bye!", Fore.MAGENTA))
            return True
        # empty lines go through too, they belong in the transcript
        self.run_line(line)
        return False

    def run_line(self, line: str) -> List[HistoryEntry]:
        """Execute ``line`` and print the transcript lines it produced."""
        old = self.state.history
        echo = HistoryEntry(line, cwd=self.state.cwd)
        self.state = self.fish.execute(line, self.state)
        history = self.state.history
        if history[:len(old) + 1] != old + (echo,):
            # the transcript was cleared
            self.stdout.write("\033c")
            new = list(history)
        else:
            # skip the echo of what was just typed
            new = list(history[len(old) + 1:])
        for entry in new:
            self.write(render_entry(entry, self.config.prefix))
        return new

    # ---- tab completion
    def completenames(self, text, *ignored):
        suggestion = self.fish.autocomplete(text, self.state)
        return [suggestion] if suggestion else []

    def completedefault(self, text: str, line: str, begidx: int, endidx: int):
        suggestion = self.fish.autocomplete(line[:endidx], self.state)
        return [suggestion.split(" ")[-1]] if suggestion else []


# ---------- main ----------
def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="In-memory shell emulator")
    parser.add_argument("--config", default=DEFAULT_CONFIG, help="YAML config file (default: %(default)s)")
    parser.add_argument("--prefix", help="prompt prefix, e.g. user@host")
    parser.add_argument("-c", "--command", help="run one line, print its output and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config(args.config)
    if args.prefix:
        config.prefix = args.prefix
    if args.command is not None:
        FishShell(config).run_line(args.command)
        return 0
    colorama_init(autoreset=True)
    FishShell(config).cmdloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
