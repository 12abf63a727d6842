"""
Command-line parser.

A line is split on ``;`` into groups that always run, and each group on
``&&`` into steps where a failing step skips the rest of its group::

    parse("a; b && c")  ->  [[a], [b, c]]

Inside one step the text is split on whitespace. The first token is the
command name. ``--key value`` stores a named argument, ``-la`` sets one
boolean flag per letter, and every other token is a positional argument.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

GROUP_SEPARATOR = ";"
STEP_SEPARATOR = "&&"


@dataclass
class ParsedInvocation:
    name: str
    input: str
    args: List[str] = field(default_factory=list)
    named: Dict[str, Optional[str]] = field(default_factory=dict)
    flags: Dict[str, bool] = field(default_factory=dict)


def parse_input(raw: str) -> ParsedInvocation:
    """Parse a single command chunk (no separators).

    ``input`` keeps the chunk exactly as given, surrounding spaces included.
    Only letters form flags: ``-5`` stays a positional argument.
    """
    tokens = raw.split()
    if not tokens:
        return ParsedInvocation(name="", input=raw)
    inv = ParsedInvocation(name=tokens[0], input=raw)
    rest = iter(tokens[1:])
    for token in rest:
        if token.startswith("--") and len(token) > 2:
            # a trailing key with nothing after it keeps None as its value
            inv.named[token[2:]] = next(rest, None)
        elif token.startswith("-") and token[1:].isalpha():
            for letter in token[1:]:
                inv.flags[letter] = True
        else:
            inv.args.append(token)
    return inv


def parse(raw: str) -> List[List[ParsedInvocation]]:
    """Parse a full line into dependency groups of invocations."""
    return [
        [parse_input(step) for step in group.split(STEP_SEPARATOR)]
        for group in raw.split(GROUP_SEPARATOR)
    ]
