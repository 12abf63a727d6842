"""
Error message templates.

Every template has a single ``$1`` placeholder that is replaced with the
offending token (a command name or a path).
"""

from typing import Dict, Optional

PLACEHOLDER = "$1"

MESSAGES: Dict[str, str] = {
    "COMMAND_NOT_FOUND": "-bash: $1: command not found",
    "NO_SUCH_FILE": "-bash: $1: No such file or directory",
    "NOT_A_DIRECTORY": "-bash: $1: Not a directory",
    "IS_A_DIRECTORY": "$1: Is a directory",
    "FILE_EXISTS": "mkdir: $1: File exists",
    "MISSING_OPERAND": "$1: missing operand",
    "PERMISSION_DENIED": "$1: Permission denied",
    "COMMAND_FAILED": "$1: command failed",
}


class CommandError(Exception):
    """Raised by a handler to fail its step.

    ``key`` names a template in the active message table; a key that is not
    in the table is used as the template itself.
    """

    def __init__(self, key: str, token: str = ""):
        super().__init__(f"{key}: {token}")
        self.key = key
        self.token = token


def format_message(template: str, token: str) -> str:
    return template.replace(PLACEHOLDER, token)


def render(error: CommandError, messages: Optional[Dict[str, str]] = None) -> str:
    table = MESSAGES if messages is None else messages
    return format_message(table.get(error.key, error.key), error.token)
