"""
Built-in commands.

Every handler takes ``(state, invocation)`` and returns the new
``SessionState`` (or a string to append, or None for no change). Failures are
signalled by raising ``CommandError``; the executor turns them into a
transcript line and throws away whatever the failing step had built.
"""

from collections import OrderedDict
from typing import Any, Callable, Dict, List, Optional, Tuple

from fish_emulator.messages import CommandError
from fish_emulator.parser import ParsedInvocation
from fish_emulator.state import SessionState
from fish_emulator.vfs import (
    Directory,
    File,
    Node,
    canonical_path,
    join_path,
    replace_node,
    resolve_path,
    split_parent,
    split_path,
)

Handler = Callable[[SessionState, ParsedInvocation], Any]


# ---------- Helpers ----------
def _is_hidden(node: Node) -> bool:
    return node.name.startswith(".")


def _long_line(node: Node) -> str:
    """Render one ``ls -l`` row: kind/mode, size and name."""
    if isinstance(node, Directory):
        return f"drwxr-xr-x  {len(node.children):>6}  {node.name}"
    return f"-rw-r--r--  {len(node.content):>6}  {node.name}"


def _require_args(inv: ParsedInvocation) -> List[str]:
    if not inv.args:
        raise CommandError("MISSING_OPERAND", inv.name)
    return inv.args


def _parent_of(root: Directory, cwd: str, path: str) -> Tuple[List[str], Directory, str]:
    """Resolve the directory that would hold ``path``.

    Returns (parent segments, parent directory, final name). Raises
    ``CommandError`` when the parent does not exist or is a file.
    """
    parent_expr, leaf = split_parent(path)
    parent_path = canonical_path(root, cwd, parent_expr)
    parent = resolve_path(root, cwd, parent_expr)
    if parent_path is None or parent is None:
        raise CommandError("NO_SUCH_FILE", path)
    if not isinstance(parent, Directory):
        raise CommandError("NOT_A_DIRECTORY", path)
    return split_path(parent_path), parent, leaf


# ---------- Session commands ----------
def h_help(state: SessionState, inv: ParsedInvocation, registry: Optional[Dict[str, Any]] = None):
    """List the available commands, or show the help for one of them.

    Usage: help [name]
    """
    names = BUILTINS if registry is None else registry
    if inv.args:
        name = inv.args[0]
        if name not in names:
            raise CommandError("COMMAND_NOT_FOUND", name)
        return state.output(f"{name}\n  {HELP_TEXT.get(name, '(no help available)')}")
    width = max(len(n) for n in names) if names else 0
    lines = []
    for name in names:
        short = HELP_TEXT.get(name, "(no help available)").splitlines()[0]
        lines.append(f"{name.ljust(width)}  {short}")
    return state.output("\n".join(lines))


def h_clear(state: SessionState, inv: ParsedInvocation):
    """Wipe the transcript."""
    return state.update(history=())


def h_pwd(state: SessionState, inv: ParsedInvocation):
    return state.output("/" + state.cwd)


def h_echo(state: SessionState, inv: ParsedInvocation):
    # work from the raw chunk so that "-x" style words are echoed too
    return state.output(" ".join(inv.input.split()[1:]))


def h_whoami(state: SessionState, inv: ParsedInvocation):
    user = state.settings.get("user") or {}
    return state.output(user.get("username", "guest"))


# ---------- Navigation and listing ----------
def h_cd(state: SessionState, inv: ParsedInvocation):
    """Change the working directory.

    With no argument the root becomes the working directory. The working
    directory is left alone when the target is missing or is a file.
    Usage: cd [path]
    """
    target = inv.args[0] if inv.args else "/"
    node = resolve_path(state.structure, state.cwd, target)
    if node is None:
        raise CommandError("NO_SUCH_FILE", target)
    if not isinstance(node, Directory):
        raise CommandError("NOT_A_DIRECTORY", target)
    return state.update(cwd=canonical_path(state.structure, state.cwd, target))


def h_ls(state: SessionState, inv: ParsedInvocation):
    """List a directory in creation order.

    ``-a`` includes names starting with a dot, ``-l`` prints one row per
    entry with its kind and size. Listing a file prints its name.
    Usage: ls [path] [-l] [-a]
    """
    target = inv.args[0] if inv.args else "."
    node = resolve_path(state.structure, state.cwd, target)
    if node is None:
        raise CommandError("NO_SUCH_FILE", target)
    if isinstance(node, File):
        entries: List[Node] = [node]
    else:
        entries = node.listing()
        if not inv.flags.get("a"):
            entries = [e for e in entries if not _is_hidden(e)]
    if not entries:
        return state
    if inv.flags.get("l"):
        return state.output("\n".join(_long_line(e) for e in entries))
    return state.output("  ".join(e.name for e in entries))


def h_cat(state: SessionState, inv: ParsedInvocation):
    """Print the content of one or more files.

    Usage: cat <path> [path ...]
    """
    contents = []
    for path in _require_args(inv):
        node = resolve_path(state.structure, state.cwd, path)
        if node is None:
            raise CommandError("NO_SUCH_FILE", path)
        if isinstance(node, Directory):
            raise CommandError("IS_A_DIRECTORY", path)
        contents.append(node.content)
    return state.output("\n".join(contents))


# ---------- Tree changes ----------
def h_mkdir(state: SessionState, inv: ParsedInvocation):
    """Create directories relative to the working directory.

    The parent of each name must exist. If any name fails, nothing from
    this invocation is created.
    Usage: mkdir <name> [name ...]
    """
    root = state.structure
    for name in _require_args(inv):
        parent_segments, parent, leaf = _parent_of(root, state.cwd, name)
        if leaf in ("", ".", "..") or leaf in parent.children:
            raise CommandError("FILE_EXISTS", name)
        root = replace_node(root, parent_segments + [leaf], Directory(leaf))
    return state.update(structure=root)


def h_touch(state: SessionState, inv: ParsedInvocation):
    """Create empty files. Existing entries are left untouched.

    Usage: touch <name> [name ...]
    """
    root = state.structure
    for name in _require_args(inv):
        parent_segments, parent, leaf = _parent_of(root, state.cwd, name)
        if leaf in ("", ".", "..") or leaf in parent.children:
            continue
        root = replace_node(root, parent_segments + [leaf], File(leaf))
    return state.update(structure=root)


def h_rm(state: SessionState, inv: ParsedInvocation):
    """Remove files, or directories with ``-r``.

    Every path is resolved against the tree and working directory the
    command started with. When the working directory is removed the session
    moves to the parent of the removed directory.
    Usage: rm [-r] <path> [path ...]
    """
    targets: List[List[str]] = []
    for path in _require_args(inv):
        node = resolve_path(state.structure, state.cwd, path)
        if node is None:
            raise CommandError("NO_SUCH_FILE", path)
        segments = split_path(canonical_path(state.structure, state.cwd, path))
        if not segments:
            raise CommandError("PERMISSION_DENIED", path)
        if isinstance(node, Directory) and not inv.flags.get("r"):
            raise CommandError("IS_A_DIRECTORY", path)
        targets.append(segments)

    root = state.structure
    cwd_segments = split_path(state.cwd)
    new_cwd = cwd_segments
    for segments in targets:
        # already gone along with an earlier target
        if resolve_path(root, "", join_path(segments)) is None:
            continue
        root = replace_node(root, segments, None)
        if cwd_segments[:len(segments)] == segments and len(segments) <= len(new_cwd):
            new_cwd = segments[:-1]
    return state.update(structure=root, cwd=join_path(new_cwd))


# ---------- Static command packs ----------
def static_command(text: str) -> Handler:
    """Build a handler that always prints ``text``."""
    def _static(state: SessionState, inv: ParsedInvocation, _text=text):
        return _text

    _static.__fish_static__ = True
    return _static


# Help strings (first line is the short form shown by ``help``)
HELP_TEXT: Dict[str, str] = {
    "help": "List commands, or describe one. Usage: help [name]",
    "clear": "Clear the transcript. Usage: clear",
    "ls": "List directory contents. Usage: ls [path] [-l] [-a]",
    "cat": "Print file contents. Usage: cat <path> [path ...]",
    "mkdir": "Create directories. Usage: mkdir <name> [name ...]",
    "cd": "Change the working directory. Usage: cd [path]",
    "pwd": "Print the working directory. Usage: pwd",
    "touch": "Create empty files. Usage: touch <name> [name ...]",
    "rm": "Remove files (directories with -r). Usage: rm [-r] <path> [path ...]",
    "echo": "Print the arguments. Usage: echo [text ...]",
    "whoami": "Print the session user name. Usage: whoami",
}


# Built-in commands mapping (command -> handler)
BUILTINS: "OrderedDict[str, Handler]" = OrderedDict({
    "help": h_help,
    "clear": h_clear,
    "ls": h_ls,
    "cat": h_cat,
    "mkdir": h_mkdir,
    "cd": h_cd,
    "pwd": h_pwd,
    "touch": h_touch,
    "rm": h_rm,
    "echo": h_echo,
    "whoami": h_whoami,
})
