"""
In-memory filesystem model.

The tree is made of frozen ``Directory`` and ``File`` nodes. Nothing is ever
changed in place: every update rebuilds the directories along the edited path
and shares the untouched subtrees, so an older ``SessionState`` keeps seeing
the tree it was created with.

Paths are ``/``-separated. A leading ``/`` makes a path absolute (from the
root); anything else is relative to the working directory. ``.`` is ignored
and ``..`` climbs one level (the root is its own parent). The working
directory itself is stored without a leading slash, the root being ``''``.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

SEP = "/"


@dataclass(frozen=True)
class File:
    name: str
    content: str = ""


@dataclass(frozen=True)
class Directory:
    name: str
    children: Dict[str, "Node"] = field(default_factory=dict)

    def with_child(self, node: "Node") -> "Directory":
        """Return a copy holding ``node`` (replacing a same-named child)."""
        children = dict(self.children)
        children[node.name] = node
        return Directory(self.name, children)

    def without_child(self, name: str) -> "Directory":
        children = dict(self.children)
        del children[name]
        return Directory(self.name, children)

    def listing(self) -> List["Node"]:
        # dicts keep insertion order, which is creation order here
        return list(self.children.values())


Node = Union[Directory, File]


def split_path(path: str) -> List[str]:
    """Split a path into its non-empty segments."""
    return [p for p in path.split(SEP) if p]


def join_path(segments: List[str]) -> str:
    return SEP.join(segments)


def _walk(root: Directory, cwd: str, path: str) -> Optional[Tuple[List[str], Node]]:
    """Walk ``path`` and return (canonical segments, node), or None."""
    segments: List[str] = []
    nodes: List[Node] = [root]
    parts = split_path(path) if path.startswith(SEP) else split_path(cwd) + split_path(path)
    for part in parts:
        current = nodes[-1]
        # a file can neither be descended into nor climbed out of
        if not isinstance(current, Directory):
            return None
        if part == ".":
            continue
        if part == "..":
            if segments:
                segments.pop()
                nodes.pop()
            continue
        child = current.children.get(part)
        if child is None:
            return None
        segments.append(part)
        nodes.append(child)
    # "file/" names a directory that is not there
    if path.endswith(SEP) and not isinstance(nodes[-1], Directory):
        return None
    return segments, nodes[-1]


def resolve_path(root: Directory, cwd: str, path: str) -> Optional[Node]:
    """Return the node ``path`` denotes, or None when it does not resolve."""
    found = _walk(root, cwd, path)
    return found[1] if found else None


def canonical_path(root: Directory, cwd: str, path: str) -> Optional[str]:
    """Return the root-relative form of ``path`` (e.g. ``'dir1/child'``), or None."""
    found = _walk(root, cwd, path)
    return join_path(found[0]) if found else None


def split_parent(path: str) -> Tuple[str, str]:
    """Split ``path`` into (parent expression, final name).

    ``'a/b/c'`` gives ``('a/b', 'c')``, ``'c'`` gives ``('', 'c')`` and
    ``'/c'`` gives ``('/', 'c')``.
    """
    stripped = path.rstrip(SEP) or path
    idx = stripped.rfind(SEP)
    if idx < 0:
        return "", stripped
    return stripped[:idx + 1] if idx == 0 else stripped[:idx], stripped[idx + 1:]


def replace_node(root: Directory, segments: List[str], node: Optional[Node]) -> Directory:
    """Return a new root where the entry at ``segments`` is ``node``.

    Passing ``None`` removes the entry. Every directory on the way must
    already exist; callers resolve the parent first.
    """
    if not segments:
        if not isinstance(node, Directory):
            raise ValueError("the root must stay a directory")
        return node
    head, rest = segments[0], segments[1:]
    if not rest:
        return root.with_child(node) if node is not None else root.without_child(head)
    child = root.children[head]
    if not isinstance(child, Directory):
        raise ValueError(f"{head} is not a directory")
    return root.with_child(replace_node(child, rest, node))
