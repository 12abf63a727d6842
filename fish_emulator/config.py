"""
Shell configuration.

Configuration comes from a YAML file (``fish.yaml`` by default). Every key
is optional; a missing file gives the defaults below::

    prefix: hacker@default
    cwd: dir1
    settings:
      user: {username: guest}
    messages:
      COMMAND_NOT_FOUND: "fish: unknown command: $1"
    commands:
      motd: "Welcome aboard."
    history:
      - "welcome"
      - {value: "ls", cwd: ""}
    structure:
      dir1:
        childDir: {}
        notes.txt: {content: "remember the milk"}
      file1: {content: "contents of file 1"}

In ``structure`` a mapping with a string ``content`` key is a file and any
other mapping is a directory.
"""

import logging
import os
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from fish_emulator.commands import Handler, static_command
from fish_emulator.state import HistoryEntry, SessionState
from fish_emulator.vfs import Directory, File, Node, canonical_path, resolve_path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = "fish.yaml"
DEFAULT_PREFIX = "hacker@default"

DEFAULT_STRUCTURE: Dict[str, Any] = {
    ".profile": {"content": "export PS1='fish> '"},
    "docs": {
        "readme.txt": {"content": "Type 'help' to list the commands."},
    },
    "projects": {},
}


class ConfigError(ValueError):
    """Raised when a configuration file has the wrong shape."""


def _is_file(value: Any) -> bool:
    return isinstance(value, dict) and isinstance(value.get("content"), str)


def structure_from_mapping(mapping: Optional[Dict[str, Any]], name: str = "") -> Directory:
    """Build a directory tree from nested mappings."""
    children: Dict[str, Node] = {}
    for key, value in (mapping or {}).items():
        key = str(key)
        if _is_file(value):
            children[key] = File(key, value["content"])
        elif value is None or isinstance(value, dict):
            children[key] = structure_from_mapping(value, key)
        else:
            raise ConfigError(f"structure entry {key!r} must be a mapping")
    return Directory(name, children)


def structure_to_mapping(directory: Directory) -> Dict[str, Any]:
    """Inverse of ``structure_from_mapping``."""
    out: Dict[str, Any] = {}
    for node in directory.listing():
        if isinstance(node, File):
            out[node.name] = {"content": node.content}
        else:
            out[node.name] = structure_to_mapping(node)
    return out


def _history_from_list(items: Optional[List[Any]]) -> List[HistoryEntry]:
    entries = []
    for item in items or []:
        if isinstance(item, dict):
            cwd = item.get("cwd")
            entries.append(HistoryEntry(str(item.get("value", "")), None if cwd is None else str(cwd)))
        else:
            entries.append(HistoryEntry(str(item)))
    return entries


def _load_yaml(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        logger.debug("no config at %s, using defaults", path)
        return {}
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return data


def _pack(data: Dict[str, Any]) -> "OrderedDict[str, str]":
    pack = OrderedDict()
    for k, v in (data.get("commands") or {}).items():
        pack[str(k)] = str(v)
    return pack


def load_yaml_pack(path: str = DEFAULT_CONFIG) -> "OrderedDict[str, str]":
    """Return the static command pack (name -> text) from a config file."""
    return _pack(_load_yaml(path))


@dataclass
class ShellConfig:
    prefix: str = DEFAULT_PREFIX
    cwd: str = ""
    structure: Directory = field(default_factory=lambda: structure_from_mapping(DEFAULT_STRUCTURE))
    history: List[HistoryEntry] = field(default_factory=list)
    settings: Dict[str, Any] = field(default_factory=dict)
    messages: Dict[str, str] = field(default_factory=dict)
    commands: "OrderedDict[str, str]" = field(default_factory=OrderedDict)

    def extensions(self) -> Dict[str, Handler]:
        return OrderedDict((name, static_command(text)) for name, text in self.commands.items())

    def initial_state(self) -> SessionState:
        """Starting snapshot; an unusable ``cwd`` falls back to the root."""
        cwd = ""
        if self.cwd:
            node = resolve_path(self.structure, "", self.cwd)
            if isinstance(node, Directory):
                cwd = canonical_path(self.structure, "", self.cwd)
            else:
                logger.warning("configured cwd %r is not a directory, starting at /", self.cwd)
        return SessionState(
            history=tuple(self.history),
            structure=self.structure,
            cwd=cwd,
            settings=dict(self.settings),
        )


def load_config(path: str = DEFAULT_CONFIG) -> ShellConfig:
    data = _load_yaml(path)
    config = ShellConfig()
    if "prefix" in data:
        config.prefix = str(data["prefix"])
    if "cwd" in data:
        config.cwd = str(data["cwd"] or "")
    if "structure" in data:
        config.structure = structure_from_mapping(data["structure"])
    config.history = _history_from_list(data.get("history"))
    config.settings = dict(data.get("settings") or {})
    config.messages = {str(k): str(v) for k, v in (data.get("messages") or {}).items()}
    config.commands = _pack(data)
    logger.debug("loaded %s: %d static commands", path, len(config.commands))
    return config
