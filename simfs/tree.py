"""Directory tree whose entries are kept in a per-directory binary search tree."""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

MAX_NAME = 100
MAX_CONTENT = 1024


class NodeKind(Enum):
    """Whether a node is a regular file or a directory."""

    FILE = "file"
    DIRECTORY = "directory"


class DataType(Enum):
    """Kind of data a file holds, derived from its extension."""

    TEXT = 0
    PROGRAM = 1
    CSV = 2
    UNKNOWN = 3


class User(Enum):
    """Permission class the current user acts as."""

    OWNER = 0
    GROUP = 1
    OTHER = 2


_LABELS = {
    DataType.TEXT: "texto",
    DataType.PROGRAM: "executavel",
    DataType.CSV: "dados",
    DataType.UNKNOWN: "desconhecido",
}


def data_type_label(data_type: DataType) -> str:
    """Return the display label of a data type."""
    return _LABELS.get(data_type, "indefinido")


_inode_counter = itertools.count(1)


def _now() -> int:
    return int(time.time())


@dataclass
class Metadata:
    """Metadata stored with every node."""

    inode: int
    name: str
    size: int
    data_type: DataType
    created_at: int
    modified_at: int
    accessed_at: int
    permissions: int


class Node:
    """A file or directory.

    A directory's entries form a binary search tree ordered by name; ``children``
    is the root of that tree and ``left``/``right`` link siblings within it.
    """

    def __init__(self, name: str, kind: NodeKind, permissions: int) -> None:
        now = _now()
        self.kind = kind
        self.meta = Metadata(
            inode=next(_inode_counter),
            name=name[: MAX_NAME - 1],
            size=0,
            data_type=DataType.TEXT,
            created_at=now,
            modified_at=now,
            accessed_at=now,
            permissions=permissions,
        )
        self.content = ""
        self.parent: Optional[Node] = None
        self.left: Optional[Node] = None
        self.right: Optional[Node] = None
        self.children: Optional[Node] = None

    @property
    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    def __repr__(self) -> str:
        return f"Node({self.meta.name!r}, {self.kind.name}, inode={self.meta.inode})"

    def _require_directory(self) -> None:
        if not self.is_directory:
            raise NotADirectoryError(self.meta.name)

    def add_child(self, child: Node) -> None:
        """Insert ``child`` into this directory, ordered by name."""
        self._require_directory()
        child.parent = self
        holder, attr = self, "children"
        current = self.children
        while current is not None:
            holder = current
            attr = "left" if child.meta.name < current.meta.name else "right"
            current = getattr(current, attr)
        setattr(holder, attr, child)

    def find(self, name: str) -> Optional[Node]:
        """Return the entry called ``name``, or None if absent or not a directory."""
        if not self.is_directory:
            return None
        current = self.children
        while current is not None:
            if name == current.meta.name:
                return current
            current = current.left if name < current.meta.name else current.right
        return None

    def remove_child(self, name: str) -> Optional[Node]:
        """Detach the entry called ``name`` and return it, or None if absent."""
        self._require_directory()
        target = self.find(name)
        if target is None:
            return None

        holder, attr = self, "children"
        current = self.children
        while current is not None and current is not target:
            holder = current
            attr = "left" if name < current.meta.name else "right"
            current = getattr(current, attr)
        if current is None:
            return None

        if target.left is None:
            replacement = target.right
        elif target.right is None:
            replacement = target.left
        else:
            successor_holder, successor = target, target.right
            while successor.left is not None:
                successor_holder, successor = successor, successor.left
            if successor_holder is not target:
                successor_holder.left = successor.right
                successor.right = target.right
            successor.left = target.left
            replacement = successor

        setattr(holder, attr, replacement)
        target.left = None
        target.right = None
        target.parent = None
        return target

    def iter_children(self) -> Iterator[Node]:
        """Yield this directory's entries in name order."""
        stack: list[Node] = []
        node = self.children
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right