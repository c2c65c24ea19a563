"""Virtual filesystem nodes.

A node is exactly one of three kinds:

- **Directory** — an insertion-ordered mapping of child names to nodes.
- **File** — an immutable text payload.
- **Executable** — a reference to a built-in command function.

``VirtualNode`` is the union of the three.  Code that consumes a node
uses ``match`` with ``assert_never`` on the fallthrough, so adding a
fourth kind is a type error everywhere it matters.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from webshell.shell import ShellSession

# A built-in receives the session and the full argument list (args[0] is the command).
Builtin: TypeAlias = Callable[["ShellSession", list[str]], str]


@dataclass
class Directory:
    """A directory node that owns its children."""

    children: dict[str, VirtualNode] = field(default_factory=dict)  # pyright: ignore[reportUnknownVariableType]

    def names(self) -> list[str]:
        """Return child names in insertion order."""
        return list(self.children)


@dataclass(frozen=True)
class File:
    """A regular file with text contents."""

    text: str


@dataclass(frozen=True)
class Executable:
    """An executable node wrapping a built-in command."""

    program: Builtin


VirtualNode: TypeAlias = Directory | File | Executable
