"""In-memory filesystem tree.

The tree is a plain hierarchy of nodes hanging off a root ``Directory``.
There are no inodes and no links: every node has exactly one parent.

``lookup`` walks an already-resolved segment list from the root.  It
fails with ``PathNotFoundError`` on the first segment that is missing,
and also when a segment would have to be looked up inside a file or an
executable.  Telling "not a directory" apart from "missing" is left to
the commands, which inspect the node they get back.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from webshell.errors import PathNotFoundError
from webshell.nodes import Directory, Executable, File, VirtualNode

if TYPE_CHECKING:
    from webshell.config import ShellConfig
    from webshell.nodes import Builtin


class FilesystemTree:
    """Owner of the root directory and the only way to reach its nodes."""

    def __init__(self, root: Directory | None = None) -> None:
        """Create a tree, empty unless a prepared *root* is given."""
        self._root = root if root is not None else Directory()

    @property
    def root(self) -> Directory:
        """Return the root directory."""
        return self._root

    def lookup(self, path: Sequence[str]) -> VirtualNode:
        """Return the node at *path* (segments from the root).

        Raises:
            PathNotFoundError: If any segment is missing or a non-final
                segment is not a directory.

        """
        current: VirtualNode = self._root
        for segment in path:
            if not isinstance(current, Directory):
                raise PathNotFoundError
            child = current.children.get(segment)
            if child is None:
                raise PathNotFoundError
            current = child
        return current


def build_seed_tree(config: ShellConfig, builtins: Mapping[str, Builtin]) -> FilesystemTree:
    """Build the tree every new session starts with.

    Layout::

        /bin/<one executable per built-in>
        /home/<user>/about.txt
        /tmp/

    """
    bin_dir = Directory({name: Executable(program) for name, program in builtins.items()})
    home_dir = Directory({"about.txt": File(config.about_text)})
    root = Directory(
        {
            "bin": bin_dir,
            "home": Directory({config.user: home_dir}),
            "tmp": Directory(),
        }
    )
    return FilesystemTree(root)
