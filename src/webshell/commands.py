"""Built-in commands and the registry that names them.

Every built-in is a plain function ``(session, args) -> str``.  The
session is passed explicitly, so a built-in can be called on any session
in isolation.  ``args[0]`` is the command as typed and ``args[1:]`` are
its parameters.

Built-ins raise ``ShellError`` subclasses for user-facing failures and
return raw output.  Adding the trailing newline is the session's job.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, assert_never

from webshell.errors import IsBinaryError, IsDirectoryError, NotDirectoryError
from webshell.logging import LogLevel
from webshell.nodes import Directory, Executable, File
from webshell.paths import format_path

if TYPE_CHECKING:
    from webshell.nodes import Builtin
    from webshell.shell import ShellSession

# strftime rendering of a JavaScript Date's default string form.
_DATE_FORMAT = "%a %b %d %Y %H:%M:%S GMT%z"

HELP_TEXT = "\n".join(
    [
        "cat    - Output the contents of a file",
        "cd     - Change directory",
        "date   - Shows the current date",
        "echo   - Outputs whatever is given to it",
        "help   - Display this help dialog",
        "ls     - List a directory",
        "pwd    - Display current directory",
        "whoami - Shows your username",
    ]
)


def cat(session: ShellSession, args: list[str]) -> str:
    """Concatenate the contents of every file argument."""
    output = ""
    for arg in args[1:]:
        node = session.filesystem.lookup(session.resolve(arg))
        match node:
            case Directory():
                raise IsDirectoryError(arg)
            case Executable():
                raise IsBinaryError(arg)
            case File(text=text):
                output += text
            case _:
                assert_never(node)
    return output


def cd(session: ShellSession, args: list[str]) -> str:
    """Change the working directory (home when no argument is given)."""
    if len(args) == 1:
        session.cwd = session.home
    else:
        path = session.resolve(args[1])
        node = session.filesystem.lookup(path)
        match node:
            case Directory():
                session.cwd = path
            case File() | Executable():
                raise NotDirectoryError(args[1])
            case _:
                assert_never(node)
    session.logger.log(
        LogLevel.DEBUG, f"cwd -> {format_path(session.cwd)}", source="cd", user=session.user
    )
    return ""


def date(session: ShellSession, _args: list[str]) -> str:
    """Show the current date and time."""
    return session.now().strftime(_DATE_FORMAT)


def echo(_session: ShellSession, args: list[str]) -> str:
    """Echo the arguments back separated by single spaces."""
    return " ".join(args[1:])


def help_(_session: ShellSession, _args: list[str]) -> str:
    """List the built-in commands."""
    return HELP_TEXT


def ls(session: ShellSession, args: list[str]) -> str:
    """List a directory, or echo back a non-directory argument."""
    path = session.cwd if len(args) == 1 else session.resolve(args[1])
    node = session.filesystem.lookup(path)
    match node:
        case Directory():
            return "\n".join(node.names())
        case File() | Executable():
            # Echoes the typed argument, not the resolved path.
            return args[1]
        case _:
            assert_never(node)


def pwd(session: ShellSession, _args: list[str]) -> str:
    """Show the current working directory."""
    return format_path(session.cwd)


def whoami(session: ShellSession, _args: list[str]) -> str:
    """Show the session user."""
    return session.user


class CommandRegistry:
    """Name-to-built-in lookup used for bare command names.

    The registry is consulted before the filesystem, so a built-in can
    never be shadowed by a file of the same name elsewhere in the tree.
    """

    def __init__(self, builtins: dict[str, Builtin] | None = None) -> None:
        """Create a registry, defaulting to the standard built-ins."""
        self._builtins: dict[str, Builtin] = dict(
            builtins if builtins is not None else DEFAULT_BUILTINS
        )

    def get(self, name: str) -> Builtin | None:
        """Return the built-in called *name*, or None."""
        return self._builtins.get(name)

    def __contains__(self, name: object) -> bool:
        """Return True if *name* is a registered built-in."""
        return name in self._builtins

    def __iter__(self) -> Iterator[str]:
        """Iterate over built-in names in registration order."""
        return iter(self._builtins)

    def __len__(self) -> int:
        """Return the number of built-ins."""
        return len(self._builtins)

    def as_dict(self) -> dict[str, Builtin]:
        """Return a copy of the name-to-built-in mapping."""
        return dict(self._builtins)


DEFAULT_BUILTINS: dict[str, Builtin] = {
    "cat": cat,
    "cd": cd,
    "date": date,
    "echo": echo,
    "help": help_,
    "ls": ls,
    "pwd": pwd,
    "whoami": whoami,
}
