"""Shell failure kinds — the errors a command can report to the user.

Every failure that a built-in or the dispatcher can raise derives from
``ShellError``.  The session's ``command()`` method is the single place
that catches them: a ``ShellError`` becomes its message plus a newline,
anything else becomes the bare text ``Error``.

The hierarchy mirrors what a Unix shell prints:

- **PathNotFoundError** — a path component does not exist.
- **IsDirectoryError** / **IsBinaryError** — ``cat`` got the wrong kind of node.
- **NotDirectoryError** — ``cd`` targeted something that is not a directory.
- **NotExecutableError** — a path-style command is not an executable.
- **CommandNotFoundError** — a bare command name matched no built-in.
"""


class ShellError(Exception):
    """Base class for failures that are shown to the user verbatim."""

    def __init__(self, message: str) -> None:
        """Create a shell error carrying a user-facing message."""
        super().__init__(message)
        self.message = message


class PathNotFoundError(ShellError):
    """A path segment is missing from the tree."""

    def __init__(self) -> None:
        """Create the error with the standard message."""
        super().__init__("No such file or directory")


class IsDirectoryError(ShellError):
    """A file operation was given a directory."""

    def __init__(self, arg: str) -> None:
        """Create the error for the argument as typed."""
        super().__init__(f"{arg} is a directory")


class IsBinaryError(ShellError):
    """A file operation was given an executable."""

    def __init__(self, arg: str) -> None:
        """Create the error for the argument as typed."""
        super().__init__(f"{arg} is a binary file")


class NotDirectoryError(ShellError):
    """A directory operation was given a file or executable."""

    def __init__(self, arg: str) -> None:
        """Create the error for the argument as typed."""
        super().__init__(f"{arg} is not a directory")


class NotExecutableError(ShellError):
    """A path-style command resolved to something that cannot run."""

    def __init__(self, arg: str) -> None:
        """Create the error for the command token as typed."""
        super().__init__(f"{arg} is not executable")


class CommandNotFoundError(ShellError):
    """A bare command name matched nothing in the registry."""

    def __init__(self) -> None:
        """Create the error with the standard message."""
        super().__init__("Command not found")
