"""The shell session — state plus the ``command()`` entry point.

A session owns everything one terminal needs: the filesystem tree, the
current directory, the user name, and the command history.  Nothing is
global, so any number of independent sessions can exist side by side.

``command(text)`` runs one line through four stages:

    1. **Tokenize** — record the line in history, split on spaces,
       drop empty tokens.  No tokens means no output at all.
    2. **Resolve** — a registered name wins; otherwise a token that
       contains ``/`` is looked up in the tree and must be executable.
    3. **Execute** — call the built-in with the full token list.
    4. **Format** — non-empty output gets exactly one trailing newline.

Failures from stages 2 and 3 never escape.  A ``ShellError`` becomes its
message plus a newline; anything else becomes ``Error`` plus a newline,
with the details kept in the session log.
"""

from collections.abc import Callable
from datetime import datetime
from typing import assert_never

from webshell.commands import CommandRegistry
from webshell.config import ShellConfig
from webshell.errors import CommandNotFoundError, NotExecutableError, ShellError
from webshell.filesystem import FilesystemTree, build_seed_tree
from webshell.logging import Logger, LogLevel
from webshell.nodes import Builtin, Directory, Executable, File
from webshell.paths import resolve_path

WELCOME_TEXT = 'Welcome! Type "help" to see a list of commands\n'

_ERROR_OUTPUT = "Error\n"


def _local_now() -> datetime:
    """Return the current local time, timezone-aware."""
    return datetime.now().astimezone()


class ShellSession:
    """An interactive shell over an in-memory filesystem."""

    def __init__(
        self,
        config: ShellConfig | None = None,
        *,
        registry: CommandRegistry | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Create a session with a freshly seeded filesystem.

        Args:
            config: Session settings; defaults to ``ShellConfig()``.
            registry: Built-ins available by name; defaults to the standard set.
            clock: Returns the time ``date`` reports; defaults to local now.

        """
        self._config = config if config is not None else ShellConfig()
        self._registry = registry if registry is not None else CommandRegistry()
        self._clock = clock if clock is not None else _local_now
        self._filesystem: FilesystemTree = build_seed_tree(self._config, self._registry.as_dict())
        self._history: list[str] = []
        self._logger = Logger()
        self.cwd: list[str] = self.home

        self._logger.log(
            LogLevel.INFO, f"Session started for {self.user}", source="shell", user=self.user
        )

    @property
    def config(self) -> ShellConfig:
        """Return the session configuration."""
        return self._config

    @property
    def user(self) -> str:
        """Return the session user name."""
        return self._config.user

    @property
    def home(self) -> list[str]:
        """Return a fresh copy of the home directory segments."""
        return self._config.home

    @property
    def filesystem(self) -> FilesystemTree:
        """Return the session's filesystem tree."""
        return self._filesystem

    @property
    def registry(self) -> CommandRegistry:
        """Return the built-in command registry."""
        return self._registry

    @property
    def logger(self) -> Logger:
        """Return the session log."""
        return self._logger

    @property
    def history(self) -> list[str]:
        """Return every line given to ``command()``, most recent first."""
        return list(self._history)

    def now(self) -> datetime:
        """Return the current time according to the session clock."""
        return self._clock()

    def resolve(self, text: str) -> list[str]:
        """Resolve typed path *text* against the current directory."""
        return resolve_path(text, self.cwd, self.home)

    def welcome(self) -> str:
        """Return the greeting shown once when the terminal opens."""
        return WELCOME_TEXT

    def command(self, text: str) -> str:
        """Run one line of input and return the text to display.

        Args:
            text: The raw line as typed.

        Returns:
            The output, newline-terminated unless empty.

        """
        self._history.insert(0, text)

        args = [arg for arg in text.split(" ") if arg]
        if not args:
            return ""

        try:
            program = self._find_program(args[0])
            self._logger.log(LogLevel.DEBUG, f"exec {args[0]}", source="shell", user=self.user)
            output = program(self, args)
        except ShellError as e:
            self._logger.log(LogLevel.WARNING, e.message, source="shell", user=self.user)
            return f"{e.message}\n"
        except Exception as e:  # noqa: BLE001
            self._logger.log(
                LogLevel.ERROR,
                f"{args[0]} failed: {type(e).__name__}: {e}",
                source="shell",
                user=self.user,
            )
            return _ERROR_OUTPUT

        if output and not output.endswith("\n"):
            output += "\n"
        return output

    def _find_program(self, name: str) -> Builtin:
        """Select the built-in that *name* refers to.

        Raises:
            NotExecutableError: If a path-style name is a file or directory.
            CommandNotFoundError: If a bare name is not registered.
            PathNotFoundError: If a path-style name does not exist.

        """
        builtin = self._registry.get(name)
        if builtin is not None:
            return builtin
        if "/" not in name:
            raise CommandNotFoundError

        node = self._filesystem.lookup(self.resolve(name))
        match node:
            case Executable(program=program):
                return program
            case Directory() | File():
                raise NotExecutableError(name)
            case _:
                assert_never(node)


class HistoryCursor:
    """Up/Down recall over a session's history.

    The position starts at -1 (editing a new line).  ``older`` walks
    toward the oldest entry and stops there; ``newer`` walks back and,
    from the newest entry, yields an empty line.
    """

    def __init__(self, session: ShellSession) -> None:
        """Create a cursor over *session*'s history."""
        self._session = session
        self._position = -1

    @property
    def position(self) -> int:
        """Return the current index into the history (-1 when reset)."""
        return self._position

    def older(self) -> str | None:
        """Step back in time and return the recalled line, if any."""
        history = self._session.history
        self._position = min(self._position + 1, len(history) - 1)
        if self._position >= 0:
            return history[self._position]
        return None

    def newer(self) -> str | None:
        """Step forward in time and return the recalled line, if any."""
        if self._position > 0:
            self._position -= 1
            return self._session.history[self._position]
        if self._position == 0:
            return ""
        return None

    def reset(self) -> None:
        """Return to editing a new line."""
        self._position = -1
