"""Session configuration.

A ``ShellConfig`` fixes everything about a session that is decided
before the first command runs: whose home directory exists, what the
sample file says, and the hostname shown in the terminal prompt.

Values come from keyword arguments or, through ``from_env``, from
``WEBSHELL_*`` environment variables.  Unset variables keep defaults.
"""

from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_USER = "nick"
DEFAULT_ABOUT_TEXT = "This shell was created with a bit of JavaScript\n"
DEFAULT_HOSTNAME = "webshell"

_ENV_PREFIX = "WEBSHELL_"


@dataclass(frozen=True)
class ShellConfig:
    """Immutable settings for a shell session.

    Attributes:
        user: The login name; also names the home directory.
        about_text: Contents of ``~/about.txt`` in the seed tree.
        hostname: Shown in the REPL prompt only.

    """

    user: str = DEFAULT_USER
    about_text: str = DEFAULT_ABOUT_TEXT
    hostname: str = DEFAULT_HOSTNAME

    def __post_init__(self) -> None:
        """Reject user names that cannot be a single path segment."""
        if not self.user or "/" in self.user or " " in self.user:
            msg = f"Invalid user name: {self.user!r}"
            raise ValueError(msg)

    @property
    def home(self) -> list[str]:
        """Return the home directory as path segments."""
        return ["home", self.user]

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "ShellConfig":
        """Build a config from ``WEBSHELL_USER``, ``WEBSHELL_ABOUT`` and ``WEBSHELL_HOSTNAME``.

        Args:
            environ: Usually ``os.environ``.

        Raises:
            ValueError: If ``WEBSHELL_USER`` is not a valid user name.

        """
        return cls(
            user=environ.get(f"{_ENV_PREFIX}USER", DEFAULT_USER),
            about_text=environ.get(f"{_ENV_PREFIX}ABOUT", DEFAULT_ABOUT_TEXT),
            hostname=environ.get(f"{_ENV_PREFIX}HOSTNAME", DEFAULT_HOSTNAME),
        )
