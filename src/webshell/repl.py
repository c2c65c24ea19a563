"""Interactive REPL (Read-Eval-Print Loop) for the shell.

The REPL is the terminal counterpart of the browser page.  It creates a
session, prints the welcome text, and loops:

    1. **Read** — display a prompt and read a line.
    2. **Eval** — pass the line to ``session.command()``.
    3. **Print** — write the result exactly as returned.
    4. **Loop** — until Ctrl+D or Ctrl+C.

The session is fully testable on its own (it returns strings); this
module is the thin I/O wrapper around it.
"""

import os
import readline
import sys

from webshell.config import ShellConfig
from webshell.paths import format_path
from webshell.shell import ShellSession


def build_prompt(session: ShellSession) -> str:
    """Build a prompt like ``nick@webshell:/home/nick $ ``."""
    config = session.config
    return f"{config.user}@{config.hostname}:{format_path(session.cwd)} $ "


def run() -> None:
    """Create a session and run the interactive loop.

    This is the ``webshell`` console entry point.
    """
    session = ShellSession(ShellConfig.from_env(os.environ))

    # Up/Down recall comes from the session history.
    readline.set_auto_history(False)
    sys.stdout.write(session.welcome())

    try:
        while True:
            try:
                line = input(build_prompt(session))
            except EOFError:
                # Ctrl+D — graceful exit
                sys.stdout.write("\n")
                break
            sys.stdout.write(session.command(line))
            readline.add_history(session.history[0])
    except KeyboardInterrupt:
        sys.stdout.write("\nInterrupted.\n")
