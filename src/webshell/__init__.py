"""WebShell — a Unix-like shell over an in-memory filesystem.

Re-exports the public entry points so callers can write::

    from webshell import ShellSession
"""

from webshell.config import ShellConfig
from webshell.shell import HistoryCursor, ShellSession

__all__ = ["HistoryCursor", "ShellConfig", "ShellSession"]
