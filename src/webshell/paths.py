"""Path resolution — turn typed path text into absolute segments.

Resolution is purely textual.  It never consults the tree, so it cannot
fail: ``..`` at the root stays at the root, empty and ``.`` components
are skipped, and anything else is appended.  Whether the result exists
is the filesystem's business.

Examples (cwd ``/home/nick``)::

    "/tmp"          → ["tmp"]
    "~/about.txt"   → ["home", "nick", "about.txt"]
    "../.."         → []
    "a//./b"        → ["home", "nick", "a", "b"]

"""

from collections.abc import Sequence

_PARENT = ".."
_CURRENT = "."
_HOME = "~"


def resolve_path(text: str, cwd: Sequence[str], home: Sequence[str]) -> list[str]:
    """Resolve *text* against *cwd* into a normalised segment list.

    Args:
        text: The path as typed (absolute, ``~``-relative, or relative).
        cwd: The current working directory as segments.
        home: The segments that ``~`` stands for.

    Returns:
        A fresh list of segments from the root.

    """
    parts = text.split("/")
    if text.startswith("/"):
        base: list[str] = []
        parts = parts[1:]
    elif parts[0] == _HOME:
        base = list(home)
        parts = parts[1:]
    else:
        base = list(cwd)

    for part in parts:
        if part == _PARENT:
            if base:
                base.pop()
        elif part not in (_CURRENT, ""):
            base.append(part)
    return base


def format_path(segments: Sequence[str]) -> str:
    """Render segments as an absolute path (the root is ``/``)."""
    return "/" + "/".join(segments)
