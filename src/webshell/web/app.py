"""Flask application factory for the WebShell browser UI.

Every page load gets its own shell session.  ``GET /`` creates a
session, registers it under a random token, and renders the token into
the page; the page sends it back with every API call.  Sessions never
share state, and each one runs a single command at a time.

Endpoints:

- ``GET /`` — create a session and render the terminal page.
- ``GET /api/welcome?session=<token>`` — return the welcome text.
- ``POST /api/execute`` — run ``{"session": ..., "command": ...}``.
- ``GET /api/history?session=<token>`` — history, most recent first.
- ``POST /api/history/older`` / ``POST /api/history/newer`` — step
  the recall cursor of ``{"session": ...}`` and return the line.
"""

from __future__ import annotations

import os
import secrets
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any

from flask import Flask, Response, jsonify, render_template, request

from webshell.config import ShellConfig
from webshell.shell import HistoryCursor, ShellSession

_HTTP_BAD_REQUEST = 400
_HTTP_NOT_FOUND = 404

# Oldest sessions are dropped once this many pages are open.
DEFAULT_MAX_SESSIONS = 256


@dataclass
class PageSession:
    """One page load's shell, recall cursor, and the lock that serialises them."""

    shell: ShellSession
    cursor: HistoryCursor
    lock: threading.Lock = field(default_factory=threading.Lock)


class SessionStore:
    """Token-to-session registry shared by the app's request handlers."""

    def __init__(self, config: ShellConfig, max_sessions: int = DEFAULT_MAX_SESSIONS) -> None:
        """Create an empty store that builds sessions from *config*."""
        self._config = config
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, PageSession] = OrderedDict()
        self._lock = threading.Lock()

    def create(self) -> tuple[str, PageSession]:
        """Start a new session and return its token and page session."""
        shell = ShellSession(self._config)
        page = PageSession(shell=shell, cursor=HistoryCursor(shell))
        token = secrets.token_urlsafe(16)
        with self._lock:
            self._sessions[token] = page
            while len(self._sessions) > self._max_sessions:
                self._sessions.popitem(last=False)
        return token, page

    def get(self, token: object) -> PageSession | None:
        """Return the session for *token*, or None if unknown or expired."""
        if not isinstance(token, str):
            return None
        with self._lock:
            return self._sessions.get(token)

    def __len__(self) -> int:
        """Return the number of live sessions."""
        with self._lock:
            return len(self._sessions)


def _missing_session() -> tuple[Response, int]:
    """Build the error response for an unknown session token."""
    return jsonify({"error": "Unknown or expired session"}), _HTTP_NOT_FOUND


def _json_body() -> dict[str, Any] | None:
    """Return the request's JSON object body, or None."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def create_app(
    config: ShellConfig | None = None, *, max_sessions: int = DEFAULT_MAX_SESSIONS
) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Session settings; read from ``WEBSHELL_*`` variables when omitted.
        max_sessions: How many page sessions to keep before dropping the oldest.

    Returns:
        A configured Flask application ready to serve.

    """
    shell_config = config if config is not None else ShellConfig.from_env(os.environ)
    store = SessionStore(shell_config, max_sessions)

    app = Flask(__name__)
    app.config["WEBSHELL"] = shell_config
    app.extensions["webshell"] = store

    @app.route("/")
    def index() -> str:  # pyright: ignore[reportUnusedFunction]
        """Start a fresh session and render the terminal page."""
        token, page = store.create()
        return render_template("index.html", token=token, welcome=page.shell.welcome())

    @app.route("/api/welcome")
    def welcome() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the greeting shown when the terminal opens."""
        page = store.get(request.args.get("session"))
        if page is None:
            return _missing_session()
        return jsonify({"output": page.shell.welcome()})

    @app.route("/api/execute", methods=["POST"])
    def execute() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Run a command line and return its output.

        Expects JSON body: ``{"session": "...", "command": "..."}``

        Returns:
            JSON with an ``output`` field.

        """
        data = _json_body()
        if data is None or "command" not in data:
            return jsonify({"error": "Missing 'command' field"}), _HTTP_BAD_REQUEST

        command = data["command"]
        if not isinstance(command, str):
            return jsonify({"error": "'command' must be a string"}), _HTTP_BAD_REQUEST

        page = store.get(data.get("session"))
        if page is None:
            return _missing_session()

        with page.lock:
            output = page.shell.command(command)
            page.cursor.reset()
        return jsonify({"output": output})

    @app.route("/api/history")
    def history() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Return the command history, most recent first."""
        page = store.get(request.args.get("session"))
        if page is None:
            return _missing_session()
        with page.lock:
            return jsonify({"history": page.shell.history})

    @app.route("/api/history/older", methods=["POST"])
    def history_older() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Recall the next older line."""
        data = _json_body()
        page = store.get(data.get("session") if data is not None else None)
        if page is None:
            return _missing_session()
        with page.lock:
            return jsonify({"value": page.cursor.older()})

    @app.route("/api/history/newer", methods=["POST"])
    def history_newer() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Recall the next newer line."""
        data = _json_body()
        page = store.get(data.get("session") if data is not None else None)
        if page is None:
            return _missing_session()
        with page.lock:
            return jsonify({"value": page.cursor.newer()})

    return app


def main() -> None:
    """Run the web UI development server.

    This is the ``webshell-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
