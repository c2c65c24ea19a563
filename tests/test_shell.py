"""Tests for the shell session and its ``command()`` entry point.

The session tokenizes a line, resolves the program (registry first,
then path lookup), runs it, and formats the result.  Every failure is
turned into a single newline-terminated line of text.
"""

import pytest

from webshell.commands import CommandRegistry, echo
from webshell.config import ShellConfig
from webshell.nodes import Executable, File
from webshell.shell import WELCOME_TEXT, ShellSession


def _session() -> ShellSession:
    """Create a fresh session with the default config."""
    return ShellSession()


def _boom(_session: ShellSession, _args: list[str]) -> str:
    """Fail with an exception that is not a shell error."""
    msg = "internal detail"
    raise RuntimeError(msg)


class TestSessionCreation:
    """Verify the state of a new session."""

    def test_starts_in_home(self) -> None:
        """The working directory starts at the user's home."""
        assert _session().cwd == ["home", "nick"]

    def test_user_from_config(self) -> None:
        """The user comes from the config."""
        session = ShellSession(ShellConfig(user="ada"))
        assert session.user == "ada"
        assert session.cwd == ["home", "ada"]

    def test_history_starts_empty(self) -> None:
        """No commands means no history."""
        assert _session().history == []

    def test_sessions_are_independent(self) -> None:
        """Changing one session leaves another untouched."""
        first, second = _session(), _session()
        first.command("cd /tmp")
        assert second.cwd == ["home", "nick"]
        assert second.history == []
        assert first.filesystem is not second.filesystem

    def test_welcome(self) -> None:
        """The greeting points at help and ends with a newline."""
        assert _session().welcome() == 'Welcome! Type "help" to see a list of commands\n'
        assert WELCOME_TEXT.endswith("\n")


class TestScenarios:
    """End-to-end command lines on a fresh session."""

    def test_pwd(self) -> None:
        """Pwd shows the home directory."""
        assert _session().command("pwd") == "/home/nick\n"

    def test_ls(self) -> None:
        """Ls lists the sample file."""
        assert _session().command("ls") == "about.txt\n"

    def test_cat_about(self) -> None:
        """Cat shows the sample file without doubling its newline."""
        expected = "This shell was created with a bit of JavaScript\n"
        assert _session().command("cat about.txt") == expected

    def test_cd_then_pwd(self) -> None:
        """Cd produces no output and pwd reflects it."""
        session = _session()
        assert session.command("cd /tmp") == ""
        assert session.command("pwd") == "/tmp\n"

    def test_cat_missing(self) -> None:
        """A missing file is reported, not raised."""
        assert _session().command("cat nope.txt") == "No such file or directory\n"

    def test_unknown_command(self) -> None:
        """An unknown bare name is reported."""
        assert _session().command("frobnicate") == "Command not found\n"

    @pytest.mark.parametrize("target", ["/", "/bin", "..", "~", "../../home/./nick"])
    def test_cd_pwd_round_trip(self, target: str) -> None:
        """Pwd after cd renders the resolved target path."""
        session = _session()
        expected = "/" + "/".join(session.resolve(target)) + "\n"
        session.command(f"cd {target}")
        assert session.command("pwd") == expected


class TestTokenizing:
    """Verify how a line is split into arguments."""

    def test_empty_line(self) -> None:
        """An empty line outputs nothing at all."""
        assert _session().command("") == ""

    def test_spaces_only(self) -> None:
        """A line of spaces outputs nothing."""
        assert _session().command("     ") == ""

    def test_repeated_spaces_collapse(self) -> None:
        """Empty tokens between spaces are dropped."""
        assert _session().command("  echo   a    b ") == "a b\n"

    def test_tabs_are_not_separators(self) -> None:
        """Only spaces separate tokens."""
        assert _session().command("echo\ta") == "Command not found\n"


class TestDispatch:
    """Verify how the program is chosen."""

    def test_path_to_executable_runs(self) -> None:
        """A path to an executable runs it."""
        assert _session().command("/bin/whoami") == "nick\n"

    def test_relative_path_to_executable_runs(self) -> None:
        """A relative path with a slash is resolved against cwd."""
        assert _session().command("../../bin/pwd") == "/home/nick\n"

    def test_path_to_file_is_not_executable(self) -> None:
        """A path to a file is rejected as not executable."""
        assert _session().command("./about.txt") == "./about.txt is not executable\n"

    def test_path_to_directory_is_not_executable(self) -> None:
        """A path to a directory is rejected as not executable."""
        assert _session().command("/tmp/") == "/tmp/ is not executable\n"

    def test_missing_path_is_not_found(self) -> None:
        """A path that does not exist reports not found."""
        assert _session().command("/bin/nope") == "No such file or directory\n"

    def test_bare_file_name_is_not_a_command(self) -> None:
        """A slash-free name is never looked up in the tree."""
        assert _session().command("about.txt") == "Command not found\n"

    def test_registry_wins_over_tree(self) -> None:
        """A registered name runs even if /bin no longer holds it."""
        session = _session()
        bin_dir = session.filesystem.lookup(["bin"])
        bin_dir.children.clear()  # type: ignore[union-attr]
        assert session.command("whoami") == "nick\n"

    def test_executable_outside_bin(self) -> None:
        """An executable placed anywhere runs by path."""
        session = _session()
        tmp = session.filesystem.lookup(["tmp"])
        tmp.children["say"] = Executable(echo)  # type: ignore[union-attr]
        assert session.command("/tmp/say hi") == "hi\n"

    def test_args_include_command_token(self) -> None:
        """The built-in sees the token as typed in args[0]."""
        seen: list[list[str]] = []

        def _record(_session: ShellSession, args: list[str]) -> str:
            seen.append(args)
            return ""

        session = ShellSession(registry=CommandRegistry({"rec": _record}))
        session.command("rec  x y")
        assert seen == [["rec", "x", "y"]]


class TestFormatting:
    """Verify the trailing newline rule."""

    def test_newline_added_once(self) -> None:
        """Output without a newline gets one."""
        assert _session().command("echo hi") == "hi\n"

    def test_existing_newline_kept(self) -> None:
        """Output that already ends in a newline is not doubled."""
        session = _session()
        tmp = session.filesystem.lookup(["tmp"])
        tmp.children["n"] = File("line\n")  # type: ignore[union-attr]
        assert session.command("cat /tmp/n") == "line\n"

    def test_empty_output_stays_empty(self) -> None:
        """Commands with no output return an empty string."""
        assert _session().command("echo") == ""
        assert _session().command("ls /tmp") == ""

    @pytest.mark.parametrize(
        "line", ["help", "pwd", "whoami", "ls /", "cat about.txt", "echo a b", "date"]
    )
    def test_exactly_one_trailing_newline(self, line: str) -> None:
        """Non-empty output ends with exactly one newline."""
        output = _session().command(line)
        assert output.endswith("\n")
        assert not output.endswith("\n\n")


class TestErrorTranslation:
    """Verify that failures become text."""

    def test_cat_directory(self) -> None:
        """Cat on a directory names the argument."""
        assert _session().command("cat /tmp") == "/tmp is a directory\n"

    def test_cat_binary(self) -> None:
        """Cat on an executable reports a binary file."""
        assert _session().command("cat /bin/cat") == "/bin/cat is a binary file\n"

    def test_cd_file(self) -> None:
        """Cd into a file reports not a directory."""
        assert _session().command("cd about.txt") == "about.txt is not a directory\n"

    def test_unrecognized_failure_is_generic(self) -> None:
        """Unexpected exceptions print only ``Error``."""
        session = ShellSession(registry=CommandRegistry({"boom": _boom}))
        assert session.command("boom") == "Error\n"

    def test_session_survives_failures(self) -> None:
        """A failing command does not break later ones."""
        session = _session()
        session.command("cat nope.txt")
        session.command("cd /nowhere")
        assert session.command("pwd") == "/home/nick\n"

    def test_failed_cd_leaves_cwd(self) -> None:
        """A rejected cd keeps the old directory."""
        session = _session()
        session.command("cd /bin/ls")
        assert session.cwd == ["home", "nick"]
