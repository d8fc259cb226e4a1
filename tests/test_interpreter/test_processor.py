"""Tests for CommandInterpreter line processing and script execution."""

import pytest

from librarymanager.catalog.manager import Catalog
from librarymanager.config import Config
from librarymanager.interpreter.processor import CommandInterpreter


class TestProcessLine:
    """Tests for process_line."""

    @pytest.mark.parametrize("line", [None, "", "    ", "# a comment", "   # indented comment"])
    def test_no_reply_for_blank_and_comments(self, interpreter, line):
        """Test blank and comment lines produce nothing."""
        assert interpreter.process_line(line) is None

    def test_comment_not_gated(self, interpreter):
        """Test comments are ignored even when logged out."""
        assert interpreter.process_line("#borrow 1") is None

    def test_output_sink_receives_replies(self, config, clock):
        """Test the sink gets each non-empty reply once."""
        received = []
        interpreter = CommandInterpreter(config=config, clock=clock, output=received.append)

        interpreter.process_line("log admin")
        interpreter.process_line("# ignored")
        interpreter.process_line("add -t T -a A -d 2000 -i 1 -n 2")

        assert received == ["You are log as admin", "The books are registered as 1 2."]

    def test_multi_line_reply_is_one_sink_call(self, config, clock):
        """Test a reply with several lines is delivered in one piece."""
        received = []
        interpreter = CommandInterpreter(config=config, clock=clock, output=received.append)
        interpreter.process_line("log admin")
        interpreter.process_line("add -t T -a A -d 2000 -i 1")

        interpreter.process_line("remove 1 2")
        assert received[-1] == "The following books were removed: 1.\nThe following IDs do not exist: 2."

    @pytest.mark.parametrize(
        "line",
        [
            "log",
            "add -t",
            "borrow 99999999999999999999",
            "remove -",
            "search -d",
            "extend +",
            "list -br -av extra tokens",
            "check -b -b",
            "éè à",
        ],
    )
    def test_never_raises(self, interpreter, login, line):
        """Test odd input is answered, never raised."""
        login("admin")
        interpreter.process_line(line)

    def test_interpreters_do_not_share_state(self, config, clock):
        """Test each interpreter owns its catalog and session."""
        first = CommandInterpreter(config=config, clock=clock)
        second = CommandInterpreter(config=config, clock=clock)

        first.process_line("log admin")
        first.process_line("add -t T -a A -d 2000 -i 1")

        assert second.process_line("list") == "You must log in with: log [USERNAME]"
        second.process_line("log admin")
        assert second.process_line("list") == "No books in library."

    def test_uses_given_catalog(self, config, clock):
        """Test an existing catalog can be supplied."""
        catalog = Catalog()
        catalog.add_book(1, "T", "A", 2000)
        interpreter = CommandInterpreter(catalog=catalog, config=config, clock=clock)

        interpreter.process_line("log Alice")
        assert interpreter.process_line("list") == "1\tT\tA\t2000"

    def test_configured_loan_days(self, clock):
        """Test the loan period comes from the config."""
        config = Config.defaults()
        config.loan_days = 14
        interpreter = CommandInterpreter(config=config, clock=clock)
        interpreter.process_line("log admin")
        interpreter.process_line("add -t T -a A -d 2000 -i 1")

        assert interpreter.process_line("borrow 1") == "Book 1 borrowed by admin until 24/03/2025."

    def test_configured_date_format(self, clock):
        """Test dates follow the configured format."""
        config = Config.defaults()
        config.date_format = "%Y-%m-%d"
        interpreter = CommandInterpreter(config=config, clock=clock)
        interpreter.process_line("log admin")
        interpreter.process_line("add -t T -a A -d 2000 -i 1")

        assert interpreter.process_line("borrow 1") == "Book 1 borrowed by admin until 2025-03-17."

    def test_default_config_from_environment(self, monkeypatch, clock):
        """Test the global config is used when none is passed."""
        monkeypatch.setenv("LIBRARY_LOAN_DAYS", "1")
        interpreter = CommandInterpreter(clock=clock)
        interpreter.process_line("log admin")
        interpreter.process_line("add -t T -a A -d 2000 -i 1")

        assert interpreter.process_line("borrow 1") == "Book 1 borrowed by admin until 11/03/2025."

    def test_out_of_range_loan_days_rejected(self, monkeypatch, clock):
        """Test a loan period that would overflow dates is refused up front."""
        monkeypatch.setenv("LIBRARY_LOAN_DAYS", "3000000")
        with pytest.raises(ValueError, match="Loan days must be at most 36500"):
            CommandInterpreter(clock=clock)

    def test_longest_loan_period(self, clock):
        """Test the largest accepted loan period borrows and extends normally."""
        config = Config.defaults()
        config.loan_days = 36500
        interpreter = CommandInterpreter(config=config, clock=clock)
        interpreter.process_line("log admin")
        interpreter.process_line("add -t T -a A -d 2000 -i 1")

        assert interpreter.process_line("borrow 1") == "Book 1 borrowed by admin until 14/02/2125."
        assert interpreter.process_line("extend 1") == "Loan extended. New limit date: 21/01/2225"


class TestScenarios:
    """End-to-end command sequences."""

    def test_admin_then_users(self, interpreter):
        """Test a full session sequence across users."""
        lines = [
            "log admin",
            "add -t Java -a Gosling -d 1995 -i 100",
            "add -t X -a Y -d 1999 -i 5 -n 3",
            "logout",
            "log Alice",
            "borrow 1",
            "extend 1",
            "extend 1",
            "logout",
            "log Bob",
            "return 1",
            "logout",
            "borrow 1",
        ]
        assert interpreter.run(lines) == [
            "You are log as admin",
            "The book is registered as 1.",
            "The books are registered as 2 3 4.",
            "You are logged out.",
            "You are log as Alice",
            "Book 1 borrowed by Alice until 17/03/2025.",
            "Loan extended. New limit date: 24/03/2025",
            "Extension limit reached",
            "You are logged out.",
            "You are log as Bob",
            "Book 1 is borrowed by another user.",
            "You are logged out.",
            "You must log in with: log [USERNAME]",
        ]

    def test_run_skips_silent_lines(self, interpreter):
        """Test run only collects lines that replied."""
        replies = interpreter.run(["", "# header", "log admin", "remove"])
        assert replies == ["You are log as admin"]


class TestExecuteScript:
    """Tests for execute_script."""

    def test_transcript(self, interpreter, tmp_path):
        """Test a script produces a newline-terminated transcript."""
        script = tmp_path / "library_manager.txt"
        script.write_text(
            "# setup\n"
            "log admin\n"
            "\n"
            "add -t Java -a Gosling -d 1995 -i 100\n"
            "remove 1 99\n",
            encoding="utf-8",
        )

        transcript = interpreter.execute_script(script)

        assert transcript == (
            "You are log as admin\n"
            "The book is registered as 1.\n"
            "The following books were removed: 1.\n"
            "The following IDs do not exist: 99.\n"
        )

    def test_windows_line_endings(self, interpreter, tmp_path):
        """Test CRLF scripts behave like LF scripts."""
        script = tmp_path / "script.txt"
        script.write_bytes(b"log Alice\r\nlist\r\n")

        assert interpreter.execute_script(str(script)) == "You are log as Alice\nNo books in library.\n"

    def test_utf8_titles(self, interpreter, tmp_path):
        """Test titles are read as UTF-8."""
        script = tmp_path / "script.txt"
        script.write_text("log admin\nadd -t Café -a Émile -d 1900 -i 1\nlist\n", encoding="utf-8")

        transcript = interpreter.execute_script(script)
        assert transcript.splitlines()[-1] == "1\tCafé\tÉmile\t1900"

    def test_empty_script(self, interpreter, tmp_path):
        """Test an empty script has an empty transcript."""
        script = tmp_path / "empty.txt"
        script.write_text("", encoding="utf-8")

        assert interpreter.execute_script(script) == ""

    def test_missing_script(self, interpreter, tmp_path):
        """Test a missing file raises the OS error."""
        with pytest.raises(FileNotFoundError):
            interpreter.execute_script(tmp_path / "nope.txt")
