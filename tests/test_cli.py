import io
import sys
from pathlib import Path

# Ensure src is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

import pytest
from rich.console import Console

from tasklog.core.engine import LogEngine
from tasklog.interfaces.cli import LogCLI, USAGE, build_parser
from tasklog.interfaces.renderer import LogRenderer
from tasklog.storage import LogStore


class Harness:
    def __init__(self, root, answers=()):
        self.out = io.StringIO()
        self.err = io.StringIO()
        self.prompts = []
        self.answers = list(answers)
        self.store = LogStore(base_path=root)
        self.engine = LogEngine(self.store)
        renderer = LogRenderer(
            console=Console(file=self.out, width=100, color_system=None),
            err_console=Console(file=self.err, width=100, color_system=None),
        )
        self.cli = LogCLI(
            store=self.store,
            engine=self.engine,
            renderer=renderer,
            confirm=self._confirm,
        )

    def _confirm(self, prompt):
        self.prompts.append(prompt)
        return self.answers.pop(0)

    def run(self, *argv):
        return self.cli.run(list(argv))


@pytest.fixture
def harness(tmp_path):
    return Harness(tmp_path)


def test_create_read_and_list(harness):
    assert harness.run("-n", "work") == 0
    assert harness.run("-a", "work", "write report") == 0
    assert harness.run("-r", "work") == 0
    assert harness.run("-l") == 0

    output = harness.out.getvalue()
    assert "Created log work" in output
    assert "write report" in output
    assert harness.err.getvalue() == ""


def test_create_existing_goes_to_stdout(harness):
    harness.run("-n", "work")

    assert harness.run("-n", "work") == 1
    assert "Log already exists: work" in harness.out.getvalue()
    assert harness.err.getvalue() == ""


def test_read_missing_log(harness):
    assert harness.run("-r", "ghost") == 1
    assert "Log not found: ghost" in harness.out.getvalue()


def test_invalid_entry_goes_to_stderr(harness):
    harness.run("-n", "work")

    assert harness.run("-a", "work", "two\nlines") == 1
    assert "single line" in harness.err.getvalue()


def test_swap_renders_new_order(harness):
    harness.run("-n", "work")
    for entry in ("A", "B", "C"):
        harness.run("-a", "work", entry)

    assert harness.run("-s", "work", "1", "3") == 0
    assert harness.engine.read_all("work").value == ["C", "B", "A"]

    assert harness.run("-s", "work", "1", "9") == 1
    assert "Invalid index" in harness.err.getvalue()


def test_complete_confirmed(tmp_path):
    harness = Harness(tmp_path, answers=[True])
    harness.run("-n", "work")
    harness.run("-a", "work", "A")
    harness.run("-a", "work", "B")

    assert harness.run("-u", "work") == 0

    assert harness.prompts == ["Complete 'A'?"]
    assert harness.engine.read_all("work").value == ["B"]
    assert "Completed: A" in harness.out.getvalue()


def test_complete_declined(tmp_path):
    harness = Harness(tmp_path, answers=[False])
    harness.run("-n", "work")
    harness.run("-a", "work", "A")

    assert harness.run("-u", "work") == 0

    assert harness.engine.read_all("work").value == ["A"]
    assert "Nothing changed." in harness.out.getvalue()


def test_complete_with_yes_skips_prompt(harness):
    harness.run("-n", "work")
    harness.run("-a", "work", "A")

    assert harness.run("-u", "work", "-y") == 0

    assert harness.prompts == []
    assert harness.engine.read_all("work").value == []


def test_complete_empty_log(harness):
    harness.run("-n", "work")

    assert harness.run("-u", "work") == 1
    assert harness.prompts == []
    assert "Log is empty: work" in harness.out.getvalue()


def test_delete(harness):
    harness.run("-n", "work")

    assert harness.run("-d", "work") == 0
    assert not harness.store.exists("work")
    assert harness.run("-d", "work") == 1


def test_help(harness):
    assert harness.run("-h") == 0
    assert "Usage: tasklog" in harness.out.getvalue()


@pytest.mark.parametrize("argv", [["-x"], [], ["-n"], ["-n", "a", "-r", "b"], ["-s", "work", "1"]])
def test_invalid_option(harness, argv):
    assert harness.run(*argv) == 1
    assert "Invalid option" in harness.err.getvalue()


def test_parser_takes_two_positionals_for_add():
    args = build_parser().parse_args(["-a", "work", "buy milk"])

    assert args.add == ["work", "buy milk"]
    assert USAGE.startswith("Usage: tasklog")


def test_cli_main_exit_code(tmp_path, monkeypatch):
    from tasklog import main

    monkeypatch.setattr(main.config.paths, "base", tmp_path)
    monkeypatch.setattr(sys, "argv", ["tasklog", "-n", "work"])

    with pytest.raises(SystemExit) as excinfo:
        main.cli_main()

    assert excinfo.value.code == 0
    assert (tmp_path / "work_bashlog.csv").is_file()


def test_swap_with_non_ascii_digit(harness):
    harness.run("-n", "work")
    harness.run("-a", "work", "A")

    assert harness.run("-s", "work", "²", "1") == 1
    assert "Invalid index" in harness.err.getvalue()
    assert harness.engine.read_all("work").value == ["A"]
