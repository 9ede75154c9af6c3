"""Integration tests for the brio CLI."""

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from brio.entrypoints.cli import _ClickEchoHandler, cli
from brio.version import __version__
from tests.helpers import (
    assert_command_failed,
    assert_command_success,
    assert_error_message,
    assert_output_contains,
    assert_output_matches,
)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def _invoke(runner: CliRunner, *args: str):
    return runner.invoke(cli, list(args), obj={})


class TestExtract:
    """Tests for `brio extract`."""

    def test_markdown_output(self, runner: CliRunner, sample_tree: Path) -> None:
        result = _invoke(runner, "extract", "-d", str(sample_tree))

        assert_command_success(result, context="brio extract")
        assert_output_contains(
            result,
            "## File: ",
            "models.py (lines 3-6)",
            "**Categories**: foundation -> [messages], model -> [messages]",
            "```python\nclass Message:\n    pass\n```",
            "alert.ts (lines 2-6)",
            "```typescript",
        )
        assert "not scanned" not in result.stdout

    def test_category_filter(self, runner: CliRunner, sample_tree: Path) -> None:
        result = _invoke(runner, "extract", "-d", str(sample_tree), "-c", "alerts:tests")

        assert_command_success(result)
        assert result.stdout.count("## File:") == 1
        assert_output_contains(result, "def test_alert():")

    def test_file_pattern(self, runner: CliRunner, sample_tree: Path) -> None:
        result = _invoke(runner, "extract", "-d", str(sample_tree), "-f", "*.ts")

        assert_command_success(result)
        assert "models.py" not in result.stdout
        assert_output_contains(result, "alert.ts")

    def test_no_matches(self, runner: CliRunner, sample_tree: Path) -> None:
        result = _invoke(runner, "extract", "-d", str(sample_tree), "-c", "nothing")

        assert_command_success(result)
        assert_output_contains(result, "No snippets found")

    def test_json_output(self, runner: CliRunner, sample_tree: Path) -> None:
        result = _invoke(runner, "extract", "-d", str(sample_tree), "--format", "json")

        assert_command_success(result)
        data = json.loads(result.stdout)
        assert [(Path(item["path"]).name, item["start_line"]) for item in data] == [
            ("models.py", 3),
            ("models.py", 9),
            ("alert.ts", 2),
        ]
        assert data[2]["categories"] == {"foundation": ["alerts"]}

    def test_clipboard_output(self, runner: CliRunner, sample_tree: Path) -> None:
        result = _invoke(
            runner, "extract", "-d", str(sample_tree), "--clipboard", "--highlight"
        )

        assert_command_success(result)
        assert "```" not in result.stdout
        assert "\x1b[" not in result.stdout
        assert_output_matches(result, r"File: .*models\.py \(lines 3-6\)")
        assert "3 snippet(s) ready to copy." in result.stderr

    def test_quiet_clipboard_has_no_summary(
        self, runner: CliRunner, sample_tree: Path
    ) -> None:
        result = _invoke(runner, "-q", "extract", "-d", str(sample_tree), "--clipboard")

        assert_command_success(result)
        assert "ready to copy" not in result.stderr

    def test_highlight(self, runner: CliRunner, sample_tree: Path) -> None:
        result = runner.invoke(
            cli, ["extract", "-d", str(sample_tree), "--highlight"], obj={}, color=True
        )

        assert_command_success(result)
        assert "\x1b[" in result.stdout
        assert "```" not in result.stdout

    def test_parallel_workers(self, runner: CliRunner, sample_tree: Path) -> None:
        sequential = _invoke(runner, "extract", "-d", str(sample_tree))
        parallel = _invoke(runner, "extract", "-d", str(sample_tree), "-w", "4")

        assert_command_success(parallel)
        assert parallel.stdout == sequential.stdout

    def test_local_config_defaults(self, runner: CliRunner, sample_tree: Path) -> None:
        (sample_tree / ".brio.toml").write_text(
            '[scan]\ncategories = "tests"\n\n[display]\nformat = "plain"\n'
        )

        result = _invoke(runner, "extract", "-d", str(sample_tree))

        assert_command_success(result)
        assert result.stdout.startswith("File: ")
        assert "def test_alert():" in result.stdout
        assert "class Message:" not in result.stdout

    def test_cli_options_override_config(
        self, runner: CliRunner, sample_tree: Path
    ) -> None:
        (sample_tree / ".brio.toml").write_text('[scan]\ncategories = "tests"\n')

        result = _invoke(runner, "extract", "-d", str(sample_tree), "-c", "model")

        assert_command_success(result)
        assert "class Message:" in result.stdout
        assert "def test_alert():" not in result.stdout

    def test_custom_language_from_config(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / ".brio.toml").write_text(
            '[[languages]]\nname = "Lua"\nextensions = [".lua"]\nsingle = "--"\n'
        )
        (tmp_path / "init.lua").write_text(
            '-- >: {"setup": []}\nlocal x = 1\n-- <: {}\n'
        )

        result = _invoke(runner, "extract", "-d", str(tmp_path))

        assert_command_success(result)
        assert_output_contains(result, "```lua\nlocal x = 1\n```")

    def test_missing_directory(self, runner: CliRunner, tmp_path: Path) -> None:
        result = _invoke(runner, "extract", "-d", str(tmp_path / "missing"))

        assert_command_failed(result)
        assert_error_message(result, hint="--dir")
        assert "Not a directory" in result.output

    def test_malformed_file_pattern(self, runner: CliRunner, sample_tree: Path) -> None:
        result = _invoke(runner, "extract", "-d", str(sample_tree), "-f", "[")

        assert_command_failed(result)
        assert_error_message(result, hint="--files")
        assert "Invalid file pattern" in result.output
        assert "## File:" not in result.stdout

    def test_warns_about_unreadable_file(
        self, runner: CliRunner, sample_tree: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _fail(path, language):
            raise PermissionError(13, "Permission denied", str(path))

        monkeypatch.setattr("brio.core.extract_usecase.scan_file", _fail)

        result = _invoke(runner, "extract", "-d", str(sample_tree))

        assert_command_success(result)
        assert "WARNING: Failed to read file" in result.stderr
        assert "No snippets found" in result.stdout

    def test_verbose_logs_debug(self, runner: CliRunner, make_tree) -> None:
        root = make_tree({"a.py": '# >: {"x": []}\nbody\n'})

        result = _invoke(runner, "-v", "extract", "-d", str(root))

        assert_command_success(result)
        assert "DEBUG:" in result.stderr
        assert "unterminated" in result.stderr


class TestLogging:
    """Tests for CLI log routing."""

    @pytest.mark.parametrize(
        ("flags", "level"),
        [((), logging.WARNING), (("-v",), logging.DEBUG), (("-q",), logging.ERROR)],
    )
    def test_level_follows_flags(
        self, runner: CliRunner, tmp_path: Path, flags: tuple[str, ...], level: int
    ) -> None:
        result = _invoke(runner, *flags, "languages", "-d", str(tmp_path))

        assert_command_success(result)
        assert logging.getLogger("brio").level == level

    def test_repeated_runs_keep_one_handler(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        for _ in range(3):
            assert_command_success(_invoke(runner, "languages", "-d", str(tmp_path)))

        handlers = [
            h for h in logging.getLogger("brio").handlers if isinstance(h, _ClickEchoHandler)
        ]
        assert len(handlers) == 1

    def test_root_logger_untouched(self, runner: CliRunner, tmp_path: Path) -> None:
        before = list(logging.getLogger().handlers)

        assert_command_success(_invoke(runner, "languages", "-d", str(tmp_path)))

        assert logging.getLogger().handlers == before


class TestLanguages:
    def test_lists_builtin_languages(self, runner: CliRunner, tmp_path: Path) -> None:
        result = _invoke(runner, "languages", "-d", str(tmp_path))

        assert_command_success(result)
        assert_output_contains(result, "Python", ".py", "TypeScript", ".ts", "/* ... */")

    def test_includes_configured_languages(
        self, runner: CliRunner, tmp_path: Path
    ) -> None:
        (tmp_path / ".brio.toml").write_text(
            '[[languages]]\nname = "Lua"\nextensions = [".lua"]\nsingle = "--"\n'
        )

        result = _invoke(runner, "languages", "-d", str(tmp_path))

        assert_command_success(result)
        assert_output_matches(result, r"Lua\s+\.lua")


class TestConfigCommands:
    def test_init_writes_default_config(self, runner: CliRunner, tmp_path: Path) -> None:
        result = _invoke(runner, "config", "init", "-d", str(tmp_path))

        assert_command_success(result)
        text = (tmp_path / ".brio.toml").read_text()
        assert "[scan]" in text
        assert "[display]" in text

    def test_init_refuses_to_overwrite(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / ".brio.toml").write_text("# mine\n")

        result = _invoke(runner, "config", "init", "-d", str(tmp_path))

        assert_command_failed(result)
        assert_error_message(result, hint="--force")
        assert (tmp_path / ".brio.toml").read_text() == "# mine\n"

    def test_init_force(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / ".brio.toml").write_text("# mine\n")

        result = _invoke(runner, "config", "init", "-d", str(tmp_path), "--force")

        assert_command_success(result)
        assert "[scan]" in (tmp_path / ".brio.toml").read_text()

    def test_show_merges_local_config(self, runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / ".brio.toml").write_text("[scan]\nworkers = 3\n")

        result = _invoke(runner, "config", "show", "-d", str(tmp_path))

        assert_command_success(result)
        assert_output_contains(result, "workers = 3", 'format = "markdown"')

    def test_path(
        self, runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
        (tmp_path / ".brio.toml").write_text("")

        result = _invoke(runner, "config", "path", "-d", str(tmp_path))

        assert_command_success(result)
        assert_output_contains(result, "Global config:", "Local config:", "not created", "exists")


def test_version(runner: CliRunner) -> None:
    result = _invoke(runner, "--version")

    assert_command_success(result)
    assert __version__ in result.output
