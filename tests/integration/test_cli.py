import io
from collections.abc import Callable
from pathlib import Path

import orjson
import pytest
from cyclopts import App
from rich.console import Console

from hooktemplates.cli import CLIContext, ExitCode, create_app
from tests.conftest import DATA_DIR

CliRunner = Callable[..., int]

ORIGIN = str(DATA_DIR / "plugin-views")
LOCATION = ("--origin", ORIGIN, "--folder", "templates")


def run_app(app: App, *args: str) -> int:
    try:
        app.meta(list(args))
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 1
    return 0


def run_command(
    cli: CliRunner, config_file: Path, command: str, *args: str
) -> int:
    return cli("--config", str(config_file), command, *args, *LOCATION)


class TestGlobalOptions:
    def test_missing_config_file_exits_with_load_error(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        tmp_path: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = hooktemplates_cli_with_exit_code(
            "--config", str(tmp_path / "missing.toml"), "render", "dummy-template"
        )

        assert code == ExitCode.LOAD_ERROR
        assert "Config file not found" in capsys.readouterr().out

    def test_invalid_toml_exits_with_load_error(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        tmp_path: Path,
        clean_env: None,
    ) -> None:
        path = tmp_path / "hooktemplates.toml"
        _ = path.write_text("hook_prefix = \n")

        code = hooktemplates_cli_with_exit_code(
            "--config", str(path), "render", "dummy-template"
        )

        assert code == ExitCode.LOAD_ERROR

    def test_missing_hook_prefix_exits_with_validation_error(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = tmp_path / "hooktemplates.toml"
        _ = path.write_text('source_extension = ".py"\n')

        code = run_command(
            hooktemplates_cli_with_exit_code, path, "render", "dummy-template"
        )

        assert code == ExitCode.VALIDATION_ERROR
        captured = capsys.readouterr()
        assert "hook prefix" in (captured.out + captured.err).lower()

    def test_prefix_option_supplies_hook_prefix(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        tmp_path: Path,
        clean_env: None,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        path = tmp_path / "hooktemplates.toml"
        _ = path.write_text("")

        code = hooktemplates_cli_with_exit_code(
            "--config", str(path), "--prefix", "bork", "render", "dummy-template",
            *LOCATION,
        )

        assert code == ExitCode.SUCCESS
        assert 'Dummy template' in capsys.readouterr().out

    def test_context_is_reset_after_command(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        config_file: Path,
    ) -> None:
        _ = run_command(
            hooktemplates_cli_with_exit_code, config_file, "render", "dummy-template"
        )

        assert CLIContext.get_current().config.hook_prefix == ""


class TestRenderCommand:
    def test_prints_rendered_markup(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        config_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = run_command(
            hooktemplates_cli_with_exit_code, config_file, "render", "dummy-template"
        )

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out == '<div class="test">Dummy template</div>\n'

    def test_set_values_become_context(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        config_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = run_command(
            hooktemplates_cli_with_exit_code,
            config_file,
            "render",
            "context-title",
            "--set",
            "title=Hello",
        )

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out == '<p class="title">Hello</p>\n'

    def test_context_json_is_merged_before_set_values(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        config_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = run_command(
            hooktemplates_cli_with_exit_code,
            config_file,
            "render",
            "context-title",
            "--context-json",
            '{"title": "From JSON"}',
        )

        assert code == ExitCode.SUCCESS
        assert capsys.readouterr().out == '<p class="title">From JSON</p>\n'

    def test_context_json_must_be_object(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        config_file: Path,
    ) -> None:
        code = run_command(
            hooktemplates_cli_with_exit_code,
            config_file,
            "render",
            "context-title",
            "--context-json",
            "[1, 2]",
        )

        assert code == ExitCode.VALIDATION_ERROR

    def test_malformed_set_value_is_rejected(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        config_file: Path,
    ) -> None:
        code = run_command(
            hooktemplates_cli_with_exit_code,
            config_file,
            "render",
            "context-title",
            "--set",
            "title",
        )

        assert code == ExitCode.VALIDATION_ERROR

    def test_extract_binds_context_names(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        config_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = run_command(
            hooktemplates_cli_with_exit_code,
            config_file,
            "render",
            "extracted-title",
            "--extract",
            "--set",
            "title=Bare",
        )

        assert code == ExitCode.SUCCESS
        assert "Bare" in capsys.readouterr().out

    def test_unknown_template_exits_with_not_found(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        config_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = run_command(
            hooktemplates_cli_with_exit_code, config_file, "render", "no-such-template"
        )

        assert code == ExitCode.NOT_FOUND
        assert "Template not found: no-such-template" in capsys.readouterr().out

    def test_failing_template_exits_with_internal_error(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        config_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = run_command(
            hooktemplates_cli_with_exit_code, config_file, "render", "raises-error"
        )

        assert code == ExitCode.INTERNAL_ERROR
        assert "template failed" in capsys.readouterr().out


class TestLocateCommand:
    def test_prints_template_file(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        config_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = run_command(
            hooktemplates_cli_with_exit_code, config_file, "locate", "dummy-template"
        )

        assert code == ExitCode.SUCCESS
        assert Path(capsys.readouterr().out.strip()) == (
            DATA_DIR / "plugin-views" / "templates" / "dummy-template.py"
        )

    def test_alias_folder_is_searched(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        config_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = run_command(
            hooktemplates_cli_with_exit_code,
            config_file,
            "locate",
            "card",
            "--alias",
            "plugin-views/templates=plugin-views/templates/v2",
        )

        assert code == ExitCode.SUCCESS
        assert Path(capsys.readouterr().out.strip()) == (
            DATA_DIR / "plugin-views" / "templates" / "v2" / "card.py"
        )

    def test_unknown_template_exits_with_not_found(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        config_file: Path,
    ) -> None:
        code = run_command(
            hooktemplates_cli_with_exit_code, config_file, "locate", "card"
        )

        assert code == ExitCode.NOT_FOUND

    def test_malformed_alias_is_rejected(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        config_file: Path,
    ) -> None:
        code = run_command(
            hooktemplates_cli_with_exit_code,
            config_file,
            "locate",
            "card",
            "--alias",
            "no-separator",
        )

        assert code == ExitCode.VALIDATION_ERROR


class TestPathsCommand:
    def test_json_lists_plugin_and_alias_folders(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        config_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = run_command(
            hooktemplates_cli_with_exit_code,
            config_file,
            "paths",
            "--format",
            "json",
            "--alias",
            "plugin-views/templates=plugin-views/missing",
        )

        assert code == ExitCode.SUCCESS
        rows = orjson.loads(capsys.readouterr().out)
        assert [(row["source"], row["priority"]) for row in rows] == [
            ("plugin", 20),
            ("plugin", 21),
        ]
        assert rows[0]["id"] == "plugin"
        assert rows[0]["path"] == str(DATA_DIR / "plugin-views" / "templates")
        assert rows[0]["exists"] is True
        assert rows[1]["exists"] is False

    def test_table_lists_folders(
        self,
        hooktemplates_cli_with_exit_code: CliRunner,
        config_file: Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = run_command(hooktemplates_cli_with_exit_code, config_file, "paths")

        assert code == ExitCode.SUCCESS
        output = capsys.readouterr().out
        assert "Template folders" in output
        assert "plugin" in output


class TestOutputConsoles:
    def test_markup_is_written_to_app_console_verbatim(
        self, config_file: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        output = io.StringIO()
        app = create_app(console=Console(file=output, width=40))

        code = run_app(
            app,
            "--config",
            str(config_file),
            "render",
            "context-title",
            "--set",
            "title=[bold]not markup[/bold]",
            *LOCATION,
        )

        assert code == ExitCode.SUCCESS
        assert output.getvalue() == (
            '<p class="title">[bold]not markup[/bold]</p>\n'
        )
        assert capsys.readouterr().out == ""

    def test_errors_are_written_to_app_error_console(
        self, config_file: Path
    ) -> None:
        errors = io.StringIO()
        app = create_app(
            console=Console(file=io.StringIO()),
            error_console=Console(file=errors, width=200),
        )

        code = run_app(app, "--config", str(config_file), "locate", "card", *LOCATION)

        assert code == ExitCode.NOT_FOUND
        assert "Template not found: card" in errors.getvalue()
