from __future__ import annotations

import textwrap
from pathlib import Path

import mermaid_aid.cli as cli_module
from mermaid_aid.cli import SYNTAX_EXAMPLES, cli


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_translates_file_to_stdout(cli_runner, write_source, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = write_source(
        """
        flow
        @ start: Begin
        start -> done: finished
        """
    )

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == (
        "flowchart TD\n"
        "    start([Begin])\n"
        "    done([done])\n"
        "    start -->|finished| done\n"
    )


def test_cli_reads_stdin(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, [], input="seq\nuser -> app: login\n")

    assert result.exit_code == 0
    assert result.output == "sequenceDiagram\n    user->>app: login\n"


def test_cli_rejects_blank_stdin(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, [], input="  \n")

    assert result.exit_code == 1
    assert "No input provided" in result.output


def test_cli_writes_output_file(cli_runner, write_source, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = write_source(
        """
        class
        User
        """
    )
    destination = tmp_path / "out.mmd"

    result = cli_runner.invoke(cli, [str(target), "-o", str(destination)])

    assert result.exit_code == 0
    assert destination.read_text(encoding="utf-8") == "classDiagram\n    class User"
    assert f"Output written to {destination}" in result.output
    assert "classDiagram" not in result.output


def test_cli_reports_output_directory_errors(cli_runner, write_source, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = write_source("class\nUser\n")
    destination = tmp_path / "missing" / "out.mmd"

    result = cli_runner.invoke(cli, [str(target), "--output", str(destination)])

    assert result.exit_code == 1
    assert "Error writing" in result.output
    assert not destination.exists()


def test_cli_reports_syntax_errors(cli_runner, write_source, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = write_source("flow\nstart ->\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "Expected node name after ARROW at line 2, column 7" in result.output


def test_cli_reports_syntax_errors_from_stdin(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    result = cli_runner.invoke(cli, [], input="A -> B\n")

    assert result.exit_code == 1
    assert "Expected diagram type" in result.output


def test_cli_reports_unterminated_strings(cli_runner, write_source, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = write_source('seq\nuser -> app: "oops\n')

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "unterminated string at line 2, column 14" in result.output


def test_cli_prints_examples(cli_runner):
    result = cli_runner.invoke(cli, ["--examples"])

    assert result.exit_code == 0
    assert result.output == SYNTAX_EXAMPLES
    assert "=== CHAINED CONNECTIONS ===" in result.output


def test_cli_examples_ignore_input_file(cli_runner, write_source):
    target = write_source("not a diagram\n")

    result = cli_runner.invoke(cli, ["-e", str(target)])

    assert result.exit_code == 0
    assert result.output == SYNTAX_EXAMPLES


def test_cli_direction_option_is_case_insensitive(cli_runner, write_source, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = write_source("flow\nA -> B\n")

    result = cli_runner.invoke(cli, ["-d", "lr", str(target)])

    assert result.exit_code == 0
    assert result.output.splitlines()[0] == "flowchart LR"


def test_cli_rejects_unknown_direction(cli_runner, write_source):
    target = write_source("flow\nA\n")

    result = cli_runner.invoke(cli, ["--direction", "up", str(target)])

    assert result.exit_code == 2


def test_cli_reads_config_from_pyproject(cli_runner, write_source, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.mermaid-aid]
        direction = "BT"
        indent_spaces = 2
        """,
    )
    target = write_source("flow\nA\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == "flowchart BT\n  A[A]\n"


def test_cli_flag_overrides_config(cli_runner, write_source, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.mermaid-aid]
        direction = "BT"
        """,
    )
    target = write_source("flow\nA\n")

    result = cli_runner.invoke(cli, ["-d", "RL", str(target)])

    assert result.exit_code == 0
    assert result.output == "flowchart RL\n    A[A]\n"


def test_cli_reads_config_from_dotfile(cli_runner, write_source, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".mermaid-aid.toml").write_text(
        '[mermaid-aid]\nindent = "\\t"\n', encoding="utf-8"
    )
    target = write_source("seq\na -> b: hi\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == "sequenceDiagram\n\ta->>b: hi\n"


def test_cli_rejects_invalid_config(cli_runner, write_source, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.mermaid-aid]
        direction = "sideways"
        """,
    )
    target = write_source("flow\nA\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 2
    assert "`direction` must be one of: TB, TD, BT, RL, LR" in result.output


def test_cli_rejects_unknown_config_keys(cli_runner, write_source, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _write_pyproject(
        tmp_path,
        """
        [tool.mermaid-aid]
        theme = "dark"
        """,
    )
    target = write_source("flow\nA\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 2
    assert "Invalid `[tool.mermaid-aid]` settings" in result.output


def test_cli_enforces_size_limit_from_environment(
    cli_runner, write_source, tmp_path, monkeypatch
):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MERMAID_AID_MAX_FILE_SIZE", "5")
    target = write_source("flow\nA -> B\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "exceeds the maximum allowed size of 5 bytes" in result.output


def test_cli_enforces_configured_size_limit(cli_runner, write_source, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MERMAID_AID_MAX_FILE_SIZE", raising=False)
    _write_pyproject(
        tmp_path,
        """
        [tool.mermaid-aid]
        max_file_size = 4
        """,
    )
    target = write_source("flow\nA -> B\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "exceeds the maximum allowed size of 4 bytes" in result.output


def test_cli_rejects_invalid_size_environment(cli_runner, write_source, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MERMAID_AID_MAX_FILE_SIZE", "lots")
    target = write_source("flow\nA\n")

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "Invalid value for MERMAID_AID_MAX_FILE_SIZE" in result.output


def test_cli_rejects_missing_input_file(cli_runner, tmp_path):
    result = cli_runner.invoke(cli, [str(tmp_path / "missing.mad")])

    assert result.exit_code == 2
    assert "does not exist" in result.output


def test_cli_help(cli_runner):
    result = cli_runner.invoke(cli, ["-h"])

    assert result.exit_code == 0
    assert "Translate compact diagram notation into Mermaid." in result.output
    assert "--examples" in result.output


def test_cli_public_api():
    assert cli_module.__all__ == ["cli"]
