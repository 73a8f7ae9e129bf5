import textwrap
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def write_source(tmp_path: Path):
    """Writes dedented compact notation to a file under `tmp_path`."""

    def _write(content: str, filename: str = "diagram.mad") -> Path:
        path = tmp_path / filename
        path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
        return path

    return _write
