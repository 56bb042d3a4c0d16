"""Tests for the `todostore init` CLI command."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from todostore.cli.main import cli


@pytest.fixture()
def clean_env() -> dict[str, str]:
    return {"TODOSTORE_DATA_DIR": "", "TODOSTORE_COUNTER_FILE": ""}


class TestInit:
    def test_creates_layout(self, tmp_path: Path, clean_env: dict[str, str]) -> None:
        runner = CliRunner()
        result = runner.invoke(cli, ["init", "--path", str(tmp_path)], env=clean_env)
        assert result.exit_code == 0, result.output

        store_dir = tmp_path / ".todostore"
        assert (store_dir / "data").is_dir()
        assert not (store_dir / "counter.txt").exists()
        assert "todostore initialized in .todostore/" in result.output

    def test_idempotent(self, tmp_path: Path, clean_env: dict[str, str]) -> None:
        runner = CliRunner()
        runner.invoke(cli, ["init", "--path", str(tmp_path)], env=clean_env)
        (tmp_path / ".todostore" / "data" / "00001.txt").write_text("keep")

        result = runner.invoke(cli, ["init", "--path", str(tmp_path)], env=clean_env)
        assert result.exit_code == 0
        assert "already initialized" in result.output
        assert (tmp_path / ".todostore" / "data" / "00001.txt").read_text() == "keep"

    def test_store_dir_is_a_file(self, tmp_path: Path, clean_env: dict[str, str]) -> None:
        (tmp_path / ".todostore").write_text("oops")
        runner = CliRunner()
        result = runner.invoke(cli, ["init", "--path", str(tmp_path)], env=clean_env)
        assert result.exit_code != 0
        assert "exists but is not a directory" in result.output

    def test_honours_env_overrides(self, tmp_path: Path) -> None:
        data_dir = tmp_path / "elsewhere" / "records"
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["init", "--path", str(tmp_path)],
            env={"TODOSTORE_DATA_DIR": str(data_dir), "TODOSTORE_COUNTER_FILE": ""},
        )
        assert result.exit_code == 0, result.output
        assert data_dir.is_dir()

    def test_rejects_counter_inside_data_dir(self, tmp_path: Path) -> None:
        data_dir = tmp_path / "records"
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["init", "--path", str(tmp_path)],
            env={
                "TODOSTORE_DATA_DIR": str(data_dir),
                "TODOSTORE_COUNTER_FILE": str(data_dir / "counter.txt"),
            },
        )
        assert result.exit_code != 0
        assert "Invalid configuration" in result.output
