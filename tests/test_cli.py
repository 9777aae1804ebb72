from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

from json2struct import cli


@pytest.fixture(autouse=True)
def _restore_loguru():
    yield
    logger.disable("json2struct")
    logger.remove()
    logger.add(sys.stderr)


def _invoke(args: list[str], *, input_text: str | None = None):
    runner = CliRunner()
    return runner.invoke(cli.app, args, input=input_text)


def test_cli_reads_stdin_and_prints_go() -> None:
    result = _invoke(["--name", "Out"], input_text='{"age": 1}')
    assert result.exit_code == 0, result.output
    assert result.stdout == 'type Out struct {\n\tAge int `json:"age"`\n}\n'


def test_cli_default_root_name(tmp_path: Path) -> None:
    result = _invoke(
        ["-", "--config", str(tmp_path / "absent.toml")], input_text="[1.5]"
    )
    assert result.exit_code == 0, result.output
    assert result.stdout == "type AutoGenerated []float64\n"


def test_cli_reads_file_and_writes_output(write_json_file, tmp_path: Path) -> None:
    source = write_json_file('{"user": {"id": 7}}')
    target = tmp_path / "types.go"
    result = _invoke([str(source), "-n", "Doc", "-o", str(target)])
    assert result.exit_code == 0, result.output
    assert result.stdout == ""
    assert target.read_text(encoding="utf-8") == (
        "type Doc struct {\n"
        '\tUser User `json:"user"`\n'
        "}\n"
        "\n"
        "type User struct {\n"
        '\tId int `json:"id"`\n'
        "}\n"
    )


def test_cli_config_file_sets_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "json2struct.toml"
    config_path.write_text(
        '[transform]\nroot_name = "Payload"\ndedup = "structural"\n',
        encoding="utf-8",
    )
    document = '{"a": {"node": {"x": 1}}, "b": {"node": {"y": 1}}}'
    result = _invoke(["--config", str(config_path)], input_text=document)
    assert result.exit_code == 0, result.output
    assert result.stdout.startswith("type Payload struct {")
    assert "type Node2 struct" in result.stdout

    override = _invoke(
        ["--config", str(config_path), "--name", "Other", "--dedup", "name", "-q"],
        input_text=document,
    )
    assert override.exit_code == 0, override.output
    assert override.stdout.startswith("type Other struct {")
    assert "Node2" not in override.stdout


def test_cli_json_format() -> None:
    result = _invoke(
        ["--name", "Out", "--format", "json"], input_text='{"tags": [{"id": 1}]}'
    )
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["root_type"] == "Out"
    assert [s["name"] for s in payload["structs"]] == ["Out", "TagsItem"]


def test_cli_rejects_unknown_format() -> None:
    result = _invoke(["--format", "xml"], input_text="{}")
    assert result.exit_code == 2


@pytest.mark.parametrize(
    ("args", "input_text", "message"),
    [
        (["--name", "1Name"], "{}", "invalid struct name"),
        (["--name", "Out"], "{", "invalid json"),
        (["--name", "Out"], "[" * 100000 + "]" * 100000, "invalid json"),
        (["--dedup", "fuzzy"], "{}", "unknown dedup policy"),
        (["does-not-exist.json"], None, "cannot read"),
    ],
)
def test_cli_errors_exit_with_code_2(args, input_text, message) -> None:
    result = _invoke(args, input_text=input_text)
    assert result.exit_code == 2
    assert f"error: {message}" in result.output


def test_cli_verbose_and_quiet_control_logging() -> None:
    document = '{"first_name": 1, "firstName": 2}'
    loud = _invoke(["--name", "Out", "--verbose"], input_text=document)
    assert loud.exit_code == 0, loud.output
    assert "DEBUG: Registered struct Out" in loud.output
    assert "WARNING: JSON keys" in loud.output

    quiet = _invoke(["--name", "Out", "--quiet"], input_text=document)
    assert quiet.exit_code == 0, quiet.output
    assert "WARNING" not in quiet.output
