from __future__ import annotations

from pathlib import Path
from typing import NoReturn, Optional
import sys

from loguru import logger
import typer

from json2struct.config import merge_payload, transform_config, transform_defaults
from json2struct.emission import render
from json2struct.exceptions import TransformError
from json2struct.model import TransformConfig
from json2struct.schema import graph_to_dto
from json2struct.transform import Transformer

app = typer.Typer(add_completion=False)

_STDIO_ALIAS = "-"
_FORMATS = ("go", "json")


def _configure_logging(*, verbose: bool, quiet: bool) -> None:
    logger.remove()
    logger.enable("json2struct")
    if quiet:
        return
    level = "DEBUG" if verbose else "WARNING"
    logger.add(sys.stderr, level=level, format="{level}: {message}")


def _read_input(source: str) -> str:
    if source == _STDIO_ALIAS:
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_output(target: str, text: str) -> None:
    if target == _STDIO_ALIAS:
        typer.echo(text)
        return
    Path(target).write_text(text + "\n", encoding="utf-8")


def _resolve_config(
    *, name: str | None, dedup: str | None, config: Path | None
) -> TransformConfig:
    defaults = transform_defaults(config_path=config)
    section = merge_payload({"root_name": name, "dedup": dedup}, defaults)
    return transform_config(section)


def _fail(message: str) -> NoReturn:
    typer.echo(f"error: {message}", err=True)
    raise typer.Exit(code=2)


@app.command()
def main(
    source: str = typer.Argument(
        _STDIO_ALIAS, metavar="INPUT", help="JSON file to read, or '-' for stdin."
    ),
    name: Optional[str] = typer.Option(
        None, "--name", "-n", help="Name of the root type."
    ),
    dedup: Optional[str] = typer.Option(
        None, "--dedup", help="Type dedup policy: 'name' or 'structural'."
    ),
    config: Optional[Path] = typer.Option(None, "--config"),
    output_format: str = typer.Option("go", "--format", help="'go' or 'json'."),
    output: str = typer.Option(_STDIO_ALIAS, "--output", "-o"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    quiet: bool = typer.Option(False, "--quiet", "-q"),
) -> None:
    """Infer Go struct declarations from a JSON document."""
    _configure_logging(verbose=verbose, quiet=quiet)
    if output_format not in _FORMATS:
        raise typer.BadParameter(
            f"--format must be one of {', '.join(_FORMATS)}", param_hint="--format"
        )
    try:
        transform_cfg = _resolve_config(name=name, dedup=dedup, config=config)
        json_text = _read_input(source)
        graph = Transformer(transform_cfg).graph(transform_cfg.root_name, json_text)
    except TransformError as exc:
        _fail(str(exc))
    except (OSError, UnicodeDecodeError) as exc:
        _fail(f"cannot read {source}: {exc}")
    if output_format == "json":
        text = graph_to_dto(graph).model_dump_json(indent=2)
    else:
        text = render(graph, indent=transform_cfg.indent)
    _write_output(output, text)
