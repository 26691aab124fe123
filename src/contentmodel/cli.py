"""
contentmodel command line.

Normalizes content model JSON documents: decode into the typed model, then
re-encode in canonical key order. Useful for diffing exported spaces and for
checking a payload before sending it.
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Callable
from enum import StrEnum
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape

from contentmodel._version import __version__
from contentmodel.core.codec import (
    decode_constraint,
    decode_content_type,
    decode_editor_interface,
    decode_policy,
    decode_role,
    decode_validator,
    dumps,
    encode_constraint,
    encode_content_type,
    encode_editor_interface,
    encode_policy,
    encode_role,
    encode_validator,
    loads,
)
from contentmodel.core.config import DEFAULT_CONFIG, CodecConfig, load_config
from contentmodel.core.errors import CodecError

app = typer.Typer(
    help="Decode and re-encode content model JSON (roles, content types, editor interfaces).",
    no_args_is_help=True,
)

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


class Kind(StrEnum):
    ROLE = "role"
    POLICY = "policy"
    CONSTRAINT = "constraint"
    CONTENT_TYPE = "content-type"
    EDITOR_INTERFACE = "editor-interface"
    VALIDATOR = "validator"


_CODECS: dict[Kind, tuple[Callable[[Any, CodecConfig], Any], Callable[[Any], Any]]] = {
    Kind.ROLE: (decode_role, encode_role),
    Kind.POLICY: (decode_policy, encode_policy),
    Kind.CONSTRAINT: (decode_constraint, encode_constraint),
    Kind.CONTENT_TYPE: (decode_content_type, encode_content_type),
    Kind.EDITOR_INTERFACE: (decode_editor_interface, encode_editor_interface),
    Kind.VALIDATOR: (decode_validator, encode_validator),
}


def normalize(kind: Kind, document: Any, config: CodecConfig = DEFAULT_CONFIG) -> Any:
    """Decode `document` as `kind` and return its canonical encoding."""
    decode, encode = _CODECS[kind]
    return encode(decode(document, config))


@app.command(name="normalize")
def normalize_command(
    kind: Kind = typer.Argument(..., help="What the document holds"),
    path: Path = typer.Argument(..., help="JSON file to normalize", exists=True, dir_okay=False),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="TOML file with a [codec] table",
        exists=True,
        dir_okay=False,
    ),
    pretty: bool = typer.Option(False, "--pretty", help="Indent and highlight the output"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Decode a document and print its canonical JSON."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(config_path) if config_path else DEFAULT_CONFIG
    except (tomllib.TOMLDecodeError, ValueError) as e:
        err_console.print(f"[red]Invalid config {escape(str(config_path))}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    try:
        document = loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        err_console.print(f"[red]{escape(str(path))}: not valid JSON: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    try:
        encoded = normalize(kind, document, config)
    except CodecError as e:
        err_console.print(f"[red]{escape(str(path))}: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if pretty:
        console.print_json(dumps(encoded))
    else:
        typer.echo(dumps(encoded))


@app.command(name="version")
def version_command() -> None:
    """Show the contentmodel version."""
    typer.echo(f"contentmodel {__version__}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
