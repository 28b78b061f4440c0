"""Command line interface for ccBencode."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from ccbencode.bencode import decode
from ccbencode.bstring import BString
from ccbencode.config import init_config
from ccbencode.exceptions import CCBencodeError, EncodingMismatchError
from ccbencode.logging_config import LoggingContext
from ccbencode.models import LogLevel, TextErrors

logger = logging.getLogger(__name__)


def _console() -> Console:
    return Console(highlight=False, soft_wrap=True)


def _render_bstring(value: BString, encoding: str, errors: TextErrors) -> str:
    try:
        text = value.to_text(encoding, errors.value)
    except EncodingMismatchError:
        return f"<{len(value)} bytes> {value.value.hex()}"
    return escape(repr(text))


def _build_tree(tree: Tree, value: Any, encoding: str, errors: TextErrors) -> None:
    if isinstance(value, BString):
        tree.add(f"[green]{_render_bstring(value, encoding, errors)}[/green]")
    elif isinstance(value, int):
        tree.add(f"[cyan]{value}[/cyan]")
    elif isinstance(value, list):
        branch = tree.add(f"[bold]list[/bold] ({len(value)})")
        for item in value:
            _build_tree(branch, item, encoding, errors)
    elif isinstance(value, dict):
        branch = tree.add(f"[bold]dict[/bold] ({len(value)})")
        for key, item in value.items():
            node = branch.add(f"[yellow]{_render_bstring(key, encoding, errors)}[/yellow]")
            _build_tree(node, item, encoding, errors)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Configuration file path",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v: info, -vv: debug)",
)
@click.pass_context
def cli(ctx: click.Context, config: Path | None, verbose: int) -> None:
    """CcBencode - Bencode byte string toolkit."""
    ctx.ensure_object(dict)
    try:
        config_manager = init_config(config)
    except CCBencodeError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        observability = config_manager.config.observability
        observability.log_level = LogLevel.DEBUG if verbose > 1 else LogLevel.INFO
        config_manager._setup_logging()  # noqa: SLF001

    ctx.obj["config_manager"] = config_manager
    ctx.obj["config"] = config_manager.config


@cli.command("encode")
@click.argument("text")
@click.option("--encoding", "-e", help="Text encoding (default: from config)")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the raw token to this file instead of printing it",
)
@click.pass_context
def encode_command(
    ctx: click.Context,
    text: str,
    encoding: str | None,
    output: Path | None,
) -> None:
    """Encode TEXT as a bencode byte string."""
    cfg = ctx.obj["config"]
    encoding = encoding or cfg.bencode.default_encoding
    try:
        with LoggingContext("encode", logger=logger, encoding=encoding):
            bstring = BString.from_text(text, encoding)
            if output is None:
                click.echo(bstring.encode_as_text())
                return
            with open(output, "wb") as f:
                written = bstring.encode_to(f)
    except CCBencodeError as e:
        raise click.ClickException(str(e)) from e
    _console().print(f"Wrote {written} bytes to {escape(str(output))}")


@cli.command("decode")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--encoding", "-e", help="Text encoding (default: from config)")
@click.pass_context
def decode_command(ctx: click.Context, source: Path, encoding: str | None) -> None:
    """Decode a bencoded file and show its structure."""
    cfg = ctx.obj["config"]
    encoding = encoding or cfg.bencode.default_encoding
    try:
        with LoggingContext("decode", logger=logger, source=str(source)):
            value = decode(source.read_bytes(), encoding)
    except CCBencodeError as e:
        raise click.ClickException(str(e)) from e

    tree = Tree(f"[bold]{escape(source.name)}[/bold]")
    _build_tree(tree, value, encoding, cfg.bencode.text_errors)
    _console().print(tree)


@cli.command("show-config")
@click.option(
    "--format",
    "fmt",
    type=click.Choice(["toml", "json"]),
    default="toml",
    show_default=True,
    help="Output format",
)
@click.pass_context
def show_config(ctx: click.Context, fmt: str) -> None:
    """Show the effective configuration."""
    click.echo(ctx.obj["config_manager"].export(fmt))


def main() -> None:
    """Main entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
