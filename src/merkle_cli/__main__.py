from __future__ import annotations
import logging
import pathlib
from typing import List, Optional

import typer
from pydantic import ValidationError
from rich import print
from rich.table import Table

from merkle_core.logutil import setup_logging
from merkle_core.models import parse_tree_json, tree_to_json, verify_model
from merkle_core.settings import settings
from merkle_core.tree import build_merkle_tree

log = logging.getLogger("merkle_cli")

app = typer.Typer(add_completion=False, no_args_is_help=True)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (default from MERKLE_LOG_LEVEL)"
    ),
):
    """Merkle Tree CLI Tool."""
    setup_logging(getattr(logging, (log_level or settings.log_level).upper(), logging.WARNING))


def _read_blocks(data: List[str], input_file: Optional[str]) -> List[str]:
    blocks = list(data)
    if input_file:
        path = pathlib.Path(input_file).resolve()
        if not path.exists():
            print(f"[red]Error: File not found at {path}[/red]")
            raise typer.Exit(code=1)
        lines = path.read_text(encoding=settings.input_encoding).split("\n")
        blocks += [line.strip() for line in lines if line.strip()]
        log.info("read %d blocks from %s", len(blocks) - len(data), path)
    if not blocks:
        print("[red]Error: No data blocks provided.[/red]")
        raise typer.Exit(code=1)
    return blocks


@app.command()
def build(
    data: Optional[List[str]] = typer.Argument(None, help="Data blocks to build the tree"),
    input_file: Optional[str] = typer.Option(
        None, "--input-file", help="File with data blocks (one per line)"
    ),
    output_file: Optional[str] = typer.Option(
        None, "--output-file", help="Save Merkle tree JSON to file"
    ),
    pretty: Optional[bool] = typer.Option(
        None, "--pretty/--compact", help="Pretty-print JSON output (default from MERKLE_PRETTY)"
    ),
):
    """Build a Merkle tree and print its JSON and root hash."""
    blocks = _read_blocks(data or [], input_file)
    if pretty is None:
        pretty = settings.pretty
    tree = build_merkle_tree(blocks)
    out = tree_to_json(tree, pretty=pretty, encoding=settings.input_encoding)

    if output_file:
        pathlib.Path(output_file).write_text(out, encoding="utf-8")
        print(f"[green]Merkle tree saved to {output_file}[/green]")
    else:
        print("Merkle Tree JSON:")
        typer.echo(out)

    print(f"\nMerkle Root: [bold]{tree.root_hash}[/bold]")


@app.command()
def levels(
    data: Optional[List[str]] = typer.Argument(None, help="Data blocks to build the tree"),
    input_file: Optional[str] = typer.Option(
        None, "--input-file", help="File with data blocks (one per line)"
    ),
):
    """Show every level of the tree, leaves first."""
    tree = build_merkle_tree(_read_blocks(data or [], input_file))
    table = Table(title=f"Merkle tree ({len(tree)} leaves, height {tree.height})")
    table.add_column("Level", justify="right")
    table.add_column("Nodes", justify="right")
    table.add_column("Hashes")
    for i, lvl in enumerate(tree.levels):
        table.add_row(str(i), str(len(lvl)), "\n".join(n.hash for n in lvl))
    print(table)
    print(f"\nMerkle Root: [bold]{tree.root_hash}[/bold]")


@app.command()
def verify(path: str):
    """Recompute the hashes of a saved Merkle tree JSON file."""
    p = pathlib.Path(path)
    if not p.exists():
        print(f"[red]Error: File not found at {p.resolve()}[/red]")
        raise typer.Exit(code=1)
    try:
        model = parse_tree_json(p.read_bytes())
    except ValidationError as e:
        print(f"[red]Error: not a Merkle tree JSON ({e.error_count()} errors)[/red]")
        raise typer.Exit(code=1)
    ok = verify_model(model)
    print({"tree_valid": ok, "root": model.hash if model is not None else None})
    if not ok:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
