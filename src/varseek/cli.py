"""CLI implementation for varseek."""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from . import open_variants
from .core.model import VarseekError
from .core.util import describe, record_asdict

app = typer.Typer(add_completion=False, help="Query VCF/BCF files by region, indexed or not.")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@app.command()
def probe(
    sources: list[str] = typer.Argument(..., help="VCF/BCF files, or '-' for stdin"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log to stderr"),
):
    """Report storage form and random-access capabilities, one JSON object per line."""
    _configure_logging(verbose)
    failed = False
    for src in sources:
        try:
            with open_variants(src) as variants:
                obj = describe(variants.form, variants.capabilities, variants.header_contigs)
        except (VarseekError, OSError, ValueError) as e:
            obj = {"success": False, "error": str(e)}
            failed = True
        obj["source"] = src
        typer.echo(json.dumps(obj))
    if failed:
        raise typer.Exit(code=1)


@app.command()
def query(
    source: str = typer.Argument(..., help="VCF/BCF file, or '-' for stdin"),
    regions: list[str] = typer.Argument(..., help="Regions such as chr1:15-35, in ascending order for streams"),
    index: Optional[Path] = typer.Option(None, "--index", help="Explicit index path"),
    fields: Optional[str] = typer.Option(None, "--fields", help="Comma-separated subset of keys to emit"),
    output: Optional[Path] = typer.Option(None, "-o", "--output", help="Write to PATH instead of stdout"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Log to stderr"),
):
    """Emit the records of each region as JSON lines."""
    _configure_logging(verbose)
    sel_fields = set(fields.split(",")) if fields else None

    # open output sink
    sink = open(output, "w", encoding="utf-8") if output else sys.stdout
    try:
        with open_variants(source, index=index) as variants:
            for region in regions:
                with variants.query(region) as records:
                    for rec in records:
                        sink.write(json.dumps(record_asdict(rec, fields=sel_fields)))
                        sink.write("\n")
    except (VarseekError, OSError, ValueError) as e:
        typer.echo(f"error: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        if output:
            sink.close()


if __name__ == "__main__":
    app()
