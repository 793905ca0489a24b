"""Entry point: python -m contractgen

Reads data/metadata.json, generates generated/types.ts, server.ts, client.ts.
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .checks import find_problems
from .codegen import OUTPUT_DIR, generate, write_outputs
from .loader import METADATA_PATH, MetadataError, load_metadata


@click.command()
@click.option(
    "-m", "--metadata", "metadata_path",
    default=METADATA_PATH, envvar="CONTRACTGEN_METADATA", show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Metadata document to read.",
)
@click.option(
    "-o", "--output", "output_dir",
    default=OUTPUT_DIR, envvar="CONTRACTGEN_OUTPUT_DIR", show_default=True,
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for types.ts, server.ts and client.ts.",
)
@click.option(
    "--strict", is_flag=True, envvar="CONTRACTGEN_STRICT",
    help="Fail on undefined type references and unmatched path parameters.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(metadata_path: Path, output_dir: Path, strict: bool, verbose: bool) -> None:
    """Generate TypeScript types, server stubs and client functions from metadata."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        metadata = load_metadata(metadata_path)
    except MetadataError as exc:
        raise click.ClickException(str(exc)) from exc
    except OSError as exc:
        raise click.ClickException(f"Cannot read {metadata_path}: {exc}") from exc

    problems = find_problems(metadata)
    if strict and problems:
        raise click.ClickException(
            f"{len(problems)} problem(s) in {metadata_path}:\n  " + "\n  ".join(problems)
        )

    sources = generate(metadata)
    try:
        written = write_outputs(sources, output_dir)
    except OSError as exc:
        raise click.ClickException(f"Cannot write to {output_dir}: {exc}") from exc

    for path in written:
        click.echo(f"  Created {path}")
    click.echo(
        f"Generated {len(written)} files in {output_dir} "
        f"({len(metadata.data_types)} types, {len(metadata.http_interfaces)} interfaces)"
    )


if __name__ == "__main__":
    main()
