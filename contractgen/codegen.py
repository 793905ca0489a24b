"""Render the templates and write generated output.

Each emitter takes part of the model and returns one text blob. The
emitters share no state and never read each other's output, so they can
run in any order. write_outputs persists a complete set of blobs.
"""

from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Sequence

import jinja2

from .context_builder import (
    build_client_context,
    build_declarations_context,
    build_server_context,
)
from .model import DataType, HttpInterface, Metadata

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
OUTPUT_DIR = Path("generated")

TYPES_FILE = "types.ts"
SERVER_FILE = "server.ts"
CLIENT_FILE = "client.ts"


def _render(template_name: str, context: dict[str, Any]) -> str:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    template = env.get_template(template_name)
    return template.render(**context)


def emit_declarations(data_types: Iterable[DataType]) -> str:
    """Render one declaration block per data type, in input order."""
    return _render("types.ts.j2", build_declarations_context(data_types))


def emit_server_stubs(
    interfaces: Iterable[HttpInterface],
    type_names: Sequence[str] = (),
) -> str:
    """Render the setupRoutes module with one placeholder handler per interface."""
    return _render("server.ts.j2", build_server_context(interfaces, type_names))


def emit_client_functions(
    interfaces: Iterable[HttpInterface],
    type_names: Sequence[str] = (),
) -> str:
    """Render one fetch-based client function per interface."""
    return _render("client.ts.j2", build_client_context(interfaces, type_names))


@dataclass(frozen=True)
class GeneratedSources:
    types: str
    server: str
    client: str

    def files(self) -> dict[str, str]:
        """Map output file names to their contents."""
        return {
            TYPES_FILE: self.types,
            SERVER_FILE: self.server,
            CLIENT_FILE: self.client,
        }


def generate(metadata: Metadata) -> GeneratedSources:
    """Run all three emitters over the same document."""
    type_names = metadata.type_names()
    return GeneratedSources(
        types=emit_declarations(metadata.data_types),
        server=emit_server_stubs(metadata.http_interfaces, type_names),
        client=emit_client_functions(metadata.http_interfaces, type_names),
    )


def write_outputs(sources: GeneratedSources, output_dir: Path | None = None) -> list[Path]:
    """Write types.ts, server.ts and client.ts. Returns the written paths.

    Every blob goes to a temporary sibling first. The real files are only
    replaced once all temporaries are written and no destination is a
    directory, so a failure leaves the previous outputs untouched.
    """
    out = output_dir or OUTPUT_DIR
    out.mkdir(parents=True, exist_ok=True)

    pending: list[tuple[Path, Path]] = []
    try:
        for filename, content in sources.files().items():
            output_path = out / filename
            tmp_path = out / f".{filename}.tmp"
            pending.append((tmp_path, output_path))
            tmp_path.write_text(content, encoding="utf-8")

        for _, output_path in pending:
            if output_path.is_dir():
                raise IsADirectoryError(
                    errno.EISDIR, "Output path is a directory", str(output_path),
                )

        written = []
        for tmp_path, output_path in pending:
            os.replace(tmp_path, output_path)
            logger.debug("Wrote %s", output_path)
            written.append(output_path)
        return written
    finally:
        for tmp_path, _ in pending:
            tmp_path.unlink(missing_ok=True)
