"""CLI entry point for oas-docs."""

import logging
import sys
from pathlib import Path

import click

from oas_docs.build import BuildConfig, build_docs, build_stream
from oas_docs.errors import OasDocsError
from oas_docs.model.base import ApiDescription
from oas_docs.model.loader import load_description
from oas_docs.output.yaml_writer import DEFAULT_DOCS_OUT_PATH
from oas_docs.server import DEFAULT_DIRECTORY, DEFAULT_ROUTE, SwaggerUIConfig, serve_swagger_ui


def _load(doc_path: Path) -> ApiDescription:
    try:
        return load_description(doc_path)
    except OasDocsError as e:
        raise click.ClickException(str(e)) from e


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging.")
def main(debug: bool):
    """OAS Docs: build OpenAPI YAML documents from API descriptions and serve them."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", default=None, type=click.Path(path_type=Path), help=f"Output YAML path (default: {DEFAULT_DOCS_OUT_PATH}).")
@click.option("--merge-components", is_flag=True, help="Merge all component groups instead of keeping only the last one.")
def build(doc_path: Path, output: Path | None, merge_components: bool):
    """Build the OpenAPI YAML document from an API description file."""
    click.echo(f"Loading {doc_path}...")
    description = _load(doc_path)
    click.echo(f"Found {len(description.paths)} path entries.")

    conf = BuildConfig(custom_path=str(output) if output else "", merge_components=merge_components)
    try:
        out_path = build_docs(description, conf)
    except OasDocsError as e:
        raise click.ClickException(str(e)) from e
    click.echo(f"OpenAPI document saved to {out_path}")


@main.command()
@click.argument("doc_path", type=click.Path(exists=True, path_type=Path))
@click.option("--merge-components", is_flag=True, help="Merge all component groups instead of keeping only the last one.")
def show(doc_path: Path, merge_components: bool):
    """Print the OpenAPI YAML document to stdout."""
    description = _load(doc_path)
    try:
        build_stream(description, sys.stdout, BuildConfig(merge_components=merge_components))
    except OasDocsError as e:
        raise click.ClickException(str(e)) from e


@main.command()
@click.option("--port", required=True, type=int, help="HTTP port to listen on.")
@click.option("--route", default=DEFAULT_ROUTE, show_default=True, help="Route prefix to serve under.")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind.")
@click.option("--directory", default=DEFAULT_DIRECTORY, show_default=True, type=click.Path(path_type=Path), help="Directory holding openapi.yaml and the Swagger UI bundle.")
def serve(port: int, route: str, host: str, directory: Path):
    """Serve the generated document and Swagger UI over HTTP."""
    click.echo(f"Serving {directory} at http://{host}:{port}{route}")
    conf = SwaggerUIConfig(port=port, route=route, host=host, directory=str(directory))
    try:
        serve_swagger_ui(conf)
    except OasDocsError as e:
        raise click.ClickException(str(e)) from e
