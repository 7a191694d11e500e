"""
Command-line interface for Page Request Map.

This module provides the CLI using Click framework for argument parsing
and orchestrates a resolution pass over a host declaration map.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler

from page_request_map import __version__
from page_request_map.config import Config, find_config_file, load_config

FORMAT_CHOICES = ["json", "module", "yaml", "text"]

console = Console()


def _configure_logging(verbose: bool) -> None:
    """Route library logging through Rich on stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _with_project_overrides(config: Config, **overrides: object) -> Config:
    """Return a copy of the config with non-None project fields replaced."""
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return config
    project = config.project.model_copy(update=updates)
    return config.model_copy(update={"project": project})


def _write_output(formatted_output: str, output: Optional[Path]) -> None:
    """Write formatted output to a file or stdout."""
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(formatted_output, encoding="utf-8")
        console.print(f"[green]Results written to:[/green] {output}")
    else:
        sys.stdout.write(formatted_output)
        if not formatted_output.endswith("\n"):
            sys.stdout.write("\n")
        sys.stdout.flush()


@click.group()
@click.version_option(version=__version__, prog_name="page-request-map")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file (default: nearest .page-request.yaml).",
)
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path]) -> None:
    """Page Request Map - Find the backend APIs every page depends on."""
    ctx.ensure_object(dict)
    if config is None:
        config = find_config_file(Path.cwd())
    ctx.obj["config"] = load_config(config) if config else Config()


@cli.command()
@click.option(
    "--src",
    "-s",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Source tree root of the front-end project (e.g. ./src).",
)
@click.option(
    "--declarations",
    "-d",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    required=True,
    help="JSON or YAML file mapping file paths to import declarations.",
)
@click.option(
    "--base",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory relative declaration keys resolve against "
    "(default: the declarations file's directory).",
)
@click.option(
    "--alias",
    type=str,
    help="Token that stands for the source root in imports (default: @).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(FORMAT_CHOICES),
    help="Output format (default: json).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output file path. If not specified, prints to stdout.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
@click.pass_context
def resolve(
    ctx: click.Context,
    src: Optional[Path],
    declarations: Path,
    base: Optional[Path],
    alias: Optional[str],
    output_format: Optional[str],
    output: Optional[Path],
    verbose: bool,
) -> None:
    """Resolve the API requests used by every page."""
    from page_request_map.analyzer.page_request import PageRequestResolver
    from page_request_map.output.formatters import get_formatter
    from page_request_map.parser.declaration_loader import DeclarationLoader

    _configure_logging(verbose)
    config = _with_project_overrides(
        ctx.obj["config"],
        src_root=src.absolute() if src else None,
        alias=alias,
    )
    output_format = output_format or config.output.format

    if config.project.src_root is None:
        console.print("[red]Error:[/red] No source root given (use --src or project.src_root)")
        raise click.Abort()

    if verbose:
        console.print(f"[blue]Source root:[/blue] {config.project.src_root}")
        console.print(f"[blue]Declarations:[/blue] {declarations}")
        console.print(f"[blue]Alias:[/blue] {config.project.alias}")

    try:
        file_imports = DeclarationLoader.parse_file(declarations, base_dir=base)
        resolver = PageRequestResolver(config=config)
        report = resolver.create_page_request_map(file_imports)

        if report.has_errors:
            for error in report.errors:
                console.print(f"[red]Error:[/red] {error}")
            raise click.Abort()

        if verbose:
            console.print(
                f"[blue]Resolved[/blue] {report.page_count} pages, "
                f"{report.request_count} distinct requests "
                f"in {report.duration_ms or 0:.2f}ms"
            )

        formatter = get_formatter(output_format, config.output)
        _write_output(formatter.format(report), output)

    except click.Abort:
        raise
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        if verbose:
            import traceback
            console.print(traceback.format_exc())
        raise click.Abort()


@cli.command("services")
@click.option(
    "--src",
    "-s",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Source tree root of the front-end project (e.g. ./src).",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(FORMAT_CHOICES),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    help="Output file path. If not specified, prints to stdout.",
)
@click.pass_context
def list_services(
    ctx: click.Context,
    src: Optional[Path],
    output_format: str,
    output: Optional[Path],
) -> None:
    """List the API functions declared in the services directory."""
    from page_request_map.output.formatters import get_formatter
    from page_request_map.parser.service_extractor import ServiceExtractor

    config: Config = ctx.obj["config"]
    src_root = src or config.project.src_root
    if src_root is None:
        console.print("[red]Error:[/red] No source root given (use --src or project.src_root)")
        raise click.Abort()

    try:
        extractor = ServiceExtractor(
            src_root=src_root,
            services_dir=config.project.services_dir,
            extensions=config.resolver.extensions,
        )
        service_map = extractor.extract()

        formatter = get_formatter(output_format, config.output)
        _write_output(formatter.format_services(service_map), output)

    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        raise click.Abort()


def main() -> None:
    """Main entry point for the CLI."""
    cli(obj={})
