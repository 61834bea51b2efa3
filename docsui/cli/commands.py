"""CLI commands for docsui."""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from loguru import logger
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="docsui",
    help="Serve API schemas with an embedded documentation UI.",
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging."),
):
    """Configure logging for all commands."""
    logger.remove()
    # Looked up per message so a replaced sys.stderr is always honoured.
    logger.add(lambda message: sys.stderr.write(message), level="DEBUG" if verbose else "INFO")


def _load_config(config: str | None):
    from docsui.config.schema import DocsUIConfig, default_config_path

    return DocsUIConfig.load(Path(config) if config else default_config_path())


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command()
def init(
    config: str = typer.Option(None, "-c", "--config", help="Path to config file."),
):
    """Write a default configuration file."""
    from docsui.config.schema import DocsUIConfig, default_config_path

    config_path = Path(config) if config else default_config_path()

    if config_path.exists():
        console.print(f"[yellow]Config already exists at {config_path}[/]")
        overwrite = typer.confirm("Overwrite?", default=False)
        if not overwrite:
            console.print("[dim]Keeping existing config.[/]")
            return

    DocsUIConfig().save(config_path)
    console.print(f"[green]Created config at {config_path}[/]")


@app.command()
def serve(
    schema_file: str = typer.Argument(None, help="JSON or YAML schema document."),
    config: str = typer.Option(None, "-c", "--config", help="Path to config file."),
    dir: str = typer.Option(None, "--dir", help="Directory the UI is mounted under."),
    schema_path: str = typer.Option(None, "--schema-path", help="Path of the schema endpoint."),
    bundle: str = typer.Option(None, "--bundle", help="Bundle name or directory."),
    prefix: str = typer.Option(None, "--prefix", help="Prefix for all routes, e.g. /api."),
    host: str = typer.Option(None, "--host", help="Bind address."),
    port: int = typer.Option(None, "-p", "--port", help="Port."),
):
    """Serve a schema document with the documentation UI."""
    import uvicorn
    import yaml

    from docsui.app import create_app, load_schema_file
    from docsui.bundle import BundleError
    from docsui.routes import RouteConfigurationError

    cfg = _load_config(config)
    ui = cfg.ui.model_copy(
        update={
            k: v
            for k, v in {
                "dir": dir,
                "schema_path": schema_path,
                "bundle": bundle,
                "prefix": prefix,
            }.items()
            if v is not None
        }
    )
    source = schema_file or cfg.schema_file
    if not source:
        console.print("[red]Error: no schema file given (argument or schema_file in config).[/]")
        raise typer.Exit(1)

    try:
        document = load_schema_file(source)
    except (OSError, ValueError, yaml.YAMLError) as e:
        console.print(f"[red]Schema error: {e}[/]")
        raise typer.Exit(1)

    try:
        api = create_app(document, ui, title=document.get("info", {}).get("title", "docsui"))
    except (RouteConfigurationError, BundleError) as e:
        console.print(f"[red]Configuration error: {e}[/]")
        raise typer.Exit(1)

    bind_host = host or cfg.server.host
    bind_port = port or cfg.server.port
    base = f"http://{bind_host}:{bind_port}{ui.prefix.rstrip('/')}"

    console.print(f"[bold green]docsui[/] serving {source}")
    console.print(f"  UI:     {base}/{ui.dir.strip('/')}/")
    console.print(f"  Schema: {base}/{ui.schema_path.strip('/')}")

    uvicorn.run(api, host=bind_host, port=bind_port, log_level=cfg.server.log_level)


@app.command()
def bundles():
    """List available UI bundles."""
    from docsui.plugins.loader import discover_bundles
    from docsui.ui import available_bundles, builtin_bundle

    table = Table(title="UI bundles")
    table.add_column("Name")
    table.add_column("Source")
    table.add_column("Assets", justify="right")

    for name in available_bundles():
        table.add_row(name, "built-in", str(len(builtin_bundle(name).assets)))
    for name, bundle in sorted(discover_bundles().items()):
        table.add_row(name, "plugin", str(len(bundle.assets)))

    console.print(table)


@app.command()
def routes(
    config: str = typer.Option(None, "-c", "--config", help="Path to config file."),
    dir: str = typer.Option(None, "--dir", help="Directory the UI is mounted under."),
    schema_path: str = typer.Option(None, "--schema-path", help="Path of the schema endpoint."),
    prefix: str = typer.Option(None, "--prefix", help="Prefix for all routes."),
):
    """Show the routes a configuration produces."""
    from docsui.routes import RouteConfigurationError, validate_route_path

    cfg = _load_config(config)
    try:
        ui_dir = validate_route_path(dir or cfg.ui.dir, "mount directory")
        schema = validate_route_path(schema_path or cfg.ui.schema_path, "schema path")
    except RouteConfigurationError as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)

    base = (prefix if prefix is not None else cfg.ui.prefix).rstrip("/")

    table = Table(title="docsui routes")
    table.add_column("Method")
    table.add_column("Path")
    table.add_column("Response")
    table.add_row("GET", f"{base}/{schema}", "schema document (JSON)")
    table.add_row("GET", f"{base}/{ui_dir}/", "UI index page (HTML)")
    table.add_row("GET", f"{base}/{ui_dir}/index.html", "UI index page (HTML)")
    table.add_row("GET", f"{base}/{ui_dir}/<path>", "bundle asset, or 404")
    console.print(table)


if __name__ == "__main__":
    app()
