"""CLI entry point for rpmcraft."""

from __future__ import annotations

import json
import logging
import stat
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.syntax import Syntax
from rich.table import Table

from rpmcraft.config import RpmcraftConfig, load_config
from rpmcraft.config.loader import DEFAULT_CONFIG_TEMPLATE
from rpmcraft.payload import DirectoryPayload
from rpmcraft.plugins import PluginNotFoundError
from rpmcraft.rpm import (
    PackageDependency,
    RpmFile,
    RpmFileCreator,
    RpmMetadata,
    patch_dependencies,
)

app = typer.Typer(
    name="rpmcraft",
    help="Collect RPM file metadata and package dependencies from a staging directory.",
)

config_app = typer.Typer(help="Manage rpmcraft configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: RpmcraftConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(
            {
                "level": record.levelname.lower(),
                "logger": record.name,
                "message": record.getMessage(),
            }
        )


def _configure_logging(cfg: RpmcraftConfig) -> None:
    if cfg.log_format == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(level=_LOG_LEVELS[cfg.log_level], handlers=[handler], force=True)


def _get_config() -> RpmcraftConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to rpmcraft.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _configure_logging(_config)


def _collect_files(path: str, cfg: RpmcraftConfig) -> list[RpmFile]:
    """Run the extractor over a staging directory, exiting 1 on failure."""
    try:
        payload = DirectoryPayload(path)
        creator = RpmFileCreator.from_config(cfg)
        return creator.create_files(payload)
    except (OSError, ValueError, PluginNotFoundError) as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)


def _file_type(f: RpmFile) -> str:
    if f.is_directory:
        return "dir"
    if f.is_symlink:
        return "link"
    if stat.S_ISREG(f.mode):
        return "file"
    return "special"


@app.command()
def files(
    path: Annotated[str, typer.Argument(help="Staging directory (buildroot)")],
    ci: Annotated[bool, typer.Option("--ci", help="Machine-readable output")] = False,
) -> None:
    """List the per-file metadata RPM would record for a staging directory."""
    cfg = _get_config()
    records = _collect_files(path, cfg)

    if ci:
        for f in records:
            detail = f.link_to if f.is_symlink else f.digest_hex
            typer.echo(f"{f.name}\t{f.mode:o}\t{f.size}\t{detail}")
        return

    table = Table(title=f"Payload files ({len(records)})")
    table.add_column("Name", style="cyan")
    table.add_column("Type")
    table.add_column("Mode", justify="right")
    table.add_column("Size", justify="right")
    table.add_column("Digest / Target", style="dim")
    for f in records:
        detail = f"-> {f.link_to}" if f.is_symlink else (f.digest_hex[:16] or "-")
        table.add_row(f.name, _file_type(f), f"{stat.S_IMODE(f.mode):04o}", str(f.size), detail)
    rprint(table)


def _render_dependencies(title: str, deps: list[PackageDependency]) -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Dependency", style="green")
    table.add_column("Flags", justify="right", style="dim")
    for i, dep in enumerate(deps, 1):
        table.add_row(str(i), str(dep), f"0x{int(dep.flags):x}")
    return table


@app.command()
def deps(
    path: Annotated[str, typer.Argument(help="Staging directory (buildroot)")],
    name: Annotated[str, typer.Option("--name", help="Package name")],
    version: Annotated[str, typer.Option("--version", help="Package version")],
    release: Annotated[str, typer.Option("--release", help="Package release")] = "1",
    arch: Annotated[str, typer.Option("--arch", help="Target architecture")] = "x86_64",
    ci: Annotated[bool, typer.Option("--ci", help="Machine-readable output")] = False,
) -> None:
    """Show the provides and requires rpmcraft adds to a package."""
    cfg = _get_config()
    records = _collect_files(path, cfg)

    try:
        metadata = RpmMetadata(
            name=name, version=version, release=release, arch=arch, files=records
        )
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    patch_dependencies(metadata)

    if ci:
        for dep in metadata.provides:
            typer.echo(f"Provides: {dep}")
        for dep in metadata.dependencies:
            typer.echo(f"Requires: {dep}")
        return

    rprint(_render_dependencies("Provides", metadata.provides))
    rprint(_render_dependencies("Requires", metadata.dependencies))


@config_app.command("show")
def config_show() -> None:
    """Print the effective configuration as YAML."""
    cfg = _get_config()
    text = yaml.safe_dump(cfg.model_dump(), sort_keys=False)
    rprint(Syntax(text, "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default rpmcraft.yaml in current directory."""
    target = Path("rpmcraft.yaml")
    if target.exists() and not force:
        rprint("[yellow]rpmcraft.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
