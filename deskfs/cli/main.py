"""Main CLI interface for deskfs."""

import click
import csv
import io
import json
import logging
from pathlib import Path
from typing import List
from rich.console import Console
from rich.table import Table
from ..core.config import ConfigManager, LoggingConfig
from ..core.logging_config import setup_logging
from ..core.models import ContentType, FileEntry, Vault
from ..core.scanner import DirectoryScanner
from ..core.files import FileService
from ..core.discovery import VaultDiscovery, user_directories
from ..core.exceptions import (
    DeskFSError, FileSystemError, PathNotFoundError, AccessDeniedError,
    FileTooLargeError, ConfigurationError
)

console = Console()


@click.group()
@click.version_option(version="0.1.0")
@click.option('--config', '-c', type=click.Path(path_type=Path),
              help='Configuration file path')
@click.option('--home', type=click.Path(path_type=Path),
              help='Home directory to use instead of $HOME')
@click.option('--log-level', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']),
              help='Set logging level (overrides config)')
@click.option('--log-file', type=click.Path(path_type=Path),
              help='Log file path (overrides config)')
@click.pass_context
def cli(ctx, config, home, log_level, log_file):
    """deskfs - filesystem access and note vault discovery."""
    try:
        config_manager = ConfigManager(config, home_dir=home)
    except ConfigurationError as e:
        handle_cli_error(e, "configuration")
        raise click.Abort()

    app_config = config_manager.get_config()

    if log_level or log_file:
        logging_config = LoggingConfig(
            level=log_level or app_config.logging.level,
            format=app_config.logging.format,
            file_enabled=bool(log_file) or app_config.logging.file_enabled,
            file_path=log_file or app_config.logging.file_path,
            file_max_size_mb=app_config.logging.file_max_size_mb,
            file_backup_count=app_config.logging.file_backup_count,
            console_enabled=app_config.logging.console_enabled
        )
    else:
        logging_config = app_config.logging

    logging_manager = setup_logging(logging_config)
    logging_manager.log_system_info(app_config.data_dir)

    ctx.ensure_object(dict)
    ctx.obj['config'] = app_config
    ctx.obj['config_manager'] = config_manager


@cli.command('ls')
@click.argument("directory", type=click.Path(path_type=Path))
@click.option("--format", "-f", type=click.Choice(["table", "json", "csv"]), default="table", help="Output format")
@click.pass_context
def list_directory(ctx, directory: Path, format: str):
    """List the contents of a directory."""
    scanner = DirectoryScanner(ctx.obj['config'])
    try:
        entries = scanner.list_directory(directory)
    except FileSystemError as e:
        handle_cli_error(e, "list directory")
        raise click.Abort()

    _display_entries(entries, format)
    if format == "table":
        if entries:
            console.print(f"\n[bold green]{len(entries)} item(s)[/bold green]")
        else:
            console.print("[yellow]Directory is empty.[/yellow]")


@cli.command('cat')
@click.argument("file_path", type=click.Path(path_type=Path))
@click.pass_context
def read_file(ctx, file_path: Path):
    """Print a text file."""
    service = FileService(ctx.obj['config'])
    try:
        content = service.read_text_file(file_path)
    except FileSystemError as e:
        handle_cli_error(e, "read file")
        raise click.Abort()

    click.echo(content, nl=False)


@cli.command('hash')
@click.argument("file_paths", nargs=-1, required=True, type=click.Path(path_type=Path))
@click.pass_context
def hash_files(ctx, file_paths):
    """Print the SHA-256 digest of one or more files."""
    service = FileService(ctx.obj['config'])
    failed = False
    for file_path in file_paths:
        try:
            digest = service.hash_file(file_path)
        except FileSystemError as e:
            handle_cli_error(e, "hash file")
            failed = True
            continue
        click.echo(f"{digest}  {file_path}")

    if failed:
        raise click.Abort()


@cli.command('vaults')
@click.option("--format", "-f", type=click.Choice(["table", "json"]), default="table", help="Output format")
@click.option("--verbose", "-v", is_flag=True, help="Show scanned roots and skipped directories")
@click.pass_context
def discover_vaults(ctx, format: str, verbose: bool):
    """Discover note vaults in the home directory and its usual subfolders."""
    discovery = VaultDiscovery(ctx.obj['config'])

    if verbose and format == "table":
        console.print("[bold blue]Scanning:[/bold blue]")
        for root in discovery.scan_roots():
            console.print(f"  {root}")

    result = discovery.discover_with_report()

    if format == "json":
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    _display_vaults(result.vaults)
    if not result.vaults:
        console.print("[yellow]No vaults found.[/yellow]")
    else:
        console.print(f"\n[bold green]Found {len(result.vaults)} vault(s), {result.total_notes} note(s)[/bold green] in {result.duration:.2f} seconds")

    if result.errors:
        console.print(f"[bold yellow]Skipped {len(result.errors)} unreadable path(s)[/bold yellow]")
        if verbose:
            for error in result.errors[:10]:
                console.print(f"  [yellow]- {error}[/yellow]")
            if len(result.errors) > 10:
                console.print(f"  [dim]... and {len(result.errors) - 10} more[/dim]")


@cli.command('dirs')
@click.pass_context
def show_user_directories(ctx):
    """Show the well-known user directories."""
    for name, path in user_directories(ctx.obj['config'].home_dir).items():
        console.print(f"[bold]{name}:[/bold] {path}", highlight=False, soft_wrap=True)


@cli.command('serve')
@click.option("--port", "-p", type=int, help="Port to run the web server on (default from config)")
@click.option("--host", "-h", help="Host to bind the web server to (default from config)")
@click.option("--debug", is_flag=True, help="Enable debug mode")
@click.pass_context
def serve(ctx, port: int, host: str, debug: bool):
    """Start the HTTP backend."""
    from ..web.app import create_app

    app_config = ctx.obj['config']
    host = host or app_config.web.host
    port = port or app_config.web.port
    debug = debug or app_config.web.debug

    app_config.ensure_data_dir()

    console.print("[bold blue]Starting deskfs backend...[/bold blue]")
    console.print(f"Server: http://{host}:{port}")
    console.print(f"Debug mode: {'enabled' if debug else 'disabled'}")
    console.print("\n[bold green]Press Ctrl+C to stop the server[/bold green]\n")

    app = create_app(app_config, {'DEBUG': debug})
    try:
        app.run(host=host, port=port, debug=debug)
    except KeyboardInterrupt:
        console.print("\n[bold yellow]Server stopped by user[/bold yellow]")


@cli.group()
def config():
    """Configuration management commands."""
    pass


@config.command('show')
@click.pass_context
def show_config(ctx):
    """Show current configuration."""
    app_config = ctx.obj['config']

    console.print("[bold blue]Current Configuration:[/bold blue]\n")
    console.print(f"Home directory: {app_config.home_dir}", highlight=False)
    console.print(f"Data directory: {app_config.data_dir}", highlight=False)

    for section, values in app_config.to_dict().items():
        console.print(f"\n[bold]{section.capitalize()}:[/bold]")
        for key, value in values.items():
            if isinstance(value, list):
                value = ", ".join(value)
            console.print(f"  {key}: {value}", highlight=False)


@config.command('set')
@click.argument('key')
@click.argument('value')
@click.pass_context
def set_config(ctx, key, value):
    """Set a configuration value. Use dot notation for nested keys (e.g., discovery.max_depth)."""
    config_manager = ctx.obj['config_manager']

    try:
        converted_value = config_manager.set_value(key, value)
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise click.Abort()
    except OSError as e:
        console.print(f"[red]Error saving configuration:[/red] {e}")
        raise click.Abort()

    console.print(f"[green]✓[/green] Set {key} = {converted_value}")


@config.command('export')
@click.argument('file_path', type=click.Path(path_type=Path))
@click.pass_context
def export_config(ctx, file_path):
    """Export configuration to JSON file."""
    config_manager = ctx.obj['config_manager']

    try:
        config_manager.export_to_json(file_path)
    except OSError as e:
        console.print(f"[red]Error exporting configuration:[/red] {e}")
        raise click.Abort()

    console.print(f"[green]✓ Configuration exported to {file_path}[/green]")


def _display_entries(entries: List[FileEntry], format: str):
    """Display directory entries in the specified format."""
    if format == "json":
        click.echo(json.dumps([entry.to_dict() for entry in entries], indent=2))

    elif format == "csv":
        output = io.StringIO()
        writer = csv.writer(output)
        writer.writerow(["Name", "Type", "Size", "Modified", "Content Type", "Path"])
        for entry in entries:
            writer.writerow([
                entry.name,
                "directory" if entry.is_directory else "file",
                entry.size_bytes,
                entry.modified_at,
                entry.content_type,
                entry.path
            ])
        click.echo(output.getvalue().strip())

    elif entries:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Name", style="cyan", no_wrap=False, max_width=40)
        table.add_column("Size", justify="right")
        table.add_column("Modified", style="blue")
        table.add_column("Type", style="green")

        for entry in entries:
            if entry.is_directory:
                name = f"[bold]{entry.name}/[/bold]"
                size_str = "-"
                content_type = "directory"
            else:
                name = entry.name
                size_str = _format_file_size(entry.size_bytes)
                content_type = f"[{_get_content_type_color(entry.content_type)}]{entry.content_type}[/]"

            table.add_row(name, size_str, entry.modified_at[:16].replace("T", " "), content_type)

        console.print(table)


def _display_vaults(vaults: List[Vault]):
    """Display vaults as a table."""
    if not vaults:
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Vault", style="cyan")
    table.add_column("Notes", justify="right")
    table.add_column("Path", style="dim", no_wrap=False, max_width=60)

    for vault in vaults:
        table.add_row(vault.name, str(vault.note_count), vault.path)

    console.print(table)


def _format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format."""
    if size_bytes < 1024:
        return f"{size_bytes}B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f}KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f}MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.1f}GB"


def _get_content_type_color(content_type: str) -> str:
    """Get display color for a content type label."""
    if content_type == ContentType.UNKNOWN.value:
        return "white"
    family = content_type.split("/", 1)[0]
    colors = {
        "text": "green",
        "image": "cyan",
        "video": "magenta",
        "audio": "magenta",
        "application": "yellow"
    }
    return colors.get(family, "white")


def handle_cli_error(error: Exception, operation: str = "operation") -> None:
    """
    Handle CLI errors with appropriate user feedback.

    Args:
        error: The exception that occurred
        operation: Description of the operation that failed
    """
    if isinstance(error, PathNotFoundError):
        console.print(f"[bold red]Error:[/bold red] {error}")
        console.print("[yellow]Please check that the path exists.[/yellow]")
    elif isinstance(error, AccessDeniedError):
        console.print(f"[bold red]Permission Error:[/bold red] {error}")
        console.print("[yellow]Please check file/directory permissions.[/yellow]")
    elif isinstance(error, FileTooLargeError):
        console.print(f"[bold red]Error:[/bold red] {error}")
    elif isinstance(error, FileSystemError):
        console.print(f"[bold red]File System Error:[/bold red] {error}")
    elif isinstance(error, ConfigurationError):
        console.print(f"[bold red]Configuration Error:[/bold red] {error}")
    elif isinstance(error, DeskFSError):
        console.print(f"[bold red]Error:[/bold red] {error}")
    else:
        console.print(f"[bold red]Unexpected Error:[/bold red] {error}")

    logging.getLogger(__name__).debug(f"CLI error in {operation}: {error}", exc_info=True)


if __name__ == "__main__":
    cli()
