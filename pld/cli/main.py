"""pld CLI - Main commands."""
import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn

from .. import __version__, setup_logging
from ..client import PldClient
from ..core.adapters import PixeldrainAdapter
from ..core.clipboard import copy_to_clipboard
from ..core.constants import Service
from ..core.exceptions import (
    PldException,
    MissingCredentialsError,
    UnknownServiceError,
    InvalidCredentialsError,
    ServiceError,
    NetworkError,
    UploadCancelledError,
)
from ..core.settings import Settings
from ..core.upload import CancellationToken, UploadProgress, cancel_on_interrupt
from ..core.upload.services import FileValidator
from . import menus

app = typer.Typer(
    name="pld",
    help="📤 File Upload CLI",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


def get_client() -> PldClient:
    return PldClient()


def show_banner() -> None:
    console.print()
    console.print("[bold cyan]  pld[/bold cyan] [white]- upload a file, get a link[/white]")
    console.print()
    console.print(f"  [white]Version:[/white] [green]{__version__}[/green]")
    console.print()
    console.print("  [white]📡 Supported Services:[/white]")
    console.print("    [magenta]• Gofile[/magenta] [dim](Default, Anonymous, API Key)[/dim]")
    console.print("    [green]• Pixeldrain[/green] [dim](Requires API Key, Free: 10GB limit)[/dim]")
    console.print("    [blue]• Google Drive[/blue] [dim](Requires OAuth setup)[/dim]")
    console.print()
    console.print("  [white]Quick Start:[/white]")
    console.print("    [cyan]pld send <file> gf[/cyan]    [dim]Upload to Gofile[/dim]")
    console.print("    [cyan]pld send <file> pd[/cyan]    [dim]Upload to Pixeldrain[/dim]")
    console.print("    [cyan]pld send <file> gd[/cyan]    [dim]Upload to Google Drive[/dim]")
    console.print("    [cyan]pld list[/cyan]              [dim]Show history[/dim]")
    console.print("    [cyan]pld config[/cyan]            [dim]Configure API keys[/dim]")
    console.print("    [cyan]pld --help[/cyan]            [dim]Show help[/dim]")
    console.print()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
    version: bool = typer.Option(False, "--version", "-V", help="Show version and exit"),
):
    """Upload files to Pixeldrain, Gofile or Google Drive."""
    if version:
        console.print(__version__)
        raise typer.Exit()

    level = logging.DEBUG if verbose else Settings.from_env().log_level
    setup_logging(level, handler=RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=verbose,
    ))

    if ctx.invoked_subcommand is None:
        show_banner()


def confirm_large_pixeldrain_upload(size: int) -> bool:
    """Warn about the Pixeldrain free-tier limit and ask to continue."""
    size_gb = size / 1024 ** 3
    limit_gb = PixeldrainAdapter.free_limit / 1024 ** 3
    console.print("\n[yellow]⚠️  Warning: File size exceeds Pixeldrain free tier limit![/yellow]")
    console.print(f"  File size: [red]{size_gb:.2f} GB[/red]")
    console.print(f"  Free limit: [green]{limit_gb:g} GB[/green]")
    console.print("\n  [dim]Pixeldrain free accounts have a 10GB upload limit.[/dim]")
    console.print("  [dim]Consider using Gofile for larger files or upgrade Pixeldrain.[/dim]\n")
    return typer.confirm("Continue upload anyway?", default=False)


def report_upload_error(error: PldException, service: Service) -> None:
    if isinstance(error, InvalidCredentialsError):
        if error.status:
            console.print(f"\n[red]❌ Server Error: {error.status}[/red]")
        if service is Service.GOOGLE_DRIVE:
            console.print("[red]❌ Authentication Error[/red]")
            console.print("[yellow]Please re-authorize Google Drive:[/yellow] [cyan]pld config[/cyan]\n")
        else:
            console.print("[red]Invalid API key. Please reconfigure:[/red] [cyan]pld config[/cyan]\n")
    elif isinstance(error, ServiceError):
        if error.status:
            console.print(f"\n[red]❌ Server Error: {error.status}[/red]")
        else:
            console.print(f"\n[red]❌ {service.label} Error[/red]")
        console.print(f"[red]Message: {escape(error.message)}[/red]\n")
    elif isinstance(error, NetworkError):
        console.print("\n[red]❌ Network Error: Could not reach the server[/red]")
        console.print("[yellow]Please check your internet connection[/yellow]\n")
    else:
        console.print(f"\n[red]❌ Error: {escape(error.message)}[/red]\n")


@app.command()
def send(
    file_path: Path = typer.Argument(..., help="Local file to upload"),
    service: str = typer.Argument("gf", help="gf=Gofile, pd=Pixeldrain, gd=Google Drive"),
):
    """Upload a file and copy its link to the clipboard."""
    try:
        target = Service.from_flag(service)
    except UnknownServiceError as e:
        console.print(f"[red]❌ Error: {e.message}[/red]")
        console.print(f"[yellow]Usage: pld send <file-path> {escape('[gf|pd|gd]')}[/yellow]")
        raise typer.Exit(1)

    try:
        source = FileValidator().validate(file_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if target is Service.PIXELDRAIN and PixeldrainAdapter.exceeds_free_limit(source.size):
        if not confirm_large_pixeldrain_upload(source.size):
            console.print("\n[yellow]✋ Upload cancelled[/yellow]\n")
            raise typer.Exit(0)

    client = get_client()
    token = CancellationToken()

    try:
        # progress_callback is attached once the progress bar exists
        coordinator = client.coordinator(target, cancellation=token)
    except MissingCredentialsError as e:
        console.print(f"[red]❌ Error: {e.message}[/red]\n")
        console.print(f"Please configure {target.label} first: [cyan]pld config[/cyan]\n")
        raise typer.Exit(1)

    console.print(f"[{target.color}]{escape('[' + target.label + ']')}[/{target.color}] 📁 File: [cyan]{escape(source.name)}[/cyan]")
    console.print(f"📊 Size: [cyan]{source.display_size}[/cyan]\n")

    async def do_upload():
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TextColumn("[cyan]\\[{task.fields[speed]}][/cyan]"),
            TextColumn("[dim]ETA: {task.fields[eta]}[/dim]"),
            TextColumn("[dim](Press Ctrl+C to cancel)[/dim]"),
            console=console,
            transient=True
        ) as progress:
            task = progress.add_task(
                f"Uploading to {target.label}...",
                total=source.size,
                speed="0.00 MB/s",
                eta="--"
            )

            def on_progress(p: UploadProgress):
                progress.update(task, completed=p.loaded, speed=p.speed_display, eta=p.eta_display)

            coordinator.progress_callback = on_progress
            with cancel_on_interrupt(token):
                return await coordinator.upload(source.path)

    try:
        result = run_async(do_upload())
    except UploadCancelledError:
        console.print("\n[yellow]⚠️  Upload cancelled by user[/yellow]")
        raise typer.Exit(0)
    except PldException as e:
        console.print("[red]✗ Upload failed![/red]")
        report_upload_error(e, target)
        raise typer.Exit(1)

    console.print("[green]✓ Upload complete! ✨[/green]")
    console.print("\n[green]✓ Upload Successful! 🎉[/green]\n")
    console.print("🔗 Share Link:" if target is Service.GOOGLE_DRIVE else "🔗 Download Link:")
    console.print(f"   [bold underline cyan]{result.download_link}[/bold underline cyan]\n")

    if copy_to_clipboard(result.download_link):
        console.print("[green]✓ Link copied to clipboard![/green]\n")
    else:
        console.print("[yellow]⚠ Could not copy to clipboard[/yellow]\n")


@app.command("list")
def list_history():
    """Show upload history."""
    menus.history_menu(get_client(), console)


@app.command("ls", hidden=True)
def ls():
    """Show upload history."""
    list_history()


@app.command()
def config():
    """Configure API keys and Google Drive."""
    menus.config_menu(get_client(), console)


if __name__ == "__main__":
    app()
