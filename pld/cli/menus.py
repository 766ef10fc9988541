"""Interactive menus behind `pld list` and `pld config`."""
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from ..client import PldClient
from ..core.clipboard import copy_to_clipboard
from ..core.constants import (
    Service,
    HISTORY_DISPLAY_LIMIT,
    PIXELDRAIN_API_KEYS_URL,
    GOFILE_PROFILE_URL,
    GOOGLE_CONSOLE_URL,
    OAUTH_CALLBACK_HOST,
    OAUTH_CALLBACK_PORT,
)
from ..core.exceptions import ConfigError, PldException
from ..core.storage import HistoryEntry
from ..core.utils import format_timestamp

API_KEY_URLS = {
    Service.PIXELDRAIN: PIXELDRAIN_API_KEYS_URL,
    Service.GOFILE: GOFILE_PROFILE_URL,
}

SERVICE_CHOICES = {
    '1': Service.PIXELDRAIN,
    '2': Service.GOFILE,
    '3': Service.GOOGLE_DRIVE,
}


def prompt_choice(text: str) -> str:
    return typer.prompt(text, default="", show_default=False).strip()


def service_tag(name: str) -> str:
    """Colored [Label] for a stored service name."""
    try:
        service = Service(name)
    except ValueError:
        return escape(f"[{name}]")
    return f"[{service.color}]{escape('[' + service.label + ']')}[/{service.color}]"


# History

def print_history(entries: List[HistoryEntry], total: int, console: Console) -> None:
    console.print(f"\n[bold]📜 Upload History (Last {HISTORY_DISPLAY_LIMIT}):[/bold]\n")
    for index, entry in enumerate(entries, 1):
        console.print(f"[cyan]{index}.[/cyan] {service_tag(entry.service)} [bold]{escape(entry.filename)}[/bold]")
        console.print(f"[dim]   Time: {format_timestamp(entry.timestamp)}[/dim]")
        console.print(f"[dim]   Size: {escape(entry.file_size)}[/dim]")
        console.print(f"[blue]   Link: {escape(entry.download_link)}[/blue]")
        console.print()
    console.print(f"[dim]Total uploads: {total}[/dim]")


def history_menu(client: PldClient, console: Console) -> None:
    """Show recent uploads and offer copy / clear / exit."""
    while True:
        entries = client.history.recent()
        if not entries:
            console.print("[yellow]📭 No upload history yet.[/yellow]\n")
            console.print("Upload a file first: [cyan]pld send <file>[/cyan]\n")
            return

        print_history(entries, len(client.history), console)
        console.print("\n[cyan]1.[/cyan] Copy a link to clipboard")
        console.print("[cyan]2.[/cyan] Clear all history")
        console.print("[cyan]3.[/cyan] Exit\n")

        choice = prompt_choice("Select an option (1-3)")
        if choice == '1':
            selected = prompt_choice(f"Enter link number (1-{len(entries)})")
            if selected.isdigit() and 1 <= int(selected) <= len(entries):
                if copy_to_clipboard(entries[int(selected) - 1].download_link):
                    console.print("\n[green]✓ Link copied to clipboard![/green]\n")
                else:
                    console.print("\n[red]❌ Failed to copy link: no clipboard available[/red]\n")
            else:
                console.print("\n[red]❌ Invalid selection.[/red]\n")
        elif choice == '2':
            if typer.confirm("Are you sure you want to clear all history?", default=False):
                if client.history.clear():
                    console.print("\n[green]✓ Upload history cleared successfully![/green]\n")
                else:
                    console.print("\n[yellow]⚠️  No history found to delete.[/yellow]\n")
                return
            console.print("\n[dim]→ Clear cancelled.[/dim]\n")
        elif choice == '3':
            console.print("\n[dim]→ Exiting history.[/dim]\n")
            return
        else:
            console.print("\n[red]❌ Invalid option. Please select 1-3.[/red]\n")


# Config

def select_service(console: Console) -> Optional[Service]:
    console.print("\n[bold]⚙️  Select Service to Configure[/bold]\n")
    console.print("[cyan]1.[/cyan] [green]Pixeldrain[/green]")
    console.print("[cyan]2.[/cyan] [magenta]Gofile[/magenta]")
    console.print("[cyan]3.[/cyan] [blue]Google Drive[/blue]")
    console.print("[cyan]4.[/cyan] Exit\n")
    return SERVICE_CHOICES.get(prompt_choice("Select a service (1-4)"))


def config_menu(client: PldClient, console: Console) -> None:
    """Pick a service, then manage its credentials."""
    service = select_service(console)
    if service is None:
        console.print("\n[dim]→ Exiting configuration.[/dim]\n")
        return

    if service is Service.GOOGLE_DRIVE:
        google_drive_menu(client, console)
    else:
        api_key_menu(client, service, console)


def prompt_api_key(service: Service, console: Console) -> str:
    console.print(f"\n🔑 Please enter your {service.label} API key:")
    console.print(f"[dim]Get your API key from:[/dim] [cyan underline]{API_KEY_URLS[service]}[/cyan underline]\n")
    return typer.prompt("API key", default="", show_default=False)


def api_key_menu(client: PldClient, service: Service, console: Console) -> None:
    """
    Manage the API key of Pixeldrain or Gofile.

    With no stored key the user is asked for one straight away; otherwise a
    view / change / delete / exit menu is shown.
    """
    if client.config.get_credentials(service) is None:
        try:
            client.config.set_api_key(service, prompt_api_key(service, console))
        except ConfigError as e:
            console.print(f"\n[red]❌ {escape(e.message)}[/red]\n")
            raise typer.Exit(1)
        console.print(f"\n[green]✓ {service.label} API key saved successfully![/green]\n")
        console.print(f"You can now upload files: [cyan]pld send <file> {service.flag}[/cyan]\n")
        return

    while True:
        console.print(f"\n[bold]⚙️  {service.label} API Key Configuration[/bold]\n")
        console.print("[cyan]1.[/cyan] View current API key")
        console.print("[cyan]2.[/cyan] Change API key")
        console.print("[cyan]3.[/cyan] Delete API key")
        console.print("[cyan]4.[/cyan] Exit\n")

        choice = prompt_choice("Select an option (1-4)")
        if choice == '1':
            credentials = client.config.get_credentials(service)
            console.print(f"\n🔑 Current API Key: [cyan]{escape(credentials.masked)}[/cyan]")
            if credentials.updated_at:
                console.print(f"[dim]Updated: {format_timestamp(credentials.updated_at)}[/dim]\n")
        elif choice == '2':
            try:
                client.config.set_api_key(service, prompt_api_key(service, console))
            except ConfigError as e:
                console.print(f"\n[red]❌ {escape(e.message)}[/red]\n")
                continue
            console.print("\n[green]✓ API key updated successfully![/green]\n")
            return
        elif choice == '3':
            if typer.confirm("Are you sure you want to delete?", default=False):
                if client.config.delete_api_key(service):
                    console.print("\n[green]✓ API key deleted successfully![/green]\n")
                else:
                    console.print("\n[yellow]⚠️  No API key found to delete.[/yellow]\n")
                return
            console.print("\n[dim]→ Deletion cancelled.[/dim]\n")
        elif choice == '4':
            console.print("\n[dim]→ Exiting configuration.[/dim]\n")
            return
        else:
            console.print("\n[red]❌ Invalid option. Please select 1-4.[/red]\n")


def setup_google_drive(client: PldClient, console: Console) -> None:
    """First-time setup: ask for the OAuth client and run the consent flow."""
    redirect_uri = f"http://{OAUTH_CALLBACK_HOST}:{OAUTH_CALLBACK_PORT}/"
    console.print("\n[bold]🔧 Google Drive Setup[/bold]\n")
    console.print("[dim]You need to create OAuth 2.0 credentials in Google Cloud Console.[/dim]")
    console.print(f"[dim]Make sure to add[/dim] [cyan]{redirect_uri}[/cyan] [dim]as a redirect URI.[/dim]\n")

    console.print("🔑 Please enter your Google OAuth Client ID:")
    console.print(f"[dim]Get it from:[/dim] [cyan underline]{GOOGLE_CONSOLE_URL}[/cyan underline]\n")
    client_id = typer.prompt("Client ID", default="", show_default=False).strip()
    if not client_id:
        console.print("\n[red]❌ Client ID cannot be empty[/red]\n")
        raise typer.Exit(1)

    client_secret = typer.prompt("Client Secret", default="", show_default=False, hide_input=True).strip()
    if not client_secret:
        console.print("\n[red]❌ Client Secret cannot be empty[/red]\n")
        raise typer.Exit(1)

    console.print("\n🔗 Opening browser for Google authorization...")
    try:
        client.authorize_google_drive(client_id, client_secret)
    except PldException as e:
        console.print(f"\n[red]❌ Setup failed: {escape(e.message)}[/red]\n")
        raise typer.Exit(1)

    console.print("\n[green]✓ Google Drive configured successfully![/green]\n")
    console.print("You can now upload files: [cyan]pld send <file> gd[/cyan]\n")


def google_drive_menu(client: PldClient, console: Console) -> None:
    credentials = client.config.get_google_drive()
    if credentials is None or not credentials.is_authorized:
        setup_google_drive(client, console)
        return

    while True:
        console.print("\n[bold]⚙️  Google Drive Configuration[/bold]\n")
        console.print("[cyan]1.[/cyan] View current configuration")
        console.print("[cyan]2.[/cyan] Re-authorize (get new token)")
        console.print("[cyan]3.[/cyan] Delete configuration")
        console.print("[cyan]4.[/cyan] Exit\n")

        choice = prompt_choice("Select an option (1-4)")
        if choice == '1':
            console.print("\n📋 Current Configuration:")
            console.print(f"[dim]  Client ID:[/dim] [cyan]{escape(credentials.masked_client_id)}[/cyan]")
            console.print(f"[dim]  Client Secret:[/dim] [cyan]{escape(credentials.masked_client_secret)}[/cyan]")
            console.print("[dim]  Status:[/dim] [green]Authorized[/green]")
            if credentials.updated_at:
                console.print(f"[dim]  Updated:[/dim] {format_timestamp(credentials.updated_at)}")
            console.print()
        elif choice == '2':
            console.print("\n🔗 Opening browser for Google authorization...")
            try:
                client.authorize_google_drive(credentials.client_id, credentials.client_secret)
            except PldException as e:
                console.print(f"\n[red]❌ Re-authorization failed: {escape(e.message)}[/red]\n")
                continue
            console.print("\n[green]✓ Google Drive re-authorized successfully![/green]\n")
            return
        elif choice == '3':
            if typer.confirm("Are you sure you want to delete?", default=False):
                client.config.delete_google_drive()
                console.print("\n[green]✓ Google Drive configuration deleted![/green]\n")
                return
            console.print("\n[dim]→ Deletion cancelled.[/dim]\n")
        elif choice == '4':
            console.print("\n[dim]→ Exiting configuration.[/dim]\n")
            return
        else:
            console.print("\n[red]❌ Invalid option. Please select 1-4.[/red]\n")
