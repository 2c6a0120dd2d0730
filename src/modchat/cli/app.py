"""
Main CLI application entry point.

This module contains the Typer application that runs the mod command against
the local catalog, either one line at a time or as an interactive console.
"""

from typing import List, Optional, Tuple
import asyncio
import logging

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from modchat import VERSION
from modchat.config.env_loader import EnvFileLoader
from modchat.config.settings import ModchatSettings
from modchat.core.errors import ConfigurationError
from modchat.core.router import CommandRouter, build_command_spec
from modchat.core.routines import ModCommands
from modchat.services.catalog import CatalogRepositoryClient
from modchat.services.extensions import TrackingExtensionManager
from .transport import ConsoleTransport

# Create the main Typer application
app = typer.Typer(
    name="modchat",
    help="modchat - search, install and uninstall bot mods from chat",
    add_completion=False,
    rich_markup_mode="rich",
)

# Rich console for output
console = Console()

logger = logging.getLogger(__name__)


def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(f"[bold blue]modchat[/bold blue] version [green]{VERSION}[/green]")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """
    modchat - chat-command mediator for bot mods.

    Runs the mod command against the local catalog so searches, installs
    and uninstalls can be tried from a terminal.
    """
    pass


def _load_settings(debug: bool = False) -> ModchatSettings:
    """Load .env and settings, create their directories and configure logging."""
    env_loader = EnvFileLoader()
    env_loader.load_env_file()
    try:
        settings = ModchatSettings()
        settings.ensure_directories()
    except (ValidationError, ConfigurationError) as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if debug:
        settings.debug = True

    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    if env_loader.get_loaded_file():
        names = ", ".join(sorted(env_loader.get_loaded_vars()))
        logger.debug(f"Read {names or 'no variables'} from {env_loader.get_loaded_file()}")
    logger.debug(f"Effective settings: {settings.to_dict()}")
    return settings


def _build_router(
    settings: ModchatSettings,
    transport: ConsoleTransport
) -> Tuple[CommandRouter, TrackingExtensionManager]:
    """Wire the bundled collaborators into a router."""
    repository = CatalogRepositoryClient(
        catalog_path=settings.catalog_path,
        installed_path=settings.installed_file_path,
        mod_prefix=settings.mod_prefix,
    )
    extensions = TrackingExtensionManager(is_installed=repository.is_installed)
    commands = ModCommands(repository, extensions, transport)
    router = CommandRouter(commands, build_command_spec(settings.command_name))
    return router, extensions


def _strip_command_word(line: str, command_name: str) -> str:
    """Drop a leading command word (``ribbit``, ``!ribbit``) if present."""
    parts = line.strip().split(maxsplit=1)
    if parts and parts[0].lstrip("!/").lower() == command_name:
        return parts[1] if len(parts) > 1 else ""
    return line.strip()


async def _run_line(
    router: CommandRouter,
    line: str,
    nick: str,
    channel: Optional[str],
    command_name: str
) -> Optional[bool]:
    text = _strip_command_word(line, command_name)
    return await router.handle_line(
        sender=nick,
        channel=channel or nick,
        line=text,
        in_channel=channel is not None,
    )


@app.command("run")
def run_command(
    line: List[str] = typer.Argument(..., help="Command line, e.g. 'install typofix'"),
    nick: str = typer.Option("operator", "--nick", "-n", help="Nick issuing the command"),
    channel: Optional[str] = typer.Option(None, "--channel", "-c", help="Channel the command is said in"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Run a single mod command and print its notices."""
    settings = _load_settings(debug)
    transport = ConsoleTransport(console)
    router, _ = _build_router(settings, transport)

    result = asyncio.run(_run_line(router, " ".join(line), nick, channel, settings.command_name))

    if result is None and not transport.sent:
        console.print("[yellow]Not a mod command.[/yellow] Try 'modchat help'.")
        raise typer.Exit(2)
    if result is not True:
        raise typer.Exit(1)


@app.command("chat")
def chat_command(
    nick: str = typer.Option("operator", "--nick", "-n", help="Nick issuing the commands"),
    channel: Optional[str] = typer.Option(None, "--channel", "-c", help="Channel the commands are said in"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Start an interactive console for the mod command."""
    settings = _load_settings(debug)
    transport = ConsoleTransport(console)
    router, extensions = _build_router(settings, transport)

    asyncio.run(_interactive_session(router, transport, extensions, settings, nick, channel))


async def _interactive_session(
    router: CommandRouter,
    transport: ConsoleTransport,
    extensions: TrackingExtensionManager,
    settings: ModchatSettings,
    nick: str,
    channel: Optional[str],
) -> None:
    """Read command lines until the user exits."""
    console.print("[bold green]modchat[/bold green] - Interactive Console")
    console.print(f"[dim]Command: {settings.command_name}[/dim]")
    console.print(f"[dim]Replying to: {channel or nick}[/dim]")
    console.print("[dim]Type 'exit', 'quit', or press Ctrl+C to exit[/dim]")
    console.print("[dim]Type '/help' for usage, '/loaded' for loaded mods[/dim]\n")

    while True:
        try:
            user_input = typer.prompt(nick)
        except (typer.Abort, KeyboardInterrupt, EOFError):
            console.print("\n[dim]Goodbye![/dim]")
            break

        stripped = user_input.strip()
        if stripped.lower() in ["exit", "quit", "q"]:
            console.print("[dim]Goodbye![/dim]")
            break
        elif stripped.lower() == "/help":
            _show_help(router, settings.nick)
            continue
        elif stripped.lower() == "/loaded":
            loaded = extensions.loaded_mods()
            console.print(f"[dim]Loaded: {', '.join(loaded) if loaded else 'none'}[/dim]")
            continue
        elif stripped == "":
            continue

        sent_before = len(transport.sent)
        result = await _run_line(router, stripped, nick, channel, settings.command_name)
        if result is None and len(transport.sent) == sent_before:
            console.print("[dim]Not a mod command. Type '/help' for usage.[/dim]")


def _show_help(router: CommandRouter, nick: str) -> None:
    """Show the rendered command help."""
    lines = router.spec.render_help(nick=nick)
    console.print(Panel(Text("\n".join(lines)), title=router.spec.name, border_style="blue"))


@app.command("help")
def help_command() -> None:
    """Show the chat help for the mod command."""
    settings = _load_settings()
    spec = build_command_spec(settings.command_name)
    for line in spec.render_help(nick=settings.nick):
        console.print(line, markup=False, highlight=False)


@app.command("config")
def config_command() -> None:
    """Show the effective configuration."""
    settings = _load_settings()

    table = Table(title="Current Configuration", show_header=True, header_style="bold magenta")
    table.add_column("Setting", style="cyan", no_wrap=True)
    table.add_column("Value", style="green")

    for key, value in settings.to_dict().items():
        table.add_row(key, str(value))

    console.print(table)
