"""
Core command logic for modchat.

This package contains the command parser, the router and the search,
install and uninstall routines, plus the collaborator interfaces they drive.
"""

from .errors import (
    ModchatError,
    RepositoryError,
    ModNotFoundError,
    ExtensionError,
    ModNotInstalledError,
    ModAlreadyLoadedError,
    ModNotLoadedError,
    ConfigurationError,
    failure_message,
)
from .interfaces import ChatTransport, ExtensionManager, RepositoryClient
from .parser import parse_command, parse_command_line
from .router import MOD_INFO, CommandRouter, build_command_spec
from .routines import ModCommands
from .types import Command, CommandSpec, ModDescriptor, ModInfo, SearchResult, Verb

__all__ = [
    "ModchatError",
    "RepositoryError",
    "ModNotFoundError",
    "ExtensionError",
    "ModNotInstalledError",
    "ModAlreadyLoadedError",
    "ModNotLoadedError",
    "ConfigurationError",
    "failure_message",
    "ChatTransport",
    "ExtensionManager",
    "RepositoryClient",
    "parse_command",
    "parse_command_line",
    "MOD_INFO",
    "CommandRouter",
    "build_command_spec",
    "ModCommands",
    "Command",
    "CommandSpec",
    "ModDescriptor",
    "ModInfo",
    "SearchResult",
    "Verb",
]
