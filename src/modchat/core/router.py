"""
Command router for the mod command.

The router turns one host invocation into exactly one routine call. It also
publishes the metadata (description, help, permission, pattern) a host needs
to register the command.
"""

import asyncio
import logging
from typing import Awaitable, Dict, List, Optional, Sequence, Set

from .parser import parse_command, parse_command_line
from .routines import ModCommands
from .types import COMMAND_PATTERN, Command, CommandSpec, ModInfo, Verb

logger = logging.getLogger(__name__)


MOD_INFO = ModInfo(
    name="Ribbit",
    desc="IRC interface for the Ribbit mod management system",
    author="Tom Shawver",
)

COMMAND_HELP: List[str] = [
    "** !!IMPORTANT!! **",
    "** The Toady Mod Repository is not curated or monitored, and the general public can",
    "** post to it.  Beware of nefarious mods that may destroy your machine or steal your secrets.",
    " ",
    "Format: {cmd} <command> [options]",
    "Available commands:",
    "  SEARCH [term]:     Searches published mods for the given terms. Omit terms to list all available mods.",
    "  INSTALL [modID]:   Installs and loads a new mod",
    "  UNINSTALL [modID]: Unloads and uninstalls an existing mod",
    " ",
    "Examples:",
    "  /msg {nick} {cmd} search",
    "  /msg {nick} {cmd} search typo",
    "  /msg {nick} {cmd} install typofix",
    "  /msg {nick} {cmd} uninstall typofix",
]


def build_command_spec(name: str = "ribbit") -> CommandSpec:
    """Create the command metadata under the given command word."""
    return CommandSpec(
        name=name,
        description="Accesses the Ribbit mod management tool to install third-party mods",
        min_permission="S",
        pattern=COMMAND_PATTERN,
        help=list(COMMAND_HELP),
    )


class CommandRouter:
    """Dispatches parsed mod commands to ModCommands."""

    def __init__(self, commands: ModCommands, spec: Optional[CommandSpec] = None):
        """Initialize the router.

        Args:
            commands: Routines to dispatch to
            spec: Command metadata; defaults to the ``ribbit`` command
        """
        self.commands = commands
        self.spec = spec or build_command_spec()
        self._tasks: Set[asyncio.Task] = set()

    @staticmethod
    def reply_target(sender: str, channel: str, in_channel: bool) -> str:
        """Channel for in-channel commands, otherwise the sender."""
        return channel if in_channel else sender

    async def handle(
        self,
        sender: str,
        channel: str,
        args: Sequence[Optional[str]],
        in_channel: bool
    ) -> Optional[bool]:
        """
        Run the routine for one invocation.

        Args:
            sender: Nick that issued the command
            channel: Channel or nick the command was addressed to
            args: ``[placeholder, verb, payload?]`` from the command pattern
            in_channel: True when the command was said in a shared channel

        Returns:
            The routine's success flag, or None when nothing was run
        """
        command = parse_command(args)
        if command is None:
            logger.debug(f"Ignoring unrecognized verb in {list(args)!r}")
            return None

        reply_to = self.reply_target(sender, channel, in_channel)
        routine = self._routine_for(reply_to, command)
        if routine is None:
            return None
        return await routine

    async def handle_line(
        self,
        sender: str,
        channel: str,
        line: str,
        in_channel: bool
    ) -> Optional[bool]:
        """Parse a raw line with the command pattern and handle it."""
        args = parse_command_line(line)
        if args is None:
            return None
        return await self.handle(sender, channel, args, in_channel)

    def dispatch(
        self,
        sender: str,
        channel: str,
        args: Sequence[Optional[str]],
        in_channel: bool
    ) -> asyncio.Task:
        """
        Schedule an invocation on the running loop and return its task.

        For hosts that deliver commands from synchronous callbacks. Must be
        called while an event loop is running.
        """
        task = asyncio.get_running_loop().create_task(
            self.handle(sender, channel, args, in_channel)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending(self) -> int:
        """Number of dispatched invocations still running."""
        return len(self._tasks)

    def _routine_for(self, reply_to: str, command: Command) -> Optional[Awaitable[bool]]:
        if command.verb is Verb.SEARCH:
            return self.commands.search(reply_to, command.payload)

        if not command.payload:
            self.commands.transport.notice(reply_to, self._usage(command.verb))
            return None

        if command.verb is Verb.INSTALL:
            return self.commands.install(reply_to, command.payload)
        return self.commands.uninstall(reply_to, command.payload)

    def _usage(self, verb: Verb) -> str:
        return f"Usage: {self.spec.name} {verb.value.upper()} <modId>"

    def describe(self) -> Dict[str, str]:
        """Summary of the command for host registration and listings."""
        return {
            "mod": MOD_INFO.name,
            "author": MOD_INFO.author,
            "command": self.spec.name,
            "description": self.spec.description,
            "min_permission": self.spec.min_permission,
        }
