"""
Collaborator interfaces used by the mod command.

The command itself does no fetching, loading or sending. It drives three
collaborators that the host supplies at construction time.
"""

from typing import Awaitable, Protocol, Union, runtime_checkable

from .types import SearchResult


@runtime_checkable
class RepositoryClient(Protocol):
    """
    Remote mod catalog.

    All operations may raise; the exception's message is shown to the user.
    """

    mod_prefix: str

    async def search(self, terms: str) -> SearchResult:
        """
        Search the catalog.

        Args:
            terms: Search terms, empty to list every mod

        Returns:
            Matching identifiers and their descriptors
        """
        ...

    async def install(self, mod_id: str) -> None:
        """Download and install a mod."""
        ...

    async def uninstall(self, mod_id: str) -> None:
        """Remove an installed mod."""
        ...


@runtime_checkable
class ExtensionManager(Protocol):
    """Host component tracking which mods are active in the running bot."""

    def is_loaded(self, mod_id: str) -> Union[bool, Awaitable[bool]]:
        """Whether a mod is currently loaded. May return an awaitable."""
        ...

    async def load_mod(self, mod_id: str) -> None:
        """Load an installed mod."""
        ...

    async def unload_mod(self, mod_id: str) -> None:
        """Unload a loaded mod."""
        ...


@runtime_checkable
class ChatTransport(Protocol):
    """Outbound chat channel. Sends are fire-and-forget."""

    def notice(self, target: str, text: str) -> None:
        """Send a notice to a channel or nick."""
        ...
