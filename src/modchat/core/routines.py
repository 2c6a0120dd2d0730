"""
Search, install and uninstall routines for the mod command.

Each routine is a fixed chain of awaited collaborator calls. A notice is sent
before or after every step; the first failure is reported with its own
message and ends the routine. Nothing is retried or rolled back.
"""

import inspect
import logging
from typing import Optional

from .errors import failure_message
from .interfaces import ChatTransport, ExtensionManager, RepositoryClient
from .types import SearchResult

logger = logging.getLogger(__name__)


class ModCommands:
    """Orchestrates repository and extension manager calls for one bot."""

    def __init__(
        self,
        repository: RepositoryClient,
        extensions: ExtensionManager,
        transport: ChatTransport
    ):
        """Initialize with the host's collaborators.

        Args:
            repository: Client for the remote mod catalog
            extensions: Manager of mods loaded in the running bot
            transport: Chat connection used for every notice
        """
        self.repository = repository
        self.extensions = extensions
        self.transport = transport

    async def install(self, reply_to: str, mod_id: str) -> bool:
        """
        Install a mod and load it.

        Args:
            reply_to: Nick or channel that receives the notices
            mod_id: ID of the mod to download and install

        Returns:
            True if the mod was installed and loaded
        """
        self._notice(reply_to, f'Installing "{mod_id}"...')
        try:
            logger.debug(f"Installing mod {mod_id}")
            await self.repository.install(mod_id)
            self._notice(reply_to, "Installed!  Loading mod...")

            logger.debug(f"Loading mod {mod_id}")
            await self.extensions.load_mod(mod_id)
            self._notice(reply_to, f'Mod "{mod_id}" loaded.')
        except Exception as e:
            self._fail(reply_to, "install", mod_id, e)
            return False

        logger.info(f"Mod {mod_id} installed and loaded")
        return True

    async def search(self, reply_to: str, terms: Optional[str] = None) -> bool:
        """
        Search the repository and list the matches.

        Args:
            reply_to: Nick or channel that receives the notices
            terms: Terms to search for; omit to list all mods

        Returns:
            True if the results were listed
        """
        terms = terms or ""
        self._notice(reply_to, f'Searching for "{terms}"...')
        try:
            # Clients may return a SearchResult or the raw {modIds, res} mapping
            result = SearchResult.model_validate(await self.repository.search(terms))
            width = result.id_width
            prefix = self.repository.mod_prefix

            self._notice(reply_to, f'** Results for "{terms}" **')
            for mod_id in result.mod_ids:
                description = result.describe(mod_id, prefix)
                self._notice(reply_to, f"{mod_id.ljust(width)}  {description}")
            self._notice(reply_to, "** End of results **")
        except Exception as e:
            self._fail(reply_to, "search", terms, e)
            return False

        logger.debug(f"Search for {terms!r} listed {len(result.mod_ids)} mods")
        return True

    async def uninstall(self, reply_to: str, mod_id: str) -> bool:
        """
        Unload a mod if it is loaded, then uninstall it.

        Args:
            reply_to: Nick or channel that receives the notices
            mod_id: ID of the mod to uninstall

        Returns:
            True if the mod was uninstalled
        """
        try:
            loaded = self.extensions.is_loaded(mod_id)
            if inspect.isawaitable(loaded):
                loaded = await loaded

            if loaded:
                logger.debug(f"Unloading mod {mod_id}")
                await self.extensions.unload_mod(mod_id)
                self._notice(reply_to, f'Mod "{mod_id}" unloaded.')

            self._notice(reply_to, f'Uninstalling "{mod_id}"...')
            await self.repository.uninstall(mod_id)
            self._notice(reply_to, f'Mod "{mod_id}" uninstalled.')
        except Exception as e:
            self._fail(reply_to, "uninstall", mod_id, e)
            return False

        logger.info(f"Mod {mod_id} uninstalled")
        return True

    def _notice(self, reply_to: str, text: str) -> None:
        self.transport.notice(reply_to, text)

    def _fail(self, reply_to: str, verb: str, subject: str, error: Exception) -> None:
        """Report a failed step to the user."""
        message = failure_message(error)
        logger.warning(f"{verb} {subject!r} failed: {message}")
        self._notice(reply_to, message)
