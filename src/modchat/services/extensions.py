"""
Tracking extension manager for modchat.

An ExtensionManager that records which mods are loaded without importing any
code. Loading requires the mod to be installed, as reported by the injected
``is_installed`` check.
"""

import inspect
import logging
from typing import Awaitable, Callable, List, Optional, Set, Union

from ..core.errors import ModAlreadyLoadedError, ModNotInstalledError, ModNotLoadedError

logger = logging.getLogger(__name__)

InstalledCheck = Callable[[str], Union[bool, Awaitable[bool]]]


class TrackingExtensionManager:
    """Keeps the set of loaded mod IDs in memory."""

    def __init__(self, is_installed: Optional[InstalledCheck] = None):
        """Initialize the manager.

        Args:
            is_installed: Check run before loading; None skips it
        """
        self._is_installed = is_installed
        self._loaded: Set[str] = set()

    def is_loaded(self, mod_id: str) -> bool:
        return mod_id in self._loaded

    async def load_mod(self, mod_id: str) -> None:
        """Mark a mod as loaded."""
        if mod_id in self._loaded:
            raise ModAlreadyLoadedError(mod_id)

        if self._is_installed is not None:
            installed = self._is_installed(mod_id)
            if inspect.isawaitable(installed):
                installed = await installed
            if not installed:
                raise ModNotInstalledError(mod_id)

        self._loaded.add(mod_id)
        logger.info(f"Loaded mod {mod_id}")

    async def unload_mod(self, mod_id: str) -> None:
        """Mark a mod as unloaded."""
        if mod_id not in self._loaded:
            raise ModNotLoadedError(mod_id)

        self._loaded.discard(mod_id)
        logger.info(f"Unloaded mod {mod_id}")

    def loaded_mods(self) -> List[str]:
        """Loaded mod IDs, sorted."""
        return sorted(self._loaded)
