"""
Local catalog repository client for modchat.

A RepositoryClient backed by a JSON catalog file and a JSON record of
installed mods. It lets the mod command run without a remote registry; it
does not download or unpack anything.

Catalog format::

    {"mods": {"typofix": {"description": "Fixes typos", "version": "1.0.0"}}}
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Set

from ..core.errors import ModNotFoundError, RepositoryError
from ..core.types import ModDescriptor, SearchResult

logger = logging.getLogger(__name__)


class CatalogRepositoryClient:
    """Repository client reading a local JSON catalog."""

    def __init__(self, catalog_path: Path, installed_path: Path, mod_prefix: str = "toady-"):
        """Initialize the client.

        Args:
            catalog_path: JSON catalog of available mods
            installed_path: JSON file recording installed mod IDs
            mod_prefix: Prefix of the keys in ``SearchResult.res``
        """
        self.catalog_path = Path(catalog_path)
        self.installed_path = Path(installed_path)
        self.mod_prefix = mod_prefix
        self._lock = asyncio.Lock()

    async def search(self, terms: str) -> SearchResult:
        """Find mods whose ID or description contains every term."""
        catalog = await asyncio.to_thread(self._read_catalog)
        words = [word.lower() for word in terms.split()]

        mod_ids = sorted(
            mod_id for mod_id, descriptor in catalog.items()
            if self._matches(mod_id, descriptor, words)
        )
        logger.debug(f"Catalog search {terms!r} matched {len(mod_ids)} mods")

        return SearchResult(
            mod_ids=mod_ids,
            res={f"{self.mod_prefix}{mod_id}": catalog[mod_id] for mod_id in mod_ids},
        )

    async def install(self, mod_id: str) -> None:
        """Record a catalog mod as installed."""
        async with self._lock:
            catalog = await asyncio.to_thread(self._read_catalog)
            if mod_id not in catalog:
                raise ModNotFoundError(mod_id)

            installed = await asyncio.to_thread(self._read_installed)
            if mod_id in installed:
                raise RepositoryError(f'Mod "{mod_id}" is already installed.', mod_id=mod_id)

            installed.add(mod_id)
            await asyncio.to_thread(self._write_installed, installed)

        logger.info(f"Installed mod {mod_id}")

    async def uninstall(self, mod_id: str) -> None:
        """Remove a mod from the installed record."""
        async with self._lock:
            installed = await asyncio.to_thread(self._read_installed)
            if mod_id not in installed:
                raise RepositoryError(f'Mod "{mod_id}" is not installed.', mod_id=mod_id)

            installed.discard(mod_id)
            await asyncio.to_thread(self._write_installed, installed)

        logger.info(f"Uninstalled mod {mod_id}")

    async def is_installed(self, mod_id: str) -> bool:
        installed = await asyncio.to_thread(self._read_installed)
        return mod_id in installed

    async def installed_mods(self) -> List[str]:
        """Installed mod IDs, sorted."""
        return sorted(await asyncio.to_thread(self._read_installed))

    @staticmethod
    def _matches(mod_id: str, descriptor: ModDescriptor, words: List[str]) -> bool:
        haystack = f"{mod_id} {descriptor.description}".lower()
        return all(word in haystack for word in words)

    def _read_catalog(self) -> Dict[str, ModDescriptor]:
        if not self.catalog_path.exists():
            raise RepositoryError(f"Mod catalog not found: {self.catalog_path}")

        try:
            data = json.loads(self.catalog_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise RepositoryError(
                f"Mod catalog is not valid JSON: {self.catalog_path}",
                original_error=e,
            ) from e

        mods: Dict[str, Any] = data.get("mods", {}) if isinstance(data, dict) else {}
        return {
            mod_id: ModDescriptor.model_validate(entry or {})
            for mod_id, entry in mods.items()
        }

    def _read_installed(self) -> Set[str]:
        if not self.installed_path.exists():
            return set()

        try:
            data = json.loads(self.installed_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise RepositoryError(
                f"Installed-mod record is not valid JSON: {self.installed_path}",
                original_error=e,
            ) from e

        if not isinstance(data, dict) or not isinstance(data.get("installed", []), list):
            raise RepositoryError(f"Installed-mod record is malformed: {self.installed_path}")
        return set(data.get("installed", []))

    def _write_installed(self, installed: Set[str]) -> None:
        self.installed_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"installed": sorted(installed)}
        self.installed_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
