"""
Bundled collaborator implementations for modchat.

These back the local console: a JSON catalog repository client and an
in-memory extension manager.
"""

from .catalog import CatalogRepositoryClient
from .extensions import TrackingExtensionManager

__all__ = ["CatalogRepositoryClient", "TrackingExtensionManager"]
