"""
Configuration package for modchat.

This package contains settings management and .env file loading.
"""

from .settings import ModchatSettings
from .env_loader import EnvFileLoader

__all__ = ["ModchatSettings", "EnvFileLoader"]
