"""
modchat - chat-command mediator for bot mods.

This package maps a single chat command onto searching, installing and
uninstalling optional mods for a running bot, reporting each step back to
the chat as notices.
"""

__version__ = "0.1.0"
__author__ = "modchat Team"
__license__ = "Apache-2.0"

from typing import Final

# Package metadata
VERSION: Final[str] = __version__
PACKAGE_NAME: Final[str] = "modchat"

__all__ = [
    "__version__",
    "VERSION",
    "PACKAGE_NAME",
]
