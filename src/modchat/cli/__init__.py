"""
CLI package for modchat.

This package contains the Typer application and the console chat transport.
"""

__all__ = ["app", "ConsoleTransport"]

from .app import app
from .transport import ConsoleTransport
