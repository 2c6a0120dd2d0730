"""
Entry point for running modchat as a module.

This allows users to run the CLI using:
    python -m modchat [command] [options]
"""

from modchat.cli.app import app

if __name__ == "__main__":
    app()
