"""Console chat transport: prints notices instead of sending them."""

from typing import List, Optional, Tuple

from rich.console import Console
from rich.text import Text


class ConsoleTransport:
    """ChatTransport that renders each notice on a rich console."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()
        self.sent: List[Tuple[str, str]] = []

    def notice(self, target: str, text: str) -> None:
        self.sent.append((target, text))
        # Text keeps mod descriptions from being parsed as markup
        self.console.print(Text.assemble((f"-{target}- ", "dim cyan"), text))
