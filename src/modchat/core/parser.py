"""
Parsing of mod command lines.

Hosts hand the router an argument list shaped like a regex match: element 0
is the whole matched text, element 1 the verb token and element 2 the rest of
the line (or None). ``parse_command_line`` produces that list from raw text.
"""

import logging
from typing import List, Optional, Sequence

from .types import COMMAND_PATTERN, Command, Verb

logger = logging.getLogger(__name__)


def parse_command_line(line: str) -> Optional[List[Optional[str]]]:
    """
    Match a raw command line against the command pattern.

    Args:
        line: Text following the command word, e.g. ``"install typofix"``

    Returns:
        ``[line, verb, payload]`` with payload None when absent, or None if
        the line is not a mod command
    """
    match = COMMAND_PATTERN.match(line.strip())
    if not match:
        logger.debug(f"Line does not match the command pattern: {line!r}")
        return None
    return [match.group(0), match.group(1), match.group(2)]


def parse_command(args: Sequence[Optional[str]]) -> Optional[Command]:
    """
    Build a Command from a host argument list.

    Args:
        args: ``[placeholder, verb, payload?]``

    Returns:
        The parsed Command, or None when the verb is not recognized
    """
    token = args[1] if len(args) > 1 else None
    verb = Verb.from_token(token)
    if verb is None:
        return None

    payload = args[2] if len(args) > 2 else None
    return Command(verb=verb, payload=payload)
