"""Shared fixtures: recording collaborator doubles for the mod command."""

from typing import List, Tuple
from unittest.mock import AsyncMock, Mock

import pytest

from modchat.core.routines import ModCommands
from modchat.core.types import SearchResult


class RecordingTransport:
    """ChatTransport double that keeps every notice in order."""

    def __init__(self, events: List[Tuple[str, ...]]):
        self.events = events
        self.sent: List[Tuple[str, str]] = []

    def notice(self, target: str, text: str) -> None:
        self.sent.append((target, text))
        self.events.append(("notice", target, text))

    @property
    def texts(self) -> List[str]:
        return [text for _, text in self.sent]


@pytest.fixture
def events() -> List[Tuple[str, ...]]:
    """Shared log of collaborator calls and notices, in call order."""
    return []


@pytest.fixture
def transport(events):
    return RecordingTransport(events)


@pytest.fixture
def repository(events):
    repo = Mock()
    repo.mod_prefix = "toady-"
    repo.search = AsyncMock(
        side_effect=lambda terms: events.append(("search", terms)) or SearchResult()
    )
    repo.install = AsyncMock(side_effect=lambda mod_id: events.append(("install", mod_id)))
    repo.uninstall = AsyncMock(side_effect=lambda mod_id: events.append(("uninstall", mod_id)))
    return repo


@pytest.fixture
def extensions(events):
    manager = Mock()
    manager.is_loaded = Mock(return_value=False)
    manager.load_mod = AsyncMock(side_effect=lambda mod_id: events.append(("load_mod", mod_id)))
    manager.unload_mod = AsyncMock(side_effect=lambda mod_id: events.append(("unload_mod", mod_id)))
    return manager


@pytest.fixture
def commands(repository, extensions, transport) -> ModCommands:
    return ModCommands(repository, extensions, transport)
