"""
Tests for the search, install and uninstall routines.
"""

import pytest
from unittest.mock import AsyncMock, Mock

from modchat.core.errors import ExtensionError, ModNotFoundError, RepositoryError
from modchat.core.types import ModDescriptor, SearchResult


class TestInstall:
    """Test the install routine."""

    @pytest.mark.asyncio
    async def test_install_and_load(self, commands, transport, events):
        """Test a successful install reports each step and loads after installing."""
        assert await commands.install("#bots", "typofix") is True

        assert transport.texts == [
            'Installing "typofix"...',
            "Installed!  Loading mod...",
            'Mod "typofix" loaded.',
        ]
        assert [e for e in events if e[0] != "notice"] == [
            ("install", "typofix"),
            ("load_mod", "typofix"),
        ]
        assert all(target == "#bots" for target, _ in transport.sent)

    @pytest.mark.asyncio
    async def test_install_failure_skips_load(self, commands, repository, extensions, transport):
        """Test a failed install never loads and sends one error notice."""
        repository.install.side_effect = ModNotFoundError("typofix")

        assert await commands.install("alice", "typofix") is False

        extensions.load_mod.assert_not_called()
        assert transport.texts == [
            'Installing "typofix"...',
            'Mod "typofix" not found in the repository.',
        ]

    @pytest.mark.asyncio
    async def test_load_failure_after_install(self, commands, repository, extensions, transport):
        """Test a failed load follows the install notice and is not retried."""
        extensions.load_mod.side_effect = ExtensionError("Mod failed to start")

        assert await commands.install("alice", "typofix") is False

        repository.install.assert_awaited_once_with("typofix")
        extensions.load_mod.assert_awaited_once_with("typofix")
        assert transport.texts == [
            'Installing "typofix"...',
            "Installed!  Loading mod...",
            "Mod failed to start",
        ]

    @pytest.mark.asyncio
    async def test_plain_exception_message(self, commands, repository, transport):
        """Test non-modchat exceptions are reported by their text."""
        repository.install.side_effect = OSError("disk full")

        await commands.install("alice", "typofix")

        assert transport.texts[-1] == "disk full"


class TestSearch:
    """Test the search routine."""

    @pytest.mark.asyncio
    async def test_empty_results(self, commands, transport):
        """Test an empty result lists only the header and footer."""
        assert await commands.search("alice", "nothing") is True

        assert transport.texts == [
            'Searching for "nothing"...',
            '** Results for "nothing" **',
            "** End of results **",
        ]

    @pytest.mark.asyncio
    async def test_missing_terms_list_all(self, commands, repository, transport):
        """Test omitted terms search for the empty string."""
        await commands.search("alice", None)

        repository.search.assert_awaited_once_with("")
        assert transport.texts[0] == 'Searching for ""...'
        assert transport.texts[1] == '** Results for "" **'

    @pytest.mark.asyncio
    async def test_columns_are_padded(self, commands, repository, transport):
        """Test identifiers are padded to the longest one plus two spaces."""
        repository.search.side_effect = None
        repository.search.return_value = SearchResult(
            mod_ids=["a", "bb"],
            res={
                "toady-a": ModDescriptor(description="first"),
                "toady-bb": ModDescriptor(description="second"),
            },
        )

        await commands.search("alice", "x")

        assert transport.texts[2:4] == [
            "a   first",
            "bb  second",
        ]

    @pytest.mark.asyncio
    async def test_results_keep_client_order(self, commands, repository, transport):
        """Test results are listed in the order the client returned them."""
        repository.search.side_effect = None
        repository.search.return_value = SearchResult.model_validate({
            "modIds": ["zeta", "alpha"],
            "res": {
                "toady-zeta": {"description": "Z"},
                "toady-alpha": {"description": "A"},
            },
        })

        await commands.search("alice", "")

        assert transport.texts[2:4] == ["zeta   Z", "alpha  A"]
        assert transport.texts[-1] == "** End of results **"

    @pytest.mark.asyncio
    async def test_plain_mapping_result(self, commands, repository, transport):
        """Test a client returning the raw {modIds, res} mapping is listed."""
        repository.search.side_effect = None
        repository.search.return_value = {
            "modIds": ["a", "bb"],
            "res": {
                "toady-a": {"description": "first"},
                "toady-bb": {"description": "second"},
            },
        }

        assert await commands.search("alice", "x") is True

        assert transport.texts == [
            'Searching for "x"...',
            '** Results for "x" **',
            "a   first",
            "bb  second",
            "** End of results **",
        ]

    @pytest.mark.asyncio
    async def test_malformed_mapping_result(self, commands, repository, transport):
        """Test an unreadable result is reported once and lists nothing."""
        repository.search.side_effect = None
        repository.search.return_value = {"modIds": 42}

        assert await commands.search("alice", "x") is False

        assert len(transport.texts) == 2
        assert transport.texts[0] == 'Searching for "x"...'
        assert not transport.texts[1].startswith("**")

    @pytest.mark.asyncio
    async def test_search_failure(self, commands, repository, transport):
        """Test a failed search reports the error and lists nothing."""
        repository.search.side_effect = RepositoryError("Registry unreachable")

        assert await commands.search("alice", "typo") is False

        assert transport.texts == [
            'Searching for "typo"...',
            "Registry unreachable",
        ]


class TestUninstall:
    """Test the uninstall routine."""

    @pytest.mark.asyncio
    async def test_loaded_mod_is_unloaded_first(self, commands, extensions, transport, events):
        """Test a loaded mod is unloaded before it is uninstalled."""
        extensions.is_loaded.return_value = True

        assert await commands.uninstall("#bots", "typofix") is True

        assert transport.texts == [
            'Mod "typofix" unloaded.',
            'Uninstalling "typofix"...',
            'Mod "typofix" uninstalled.',
        ]
        calls = [e[0] for e in events if e[0] != "notice"]
        assert calls == ["unload_mod", "uninstall"]

    @pytest.mark.asyncio
    async def test_unloaded_mod_skips_unload(self, commands, extensions, transport):
        """Test a mod that is not loaded goes straight to uninstalling."""
        extensions.is_loaded.return_value = False

        await commands.uninstall("alice", "typofix")

        extensions.unload_mod.assert_not_called()
        assert transport.texts == [
            'Uninstalling "typofix"...',
            'Mod "typofix" uninstalled.',
        ]

    @pytest.mark.asyncio
    async def test_loaded_state_is_queried_every_time(self, commands, extensions, transport):
        """Test back-to-back uninstalls each ask whether the mod is loaded."""
        extensions.is_loaded.side_effect = [True, False]

        await commands.uninstall("alice", "typofix")
        await commands.uninstall("alice", "typofix")

        assert extensions.is_loaded.call_count == 2
        assert extensions.unload_mod.await_count == 1
        assert transport.texts.count('Mod "typofix" unloaded.') == 1

    @pytest.mark.asyncio
    async def test_async_loaded_check(self, commands, extensions, transport):
        """Test an awaitable is_loaded result is awaited."""
        extensions.is_loaded = AsyncMock(return_value=True)

        await commands.uninstall("alice", "typofix")

        extensions.unload_mod.assert_awaited_once_with("typofix")
        assert transport.texts[0] == 'Mod "typofix" unloaded.'

    @pytest.mark.asyncio
    async def test_unload_failure_stops(self, commands, repository, extensions, transport):
        """Test a failed unload never uninstalls."""
        extensions.is_loaded.return_value = True
        extensions.unload_mod.side_effect = ExtensionError("Mod is busy")

        assert await commands.uninstall("alice", "typofix") is False

        repository.uninstall.assert_not_called()
        assert transport.texts == ["Mod is busy"]

    @pytest.mark.asyncio
    async def test_uninstall_failure(self, commands, repository, transport):
        """Test a failed uninstall reports one error after the progress notice."""
        repository.uninstall.side_effect = RepositoryError('Mod "typofix" is not installed.')

        assert await commands.uninstall("alice", "typofix") is False

        assert transport.texts == [
            'Uninstalling "typofix"...',
            'Mod "typofix" is not installed.',
        ]

    @pytest.mark.asyncio
    async def test_loaded_check_failure(self, commands, repository, extensions, transport):
        """Test a failing is_loaded is reported like any other step."""
        extensions.is_loaded = Mock(side_effect=RuntimeError("manager offline"))

        await commands.uninstall("alice", "typofix")

        repository.uninstall.assert_not_called()
        assert transport.texts == ["manager offline"]
