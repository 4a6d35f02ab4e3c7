"""Tests for the injected refresh control."""

from unittest.mock import Mock

import pytest

from alistrefresh.browser.control import CONTROL_ELEMENT_ID, ControlSurface, ControlVisibility


class TestMounting:
    """Test idempotent mounting."""

    @pytest.mark.asyncio
    async def test_starts_hidden(self, host_page):
        control = ControlSurface(host_page, on_activate=Mock())
        await control.ensure_mounted()

        assert control.mounted
        assert control.visibility == ControlVisibility.HIDDEN
        assert host_page.mounted == {CONTROL_ELEMENT_ID}

    @pytest.mark.asyncio
    async def test_mounting_twice_inserts_once(self, host_page):
        calls = []
        original = host_page.mount_control

        async def counting_mount(element_id, label):
            calls.append(element_id)
            return await original(element_id, label)

        host_page.mount_control = counting_mount
        control = ControlSurface(host_page, on_activate=Mock())

        await control.ensure_mounted()
        await control.ensure_mounted()

        assert calls == [CONTROL_ELEMENT_ID]

    @pytest.mark.asyncio
    async def test_existing_element_is_adopted(self, host_page):
        host_page.mounted.add(CONTROL_ELEMENT_ID)
        control = ControlSurface(host_page, on_activate=Mock())

        await control.ensure_mounted()

        assert control.mounted
        assert host_page.mounted == {CONTROL_ELEMENT_ID}

    @pytest.mark.asyncio
    async def test_reset_allows_remount(self, host_page):
        control = ControlSurface(host_page, on_activate=Mock())
        await control.ensure_mounted()
        await control.set_visible(True)

        host_page.mounted.clear()
        control.reset()
        assert control.visibility == ControlVisibility.HIDDEN

        await control.ensure_mounted()
        assert host_page.mounted == {CONTROL_ELEMENT_ID}


class TestVisibility:
    """Test the visible/hidden state machine."""

    @pytest.mark.asyncio
    async def test_toggle(self, host_page):
        control = ControlSurface(host_page, on_activate=Mock())
        await control.ensure_mounted()

        await control.set_visible(True)
        assert control.visibility == ControlVisibility.VISIBLE
        await control.set_visible(False)
        assert control.visibility == ControlVisibility.HIDDEN

        assert host_page.display_calls == [True, False]

    @pytest.mark.asyncio
    async def test_repeated_state_is_noop(self, host_page):
        control = ControlSurface(host_page, on_activate=Mock())
        await control.ensure_mounted()

        await control.set_visible(False)
        await control.set_visible(True)
        await control.set_visible(True)

        assert host_page.display_calls == [True]

    @pytest.mark.asyncio
    async def test_removed_element_is_remounted_and_shown(self, host_page):
        control = ControlSurface(host_page, on_activate=Mock())
        await control.ensure_mounted()
        host_page.mounted.clear()

        await control.set_visible(True)

        assert host_page.mounted == {CONTROL_ELEMENT_ID}
        assert host_page.display_calls == [True, True]
        assert control.visibility == ControlVisibility.VISIBLE

    @pytest.mark.asyncio
    async def test_removed_element_stays_hidden_when_hiding(self, host_page):
        control = ControlSurface(host_page, on_activate=Mock())
        await control.ensure_mounted()
        await control.set_visible(True)
        host_page.mounted.clear()

        await control.set_visible(False)

        assert control.mounted
        assert host_page.mounted == {CONTROL_ELEMENT_ID}
        assert control.visibility == ControlVisibility.HIDDEN

        await control.set_visible(True)
        assert host_page.display_calls == [True, False, True]
        assert control.visibility == ControlVisibility.VISIBLE

    @pytest.mark.asyncio
    async def test_unmounted_control_is_not_touched(self, host_page):
        control = ControlSurface(host_page, on_activate=Mock())

        await control.set_visible(True)

        assert host_page.display_calls == []
        assert control.visibility == ControlVisibility.HIDDEN


class TestActivation:
    """Test click forwarding."""

    def test_activate_calls_handler(self, host_page):
        handler = Mock()
        control = ControlSurface(host_page, on_activate=handler)

        control.activate()
        control.activate()

        assert handler.call_count == 2
