"""Unit tests for keyed locks."""

import asyncio

import pytest

from forum.util.locks import KeyedLock


class TestKeyedLock:
    """Tests for KeyedLock."""

    @pytest.mark.asyncio
    async def test_same_key_is_exclusive(self):
        """Holders of one key never overlap."""
        locks = KeyedLock()
        inside = 0
        peak = 0

        async def worker():
            nonlocal inside, peak
            async with locks.hold("k"):
                inside += 1
                peak = max(peak, inside)
                await asyncio.sleep(0)
                inside -= 1

        await asyncio.gather(*(worker() for _ in range(10)))

        assert peak == 1

    @pytest.mark.asyncio
    async def test_different_keys_do_not_block(self):
        """A held key does not stop another key."""
        locks = KeyedLock()
        release = asyncio.Event()

        async def hold_a():
            async with locks.hold("a"):
                await release.wait()

        holder = asyncio.create_task(hold_a())
        await asyncio.sleep(0)

        async with locks.hold("b"):
            assert len(locks) == 2

        release.set()
        await holder

    @pytest.mark.asyncio
    async def test_entries_are_dropped_when_idle(self):
        locks = KeyedLock()

        async with locks.hold("k"):
            assert len(locks) == 1

        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_released_on_error(self):
        locks = KeyedLock()

        with pytest.raises(RuntimeError):
            async with locks.hold("k"):
                raise RuntimeError("boom")

        assert len(locks) == 0
        async with locks.hold("k"):
            pass
