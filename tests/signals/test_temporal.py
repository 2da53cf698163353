"""Tests for settle."""

import asyncio
from unittest.mock import Mock, call

import pytest

from piconeuro.signals import settle
from piconeuro.signals.temporal import DEFAULT_SETTLE_DELAY


@pytest.mark.asyncio
async def test_settle_burst(manual_signal):
    """Test that a burst of values is delivered as its last value."""
    source = manual_signal()
    handler = Mock()

    settle(source, 0.02)(handler)
    source.emit(1)
    source.emit(2)
    source.emit(3)
    handler.assert_not_called()

    await asyncio.sleep(0.1)
    handler.assert_called_once_with(3)


@pytest.mark.asyncio
async def test_settle_default_delay(manual_signal):
    """Test settle with the default quiet period."""
    assert DEFAULT_SETTLE_DELAY == 0.01
    source = manual_signal()
    handler = Mock()

    settle(source)(handler)
    source.emit("a")
    await asyncio.sleep(0.05)
    handler.assert_called_once_with("a")


@pytest.mark.asyncio
async def test_settle_restarts_quiet_period(manual_signal):
    """Test that every value restarts the quiet period."""
    source = manual_signal()
    handler = Mock()

    settle(source, 0.1)(handler)
    source.emit(1)
    await asyncio.sleep(0.04)
    source.emit(2)
    await asyncio.sleep(0.04)
    handler.assert_not_called()

    await asyncio.sleep(0.15)
    handler.assert_called_once_with(2)


@pytest.mark.asyncio
async def test_settle_leading(manual_signal):
    """Test that the leading value is delivered right away."""
    source = manual_signal()
    handler = Mock()

    settle(source, 0.02, leading=True)(handler)
    source.emit(1)
    handler.assert_called_once_with(1)

    source.emit(2)
    await asyncio.sleep(0.1)
    assert handler.call_args_list == [call(1), call(2)]


@pytest.mark.asyncio
async def test_settle_release(manual_signal):
    """Test that release cancels the pending value."""
    source = manual_signal()
    handler = Mock()

    release = settle(source, 0.02)(handler)
    source.emit(1)
    release()
    assert source.releases == 1

    await asyncio.sleep(0.05)
    handler.assert_not_called()

    release()
    assert source.releases == 1
