"""Tests for Tracer."""

import logging

import pytest

from piconeuro.signals import Tracer, get, init, next_value


@pytest.fixture
def debug_logs(caplog):
    caplog.set_level(logging.DEBUG, logger="PICONEURO")
    return caplog


def messages(caplog):
    return [
        r.getMessage()
        for r in caplog.records
        if r.name == "PICONEURO.piconeuro.signals.tracing"
    ]


def test_tracer(debug_logs):
    """Test that a traced signal logs connect, values and disconnect."""
    tracer = Tracer()
    traced = tracer(init(1), "one")
    assert get(traced) == 1

    assert messages(debug_logs) == [
        "one/SUB00 >>00>> connected",
        "one/SUB00 !!00!! 1",
        "one/SUB00 <<01<< disconnected",
    ]

    get(traced)
    assert messages(debug_logs)[-1] == "one/SUB01 <<01<< disconnected"


def test_tracer_anonymous_labels(debug_logs):
    """Test that every tracer numbers its signals independently."""
    first, second = Tracer(), Tracer("probe")
    get(first(init(1)))
    get(first(init(2)))
    get(second(init(3)))

    logged = messages(debug_logs)
    assert logged[0].startswith("TRACE00/SUB00")
    assert logged[3].startswith("TRACE01/SUB00")
    assert logged[6].startswith("PROBE00/SUB00")


def test_tracer_bypass():
    """Test that disabled tracers return the signal unchanged."""
    signal = init(1)
    assert Tracer(enabled=False)(signal) is signal

    quiet = logging.getLogger("piconeuro-tests.quiet")
    quiet.setLevel(logging.INFO)
    assert Tracer(logger=quiet)(signal) is signal


@pytest.mark.asyncio
async def test_next_value_with_tracer(debug_logs, timeout_signal):
    """Test tracing the signal awaited by next_value."""
    tracer = Tracer()
    signal = init(0, timeout_signal(5, 0.01))
    assert await next_value(signal, tracer=tracer) == 5
    assert "TRACE00/SUB00 !!01!! 5" in messages(debug_logs)
