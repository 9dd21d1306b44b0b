"""Tests for the handler registry."""

import asyncio

from hookreceiver.handlers import HandlerRegistry
from hookreceiver.schemas.webhook import HandlerContext


def _context(receiver: str = "custom") -> HandlerContext:
    return HandlerContext(receiver=receiver, receiver_id="", actions=("a",), data={})


def test_handlers_run_in_registration_order():
    registry = HandlerRegistry()
    calls = []

    @registry.handler()
    async def first(context):
        calls.append("first")

    @registry.handler()
    async def second(context):
        calls.append("second")

    assert asyncio.run(registry.dispatch(_context())) == 2
    assert calls == ["first", "second"]


def test_receiver_filter_is_case_insensitive():
    registry = HandlerRegistry()
    calls = []

    async def only_custom(context):
        calls.append(context.receiver)

    registry.add(only_custom, receiver="CUSTOM")

    asyncio.run(registry.dispatch(_context("custom")))
    asyncio.run(registry.dispatch(_context("other")))

    assert calls == ["custom"]


def test_failing_handler_does_not_stop_later_handlers():
    registry = HandlerRegistry()
    calls = []

    @registry.handler()
    async def broken(context):
        raise RuntimeError("boom")

    @registry.handler()
    async def after(context):
        calls.append("after")

    assert asyncio.run(registry.dispatch(_context())) == 1
    assert calls == ["after"]


def test_len_counts_registrations():
    registry = HandlerRegistry()
    registry.add(lambda context: None)
    assert len(registry) == 1


def test_empty_registry_dispatch():
    assert asyncio.run(HandlerRegistry().dispatch(_context())) == 0


def test_action_filter_needs_a_shared_action():
    registry = HandlerRegistry()
    calls = []

    @registry.handler(actions=["b", "c"])
    async def on_b_or_c(context):
        calls.append("b_or_c")

    @registry.handler(receiver="custom", actions=["a"])
    async def on_a(context):
        calls.append("a")

    assert asyncio.run(registry.dispatch(_context())) == 1
    assert calls == ["a"]


def test_single_action_string_is_one_action():
    registry = HandlerRegistry()
    calls = []

    async def on_ab(context):
        calls.append(context.actions)

    # "ab" must not be split into "a" and "b"
    registry.add(on_ab, actions="ab")

    assert asyncio.run(registry.dispatch(_context())) == 0
    assert calls == []
