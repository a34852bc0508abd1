"""Unit tests for Context cancellation and deadlines."""

from __future__ import annotations

import asyncio

import pytest

from hubkit.github.core import CancellationError, Context, DeadlineExceededError


class TestContextState:
    def test_background_is_never_done(self):
        ctx = Context.background()
        assert not ctx.done()
        assert ctx.err() is None
        assert ctx.remaining() is None

    def test_cancel(self):
        ctx = Context()
        ctx.cancel()
        assert ctx.cancelled
        assert ctx.done()
        error = ctx.err()
        assert isinstance(error, CancellationError)
        assert not isinstance(error, DeadlineExceededError)

    def test_expired_deadline(self):
        ctx = Context(timeout=0)
        assert ctx.done()
        assert isinstance(ctx.err(), DeadlineExceededError)
        assert ctx.remaining() == 0.0

    def test_remaining_counts_down(self):
        ctx = Context(timeout=60)
        remaining = ctx.remaining()
        assert remaining is not None
        assert 0 < remaining <= 60


class TestContextRun:
    @pytest.mark.asyncio
    async def test_returns_result(self):
        async def work():
            return 42

        assert await Context().run(work()) == 42

    @pytest.mark.asyncio
    async def test_already_cancelled_does_not_start_work(self):
        started = False

        async def work():
            nonlocal started
            started = True

        ctx = Context()
        ctx.cancel()
        with pytest.raises(CancellationError):
            await ctx.run(work())
        assert not started

    @pytest.mark.asyncio
    async def test_cancel_while_outstanding(self):
        cancelled = asyncio.Event()

        async def work():
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        ctx = Context()
        asyncio.get_running_loop().call_later(0.01, ctx.cancel)

        with pytest.raises(CancellationError):
            await ctx.run(work())
        assert cancelled.is_set()

    @pytest.mark.asyncio
    async def test_deadline_while_outstanding(self):
        ctx = Context(timeout=0.01)
        with pytest.raises(DeadlineExceededError):
            await ctx.run(asyncio.sleep(10))
        assert ctx.done()

    @pytest.mark.asyncio
    async def test_work_exception_propagates(self):
        async def work():
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            await Context(timeout=5).run(work())
