import asyncio

from vibe_codegen.sandbox import PreviewDebouncer


def run_with_debouncer(steps, delay_ms=20):
    received = []

    async def scenario():
        debouncer = PreviewDebouncer(received.append, delay_ms=delay_ms)
        await steps(debouncer)

    asyncio.run(scenario())
    return received


class TestPreviewDebouncer:
    def test_burst_coalesced_to_last(self):
        async def steps(d):
            d.submit(1)
            d.submit(2)
            d.submit(3)
            assert d.is_pending
            await asyncio.sleep(0.1)
            assert not d.is_pending

        assert run_with_debouncer(steps) == [3]

    def test_separate_bursts(self):
        async def steps(d):
            d.submit("a")
            await asyncio.sleep(0.1)
            d.submit("b")
            await asyncio.sleep(0.1)

        assert run_with_debouncer(steps) == ["a", "b"]

    def test_flush_delivers_immediately(self):
        async def steps(d):
            d.submit("now")
            d.flush()
            await asyncio.sleep(0.1)

        assert run_with_debouncer(steps, delay_ms=1000) == ["now"]

    def test_cancel_drops_pending(self):
        async def steps(d):
            d.submit("stale")
            d.cancel()
            await asyncio.sleep(0.1)

        assert run_with_debouncer(steps) == []

    def test_flush_without_pending(self):
        async def steps(d):
            d.flush()

        assert run_with_debouncer(steps) == []
