import asyncio
import inspect
import unittest
import warnings

from treedup.utils.throttler import Throttler


class ThrottlerTest(unittest.TestCase):
    def test_limits_running_tasks(self):
        running = 0
        peak = 0

        async def work(i):
            nonlocal running, peak
            running += 1
            peak = max(peak, running)
            await asyncio.sleep(0.001)
            running -= 1
            return i

        async def run():
            async with asyncio.TaskGroup() as tg:
                throttler = Throttler(tg, 2)
                tasks = [await throttler.schedule(work(i)) for i in range(10)]
            return [t.result() for t in tasks]

        self.assertEqual(list(range(10)), asyncio.run(run()))
        self.assertEqual(2, peak)

    def test_slot_released_on_failure(self):
        async def fail():
            raise OSError("boom")

        async def run():
            throttler = None
            try:
                async with asyncio.TaskGroup() as tg:
                    throttler = Throttler(tg, 1)
                    await throttler.schedule(fail())
            except* OSError:
                pass
            return throttler

        throttler = asyncio.run(run())

        self.assertFalse(throttler._semaphore.locked())

    def test_slot_released_when_task_cannot_be_created(self):
        """The scheduled coroutine and its wrapper are both closed."""
        class ClosedGroup:
            def __init__(self):
                self.received = []

            def create_task(self, coro, name=None):
                self.received.append(coro)
                raise RuntimeError("TaskGroup is finished")

        async def work():
            return 1

        async def run():
            group = ClosedGroup()
            throttler = Throttler(group, 1)
            coro = work()
            with self.assertRaises(RuntimeError):
                await throttler.schedule(coro)
            self.assertFalse(throttler._semaphore.locked())
            self.assertEqual(inspect.CORO_CLOSED, inspect.getcoroutinestate(coro))
            [wrapped] = group.received
            self.assertEqual(inspect.CORO_CLOSED, inspect.getcoroutinestate(wrapped))

        with warnings.catch_warnings():
            warnings.simplefilter("error", RuntimeWarning)
            asyncio.run(run())

    def test_task_name(self):
        async def run():
            async with asyncio.TaskGroup() as tg:
                task = await Throttler(tg, 1).schedule(asyncio.sleep(0), name="digest")
            return task.get_name()

        self.assertEqual("digest", asyncio.run(run()))

    def test_invalid_concurrency(self):
        async def run():
            async with asyncio.TaskGroup() as tg:
                Throttler(tg, 0)

        with self.assertRaises(ValueError):
            asyncio.run(run())


if __name__ == '__main__':
    unittest.main()
