import asyncio
from asyncio import TaskGroup, Semaphore


class Throttler:
    """Limits how many tasks scheduled through it run at the same time.

    schedule() waits for a free slot before creating the task, so a producer loop
    feeding a large tree cannot create an unbounded number of pending tasks.
    """

    def __init__(self, task_group: TaskGroup, concurrency: int):
        """Initialize the throttler.

        Args:
            task_group: The TaskGroup to which tasks will be added
            concurrency: Maximum number of tasks that can run concurrently
        """
        if concurrency < 1:
            raise ValueError(f"concurrency must be at least 1, got {concurrency}")

        self._task_group = task_group
        self._semaphore = Semaphore(concurrency)

    async def schedule(self, coro, name=None) -> asyncio.Task:
        """Schedule coro once a slot is free. The slot is released when it finishes."""
        await self._semaphore.acquire()

        async def wrapper():
            try:
                return await coro
            finally:
                self._semaphore.release()

        wrapped = wrapper()
        try:
            return self._task_group.create_task(wrapped, name=name)
        except BaseException:
            self._semaphore.release()
            wrapped.close()
            coro.close()
            raise
