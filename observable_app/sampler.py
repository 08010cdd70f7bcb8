"""Periodic sampler for the ``app_active_users`` gauge."""
import asyncio
import contextlib

import structlog

MAX_ACTIVE_USERS = 100


class ActiveUsersSampler:
    """Writes a simulated active-user count to a gauge on a fixed interval.

    ``start()`` samples once right away and then once per interval until
    ``stop()``. The gauge is never touched between ticks.
    """

    def __init__(self, gauge, random_source, interval_seconds=5.0):
        self._gauge = gauge
        self._random = random_source
        self._interval = interval_seconds
        self._task = None

    @property
    def interval_seconds(self):
        return self._interval

    @property
    def running(self):
        return self._task is not None and not self._task.done()

    def tick(self) -> int:
        value = self._random.integers(0, MAX_ACTIVE_USERS)
        self._gauge.set(float(value))
        return value

    async def _run(self):
        while True:
            await asyncio.sleep(self._interval)
            self.tick()

    def start(self):
        if self.running:
            raise RuntimeError("sampler already started")
        value = self.tick()
        self._task = asyncio.get_running_loop().create_task(self._run())
        structlog.get_logger(__name__).debug(
            "Active users sampler started", interval_seconds=self._interval, active_users=value
        )

    async def stop(self):
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
