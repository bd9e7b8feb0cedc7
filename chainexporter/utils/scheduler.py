"""
Cooperative periodic tasks for the long-running exporter processes.

Each task runs its blocking callable in a worker thread and waits on the
asyncio loop between cycles. Stopping wakes the waits but never interrupts a
cycle in flight, so open transactions always finish before shutdown.
"""
import asyncio
import logging
import signal
from typing import Any, Callable, List, Optional

from asgiref.sync import sync_to_async
from django.db import close_old_connections

logger = logging.getLogger(__name__)


def _run_with_connections(func: Callable[[], Any]) -> Any:
    close_old_connections()
    try:
        return func()
    finally:
        close_old_connections()


class PeriodicTask:
    """A named callable repeated on a fixed interval"""

    def __init__(
        self,
        name: str,
        func: Callable[[], Any],
        interval: float,
        rerun: Optional[Callable[[Any], bool]] = None,
    ):
        """
        Args:
            name: Used in the start/finish/error log lines
            func: Blocking callable run once per cycle
            interval: Seconds to wait between cycles
            rerun: Given the cycle's return value, True to start the next
                cycle immediately instead of waiting
        """
        self.name = name
        self.func = func
        self.interval = interval
        self.rerun = rerun
        self.cycles = 0
        self.running = False
        self._stopped: Optional[asyncio.Event] = None

    async def run_once(self) -> Any:
        """Run a single cycle, returns its result or None on error"""
        logger.info(f"start - {self.name}")
        try:
            result = await sync_to_async(_run_with_connections, thread_sensitive=False)(self.func)
        except Exception as e:
            logger.error(f"error - {self.name}: {e}")
            return None
        finally:
            self.cycles += 1
        logger.info(f"finish - {self.name}")
        return result

    async def run(self):
        """Repeat cycles until stopped"""
        self.running = True
        self._stopped = asyncio.Event()

        while self.running:
            result = await self.run_once()
            if not self.running:
                break
            if self.rerun is not None and self.rerun(result):
                continue
            try:
                await asyncio.wait_for(self._stopped.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass

    def stop(self):
        self.running = False
        if self._stopped is not None:
            self._stopped.set()


class TaskRunner:
    """Runs several periodic tasks side by side until a shutdown signal"""

    def __init__(self, tasks: List[PeriodicTask]):
        self.tasks = tasks

    async def start(self, handle_signals: bool = True):
        """Run all tasks until they are stopped"""
        if handle_signals:
            loop = asyncio.get_running_loop()
            for sig in (signal.SIGINT, signal.SIGTERM):
                loop.add_signal_handler(sig, self.stop)

        logger.info(f"Starting tasks: {', '.join(task.name for task in self.tasks)}")
        await asyncio.gather(*(task.run() for task in self.tasks))
        logger.info("All tasks stopped")

    async def run_once(self) -> List[Any]:
        """Run one cycle of every task, in order"""
        return [await task.run_once() for task in self.tasks]

    def stop(self):
        logger.info("Received shutdown signal, stopping tasks")
        for task in self.tasks:
            task.stop()
