"""
Process Runner Adapter

Implements ProcessRunner port with asyncio subprocesses. Output is read
with non-blocking stream reads on the running event loop; every event
of one process goes into that process's own queue, so two generations
never share a channel.
"""
import asyncio
import logging
import subprocess
import sys
from typing import AsyncIterator, Optional, Sequence

from ..core.domain import ErrorChunk, OutputChunk, ProcessExited, RunnerEvent, RunnerState
from ..core.errors import LaunchError
from ..core.ports import ProcessRunner

logger = logging.getLogger(__name__)

DEFAULT_GRACE_PERIOD = 3.0
DEFAULT_CHUNK_SIZE = 64 * 1024


class _Generation:
    """One launched process and the queue its events go to"""

    def __init__(self, process: asyncio.subprocess.Process):
        self.process = process
        self.queue: asyncio.Queue = asyncio.Queue()
        self.cancelled = False
        self.watcher: Optional[asyncio.Task] = None


class AsyncProcessRunner(ProcessRunner):
    """Owns at most one search process at a time"""

    def __init__(self, grace_period: float = DEFAULT_GRACE_PERIOD, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.grace_period = grace_period
        self.chunk_size = chunk_size
        self._state = RunnerState.NOT_STARTED
        self._current: Optional[_Generation] = None
        self._lock = asyncio.Lock()

    @property
    def state(self) -> RunnerState:
        return self._state

    @property
    def pid(self) -> Optional[int]:
        return self._current.process.pid if self._current else None

    async def start(self, executable: str, args: Sequence[str]) -> None:
        """Stop the previous process (if any), then launch a new one"""
        async with self._lock:
            await self._stop_locked()

            logger.debug(f"Executing command: {executable} {' '.join(args)}")
            try:
                process = await asyncio.create_subprocess_exec(
                    executable,
                    *args,
                    stdin=subprocess.DEVNULL,
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            except OSError as e:
                logger.warning(f"Failed to launch {executable}: {e}")
                raise LaunchError(executable, e.strerror or str(e)) from e
            except ValueError as e:
                # e.g. an embedded NUL in the executable or an argument
                logger.warning(f"Failed to launch {executable!r}: {e}")
                raise LaunchError(executable, str(e)) from e

            generation = _Generation(process)
            generation.watcher = asyncio.create_task(self._watch(generation))
            self._current = generation
            self._state = RunnerState.RUNNING

    async def stop(self) -> None:
        """Terminate the running process, escalating to kill after the grace period"""
        async with self._lock:
            await self._stop_locked()

    def events(self) -> AsyncIterator[RunnerEvent]:
        """Iterate the events of the process running now.

        Bound at call time: a later start() does not redirect this iterator.
        """
        return self._iterate(self._current)

    async def _iterate(self, generation: Optional[_Generation]) -> AsyncIterator[RunnerEvent]:
        if generation is None:
            return
        while True:
            event = await generation.queue.get()
            yield event
            if isinstance(event, ProcessExited):
                return

    async def _stop_locked(self) -> None:
        generation = self._current
        if generation is None or self._state != RunnerState.RUNNING:
            return

        generation.cancelled = True
        process = generation.process

        if process.returncode is None:
            logger.info(f"Stopping search process {process.pid}")
            try:
                process.terminate()
            except ProcessLookupError:
                pass
            try:
                await asyncio.wait_for(process.wait(), timeout=self.grace_period)
            except asyncio.TimeoutError:
                logger.warning(
                    f"Process {process.pid} did not exit within {self.grace_period}s, killing"
                )
                try:
                    process.kill()
                except ProcessLookupError:
                    pass
                await process.wait()

        # The watcher posts the single ProcessExited for this generation
        await generation.watcher
        self._state = RunnerState.STOPPED

    async def _watch(self, generation: _Generation) -> None:
        process = generation.process
        await asyncio.gather(
            self._pump_stream(process.stdout, OutputChunk, generation.queue),
            self._pump_stream(process.stderr, ErrorChunk, generation.queue),
        )
        exit_code = await process.wait()

        # Negative return codes mean "killed by signal" on POSIX only
        normal = exit_code >= 0 or sys.platform == "win32"
        logger.debug(f"Process {process.pid} exited with {exit_code} (normal={normal})")

        generation.queue.put_nowait(ProcessExited(
            exit_code=exit_code,
            normal=normal,
            cancelled=generation.cancelled,
        ))
        if generation is self._current:
            self._state = RunnerState.STOPPED

    async def _pump_stream(self, stream, event_type, queue: asyncio.Queue) -> None:
        if stream is None:
            return
        while True:
            data = await stream.read(self.chunk_size)
            if not data:
                break
            queue.put_nowait(event_type(data))
