"""
Application Services - Use cases that orchestrate domain logic

These are the entry points to the core. They coordinate between
domain models and ports, but contain no infrastructure concerns.
"""
import asyncio
import logging
from typing import AsyncIterator, Callable, Optional, Sequence

from .command import build_search_args
from .domain import (
    ErrorChunk,
    ErrorLine,
    FileHeader,
    MatchLine,
    NoticeKind,
    OutputChunk,
    PlainLine,
    ProcessExited,
    SearchFinished,
    SearchNotice,
    SearchOutcome,
    SearchSpec,
    SessionEvent,
    SessionState,
)
from .errors import LaunchError
from .parser import OutputParser
from .ports import ExecutableLocator, ProcessRunner

logger = logging.getLogger(__name__)


class SearchStream:
    """Events of one submitted search, ending with exactly one SearchFinished.

    Once suppressed (cancelled or superseded), undelivered records and
    notices are dropped; only the terminal event still comes through.
    """

    def __init__(self, generation: int, spec: SearchSpec):
        self.generation = generation
        self.spec = spec
        self.suppressed = False
        self.finished: Optional[SearchFinished] = None
        self._queue: asyncio.Queue = asyncio.Queue()
        self._done = False
        self.task: Optional[asyncio.Task] = None

    def put(self, event: SessionEvent) -> None:
        if self.finished is not None:
            return
        if isinstance(event, SearchFinished):
            self.finished = event
        elif self.suppressed:
            return
        self._queue.put_nowait(event)

    def __aiter__(self) -> "SearchStream":
        return self

    async def __anext__(self) -> SessionEvent:
        while not self._done:
            event = await self._queue.get()
            if isinstance(event, SearchFinished):
                self._done = True
                return event
            if not self.suppressed:
                return event
        raise StopAsyncIteration


class SearchSession:
    """Use case: run one search at a time and stream its results.

    State machine: IDLE -> RUNNING -> (COMPLETED | ERRORED | CANCELLED),
    and back to RUNNING on the next submit. All lifecycle and parsing
    work runs on the event loop, one pump task per submitted search.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        locator: ExecutableLocator,
        extra_args: Sequence[str] = (),
        buffer_partial_lines: bool = True
    ):
        self.runner = runner
        self.locator = locator
        self.extra_args = tuple(extra_args)
        self.parser = OutputParser(buffer_partial_lines=buffer_partial_lines)
        self.state = SessionState.IDLE
        self.spec: Optional[SearchSpec] = None
        self._generation = 0
        self._stream: Optional[SearchStream] = None
        self._lock = asyncio.Lock()

    @property
    def generation(self) -> int:
        return self._generation

    async def submit(self, spec: SearchSpec) -> SearchStream:
        """
        Start a search, superseding any search still running.

        Raises InvalidSpecError before anything is launched. Launch
        failures are reported on the returned stream, not raised.
        """
        spec.validate()

        async with self._lock:
            await self._cancel_locked()

            self._generation += 1
            stream = SearchStream(self._generation, spec)
            self._stream = stream
            self.spec = spec
            self.parser.reset()
            self.state = SessionState.RUNNING

            executable = self.locator.locate()
            args = build_search_args(spec, self.extra_args)
            logger.info(f"Search #{stream.generation} started: {spec.pattern!r} in {spec.root_directory}")

            try:
                await self.runner.start(executable, args)
            except LaunchError as e:
                stream.put(SearchNotice(NoticeKind.LAUNCH, str(e)))
                self._finish(stream, SearchFinished(SessionState.ERRORED, message=str(e)))
                return stream

            stream.task = asyncio.create_task(self._pump(stream, self.runner.events()))
            return stream

    async def cancel(self) -> None:
        """Stop the running search. No-op unless RUNNING."""
        async with self._lock:
            await self._cancel_locked()

    async def close(self) -> None:
        """Session teardown: cancel and release the process"""
        await self.cancel()
        await self.runner.stop()

    async def events(self) -> AsyncIterator[SessionEvent]:
        """Events of the most recent search, ending after its SearchFinished"""
        stream = self._stream
        if stream is None:
            return
        async for event in stream:
            yield event

    async def wait(self) -> Optional[SearchFinished]:
        """Wait for the most recent search to finish"""
        stream = self._stream
        if stream is None:
            return None
        if stream.task is not None:
            await stream.task
        return stream.finished

    async def _cancel_locked(self) -> None:
        stream = self._stream
        if stream is None or self.state != SessionState.RUNNING:
            return

        logger.info(f"Search #{stream.generation} cancelled")
        stream.suppressed = True
        self.state = SessionState.CANCELLED
        await self.runner.stop()
        if stream.task is not None:
            await stream.task
        self._finish(stream, SearchFinished(SessionState.CANCELLED, message="Search cancelled"))

    async def _pump(self, stream: SearchStream, runner_events: AsyncIterator) -> None:
        try:
            async for event in runner_events:
                if isinstance(event, OutputChunk):
                    self._deliver(stream, self.parser.feed(event.data))
                elif isinstance(event, ErrorChunk):
                    text = event.data.decode("utf-8", errors="replace").strip()
                    if text:
                        stream.put(SearchNotice(NoticeKind.STDERR, text))
                elif isinstance(event, ProcessExited):
                    self._deliver(stream, self.parser.flush())
                    self._on_exit(stream, event)
        except Exception as e:
            logger.exception(f"Search #{stream.generation} failed while reading output")
            self._finish(stream, SearchFinished(SessionState.ERRORED, message=str(e)))

    def _deliver(self, stream: SearchStream, records: list) -> None:
        for record in records:
            stream.put(record)
            if isinstance(record, ErrorLine):
                stream.put(SearchNotice(NoticeKind.OUTPUT, record.message))

    def _on_exit(self, stream: SearchStream, exited: ProcessExited) -> None:
        if exited.cancelled or stream.suppressed:
            self._finish(stream, SearchFinished(
                SessionState.CANCELLED, exited.exit_code, "Search cancelled"
            ))
        elif exited.normal:
            # Nonzero exit from a normal termination usually means "no matches"
            self._finish(stream, SearchFinished(
                SessionState.COMPLETED, exited.exit_code, "Search complete"
            ))
        else:
            message = f"search process exited abnormally, exit code: {exited.exit_code}"
            stream.put(SearchNotice(NoticeKind.ABNORMAL_EXIT, message))
            self._finish(stream, SearchFinished(SessionState.ERRORED, exited.exit_code, message))

    def _finish(self, stream: SearchStream, finished: SearchFinished) -> None:
        if stream.finished is not None:
            return
        stream.put(finished)
        if stream is self._stream:
            self.state = finished.state
        logger.info(f"Search #{stream.generation} {finished.state.value} (exit code: {finished.exit_code})")


class SearchService:
    """Use case: run a search to completion and collect its results"""

    def __init__(self, session_factory: Callable[[], SearchSession]):
        self.session_factory = session_factory

    async def execute(self, spec: SearchSpec, max_results: Optional[int] = None) -> SearchOutcome:
        """
        Search and collect match records.

        Cancels the search once max_results records are collected.
        Raises InvalidSpecError for an invalid spec.
        """
        session = self.session_factory()
        records = []
        files = []
        notices = []
        truncated = False
        finished = None

        try:
            stream = await session.submit(spec)
            async for event in stream:
                if truncated and isinstance(event, (FileHeader, MatchLine, PlainLine)):
                    # The search may have finished before the cancel landed
                    continue
                if isinstance(event, FileHeader):
                    if event.path not in files:
                        files.append(event.path)
                elif isinstance(event, (MatchLine, PlainLine)):
                    records.append(event)
                    if max_results and len(records) >= max_results:
                        truncated = True
                        await session.cancel()
                elif isinstance(event, SearchNotice):
                    notices.append(event)
                elif isinstance(event, SearchFinished):
                    finished = event
        finally:
            await session.close()

        return SearchOutcome(
            spec=spec,
            records=records,
            files=files,
            notices=notices,
            state=finished.state if finished else SessionState.ERRORED,
            exit_code=finished.exit_code if finished else None,
            truncated=truncated,
        )
