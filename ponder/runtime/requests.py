"""Request schedulers for the tree-listing and file-reading I/O boundaries.

Jobs are tagged with a channel (``"tree"`` or ``"file"``) and a token chosen
by the caller. Completed results are queued and drained by the caller's event
loop, which decides whether a token is still current before applying it.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from queue import Empty, Queue
from typing import Protocol

logger = logging.getLogger(__name__)

TREE_CHANNEL = "tree"
FILE_CHANNEL = "file"


@dataclass(frozen=True)
class Request:
    """One single-shot I/O job."""

    channel: str
    token: int
    job: Callable[[], object]


@dataclass(frozen=True)
class RequestResult:
    """Completed job outcome; exactly one of ``value``/``error`` is meaningful."""

    request: Request
    value: object = None
    error: Exception | None = None

    @property
    def channel(self) -> str:
        return self.request.channel

    @property
    def token(self) -> int:
        return self.request.token


def run_request(request: Request) -> RequestResult:
    """Run ``request.job`` and capture its value or exception."""
    try:
        value = request.job()
    except Exception as exc:
        return RequestResult(request=request, error=exc)
    return RequestResult(request=request, value=value)


class Scheduler(Protocol):
    def submit(self, channel: str, token: int, job: Callable[[], object]) -> None: ...

    def drain_results(self) -> list[RequestResult]: ...


class InlineRequestScheduler:
    """Runs each job immediately on submit and queues its result."""

    def __init__(self) -> None:
        self._results: list[RequestResult] = []

    def submit(self, channel: str, token: int, job: Callable[[], object]) -> None:
        self._results.append(run_request(Request(channel=channel, token=token, job=job)))

    def drain_results(self) -> list[RequestResult]:
        out = self._results
        self._results = []
        return out


class RequestScheduler:
    """Single background worker with latest-request-wins pending slots.

    Each channel holds at most one pending request; submitting again replaces
    a request that has not started yet. A request that is already running
    still completes and its result is queued, leaving the caller to discard it
    by token.
    """

    def __init__(self, thread_name: str = "ponder-io") -> None:
        self._thread_name = thread_name
        self._lock = threading.Lock()
        self._pending: OrderedDict[str, Request] = OrderedDict()
        self._running = False
        self._results: Queue[RequestResult] = Queue()

    def _worker(self) -> None:
        while True:
            with self._lock:
                if not self._pending:
                    self._running = False
                    return
                _channel, request = self._pending.popitem(last=False)

            self._results.put(run_request(request))

    def submit(self, channel: str, token: int, job: Callable[[], object]) -> None:
        """Queue or replace the pending request for ``channel``."""
        with self._lock:
            if channel in self._pending:
                logger.debug("replacing pending %s request with token %d", channel, token)
                del self._pending[channel]
            self._pending[channel] = Request(channel=channel, token=token, job=job)
            if self._running:
                return
            self._running = True

        worker = threading.Thread(
            target=self._worker,
            name=self._thread_name,
            daemon=True,
        )
        worker.start()

    def drain_results(self) -> list[RequestResult]:
        """Drain all completed results."""
        out: list[RequestResult] = []
        while True:
            try:
                out.append(self._results.get_nowait())
            except Empty:
                break
        return out


__all__ = [
    "TREE_CHANNEL",
    "FILE_CHANNEL",
    "Request",
    "RequestResult",
    "Scheduler",
    "InlineRequestScheduler",
    "RequestScheduler",
    "run_request",
]
