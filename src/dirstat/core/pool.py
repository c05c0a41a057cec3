"""Concurrent traversal of a directory tree with a fixed pool of worker threads."""

from __future__ import annotations

import time
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import List, Sequence

import structlog

from .channel import WorkChannel
from .models import Stats, TerminationPolicy, TraversalResult
from .scanner import EntryScanner, ErrorReporter, LoggingErrorReporter

DEFAULT_IDLE_TIMEOUT = 0.05


class WorkerPool:
    """Traverses a tree with ``workers`` long-lived threads sharing one work channel.

    The calling thread scans the root itself, which seeds the channel. Each
    worker then repeatedly receives a pending directory, scans it (possibly
    sending more subdirectories back to the channel) and adds the result to a
    private running total. A worker stops once a receive times out and the
    termination policy agrees; its total is collected when it is joined.
    """

    def __init__(
        self,
        workers: int,
        *,
        idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
        policy: TerminationPolicy = TerminationPolicy.QUIESCENCE,
        error_reporter: ErrorReporter | None = None,
    ) -> None:
        if workers < 1:
            raise ValueError(f"Worker count must be positive, got {workers}")
        if idle_timeout <= 0:
            raise ValueError(f"Idle timeout must be positive, got {idle_timeout}")
        self._workers = workers
        self._idle_timeout = idle_timeout
        self._policy = TerminationPolicy(policy)
        self._error_reporter = error_reporter
        self._logger = structlog.get_logger(__name__)

    @property
    def workers(self) -> int:
        return self._workers

    @property
    def policy(self) -> TerminationPolicy:
        return self._policy

    def traverse(self, root: Path) -> TraversalResult:
        """Scans the tree under ``root`` and returns the per-participant breakdown."""

        root = Path(root)
        channel = WorkChannel()
        reporter = self._error_reporter or LoggingErrorReporter()
        scanner = EntryScanner(channel, reporter)
        started = time.perf_counter()

        with ThreadPoolExecutor(max_workers=self._workers, thread_name_prefix="dirstat-worker") as executor:
            # The root scan is in flight before any worker can observe the channel.
            with channel.hold():
                futures = [executor.submit(self._work, index, channel, scanner) for index in range(self._workers)]
                root_stats = scanner.scan(root)
            worker_stats = self._join(futures)

        channel.close()
        self._check_drained(channel)
        result = TraversalResult(
            root=root,
            root_stats=root_stats,
            worker_stats=worker_stats,
            elapsed=time.perf_counter() - started,
            skipped=reporter.count,
        )
        self._logger.debug(
            "traversal-complete",
            root=str(root),
            workers=self._workers,
            policy=self._policy.value,
            items=result.total.item_count,
            bytes=result.total.total_bytes,
            elapsed=round(result.elapsed, 4),
        )
        return result

    # ------------------------------------------------------------------
    # Workers
    # ------------------------------------------------------------------

    def _work(self, index: int, channel: WorkChannel, scanner: EntryScanner) -> Stats:
        total = Stats()
        scanned = 0
        while True:
            path = channel.receive(self._idle_timeout)
            if path is None:
                if self._should_stop(channel):
                    break
                continue
            try:
                total = total.merge(scanner.scan(path))
                scanned += 1
            finally:
                channel.task_done()

        self._logger.debug(
            "worker-finished",
            worker=index,
            directories=scanned,
            items=total.item_count,
            bytes=total.total_bytes,
        )
        return total

    def _should_stop(self, channel: WorkChannel) -> bool:
        if self._policy is TerminationPolicy.IDLE_TIMEOUT:
            return True
        return channel.is_quiescent()

    def _check_drained(self, channel: WorkChannel) -> None:
        if self._policy is TerminationPolicy.IDLE_TIMEOUT or channel.is_quiescent():
            return
        pending = channel.in_flight
        self._logger.error("work-left-in-channel", pending=pending)
        raise RuntimeError(f"Workers stopped with {pending} directories still pending")

    def _join(self, futures: Sequence[Future]) -> List[Stats]:
        results: List[Stats] = []
        failure: BaseException | None = None
        for index, future in enumerate(futures):
            try:
                results.append(future.result())
            except Exception as exc:
                self._logger.error("worker-failed", worker=index, error=str(exc))
                failure = failure or exc
        if failure is not None:
            raise failure
        return results


def run(
    path: Path | str,
    worker_count: int,
    *,
    idle_timeout: float = DEFAULT_IDLE_TIMEOUT,
    policy: TerminationPolicy = TerminationPolicy.QUIESCENCE,
    error_reporter: ErrorReporter | None = None,
) -> Stats:
    """Returns the total size of the tree under ``path``, traversed by ``worker_count`` threads.

    Unreadable directories and files are reported and skipped, so the result
    covers the part of the tree that could be read.
    """

    pool = WorkerPool(
        worker_count,
        idle_timeout=idle_timeout,
        policy=policy,
        error_reporter=error_reporter,
    )
    return pool.traverse(Path(path)).total


__all__ = ["DEFAULT_IDLE_TIMEOUT", "WorkerPool", "run"]
