"""
Render worker pool.

Consumes render jobs from a conduit and runs each one in its own thread.
Every job posts exactly one result, and the result conduit is closed only
after every spawned thread has finished, so the consumer never sees
end-of-stream while a job is still in flight.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable

from ..core.conduit import Conduit
from ..core.errors import RenderError
from ..core.types import RenderFailure, RenderJob, RenderResult

RenderHandler = Callable[[RenderJob], RenderResult]


class RenderPool:
    """Thread-per-job render pool with an optional concurrency cap.

    Attributes:
        handler: Callable that renders one job and returns its result
        max_workers: Maximum number of jobs in flight, or None for no cap
    """

    def __init__(
        self,
        handler: RenderHandler,
        max_workers: int | None = None,
        logger: logging.Logger | None = None,
    ):
        if max_workers is not None and max_workers < 1:
            raise ValueError("max_workers must be a positive integer or None")
        self.handler = handler
        self.max_workers = max_workers
        self.logger = logger or logging.getLogger("article_site")
        self._gate = threading.BoundedSemaphore(max_workers) if max_workers else None

    def start(
        self,
        jobs: Conduit[RenderJob],
        results: Conduit[RenderResult],
    ) -> threading.Thread:
        """Run the pool in a background thread and return that thread."""
        thread = threading.Thread(
            target=self.run,
            args=(jobs, results),
            name="render-pool",
            daemon=True,
        )
        thread.start()
        return thread

    def run(
        self,
        jobs: Conduit[RenderJob],
        results: Conduit[RenderResult],
    ) -> None:
        """Render every job received from ``jobs`` and post results to ``results``.

        Returns once ``jobs`` is closed and every spawned worker has posted its
        result; ``results`` is closed on the way out.
        """
        workers: list[threading.Thread] = []
        try:
            for job in jobs:
                if self._gate is not None:
                    self._gate.acquire()
                worker = threading.Thread(
                    target=self._work,
                    args=(job, results),
                    name=f"render-{job.input_path.name}",
                    daemon=True,
                )
                try:
                    worker.start()
                except RuntimeError as exc:
                    self._spawn_failed(job, results, exc)
                    continue
                workers.append(worker)
        finally:
            for worker in workers:
                worker.join()
            results.close()

    def _spawn_failed(
        self,
        job: RenderJob,
        results: Conduit[RenderResult],
        exc: RuntimeError,
    ) -> None:
        # The job still owes exactly one result; post it from the pool thread.
        self.logger.debug("Could not start render thread", exc_info=True)
        try:
            error = RenderError(f"could not start render thread for {job.input_path}: {exc}")
            error.__cause__ = exc
            results.send(RenderFailure(input_path=job.input_path, error=error))
        finally:
            if self._gate is not None:
                self._gate.release()

    def _work(self, job: RenderJob, results: Conduit[RenderResult]) -> None:
        try:
            result = self._render(job)
            results.send(result)
        finally:
            if self._gate is not None:
                self._gate.release()

    def _render(self, job: RenderJob) -> RenderResult:
        try:
            return self.handler(job)
        except Exception as exc:  # noqa: BLE001
            self.logger.debug("Render handler raised", exc_info=True)
            error = RenderError(f"unexpected error rendering {job.input_path}: {exc}")
            error.__cause__ = exc
            return RenderFailure(input_path=job.input_path, error=error)
