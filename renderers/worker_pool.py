import logging
import os
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import Callable, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class WorkerPool:
    """Fixed-size pool of worker threads, reused across render requests.

    Threads are started lazily on first use. The owner tears the pool down
    with close() (or by leaving a with-block).
    """

    def __init__(self, size: Optional[int] = None, name: str = "raster-worker"):
        if size is None:
            size = os.cpu_count() or 1
        if size < 1:
            raise ValueError(f"Worker pool needs at least one worker, got {size}")
        self.size = size
        self._executor = ThreadPoolExecutor(max_workers=size, thread_name_prefix=name)
        self._closed = False

    def run_all(self, tasks: Sequence[Callable[[], T]]) -> List[T]:
        """Run every task and return their results in task order.

        On the first failure the tasks that have not started are cancelled,
        the running ones are joined, and the exception of the earliest failed
        task (in task order) is raised.
        """
        if self._closed:
            raise RuntimeError("Worker pool is closed.")

        futures = [self._executor.submit(task) for task in tasks]
        _, pending = wait(futures, return_when=FIRST_EXCEPTION)
        if pending:
            for future in pending:
                future.cancel()
            wait(pending)

        failed = [f for f in futures if not f.cancelled() and f.exception() is not None]
        if failed:
            logger.debug("%d of %d tasks failed", len(failed), len(futures))
            raise failed[0].exception()
        return [f.result() for f in futures]

    def close(self):
        if not self._closed:
            self._closed = True
            self._executor.shutdown(wait=True, cancel_futures=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
