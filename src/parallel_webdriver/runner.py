"""Run browser test cases in parallel worker threads."""

import logging
import threading
import time
from collections.abc import Callable, Hashable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from selenium.webdriver.remote.webdriver import WebDriver

from .browser.registry import SessionRegistry, current_worker_id

logger = logging.getLogger(__name__)


@dataclass
class CaseResult:
    """Outcome of a single parallel case.

    Attributes:
        index: Position of the case in the input
        browser: Browser kind requested by the case
        worker_id: Registry key the case ran under
        passed: Whether setup and the test function both succeeded
        phase: "setup" or "test" for failures, None when passed
        error: The exception that failed the case
        duration: Wall time in seconds, setup included
    """

    index: int
    browser: str
    worker_id: Hashable
    passed: bool
    phase: str | None = None
    error: BaseException | None = None
    duration: float = 0.0


class ParallelRunner:
    """Runs ``(browser, *args)`` cases on a thread pool, one session per worker.

    With ``reuse_sessions`` off every case opens its own session and releases it when
    the case ends. With it on, a pool thread keeps its session for later cases using
    the same browser, and all sessions are released when ``run`` returns.
    """

    def __init__(
        self,
        registry: SessionRegistry,
        max_workers: int = 4,
        reuse_sessions: bool = False,
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.registry = registry
        self.max_workers = max_workers
        self.reuse_sessions = reuse_sessions

    def run(
        self,
        cases: Iterable[Sequence[Any]],
        test_fn: Callable[..., Any],
    ) -> list[CaseResult]:
        """
        Execute every case and collect results in input order.

        Args:
            cases: Cases whose first item is the browser kind; the rest are passed
                to ``test_fn`` after the driver
            test_fn: Called as ``test_fn(driver, *args)``

        Returns:
            One result per case
        """
        cases = [tuple(case) for case in cases]
        for case in cases:
            if not case:
                raise ValueError("Each case needs at least a browser kind")

        # Reused sessions opened by this call
        workers: set[Hashable] = set()
        workers_lock = threading.Lock()
        started = time.monotonic()
        try:
            with ThreadPoolExecutor(
                max_workers=self.max_workers, thread_name_prefix="worker"
            ) as pool:
                futures = [
                    pool.submit(
                        self._run_case, index, case, test_fn, workers, workers_lock
                    )
                    for index, case in enumerate(cases)
                ]
                results = [future.result() for future in futures]
        finally:
            for worker_id in workers:
                self.registry.release(worker_id)

        passed = sum(1 for result in results if result.passed)
        logger.info(
            f"Ran {len(results)} case(s) on {self.max_workers} worker(s) in "
            f"{time.monotonic() - started:.2f}s: {passed} passed, {len(results) - passed} failed"
        )
        return results

    def _worker_id(self, index: int, browser: str) -> Hashable:
        if self.reuse_sessions:
            kind = getattr(browser, "value", browser)
            return f"{current_worker_id()}:{str(kind).strip().lower()}"
        return f"case-{index}"

    def _run_case(
        self,
        index: int,
        case: tuple,
        test_fn: Callable[..., Any],
        workers: set[Hashable],
        workers_lock: threading.Lock,
    ) -> CaseResult:
        browser, *args = case
        worker_id = self._worker_id(index, browser)
        started = time.monotonic()

        def result(passed: bool, phase: str | None = None, error: BaseException | None = None):
            return CaseResult(
                index=index,
                browser=browser,
                worker_id=worker_id,
                passed=passed,
                phase=phase,
                error=error,
                duration=time.monotonic() - started,
            )

        if self.reuse_sessions:
            with workers_lock:
                workers.add(worker_id)

        try:
            driver: WebDriver = self.registry.acquire(worker_id, browser)
        except Exception as e:
            logger.error(f"Case {index} ({browser}) setup failed: {e}")
            return result(False, "setup", e)

        try:
            test_fn(driver, *args)
        except Exception as e:
            logger.warning(f"Case {index} ({browser}) failed: {e}")
            return result(False, "test", e)
        finally:
            if not self.reuse_sessions:
                self.registry.release(worker_id)

        logger.debug(f"Case {index} ({browser}) passed")
        return result(True)


def run_parallel(
    registry: SessionRegistry,
    cases: Iterable[Sequence[Any]],
    test_fn: Callable[..., Any],
    max_workers: int = 4,
    reuse_sessions: bool = False,
) -> list[CaseResult]:
    """Run cases in parallel with a temporary ``ParallelRunner``."""
    runner = ParallelRunner(registry, max_workers=max_workers, reuse_sessions=reuse_sessions)
    return runner.run(cases, test_fn)
