import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("wordgrid")


class StageTimer:
    """Collects per-stage timing and simple counters for a single request."""

    def __init__(self):
        self.timings: dict[str, float] = {}
        self.counters: dict[str, int] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.timings[name] = round((time.perf_counter() - t0) * 1000, 1)  # ms
            logger.info("stage=%s elapsed=%.1fms", name, self.timings[name])

    def count(self, name: str, n: int = 1):
        self.counters[name] = self.counters.get(name, 0) + n

    @property
    def total_ms(self) -> float:
        return round((time.perf_counter() - self._start) * 1000, 1)

    def summary(self) -> dict:
        return {**self.timings, **self.counters, "total": self.total_ms}
