import logging
import time
from contextlib import contextmanager

logger = logging.getLogger("honeycomb")


class StageTimer:
    """Wall-clock time of each solve stage plus a few size counters.

    Stages are named by the caller (``parse``, ``search``, ``sort``). A stage
    is recorded even when its body raises, so a rejected honeycomb still
    shows how long parsing took.
    """

    def __init__(self):
        self.timings: dict[str, float] = {}
        self.counts: dict[str, int] = {}
        self._start = time.perf_counter()

    @contextmanager
    def stage(self, name: str):
        if name in self.timings:
            raise ValueError(f"stage {name!r} already timed")
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.timings[name] = _ms(time.perf_counter() - t0)
            logger.info("stage=%s elapsed=%.1fms", name, self.timings[name])

    def count(self, name: str, value: int):
        self.counts[name] = self.counts.get(name, 0) + value

    @property
    def total_ms(self) -> float:
        return _ms(time.perf_counter() - self._start)

    def summary(self) -> dict:
        return {**self.timings, "total": self.total_ms}


def _ms(seconds: float) -> float:
    return round(seconds * 1000, 1)
