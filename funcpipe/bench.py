"""
Benchmark of a pipeline call against the equivalent direct call.
"""

import random
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from funcpipe.api.pipeline import build
from funcpipe.core.logging import get_logger, log_performance
from funcpipe.demo import square, plus_one

logger = get_logger(__name__)


@dataclass
class BenchResult:
    """Timing of one benchmark case"""
    name: str
    iterations: int
    total_ns: int

    @property
    def ns_per_op(self) -> float:
        return self.total_ns / self.iterations if self.iterations else 0.0


def _time(name: str, iterations: int, call: Callable[[], Any]) -> BenchResult:
    start = time.perf_counter_ns()
    for _ in range(iterations):
        call()
    return BenchResult(name, iterations, time.perf_counter_ns() - start)


@log_performance
def run_benchmark(iterations: int, value: Optional[int] = None) -> list[BenchResult]:
    """
    Time ``plus_one(square(x))`` directly and through a three-step pipeline.

    Args:
        iterations: Calls per case
        value: Input; a random one below 1000 when omitted

    Returns:
        One BenchResult per case, direct call first
    """
    if iterations <= 0:
        raise ValueError("iterations must be positive")

    x = random.randrange(1000) if value is None else value
    result: list[int] = [0]

    def sink(y: int) -> None:
        result[0] = y

    def direct() -> None:
        result[0] = plus_one(square(x))

    pipe = build(square, plus_one, sink, name="bench")

    logger.debug(f"Benchmarking with x={x}, {iterations} iterations")
    return [
        _time("PowerPlusOneDirect", iterations, direct),
        _time("PowerPlusOnePipe", iterations, lambda: pipe(x)),
    ]
