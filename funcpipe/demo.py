"""
"Power plus one", composed by hand and with a pipeline.

The hand-written versions show what composing two functions looks like
without help; the pipeline version keeps the error handling out of the way
no matter how many steps are added.
"""

from typing import Iterable, Optional

from funcpipe.api.pipeline import build
from funcpipe.config.types import FuncpipeConfig
from funcpipe.core.results import Result, Success, Failure, PipelineError, chain_results


def square(x: int) -> int:
    return x * x


def plus_one(x: int) -> int:
    return x + 1


def checked_square(x: int) -> tuple[int, Optional[Exception]]:
    """Square ``x``, returning an error instead of a value for negatives"""
    if x < 0:
        return 0, ValueError("x should not be negative")
    return x * x, None


def power_plus_one_direct(x: int) -> int:
    """Apply the functions one after the other"""
    return plus_one(square(x))


def power_plus_one_handling_error(x: int) -> Result[int, Exception]:
    """Apply the functions one after the other, checking for an error in between"""
    y, error = checked_square(x)
    if error is not None:
        return Failure(error)
    return Success(plus_one(y))


def power_plus_one(x: int, config: Optional[FuncpipeConfig] = None) -> Result[int, PipelineError]:
    """Compose the same functions with a pipeline ending in a sink"""
    result: list[int] = []

    def sink(value: int) -> None:
        result.append(value)

    error = build(checked_square, plus_one, sink, name="power-plus-one", config=config)(x)
    if error is not None:
        return Failure(error)
    return Success(result[0])


def power_plus_one_many(values: Iterable[int], config: Optional[FuncpipeConfig] = None) -> Result[list[int], PipelineError]:
    """Run power plus one for every value; the first failure wins"""
    return chain_results(*(power_plus_one(x, config) for x in values))
