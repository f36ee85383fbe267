"""
Error types and Result helpers for pipeline execution.
Using the returns library for functional error handling.
"""

from typing import Any, Callable, Optional

# Re-export common types from returns library
from returns.result import Result, Success, Failure

def ordinal(position: int) -> str:
    """
    Render a 1-based position with its English ordinal suffix.

    11th to 19th never take st/nd/rd; everything else goes by the last digit.
    """
    if 10 < position < 20:
        return f"{position}th"
    last_digit = position % 10
    if last_digit == 1:
        return f"{position}st"
    if last_digit == 2:
        return f"{position}nd"
    if last_digit == 3:
        return f"{position}rd"
    return f"{position}th"

# Error hierarchy for funcpipe

class FuncpipeError(Exception):
    """Base exception for all funcpipe errors"""
    pass

class ConfigurationError(FuncpipeError):
    """Configuration-related errors"""
    pass

class PipelineError(FuncpipeError):
    """Terminal error of a single pipeline invocation"""

    def __init__(self, position: int, message: str):
        super().__init__(message)
        self.position = position

class StepFailedError(PipelineError):
    """A step returned a non-empty error value"""

    def __init__(self, position: int, cause: Any):
        super().__init__(position, f"{ordinal(position)} func failed: {cause}")
        self.cause = cause
        if isinstance(cause, BaseException):
            self.__cause__ = cause

    def unwrap(self) -> Any:
        """Return the error the step produced"""
        return self.cause

class PipelineFault(PipelineError):
    """A step could not be called, or raised while running"""

    def __init__(self, position: int, exception: BaseException):
        super().__init__(
            position,
            f"pipeline fault in {ordinal(position)} func: "
            f"{type(exception).__name__}: {exception}"
        )
        self.exception = exception
        self.__cause__ = exception

# Utility functions for working with Results

def safe_execute(func: Callable[..., Any], *args: Any, **kwargs: Any) -> Result[Any, Exception]:
    """
    Safely execute a function and return a Result.

    Args:
        func: Function to execute
        *args: Positional arguments for the function
        **kwargs: Keyword arguments for the function

    Returns:
        Success with the result or Failure with the exception
    """
    try:
        return Success(func(*args, **kwargs))
    except Exception as e:
        return Failure(e)

def chain_results(*results: Result[Any, Any]) -> Result[list[Any], Any]:
    """Collect the values of several Results, or return the first Failure"""
    values = []
    for result in results:
        if isinstance(result, Failure):
            return result
        values.append(result.unwrap())
    return Success(values)

def to_result(error: Optional[PipelineError]) -> Result[None, PipelineError]:
    """Lift the outcome of a pipeline call onto the railway"""
    if error is None:
        return Success(None)
    return Failure(error)
