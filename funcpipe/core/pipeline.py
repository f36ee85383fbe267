"""
Type-erased function composition.

A ``Pipeline`` holds an ordered tuple of callables. Calling it runs them in
turn: the non-error return values of one step become the positional
arguments of the next, the first non-empty error stops the run, and any
exception raised while calling a step is turned into a returned error.
Calling a pipeline never raises.
"""

from typing import Any, Callable, Iterable, Iterator, Optional

from funcpipe.core.logging import get_logger, log_pipeline_event, log_step_event
from funcpipe.core.results import (
    PipelineError, PipelineFault, StepFailedError, Result, ordinal, to_result
)
from funcpipe.core.steps import StepSignature, check_arguments, describe, split_outputs

logger = get_logger(__name__)


class Pipeline:
    """An immutable sequence of steps, callable as one function"""

    def __init__(
        self,
        steps: Iterable[Callable[..., Any]] = (),
        *,
        name: Optional[str] = None,
        strict_types: bool = True,
        log_steps: bool = False,
    ):
        steps = tuple(steps)
        for position, step in enumerate(steps, start=1):
            if not callable(step):
                raise TypeError(f"{ordinal(position)} step is not callable: {step!r}")

        self._steps = steps
        self._signatures = tuple(describe(step) for step in steps)
        self.name = name or f"pipeline-{id(self):x}"
        self.strict_types = strict_types
        self.log_steps = log_steps

    @property
    def steps(self) -> tuple[Callable[..., Any], ...]:
        return self._steps

    @property
    def signatures(self) -> tuple[StepSignature, ...]:
        return self._signatures

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Callable[..., Any]]:
        return iter(self._steps)

    def __repr__(self) -> str:
        names = ", ".join(signature.name for signature in self._signatures)
        return f"Pipeline({self.name!r}, [{names}])"

    def __add__(self, other: "Pipeline") -> "Pipeline":
        """Concatenate two pipelines using + operator"""
        if not isinstance(other, Pipeline):
            return NotImplemented
        return Pipeline(
            self._steps + other._steps,
            name=self.name,
            strict_types=self.strict_types,
            log_steps=self.log_steps,
        )

    def __call__(self, *args: Any) -> Optional[PipelineError]:
        """
        Run every step in order.

        Args:
            *args: Arguments for the first step

        Returns:
            None on success, otherwise a StepFailedError for an error returned
            by a step or a PipelineFault for an exception raised by one
        """
        if not self._steps:
            return None

        carry = list(args)
        position = 1
        try:
            for position, (step, signature) in enumerate(
                zip(self._steps, self._signatures), start=1
            ):
                if self.log_steps:
                    log_step_event("start", self.name, position, signature.name)

                check_arguments(signature, carry, self.strict_types)
                carry, error = split_outputs(signature, step(*carry))

                if error is not None:
                    failure = StepFailedError(position, error)
                    log_pipeline_event(
                        "failed", self.name,
                        {"position": position, "step": signature.name, "error": str(error)},
                        "WARNING",
                    )
                    return failure
        except (KeyboardInterrupt, SystemExit, GeneratorExit):
            raise
        except BaseException as e:
            fault = PipelineFault(position, e)
            logger.bind(pipeline=self.name, position=position).error(str(fault))
            return fault

        if self.log_steps:
            log_pipeline_event("complete", self.name, {"steps": len(self._steps)})
        return None

    def run(self, *args: Any) -> Result[None, PipelineError]:
        """Run the pipeline and return Success(None) or Failure(error)"""
        return to_result(self(*args))
