"""
High-level API for building pipelines.
"""

from typing import Any, Callable, Optional

from funcpipe.config.types import FuncpipeConfig
from funcpipe.core.pipeline import Pipeline


def build(
    *steps: Callable[..., Any],
    name: Optional[str] = None,
    config: Optional[FuncpipeConfig] = None,
) -> Pipeline:
    """
    Compose callables into a single pipeline.

    Args:
        *steps: Callables to run in order; zero is allowed
        name: Name used in log records
        config: Configuration; only the ``execution`` section is read

    Returns:
        Pipeline ready to be called with the first step's arguments
    """
    if config is None:
        return Pipeline(steps, name=name)

    execution = config["execution"]
    return Pipeline(
        steps,
        name=name,
        strict_types=execution["strict_types"],
        log_steps=execution["log_steps"],
    )


def compose_pipelines(*pipelines: Pipeline) -> Pipeline:
    """Compose multiple pipelines into one"""
    if not pipelines:
        return Pipeline()

    combined = pipelines[0]
    for pipeline in pipelines[1:]:
        combined = combined + pipeline
    return combined
