"""
Funcpipe: compose functions of any signature into one callable pipeline.

Outputs of each step feed the next, the first returned error stops the run,
and exceptions become returned errors instead of escaping.
"""

__version__ = "0.1.0"

from loguru import logger

from funcpipe.api.pipeline import build, compose_pipelines
from funcpipe.core.pipeline import Pipeline
from funcpipe.core.results import (
    FuncpipeError,
    PipelineError,
    PipelineFault,
    StepFailedError,
    ConfigurationError,
    Result,
    Success,
    Failure,
    ordinal,
)

# Library logging stays silent until configure_logging() is called
logger.disable("funcpipe")

__all__ = [
    "build",
    "compose_pipelines",
    "Pipeline",
    "FuncpipeError",
    "PipelineError",
    "PipelineFault",
    "StepFailedError",
    "ConfigurationError",
    "Result",
    "Success",
    "Failure",
    "ordinal",
]
