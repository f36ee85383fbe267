"""
Configuration type definitions using TypedDict for type safety
with python-decouple integration for environment variables.
"""

from typing import TypedDict, Optional, Literal
from pathlib import Path

class LogConfig(TypedDict):
    """Logging configuration"""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    format: str
    file: Optional[Path]

class ExecutionConfig(TypedDict):
    """Pipeline execution configuration"""
    strict_types: bool               # isinstance-check arguments against plain class annotations
    log_steps: bool                  # emit a DEBUG record per executed step

class BenchConfig(TypedDict):
    """Benchmark configuration"""
    iterations: int
    value: Optional[int]             # fixed input, random when unset

class FuncpipeConfig(TypedDict):
    """Main configuration"""
    log: LogConfig
    execution: ExecutionConfig
    bench: BenchConfig
