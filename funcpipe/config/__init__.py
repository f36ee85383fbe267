"""Configuration for funcpipe."""

from funcpipe.config.types import FuncpipeConfig, LogConfig, ExecutionConfig, BenchConfig
from funcpipe.config.defaults import build_config
from funcpipe.config.loaders import load_config_file, save_config_file

__all__ = [
    "FuncpipeConfig",
    "LogConfig",
    "ExecutionConfig",
    "BenchConfig",
    "build_config",
    "load_config_file",
    "save_config_file",
]
