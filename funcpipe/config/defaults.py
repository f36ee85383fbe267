"""
Environment-aware configuration builder combining TypedDict + python-decouple
for type-safe configuration management.
"""

from typing import Optional, Any
from pathlib import Path
from decouple import Config as DecoupleConfig, RepositoryEnv

from funcpipe.config.types import (
    FuncpipeConfig,
    LogConfig,
    ExecutionConfig,
    BenchConfig,
)


def get_decouple_config(env_file: str = ".env") -> DecoupleConfig:
    """Get decouple config with proper fallbacks"""
    try:
        return DecoupleConfig(RepositoryEnv(env_file))
    except FileNotFoundError:
        # Fallback to environment variables only
        from decouple import config
        return config


def build_config(
    config_overrides: Optional[dict[str, Any]] = None,
    env_file: str = ".env"
) -> FuncpipeConfig:
    """Build type-safe configuration from environment variables and overrides"""

    decouple_config = get_decouple_config(env_file)

    log_file = decouple_config("FUNCPIPE_LOG_FILE", default=None)
    log_config: LogConfig = {
        "level": decouple_config("FUNCPIPE_LOG_LEVEL", default="WARNING"),
        "format": decouple_config("FUNCPIPE_LOG_FORMAT", default="{message}"),
        "file": Path(log_file) if log_file else None
    }

    execution_config: ExecutionConfig = {
        "strict_types": decouple_config("FUNCPIPE_STRICT_TYPES", default=True, cast=bool),
        "log_steps": decouple_config("FUNCPIPE_LOG_STEPS", default=False, cast=bool)
    }

    bench_value = decouple_config("FUNCPIPE_BENCH_VALUE", default=None)
    bench_config: BenchConfig = {
        "iterations": decouple_config("FUNCPIPE_BENCH_ITERATIONS", default=100_000, cast=int),
        "value": int(bench_value) if bench_value else None
    }

    config: FuncpipeConfig = {
        "log": log_config,
        "execution": execution_config,
        "bench": bench_config
    }

    # Apply any provided overrides
    if config_overrides:
        config = _deep_merge_config(config, config_overrides)

    return config


def _deep_merge_config(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge configuration dictionaries"""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge_config(result[key], value)
        else:
            result[key] = value
    return result
