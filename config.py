"""Configuration management for the property calculator."""

import json
import os
from dataclasses import dataclass, field, fields

from constants import BENCHMARK_RATES
from exceptions import ConfigurationError
from logging_setup import setup_logging


@dataclass(frozen=True)
class BenchmarkConfig:
    """Annual compounding rates for the alternative-investment comparison."""

    stocks: float = BENCHMARK_RATES["stocks"]
    reits: float = BENCHMARK_RATES["reits"]
    bonds: float = BENCHMARK_RATES["bonds"]
    fixed_deposit: float = BENCHMARK_RATES["fixed_deposit"]

    def to_dict(self) -> dict[str, float]:
        """Benchmark name to annual rate."""
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class CalculatorConfig:
    """Main configuration for the property calculator."""

    benchmarks: BenchmarkConfig = field(default_factory=BenchmarkConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "CalculatorConfig":
        """Create config from environment variables.

        ``PROPCALC_BENCHMARK_RATES`` is a JSON object overriding any of the
        benchmark rates, e.g. ``{"stocks": 0.07}``.
        """
        benchmarks = BenchmarkConfig()
        rates_str = os.getenv("PROPCALC_BENCHMARK_RATES")
        if rates_str:
            try:
                overrides = json.loads(rates_str)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"PROPCALC_BENCHMARK_RATES is not valid JSON: {e}") from e
            if not isinstance(overrides, dict):
                raise ConfigurationError("PROPCALC_BENCHMARK_RATES must be a JSON object")

            known = {f.name for f in fields(BenchmarkConfig)}
            unknown = set(overrides) - known
            if unknown:
                raise ConfigurationError(f"Unknown benchmark(s): {', '.join(sorted(unknown))}")
            try:
                benchmarks = BenchmarkConfig(**{k: float(v) for k, v in overrides.items()})
            except (TypeError, ValueError) as e:
                raise ConfigurationError(f"Benchmark rates must be numeric: {e}") from e

        log_format = os.getenv("PROPCALC_LOG_FORMAT", "standard")
        if log_format not in ("standard", "json"):
            raise ConfigurationError(f"Unknown log format: {log_format!r}")

        return cls(
            benchmarks=benchmarks,
            log_level=os.getenv("PROPCALC_LOG_LEVEL", "INFO"),
            log_format=log_format,
        )

    def configure_logging(self) -> None:
        """Apply this config's log level and format to the calculator loggers."""
        setup_logging(level=self.log_level, format_type=self.log_format)
