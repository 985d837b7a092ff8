"""Materializer package: full refresh de la vista materializada de measurements.

Modules:
- config: MaterializerConfig dataclass
- models: Measurement, EnrichedMeasurement, DangerLevel, RunStatistics
- schemas: Decodificación de filas de event_store (pydantic)
- transformer: Latencia + nivel de peligro (función pura)
- db_queries: All SQL helper functions
- stores: Reader de event_store / writer de materialized_view
- progress: Observadores de progreso
- runner: Orchestrator (PipelineRunner.run)
- run_stats: Estadísticas del benchmark
- benchmark: Microbenchmark (BenchmarkHarness)
- report: Formato de consola
- cli: CLI entry point (main)
"""

from .config import MaterializerConfig
from .models import DangerLevel, EnrichedMeasurement, Measurement, RunStatistics
from .transformer import transform
from .runner import PipelineRunner
from .run_stats import aggregate
from .benchmark import BenchmarkHarness
from .cli import main

__all__ = [
    "MaterializerConfig",
    "DangerLevel",
    "Measurement",
    "EnrichedMeasurement",
    "RunStatistics",
    "transform",
    "PipelineRunner",
    "aggregate",
    "BenchmarkHarness",
    "main",
]
