"""Materializer configuration."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MaterializerConfig:
    """Configuración de una invocación del materializer."""
    command: str  # run | benchmark | menu
    iterations: int
    progress_every: int
    json_output: bool
    init_schema: bool
