"""Orchestration facade for the occurrence matching engine."""

from src.pipeline.orchestrator import OccurrenceMatcher

__all__ = [
    "OccurrenceMatcher",
]
