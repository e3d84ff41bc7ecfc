"""Orchestration layer for generatebp."""

from .pipeline import GenerateBpPipeline, PipelineResult, build_classifier, run_pipeline

__all__ = [
    "GenerateBpPipeline",
    "PipelineResult",
    "build_classifier",
    "run_pipeline",
]
