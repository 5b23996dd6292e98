"""Shared dependencies for API routes."""

from services.pipeline.orchestrator import TailoringPipeline
from services.pipeline.registry import get_pipeline as _get_default_pipeline


def get_pipeline() -> TailoringPipeline:
    return _get_default_pipeline()
