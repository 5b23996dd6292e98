"""Lazy, process-wide default reference data and pipeline.

The reference data is loaded from the configured paths on first use and
then shared read-only. Callers that want a different profile or taxonomy
build their own TailoringPipeline instead of going through here.
"""

import logging
import threading
from typing import TYPE_CHECKING

from config import settings
from services.pipeline.resume_matcher import SCORING_POLICY
from services.reference_data import ReferenceData, load_reference_data

if TYPE_CHECKING:
    from services.pipeline.orchestrator import TailoringPipeline

logger = logging.getLogger(__name__)

_registry: dict[str, object] = {}
_lock = threading.Lock()


def get_reference_data() -> ReferenceData:
    """Default reference data, loaded on first access."""
    with _lock:
        if "reference" not in _registry:
            logger.info(
                "Loading reference data: taxonomy=%s profile=%s",
                settings.taxonomy_path, settings.master_profile_path,
            )
            _registry["reference"] = load_reference_data(
                settings.taxonomy_path, settings.master_profile_path,
            )
        return _registry["reference"]


def get_pipeline() -> "TailoringPipeline":
    """Default pipeline over the default reference data."""
    from services.pipeline.orchestrator import TailoringPipeline

    reference = get_reference_data()
    with _lock:
        if "pipeline" not in _registry:
            policy = SCORING_POLICY.model_copy(
                update={"match_threshold": settings.match_threshold}
            )
            _registry["pipeline"] = TailoringPipeline(reference, policy=policy)
        return _registry["pipeline"]


def preload() -> None:
    """Load reference data eagerly (e.g. at startup) so config errors surface early."""
    get_pipeline()


def clear() -> None:
    """Drop the cached defaults. Useful for testing."""
    with _lock:
        _registry.clear()
