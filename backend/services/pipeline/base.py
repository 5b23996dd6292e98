"""Abstract base class for all tailoring pipeline stages."""

from abc import ABC, abstractmethod
from typing import Any
import logging

from models.schemas.master_profile import MasterProfile
from models.schemas.taxonomy import SkillTaxonomy
from services.reference_data import ReferenceData

logger = logging.getLogger(__name__)


class BaseStageService(ABC):
    """Base class for pipeline stages.

    Stages are stateless apart from the read-only reference data they are
    built with, so one instance can serve concurrent jobs.

    Subclasses must implement:
        - stage_name: identifier used in logs and the registry
        - run(**kwargs): execute the stage and return a typed schema
    """

    stage_name: str = ""

    def __init__(self, reference: ReferenceData) -> None:
        self.reference = reference

    @property
    def taxonomy(self) -> SkillTaxonomy:
        return self.reference.taxonomy

    @property
    def profile(self) -> MasterProfile:
        return self.reference.profile

    @abstractmethod
    def run(self, **kwargs: Any) -> Any:
        """Execute the stage. Returns a Pydantic schema defined per stage."""
