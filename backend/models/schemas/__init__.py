"""Pydantic contracts between the tailoring pipeline stages."""

from models.schemas.taxonomy import SkillCategory, SkillTaxonomy, TaxonomyEntry
from models.schemas.master_profile import MasterProfile
from models.schemas.job_analysis import ExperienceLevel, JobAnalysis, JobDescription
from models.schemas.resume_content import ResumeContent, TemplateType
from models.schemas.match_result import MatchFactor, MatchResult, QualityLevel
from models.schemas.cover_letter import CoverLetter

__all__ = [
    "SkillCategory",
    "SkillTaxonomy",
    "TaxonomyEntry",
    "MasterProfile",
    "ExperienceLevel",
    "JobAnalysis",
    "JobDescription",
    "ResumeContent",
    "TemplateType",
    "MatchFactor",
    "MatchResult",
    "QualityLevel",
    "CoverLetter",
]
