"""Match report between a tailored resume and a job analysis."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MatchFactor(str, Enum):
    SKILLS_MATCH = "skills_match"
    EXPERIENCE_RELEVANCE = "experience_relevance"
    INDUSTRY_ALIGNMENT = "industry_alignment"
    KEYWORD_DENSITY = "keyword_density"
    ACHIEVEMENTS_RELEVANCE = "achievements_relevance"


class QualityLevel(str, Enum):
    EXCELLENT = "excellent"
    STRONG = "strong"
    MODERATE = "moderate"
    WEAK = "weak"


class MatchResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_score: int = Field(ge=0, le=100)
    breakdown: dict[MatchFactor, float]
    quality_level: QualityLevel
    meets_threshold: bool
    recommendations: list[str] = []
    matched_skills: list[str] = []
    missing_skills: list[str] = []


class ThresholdValidation(BaseModel):
    """Submission gate summary the host uses before applying."""
    model_config = ConfigDict(frozen=True)

    is_valid: bool
    score: int
    threshold: int
    quality_level: QualityLevel
    can_submit: bool
    needs_improvement: bool
    recommendations: list[str] = []
