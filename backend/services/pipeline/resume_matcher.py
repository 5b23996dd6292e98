"""Stage 3: Resume-job matcher.

Weighted five-factor score of a tailored resume against the job analysis.
All weights, bands and thresholds live in SCORING_POLICY; the scoring
functions below only compute factor values in [0, 1].
"""

import logging
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from models.schemas.job_analysis import ExperienceLevel, JobAnalysis
from models.schemas.match_result import (
    MatchFactor,
    MatchResult,
    QualityLevel,
    ThresholdValidation,
)
from models.schemas.resume_content import TEMPLATE_CATEGORIES, ResumeContent
from services.keyword_extractor import (
    compute_keyword_coverage,
    has_term_overlap,
    match_keywords,
    significant_terms,
)
from services.pipeline.base import BaseStageService
from services.skill_extractor import compute_skill_overlap, normalize_text

logger = logging.getLogger(__name__)


class ScoringPolicy(BaseModel):
    """Every tunable number the matcher uses."""
    model_config = ConfigDict(frozen=True)

    weights: dict[MatchFactor, float]
    # (minimum score, level), highest band first; below all bands is weak
    quality_bands: tuple[tuple[int, QualityLevel], ...]
    match_threshold: int = 80
    recommendation_floor: float = 0.7
    industry_mismatch_credit: float = 0.5
    level_min_years: dict[ExperienceLevel, int]

    @model_validator(mode="after")
    def _check_weights(self) -> "ScoringPolicy":
        missing = [f.value for f in MatchFactor if f not in self.weights]
        if missing:
            raise ValueError(f"missing weights for: {', '.join(missing)}")
        if any(w < 0 for w in self.weights.values()):
            raise ValueError("factor weights must be non-negative")
        if not math.isclose(math.fsum(self.weights.values()), 1.0, abs_tol=1e-9):
            raise ValueError("factor weights must sum to 1.0")
        return self

    def quality_for(self, score: int) -> QualityLevel:
        for minimum, level in self.quality_bands:
            if score >= minimum:
                return level
        return QualityLevel.WEAK

    @property
    def excellent_score(self) -> int:
        return self.quality_bands[0][0]


SCORING_POLICY = ScoringPolicy(
    weights={
        MatchFactor.SKILLS_MATCH: 0.35,
        MatchFactor.EXPERIENCE_RELEVANCE: 0.25,
        MatchFactor.INDUSTRY_ALIGNMENT: 0.20,
        MatchFactor.KEYWORD_DENSITY: 0.10,
        MatchFactor.ACHIEVEMENTS_RELEVANCE: 0.10,
    },
    quality_bands=(
        (90, QualityLevel.EXCELLENT),
        (80, QualityLevel.STRONG),
        (65, QualityLevel.MODERATE),
    ),
    match_threshold=80,
    recommendation_floor=0.7,
    industry_mismatch_credit=0.5,
    level_min_years={
        ExperienceLevel.JUNIOR: 0,
        ExperienceLevel.MID: 2,
        ExperienceLevel.SENIOR: 5,
        ExperienceLevel.EXECUTIVE: 10,
    },
)

RECOMMENDATIONS: dict[MatchFactor, str] = {
    MatchFactor.SKILLS_MATCH: "Skills match is low: surface more profile skills that cover {detail}",
    MatchFactor.EXPERIENCE_RELEVANCE: "Experience relevance is low: the role asks for {detail}",
    MatchFactor.INDUSTRY_ALIGNMENT: "Industry alignment is low: emphasize {detail} experience",
    MatchFactor.KEYWORD_DENSITY: "Keyword density is low: add more {detail} keywords",
    MatchFactor.ACHIEVEMENTS_RELEVANCE: "Achievements relevance is low: highlight achievements about {detail}",
}


def resume_search_text(resume: ResumeContent) -> str:
    """All string values of the resume content joined into one searchable text.

    Metadata is left out: it echoes the job title and describes the
    customizations rather than being resume content.
    """
    parts: list[str] = []

    def collect(value: Any) -> None:
        if isinstance(value, str):
            parts.append(value)
        elif isinstance(value, dict):
            for v in value.values():
                collect(v)
        elif isinstance(value, (list, tuple)):
            for v in value:
                collect(v)

    collect(resume.model_dump(mode="json", exclude={"metadata"}))
    return normalize_text(" ".join(parts))


class ResumeMatcherService(BaseStageService):
    stage_name = "resume_matcher"

    def __init__(self, reference, policy: ScoringPolicy = SCORING_POLICY) -> None:
        super().__init__(reference)
        self.policy = policy

    def run(self, **kwargs: Any) -> MatchResult:
        return self.match(kwargs["resume"], kwargs["analysis"])

    def match(self, resume: ResumeContent, analysis: JobAnalysis) -> MatchResult:
        skills_score, matched, missing = self._skills_match(resume, analysis)
        breakdown: dict[MatchFactor, float] = {
            MatchFactor.SKILLS_MATCH: skills_score,
            MatchFactor.EXPERIENCE_RELEVANCE: self._experience_relevance(analysis),
            MatchFactor.INDUSTRY_ALIGNMENT: self._industry_alignment(resume, analysis),
            MatchFactor.KEYWORD_DENSITY: self._keyword_density(resume, analysis),
            MatchFactor.ACHIEVEMENTS_RELEVANCE: self._achievements_relevance(resume, analysis),
        }
        breakdown = {f: round(min(max(v, 0.0), 1.0), 4) for f, v in breakdown.items()}

        weighted = math.fsum(self.policy.weights[f] * v for f, v in breakdown.items())
        total = max(0, min(100, round(100 * weighted)))
        quality = self.policy.quality_for(total)
        meets = total >= self.policy.match_threshold

        result = MatchResult(
            total_score=total,
            breakdown=breakdown,
            quality_level=quality,
            meets_threshold=meets,
            recommendations=self._recommendations(breakdown, total, analysis, missing),
            matched_skills=matched,
            missing_skills=missing,
        )
        logger.info(
            "Match score %d (%s) for %s: %s",
            total, quality.value, resume.metadata.version,
            {f.value: v for f, v in breakdown.items()},
        )
        return result

    # ---- factors -----------------------------------------------------------

    def _skills_match(
        self, resume: ResumeContent, analysis: JobAnalysis
    ) -> tuple[float, list[str], list[str]]:
        covered: set[str] = set()
        for name in resume.all_skills:
            covered.add(normalize_text(name))
            skill = self.profile.skill_by_name(name)
            if skill is not None:
                covered.update(skill.covers)
        return compute_skill_overlap(analysis.all_skills, covered, resume.all_skills)

    def required_years(self, analysis: JobAnalysis) -> int:
        return max(
            analysis.required_years,
            self.policy.level_min_years.get(analysis.experience_level, 0),
        )

    def _experience_relevance(self, analysis: JobAnalysis) -> float:
        required = self.required_years(analysis)
        if required <= 0:
            return 1.0
        return min(self.profile.total_years_experience / required, 1.0)

    def _industry_alignment(self, resume: ResumeContent, analysis: JobAnalysis) -> float:
        primary = analysis.industry_context.primary
        if primary is None:
            return 0.0
        if primary in TEMPLATE_CATEGORIES[resume.metadata.template_type]:
            return 1.0
        # Confident classification still earns partial credit on a template mismatch
        return self.policy.industry_mismatch_credit * analysis.industry_context.confidence

    def _keyword_density(self, resume: ResumeContent, analysis: JobAnalysis) -> float:
        matched, missing = match_keywords(resume_search_text(resume), analysis.keywords)
        logger.debug("Keywords matched=%d missing=%s", len(matched), missing)
        return compute_keyword_coverage(matched, missing)

    def _achievements_relevance(self, resume: ResumeContent, analysis: JobAnalysis) -> float:
        terms = {t for line in analysis.key_requirements for t in significant_terms(line)}
        if not terms or not resume.achievements:
            return 0.0
        hits = sum(1 for a in resume.achievements if has_term_overlap(a, terms))
        return hits / len(resume.achievements)

    # ---- recommendations ---------------------------------------------------

    def _recommendations(
        self,
        breakdown: dict[MatchFactor, float],
        total: int,
        analysis: JobAnalysis,
        missing_skills: list[str],
    ) -> list[str]:
        primary = analysis.industry_context.primary
        category = primary.value if primary else "role-specific"
        details = {
            MatchFactor.SKILLS_MATCH: ", ".join(missing_skills[:5]) or "the listed skills",
            MatchFactor.EXPERIENCE_RELEVANCE: (
                f"{self.required_years(analysis)}+ years at {analysis.experience_level.value} level"
            ),
            MatchFactor.INDUSTRY_ALIGNMENT: category,
            MatchFactor.KEYWORD_DENSITY: category,
            MatchFactor.ACHIEVEMENTS_RELEVANCE: "the key requirements",
        }

        recs = [
            RECOMMENDATIONS[factor].format(detail=details[factor])
            for factor in MatchFactor
            if breakdown[factor] < self.policy.recommendation_floor
        ]
        if total < self.policy.match_threshold:
            recs.append(
                f"Overall score {total} is below the {self.policy.match_threshold} "
                f"threshold; review this application before submitting"
            )
        return recs

    def validate_threshold(self, result: MatchResult) -> ThresholdValidation:
        """Submission gate: can the host apply with this resume?"""
        threshold = self.policy.match_threshold
        is_valid = result.total_score >= threshold
        return ThresholdValidation(
            is_valid=is_valid,
            score=result.total_score,
            threshold=threshold,
            quality_level=result.quality_level,
            can_submit=is_valid,
            needs_improvement=result.total_score < self.policy.excellent_score,
            recommendations=result.recommendations,
        )
