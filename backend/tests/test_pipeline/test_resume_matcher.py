"""Tests for Stage 3: resume-job matcher."""

import math

import pytest
from pydantic import ValidationError

from models.schemas.job_analysis import ExperienceLevel, IndustryContext, JobDescription
from models.schemas.match_result import MatchFactor, QualityLevel
from models.schemas.taxonomy import SkillCategory
from services.pipeline.job_analyzer import JobAnalyzerService
from services.pipeline.resume_generator import ResumeGeneratorService
from services.pipeline.resume_matcher import (
    SCORING_POLICY,
    ResumeMatcherService,
    ScoringPolicy,
    resume_search_text,
)


class TestScoringPolicy:
    def test_weights_sum_to_one(self):
        assert math.isclose(math.fsum(SCORING_POLICY.weights.values()), 1.0)
        assert set(SCORING_POLICY.weights) == set(MatchFactor)

    def test_reference_weights(self):
        assert SCORING_POLICY.weights[MatchFactor.SKILLS_MATCH] == 0.35
        assert SCORING_POLICY.weights[MatchFactor.EXPERIENCE_RELEVANCE] == 0.25
        assert SCORING_POLICY.weights[MatchFactor.INDUSTRY_ALIGNMENT] == 0.20

    def test_rejects_weights_not_summing_to_one(self):
        weights = {**SCORING_POLICY.weights, MatchFactor.SKILLS_MATCH: 0.5}
        with pytest.raises(ValidationError, match="sum to 1.0"):
            ScoringPolicy(**{**SCORING_POLICY.model_dump(), "weights": weights})

    def test_rejects_missing_factor(self):
        weights = dict(SCORING_POLICY.weights)
        del weights[MatchFactor.KEYWORD_DENSITY]
        with pytest.raises(ValidationError, match="keyword_density"):
            ScoringPolicy(**{**SCORING_POLICY.model_dump(), "weights": weights})

    @pytest.mark.parametrize("score,level", [
        (100, QualityLevel.EXCELLENT),
        (90, QualityLevel.EXCELLENT),
        (89, QualityLevel.STRONG),
        (80, QualityLevel.STRONG),
        (79, QualityLevel.MODERATE),
        (65, QualityLevel.MODERATE),
        (64, QualityLevel.WEAK),
        (0, QualityLevel.WEAK),
    ])
    def test_quality_bands(self, score, level):
        assert SCORING_POLICY.quality_for(score) == level


class TestResumeMatcher:
    @pytest.fixture(autouse=True)
    def _svc(self, reference):
        self.reference = reference
        self.analyzer = JobAnalyzerService(reference)
        self.generator = ResumeGeneratorService(reference)
        self.svc = ResumeMatcherService(reference)

    def _run(self, job):
        analysis = self.analyzer.analyze(job)
        resume = self.generator.generate(analysis)
        return analysis, resume, self.svc.match(resume, analysis)

    def test_seo_posting_scores_strong(self, seo_job):
        _, _, result = self._run(seo_job)
        assert result.breakdown[MatchFactor.SKILLS_MATCH] == 1.0
        assert result.breakdown[MatchFactor.EXPERIENCE_RELEVANCE] == 1.0
        assert result.breakdown[MatchFactor.INDUSTRY_ALIGNMENT] == 1.0
        assert result.total_score >= 80
        assert result.meets_threshold
        assert result.missing_skills == []

    def test_generic_posting_scores_weak(self, generic_job):
        """No recognizable skills: low score and a weak tier."""
        _, _, result = self._run(generic_job)
        assert result.total_score < 50
        assert result.quality_level == QualityLevel.WEAK
        assert not result.meets_threshold
        assert result.breakdown[MatchFactor.SKILLS_MATCH] == 0.0
        assert result.breakdown[MatchFactor.INDUSTRY_ALIGNMENT] == 0.0
        assert result.breakdown[MatchFactor.KEYWORD_DENSITY] == 0.0

    def test_skill_set_equal_to_top_profile_skills(self):
        job = JobDescription(
            title="Full-Stack Developer",
            company="Tallship",
            description="You will work daily with JavaScript, Python, React and Node.js.",
        )
        _, _, result = self._run(job)
        assert result.breakdown[MatchFactor.SKILLS_MATCH] == 1.0
        assert result.matched_skills == ["javascript", "python", "react", "node.js"]

    def test_scores_bounded_and_threshold_consistent(self, seo_job, tech_job, hybrid_job, generic_job):
        for job in (seo_job, tech_job, hybrid_job, generic_job):
            _, _, result = self._run(job)
            assert 0 <= result.total_score <= 100
            assert result.meets_threshold == (result.total_score >= 80)
            assert all(0.0 <= v <= 1.0 for v in result.breakdown.values())
            assert set(result.breakdown) == set(MatchFactor)

    def test_total_is_weighted_sum(self, tech_job):
        _, _, result = self._run(tech_job)
        expected = round(100 * math.fsum(
            SCORING_POLICY.weights[f] * v for f, v in result.breakdown.items()
        ))
        assert result.total_score == expected

    def test_missing_skills_reported(self):
        job = JobDescription(
            title="Data Analyst",
            company="Numbers Inc",
            description="Requirements:\n- Tableau and Power BI dashboards\n- Excel",
        )
        _, _, result = self._run(job)
        assert "tableau" in result.missing_skills
        assert "power bi" in result.missing_skills
        assert "dashboard" in result.matched_skills
        assert result.breakdown[MatchFactor.SKILLS_MATCH] < 0.7
        assert any(r.startswith("Skills match is low") for r in result.recommendations)

    def test_industry_partial_credit_on_template_mismatch(self, tech_job):
        analysis, resume, _ = self._run(tech_job)
        skewed = analysis.model_copy(update={
            "industry_context": IndustryContext(primary=SkillCategory.MARKETING, confidence=0.6),
        })
        result = self.svc.match(resume, skewed)
        assert result.breakdown[MatchFactor.INDUSTRY_ALIGNMENT] == pytest.approx(0.3)

    def test_experience_relevance_scaled(self, reference, seo_job):
        profile = reference.profile.model_copy(update={"total_years_experience": 3})
        svc = ResumeMatcherService(reference.model_copy(update={"profile": profile}))
        analysis = self.analyzer.analyze(seo_job)
        result = svc.match(self.generator.generate(analysis), analysis)
        assert result.breakdown[MatchFactor.EXPERIENCE_RELEVANCE] == 0.6

    def test_required_years_uses_level_minimum(self, seo_job):
        analysis = self.analyzer.analyze(seo_job)
        executive = analysis.model_copy(update={
            "experience_level": ExperienceLevel.EXECUTIVE, "required_years": 0,
        })
        assert self.svc.required_years(executive) == 10

    def test_recommendations_include_threshold_message(self, generic_job):
        _, _, result = self._run(generic_job)
        assert any("below the 80 threshold" in r for r in result.recommendations)

    def test_no_recommendations_for_strong_factors(self, seo_job):
        _, _, result = self._run(seo_job)
        assert not any(r.startswith("Skills match") for r in result.recommendations)
        assert not any(r.startswith("Industry alignment") for r in result.recommendations)

    def test_deterministic(self, hybrid_job):
        first = self._run(hybrid_job)[2]
        second = self._run(hybrid_job)[2]
        assert first.model_dump_json() == second.model_dump_json()

    def test_search_text_excludes_metadata(self, seo_job):
        _, resume, _ = self._run(seo_job)
        text = resume_search_text(resume)
        assert "google analytics" in text
        assert resume.metadata.version.lower() not in text


class TestValidateThreshold:
    @pytest.fixture(autouse=True)
    def _svc(self, reference):
        self.analyzer = JobAnalyzerService(reference)
        self.generator = ResumeGeneratorService(reference)
        self.svc = ResumeMatcherService(reference)

    def test_passing_score(self, seo_job):
        analysis = self.analyzer.analyze(seo_job)
        result = self.svc.match(self.generator.generate(analysis), analysis)
        gate = self.svc.validate_threshold(result)
        assert gate.is_valid and gate.can_submit
        assert gate.threshold == 80
        assert gate.score == result.total_score
        assert gate.needs_improvement == (result.total_score < 90)

    def test_failing_score(self, generic_job):
        analysis = self.analyzer.analyze(generic_job)
        result = self.svc.match(self.generator.generate(analysis), analysis)
        gate = self.svc.validate_threshold(result)
        assert not gate.is_valid
        assert not gate.can_submit
        assert gate.needs_improvement
        assert gate.recommendations == result.recommendations

    def test_custom_threshold(self, reference, generic_job):
        policy = SCORING_POLICY.model_copy(update={"match_threshold": 20})
        svc = ResumeMatcherService(reference, policy=policy)
        analysis = self.analyzer.analyze(generic_job)
        result = svc.match(self.generator.generate(analysis), analysis)
        assert result.meets_threshold
        assert svc.validate_threshold(result).can_submit
