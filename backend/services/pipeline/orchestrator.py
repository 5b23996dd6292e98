"""Pipeline orchestrator: wires the tailoring stages together.

Flow:
    JobDescription
      └─ JobAnalyzerService.analyze()      → JobAnalysis
              ↓
         ResumeGeneratorService.generate() → ResumeContent
              ↓
         ResumeMatcherService.match()      → MatchResult (+ ThresholdValidation)
              ↓
         CoverLetterService.resolve()      → CoverLetter
                       ↓
         TailoringResult

Each stage only sees completed output of the stages before it. Runs share
nothing but the read-only ReferenceData, so independent jobs can run on a
thread pool without coordination.
"""

import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from models.responses import TailoringResult
from models.schemas.job_analysis import JobAnalysis, JobDescription
from models.schemas.match_result import MatchResult
from models.schemas.resume_content import ResumeContent
from services.pipeline.cover_letter import CoverLetterService
from services.pipeline.job_analyzer import JobAnalyzerService
from services.pipeline.resume_generator import ResumeGeneratorService
from services.pipeline.resume_matcher import SCORING_POLICY, ResumeMatcherService, ScoringPolicy
from services.reference_data import ReferenceData

logger = logging.getLogger(__name__)


class TailoringPipeline:
    """analyze → generate → match → cover letter over one ReferenceData bundle."""

    def __init__(self, reference: ReferenceData, policy: ScoringPolicy = SCORING_POLICY) -> None:
        self.reference = reference
        self.analyzer = JobAnalyzerService(reference)
        self.generator = ResumeGeneratorService(reference)
        self.matcher = ResumeMatcherService(reference, policy=policy)
        self.cover_letters = CoverLetterService(reference)

    def run(self, job: JobDescription | Mapping[str, Any]) -> TailoringResult:
        if not isinstance(job, JobDescription):
            job = JobDescription.model_validate(job)

        analysis = self.analyzer.analyze(job)
        resume = self.generator.generate(analysis)
        match = self.matcher.match(resume, analysis)
        threshold = self.matcher.validate_threshold(match)
        cover_letter = self.cover_letters.resolve(analysis, resume)

        logger.info(
            "Tailored %r at %s: score=%d submit=%s",
            job.title, job.company, match.total_score, threshold.can_submit,
        )
        return TailoringResult(
            analysis=analysis,
            resume=resume,
            match=match,
            threshold=threshold,
            cover_letter=cover_letter,
        )


def _pipeline(reference: ReferenceData | None) -> TailoringPipeline:
    if reference is None:
        from services.pipeline.registry import get_pipeline
        return get_pipeline()
    return TailoringPipeline(reference)


def analyze_job_description(
    description: str,
    title: str,
    company: str,
    *,
    salary: str | None = None,
    location: str | None = None,
    reference: ReferenceData | None = None,
) -> JobAnalysis:
    """Analyze one posting. Raises pydantic.ValidationError on malformed input."""
    job = JobDescription(
        title=title,
        company=company,
        description=description,
        salary=salary,
        location=location,
    )
    return _pipeline(reference).analyzer.analyze(job)


def generate_customized_resume(
    analysis: JobAnalysis, *, reference: ReferenceData | None = None
) -> ResumeContent:
    return _pipeline(reference).generator.generate(analysis)


def calculate_match_score(
    resume: ResumeContent,
    analysis: JobAnalysis,
    *,
    reference: ReferenceData | None = None,
) -> MatchResult:
    return _pipeline(reference).matcher.match(resume, analysis)


def tailor_batch(
    jobs: Iterable[JobDescription | Mapping[str, Any]],
    max_workers: int | None = None,
    *,
    reference: ReferenceData | None = None,
) -> list[TailoringResult]:
    """Run independent pipelines concurrently; results keep input order.

    The first failing job's exception propagates once all submitted jobs
    have finished.
    """
    if max_workers is None:
        from config import settings
        max_workers = settings.batch_max_workers

    pipeline = _pipeline(reference)
    jobs = list(jobs)
    if not jobs:
        return []

    logger.info("Tailoring batch of %d jobs with %d workers", len(jobs), max_workers)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(pipeline.run, jobs))
