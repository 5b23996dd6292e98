"""Stage 1: Job description analyzer.

Turns a raw posting into a JobAnalysis: taxonomy skills per category, the
dominant category, seniority, key requirement lines, scoring keywords and
company signals. Pure text processing over the skill taxonomy; the same
posting always yields the same analysis.
"""

import logging
from typing import Any

from models.schemas.job_analysis import JobAnalysis, JobDescription
from services import section_parser
from services.keyword_extractor import build_keywords
from services.pipeline.base import BaseStageService
from services.skill_extractor import (
    contains_term,
    detect_industry,
    detect_sector,
    extract_skills,
    normalize_text,
)

logger = logging.getLogger(__name__)


class JobAnalyzerService(BaseStageService):
    stage_name = "job_analyzer"

    def run(self, **kwargs: Any) -> JobAnalysis:
        return self.analyze(kwargs["job"])

    def analyze(self, job: JobDescription) -> JobAnalysis:
        """Analyze a validated posting.

        Raises pydantic.ValidationError upstream (in JobDescription) for
        non-string fields or a blank title/company; an empty description is
        valid and yields an analysis with no skills.
        """
        # Skills come from the posting body only; the title feeds seniority
        extracted = extract_skills(job.description, self.taxonomy)
        industry = detect_industry(extracted)
        sector = detect_sector(job.description, job.company, self.taxonomy.industry_sectors)

        requirements, preferred = section_parser.extract_requirement_lines(job.description)
        level = section_parser.determine_experience_level(job.description, job.title)
        years = section_parser.extract_required_years(job.description)

        skills = [s for names in extracted.values() for s in names]
        sector_terms = (
            self.taxonomy.industry_sectors.get(sector.primary, []) if sector.primary else []
        )
        # Only sector vocabulary the posting actually uses
        normalized = normalize_text(job.description)
        sector_terms = [t for t in sector_terms if contains_term(normalized, t)]
        keywords = build_keywords(skills, sector_terms, requirements)

        analysis = JobAnalysis(
            job_title=job.title,
            company=job.company,
            extracted_skills=extracted,
            industry_context=industry,
            experience_level=level,
            required_years=years,
            key_requirements=requirements,
            preferred_qualifications=preferred,
            keywords=keywords,
            industry_sector=sector,
            company_context=section_parser.analyze_company_context(job.description, job.company),
        )

        logger.info(
            "Analyzed %r at %s: %d skills, primary=%s (%.2f), level=%s",
            job.title, job.company, len(analysis.all_skills),
            industry.primary.value if industry.primary else None,
            industry.confidence, level.value,
        )
        return analysis
