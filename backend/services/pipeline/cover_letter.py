"""Stage 4: Cover letter resolver.

Picks the profile's cover letter for the resume's template type (hybrid as
fallback) and fills its named placeholders.
"""

import logging
from typing import Any

from models.schemas.cover_letter import CoverLetter
from models.schemas.job_analysis import JobAnalysis
from models.schemas.resume_content import ResumeContent, TemplateType
from services.pipeline.base import BaseStageService
from services.reference_data import ReferenceDataError

logger = logging.getLogger(__name__)

KEY_SKILL_COUNT = 3


def _format_years(years: float) -> str:
    return str(int(years)) if float(years).is_integer() else f"{years:g}"


def _join_skills(names: list[str]) -> str:
    if len(names) <= 1:
        return "".join(names)
    return f"{', '.join(names[:-1])} and {names[-1]}"


class CoverLetterService(BaseStageService):
    stage_name = "cover_letter"

    def run(self, **kwargs: Any) -> CoverLetter:
        return self.resolve(kwargs["analysis"], kwargs["resume"])

    def resolve(self, analysis: JobAnalysis, resume: ResumeContent) -> CoverLetter:
        template_type = resume.metadata.template_type
        letters = self.profile.cover_letters
        text = letters.get(template_type.value)
        if text is None:
            text = letters.get(TemplateType.HYBRID.value)
        if text is None:
            raise ReferenceDataError(
                f"No cover letter template for {template_type.value!r} and no hybrid fallback"
            )

        key_skills = resume.skills.primary[:KEY_SKILL_COUNT] or resume.skills.secondary[:KEY_SKILL_COUNT]
        fields = {
            "candidate_name": self.profile.name,
            "job_title": analysis.job_title,
            "company": analysis.company,
            "key_skills": _join_skills(key_skills),
            "years": _format_years(self.profile.total_years_experience),
            "location": self.profile.location,
        }
        try:
            body = text.format_map(fields)
        except KeyError as e:
            raise ReferenceDataError(
                f"Cover letter template {template_type.value!r} uses unknown placeholder {e}"
            ) from e
        except (ValueError, IndexError) as e:
            raise ReferenceDataError(
                f"Malformed cover letter template {template_type.value!r}: {e}"
            ) from e

        logger.info("Resolved %s cover letter for %s", template_type.value, analysis.company)
        return CoverLetter(
            template_type=template_type,
            subject=f"Application for {analysis.job_title} at {analysis.company}",
            body=body,
        )
