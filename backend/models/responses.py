from pydantic import BaseModel

from models.schemas.cover_letter import CoverLetter
from models.schemas.job_analysis import JobAnalysis
from models.schemas.match_result import MatchResult, ThresholdValidation
from models.schemas.resume_content import ResumeContent


class HealthResponse(BaseModel):
    status: str = "ok"
    candidate: str = ""
    taxonomy_skills: int = 0


class TailoringResult(BaseModel):
    """Everything one pipeline run produces for a job posting."""
    analysis: JobAnalysis
    resume: ResumeContent
    match: MatchResult
    threshold: ThresholdValidation
    cover_letter: CoverLetter
