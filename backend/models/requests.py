from pydantic import BaseModel, Field, StrictStr

from models.schemas.job_analysis import JobAnalysis, JobDescription
from models.schemas.resume_content import ResumeContent


class JobPostingRequest(JobDescription):
    """JobDescription with request size limits; blank title/company still rejected (422)."""
    title: StrictStr = Field(..., max_length=300, description="Job title")
    company: StrictStr = Field(..., max_length=300, description="Hiring company")
    description: StrictStr = Field(..., max_length=20000, description="Job description text")
    salary: StrictStr | None = Field(default=None, max_length=200)
    location: StrictStr | None = Field(default=None, max_length=200)


class MatchRequest(BaseModel):
    resume: ResumeContent
    analysis: JobAnalysis
