"""Job description input and the analyzer's structured output."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, StrictStr, field_validator

from models.schemas.taxonomy import SkillCategory


class JobDescription(BaseModel):
    """A job posting as handed over by the host application."""
    model_config = ConfigDict(frozen=True)

    title: StrictStr
    company: StrictStr
    description: StrictStr
    salary: StrictStr | None = None
    location: StrictStr | None = None

    @field_validator("title", "company")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


class ExperienceLevel(str, Enum):
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    EXECUTIVE = "executive"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)


_LEVEL_ORDER = [
    ExperienceLevel.JUNIOR,
    ExperienceLevel.MID,
    ExperienceLevel.SENIOR,
    ExperienceLevel.EXECUTIVE,
]


class IndustryContext(BaseModel):
    """Dominant skill category; primary is None when nothing matched."""
    model_config = ConfigDict(frozen=True)

    primary: SkillCategory | None = None
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    scores: dict[SkillCategory, int] = {}


class IndustrySector(BaseModel):
    """Business sector guess (technology, finance, ...) from sector keywords."""
    model_config = ConfigDict(frozen=True)

    primary: str | None = None
    scores: dict[str, int] = {}


class CompanyContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    size: str = "unknown"  # startup, enterprise, mid-size, unknown
    culture: list[str] = []
    values: list[str] = []


class JobAnalysis(BaseModel):
    """Structured output of the job description analyzer.

    extracted_skills holds canonical taxonomy names per category, in
    taxonomy order. Every category is always present.
    """
    model_config = ConfigDict(frozen=True)

    job_title: str = ""
    company: str = ""
    extracted_skills: dict[SkillCategory, list[str]] = {}
    industry_context: IndustryContext = IndustryContext()
    experience_level: ExperienceLevel = ExperienceLevel.MID
    required_years: int = 0
    key_requirements: list[str] = []
    preferred_qualifications: list[str] = []
    keywords: list[str] = []
    industry_sector: IndustrySector = IndustrySector()
    company_context: CompanyContext = CompanyContext()

    @property
    def all_skills(self) -> list[str]:
        """Flattened, de-duplicated extracted skills in category order."""
        seen: list[str] = []
        for skills in self.extracted_skills.values():
            for skill in skills:
                if skill not in seen:
                    seen.append(skill)
        return seen

    @property
    def matched_categories(self) -> list[SkillCategory]:
        return [c for c, skills in self.extracted_skills.items() if skills]
