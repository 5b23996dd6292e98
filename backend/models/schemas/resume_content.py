"""Tailored resume content produced by the resume generator."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from models.schemas.taxonomy import SkillCategory


class TemplateType(str, Enum):
    TECHNICAL = "technical"
    SEO = "seo"
    MARKETING = "marketing"
    LEADERSHIP = "leadership"
    HYBRID = "hybrid"


# Skill categories each template is built to showcase
TEMPLATE_CATEGORIES: dict[TemplateType, frozenset[SkillCategory]] = {
    TemplateType.TECHNICAL: frozenset({SkillCategory.TECHNICAL, SkillCategory.ANALYTICS}),
    TemplateType.SEO: frozenset({SkillCategory.SEO}),
    TemplateType.MARKETING: frozenset({SkillCategory.MARKETING}),
    TemplateType.LEADERSHIP: frozenset({SkillCategory.LEADERSHIP}),
    TemplateType.HYBRID: frozenset(SkillCategory),
}

CATEGORY_TEMPLATE: dict[SkillCategory, TemplateType] = {
    SkillCategory.TECHNICAL: TemplateType.TECHNICAL,
    SkillCategory.SEO: TemplateType.SEO,
    SkillCategory.MARKETING: TemplateType.MARKETING,
    SkillCategory.LEADERSHIP: TemplateType.LEADERSHIP,
    SkillCategory.ANALYTICS: TemplateType.TECHNICAL,
}


class ResumeHeader(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""


class SkillLists(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary: list[str] = []
    secondary: list[str] = []


class PositionRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    company: str
    start: str
    end: str | None = None
    location: str = ""
    description: list[str] = []
    customized: bool = False


class ResumeMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    template_type: TemplateType
    version: str
    job_title: str = ""
    company: str = ""
    customizations: list[str] = []


class ResumeContent(BaseModel):
    """A resume tailored to one job, derived entirely from the master profile."""
    model_config = ConfigDict(frozen=True)

    header: ResumeHeader
    summary: str
    skills: SkillLists = SkillLists()
    achievements: list[str] = []
    work_experience: list[PositionRecord] = []
    education: list[str] = []
    certifications: list[str] = []
    metadata: ResumeMetadata

    @property
    def all_skills(self) -> list[str]:
        return [*self.skills.primary, *self.skills.secondary]
