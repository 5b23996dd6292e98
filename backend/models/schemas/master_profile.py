"""Master profile: the candidate's full, immutable skills and history."""

from pydantic import BaseModel, ConfigDict, Field

from models.schemas.taxonomy import SkillCategory


class ProfileSkill(BaseModel):
    """A skill the candidate actually has."""
    model_config = ConfigDict(frozen=True)

    name: str
    category: SkillCategory
    proficiency: int = Field(ge=0, le=100)
    years: float = Field(default=0.0, ge=0)
    covers: list[str] = []  # canonical taxonomy names this skill evidences


class Achievement(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    categories: list[SkillCategory] = []
    relevance: int = Field(default=50, ge=0, le=100)  # general relevance


class BulletVariant(BaseModel):
    """Pre-authored alternative bullets for a position, by focus area."""
    model_config = ConfigDict(frozen=True)

    focus: SkillCategory
    bullets: list[str]


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    company: str
    start: str  # YYYY-MM
    end: str | None = None  # None = current
    location: str = ""
    description: list[str] = []
    variants: list[BulletVariant] = []


class EducationEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    degree: str
    school: str
    year: str = ""
    categories: list[SkillCategory] = []


class Certification(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    categories: list[SkillCategory] = []


class MasterProfile(BaseModel):
    """Single source of truth for every tailored resume.

    Loaded once at startup and never mutated; generators may reorder and
    select from it but must not add to it.
    """
    model_config = ConfigDict(frozen=True)

    name: str
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    total_years_experience: float = Field(ge=0)
    skills: list[ProfileSkill]
    summaries: dict[str, str]
    achievements: list[Achievement]
    positions: list[Position] = []
    education: list[EducationEntry] = []
    certifications: list[Certification] = []
    cover_letters: dict[str, str] = {}

    def skill_by_name(self, name: str) -> ProfileSkill | None:
        lower = name.lower()
        for skill in self.skills:
            if skill.name.lower() == lower:
                return skill
        return None

    @property
    def skill_names(self) -> list[str]:
        return [s.name for s in self.skills]

    @property
    def achievement_texts(self) -> list[str]:
        return [a.text for a in self.achievements]
