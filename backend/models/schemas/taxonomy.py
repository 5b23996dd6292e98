"""Skill taxonomy: categorized vocabulary the analyzer matches against."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class SkillCategory(str, Enum):
    """Fixed set of skill categories."""
    TECHNICAL = "technical"
    SEO = "seo"
    MARKETING = "marketing"
    LEADERSHIP = "leadership"
    ANALYTICS = "analytics"


# Tie-break order wherever categories compete on equal counts
CATEGORY_PRIORITY: tuple[SkillCategory, ...] = (
    SkillCategory.TECHNICAL,
    SkillCategory.SEO,
    SkillCategory.MARKETING,
    SkillCategory.LEADERSHIP,
    SkillCategory.ANALYTICS,
)


class TaxonomyEntry(BaseModel):
    """A single skill with its match rules."""
    model_config = ConfigDict(frozen=True)

    name: str  # canonical, lower-case
    display_name: str
    synonyms: list[str] = []

    @field_validator("name")
    @classmethod
    def _lower_name(cls, v: str) -> str:
        v = " ".join(v.lower().split())
        if not v:
            raise ValueError("taxonomy entry name must not be empty")
        return v

    @field_validator("synonyms")
    @classmethod
    def _lower_synonyms(cls, v: list[str]) -> list[str]:
        return [" ".join(s.lower().split()) for s in v if s.strip()]

    @property
    def terms(self) -> list[str]:
        """Canonical name followed by synonyms."""
        return [self.name, *self.synonyms]


class SkillTaxonomy(BaseModel):
    """Skill vocabulary by category plus the industry sector keyword table."""
    model_config = ConfigDict(frozen=True)

    categories: dict[SkillCategory, list[TaxonomyEntry]]
    industry_sectors: dict[str, list[str]] = {}

    @field_validator("categories")
    @classmethod
    def _all_categories_present(
        cls, v: dict[SkillCategory, list[TaxonomyEntry]]
    ) -> dict[SkillCategory, list[TaxonomyEntry]]:
        missing = [c.value for c in SkillCategory if c not in v]
        if missing:
            raise ValueError(f"taxonomy is missing categories: {', '.join(missing)}")
        # Re-key in priority order so iteration is stable
        return {c: v[c] for c in CATEGORY_PRIORITY}

    def entries(self, category: SkillCategory) -> list[TaxonomyEntry]:
        return self.categories.get(category, [])

    def all_names(self) -> set[str]:
        return {e.name for entries in self.categories.values() for e in entries}

    def display_name(self, name: str) -> str:
        """Display name for a canonical skill name (falls back to the name)."""
        for entries in self.categories.values():
            for entry in entries:
                if entry.name == name:
                    return entry.display_name
        return name
