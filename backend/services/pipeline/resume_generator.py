"""Stage 2: Dynamic resume generator.

Builds a ResumeContent for one JobAnalysis by selecting from and reordering
the master profile:

    JobAnalysis
      ├─ select_template()           → TemplateType
      ├─ _prioritize_skills()        → primary / secondary skill lists
      ├─ _tailor_summary()           → base summary + spliced top skills
      ├─ _select_achievements()      → 3-4 achievements by keyword overlap
      └─ _rewrite_experience()       → pre-authored bullet variants, 2 latest roles

Nothing here invents content: every skill, achievement and bullet is taken
from the profile as authored.
"""

import hashlib
import logging
import re
from typing import Any

from models.schemas.job_analysis import JobAnalysis
from models.schemas.master_profile import Achievement, BulletVariant, Position, ProfileSkill
from models.schemas.resume_content import (
    CATEGORY_TEMPLATE,
    TEMPLATE_CATEGORIES,
    PositionRecord,
    ResumeContent,
    ResumeHeader,
    ResumeMetadata,
    SkillLists,
    TemplateType,
)
from models.schemas.taxonomy import CATEGORY_PRIORITY, SkillCategory
from services.pipeline.base import BaseStageService
from services.skill_extractor import contains_term, normalize_text

logger = logging.getLogger(__name__)

HYBRID_MIN_CATEGORIES = 3
HYBRID_MIN_SKILLS = 8  # strictly more than this many skills

MAX_SUMMARY_LENGTH = 600
MAX_SUMMARY_SKILLS = 4

MIN_ACHIEVEMENTS = 3
MAX_ACHIEVEMENTS = 4

REWRITE_POSITIONS = 2


def select_template(analysis: JobAnalysis) -> TemplateType:
    """Map the analysis to a template type.

    Broad postings (3+ categories, 9+ skills) and postings with no skills at
    all get the hybrid template; otherwise the category with the most skills
    wins, ties broken by CATEGORY_PRIORITY.
    """
    counts = {c: len(analysis.extracted_skills.get(c, [])) for c in CATEGORY_PRIORITY}
    total = sum(counts.values())
    if total == 0:
        return TemplateType.HYBRID

    non_empty = sum(1 for n in counts.values() if n)
    if non_empty >= HYBRID_MIN_CATEGORIES and total > HYBRID_MIN_SKILLS:
        return TemplateType.HYBRID

    top = max(CATEGORY_PRIORITY, key=lambda c: counts[c])
    return CATEGORY_TEMPLATE[top]


def _join_names(names: list[str]) -> str:
    if len(names) <= 1:
        return "".join(names)
    return f"{', '.join(names[:-1])} and {names[-1]}"


def _skill_is_wanted(skill: ProfileSkill, wanted: set[str]) -> bool:
    return normalize_text(skill.name) in wanted or any(c in wanted for c in skill.covers)


def _keyword_overlap(text: str, keywords: list[str]) -> int:
    normalized = normalize_text(text)
    return sum(1 for kw in keywords if contains_term(normalized, kw))


def build_version(analysis: JobAnalysis) -> str:
    """Deterministic version tag: <Title>_<Company>_<analysis digest>."""
    title = re.sub(r"[^A-Za-z0-9]", "", analysis.job_title)[:20]
    company = re.sub(r"[^A-Za-z0-9]", "", analysis.company)[:20]
    digest = hashlib.sha1(analysis.model_dump_json().encode("utf-8")).hexdigest()[:8]
    return f"{title}_{company}_{digest}"


class ResumeGeneratorService(BaseStageService):
    stage_name = "resume_generator"

    def run(self, **kwargs: Any) -> ResumeContent:
        return self.generate(kwargs["analysis"])

    def generate(self, analysis: JobAnalysis) -> ResumeContent:
        template = select_template(analysis)
        customizations: list[str] = [self._describe_template(template, analysis)]

        skills = self._prioritize_skills(analysis, customizations)
        summary = self._tailor_summary(template, skills.primary, customizations)
        achievements = self._select_achievements(analysis, customizations)
        experience = self._rewrite_experience(template, analysis, customizations)

        profile = self.profile
        categories = TEMPLATE_CATEGORIES[template]
        education = [
            f"{e.degree}, {e.school}" + (f" ({e.year})" if e.year else "")
            for e in self._filter_by_categories(profile.education, categories)
        ]
        certifications = [
            c.name for c in self._filter_by_categories(profile.certifications, categories)
        ]

        resume = ResumeContent(
            header=ResumeHeader(
                name=profile.name,
                email=profile.email,
                phone=profile.phone,
                location=profile.location,
                linkedin=profile.linkedin,
            ),
            summary=summary,
            skills=skills,
            achievements=achievements,
            work_experience=experience,
            education=education,
            certifications=certifications,
            metadata=ResumeMetadata(
                template_type=template,
                version=build_version(analysis),
                job_title=analysis.job_title,
                company=analysis.company,
                customizations=customizations,
            ),
        )
        logger.info(
            "Generated %s resume %s with %d customizations",
            template.value, resume.metadata.version, len(customizations),
        )
        return resume

    def _describe_template(self, template: TemplateType, analysis: JobAnalysis) -> str:
        primary = analysis.industry_context.primary
        if primary is None:
            return f"Selected {template.value} template (no dominant skill category)"
        return (
            f"Selected {template.value} template for primary category "
            f"{primary.value} (confidence {analysis.industry_context.confidence:.2f})"
        )

    def _prioritize_skills(
        self, analysis: JobAnalysis, customizations: list[str]
    ) -> SkillLists:
        """Split profile skills into job-relevant (primary) and the rest.

        Primary is ordered by how many job skills fall in the skill's
        category, then category priority, then proficiency. Secondary is
        ordered by proficiency alone. Sorts are stable, so equal keys keep
        profile order.
        """
        wanted = set(analysis.all_skills)
        weight = {c: len(analysis.extracted_skills.get(c, [])) for c in SkillCategory}

        primary = [s for s in self.profile.skills if _skill_is_wanted(s, wanted)]
        secondary = [s for s in self.profile.skills if not _skill_is_wanted(s, wanted)]

        primary.sort(key=lambda s: (
            -weight[s.category], CATEGORY_PRIORITY.index(s.category), -s.proficiency,
        ))
        secondary.sort(key=lambda s: -s.proficiency)

        if primary:
            customizations.append(
                f"Prioritized {len(primary)} skills matching the job: "
                f"{', '.join(s.name for s in primary[:5])}"
            )
        return SkillLists(
            primary=[s.name for s in primary],
            secondary=[s.name for s in secondary],
        )

    def _tailor_summary(
        self, template: TemplateType, primary: list[str], customizations: list[str]
    ) -> str:
        base = self.profile.summaries[template.value].strip()
        names = primary[:MAX_SUMMARY_SKILLS]
        while names:
            summary = f"{base} Key strengths include {_join_names(names)}."
            if len(summary) <= MAX_SUMMARY_LENGTH:
                customizations.append(
                    f"Tailored summary to highlight {_join_names(names)}"
                )
                return summary
            names = names[:-1]
        return base

    def _select_achievements(
        self, analysis: JobAnalysis, customizations: list[str]
    ) -> list[str]:
        matched = set(analysis.matched_categories)
        pool = self.profile.achievements

        def score(a: Achievement) -> int:
            overlap = _keyword_overlap(a.text, analysis.keywords)
            return overlap + (1 if matched.intersection(a.categories) else 0)

        scored = [(score(a), i, a) for i, a in enumerate(pool)]
        relevant = sorted(
            (t for t in scored if t[0] > 0),
            key=lambda t: (-t[0], -t[2].relevance, t[1]),
        )
        chosen = [a for _, _, a in relevant[:MAX_ACHIEVEMENTS]]
        if chosen:
            customizations.append(
                f"Selected {len(chosen)} achievements matching job keywords"
            )

        if len(chosen) < MIN_ACHIEVEMENTS:
            rest = sorted(
                (t for t in scored if t[2] not in chosen),
                key=lambda t: (-t[2].relevance, t[1]),
            )
            padding = [a for _, _, a in rest[:MIN_ACHIEVEMENTS - len(chosen)]]
            if padding:
                customizations.append(
                    f"Added {len(padding)} high-relevance general achievements"
                )
            chosen.extend(padding)

        return [a.text for a in chosen]

    def _pick_variant(
        self, position: Position, template: TemplateType, keywords: list[str]
    ) -> BulletVariant | None:
        focus_categories = TEMPLATE_CATEGORIES[template]
        best = None
        best_key = (0, False)
        for variant in position.variants:
            key = (
                _keyword_overlap(" ".join(variant.bullets), keywords),
                variant.focus in focus_categories,
            )
            if key[0] > 0 and key > best_key:
                best, best_key = variant, key
        return best

    def _rewrite_experience(
        self, template: TemplateType, analysis: JobAnalysis, customizations: list[str]
    ) -> list[PositionRecord]:
        records: list[PositionRecord] = []
        for i, position in enumerate(self.profile.positions):
            bullets = list(position.description)
            customized = False
            if i < REWRITE_POSITIONS:
                variant = self._pick_variant(position, template, analysis.keywords)
                if variant is not None:
                    bullets = list(variant.bullets)
                    customized = True
                    customizations.append(
                        f"Rewrote {position.company} bullets with "
                        f"{variant.focus.value} focus"
                    )
            records.append(PositionRecord(
                title=position.title,
                company=position.company,
                start=position.start,
                end=position.end,
                location=position.location,
                description=bullets,
                customized=customized,
            ))
        return records

    @staticmethod
    def _filter_by_categories(items: list, categories: frozenset[SkillCategory]) -> list:
        # Untagged entries always apply; fall back to everything if nothing is tagged for the template
        kept = [x for x in items if not x.categories or categories.intersection(x.categories)]
        return kept or list(items)


def render_resume_text(resume: ResumeContent) -> str:
    """Plain-text rendering for hosts that persist or preview the resume."""
    header = resume.header
    lines = [header.name]
    contact = [v for v in (header.email, header.phone, header.location, header.linkedin) if v]
    if contact:
        lines.append(" | ".join(contact))

    lines += ["", "SUMMARY", resume.summary]

    lines += ["", "SKILLS"]
    if resume.skills.primary:
        lines.append(f"Core: {', '.join(resume.skills.primary)}")
    if resume.skills.secondary:
        lines.append(f"Additional: {', '.join(resume.skills.secondary)}")

    if resume.achievements:
        lines += ["", "KEY ACHIEVEMENTS"]
        lines += [f"- {a}" for a in resume.achievements]

    if resume.work_experience:
        lines += ["", "EXPERIENCE"]
        for pos in resume.work_experience:
            dates = f"{pos.start} - {pos.end or 'Present'}"
            lines.append(f"{pos.title}, {pos.company} ({dates})")
            lines += [f"- {b}" for b in pos.description]

    if resume.education:
        lines += ["", "EDUCATION"]
        lines += resume.education

    if resume.certifications:
        lines += ["", "CERTIFICATIONS"]
        lines += resume.certifications

    return "\n".join(lines) + "\n"
