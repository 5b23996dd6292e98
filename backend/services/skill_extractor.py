"""Taxonomy-driven skill extraction and skill overlap scoring.

Matching is case-insensitive and whitespace-insensitive: text and terms are
lower-cased and runs of whitespace collapse to one space. Terms match on word
boundaries, so "java" never matches inside "javascript" and "r" never matches
inside "remote".
"""

import logging
import re
from functools import lru_cache

from rapidfuzz import fuzz

from models.schemas.job_analysis import IndustryContext, IndustrySector
from models.schemas.taxonomy import CATEGORY_PRIORITY, SkillCategory, SkillTaxonomy

logger = logging.getLogger(__name__)

# Fuzzy match threshold (0-100) for near-miss skill names, e.g. "Agile/Scrum" vs "scrum"
FUZZY_THRESHOLD = 80


def normalize_text(text: str) -> str:
    """Lower-case and collapse all whitespace runs to single spaces."""
    return " ".join(text.lower().split())


@lru_cache(maxsize=4096)
def _term_pattern(term: str) -> re.Pattern:
    escaped = re.escape(normalize_text(term))
    return re.compile(rf"(?<![a-z0-9.#]){escaped}(?![a-z0-9])")


def contains_term(normalized_text: str, term: str) -> bool:
    """Whole-word search for a term in already normalized text."""
    if not term:
        return False
    return _term_pattern(term).search(normalized_text) is not None


def extract_skills(text: str, taxonomy: SkillTaxonomy) -> dict[SkillCategory, list[str]]:
    """Match text against every taxonomy category.

    Returns every category (possibly empty), each holding canonical skill
    names in taxonomy order. A skill lands in several categories only if
    the taxonomy lists it under each of them.
    """
    normalized = normalize_text(text)
    found: dict[SkillCategory, list[str]] = {c: [] for c in CATEGORY_PRIORITY}
    if not normalized:
        return found

    for category in CATEGORY_PRIORITY:
        for entry in taxonomy.entries(category):
            if entry.name in found[category]:
                continue
            if any(contains_term(normalized, term) for term in entry.terms):
                found[category].append(entry.name)

    logger.debug(
        "Extracted skills: %s",
        {c.value: len(skills) for c, skills in found.items()},
    )
    return found


def detect_industry(extracted: dict[SkillCategory, list[str]]) -> IndustryContext:
    """Pick the category with the most matches.

    confidence = matches(primary) / total matches; with no matches at all
    the primary is None and confidence 0.
    """
    scores = {c: len(extracted.get(c, [])) for c in CATEGORY_PRIORITY}
    total = sum(scores.values())
    if total == 0:
        return IndustryContext(primary=None, confidence=0.0, scores=scores)

    # max() keeps the first of equal counts, so priority order breaks ties
    primary = max(CATEGORY_PRIORITY, key=lambda c: scores[c])
    return IndustryContext(
        primary=primary,
        confidence=round(scores[primary] / total, 4),
        scores=scores,
    )


def detect_sector(text: str, company: str, sectors: dict[str, list[str]]) -> IndustrySector:
    """Score business sectors by how many of their keywords appear."""
    normalized = normalize_text(f"{text} {company}")
    scores = {
        sector: sum(1 for kw in keywords if contains_term(normalized, kw))
        for sector, keywords in sectors.items()
    }
    best = max(scores.values(), default=0)
    primary = next((s for s, n in scores.items() if n == best), None) if best > 0 else None
    return IndustrySector(primary=primary, scores=scores)


def is_fuzzy_match(skill: str, candidates: list[str]) -> bool:
    """True if any candidate name is a close variant of the skill."""
    skill = normalize_text(skill)
    if len(skill) < 3:
        return False
    for candidate in candidates:
        cand = normalize_text(candidate)
        if len(cand) >= 3 and fuzz.ratio(skill, cand) >= FUZZY_THRESHOLD:
            return True
    return False


def compute_skill_overlap(
    jd_skills: list[str],
    covered: set[str],
    resume_skill_names: list[str],
) -> tuple[float, list[str], list[str]]:
    """Score how well resume skills cover the job's skills.

    Full credit (1.0) for skills the resume covers directly, half credit
    (0.5) for close fuzzy variants of a resume skill name.

    Returns (score 0.0-1.0, matched, missing). Score is 0.0 when the job
    names no skills.
    """
    if not jd_skills:
        return 0.0, [], []

    earned = 0.0
    matched: list[str] = []
    missing: list[str] = []
    for skill in jd_skills:
        if skill in covered:
            earned += 1.0
            matched.append(skill)
        elif is_fuzzy_match(skill, resume_skill_names):
            earned += 0.5
            matched.append(skill)
        else:
            missing.append(skill)

    return earned / len(jd_skills), matched, missing
