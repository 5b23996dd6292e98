"""Keyword list construction and keyword matching for resume-job scoring.

Keywords are not a general tokenization of the posting: they come from the
extracted skills (multi-word names kept intact), the sector vocabulary, and
significant terms of the key requirement lines.
"""

import logging
import re

from services.skill_extractor import contains_term, normalize_text

logger = logging.getLogger(__name__)

MAX_KEYWORDS = 40
MIN_TERM_LENGTH = 4

# ---------------------------------------------------------------------------
# JD boilerplate and filler: never useful as keywords
# ---------------------------------------------------------------------------
JD_STOPWORDS: frozenset[str] = frozenset({
    # Company / HR boilerplate
    "opportunity", "opportunities", "position", "positions", "role", "roles",
    "candidate", "candidates", "applicant", "applicants", "application",
    "employment", "employer", "employee", "employees",
    "company", "organization", "team", "teams", "department",
    # Compensation & benefits
    "compensation", "salary", "benefits", "bonus", "equity",
    "insurance", "vacation", "retirement", "medical", "dental", "vision",
    # Generic JD filler
    "including", "based", "preferred", "required", "minimum", "maximum",
    "experience", "experienced", "qualified", "qualification", "qualifications",
    "responsible", "responsibilities", "requirement", "requirements",
    "description", "overview", "summary", "mission",
    "proven", "track", "record", "plus", "ideal", "ideally",
    "passionate", "exciting", "dynamic", "diverse", "inclusive",
    "competitive", "exceptional", "flexible", "remote", "hybrid",
    "onsite", "location", "office", "must", "should", "would",
    "knowledge", "understanding", "familiarity", "ability", "able",
    "skills", "skill", "strong", "excellent", "solid", "deep", "good",
    # Generic verbs
    "work", "working", "help", "join", "apply", "using", "ensure",
    "support", "provide", "engage", "utilize", "leverage",
    # Common English
    "with", "that", "this", "from", "have", "will", "your", "their",
    "they", "them", "what", "when", "where", "which", "while", "about",
    "into", "over", "other", "more", "most", "such", "than", "then",
    "also", "well", "each", "both", "within", "across", "least",
    "years", "year", "time", "great", "best", "level", "senior", "junior",
})

_TOKEN_RE = re.compile(r"[a-z][a-z0-9+#./-]*[a-z0-9+#]|[a-z]")


def tokenize(text: str) -> list[str]:
    """Lower-cased word tokens; keeps tech punctuation like node.js or ci/cd."""
    return _TOKEN_RE.findall(normalize_text(text))


def significant_terms(text: str) -> list[str]:
    """Distinct non-boilerplate tokens in source order."""
    terms: list[str] = []
    for token in tokenize(text):
        if len(token) < MIN_TERM_LENGTH or token in JD_STOPWORDS:
            continue
        if token not in terms:
            terms.append(token)
    return terms


def build_keywords(
    skills: list[str],
    sector_terms: list[str],
    requirement_lines: list[str],
) -> list[str]:
    """Ordered, de-duplicated keyword list used for density scoring.

    Skills come first (multi-word names kept whole), then sector terms,
    then significant requirement terms that are not already part of a skill.
    """
    keywords: list[str] = []
    for term in [*skills, *sector_terms]:
        term = normalize_text(term)
        if term and term not in keywords:
            keywords.append(term)

    skill_words = {w for skill in skills for w in normalize_text(skill).split()}
    for line in requirement_lines:
        for term in significant_terms(line):
            if term in skill_words or term in keywords:
                continue
            keywords.append(term)

    return keywords[:MAX_KEYWORDS]


def match_keywords(searchable_text: str, keywords: list[str]) -> tuple[list[str], list[str]]:
    """Split keywords into (found as whole words in the text, missing)."""
    haystack = normalize_text(searchable_text)
    matched: list[str] = []
    missing: list[str] = []
    for kw in keywords:
        if contains_term(haystack, kw):
            matched.append(kw)
        else:
            missing.append(kw)
    return matched, missing


def compute_keyword_coverage(matched: list[str], missing: list[str]) -> float:
    """Fraction of keywords found, 0.0 when there were none to find."""
    total = len(matched) + len(missing)
    if total == 0:
        return 0.0
    return len(matched) / total


def _stem(term: str) -> str:
    # Crude plural folding so "keywords" overlaps "keyword"
    if len(term) > 4 and term.endswith("s") and not term.endswith("ss"):
        return term[:-1]
    return term


def has_term_overlap(text: str, terms: set[str]) -> bool:
    """True if text shares at least one significant term with the set."""
    stems = {_stem(t) for t in terms}
    return any(_stem(t) in stems for t in significant_terms(text))
