"""Job posting segmentation: requirement lines, seniority and company signals."""

import re

from models.schemas.job_analysis import CompanyContext, ExperienceLevel
from services.skill_extractor import contains_term, normalize_text

MAX_REQUIREMENTS = 10
MAX_PREFERRED = 5

# Section header keywords and the section they open
SECTION_KEYWORDS: dict[str, list[str]] = {
    "preferred": [
        r"preferred", r"nice[\s-]to[\s-]have", r"bonus(?:\s+points)?", r"pluses",
    ],
    "benefits": [
        r"benefits", r"perks", r"what\s+we\s+offer", r"compensation",
        r"about\s+(?:us|the\s+company)", r"who\s+we\s+are", r"equal\s+opportunity",
    ],
    "requirements": [
        r"requirements", r"qualifications", r"must[\s-]haves?", r"required",
        r"what\s+you(?:'ll)?\s+(?:bring|need)", r"skills",
    ],
    "responsibilities": [
        r"responsibilities", r"duties", r"what\s+you(?:'ll)?\s+do", r"the\s+role",
    ],
}

_SECTION_COMPILED: dict[str, re.Pattern] = {
    section: re.compile(rf"\b(?:{'|'.join(patterns)})\b", re.IGNORECASE)
    for section, patterns in SECTION_KEYWORDS.items()
}

_BULLET_RE = re.compile(r"^\s*(?:[•\-\*▪◦‣–·]|\d+[.)])\s*")
_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")

REQUIREMENT_MARKERS = re.compile(
    r"\b(?:required|requirements?|must|need(?:s|ed)?\s+to|should\s+have|"
    r"experience\s+(?:with|in)|proficien\w*|knowledge\s+of|familiar(?:ity)?\s+with|"
    r"ability\s+to|expertise\s+in|\d+\+?\s*(?:years?|yrs?))\b",
    re.IGNORECASE,
)
PREFERRED_MARKERS = re.compile(
    r"\b(?:preferred|nice\s+to\s+have|bonus|a\s+plus)\b", re.IGNORECASE,
)

# "5+ years", "3-5 years", "at least 4 years", "7 yrs of SEO experience".
# A bare "for 25 years" is company history, not a requirement.
EXP_YEARS_RE = re.compile(
    r"(?P<floor>\b(?:at\s+least|minimum(?:\s+of)?)\s+)?"
    r"\b(?P<years>\d{1,2})\s*(?P<range>\+|-\s*\d{1,2})?\s*(?:years?|yrs?)\b"
    r"(?P<experience>(?:\s+[\w.#+/-]+){0,3}?\s+(?:experience|exp)\b)?",
    re.IGNORECASE,
)

# Seniority signals, checked on normalized text
SENIORITY_PATTERNS: list[tuple[ExperienceLevel, re.Pattern]] = [
    (ExperienceLevel.EXECUTIVE, re.compile(
        r"\b(?:director|vp|vice president|head of|chief|cxo|cto|cmo)\b")),
    (ExperienceLevel.SENIOR, re.compile(
        r"\b(?:senior|sr|lead(?!\s+gen(?:eration)?\b)|principal|manager|expert)\b")),
    (ExperienceLevel.MID, re.compile(
        r"\b(?:mid[ -]level|intermediate)\b")),
    (ExperienceLevel.JUNIOR, re.compile(
        r"\b(?:junior|jr|entry[ -]level|new grad|recent graduate|intern(?:ship)?)\b")),
]

CULTURE_KEYWORDS: dict[str, list[str]] = {
    "innovative": ["innovative", "cutting-edge", "disruptive", "pioneering"],
    "collaborative": ["collaborative", "team-oriented", "cross-functional", "partnership"],
    "fast-paced": ["fast-paced", "dynamic", "agile", "rapid growth"],
    "data-driven": ["data-driven", "analytical", "metrics", "evidence-based"],
}
VALUE_KEYWORDS = [
    "integrity", "innovation", "excellence", "customer-focused",
    "diversity", "inclusion", "sustainability", "quality",
]


def _is_bullet(line: str) -> bool:
    return bool(_BULLET_RE.match(line)) and bool(_BULLET_RE.sub("", line).strip())


def _header_section(line: str) -> str | None:
    """Return the section a header line opens, or None if it is not a header."""
    stripped = line.strip()
    if _is_bullet(stripped):
        return None
    words = stripped.rstrip(":").split()
    if not words or len(words) > 6:
        return None
    # Headers are short and either end in ':' or carry no sentence punctuation
    if not stripped.endswith(":") and re.search(r"[.!?,]", stripped):
        return None
    for section, pattern in _SECTION_COMPILED.items():
        if pattern.search(stripped):
            return section
    return "other" if stripped.endswith(":") else None


def extract_requirement_lines(description: str) -> tuple[list[str], list[str]]:
    """Pull requirement and preferred-qualification lines, in source order.

    Bullets count as requirements unless they sit under a preferred or
    benefits header. Prose sentences count only when they carry a
    requirement marker ("required", "must", "N+ years", ...).
    """
    requirements: list[str] = []
    preferred: list[str] = []
    section = "other"

    for raw in description.splitlines():
        line = raw.strip()
        if not line:
            continue

        header = _header_section(line)
        if header is not None:
            section = header
            continue

        if _is_bullet(line):
            item = " ".join(_BULLET_RE.sub("", line).split())
            if section == "preferred":
                preferred.append(item)
            elif section != "benefits":
                requirements.append(item)
            continue

        if section == "benefits":
            continue
        for sentence in _SENTENCE_SPLIT_RE.split(line):
            sentence = " ".join(sentence.split())
            if not sentence:
                continue
            if section == "preferred" or PREFERRED_MARKERS.search(sentence):
                preferred.append(sentence)
            elif REQUIREMENT_MARKERS.search(sentence):
                requirements.append(sentence)

    return requirements[:MAX_REQUIREMENTS], preferred[:MAX_PREFERRED]


def extract_required_years(text: str) -> int:
    """Largest required-experience year figure in the text, 0 if none."""
    best = 0
    for match in EXP_YEARS_RE.finditer(text):
        if not (match["floor"] or match["range"] or match["experience"]):
            continue
        years = int(match["years"])
        if years > best:
            best = years
    return best


def _level_for_years(years: int) -> ExperienceLevel | None:
    if years >= 10:
        return ExperienceLevel.EXECUTIVE
    if years >= 5:
        return ExperienceLevel.SENIOR
    if years >= 2:
        return ExperienceLevel.MID
    if years > 0:
        return ExperienceLevel.JUNIOR
    return None


def determine_experience_level(description: str, title: str) -> ExperienceLevel:
    """Highest seniority signal among keywords and year counts; mid if none."""
    text = normalize_text(f"{title} {description}")
    signals: list[ExperienceLevel] = [
        level for level, pattern in SENIORITY_PATTERNS if pattern.search(text)
    ]
    years_level = _level_for_years(extract_required_years(text))
    if years_level is not None:
        signals.append(years_level)

    if not signals:
        return ExperienceLevel.MID
    return max(signals, key=lambda level: level.rank)


def analyze_company_context(description: str, company: str) -> CompanyContext:
    text = normalize_text(description)

    if contains_term(text, "startup") or contains_term(text, "small team"):
        size = "startup"
    elif contains_term(text, "enterprise") or contains_term(text, "fortune"):
        size = "enterprise"
    elif contains_term(text, "mid-size") or contains_term(text, "growing company"):
        size = "mid-size"
    else:
        size = "unknown"

    culture = [
        trait for trait, keywords in CULTURE_KEYWORDS.items()
        if any(contains_term(text, kw) for kw in keywords)
    ]
    values = [v for v in VALUE_KEYWORDS if contains_term(text, v)]

    return CompanyContext(name=company, size=size, culture=culture, values=values)
