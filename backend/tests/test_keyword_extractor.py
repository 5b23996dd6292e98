"""Tests for keyword list construction and keyword matching."""

from services.keyword_extractor import (
    MAX_KEYWORDS,
    build_keywords,
    compute_keyword_coverage,
    has_term_overlap,
    match_keywords,
    significant_terms,
    tokenize,
)


def test_tokenize_keeps_tech_punctuation():
    tokens = tokenize("Ship Node.js services via CI/CD, then relax.")
    assert "node.js" in tokens
    assert "ci/cd" in tokens
    assert "relax" in tokens  # trailing period dropped


def test_significant_terms_drops_boilerplate_and_short_words():
    terms = significant_terms("Must have strong experience with Kubernetes and Terraform in a team")
    assert terms == ["kubernetes", "terraform"]


def test_significant_terms_are_distinct_in_source_order():
    assert significant_terms("Terraform modules, Terraform state") == ["terraform", "modules", "state"]


def test_build_keywords_order_and_dedup():
    keywords = build_keywords(
        ["google analytics", "seo"],
        ["strategy"],
        ["Hands-on Google Analytics audits", "SEO audits and reporting"],
    )
    # skills, then sector terms, then requirement terms not already part of a skill
    assert keywords[:3] == ["google analytics", "seo", "strategy"]
    assert "google" not in keywords
    assert keywords.count("audits") == 1
    assert "reporting" in keywords


def test_build_keywords_capped():
    skills = [f"skill{i}" for i in range(MAX_KEYWORDS + 10)]
    assert len(build_keywords(skills, [], [])) == MAX_KEYWORDS


def test_build_keywords_empty():
    assert build_keywords([], [], []) == []


def test_match_keywords_case_and_whitespace_insensitive():
    matched, missing = match_keywords(
        "Led   GOOGLE Analytics rollout", ["google analytics", "seo"],
    )
    assert matched == ["google analytics"]
    assert missing == ["seo"]


def test_match_keywords_whole_words_only():
    matched, missing = match_keywords(
        "digital marketing and rapid interest growth", ["git", "rest", "api", "marketing"],
    )
    assert matched == ["marketing"]
    assert missing == ["git", "rest", "api"]


def test_compute_keyword_coverage():
    assert compute_keyword_coverage(["a", "b"], ["c", "d"]) == 0.5
    assert compute_keyword_coverage([], []) == 0.0


def test_has_term_overlap_folds_plurals():
    assert has_term_overlap("Improved search rankings for target keywords", {"keyword"})
    assert not has_term_overlap("Mentored junior developers", {"keyword", "analytics"})
