"""Tests for loading and validating the taxonomy and master profile."""

import pytest
import yaml

from config import DATA_DIR
from models.schemas.resume_content import TemplateType
from models.schemas.taxonomy import CATEGORY_PRIORITY, SkillCategory
from services.reference_data import (
    ReferenceDataError,
    build_reference_data,
    load_master_profile,
    load_reference_data,
    load_taxonomy,
)

TAXONOMY_PATH = DATA_DIR / "skill_taxonomy.yaml"
PROFILE_PATH = DATA_DIR / "master_profile.yaml"


def _raw(path):
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f)


def _write(tmp_path, name, data):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestBundledData:
    def test_taxonomy_loads_every_category(self):
        taxonomy = load_taxonomy(TAXONOMY_PATH)
        assert list(taxonomy.categories) == list(CATEGORY_PRIORITY)
        assert all(taxonomy.entries(c) for c in SkillCategory)

    def test_taxonomy_names_are_lower_case(self):
        taxonomy = load_taxonomy(TAXONOMY_PATH)
        assert all(name == name.lower() for name in taxonomy.all_names())
        assert taxonomy.display_name("node.js") == "Node.js"
        assert taxonomy.display_name("unknown") == "unknown"

    def test_profile_has_summary_per_template(self):
        profile = load_master_profile(PROFILE_PATH)
        assert set(profile.summaries) >= {t.value for t in TemplateType}
        assert profile.skill_by_name("python").name == "Python"
        assert profile.skill_by_name("cobol") is None

    def test_profile_skill_names_unique(self):
        profile = load_master_profile(PROFILE_PATH)
        assert len(profile.skill_names) == len(set(profile.skill_names))

    def test_load_reference_data(self, reference):
        assert reference.profile.name
        assert reference.taxonomy.all_names()


class TestLoadErrors:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ReferenceDataError, match="not found"):
            load_taxonomy(tmp_path / "nope.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("categories: [unclosed", encoding="utf-8")
        with pytest.raises(ReferenceDataError):
            load_taxonomy(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ReferenceDataError, match="mapping"):
            load_master_profile(path)

    def test_taxonomy_missing_category(self, tmp_path):
        data = _raw(TAXONOMY_PATH)
        del data["categories"]["analytics"]
        with pytest.raises(ReferenceDataError, match="Invalid skill taxonomy"):
            load_taxonomy(_write(tmp_path, "taxonomy.yaml", data))

    def test_profile_schema_violation(self, tmp_path):
        data = _raw(PROFILE_PATH)
        data["skills"][0]["proficiency"] = 150
        with pytest.raises(ReferenceDataError, match="Invalid master profile"):
            load_master_profile(_write(tmp_path, "profile.yaml", data))

    def test_profile_missing_summary(self, tmp_path):
        data = _raw(PROFILE_PATH)
        del data["summaries"]["hybrid"]
        with pytest.raises(ReferenceDataError, match="hybrid"):
            load_master_profile(_write(tmp_path, "profile.yaml", data))

    def test_profile_covers_unknown_taxonomy_skill(self, reference):
        skills = list(reference.profile.skills)
        skills[0] = skills[0].model_copy(update={"covers": ["cobol"]})
        profile = reference.profile.model_copy(update={"skills": skills})
        with pytest.raises(ReferenceDataError, match="cobol"):
            build_reference_data(reference.taxonomy, profile)

    def test_load_reference_data_fails_on_missing_profile(self, tmp_path):
        with pytest.raises(ReferenceDataError):
            load_reference_data(TAXONOMY_PATH, tmp_path / "missing.yaml")
