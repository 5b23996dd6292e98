"""Load and validate the static reference data: skill taxonomy + master profile.

Both documents are YAML, parsed with ``yaml.safe_load`` and validated by the
pydantic schemas. Anything missing or malformed raises ReferenceDataError;
the pipeline cannot run on partial reference data.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from models.schemas.master_profile import MasterProfile
from models.schemas.resume_content import TemplateType
from models.schemas.taxonomy import SkillTaxonomy

logger = logging.getLogger(__name__)


class ReferenceDataError(RuntimeError):
    """Reference data is missing, unreadable or inconsistent."""


class ReferenceData(BaseModel):
    """Taxonomy and master profile, loaded once and shared read-only."""
    model_config = ConfigDict(frozen=True)

    taxonomy: SkillTaxonomy
    profile: MasterProfile


def _read_yaml(path: str | Path) -> dict[str, Any]:
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        logger.error("Reference data file not found: %s", path)
        raise ReferenceDataError(f"Reference data file not found: {path}") from e
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to read reference data %s: %s", path, e)
        raise ReferenceDataError(f"Could not read {path}: {e}") from e

    if not isinstance(data, dict):
        raise ReferenceDataError(f"{path} must contain a mapping at the top level")
    return data


def load_taxonomy(path: str | Path) -> SkillTaxonomy:
    """Load the skill taxonomy YAML document."""
    data = _read_yaml(path)
    try:
        taxonomy = SkillTaxonomy.model_validate(data)
    except ValidationError as e:
        logger.error("Invalid skill taxonomy %s: %s", path, e)
        raise ReferenceDataError(f"Invalid skill taxonomy in {path}: {e}") from e

    logger.info(
        "Loaded skill taxonomy: %d skills across %d categories",
        len(taxonomy.all_names()), len(taxonomy.categories),
    )
    return taxonomy


def load_master_profile(path: str | Path) -> MasterProfile:
    """Load the master profile YAML document."""
    data = _read_yaml(path)
    try:
        profile = MasterProfile.model_validate(data)
    except ValidationError as e:
        logger.error("Invalid master profile %s: %s", path, e)
        raise ReferenceDataError(f"Invalid master profile in {path}: {e}") from e

    missing = [t.value for t in TemplateType if t.value not in profile.summaries]
    if missing:
        raise ReferenceDataError(
            f"Master profile has no summary for templates: {', '.join(missing)}"
        )
    if TemplateType.HYBRID.value not in profile.cover_letters and profile.cover_letters:
        raise ReferenceDataError("Master profile cover letters need a 'hybrid' fallback")

    logger.info(
        "Loaded master profile for %s: %d skills, %d achievements, %d positions",
        profile.name, len(profile.skills), len(profile.achievements), len(profile.positions),
    )
    return profile


def build_reference_data(taxonomy: SkillTaxonomy, profile: MasterProfile) -> ReferenceData:
    """Bundle taxonomy and profile after checking they agree with each other."""
    known = taxonomy.all_names()
    for skill in profile.skills:
        unknown = [name for name in skill.covers if name not in known]
        if unknown:
            raise ReferenceDataError(
                f"Profile skill {skill.name!r} covers unknown taxonomy skills: "
                f"{', '.join(unknown)}"
            )
    return ReferenceData(taxonomy=taxonomy, profile=profile)


def load_reference_data(taxonomy_path: str | Path, profile_path: str | Path) -> ReferenceData:
    """Load both documents and cross-check them."""
    return build_reference_data(
        load_taxonomy(taxonomy_path),
        load_master_profile(profile_path),
    )
