"""Shared test configuration, reference data and sample job postings."""

import pytest

from config import DATA_DIR
from models.schemas.job_analysis import JobDescription
from services.pipeline.orchestrator import TailoringPipeline
from services.reference_data import load_reference_data

TAXONOMY_PATH = DATA_DIR / "skill_taxonomy.yaml"
PROFILE_PATH = DATA_DIR / "master_profile.yaml"

SEO_JD = """We are looking for an SEO lead to own our organic search strategy.

Requirements:
- 5+ years of SEO experience
- Hands-on expertise with Google Analytics and keyword research
- Experience with link building and technical SEO audits
- Must be comfortable presenting results to leadership

Nice to have:
- Familiarity with Google Search Console
"""

TECH_JD = """Join our platform team building the next generation of our product.

Requirements:
- 5+ years building REST APIs with Python and Node.js
- Experience with Docker, Kubernetes and AWS
- Strong SQL skills and familiarity with MongoDB
- Must have CI/CD experience

Preferred:
- GraphQL experience

Benefits:
- Health insurance and flexible hours

About us:
We are a fast-paced startup building SaaS for innovative teams. We value integrity and diversity.
"""

HYBRID_JD = """Growth team lead wanted.

Requirements:
- Build features in Python and React
- Own SEO and Google Analytics reporting
- Run content marketing and email marketing programs
- Team leadership in an agile environment
- Data analysis and dashboards for weekly reviews
"""

GENERIC_JD = (
    "We are hiring a friendly person to answer phones, greet visitors and keep "
    "the front desk tidy. Flexible hours and a welcoming environment."
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: runs the full tailoring pipeline end to end"
    )


@pytest.fixture(scope="session")
def reference():
    return load_reference_data(TAXONOMY_PATH, PROFILE_PATH)


@pytest.fixture(scope="session")
def pipeline(reference):
    return TailoringPipeline(reference)


@pytest.fixture
def seo_job():
    return JobDescription(title="Senior SEO Specialist", company="Acme Search", description=SEO_JD)


@pytest.fixture
def tech_job():
    return JobDescription(
        title="Senior Backend Engineer",
        company="Cloudlift",
        description=TECH_JD,
        location="Remote",
    )


@pytest.fixture
def hybrid_job():
    return JobDescription(title="Growth Engineering Lead", company="Brightwave", description=HYBRID_JD)


@pytest.fixture
def generic_job():
    return JobDescription(title="Office Assistant", company="Acme Co", description=GENERIC_JD)
