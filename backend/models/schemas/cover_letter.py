"""Cover letter resolved from a per-template text with placeholders."""

from pydantic import BaseModel, ConfigDict

from models.schemas.resume_content import TemplateType


class CoverLetter(BaseModel):
    model_config = ConfigDict(frozen=True)

    template_type: TemplateType
    subject: str
    body: str
