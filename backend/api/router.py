from fastapi import APIRouter, Depends, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from api.dependencies import get_pipeline
from config import settings
from models.requests import JobPostingRequest, MatchRequest
from models.responses import HealthResponse, TailoringResult
from models.schemas.job_analysis import JobAnalysis
from models.schemas.match_result import MatchResult
from models.schemas.resume_content import ResumeContent
from services.pipeline.orchestrator import TailoringPipeline

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


@router.get("/health", response_model=HealthResponse)
async def health(pipeline: TailoringPipeline = Depends(get_pipeline)):
    reference = pipeline.reference
    return HealthResponse(
        status="ok",
        candidate=reference.profile.name,
        taxonomy_skills=len(reference.taxonomy.all_names()),
    )


@router.post("/analyze", response_model=JobAnalysis)
@limiter.limit(settings.rate_limit)
def analyze(
    request: Request,
    body: JobPostingRequest,
    pipeline: TailoringPipeline = Depends(get_pipeline),
):
    return pipeline.analyzer.analyze(body)


@router.post("/resume", response_model=ResumeContent)
@limiter.limit(settings.rate_limit)
def resume(
    request: Request,
    body: JobAnalysis,
    pipeline: TailoringPipeline = Depends(get_pipeline),
):
    return pipeline.generator.generate(body)


@router.post("/match", response_model=MatchResult)
@limiter.limit(settings.rate_limit)
def match(
    request: Request,
    body: MatchRequest,
    pipeline: TailoringPipeline = Depends(get_pipeline),
):
    return pipeline.matcher.match(body.resume, body.analysis)


@router.post("/tailor", response_model=TailoringResult)
@limiter.limit(settings.rate_limit)
def tailor(
    request: Request,
    body: JobPostingRequest,
    pipeline: TailoringPipeline = Depends(get_pipeline),
):
    return pipeline.run(body)
