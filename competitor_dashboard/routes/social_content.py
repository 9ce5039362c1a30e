from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field, StrictStr
from pydantic import ValidationError as PydanticValidationError

from competitor_dashboard.db import get_social_content_store
from competitor_dashboard.models.social_content import SocialContentStore
from competitor_dashboard.services.content_webhook import forward_to_content_workflow
from competitor_dashboard.utils.config import APP_URL
from competitor_dashboard.utils.cors import PUBLIC_CORS_HEADERS
from competitor_dashboard.utils.errors import NotFoundError, ValidationError
from competitor_dashboard.utils.requests import parse_json_body

router = APIRouter(prefix="/social-content", tags=["social-content"])


# ---------- Schemas ----------
class SocialContentCreate(BaseModel):
    analysis_id: StrictStr = Field(alias="analysisId", min_length=1)
    content: Any  # string or any JSON value, stored verbatim
    source: Optional[str] = None


class SocialContentCreated(BaseModel):
    id: str
    viewUrl: str
    createdAt: str


class AnalysisRef(BaseModel):
    id: str
    name: Optional[str] = None
    createdAt: Optional[str] = None
    parameters: Optional[Dict[str, Any]] = None


class CompetitorRef(BaseModel):
    id: Union[int, str]
    name: str
    website_url: Optional[str] = None


class InsightRef(BaseModel):
    id: Union[int, str, None] = None
    category: Optional[str] = None
    title: Optional[str] = None
    priority: Optional[str] = None
    recommendation: Optional[str] = None


class GenerateIn(BaseModel):
    analysis: AnalysisRef
    channels: List[str]
    notes: Optional[str] = None
    prompt: Optional[str] = None
    competitors: List[CompetitorRef] = []
    insights: List[InsightRef] = []


def view_url(analysis_id: str, content_id: str) -> str:
    return f"{APP_URL}/results/{analysis_id}/content/view/{content_id}"


# ---------- Routes ----------
@router.options("")
async def preflight():
    # Browsers' preflights are answered by the CORS middleware; this covers bare OPTIONS calls.
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers=PUBLIC_CORS_HEADERS)


@router.get("")
async def list_social_content(
    analysis_id: Optional[str] = Query(None, alias="analysisId"),
    store: SocialContentStore = Depends(get_social_content_store),
):
    """Everything generated for one analysis, for the polling page."""
    if not analysis_id:
        raise ValidationError("analysisId query is required")
    return {"items": await store.list_by_analysis(analysis_id)}


@router.post("", response_model=SocialContentCreated, status_code=status.HTTP_201_CREATED)
async def create_social_content(
    request: Request,
    store: SocialContentStore = Depends(get_social_content_store),
):
    """
    Callback for the content workflow: store the generated content and
    return where it can be viewed.
    Body: { analysisId: str, content: str | object, source?: str }
    """
    try:
        payload = SocialContentCreate.model_validate(parse_json_body(await request.body()))
    except PydanticValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))
    record = await store.create(payload.analysis_id, payload.content, payload.source)
    return {
        "id": record["id"],
        "viewUrl": view_url(payload.analysis_id, record["id"]),
        "createdAt": record["created_at"],
    }


@router.post("/generate", status_code=status.HTTP_202_ACCEPTED)
async def generate_social_content(payload: GenerateIn):
    """
    Send analysis context to the content-generation workflow. Generated
    content arrives later through POST /social-content.
    """
    if not payload.channels:
        raise ValidationError("Select at least one channel for content")

    body = {"type": "social_content", **payload.model_dump(exclude_none=True)}
    response = await forward_to_content_workflow(body)
    return {"forwarded": True, "response": response}


@router.get("/{content_id}")
async def get_social_content(
    content_id: str,
    store: SocialContentStore = Depends(get_social_content_store),
):
    row = await store.get(content_id)
    if row is None:
        raise NotFoundError("Content not found")
    return row
