from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from competitor_dashboard.db import get_research_result_store
from competitor_dashboard.models.research_result import ResearchResultStore
from competitor_dashboard.services.storage import DEFAULT_LIMIT
from competitor_dashboard.utils.requests import parse_json_body, window_param

router = APIRouter(prefix="/research-results", tags=["research-results"])


@router.get("")
async def list_research_results(
    skip: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    store: ResearchResultStore = Depends(get_research_result_store),
):
    return await store.list(skip=window_param(skip, 0), limit=window_param(limit, DEFAULT_LIMIT))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_research_result(
    request: Request,
    store: ResearchResultStore = Depends(get_research_result_store),
):
    # Any valid JSON document is accepted and stored verbatim under `data`.
    body = parse_json_body(await request.body())
    return await store.create(body)
