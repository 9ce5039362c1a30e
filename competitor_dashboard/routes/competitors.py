from __future__ import annotations

from io import StringIO
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import StreamingResponse
from pydantic import BaseModel, Field, StrictStr

from competitor_dashboard.db import get_competitor_store
from competitor_dashboard.models.competitor import PROFILE_FIELDS, CompetitorStore
from competitor_dashboard.services.storage import DEFAULT_LIMIT, MAX_LIMIT
from competitor_dashboard.utils.requests import window_param

router = APIRouter(prefix="/competitors", tags=["competitors"])


# ---------- Schemas ----------
class CompetitorCreate(BaseModel):
    name: StrictStr = Field(min_length=1)
    website_url: Optional[str] = None
    twitter_url: Optional[str] = None
    instagram_url: Optional[str] = None
    facebook_url: Optional[str] = None
    reddit_url: Optional[str] = None
    discord_url: Optional[str] = None
    industry: Optional[str] = None
    description: Optional[str] = None
    logo_url: Optional[str] = None
    status: Optional[str] = None


class CompetitorOut(BaseModel):
    id: int
    name: str
    website_url: Optional[str] = None
    twitter_url: Optional[str] = None
    instagram_url: Optional[str] = None
    facebook_url: Optional[str] = None
    reddit_url: Optional[str] = None
    discord_url: Optional[str] = None
    industry: Optional[str] = None
    description: Optional[str] = None
    logo_url: Optional[str] = None
    status: str
    created_at: str
    updated_at: str


# ---------- Routes ----------
@router.get("")
async def list_competitors(
    skip: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    store: CompetitorStore = Depends(get_competitor_store),
):
    # unparseable or zero values fall back to the defaults; the store clamps the rest
    return await store.list(
        skip=window_param(skip, 0),
        limit=window_param(limit, DEFAULT_LIMIT),
        status=status,
    )


@router.post("", response_model=CompetitorOut, status_code=status.HTTP_201_CREATED)
async def create_competitor(
    payload: CompetitorCreate,
    store: CompetitorStore = Depends(get_competitor_store),
):
    return await store.create(payload.model_dump())


@router.get("/export.csv")
async def export_csv(
    status: Optional[str] = Query(None),
    store: CompetitorStore = Depends(get_competitor_store),
):
    """
    Export competitors (optionally filtered by status) as one CSV:
      id, name, status, <profile fields>, created_at, updated_at
    """
    page = await store.list(skip=0, limit=MAX_LIMIT, status=status)
    # the listing window caps at MAX_LIMIT; pull further pages for big collections
    rows = list(page["items"])
    while len(page["items"]) == MAX_LIMIT:
        page = await store.list(skip=len(rows), limit=MAX_LIMIT, status=status)
        rows.extend(page["items"])

    def esc(s: Any) -> str:
        t = "" if s is None else str(s)
        t = t.replace('"', '""')
        if any(c in t for c in [",", "\n", '"']):
            return f'"{t}"'
        return t

    columns = ["id", "name", "status", *PROFILE_FIELDS, "created_at", "updated_at"]
    buf = StringIO()
    buf.write(",".join(columns) + "\n")
    for row in rows:
        buf.write(",".join(esc(row.get(c)) for c in columns) + "\n")

    buf.seek(0)
    return StreamingResponse(
        buf,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="competitors.csv"'},
    )
