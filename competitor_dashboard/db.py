from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fastapi import Request

from competitor_dashboard.models import competitor, research_result, social_content
from competitor_dashboard.models.competitor import CompetitorStore
from competitor_dashboard.models.research_result import ResearchResultStore
from competitor_dashboard.models.social_content import SocialContentStore
from competitor_dashboard.services.storage import JsonCollection, StorageLocation
from competitor_dashboard.utils.config import DATA_DIR, FALLBACK_DATA_DIR


@dataclass
class Stores:
    competitors: CompetitorStore
    research_results: ResearchResultStore
    social_content: SocialContentStore


def _collection(filename: str, data_dir: Path, fallback_dir: Path) -> JsonCollection:
    return JsonCollection(StorageLocation(filename, data_dir, fallback_dir))


def build_stores(data_dir: Path = DATA_DIR, fallback_dir: Path = FALLBACK_DATA_DIR) -> Stores:
    """One store per collection; each resolves its own directory on first use."""
    return Stores(
        competitors=CompetitorStore(_collection(competitor.FILENAME, data_dir, fallback_dir)),
        research_results=ResearchResultStore(_collection(research_result.FILENAME, data_dir, fallback_dir)),
        social_content=SocialContentStore(_collection(social_content.FILENAME, data_dir, fallback_dir)),
    )


# FastAPI dependencies; the app keeps its Stores on app.state.
def get_stores(request: Request) -> Stores:
    return request.app.state.stores


def get_competitor_store(request: Request) -> CompetitorStore:
    return get_stores(request).competitors


def get_research_result_store(request: Request) -> ResearchResultStore:
    return get_stores(request).research_results


def get_social_content_store(request: Request) -> SocialContentStore:
    return get_stores(request).social_content
