from __future__ import annotations

import logging
import secrets
import string
import time
from typing import Any, List, Optional

from competitor_dashboard.services.storage import JsonCollection, Record, utc_now_iso

logger = logging.getLogger(__name__)

FILENAME = "social-content.json"

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_content_id() -> str:
    """``sc-<epoch millis>-<8 random chars>``; needs no scan of existing records."""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(8))
    return f"sc-{time.time_ns() // 1_000_000}-{suffix}"


class SocialContentStore:
    def __init__(self, collection: JsonCollection):
        self.collection = collection

    async def create(self, analysis_id: str, content: Any, source: Optional[str] = None) -> Record:
        record: Record = {
            "id": new_content_id(),
            "analysisId": analysis_id,
            "content": content,
            "source": source,
            "created_at": utc_now_iso(),
        }
        await self.collection.append(lambda items: record)
        logger.info("Stored social content id=%s analysisId=%s", record["id"], analysis_id)
        return record

    async def get(self, content_id: str) -> Optional[Record]:
        return await self.collection.find(lambda it: it.get("id") == content_id)

    async def list_by_analysis(self, analysis_id: str) -> List[Record]:
        items = await self.collection.all()
        return [it for it in items if it.get("analysisId") == analysis_id]
