from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from competitor_dashboard.services.storage import JsonCollection, Record, next_int_id, paginate, utc_now_iso

logger = logging.getLogger(__name__)

FILENAME = "research-results.json"


class ResearchResultStore:
    """Raw third-party research payloads, kept verbatim under ``data``."""

    def __init__(self, collection: JsonCollection):
        self.collection = collection

    async def list(self, skip: Optional[int] = 0, limit: Optional[int] = None) -> Dict[str, Any]:
        items = await self.collection.all()
        return {"items": paginate(items, skip, limit), "total": len(items)}

    async def create(self, data: Any) -> Record:
        def build(items: List[Record]) -> Record:
            return {"id": next_int_id(items), "created_at": utc_now_iso(), "data": data}

        record = await self.collection.append(build)
        logger.info("Stored research result id=%s", record["id"])
        return record
