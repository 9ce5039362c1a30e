from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from competitor_dashboard.services.storage import JsonCollection, Record, next_int_id, paginate, utc_now_iso

logger = logging.getLogger(__name__)

FILENAME = "competitors.json"
DEFAULT_STATUS = "active"

# Optional profile fields; persisted as explicit nulls when not supplied.
PROFILE_FIELDS = [
    "website_url",
    "twitter_url",
    "instagram_url",
    "facebook_url",
    "reddit_url",
    "discord_url",
    "industry",
    "description",
    "logo_url",
]


class CompetitorStore:
    def __init__(self, collection: JsonCollection):
        self.collection = collection

    async def list(
        self,
        skip: Optional[int] = 0,
        limit: Optional[int] = None,
        status: Optional[str] = None,
    ) -> Dict[str, Any]:
        items = await self.collection.all()
        # total counts the whole collection, not the status-filtered subset
        total = len(items)
        if status:
            items = [c for c in items if c.get("status") == status]
        return {"items": paginate(items, skip, limit), "total": total}

    async def create(self, payload: Dict[str, Any]) -> Record:
        def build(items: List[Record]) -> Record:
            now = utc_now_iso()
            record: Record = {"id": next_int_id(items), "name": payload["name"]}
            for field in PROFILE_FIELDS:
                record[field] = payload.get(field)
            record["status"] = DEFAULT_STATUS if payload.get("status") is None else payload["status"]
            record["created_at"] = now
            record["updated_at"] = now
            return record

        record = await self.collection.append(build)
        logger.info("Created competitor id=%s name=%r", record["id"], record["name"])
        return record
