from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from competitor_dashboard.utils.config import CONTENT_WEBHOOK_TIMEOUT, CONTENT_WEBHOOK_URL
from competitor_dashboard.utils.errors import ContentWorkflowError, ContentWorkflowNotConfigured

logger = logging.getLogger(__name__)


async def forward_to_content_workflow(
    payload: Dict[str, Any],
    url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> Any:
    """
    POST analysis context to the external content-generation workflow.

    The workflow answers asynchronously by calling POST /social-content;
    whatever it returns here (JSON or plain text) is passed back as-is.
    """
    url = url or CONTENT_WEBHOOK_URL
    if not url:
        raise ContentWorkflowNotConfigured("CONTENT_WEBHOOK_URL is not configured")

    try:
        async with httpx.AsyncClient(timeout=timeout or CONTENT_WEBHOOK_TIMEOUT) as client:
            res = await client.post(url, json=payload)
            res.raise_for_status()
    except httpx.HTTPStatusError as e:
        text = e.response.text.strip()
        logger.warning("Content workflow returned %s: %s", e.response.status_code, text[:200])
        raise ContentWorkflowError(text or f"Content workflow failed with status {e.response.status_code}")
    except httpx.HTTPError as e:
        logger.warning("Could not reach content workflow at %s: %s", url, e)
        raise ContentWorkflowError(f"Could not reach content workflow: {e}")

    if "application/json" in res.headers.get("content-type", ""):
        return res.json()
    return res.text
