from __future__ import annotations

from typing import Iterable, List

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.types import ASGIApp, Receive, Scope, Send

from competitor_dashboard.utils.config import CORS_ORIGINS

# Paths called by the external automation service from arbitrary origins.
PUBLIC_PATHS = ["/social-content"]

PUBLIC_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Max-Age": "86400",
}


def is_public_path(path: str, public_paths: Iterable[str] = PUBLIC_PATHS) -> bool:
    return any(path == p or path.startswith(p + "/") for p in public_paths)


class ScopedCORSMiddleware:
    """
    CORS with two policies: anything under ``public_paths`` accepts any
    origin, everything else is limited to ``allow_origins``.
    """

    def __init__(self, app: ASGIApp, public_paths: Iterable[str], allow_origins: List[str]):
        self.app = app
        self.public_paths = list(public_paths)
        self.default = CORSMiddleware(
            app,
            allow_origins=allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )
        self.public = CORSMiddleware(
            app,
            allow_origins=["*"],
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["Content-Type", "Authorization"],
            max_age=86400,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http" and is_public_path(scope["path"], self.public_paths):
            await self.public(scope, receive, send)
        else:
            await self.default(scope, receive, send)


def setup_cors_middleware(app: FastAPI, allow_origins: List[str] = CORS_ORIGINS) -> None:
    app.add_middleware(ScopedCORSMiddleware, public_paths=PUBLIC_PATHS, allow_origins=allow_origins)
