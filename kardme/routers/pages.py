from __future__ import annotations

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from kardme.services.manifest_service import build_manifest

router = APIRouter(prefix="", tags=["pages"])


@router.get("/api/manifest/{slug}")
def card_manifest(slug: str):
    return JSONResponse(
        build_manifest(slug),
        media_type="application/manifest+json",
        headers={"Cache-Control": "public, max-age=300"},
    )


@router.get("/healthz")
def healthz():
    return {"ok": True}

