from __future__ import annotations

from fastapi import APIRouter, Body, Request
from fastapi.responses import JSONResponse

from kardme.core.rate_limiter import rate_limit_writes
from kardme.services.card_service import CardNotFoundError
from kardme.services.slug_service import (
    SlugService,
    InvalidSlugError,
    SlugUnavailableError,
)

router = APIRouter(prefix="/api/cards", tags=["slug"])


def _get_slug_service(request: Request) -> SlugService:
    svc = getattr(getattr(request.app, "state", None), "slug_service", None)
    if not svc:
        raise RuntimeError("SlugService nao configurado")
    return svc


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"success": False, "error": message}, status_code=status_code)


@router.get("/slug/check")
def slug_check(request: Request, value: str = "", card_id: str = ""):
    svc = _get_slug_service(request)
    return {"available": svc.is_available(value, exclude_id=card_id or None), "slug": svc.normalize(value)}


@router.post("/update-slug")
def update_slug(request: Request, payload: dict = Body(...)):
    rate_limit_writes(request, "cards:slug")
    card_id = payload.get("cardId")
    raw = payload.get("newSlugRaw")
    if not card_id or not isinstance(card_id, str):
        return _error("cardId é obrigatório", 400)
    if not raw or not isinstance(raw, str):
        return _error("Slug é obrigatório", 400)
    svc = _get_slug_service(request)
    try:
        new_slug = svc.assign_slug(card_id, raw)
    except InvalidSlugError:
        return _error("Slug inválido", 400)
    except CardNotFoundError:
        return _error("Cartão não encontrado", 404)
    except SlugUnavailableError:
        return _error("Slug já existe", 409)
    return {"success": True, "newSlug": new_slug}
