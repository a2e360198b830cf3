from __future__ import annotations

from fastapi import APIRouter, Body, HTTPException, Request

from kardme.core.rate_limiter import rate_limit_writes
from kardme.domain.presets import CARD_BG_PRESETS
from kardme.services.card_service import CardNotFoundError, CardService, card_to_dict
from kardme.services.theme_service import (
    InvalidThemeError,
    PresetNotFoundError,
    ThemeService,
    build_card_theme,
)

router = APIRouter(prefix="/api", tags=["cards"])


def _get_theme_service(request: Request) -> ThemeService:
    svc = getattr(getattr(request.app, "state", None), "theme_service", None)
    if not svc:
        raise RuntimeError("ThemeService nao configurado")
    return svc


def _get_card_service(request: Request) -> CardService:
    svc = getattr(getattr(request.app, "state", None), "card_service", None)
    if not svc:
        raise RuntimeError("CardService nao configurado")
    return svc


@router.get("/background-presets")
def background_presets():
    return {"presets": [preset.to_dict() for preset in CARD_BG_PRESETS]}


@router.get("/cards/{slug}")
def public_card(slug: str, request: Request):
    cards = _get_card_service(request)
    try:
        card = cards.get_published_card(slug)
    except CardNotFoundError:
        raise HTTPException(404, "Cartão não encontrado")
    resolved = build_card_theme(card.id, card.slug or "", card.theme)
    payload = card_to_dict(card)
    payload["resolved"] = resolved.to_dict()
    payload["blocks"] = cards.enabled_blocks(card.id)
    return payload


@router.get("/cards/{slug}/theme")
def public_card_theme(slug: str, request: Request):
    svc = _get_theme_service(request)
    try:
        return svc.public_theme(slug).to_dict()
    except CardNotFoundError:
        raise HTTPException(404, "Cartão não encontrado")


@router.put("/cards/{card_id}/theme")
def save_card_theme(card_id: str, request: Request, payload: dict = Body(...)):
    rate_limit_writes(request, "cards:theme")
    svc = _get_theme_service(request)
    try:
        return svc.save_theme(card_id, payload).to_dict()
    except CardNotFoundError:
        raise HTTPException(404, "Cartão não encontrado")
    except InvalidThemeError as exc:
        raise HTTPException(400, str(exc))


@router.put("/cards/{card_id}/background")
def save_card_background(card_id: str, request: Request, payload: dict = Body(...)):
    rate_limit_writes(request, "cards:background")
    svc = _get_theme_service(request)
    try:
        background = svc.save_background(card_id, payload)
    except CardNotFoundError:
        raise HTTPException(404, "Cartão não encontrado")
    except InvalidThemeError as exc:
        raise HTTPException(400, str(exc))
    return {"ok": True, "background": background}


@router.post("/cards/{card_id}/background/preset/{preset_id}")
def apply_background_preset(card_id: str, preset_id: str, request: Request):
    rate_limit_writes(request, "cards:background")
    svc = _get_theme_service(request)
    try:
        background = svc.apply_preset(card_id, preset_id)
    except (CardNotFoundError, PresetNotFoundError) as exc:
        raise HTTPException(404, str(exc))
    return {"ok": True, "background": background}
