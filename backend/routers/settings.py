"""Router de configurações (link da planilha do Google Sheets)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from backend.repository import SETTING_SHEET_URL

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])


def _get_repository(request: Request):
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        raise HTTPException(status_code=503, detail="Repositório não inicializado.")
    return repository


@router.get("")
async def get_app_settings(request: Request):
    repository = _get_repository(request)
    return {"sheet_url": repository.get_setting(SETTING_SHEET_URL)}


@router.post("")
async def update_app_settings(request: Request, body: dict):
    """Atualiza o link da planilha usada por /api/sync-google."""
    sheet_url = body.get("sheet_url")
    if not isinstance(sheet_url, str):
        raise HTTPException(status_code=400, detail="URL da planilha inválida.")

    _get_repository(request).set_setting(SETTING_SHEET_URL, sheet_url)
    return {"success": True}
