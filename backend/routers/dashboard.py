"""
Router de dados do dashboard.

Devolve o último resultado de ingestão no formato plano consumido pelo
frontend. Cache de 5 minutos via ``cachetools.TTLCache``, limpo a cada
nova ingestão.
"""

from __future__ import annotations

import logging
from typing import Any

from cachetools import TTLCache
from fastapi import APIRouter, HTTPException, Request

from backend.parsers.workbook_parser import parse_workbook

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["dashboard"])

_cache: TTLCache = TTLCache(maxsize=1, ttl=300)
_CACHE_KEY = "dashboard"


def invalidate_cache() -> None:
    _cache.clear()


@router.get("/dashboard")
async def get_dashboard(request: Request) -> dict[str, Any]:
    """Resumo anual, série mensal de 12 meses e todos os lançamentos."""
    if _CACHE_KEY in _cache:
        return _cache[_CACHE_KEY]

    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        raise HTTPException(status_code=503, detail="Repositório não inicializado.")

    try:
        result = repository.get_result()
    except Exception as exc:
        logger.exception("Erro ao ler dados do dashboard")
        raise HTTPException(status_code=500, detail=str(exc))

    if result is None:
        # Nada ingerido ainda: 12 meses zerados e resumo zerado
        result = parse_workbook({})

    data = result.to_dict()
    _cache[_CACHE_KEY] = data
    return data
