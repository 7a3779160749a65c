"""
Router de ingestão de planilhas.

Duas origens, o mesmo pipeline síncrono:
  1. Obtém a planilha (upload .xlsx/.xls ou download do Google Sheets)
  2. Parseia todas as abas de mês + aba de caixa
  3. Substitui o conteúdo do repositório pelo novo resultado
  4. Invalida o cache do dashboard
  5. Retorna resumo JSON
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any

from fastapi import APIRouter, File, HTTPException, Request, UploadFile

from backend.config import get_settings
from backend.parsers.models import Workbook
from backend.parsers.workbook_parser import parse_workbook
from backend.parsers.workbook_reader import WorkbookReadError, read_workbook
from backend.repository import SETTING_SHEET_URL, FinanceRepository
from backend.routers import dashboard
from backend.sheets.exceptions import WorkbookFetchError
from backend.sheets.workbook_fetcher import fetch_workbook

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["upload"])

# Cache de processamentos recentes (em memória)
_recent_processings: list[dict[str, Any]] = []
_MAX_RECENT = 20


def _get_repository(request: Request) -> FinanceRepository:
    repository = getattr(request.app.state, "repository", None)
    if repository is None:
        raise HTTPException(
            status_code=503,
            detail="Repositório não inicializado.",
        )
    return repository


def _ingest(
    repository: FinanceRepository, workbook: Workbook, source: str
) -> dict[str, Any]:
    """Parseia a planilha, grava o resultado e registra o processamento."""
    start = time.time()

    result = parse_workbook(workbook)
    repository.replace_all(result)
    dashboard.invalidate_cache()

    elapsed = round(time.time() - start, 2)
    summary: dict[str, Any] = {
        "success": True,
        "revenue_entries": len(result.revenue_entries),
        "expense_entries": len(result.expense_entries),
        "summary_tab_found": result.reported_summary is not None,
        "warnings": result.warnings,
        "elapsed_seconds": elapsed,
    }

    _recent_processings.insert(
        0,
        {**summary, "source": source, "timestamp": datetime.now().isoformat()},
    )
    if len(_recent_processings) > _MAX_RECENT:
        _recent_processings.pop()

    logger.info("Ingestão de '%s' concluída em %.2fs.", source, elapsed)
    return summary


@router.post("/upload")
async def upload_file(request: Request, file: UploadFile | None = File(None)):
    """Upload de uma planilha .xlsx/.xls e substituição dos dados."""
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="Nenhum arquivo enviado.")

    repository = _get_repository(request)
    content = await file.read()
    logger.info("Arquivo recebido: %s (%d bytes)", file.filename, len(content))

    try:
        workbook = read_workbook(content, file.filename)
    except WorkbookReadError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    try:
        return _ingest(repository, workbook, file.filename)
    except Exception as exc:
        logger.exception("Erro no processamento do upload")
        raise HTTPException(status_code=500, detail=str(exc))


@router.post("/sync-google")
async def sync_google(request: Request):
    """Baixa a planilha configurada no Google Sheets e substitui os dados."""
    repository = _get_repository(request)

    try:
        url = repository.get_setting(SETTING_SHEET_URL)
        if not url:
            raise WorkbookFetchError("URL da planilha não configurada.")

        workbook = fetch_workbook(url, timeout=get_settings().fetch_timeout_seconds)
        return _ingest(repository, workbook, url)
    except WorkbookFetchError as exc:
        logger.error("Erro na sincronização: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc))
    except Exception as exc:
        logger.exception("Erro na sincronização")
        raise HTTPException(status_code=500, detail=str(exc))


@router.get("/upload/status")
async def upload_status():
    """Retorna processamentos recentes."""
    return {"processings": _recent_processings}
