"""
Download de uma planilha do Google Sheets pelo link de exportação .xlsx.

A planilha precisa estar compartilhada como "qualquer pessoa com o link";
não há autenticação nem retry. Qualquer falha vira ``WorkbookFetchError``
com mensagem legível para o usuário.
"""

from __future__ import annotations

import logging
import re

import requests

from backend.parsers.models import Workbook
from backend.parsers.workbook_reader import WorkbookReadError, read_workbook

from .exceptions import WorkbookFetchError

logger = logging.getLogger(__name__)

_EXPORT_SUFFIX = "/export?format=xlsx"
_SHEET_ID_RE = re.compile(r"/d/([a-zA-Z0-9_-]+)")
_EXPORT_URL_TPL = "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=xlsx"

MSG_INVALID_URL = "URL da planilha inválida."
MSG_DOWNLOAD_FAILED = (
    "Falha ao baixar planilha do Google. "
    "Verifique o link e as permissões de compartilhamento."
)


def build_export_url(url: str) -> str:
    """Converte o link de edição/compartilhamento no link de exportação .xlsx.

    Examples:
        >>> build_export_url("https://docs.google.com/spreadsheets/d/abc-1_X/edit#gid=0")
        'https://docs.google.com/spreadsheets/d/abc-1_X/export?format=xlsx'

    Raises:
        WorkbookFetchError: Se a URL não contém o ID da planilha.
    """
    if _EXPORT_SUFFIX in url:
        return url

    match = _SHEET_ID_RE.search(url)
    if not match:
        raise WorkbookFetchError(MSG_INVALID_URL)
    return _EXPORT_URL_TPL.format(sheet_id=match.group(1))


def fetch_workbook(url: str, timeout: float = 30.0) -> Workbook:
    """Baixa e decodifica a planilha apontada por *url*.

    Args:
        url: Link da planilha (edição ou exportação).
        timeout: Tempo máximo da requisição, em segundos.

    Raises:
        WorkbookFetchError: URL inválida, falha de rede, resposta não-2xx
            ou conteúdo que não é uma planilha.
    """
    export_url = build_export_url(url)
    logger.info("Baixando planilha: %s", export_url)

    try:
        response = requests.get(export_url, timeout=timeout)
    except requests.RequestException as exc:
        logger.error("Erro de rede ao baixar planilha: %s", exc)
        raise WorkbookFetchError(MSG_DOWNLOAD_FAILED) from exc

    if not response.ok:
        logger.error(
            "Download da planilha falhou: HTTP %d", response.status_code
        )
        raise WorkbookFetchError(MSG_DOWNLOAD_FAILED)

    try:
        return read_workbook(response.content, "google_sheets.xlsx")
    except WorkbookReadError as exc:
        raise WorkbookFetchError(f"{MSG_DOWNLOAD_FAILED} ({exc})") from exc
