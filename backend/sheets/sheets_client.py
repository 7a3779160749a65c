"""
Wrapper mínimo da Google Sheets API usado como armazenamento.

Usa gspread + google-auth com service account. Todas as chamadas passam
por um limitador de 60 requisições/minuto e por retry com backoff
exponencial em HTTP 429.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable

import gspread
import pandas as pd
from gspread.utils import ValueRenderOption
from google.oauth2.service_account import Credentials

from .exceptions import AuthenticationError, QuotaExceededError, SheetNotFoundError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constantes
# ---------------------------------------------------------------------------
_SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive",
]
_MAX_RETRIES = 5
_INITIAL_BACKOFF_S = 2.0
_RATE_LIMIT_WINDOW_S = 60.0
_RATE_LIMIT_MAX_REQUESTS = 60


class SheetsClient:
    """Leitura e escrita de abas tabulares (cabeçalho na linha 1)."""

    def __init__(self, credentials_json: str | dict, spreadsheet_id: str) -> None:
        """
        Args:
            credentials_json: JSON string ou dict da service account.
            spreadsheet_id: ID da planilha de armazenamento.

        Raises:
            AuthenticationError: Credenciais inválidas.
        """
        self._spreadsheet_id = spreadsheet_id
        self._known_sheets: set[str] = set()
        self._request_timestamps: list[float] = []

        try:
            info = (
                json.loads(credentials_json)
                if isinstance(credentials_json, str)
                else credentials_json
            )
            creds = Credentials.from_service_account_info(info, scopes=_SCOPES)
            self._gc = gspread.authorize(creds)
        except Exception as exc:
            logger.error("Falha na autenticação: %s", exc)
            raise AuthenticationError(str(exc)) from exc

        self._spreadsheet = self._call_with_retry(
            lambda: self._gc.open_by_key(self._spreadsheet_id)
        )
        self._known_sheets = {
            ws.title for ws in self._call_with_retry(self._spreadsheet.worksheets)
        }
        logger.info(
            "Planilha de armazenamento aberta (%d abas).", len(self._known_sheets)
        )

    # ------------------------------------------------------------------
    # Helpers internos
    # ------------------------------------------------------------------
    def _throttle(self) -> None:
        """Bloqueia até haver espaço na janela de 60 s."""
        now = time.monotonic()
        self._request_timestamps = [
            t for t in self._request_timestamps if now - t < _RATE_LIMIT_WINDOW_S
        ]
        if len(self._request_timestamps) >= _RATE_LIMIT_MAX_REQUESTS:
            wait = _RATE_LIMIT_WINDOW_S - (now - self._request_timestamps[0])
            if wait > 0:
                logger.warning("Rate limit atingido. Aguardando %.1f s…", wait)
                time.sleep(wait)
        self._request_timestamps.append(time.monotonic())

    def _call_with_retry(self, fn: Callable[[], Any]) -> Any:
        """Executa *fn*, repetindo em HTTP 429 com backoff exponencial."""
        backoff = _INITIAL_BACKOFF_S
        for attempt in range(1, _MAX_RETRIES + 1):
            self._throttle()
            try:
                return fn()
            except gspread.exceptions.APIError as exc:
                if exc.response.status_code != 429:  # type: ignore[union-attr]
                    raise
                if attempt == _MAX_RETRIES:
                    logger.error("Quota excedida após %d tentativas.", _MAX_RETRIES)
                    raise QuotaExceededError() from exc
                logger.warning(
                    "HTTP 429 – tentativa %d/%d, aguardando %.1f s…",
                    attempt,
                    _MAX_RETRIES,
                    backoff,
                )
                time.sleep(backoff)
                backoff *= 2
        raise QuotaExceededError()  # pragma: no cover

    def _worksheet(self, sheet_name: str) -> gspread.Worksheet:
        try:
            return self._call_with_retry(lambda: self._spreadsheet.worksheet(sheet_name))
        except gspread.exceptions.WorksheetNotFound as exc:
            raise SheetNotFoundError(sheet_name) from exc

    # ------------------------------------------------------------------
    # API pública
    # ------------------------------------------------------------------
    def ensure_sheet_exists(self, sheet_name: str, headers: list[str]) -> None:
        """Cria a aba se necessário e (re)escreve o cabeçalho na linha 1."""
        if sheet_name in self._known_sheets:
            ws = self._worksheet(sheet_name)
        else:
            ws = self._call_with_retry(
                lambda: self._spreadsheet.add_worksheet(
                    title=sheet_name, rows=1000, cols=max(26, len(headers))
                )
            )
            self._known_sheets.add(sheet_name)
            logger.info("Aba '%s' criada.", sheet_name)

        self._call_with_retry(lambda: ws.update([headers], "A1"))

    def read_sheet(self, sheet_name: str) -> pd.DataFrame:
        """Lê a aba inteira como DataFrame (linha 1 = nomes das colunas).

        Os valores vêm sem formatação, independente da localidade da planilha.
        """
        ws = self._worksheet(sheet_name)
        records = self._call_with_retry(
            lambda: ws.get_all_records(
                value_render_option=ValueRenderOption.unformatted
            )
        )
        df = pd.DataFrame(records)
        logger.debug("Aba '%s' lida: %d linhas.", sheet_name, len(df))
        return df

    def append_rows(self, sheet_name: str, rows: list[list[Any]]) -> None:
        """Adiciona linhas ao final da aba."""
        if not rows:
            return
        ws = self._worksheet(sheet_name)
        self._call_with_retry(
            lambda: ws.append_rows(rows, value_input_option="RAW")
        )
        logger.info("%d linhas gravadas na aba '%s'.", len(rows), sheet_name)

    def clear_data(self, sheet_name: str) -> None:
        """Apaga todas as linhas abaixo do cabeçalho."""
        ws = self._worksheet(sheet_name)
        if ws.row_count <= 1:
            return
        last_col = gspread.utils.rowcol_to_a1(1, ws.col_count).rstrip("0123456789")
        self._call_with_retry(
            lambda: ws.batch_clear([f"A2:{last_col}{ws.row_count}"])
        )
        logger.debug("Aba '%s' limpa (cabeçalho preservado).", sheet_name)
