"""
Repositório que grava o resultado da ingestão em abas do Google Sheets.

Abas mantidas na planilha de armazenamento:
    - "Receitas":       id, mes, cliente, valor, status
    - "Despesas":       id, mes, nome_despesa, valor, status, tipo
    - "Resumo Anual":   total_entradas, total_saidas, saldo_atual
    - "Configurações":  chave, valor

``replace_all`` limpa as três primeiras e reescreve tudo; a série mensal
não é gravada, é recalculada na leitura.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

import pandas as pd

from backend.parsers.models import (
    AnnualSummary,
    ExpenseCategory,
    ExpenseEntry,
    IngestionResult,
    RevenueEntry,
)
from backend.parsers.value_converter import normalize_value
from backend.repository import FinanceRepository
from backend.validators.reconciliation import build_monthly_series

from .sheets_client import SheetsClient

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constantes
# ---------------------------------------------------------------------------
REVENUE_SHEET = "Receitas"
EXPENSE_SHEET = "Despesas"
SUMMARY_SHEET = "Resumo Anual"
SETTINGS_SHEET = "Configurações"

REVENUE_HEADERS = ["id", "mes", "cliente", "valor", "status"]
EXPENSE_HEADERS = ["id", "mes", "nome_despesa", "valor", "status", "tipo"]
SUMMARY_HEADERS = ["total_entradas", "total_saidas", "saldo_atual"]
SETTINGS_HEADERS = ["chave", "valor"]


def _as_float(value: Any) -> float:
    """Número gravado na aba; aceita texto formatado ("1.500,50", "-20,5")."""
    if isinstance(value, (int, float)):
        return normalize_value(value)
    text = str(value or "").strip()
    if text.startswith("-"):
        return -normalize_value(text[1:])
    return normalize_value(text)


class SheetsRepository(FinanceRepository):
    """Armazena o último resultado e as configurações no Google Sheets."""

    def __init__(self, sheets_client: SheetsClient) -> None:
        self._client = sheets_client
        self._lock = threading.Lock()
        for name, headers in (
            (REVENUE_SHEET, REVENUE_HEADERS),
            (EXPENSE_SHEET, EXPENSE_HEADERS),
            (SUMMARY_SHEET, SUMMARY_HEADERS),
            (SETTINGS_SHEET, SETTINGS_HEADERS),
        ):
            self._client.ensure_sheet_exists(name, headers=headers)

    # ------------------------------------------------------------------
    # Escrita
    # ------------------------------------------------------------------
    def replace_all(self, result: IngestionResult) -> None:
        revenue_rows = [
            [r.id, r.mes, r.cliente, r.valor, r.status] for r in result.revenue_entries
        ]
        expense_rows = [
            [d.id, d.mes, d.nome_despesa, d.valor, d.status, d.tipo.value]
            for d in result.expense_entries
        ]
        s = result.annual_summary
        summary_rows = [[s.total_entradas, s.total_saidas, s.saldo_atual]]

        with self._lock:
            for name, rows in (
                (REVENUE_SHEET, revenue_rows),
                (EXPENSE_SHEET, expense_rows),
                (SUMMARY_SHEET, summary_rows),
            ):
                self._client.clear_data(name)
                self._client.append_rows(name, rows)

        logger.info(
            "Resultado gravado no Sheets: %d receitas, %d despesas.",
            len(revenue_rows),
            len(expense_rows),
        )

    # ------------------------------------------------------------------
    # Leitura
    # ------------------------------------------------------------------
    def get_result(self) -> IngestionResult | None:
        with self._lock:
            revenues_df = self._client.read_sheet(REVENUE_SHEET)
            expenses_df = self._client.read_sheet(EXPENSE_SHEET)
            summary_df = self._client.read_sheet(SUMMARY_SHEET)

        if summary_df.empty:
            return None

        revenues = [
            RevenueEntry(
                id=int(row["id"]),
                mes=str(row["mes"]),
                cliente=str(row["cliente"]),
                valor=_as_float(row["valor"]),
                status=str(row["status"]),
            )
            for _, row in revenues_df.iterrows()
        ]
        expenses = [
            ExpenseEntry(
                id=int(row["id"]),
                mes=str(row["mes"]),
                nome_despesa=str(row["nome_despesa"]),
                valor=_as_float(row["valor"]),
                status=str(row["status"]),
                tipo=ExpenseCategory(str(row["tipo"])),
            )
            for _, row in expenses_df.iterrows()
        ]
        first = summary_df.iloc[0]
        summary = AnnualSummary(
            total_entradas=_as_float(first["total_entradas"]),
            total_saidas=_as_float(first["total_saidas"]),
            saldo_atual=_as_float(first["saldo_atual"]),
        )
        return IngestionResult(
            annual_summary=summary,
            monthly_series=build_monthly_series(revenues, expenses),
            revenue_entries=revenues,
            expense_entries=expenses,
        )

    # ------------------------------------------------------------------
    # Configurações
    # ------------------------------------------------------------------
    def _read_settings(self) -> pd.DataFrame:
        df = self._client.read_sheet(SETTINGS_SHEET)
        if df.empty:
            return pd.DataFrame(columns=SETTINGS_HEADERS)
        return df

    def get_setting(self, key: str, default: str = "") -> str:
        df = self._read_settings()
        match = df[df["chave"].astype(str) == key]
        if match.empty:
            return default
        return str(match.iloc[-1]["valor"])

    def set_setting(self, key: str, value: str) -> None:
        with self._lock:
            df = self._read_settings()
            df = df[df["chave"].astype(str) != key]
            rows = df[SETTINGS_HEADERS].astype(str).values.tolist() + [[key, value]]
            self._client.clear_data(SETTINGS_SHEET)
            self._client.append_rows(SETTINGS_SHEET, rows)
        logger.info("Configuração '%s' gravada no Sheets.", key)
