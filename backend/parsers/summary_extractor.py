"""
Extração do resumo anual da aba de caixa ("CAIXA BUG", "RESUMO 2025"...).

A aba não tem layout fixo: os totais aparecem como um rótulo
("ENTRADA TOTAL", "SALDO"...) seguido, em alguma das colunas à direita,
do valor. A varredura percorre a aba inteira sem parar na primeira
ocorrência, então a última ocorrência de cada rótulo prevalece.
"""

from __future__ import annotations

import logging
from typing import Sequence

from backend.parsers.models import AnnualSummary, Cell, Grid, Workbook
from backend.parsers.value_converter import cell_text, normalize_value

logger = logging.getLogger(__name__)

_SUMMARY_SHEET_KEYWORDS = ("CAIXA", "RESUMO")

_INFLOW_LABELS = ("ENTRADA TOTAL", "TOTAL ENTRADAS")
_OUTFLOW_LABELS = ("SAÍDA TOTAL", "TOTAL SAÍDAS")
_BALANCE_LABELS = ("VALOR ATUAL", "SALDO", "CAIXA")

# Colunas à direita do rótulo onde o valor é procurado
_LOOKAHEAD = 4


def find_summary_sheet(workbook: Workbook) -> str | None:
    """Nome da primeira aba cujo nome contém "CAIXA" ou "RESUMO"."""
    for name in workbook:
        upper = name.upper()
        if any(k in upper for k in _SUMMARY_SHEET_KEYWORDS):
            return name
    return None


def _first_nonzero(row: Sequence[Cell], start: int) -> float:
    for col in range(start, min(start + _LOOKAHEAD, len(row))):
        value = normalize_value(row[col])
        if value != 0:
            return value
    return 0.0


def extract_summary_from_grid(grid: Grid) -> AnnualSummary:
    """Varre todas as células da aba e monta o resumo reportado."""
    summary = AnnualSummary()

    for row in grid:
        for idx, cell in enumerate(row):
            text = cell_text(cell).upper().strip()
            if not text:
                continue

            if any(label in text for label in _INFLOW_LABELS):
                summary.total_entradas = _first_nonzero(row, idx + 1)
            if any(label in text for label in _OUTFLOW_LABELS):
                summary.total_saidas = _first_nonzero(row, idx + 1)
            if any(label in text for label in _BALANCE_LABELS):
                value = _first_nonzero(row, idx + 1)
                if value != 0:
                    summary.saldo_atual = value

    return summary


def extract_summary(workbook: Workbook) -> AnnualSummary | None:
    """Extrai o resumo anual reportado na aba de caixa.

    Args:
        workbook: Mapa nome da aba → linhas.

    Returns:
        ``AnnualSummary`` com os valores da aba (zeros onde o rótulo não
        aparece), ou ``None`` se a planilha não tem aba de resumo.
    """
    sheet_name = find_summary_sheet(workbook)
    if sheet_name is None:
        logger.info("Nenhuma aba de resumo (CAIXA/RESUMO) encontrada.")
        return None

    summary = extract_summary_from_grid(workbook[sheet_name])
    logger.info(
        "Resumo da aba '%s': entradas=%.2f saídas=%.2f saldo=%.2f",
        sheet_name,
        summary.total_entradas,
        summary.total_saidas,
        summary.saldo_atual,
    )
    return summary
