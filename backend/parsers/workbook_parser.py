"""
Parser principal de planilhas de fluxo de caixa (uma aba por mês + aba de caixa).

Para cada aba de mês presente, localiza as seções de entradas e saídas,
extrai as linhas e classifica as despesas. Depois lê a aba de resumo,
reconcilia os totais e monta a série mensal. A função é pura: a mesma
planilha sempre produz o mesmo ``IngestionResult``.
"""

from __future__ import annotations

import itertools
import logging

from backend.classifier.expense_classifier import classify_expense
from backend.parsers.models import (
    MESES,
    ExpenseEntry,
    Grid,
    IngestionResult,
    RevenueEntry,
    Workbook,
)
from backend.parsers.row_extractor import extract_rows
from backend.parsers.section_locator import (
    EXPENSE_SECTION,
    REVENUE_SECTION,
    SectionLayout,
    locate_section,
)
from backend.parsers.summary_extractor import extract_summary
from backend.validators.reconciliation import (
    build_monthly_series,
    compare_reported_totals,
    reconcile_summary,
)

logger = logging.getLogger(__name__)


def _parse_month(
    mes: str,
    grid: Grid,
    revenue_ids: itertools.count,
    expense_ids: itertools.count,
    layout: SectionLayout | None,
) -> tuple[list[RevenueEntry], list[ExpenseEntry]]:
    """Extrai entradas e saídas de uma aba de mês."""
    revenues: list[RevenueEntry] = []
    expenses: list[ExpenseEntry] = []

    location = locate_section(grid, REVENUE_SECTION, layout)
    if location is not None:
        for row in extract_rows(grid, location, REVENUE_SECTION, layout):
            revenues.append(
                RevenueEntry(
                    id=next(revenue_ids),
                    mes=mes,
                    cliente=row.name,
                    valor=row.amount,
                    status=row.status,
                )
            )

    location = locate_section(grid, EXPENSE_SECTION, layout)
    if location is not None:
        for row in extract_rows(grid, location, EXPENSE_SECTION, layout):
            expenses.append(
                ExpenseEntry(
                    id=next(expense_ids),
                    mes=mes,
                    nome_despesa=row.name,
                    valor=row.amount,
                    status=row.status,
                    tipo=classify_expense(row.name),
                )
            )

    return revenues, expenses


def parse_workbook(
    workbook: Workbook, layout: SectionLayout | None = None
) -> IngestionResult:
    """Converte uma planilha decodificada no conjunto normalizado de registros.

    Args:
        workbook: Mapa ordenado nome da aba → linhas. Abas de mês são
            reconhecidas pelo nome exato ("JANEIRO", "MARÇO"...).
        layout: Estratégia de descoberta de seções; padrão ``MarkerLayout``.

    Returns:
        ``IngestionResult`` com resumo anual reconciliado, série mensal de
        12 pontos e as listas de entradas e saídas.
    """
    revenue_ids = itertools.count(1)
    expense_ids = itertools.count(1)
    revenues: list[RevenueEntry] = []
    expenses: list[ExpenseEntry] = []

    for mes in MESES:
        grid = workbook.get(mes)
        if grid is None:
            continue

        month_revenues, month_expenses = _parse_month(
            mes, grid, revenue_ids, expense_ids, layout
        )
        logger.debug(
            "Aba %s: %d entradas, %d saídas.",
            mes,
            len(month_revenues),
            len(month_expenses),
        )
        revenues.extend(month_revenues)
        expenses.extend(month_expenses)

    reported = extract_summary(workbook)
    summary = reconcile_summary(reported, revenues, expenses)

    warnings: list[str] = []
    for check in compare_reported_totals(reported, summary):
        if check["status"] == "WARNING":
            logger.warning("Reconciliação: %s", check["mensagem"])
            warnings.append(check["mensagem"])

    logger.info(
        "Planilha processada: %d entradas, %d saídas | "
        "total entradas=%.2f saídas=%.2f saldo=%.2f",
        len(revenues),
        len(expenses),
        summary.total_entradas,
        summary.total_saidas,
        summary.saldo_atual,
    )

    return IngestionResult(
        annual_summary=summary,
        monthly_series=build_monthly_series(revenues, expenses),
        revenue_entries=revenues,
        expense_entries=expenses,
        reported_summary=reported,
        warnings=warnings,
    )
