"""
Reconciliação dos totais anuais e montagem da série mensal.

Os totais de entradas e saídas exibidos são SEMPRE recalculados a partir
dos lançamentos das abas mensais; os números digitados na aba de resumo
servem apenas para o saldo atual (quando diferente de zero) e para
sinalizar divergências.
"""

from __future__ import annotations

from backend.parsers.models import (
    MESES,
    AnnualSummary,
    ExpenseEntry,
    MonthlySeriesPoint,
    RevenueEntry,
)

# Tolerância de R$0.02 para arredondamentos de centavos
_TOLERANCE = 0.02


def _total(entries: list[RevenueEntry] | list[ExpenseEntry]) -> float:
    """Soma sequencial, na ordem em que os lançamentos foram emitidos."""
    total = 0.0
    for e in entries:
        total += e.valor
    return total


def _monthly_totals(
    entries: list[RevenueEntry] | list[ExpenseEntry],
) -> dict[str, float]:
    """Soma por mês, sempre com os 12 meses na ordem do calendário."""
    totals = {mes: 0.0 for mes in MESES}
    for e in entries:
        if e.mes in totals:
            totals[e.mes] += e.valor
    return totals


def build_monthly_series(
    revenues: list[RevenueEntry], expenses: list[ExpenseEntry]
) -> list[MonthlySeriesPoint]:
    """Monta os 12 pontos da série mensal (entradas, saídas, saldo)."""
    inflow = _monthly_totals(revenues)
    outflow = _monthly_totals(expenses)
    return [
        MonthlySeriesPoint(mes=mes, entradas=inflow[mes], saidas=outflow[mes])
        for mes in MESES
    ]


def reconcile_summary(
    reported: AnnualSummary | None,
    revenues: list[RevenueEntry],
    expenses: list[ExpenseEntry],
) -> AnnualSummary:
    """Aplica a regra de reconciliação ao resumo reportado.

    - ``total_entradas`` = soma dos lançamentos de entrada.
    - ``total_saidas`` = soma dos lançamentos de saída.
    - ``saldo_atual`` = saldo reportado, ou entradas − saídas quando o
      reportado é zero ou não existe aba de resumo.

    O objeto ``reported`` não é alterado; é devolvida uma cópia.
    """
    inflow_calc = _total(revenues)
    outflow_calc = _total(expenses)

    if reported is None:
        return AnnualSummary(
            total_entradas=inflow_calc,
            total_saidas=outflow_calc,
            saldo_atual=inflow_calc - outflow_calc,
        )

    saldo = reported.saldo_atual
    if saldo == 0:
        saldo = inflow_calc - outflow_calc
    return AnnualSummary(
        total_entradas=inflow_calc,
        total_saidas=outflow_calc,
        saldo_atual=saldo,
    )


def compare_reported_totals(
    reported: AnnualSummary | None, reconciled: AnnualSummary
) -> list[dict]:
    """Compara os totais da aba de resumo com os recalculados.

    Returns:
        Lista de dicts, um por total::

            {
                "campo": "total_entradas" | "total_saidas",
                "reportado": float,
                "calculado": float,
                "diferenca": float,
                "status": "OK" | "WARNING",
                "mensagem": str   # presente apenas em WARNING
            }

        Vazia quando não há aba de resumo.
    """
    if reported is None:
        return []

    results: list[dict] = []
    for campo, label in (("total_entradas", "Entradas"), ("total_saidas", "Saídas")):
        reportado = float(getattr(reported, campo))
        calculado = float(getattr(reconciled, campo))
        diferenca = abs(reportado - calculado)

        result: dict = {
            "campo": campo,
            "reportado": round(reportado, 2),
            "calculado": round(calculado, 2),
            "diferenca": round(diferenca, 2),
        }
        # Total ausente na aba (zero) não é divergência
        if reportado == 0 or diferenca <= _TOLERANCE:
            result["status"] = "OK"
        else:
            result["status"] = "WARNING"
            result["mensagem"] = (
                f"{label}: aba de resumo informa R${reportado:,.2f}, "
                f"abas mensais somam R${calculado:,.2f} "
                f"(diferença R${diferenca:,.2f})."
            )
        results.append(result)

    return results
