"""
Estruturas de dados produzidas pela ingestão de uma planilha de fluxo de caixa.

Todas são criadas do zero a cada ingestão. A única mutação permitida é a
reconciliação dos totais do ``AnnualSummary`` (ver
``backend.validators.reconciliation``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Sequence

# Uma célula é texto, número ou vazia ("")
Cell = Any
Grid = Sequence[Sequence[Cell]]
Workbook = Mapping[str, Grid]

MESES: tuple[str, ...] = (
    "JANEIRO",
    "FEVEREIRO",
    "MARÇO",
    "ABRIL",
    "MAIO",
    "JUNHO",
    "JULHO",
    "AGOSTO",
    "SETEMBRO",
    "OUTUBRO",
    "NOVEMBRO",
    "DEZEMBRO",
)

DEFAULT_STATUS = "PENDENTE"


class ExpenseCategory(str, Enum):
    """Tipo de despesa."""

    FIXED = "FIXA"
    VARIABLE = "VARIÁVEL"


@dataclass(frozen=True)
class ExtractedRow:
    """Linha válida encontrada abaixo do cabeçalho de uma seção."""

    name: str
    amount: float
    status: str
    row_index: int


@dataclass(frozen=True)
class RevenueEntry:
    id: int
    mes: str
    cliente: str
    valor: float
    status: str = DEFAULT_STATUS

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "mes": self.mes,
            "cliente": self.cliente,
            "valor": self.valor,
            "status": self.status,
        }


@dataclass(frozen=True)
class ExpenseEntry:
    id: int
    mes: str
    nome_despesa: str
    valor: float
    status: str
    tipo: ExpenseCategory

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "mes": self.mes,
            "nome_despesa": self.nome_despesa,
            "valor": self.valor,
            "status": self.status,
            "tipo": self.tipo.value,
        }


@dataclass
class AnnualSummary:
    """Resumo anual (aba CAIXA/RESUMO ou sintetizado a partir dos lançamentos)."""

    total_entradas: float = 0.0
    total_saidas: float = 0.0
    saldo_atual: float = 0.0

    def to_dict(self) -> dict[str, float]:
        return {
            "total_entradas": self.total_entradas,
            "total_saidas": self.total_saidas,
            "saldo_atual": self.saldo_atual,
        }


@dataclass(frozen=True)
class MonthlySeriesPoint:
    mes: str
    entradas: float
    saidas: float

    @property
    def saldo(self) -> float:
        return self.entradas - self.saidas

    def to_dict(self) -> dict[str, Any]:
        return {
            "mes": self.mes,
            "entradas": self.entradas,
            "saidas": self.saidas,
            "saldo": self.saldo,
        }


@dataclass
class IngestionResult:
    """Resultado completo de uma ingestão.

    ``reported_summary`` guarda os números brutos da aba de resumo (ou
    ``None``) e ``warnings`` as divergências encontradas na reconciliação;
    nenhum dos dois altera ``annual_summary``.
    """

    annual_summary: AnnualSummary
    monthly_series: list[MonthlySeriesPoint]
    revenue_entries: list[RevenueEntry] = field(default_factory=list)
    expense_entries: list[ExpenseEntry] = field(default_factory=list)
    reported_summary: AnnualSummary | None = None
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Formato plano consumido pelo dashboard."""
        return {
            "annualSummary": self.annual_summary.to_dict(),
            "monthlySeries": [p.to_dict() for p in self.monthly_series],
            "revenueEntries": [r.to_dict() for r in self.revenue_entries],
            "expenseEntries": [d.to_dict() for d in self.expense_entries],
        }
