"""
Localização das seções de entradas (clientes) e saídas numa aba mensal.

Cada aba de mês traz, em algum lugar das primeiras linhas, um cabeçalho
"CLIENTES/ENTRADA" (ou só "CLIENTES") e outro "SAÍDA MENSAL" (ou só
"SAÍDAS"). A coluna do cabeçalho é a coluna dos nomes; as colunas de
valor e status são descobertas procurando "VALOR" e "STATUS" na mesma
linha ou na linha seguinte.

A heurística fica atrás do protocolo ``SectionLayout`` para que outros
layouts de planilha possam ser adicionados sem mexer na extração de linhas.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from backend.parsers.models import Grid
from backend.parsers.value_converter import cell_text

logger = logging.getLogger(__name__)

# Quantidade máxima de linhas inspecionadas à procura do cabeçalho
_HEADER_SCAN_ROWS = 20


@dataclass(frozen=True)
class SectionMarkers:
    """Vocabulário de uma seção da aba mensal.

    Attributes:
        kind: "entradas" ou "saidas".
        markers: Substrings que identificam o cabeçalho.
        exact_markers: Textos que identificam o cabeçalho por igualdade.
        echo_markers: Substrings que marcam uma linha de dados como eco
            do cabeçalho (linha ignorada).
        exact_echo_markers: Idem, por igualdade.
    """

    kind: str
    markers: tuple[str, ...]
    exact_markers: tuple[str, ...]
    echo_markers: tuple[str, ...]
    exact_echo_markers: tuple[str, ...] = ()


REVENUE_SECTION = SectionMarkers(
    kind="entradas",
    markers=("CLIENTES/ENTRADA",),
    exact_markers=("CLIENTES",),
    echo_markers=("CLIENTES", "ENTRADA", "VALOR"),
)

EXPENSE_SECTION = SectionMarkers(
    kind="saidas",
    markers=("SAÍDA MENSAL",),
    exact_markers=("SAÍDAS",),
    echo_markers=("SAÍDA", "VALOR"),
    exact_echo_markers=("CLIENTES",),
)


@dataclass(frozen=True)
class SectionLocation:
    """Posição de uma seção: linha do cabeçalho e colunas (0-indexed)."""

    header_row: int
    name_col: int
    value_col: int
    status_col: int


class SectionLayout(Protocol):
    """Estratégia de descoberta de seções numa aba."""

    def locate(self, grid: Grid, section: SectionMarkers) -> SectionLocation | None:
        ...

    def is_header_echo(self, name: str, section: SectionMarkers) -> bool:
        ...


def _normalized(cell: object) -> str:
    return cell_text(cell).upper().strip()


class MarkerLayout:
    """Layout padrão: cabeçalho por palavra-chave, VALOR/STATUS por busca."""

    def __init__(self, scan_rows: int = _HEADER_SCAN_ROWS) -> None:
        self._scan_rows = scan_rows

    @staticmethod
    def _is_marker(text: str, section: SectionMarkers) -> bool:
        return any(m in text for m in section.markers) or text in section.exact_markers

    @staticmethod
    def _find_columns(grid: Grid, header_row: int) -> tuple[int | None, int | None]:
        """Procura VALOR e STATUS na linha do cabeçalho e na seguinte."""
        value_col: int | None = None
        status_col: int | None = None
        for row in grid[header_row : header_row + 2]:
            for idx, cell in enumerate(row):
                text = _normalized(cell)
                if value_col is None and "VALOR" in text:
                    value_col = idx
                if status_col is None and "STATUS" in text:
                    status_col = idx
        return value_col, status_col

    def locate(self, grid: Grid, section: SectionMarkers) -> SectionLocation | None:
        for r in range(min(len(grid), self._scan_rows)):
            row = grid[r]
            if not row:
                continue
            for c, cell in enumerate(row):
                if not self._is_marker(_normalized(cell), section):
                    continue

                value_col, status_col = self._find_columns(grid, r)
                return SectionLocation(
                    header_row=r,
                    name_col=c,
                    value_col=c + 1 if value_col is None else value_col,
                    status_col=c + 2 if status_col is None else status_col,
                )
        return None

    def is_header_echo(self, name: str, section: SectionMarkers) -> bool:
        upper = name.upper()
        return any(m in upper for m in section.echo_markers) or (
            upper.strip() in section.exact_echo_markers
        )


DEFAULT_LAYOUT = MarkerLayout()


def locate_section(
    grid: Grid,
    section: SectionMarkers,
    layout: SectionLayout | None = None,
) -> SectionLocation | None:
    """Localiza o cabeçalho de uma seção na aba.

    Args:
        grid: Linhas da aba (listas de células).
        section: ``REVENUE_SECTION`` ou ``EXPENSE_SECTION``.
        layout: Estratégia de layout; ``MarkerLayout`` por padrão.

    Returns:
        ``SectionLocation`` da primeira ocorrência (menor linha, depois
        menor coluna), ou ``None`` se nenhuma das primeiras 20 linhas
        tiver o cabeçalho.
    """
    location = (layout or DEFAULT_LAYOUT).locate(grid, section)
    if location is None:
        logger.debug("Seção '%s' não encontrada.", section.kind)
    return location
