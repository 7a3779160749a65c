"""
Extração das linhas de dados abaixo do cabeçalho de uma seção.
"""

from __future__ import annotations

from typing import Sequence

from backend.parsers.models import DEFAULT_STATUS, Cell, ExtractedRow, Grid
from backend.parsers.section_locator import (
    DEFAULT_LAYOUT,
    SectionLayout,
    SectionLocation,
    SectionMarkers,
)
from backend.parsers.value_converter import cell_text, normalize_value

# Colunas à direita do nome inspecionadas quando a coluna VALOR vem vazia
_FALLBACK_SPAN = 4

# Nomes com até 2 caracteres e valor zero são descartados
_MIN_NAME_LEN_FOR_ZERO = 2


def _cell_at(row: Sequence[Cell], col: int) -> Cell:
    if 0 <= col < len(row):
        return row[col]
    return None


def _pick_value_cell(row: Sequence[Cell], location: SectionLocation) -> Cell:
    """Célula da coluna VALOR, ou a primeira não-zero à direita do nome."""
    raw = _cell_at(row, location.value_col)
    if cell_text(raw) != "" and normalize_value(raw) != 0:
        return raw

    end = min(location.name_col + 1 + _FALLBACK_SPAN, len(row))
    for col in range(location.name_col + 1, end):
        if normalize_value(row[col]) != 0:
            return row[col]
    return raw


def extract_rows(
    grid: Grid,
    location: SectionLocation,
    section: SectionMarkers,
    layout: SectionLayout | None = None,
) -> list[ExtractedRow]:
    """Percorre as linhas abaixo do cabeçalho e devolve as linhas válidas.

    Para cada linha com nome preenchido:
        1. Ignora ecos do cabeçalho ("CLIENTES", "VALOR", "SAÍDA"...).
        2. Lê a coluna VALOR; se vazia ou zero, usa o primeiro valor
           não-zero nas 4 colunas à direita do nome.
        3. Status vazio vira "PENDENTE".
        4. Mantém a linha se o valor não é zero ou se o nome tem mais de
           2 caracteres (cliente ainda sem cobrança, por exemplo).

    Args:
        grid: Linhas da aba.
        location: Resultado de ``locate_section``.
        section: Seção sendo extraída.
        layout: Estratégia usada para reconhecer ecos do cabeçalho.

    Returns:
        Lista de ``ExtractedRow`` na ordem das linhas da aba.
    """
    layout = layout or DEFAULT_LAYOUT
    records: list[ExtractedRow] = []

    for row_idx in range(location.header_row + 1, len(grid)):
        row = grid[row_idx]
        name = cell_text(_cell_at(row, location.name_col)).strip()
        if not name:
            continue

        if layout.is_header_echo(name, section):
            continue

        amount = normalize_value(_pick_value_cell(row, location))

        status = cell_text(_cell_at(row, location.status_col)).strip()
        if not status:
            status = DEFAULT_STATUS

        if amount != 0 or len(name) > _MIN_NAME_LEN_FOR_ZERO:
            records.append(
                ExtractedRow(name=name, amount=amount, status=status, row_index=row_idx)
            )

    return records
