"""
Pacote de parsers para planilhas de fluxo de caixa preenchidas à mão.

Exporta as funções principais:
- normalize_value: converte o conteúdo de uma célula para float
- read_workbook: decodifica bytes .xlsx/.xls em abas → linhas
- locate_section: encontra o cabeçalho de entradas/saídas numa aba mensal
- extract_rows: extrai as linhas válidas abaixo de um cabeçalho
- extract_summary: lê o resumo anual da aba CAIXA/RESUMO

O orquestrador fica em ``backend.parsers.workbook_parser`` (depende do
pacote ``classifier``) e deve ser importado diretamente.
"""

from backend.parsers.value_converter import cell_text, normalize_value
from backend.parsers.workbook_reader import WorkbookReadError, read_workbook
from backend.parsers.section_locator import (
    EXPENSE_SECTION,
    REVENUE_SECTION,
    MarkerLayout,
    SectionLayout,
    SectionLocation,
    locate_section,
)
from backend.parsers.row_extractor import extract_rows
from backend.parsers.summary_extractor import extract_summary

__all__ = [
    "cell_text",
    "normalize_value",
    "read_workbook",
    "WorkbookReadError",
    "locate_section",
    "MarkerLayout",
    "SectionLayout",
    "SectionLocation",
    "REVENUE_SECTION",
    "EXPENSE_SECTION",
    "extract_rows",
    "extract_summary",
]
