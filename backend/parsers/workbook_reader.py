"""
Decodificação de arquivos .xlsx/.xlsm/.xls em memória.

Converte o conteúdo binário de um upload (ou de um download do Google
Sheets) no formato usado pelo parser: um dicionário ordenado
nome da aba → lista de linhas, com células vazias lidas como "".
"""

from __future__ import annotations

import io
import logging
import os
import zipfile
from datetime import date, datetime, time
from typing import Any

import openpyxl
import xlrd
from openpyxl.utils.datetime import to_excel
from openpyxl.utils.exceptions import InvalidFileException

from backend.parsers.models import Workbook

logger = logging.getLogger(__name__)

_OPENPYXL_EXTENSIONS = (".xlsx", ".xlsm")
_XLRD_EXTENSIONS = (".xls",)
SUPPORTED_EXTENSIONS = _OPENPYXL_EXTENSIONS + _XLRD_EXTENSIONS


class WorkbookReadError(ValueError):
    """Arquivo não pôde ser lido como planilha."""


def _to_cell(value: Any) -> Any:
    """Normaliza uma célula para texto, número ou "".

    Datas viram o número serial do Excel, como na leitura de .xls via xlrd.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, (int, float, str)):
        return value
    if isinstance(value, (datetime, date, time)):
        return to_excel(value)
    return str(value)


def _trim_trailing_empty(row: list[Any]) -> list[Any]:
    end = len(row)
    while end > 0 and row[end - 1] == "":
        end -= 1
    return row[:end]


def _read_xlsx(content: bytes) -> dict[str, list[list[Any]]]:
    """Lê todas as abas de um .xlsx via openpyxl (valores, não fórmulas)."""
    workbook = openpyxl.load_workbook(
        io.BytesIO(content), read_only=True, data_only=True
    )
    sheets: dict[str, list[list[Any]]] = {}
    try:
        for ws in workbook.worksheets:
            sheets[ws.title] = [
                _trim_trailing_empty([_to_cell(v) for v in row])
                for row in ws.iter_rows(values_only=True)
            ]
    finally:
        workbook.close()
    return sheets


def _read_xls(content: bytes) -> dict[str, list[list[Any]]]:
    """Lê todas as abas de um .xls (Excel 97-2003) via xlrd."""
    workbook = xlrd.open_workbook(file_contents=content)
    sheets: dict[str, list[list[Any]]] = {}
    for sheet in workbook.sheets():
        sheets[sheet.name] = [
            _trim_trailing_empty([_to_cell(v) for v in sheet.row_values(r)])
            for r in range(sheet.nrows)
        ]
    return sheets


def read_workbook(content: bytes, filename: str = "planilha.xlsx") -> Workbook:
    """Decodifica o conteúdo de uma planilha.

    Args:
        content: Bytes do arquivo.
        filename: Nome do arquivo; a extensão escolhe o leitor.

    Returns:
        Dicionário ordenado (ordem das abas no arquivo) nome → linhas.

    Raises:
        WorkbookReadError: Extensão não suportada ou arquivo corrompido.
    """
    if not content:
        raise WorkbookReadError("Arquivo vazio.")

    ext = os.path.splitext(filename)[1].lower()

    try:
        if ext in _OPENPYXL_EXTENSIONS:
            sheets = _read_xlsx(content)
        elif ext in _XLRD_EXTENSIONS:
            sheets = _read_xls(content)
        else:
            raise WorkbookReadError(
                f"Formato de arquivo não suportado: '{ext}'. Use .xlsx ou .xls."
            )
    except WorkbookReadError:
        raise
    except (
        zipfile.BadZipFile,
        InvalidFileException,
        xlrd.XLRDError,
        KeyError,
        OSError,
        ValueError,
    ) as exc:
        raise WorkbookReadError(f"Não foi possível ler a planilha: {exc}") from exc

    logger.info(
        "Planilha '%s' lida: %d abas (%s).",
        filename,
        len(sheets),
        ", ".join(sheets),
    )
    return sheets
