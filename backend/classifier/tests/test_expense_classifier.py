"""
Testes para o classificador de despesas (FIXA × VARIÁVEL).
"""

from __future__ import annotations

import pytest

from backend.classifier.expense_classifier import classify_expense
from backend.classifier.fixed_expenses import FIXED_EXPENSE_KEYWORDS
from backend.parsers.models import ExpenseCategory


class TestFixedExpenseKeywords:
    """Validações de integridade da tabela de palavras-chave."""

    def test_nao_vazia(self) -> None:
        assert len(FIXED_EXPENSE_KEYWORDS) > 0

    def test_todas_em_maiusculas(self) -> None:
        """A comparação é feita sobre o nome em maiúsculas."""
        for keyword in FIXED_EXPENSE_KEYWORDS:
            assert keyword == keyword.upper(), f"'{keyword}' não está em maiúsculas"


class TestClassifyExpense:
    @pytest.mark.parametrize(
        "name",
        ["ALUGUEL LOJA", "aluguel", "DAS Simples Nacional", "Contador - março", "INSS", "Adobe CC"],
    )
    def test_fixas(self, name: str) -> None:
        assert classify_expense(name) == ExpenseCategory.FIXED

    @pytest.mark.parametrize("name", ["MARKETING DIGITAL", "Uber", "", "Material de escritório"])
    def test_variaveis(self, name: str) -> None:
        assert classify_expense(name) == ExpenseCategory.VARIABLE

    def test_palavras_customizadas(self) -> None:
        assert classify_expense("Internet fibra", keywords=("INTERNET",)) == ExpenseCategory.FIXED
        assert classify_expense("ALUGUEL", keywords=("INTERNET",)) == ExpenseCategory.VARIABLE

    def test_valores_do_enum(self) -> None:
        assert ExpenseCategory.FIXED.value == "FIXA"
        assert ExpenseCategory.VARIABLE.value == "VARIÁVEL"
