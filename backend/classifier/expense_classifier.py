"""Classificação de despesas em FIXA ou VARIÁVEL por palavra-chave."""

from __future__ import annotations

from typing import Iterable

from backend.classifier.fixed_expenses import FIXED_EXPENSE_KEYWORDS
from backend.parsers.models import ExpenseCategory


def classify_expense(
    name: str, keywords: Iterable[str] = FIXED_EXPENSE_KEYWORDS
) -> ExpenseCategory:
    """Retorna FIXA se o nome contém alguma palavra-chave, senão VARIÁVEL.

    Examples:
        >>> classify_expense("Aluguel loja").value
        'FIXA'
        >>> classify_expense("MARKETING DIGITAL").value
        'VARIÁVEL'
    """
    upper = name.upper()
    if any(k in upper for k in keywords):
        return ExpenseCategory.FIXED
    return ExpenseCategory.VARIABLE
