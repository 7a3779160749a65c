"""
Pacote classificador de despesas (FIXA × VARIÁVEL).

Exporta:
- FIXED_EXPENSE_KEYWORDS: palavras-chave de despesas recorrentes
- classify_expense: classificação de uma despesa pelo nome
"""

from backend.classifier.expense_classifier import classify_expense
from backend.classifier.fixed_expenses import FIXED_EXPENSE_KEYWORDS

__all__ = [
    "FIXED_EXPENSE_KEYWORDS",
    "classify_expense",
]
