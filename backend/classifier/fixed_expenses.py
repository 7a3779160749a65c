"""
Tabela estática de despesas recorrentes (fixas).

Qualquer despesa cujo nome contenha uma destas palavras-chave é
classificada como FIXA; as demais são VARIÁVEIS.
"""

from __future__ import annotations

FIXED_EXPENSE_KEYWORDS: tuple[str, ...] = (
    "ALUGUEL",   # aluguel de loja/escritório
    "ENVATO",    # assinatura de assets
    "SIMPLES",   # DAS do Simples Nacional
    "CONTADOR",  # honorários contábeis
    "INSS",      # pró-labore / encargos
    "ICARO",
    "CHATGPT",
    "ADOBE",
)
