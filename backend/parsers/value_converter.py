"""
Módulo de conversão de valores de células de planilhas de fluxo de caixa.

As planilhas são preenchidas à mão, então a mesma coluna pode trazer
números já tipados (``1500.0``), textos no formato brasileiro
("1.500,00"), textos no formato americano ("1500.50"), símbolos de moeda
("R$ 1.500,00") ou lixo ("a confirmar"). Tudo é convertido para float,
e qualquer coisa não reconhecida vira zero.
"""

from __future__ import annotations

import math
import re

# Só dígitos, vírgula e ponto sobrevivem à limpeza
_STRIP_RE = re.compile(r"[^\d,.]")

# Maior prefixo decimal válido (mesmo comportamento de um parseFloat)
_DECIMAL_PREFIX_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def cell_text(cell: object) -> str:
    """Retorna o texto de uma célula como a planilha o exibiria.

    Células vazias (``None`` ou ``""``) viram ``""``; floats inteiros
    perdem o ``.0`` (``123.0`` → ``"123"``).
    """
    if cell is None:
        return ""
    if isinstance(cell, float):
        if math.isnan(cell):
            return ""
        if cell.is_integer():
            return str(int(cell))
    return str(cell)


def normalize_value(raw: object) -> float:
    """Converte o conteúdo bruto de uma célula em valor numérico.

    Regras:
        - Número já tipado → devolvido como float (NaN vira 0).
        - Vazio, ``None`` ou o texto "null" → 0.
        - Com vírgula → formato brasileiro: pontos são milhar, vírgula é decimal.
        - Sem vírgula → se o último grupo após o ponto tem 3 dígitos, os
          pontos são separadores de milhar; senão o ponto é decimal.

    O último caso é uma heurística: "1.234" vira 1234, "12.34" vira 12.34,
    e um decimal legítimo com 3 casas ("1.500" querendo dizer 1,5) é lido
    como milhar.

    Args:
        raw: Valor da célula (str, int, float, None).

    Returns:
        Valor convertido; nunca levanta exceção e nunca devolve NaN.

    Examples:
        >>> normalize_value("1.234,56")
        1234.56
        >>> normalize_value("1.234")
        1234.0
        >>> normalize_value("12.34")
        12.34
        >>> normalize_value("abc")
        0.0
    """
    if isinstance(raw, bool):
        # bool é subclasse de int, mas TRUE/FALSE não é valor monetário
        return 0.0

    if isinstance(raw, (int, float)):
        value = float(raw)
        return 0.0 if math.isnan(value) else value

    if raw is None:
        return 0.0

    text = str(raw).strip()
    if not text or text.lower() == "null":
        return 0.0

    cleaned = _STRIP_RE.sub("", text)
    if not cleaned:
        return 0.0

    if "," in cleaned:
        # Formato brasileiro: 1.234,56 → 1234.56
        cleaned = cleaned.replace(".", "").replace(",", ".", 1)
    else:
        parts = cleaned.split(".")
        if len(parts) > 1 and len(parts[-1]) == 3:
            cleaned = cleaned.replace(".", "")

    match = _DECIMAL_PREFIX_RE.match(cleaned)
    if not match:
        return 0.0

    try:
        return float(match.group(0))
    except ValueError:
        return 0.0
