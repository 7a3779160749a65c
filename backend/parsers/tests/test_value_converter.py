"""
Testes para a conversão de valores de células (normalize_value / cell_text).
"""

from __future__ import annotations

import pytest

from backend.parsers.value_converter import cell_text, normalize_value


# ============================================================================
# Testes de normalize_value
# ============================================================================


class TestNormalizeValue:
    """Testes para normalize_value."""

    def test_formato_brasileiro(self) -> None:
        """Vírgula decimal e ponto de milhar."""
        assert normalize_value("1.234,56") == pytest.approx(1234.56)

    def test_formato_brasileiro_milhoes(self) -> None:
        assert normalize_value("1.234.567,89") == pytest.approx(1234567.89)

    def test_virgula_sem_milhar(self) -> None:
        assert normalize_value("500,5") == pytest.approx(500.5)

    def test_milhar_com_ponto_sem_virgula(self) -> None:
        """Último grupo com 3 dígitos → ponto é separador de milhar."""
        assert normalize_value("1.234") == pytest.approx(1234.0)

    def test_varios_milhares_sem_virgula(self) -> None:
        assert normalize_value("1.234.567") == pytest.approx(1234567.0)

    def test_decimal_com_ponto(self) -> None:
        """Último grupo com 2 dígitos → ponto é decimal."""
        assert normalize_value("12.34") == pytest.approx(12.34)

    def test_heuristica_tres_casas_vira_milhar(self) -> None:
        """Decimal legítimo de 3 casas é lido como milhar (comportamento documentado)."""
        assert normalize_value("1.500") == pytest.approx(1500.0)

    def test_simbolo_de_moeda(self) -> None:
        assert normalize_value("R$ 2.000,00") == pytest.approx(2000.0)

    def test_sinal_negativo_descartado(self) -> None:
        """Só dígitos, vírgula e ponto sobrevivem à limpeza."""
        assert normalize_value("-350,00") == pytest.approx(350.0)

    def test_numero_inteiro(self) -> None:
        assert normalize_value(1500) == pytest.approx(1500.0)

    def test_numero_float_inalterado(self) -> None:
        assert normalize_value(-12.5) == pytest.approx(-12.5)

    def test_nan_vira_zero(self) -> None:
        assert normalize_value(float("nan")) == 0.0

    def test_booleano_vira_zero(self) -> None:
        assert normalize_value(True) == 0.0

    @pytest.mark.parametrize("raw", ["", None, "null", "NULL", "abc", "   ", "-", "."])
    def test_entradas_invalidas_viram_zero(self, raw) -> None:
        assert normalize_value(raw) == 0.0

    def test_varias_virgulas_usa_prefixo(self) -> None:
        """Só a primeira vírgula vira ponto; o resto é descartado pelo prefixo."""
        assert normalize_value("1,234,56") == pytest.approx(1.234)

    def test_retorna_float(self) -> None:
        assert isinstance(normalize_value("10"), float)


# ============================================================================
# Testes de cell_text
# ============================================================================


class TestCellText:
    """Testes para cell_text."""

    def test_vazio(self) -> None:
        assert cell_text(None) == ""
        assert cell_text("") == ""

    def test_float_inteiro_sem_decimal(self) -> None:
        assert cell_text(123.0) == "123"

    def test_float_com_decimal(self) -> None:
        assert cell_text(12.5) == "12.5"

    def test_texto_inalterado(self) -> None:
        assert cell_text("  Acme ") == "  Acme "
