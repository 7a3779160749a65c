"""
Testes para o repositório em memória.
"""

from __future__ import annotations

from backend.parsers.workbook_parser import parse_workbook
from backend.repository import SETTING_SHEET_URL, InMemoryRepository


def _result(valor: str = "100"):
    return parse_workbook({"JANEIRO": [["CLIENTES"], ["Acme", valor]]})


class TestInMemoryRepository:
    def test_vazio_inicialmente(self) -> None:
        assert InMemoryRepository().get_result() is None

    def test_replace_all_substitui_tudo(self) -> None:
        repo = InMemoryRepository()
        repo.replace_all(_result("100"))
        repo.replace_all(_result("250"))
        stored = repo.get_result()
        assert len(stored.revenue_entries) == 1
        assert stored.revenue_entries[0].valor == 250.0

    def test_resultado_isolado_do_chamador(self) -> None:
        """Alterar o objeto devolvido não altera o armazenado."""
        repo = InMemoryRepository()
        repo.replace_all(_result())
        repo.get_result().revenue_entries.clear()
        assert len(repo.get_result().revenue_entries) == 1

    def test_settings(self) -> None:
        repo = InMemoryRepository({SETTING_SHEET_URL: "https://exemplo"})
        assert repo.get_setting(SETTING_SHEET_URL) == "https://exemplo"
        repo.set_setting(SETTING_SHEET_URL, "https://outro")
        assert repo.get_setting(SETTING_SHEET_URL) == "https://outro"
        assert repo.get_setting("inexistente", "padrão") == "padrão"
