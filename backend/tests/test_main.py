"""
Testes para a escolha do repositório no startup.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pandas as pd

from backend.config import DEFAULT_SHEET_URL, Settings
from backend.main import build_repository
from backend.repository import SETTING_SHEET_URL, InMemoryRepository
from backend.sheets.exceptions import AuthenticationError
from backend.sheets.result_writer import SheetsRepository

_PATCH_CLIENT = "backend.main.SheetsClient"


class TestBuildRepository:
    def test_sem_credenciais_usa_memoria(self) -> None:
        repo = build_repository(Settings(google_credentials_json="", storage_spreadsheet_id=""))
        assert isinstance(repo, InMemoryRepository)
        assert repo.get_setting(SETTING_SHEET_URL) == DEFAULT_SHEET_URL

    def test_url_padrao_configuravel(self) -> None:
        repo = build_repository(
            Settings(google_credentials_json="", default_sheet_url="https://minha")
        )
        assert repo.get_setting(SETTING_SHEET_URL) == "https://minha"

    def test_falha_no_sheets_cai_para_memoria(self) -> None:
        settings = Settings(google_credentials_json="{}", storage_spreadsheet_id="id")
        with patch(_PATCH_CLIENT, side_effect=AuthenticationError("inválidas")):
            repo = build_repository(settings)
        assert isinstance(repo, InMemoryRepository)

    def test_sheets_configurado(self) -> None:
        settings = Settings(google_credentials_json="{}", storage_spreadsheet_id="id")
        fake_client = MagicMock()
        fake_client.read_sheet.return_value = pd.DataFrame()
        with patch(_PATCH_CLIENT, return_value=fake_client):
            repo = build_repository(settings)
        assert isinstance(repo, SheetsRepository)
        fake_client.append_rows.assert_called_once_with(
            "Configurações", [[SETTING_SHEET_URL, DEFAULT_SHEET_URL]]
        )
