"""
Configuração centralizada da aplicação via variáveis de ambiente.

Usa ``pydantic-settings`` para carregar valores do ``.env`` com validação
e type-casting automático. Todos os campos têm default: sem credenciais
Google a aplicação roda com o repositório em memória.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings

DEFAULT_SHEET_URL = (
    "https://docs.google.com/spreadsheets/d/"
    "123o-txQsbM9gf1aOG8sjlTb7M5WAdkptky4ulO4ixHo/export?format=xlsx"
)


class Settings(BaseSettings):
    """Configurações da aplicação."""

    default_sheet_url: str = DEFAULT_SHEET_URL  # valor inicial de sheet_url
    google_credentials_json: str = ""
    storage_spreadsheet_id: str = ""  # planilha usada como repositório
    fetch_timeout_seconds: float = 30.0
    frontend_url: str = "http://localhost:3000"
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def sheets_storage_enabled(self) -> bool:
        return bool(self.google_credentials_json and self.storage_spreadsheet_id)


@lru_cache
def get_settings() -> Settings:
    """Retorna instância única de Settings (cached)."""
    return Settings()
