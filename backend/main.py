"""
FastAPI principal: ingestão de planilhas de fluxo de caixa e dashboard.

Inicializa o repositório (Google Sheets quando configurado, memória caso
contrário), CORS, e monta todos os routers.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.config import Settings, get_settings
from backend.repository import SETTING_SHEET_URL, FinanceRepository, InMemoryRepository
from backend.routers import dashboard, settings as settings_router, upload
from backend.sheets.result_writer import SheetsRepository
from backend.sheets.sheets_client import SheetsClient

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Repositório
# ---------------------------------------------------------------------------


def build_repository(app_settings: Settings) -> FinanceRepository:
    """Escolhe o repositório conforme a configuração e semeia o sheet_url."""
    repository: FinanceRepository
    if app_settings.sheets_storage_enabled:
        try:
            client = SheetsClient(
                credentials_json=app_settings.google_credentials_json,
                spreadsheet_id=app_settings.storage_spreadsheet_id,
            )
            repository = SheetsRepository(client)
            logger.info("Repositório Google Sheets inicializado com sucesso.")
        except Exception as exc:
            logger.error(
                "Falha ao inicializar repositório no Sheets, usando memória: %s", exc
            )
            repository = InMemoryRepository()
    else:
        repository = InMemoryRepository()
        logger.info("Repositório em memória inicializado.")

    if not repository.get_setting(SETTING_SHEET_URL):
        repository.set_setting(SETTING_SHEET_URL, app_settings.default_sheet_url)
    return repository


# ---------------------------------------------------------------------------
# Lifespan: inicializa o repositório uma vez
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(application: FastAPI):
    """Inicializa recursos compartilhados no startup."""
    application.state.repository = build_repository(get_settings())
    yield


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Planilha Financeira API",
    description="Ingestão de planilhas de fluxo de caixa mensais e dashboard anual.",
    version="1.0.0",
    lifespan=lifespan,
)

# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------
_origins = [settings.frontend_url]
if "localhost" not in settings.frontend_url:
    _origins.append("http://localhost:3000")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------
app.include_router(upload.router)
app.include_router(dashboard.router)
app.include_router(settings_router.router)


# ---------------------------------------------------------------------------
# Health check
# ---------------------------------------------------------------------------


@app.get("/health")
async def health():
    return {"status": "ok"}
