"""
Testes dos endpoints HTTP com FastAPI TestClient.

O repositório em memória é injetado direto em ``app.state`` (sem lifespan)
e o download do Google Sheets é mockado.
"""

from __future__ import annotations

import io
from unittest.mock import patch

import openpyxl
import pytest
from fastapi.testclient import TestClient

from backend.main import app
from backend.repository import SETTING_SHEET_URL, InMemoryRepository
from backend.routers import dashboard, upload
from backend.sheets.exceptions import WorkbookFetchError

_PATCH_FETCH = "backend.routers.upload.fetch_workbook"

SHEET_URL = "https://docs.google.com/spreadsheets/d/abc/edit"

WORKBOOK = {
    "JANEIRO": [
        ["CLIENTES/ENTRADA", "", "", "", "SAÍDA MENSAL"],
        ["Acme", "1.000,00", "PAGO", "", "ALUGUEL", "800", "PAGO"],
        ["Beta", 500, "", "", "Uber", "50,00", ""],
    ],
}


def _xlsx_bytes(rows: list[list]) -> bytes:
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "JANEIRO"
    for row in rows:
        ws.append(row)
    buffer = io.BytesIO()
    wb.save(buffer)
    return buffer.getvalue()


@pytest.fixture()
def repository():
    repo = InMemoryRepository({SETTING_SHEET_URL: SHEET_URL})
    app.state.repository = repo
    dashboard.invalidate_cache()
    upload._recent_processings.clear()
    yield repo
    dashboard.invalidate_cache()


@pytest.fixture()
def client(repository):
    return TestClient(app)


# ============================================================================
# /api/upload
# ============================================================================


class TestUpload:
    def test_sem_arquivo(self, client):
        resp = client.post("/api/upload")
        assert resp.status_code == 400
        assert resp.json()["detail"] == "Nenhum arquivo enviado."

    def test_upload_xlsx(self, client, repository):
        content = _xlsx_bytes(WORKBOOK["JANEIRO"])
        resp = client.post(
            "/api/upload",
            files={"file": ("fluxo.xlsx", content, "application/octet-stream")},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["revenue_entries"] == 2
        assert body["expense_entries"] == 2
        assert body["summary_tab_found"] is False

        stored = repository.get_result()
        assert [r.cliente for r in stored.revenue_entries] == ["Acme", "Beta"]

    def test_arquivo_invalido(self, client):
        resp = client.post(
            "/api/upload",
            files={"file": ("fluxo.xlsx", b"lixo", "application/octet-stream")},
        )
        assert resp.status_code == 400
        assert "Não foi possível ler" in resp.json()["detail"]

    def test_status_registra_processamento(self, client):
        client.post(
            "/api/upload",
            files={"file": ("fluxo.xlsx", _xlsx_bytes([["CLIENTES"], ["Acme", 10]]), "application/octet-stream")},
        )
        processings = client.get("/api/upload/status").json()["processings"]
        assert len(processings) == 1
        assert processings[0]["source"] == "fluxo.xlsx"


# ============================================================================
# /api/sync-google
# ============================================================================


class TestSyncGoogle:
    def test_sucesso(self, client, repository):
        with patch(_PATCH_FETCH, return_value=WORKBOOK) as mock_fetch:
            resp = client.post("/api/sync-google")
        assert resp.status_code == 200
        assert resp.json()["revenue_entries"] == 2
        assert mock_fetch.call_args.args[0] == SHEET_URL
        assert repository.get_result() is not None

    def test_falha_no_download(self, client, repository):
        with patch(_PATCH_FETCH, side_effect=WorkbookFetchError("Falha ao baixar planilha")):
            resp = client.post("/api/sync-google")
        assert resp.status_code == 500
        assert "Falha ao baixar" in resp.json()["detail"]
        assert repository.get_result() is None

    def test_url_nao_configurada(self, client, repository):
        repository.set_setting(SETTING_SHEET_URL, "")
        with patch(_PATCH_FETCH) as mock_fetch:
            resp = client.post("/api/sync-google")
        assert resp.status_code == 500
        mock_fetch.assert_not_called()


# ============================================================================
# /api/dashboard
# ============================================================================


class TestDashboard:
    def test_vazio(self, client):
        body = client.get("/api/dashboard").json()
        assert body["annualSummary"] == {
            "total_entradas": 0.0,
            "total_saidas": 0.0,
            "saldo_atual": 0.0,
        }
        assert len(body["monthlySeries"]) == 12
        assert body["revenueEntries"] == []
        assert body["expenseEntries"] == []

    def test_apos_sincronizacao(self, client):
        client.get("/api/dashboard")  # popula o cache vazio
        with patch(_PATCH_FETCH, return_value=WORKBOOK):
            client.post("/api/sync-google")

        body = client.get("/api/dashboard").json()
        assert body["annualSummary"]["total_entradas"] == pytest.approx(1500.0)
        assert body["annualSummary"]["total_saidas"] == pytest.approx(850.0)
        assert body["annualSummary"]["saldo_atual"] == pytest.approx(650.0)
        janeiro = body["monthlySeries"][0]
        assert janeiro["mes"] == "JANEIRO"
        assert janeiro["saldo"] == pytest.approx(650.0)
        tipos = {d["nome_despesa"]: d["tipo"] for d in body["expenseEntries"]}
        assert tipos == {"ALUGUEL": "FIXA", "Uber": "VARIÁVEL"}

    def test_sem_repositorio(self, client):
        del app.state.repository
        resp = client.get("/api/dashboard")
        assert resp.status_code == 503


# ============================================================================
# /api/settings
# ============================================================================


class TestSettings:
    def test_get(self, client):
        assert client.get("/api/settings").json() == {"sheet_url": SHEET_URL}

    def test_post_atualiza(self, client):
        resp = client.post("/api/settings", json={"sheet_url": "https://nova"})
        assert resp.json() == {"success": True}
        assert client.get("/api/settings").json() == {"sheet_url": "https://nova"}

    def test_post_url_invalida(self, client):
        resp = client.post("/api/settings", json={"sheet_url": 42})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "URL da planilha inválida."

    def test_post_sem_url(self, client):
        resp = client.post("/api/settings", json={})
        assert resp.status_code == 400


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
