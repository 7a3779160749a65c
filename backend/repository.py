"""
Repositório do último resultado de ingestão e das configurações do usuário.

O motor de ingestão não conhece o armazenamento: quem chama recebe um
``IngestionResult`` e o entrega a ``replace_all``, que substitui todo o
conteúdo anterior (não há atualização incremental).
"""

from __future__ import annotations

import copy
import logging
import threading
from abc import ABC, abstractmethod

from backend.parsers.models import IngestionResult

logger = logging.getLogger(__name__)

SETTING_SHEET_URL = "sheet_url"


class FinanceRepository(ABC):
    """Interface de armazenamento usada pelos routers."""

    @abstractmethod
    def replace_all(self, result: IngestionResult) -> None:
        """Substitui todos os lançamentos e o resumo pelo novo resultado."""

    @abstractmethod
    def get_result(self) -> IngestionResult | None:
        """Último resultado gravado, ou ``None`` se nada foi ingerido."""

    @abstractmethod
    def get_setting(self, key: str, default: str = "") -> str:
        ...

    @abstractmethod
    def set_setting(self, key: str, value: str) -> None:
        ...


class InMemoryRepository(FinanceRepository):
    """Repositório em memória do processo (perdido ao reiniciar)."""

    def __init__(self, initial_settings: dict[str, str] | None = None) -> None:
        self._lock = threading.Lock()
        self._result: IngestionResult | None = None
        self._settings: dict[str, str] = dict(initial_settings or {})

    def replace_all(self, result: IngestionResult) -> None:
        with self._lock:
            self._result = copy.deepcopy(result)
        logger.info(
            "Repositório em memória atualizado: %d entradas, %d saídas.",
            len(result.revenue_entries),
            len(result.expense_entries),
        )

    def get_result(self) -> IngestionResult | None:
        with self._lock:
            return copy.deepcopy(self._result)

    def get_setting(self, key: str, default: str = "") -> str:
        with self._lock:
            return self._settings.get(key, default)

    def set_setting(self, key: str, value: str) -> None:
        with self._lock:
            self._settings[key] = value
        logger.info("Configuração '%s' atualizada.", key)
