# cartografia/services/sheets/client.py
import httpx
import logging
from typing import Any, Dict, Optional

from cartografia.core.exceptions import RepositoryError, AreaNotFoundError

logger = logging.getLogger(__name__)

class AppsScriptClient:
    """
    Fala com o Web App do Google Apps Script que fica atrás da planilha.
    GET leva os parâmetros na query, POST leva no corpo JSON.
    O script responde erros com HTTP 200 + {"error": "..."}; tratamos aqui.
    """

    HEADERS = {"Content-Type": "application/json"}

    def __init__(self, script_url: str, timeout: float = 30.0, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.script_url = script_url
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        # O Apps Script redireciona (302) para googleusercontent.com
        return httpx.AsyncClient(
            timeout=self.timeout,
            headers=self.HEADERS,
            follow_redirects=True,
            transport=self.transport,
        )

    async def call(self, action: str, payload: Optional[Dict[str, Any]] = None, method: str = "GET") -> Any:
        if not self.script_url:
            raise RepositoryError("Missing APPS_SCRIPT_URL in environment variables.")

        params = {"action": action, **(payload or {})}

        async with self._client() as client:
            try:
                if method == "GET":
                    response = await client.get(self.script_url, params=params)
                else:
                    response = await client.post(self.script_url, json=params)
            except httpx.HTTPError as e:
                logger.error(f"Erro de conexão com o Apps Script ({action}): {e}")
                raise RepositoryError(f"Error connecting to Sheet Script: {e}") from e

        if response.status_code != 200:
            logger.error(f"Apps Script respondeu {response.status_code} para {action}")
            raise RepositoryError(f"Error connecting to Sheet Script: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"JSON inválido do Script: {response.text[:500]}")
            raise RepositoryError("Invalid response format from Google Sheet Script") from e

        if isinstance(data, dict) and data.get("error"):
            message = str(data["error"])
            if "no encontrado" in message and payload and payload.get("ID_AREA"):
                raise AreaNotFoundError(str(payload["ID_AREA"]))
            raise RepositoryError(message)

        return data
