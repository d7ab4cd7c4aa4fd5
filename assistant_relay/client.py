# Fichero: assistant_relay/client.py - API de Assistants (OpenAI / Azure OpenAI)
import os
import logging
from typing import Mapping, Optional

import requests

from .config import OPENAI_BASE, api_key_from_env, read_number
from .errors import UnexpectedShapeError, UpstreamError


class AssistantClient:
    """
    Cliente REST mínimo para threads, messages y runs.

    Se crea una sola vez por proceso y se pasa explícitamente a quien lo use;
    la Session de requests reutiliza las conexiones entre invocaciones.
    Con ``api_version`` se habla con Azure OpenAI (cabecera ``api-key`` y
    parámetro ``api-version``); sin él, con la API pública de OpenAI.
    """

    def __init__(self, api_key: str, endpoint: str = OPENAI_BASE,
                 api_version: Optional[str] = None, timeout: float = 30.0,
                 session: Optional[requests.Session] = None):
        self.endpoint = endpoint.rstrip("/")
        self.api_version = api_version
        self.timeout = timeout
        self.session = session or requests.Session()
        if api_version:
            self.headers = {"api-key": api_key, "Content-Type": "application/json"}
        else:
            self.headers = {
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
                "OpenAI-Beta": "assistants=v2",
            }

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AssistantClient":
        env = os.environ if env is None else env
        api_key = api_key_from_env(env)
        if not api_key:
            # No es fatal aquí: load_settings() rechazará cada petición
            logging.warning("🔴 OPENAI_API_KEY está vacía")
        return cls(
            api_key=api_key,
            endpoint=env.get("ASSISTANT_API_BASE") or OPENAI_BASE,
            api_version=env.get("AZURE_OPENAI_API_VERSION") or None,
            # Un valor mal escrito impide cargar la función
            timeout=read_number(env, "RELAY_REQUEST_TIMEOUT", 30.0, float),
        )

    # --- transporte ---

    def _call(self, operation: str, method: str, path: str, json=None, params=None) -> dict:
        params = dict(params or {})
        if self.api_version:
            params["api-version"] = self.api_version
        try:
            r = self.session.request(
                method, f"{self.endpoint}{path}",
                headers=self.headers, json=json, params=params or None,
                timeout=self.timeout)
            r.raise_for_status()
            return r.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            body = e.response.text[:500] if e.response is not None else ""
            logging.error("%s -> HTTP %s: %s", operation, status, body)
            raise UpstreamError(operation, body, status_code=status) from e
        except requests.exceptions.RequestException as e:
            logging.error("%s -> %s", operation, e)
            raise UpstreamError(operation, str(e)) from e

    # --- operaciones ---

    def create_thread(self) -> dict:
        return self._call("create_thread", "POST", "/threads", json={})

    def create_message(self, thread_id: str, role: str, content) -> dict:
        return self._call("create_message", "POST", f"/threads/{thread_id}/messages",
                          json={"role": role, "content": content})

    def create_run(self, thread_id: str, assistant_id: str) -> dict:
        return self._call("create_run", "POST", f"/threads/{thread_id}/runs",
                          json={"assistant_id": assistant_id})

    def retrieve_run(self, thread_id: str, run_id: str) -> dict:
        return self._call("retrieve_run", "GET", f"/threads/{thread_id}/runs/{run_id}")

    def cancel_run(self, thread_id: str, run_id: str) -> dict:
        return self._call("cancel_run", "POST", f"/threads/{thread_id}/runs/{run_id}/cancel")

    def list_messages(self, thread_id: str, order: str = "desc", limit: int = 1) -> list:
        page = self._call("list_messages", "GET", f"/threads/{thread_id}/messages",
                          params={"order": order, "limit": limit})
        if not isinstance(page, dict):
            raise UnexpectedShapeError("list_messages returned a non-object page")
        data = page.get("data")
        if data is None:
            return []
        if not isinstance(data, list):
            raise UnexpectedShapeError("list_messages returned a non-list data field")
        return data
