"""HTTP client for the warehouse REST backend."""

from __future__ import annotations

import logging
from typing import Any

import requests

from warehouse.config import BackendConfig
from warehouse.exceptions import ApiError, BackendUnavailableError, NotFoundError

logger = logging.getLogger(__name__)

UNAVAILABLE_STATUSES = frozenset({500, 502, 503, 504})


class BackendClient:
    """Thin wrapper around ``requests.Session`` for the backend API.

    Every call is bounded by ``config.timeout_seconds``. Failures are
    mapped onto the warehouse exception hierarchy:

    - 404 -> ``NotFoundError``
    - 500/502/503/504, timeouts and connection errors -> ``BackendUnavailableError``
    - any other non-2xx -> ``ApiError``

    Parameters
    ----------
    config : BackendConfig | None
        Backend URL and timeout.
    session : requests.Session | None
        Pre-built session (tests inject one).
    """

    def __init__(
        self,
        config: BackendConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or BackendConfig()
        self.session = session or requests.Session()
        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
        })

    def request(self, method: str, endpoint: str, payload: Any = None) -> Any:
        """Send a request and return the decoded JSON body.

        Non-JSON or empty bodies (typical for DELETE) yield ``{}``.
        """
        url = self.config.url_for(endpoint)
        logger.debug("Backend request: %s %s", method, url)
        try:
            resp = self.session.request(
                method,
                url,
                json=payload,
                timeout=self.config.timeout_seconds,
            )
        except requests.Timeout as exc:
            logger.error("Backend timeout for %s %s", method, url)
            raise BackendUnavailableError("Erro de conexão com o servidor") from exc
        except requests.RequestException as exc:
            logger.error("Network error for %s %s: %s", method, url, exc)
            raise BackendUnavailableError("Erro de conexão com o servidor") from exc

        if not resp.ok:
            self._raise_for_status(resp, method, url)

        content_type = resp.headers.get("content-type", "")
        if "application/json" in content_type and resp.content:
            return resp.json()
        return {}

    def _raise_for_status(self, resp: requests.Response, method: str, url: str) -> None:
        logger.error("Backend responded with error: %s %s (%s %s)", resp.status_code, resp.reason, method, url)
        if resp.status_code == 404:
            raise NotFoundError("Recurso não encontrado")
        if resp.status_code in UNAVAILABLE_STATUSES:
            raise BackendUnavailableError("Serviço temporariamente indisponível")
        raise ApiError(resp.status_code, self._error_message(resp))

    @staticmethod
    def _error_message(resp: requests.Response) -> str:
        fallback = f"HTTP {resp.status_code}: {resp.reason}"
        try:
            data = resp.json()
        except ValueError:
            return resp.text or fallback
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return resp.text or fallback

    def get(self, endpoint: str) -> Any:
        return self.request("GET", endpoint)

    def post(self, endpoint: str, payload: Any) -> Any:
        return self.request("POST", endpoint, payload)

    def put(self, endpoint: str, payload: Any) -> Any:
        return self.request("PUT", endpoint, payload)

    def delete(self, endpoint: str) -> None:
        self.request("DELETE", endpoint)

    def fetch_list(self, endpoint: str) -> list[dict[str, Any]]:
        """GET a collection; a non-list body is treated as empty."""
        data = self.get(endpoint)
        return data if isinstance(data, list) else []

    def fetch_one(self, endpoint: str, resource_id: str | int) -> dict[str, Any]:
        """GET ``{endpoint}/{resource_id}``."""
        return self.get(f"{endpoint.rstrip('/')}/{resource_id}")

    def is_available(self) -> bool:
        """Check the backend health endpoint without raising."""
        try:
            self.get(self.config.health_endpoint)
        except (BackendUnavailableError, NotFoundError, ApiError) as exc:
            logger.warning("Backend availability check failed: %s", exc)
            return False
        return True

    def close(self) -> None:
        self.session.close()
