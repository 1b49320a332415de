"""Client for the spreadsheet web-app (Google Apps Script) holding the orders.

Apps Script only reads raw POST bodies reliably, so JSON is sent as text/plain.
Every call carries the shared store secret when one is configured.
"""

import json
from typing import Any

import httpx
import structlog

from palapizza.core.core import Service
from palapizza.core.modules.order.models import OrderStatus
from palapizza.core.modules.store.models import StoreRows, clamp_limit, coerce_count
from palapizza.errors import ConfigurationError, UpstreamError

logger = structlog.get_logger(__name__)

TEXT_JSON_HEADERS = {"Content-Type": "text/plain;charset=utf-8"}


def _parse_json(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return None


class StoreService(Service):
    """Talks to the external order store over HTTP."""

    def ensure_configured(self) -> None:
        if not self.core.config.store_url:
            raise ConfigurationError("PALAPIZZA_STORE_URL mancante")

    def ensure_submit_configured(self) -> None:
        if not self.core.config.order_submit_url:
            raise ConfigurationError("PALAPIZZA_SUBMIT_URL o PALAPIZZA_STORE_URL mancante")

    def _with_secret(self, payload: dict[str, Any]) -> dict[str, Any]:
        secret = self.core.config.store_secret
        return {**payload, "secret": secret} if secret else payload

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self.http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.exception("store_request_failed", method=method, error=str(e))
            raise UpstreamError("Archivio ordini non raggiungibile", details=str(e)) from e

    async def list_rows(self, limit: Any = None, sheet: str | None = None) -> StoreRows:
        """Fetch up to ``limit`` rows (clamped to [1, 500]) from ``sheet``."""
        self.ensure_configured()
        params = self._with_secret(
            {"action": "list", "sheet": sheet or self.core.config.store_sheet, "limit": str(clamp_limit(limit))}
        )
        response = await self._send("GET", self.core.config.store_url, params=params)

        data = _parse_json(response.text)
        if data is None:
            logger.warning("store_list_not_json", status_code=response.status_code)
            raise UpstreamError("Risposta non JSON", details=response.text)
        if not response.is_success or (isinstance(data, dict) and data.get("ok") is False):
            error = data.get("error") if isinstance(data, dict) else None
            logger.warning("store_list_failed", status_code=response.status_code, error=error)
            raise UpstreamError(error or "Errore lista ordini", details=data)
        if not isinstance(data, dict):
            raise UpstreamError("Risposta lista ordini inattesa", details=data)

        rows = data.get("rows")
        if not isinstance(rows, list):
            rows = []
        result = StoreRows(rows=rows, count=coerce_count(data.get("count")))
        logger.debug("store_list", rows=len(result.rows), count=result.count)
        return result

    async def update_status(self, order_id: str, status: OrderStatus) -> Any:
        """Set the status column of one order row, return the store's answer."""
        self.ensure_configured()
        payload = self._with_secret({"action": "updateStatus", "id": order_id, "stato": status.value})
        response = await self._send(
            "POST", self.core.config.store_url, content=json.dumps(payload), headers=TEXT_JSON_HEADERS
        )

        data = _parse_json(response.text)
        if not response.is_success:
            logger.warning("store_update_failed", order_id=order_id, status_code=response.status_code)
            raise UpstreamError(
                f"Errore Apps Script: {response.status_code} {response.reason_phrase}",
                details=data if data is not None else response.text,
            )
        if isinstance(data, dict) and data.get("ok") is False:
            logger.warning("store_update_rejected", order_id=order_id, error=data.get("error"))
            raise UpstreamError(data.get("error") or "Errore updateStatus Apps Script", details=data)

        logger.info("order_status_updated", order_id=order_id, status=status.value)
        return data if data is not None else response.text

    async def append_order(self, row: dict[str, str]) -> Any:
        """Append a new order row, return the store's answer (parsed JSON or raw text)."""
        self.ensure_submit_configured()
        response = await self._send(
            "POST",
            self.core.config.order_submit_url,
            content=json.dumps(self._with_secret(row)),
            headers=TEXT_JSON_HEADERS,
        )

        if not response.is_success:
            logger.warning("store_append_failed", status_code=response.status_code)
            raise UpstreamError(
                f"Errore pannello: {response.status_code} {response.reason_phrase}", details=response.text
            )

        data = _parse_json(response.text)
        return data if data is not None else response.text
