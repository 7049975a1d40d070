"""AppSheet REST client implementing the Ledger protocol."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, Sequence
from urllib.parse import quote

import httpx

from payroll_tool.config import LedgerConfig
from payroll_tool.ledger.protocols import LedgerRow
from payroll_tool.ledger.selectors import Selector
from payroll_tool.models import LedgerConfigError, LedgerError
from payroll_tool.parsers.values import shorten

logger = logging.getLogger(__name__)

_ROW_CONTAINERS = ("Rows", "rows", "Items", "items", "Data", "data")


def rows_from_response(payload: Any) -> Optional[list[LedgerRow]]:
    """Extract the row list from a Find response, whatever its envelope.

    Returns None when the response carries no row list at all.
    """
    if isinstance(payload, list):
        return [r for r in payload if isinstance(r, dict)]
    if isinstance(payload, dict):
        for key in _ROW_CONTAINERS:
            value = payload.get(key)
            if isinstance(value, list):
                return [r for r in value if isinstance(r, dict)]
    return None


class AppSheetLedger:
    """One AppSheet table, addressed through the v2 Action endpoint."""

    def __init__(
        self,
        config: LedgerConfig,
        table: Optional[str] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._config = config
        self._table = table or config.payroll_table
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=config.timeout)

    @property
    def table(self) -> str:
        return self._table

    @property
    def url(self) -> str:
        base = self._config.base_url.rstrip("/")
        return (f"{base}/apps/{quote(self._config.app_id, safe='')}"
                f"/tables/{quote(self._table, safe='')}/Action")

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "AppSheetLedger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _post(self, action: str, body: dict[str, Any]) -> httpx.Response:
        if not self._config.app_id or not self._config.access_key:
            raise LedgerConfigError(
                "Ledger credentials not set (PAYROLL_LEDGER_APP_ID / PAYROLL_LEDGER_ACCESS_KEY)",
                action=action,
                table=self._table,
            )
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "ApplicationAccessKey": self._config.access_key,
            "ApplicationId": self._config.app_id,
        }
        try:
            return self._client.post(self.url, json=body, headers=headers)
        except httpx.HTTPError as e:
            raise LedgerError(
                f"{action} on table '{self._table}' failed: {e}",
                action=action,
                table=self._table,
            ) from e

    def find(self, selector: Selector, columns: Optional[Sequence[str]] = None) -> list[LedgerRow]:
        expression = selector.render()
        properties: dict[str, Any] = {"Selector": expression}
        if columns:
            properties["Columns"] = list(columns)

        resp = self._post("Find", {"Action": "Find", "Properties": properties})
        text = resp.text
        logger.info(
            "Find status %s Selector=%s :: %s", resp.status_code, expression, shorten(text),
            extra={"action": "Find", "table": self._table},
        )

        if resp.is_error:
            logger.warning(
                "Find returned HTTP %s, treating as no rows", resp.status_code,
                extra={"action": "Find", "table": self._table},
            )
            return []
        if not text.strip():
            return []
        try:
            payload = json.loads(text)
        except ValueError as e:
            logger.warning(
                "Find JSON parse failed, returning no rows: %s", e,
                extra={"action": "Find", "table": self._table},
            )
            return []
        rows = rows_from_response(payload)
        if rows is None:
            logger.warning(
                "Find response carried no row list, treating as no rows :: %s", shorten(text),
                extra={"action": "Find", "table": self._table},
            )
            return []
        return rows

    def _invoke(self, action: str, rows: list[LedgerRow]) -> dict[str, Any]:
        properties: dict[str, Any] = {
            "Locale": self._config.locale,
            "Timezone": self._config.timezone,
            "UserSettings": {},
        }
        if self._config.run_as_user_email:
            properties["RunAsUserEmail"] = self._config.run_as_user_email

        resp = self._post(action, {"Action": action, "Properties": properties, "Rows": rows})
        text = resp.text
        logger.info(
            "%s status %s :: %s", action, resp.status_code, shorten(text),
            extra={"action": action, "table": self._table},
        )

        if not text:
            return {"Status": resp.status_code, "Raw": ""}
        try:
            parsed = json.loads(text)
        except ValueError:
            return {"Status": resp.status_code, "Raw": text}
        if isinstance(parsed, dict):
            return parsed
        return {"Rows": parsed}

    def add(self, rows: list[LedgerRow]) -> dict[str, Any]:
        return self._invoke("Add", rows)

    def edit(self, rows: list[LedgerRow]) -> dict[str, Any]:
        return self._invoke("Edit", rows)
