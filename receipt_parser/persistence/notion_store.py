from typing import Any

import httpx

from receipt_parser.extraction.models import ExtractedRecord
from receipt_parser.logging.logger import Log
from receipt_parser.persistence.base import BaseRecordStore
from receipt_parser.persistence.exceptions import PersistenceError
from receipt_parser.persistence.models import Credentials, PropertyNames
from receipt_parser.persistence.property_mapper import build_properties


class NotionRecordStore(BaseRecordStore):
    """Creates one Notion database page per receipt via the REST API."""

    def __init__(
        self,
        *,
        base_url: str = "https://api.notion.com/v1",
        notion_version: str = "2022-06-28",
        timeout_seconds: int = 30,
        property_names: PropertyNames | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._notion_version = notion_version
        self._property_names = property_names or PropertyNames()
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            transport=transport,
        )

    def save(self, record: ExtractedRecord, credentials: Credentials) -> str:
        payload = {
            "parent": {"database_id": credentials.database_id},
            "properties": build_properties(record, self._property_names),
        }
        Log.debug(f"Creating Notion page in database {credentials.database_id}")
        try:
            response = self._client.post(
                "/pages",
                json=payload,
                headers=self._headers(credentials),
            )
        except httpx.HTTPError as exc:
            raise PersistenceError(f"Notion request failed: {exc}") from exc

        if response.is_error:
            raise PersistenceError(
                _error_message(response),
                status_code=response.status_code,
            )

        page_id = _json_body(response).get("id")
        if not isinstance(page_id, str) or not page_id:
            raise PersistenceError(
                "Notion response did not contain a page id",
                status_code=response.status_code,
            )
        Log.info(f"Created Notion page {page_id}")
        return page_id

    def close(self) -> None:
        self._client.close()

    def _headers(self, credentials: Credentials) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {credentials.api_key}",
            "Notion-Version": self._notion_version,
            "Content-Type": "application/json",
        }


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _error_message(response: httpx.Response) -> str:
    message = _json_body(response).get("message")
    if isinstance(message, str) and message:
        return message
    return response.text or response.reason_phrase
