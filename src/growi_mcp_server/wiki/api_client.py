"""
GROWI REST API Client

This module translates each logical wiki operation into exactly one HTTP
exchange against the GROWI ``/_api/v3`` endpoint and classifies the response
into an ``Outcome``.

Failure Semantics
-----------------
No method raises for network, HTTP or payload problems. Transport errors,
non-2xx statuses, undecodable bodies and backend-reported errors are all
returned as ``Failure`` with a descriptive message, so the tool layer can
always render a reply.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..core.outcome import Failure, Outcome, Success

logger = logging.getLogger("mcp.growi")


# ---------------------------------------------------------------------
# Response Helpers
# ---------------------------------------------------------------------

# Everything that can fail before a response exists: network errors, an
# unusable base URL, or a token that cannot be encoded into a header.
TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, UnicodeError)


def _describe_transport_error(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def _error_field(data: Dict[str, Any]) -> Optional[str]:
    error = data.get("error")
    if not error:
        return None
    if isinstance(error, str):
        return error
    return json.dumps(error, ensure_ascii=False)


def _extract_page_body(data: Any) -> Outcome[str]:
    """Classify a decoded ``GET /page`` response."""
    if not isinstance(data, dict):
        data = {}

    if data.get("ok") is False:
        return Failure(_error_field(data) or "Growi API returned ok: false")

    page = data.get("page")
    if not page or not isinstance(page, dict):
        return Failure("Page does not exist")

    revision = page.get("revision")
    body = revision.get("body") if isinstance(revision, dict) else None
    if isinstance(body, str):
        return Success(body)
    return Failure("Page body could not be retrieved")


# ---------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------

class GrowiClient:
    """
    Thin async client for the GROWI page API.

    Parameters
    ----------
    base_url : str
        API root, e.g. ``https://growi.example.com/_api/v3``.

    timeout : Optional[float]
        Per-request timeout in seconds. ``None`` disables it.

    default_grant : int
        Visibility level sent with page writes.

    transport : Optional[httpx.AsyncBaseTransport]
        Injected transport, used by tests to stand in for the wiki.
    """

    def __init__(
        self,
        base_url: str,
        timeout: Optional[float] = 30.0,
        default_grant: int = 1,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.default_grant = default_grant
        self._transport = transport

    @classmethod
    def from_settings(cls, settings) -> "GrowiClient":
        return cls(
            base_url=settings.growi_api_base_url,
            timeout=settings.http_timeout,
            default_grant=settings.growi_default_grant,
        )

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        endpoint: str,
        token: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> httpx.Response:
        headers = {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
        }
        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            return await client.request(
                method,
                f"{self.base_url}{endpoint}",
                params=params,
                json=payload,
                headers=headers,
            )

    async def _get_page(self, params: Dict[str, Any], token: str) -> Outcome[str]:
        try:
            resp = await self._request("GET", "/page", token, params=params)
        except TRANSPORT_ERRORS as exc:
            logger.error("Error fetching Growi page body (%s): %s", params, exc)
            return Failure(_describe_transport_error(exc))

        if not resp.is_success:
            return Failure(f"HTTP error! status: {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as exc:
            logger.error("Undecodable Growi page response (%s): %s", params, exc)
            return Failure(f"Invalid JSON response: {exc} | body: {resp.text}")

        return _extract_page_body(data)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def list_pages(self, token: str) -> Outcome[List[str]]:
        """
        Fetch every page path visible to ``token``.

        Page records without a ``path`` map to the empty string.
        """
        try:
            resp = await self._request("GET", "/pages/list", token)
        except TRANSPORT_ERRORS as exc:
            logger.error("Error fetching Growi pages: %s", exc)
            return Failure(_describe_transport_error(exc))

        if not resp.is_success:
            logger.error("Error fetching Growi pages: status %s", resp.status_code)
            return Failure(f"HTTP error! status: {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as exc:
            logger.error("Undecodable Growi page list: %s", exc)
            return Failure(f"Invalid JSON response: {exc}")

        pages = data.get("pages") if isinstance(data, dict) else None
        if not isinstance(pages, list):
            return Failure("Invalid response format from Growi API")

        return Success([
            (page.get("path") or "") if isinstance(page, dict) else ""
            for page in pages
        ])

    async def get_page_by_path(self, path: str, token: str) -> Outcome[str]:
        """Fetch the latest revision body of the page at ``path``."""
        return await self._get_page({"path": path}, token)

    async def get_page_by_id(self, page_id: str, token: str) -> Outcome[str]:
        """Fetch the latest revision body of the page with ``page_id``."""
        return await self._get_page({"pageId": page_id}, token)

    async def create_or_replace_page(
        self,
        path: str,
        body: str,
        token: str,
    ) -> Outcome[str]:
        """
        Write ``body`` to ``path``.

        GROWI has no separate update verb: the same call creates a missing
        page or overwrites an existing one (last write wins).

        Returns
        -------
        Outcome[str]
            ``Success`` with the page ``_id`` reported by GROWI.
        """
        request_body = {
            "path": path,
            "body": body,
            "grant": self.default_grant,
        }
        logger.info(
            "create_or_replace_page request: path=%s grant=%s body_chars=%d",
            path,
            self.default_grant,
            len(body),
        )

        try:
            resp = await self._request("POST", "/page", token, payload=request_body)
        except TRANSPORT_ERRORS as exc:
            logger.error("Error creating Growi page %s: %s", path, exc)
            return Failure(_describe_transport_error(exc))

        response_text = resp.text
        try:
            data = json.loads(response_text)
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not resp.is_success:
            return Failure(
                f"HTTP error! status: {resp.status_code}, body: {response_text}"
            )

        page = data.get("page")
        page_id = page.get("_id") if isinstance(page, dict) else None
        if page_id:
            return Success(str(page_id))

        return Failure(
            _error_field(data) or f"Unknown error, body: {response_text}"
        )
