from __future__ import annotations

import logging
from typing import Any, Dict

try:
    import httpx  # optional dependency (declare extra: narrator)
except Exception:  # pragma: no cover
    httpx = None  # type: ignore[assignment]

from ..config import NarratorConfig
from ..core.audit import AuditRecord
from ..core.model import Resource, SystemState, User
from .prompt import build_prompt

logger = logging.getLogger("vaultguard.narrator")

MISSING_KEY_MESSAGE = "AI Configuration Missing: API_KEY not found."
UNAVAILABLE_MESSAGE = "AI Audit temporarily unavailable."


class HttpNarrator:
    """Explains audit records through a Gemini-style ``generateContent`` HTTP API.

    - Pass ``client`` (``httpx.Client``) for sync use or ``async_client``
      (``httpx.AsyncClient``) and call :meth:`explain_async`.
    - Never raises for transport or API failures; returns a fallback message
      instead, so the caller's verdict is unaffected.
    """

    def __init__(
        self,
        config: NarratorConfig,
        *,
        client: "httpx.Client | None" = None,
        async_client: "httpx.AsyncClient | None" = None,
    ) -> None:
        if httpx is None:
            raise RuntimeError(
                "HttpNarrator requires 'httpx' installed. Install with extra: vaultguard[narrator]."
            )
        self.cfg = config
        self._client = client
        self._aclient = async_client

    # ------------- helpers -------------

    def _url(self) -> str:
        base = self.cfg.api_url.rstrip("/")
        return f"{base}/models/{self.cfg.model}:generateContent"

    def _headers(self) -> Dict[str, str]:
        return {"content-type": "application/json", "x-goog-api-key": self.cfg.api_key or ""}

    @staticmethod
    def _body(prompt: str) -> Dict[str, Any]:
        return {"contents": [{"parts": [{"text": prompt}]}]}

    @staticmethod
    def _extract_text(data: Any) -> str:
        try:
            parts = data["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError):
            return UNAVAILABLE_MESSAGE
        text = "".join(str(p.get("text", "")) for p in parts if isinstance(p, dict)).strip()
        return text or UNAVAILABLE_MESSAGE

    # ------------- Narrator -------------

    def explain(
        self, record: AuditRecord, user: User, resource: Resource, state: SystemState
    ) -> str:
        if not self.cfg.api_key:
            return MISSING_KEY_MESSAGE
        if self._client is None:
            self._client = httpx.Client(timeout=self.cfg.timeout_seconds)
        prompt = build_prompt(record, user, resource, state)
        try:
            resp = self._client.post(self._url(), json=self._body(prompt), headers=self._headers())
            resp.raise_for_status()
            return self._extract_text(resp.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("vaultguard: narrator request failed: %s", e, exc_info=True)
            return UNAVAILABLE_MESSAGE

    async def explain_async(
        self, record: AuditRecord, user: User, resource: Resource, state: SystemState
    ) -> str:
        if not self.cfg.api_key:
            return MISSING_KEY_MESSAGE
        if self._aclient is None:
            self._aclient = httpx.AsyncClient(timeout=self.cfg.timeout_seconds)
        prompt = build_prompt(record, user, resource, state)
        try:
            resp = await self._aclient.post(
                self._url(), json=self._body(prompt), headers=self._headers()
            )
            resp.raise_for_status()
            return self._extract_text(resp.json())
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("vaultguard: async narrator request failed: %s", e, exc_info=True)
            return UNAVAILABLE_MESSAGE


__all__ = ["HttpNarrator", "MISSING_KEY_MESSAGE", "UNAVAILABLE_MESSAGE"]
