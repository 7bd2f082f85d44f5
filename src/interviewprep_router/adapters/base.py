# src/interviewprep_router/adapters/base.py
from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Sequence, Tuple

import requests

from interviewprep_router.core.errors import ProviderHttpError, ProviderResponseError
from interviewprep_router.models import CallResult, Credential, ProviderConfig

logger = logging.getLogger(__name__)


def normalize_messages(messages: Sequence[Any]) -> List[Dict[str, str]]:
    """
    Convert ChatMessage models or dicts into plain {"role", "content"} dicts
    that can be JSON-serialized. Entries without role/content are dropped.
    """
    normalized: List[Dict[str, str]] = []
    for m in messages:
        if hasattr(m, "model_dump"):
            data = m.model_dump()
            role, content = data.get("role"), data.get("content")
        elif isinstance(m, dict):
            role, content = m.get("role"), m.get("content")
        else:
            role, content = getattr(m, "role", None), getattr(m, "content", None)

        if role is None or content is None:
            continue
        normalized.append({"role": str(role), "content": str(content)})
    return normalized


class ProviderAdapter:
    """
    One external provider's wire format.

    Subclasses implement:
      - build_request(messages, system_prompt, credential) -> (url, payload, headers)
      - parse_response(data) -> (content, tokens)

    invoke() does exactly one HTTP call; retries/fallback belong to the Router.
    """

    def __init__(self, cfg: ProviderConfig, timeout_s: float = 30.0) -> None:
        self.cfg = cfg
        self.timeout_s = timeout_s

    @property
    def name(self) -> str:
        return self.cfg.id.value

    def build_request(
        self,
        messages: List[Dict[str, str]],
        system_prompt: str,
        credential: Credential,
    ) -> Tuple[str, Dict[str, Any], Dict[str, str]]:
        raise NotImplementedError

    def parse_response(self, data: Dict[str, Any]) -> Tuple[str, int]:
        raise NotImplementedError

    def _post(self, url: str, payload: Dict[str, Any], headers: Dict[str, str]) -> requests.Response:
        return requests.post(url, json=payload, headers=headers, timeout=self.timeout_s)

    def _malformed(self, what: str, data: Any) -> ProviderResponseError:
        return ProviderResponseError(self.name, f"{what} :: {str(data)[:400]}")

    def invoke(
        self,
        messages: Sequence[Any],
        system_prompt: str,
        credential: Credential,
    ) -> CallResult:
        msgs = normalize_messages(messages)
        if not msgs:
            raise ValueError("'messages' must be non-empty")

        t0 = time.time()
        url, payload, headers = self.build_request(msgs, system_prompt or "", credential)

        r = self._post(url, payload, headers)
        dur = int((time.time() - t0) * 1000)

        if r.status_code < 200 or r.status_code >= 300:
            raise ProviderHttpError(self.name, r.status_code, r.text or "")

        # ---- Safe JSON parse ----
        try:
            data = r.json()
        except ValueError as e:
            raise ProviderResponseError(self.name, f"invalid JSON: {e} :: {r.text[:400]}") from e
        if not isinstance(data, dict):
            raise self._malformed("expected a JSON object", data)

        # Fields of the wrong type (content as a string, usage as a list, ...)
        try:
            content, tokens = self.parse_response(data)
            tokens = max(0, int(tokens or 0))
        except (AttributeError, TypeError, ValueError) as e:
            raise self._malformed(f"unexpected response shape ({type(e).__name__}: {e})", data) from e
        logger.debug("%s responded in %sms tokens=%s", self.name, dur, tokens)

        return CallResult(
            content=content,
            tokens=tokens,
            provider_used=self.cfg.id,
            model=self.cfg.model,
            credential_name=credential.name,
            response_time_ms=dur,
        )


def first(items: Any) -> Any:
    """items[0] for a non-empty list, else None."""
    if isinstance(items, list) and items:
        return items[0]
    return None
