# src/interviewprep_router/adapters/claude.py
from __future__ import annotations

from typing import Any, Dict, List, Tuple

from interviewprep_router.adapters.base import ProviderAdapter, first
from interviewprep_router.models import Credential

DEFAULT_ANTHROPIC_VERSION = "2023-06-01"


class ClaudeAdapter(ProviderAdapter):
    """Anthropic Messages API: system prompt travels outside messages[]."""

    def build_request(
        self,
        messages: List[Dict[str, str]],
        system_prompt: str,
        credential: Credential,
    ) -> Tuple[str, Dict[str, Any], Dict[str, str]]:
        # The Messages API rejects role=system entries; fold them into `system`.
        system_parts = [system_prompt] if system_prompt else []
        chat: List[Dict[str, str]] = []
        for m in messages:
            if m["role"] == "system":
                system_parts.append(m["content"])
            else:
                chat.append(m)

        payload: Dict[str, Any] = {
            "model": self.cfg.model,
            "max_tokens": self.cfg.max_tokens,
            "system": "\n\n".join(system_parts),
            "messages": chat,
        }
        headers = {
            "Content-Type": "application/json",
            "x-api-key": credential.secret,
            "anthropic-version": self.cfg.anthropic_version or DEFAULT_ANTHROPIC_VERSION,
        }
        return self.cfg.endpoint, payload, headers

    def parse_response(self, data: Dict[str, Any]) -> Tuple[str, int]:
        block = first(data.get("content"))
        text = block.get("text") if isinstance(block, dict) else None
        if not isinstance(text, str) or not text:
            raise self._malformed("response w/o content[0].text", data)

        usage = data.get("usage") or {}
        tokens = int(usage.get("input_tokens") or 0) + int(usage.get("output_tokens") or 0)
        return text, tokens
