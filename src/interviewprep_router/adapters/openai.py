# src/interviewprep_router/adapters/openai.py
from __future__ import annotations

from typing import Any, Dict, List, Tuple

from interviewprep_router.adapters.base import ProviderAdapter, first
from interviewprep_router.models import Credential


class OpenAIAdapter(ProviderAdapter):
    """
    OpenAI-compatible /chat/completions.

    DeepSeek speaks the same wire format, see DeepSeekAdapter.
    """

    def build_request(
        self,
        messages: List[Dict[str, str]],
        system_prompt: str,
        credential: Credential,
    ) -> Tuple[str, Dict[str, Any], Dict[str, str]]:
        chat: List[Dict[str, str]] = []
        if system_prompt:
            chat.append({"role": "system", "content": system_prompt})
        chat.extend(messages)

        payload = {
            "model": self.cfg.model,
            "messages": chat,
            "temperature": self.cfg.temperature,
            "max_tokens": self.cfg.max_tokens,
            "stream": False,
        }
        headers = {
            "Authorization": f"Bearer {credential.secret}",
            "Content-Type": "application/json",
        }
        return self.cfg.endpoint, payload, headers

    def parse_response(self, data: Dict[str, Any]) -> Tuple[str, int]:
        choice = first(data.get("choices"))
        msg = choice.get("message") if isinstance(choice, dict) else None
        content = msg.get("content") if isinstance(msg, dict) else None
        if not isinstance(content, str) or not content:
            raise self._malformed("response w/o choices[0].message.content", data)

        usage = data.get("usage") or {}
        return content, int(usage.get("total_tokens") or 0)
