"""Provider adapters, one per external AI service."""

from typing import Dict, Type

from interviewprep_router.adapters.base import ProviderAdapter
from interviewprep_router.adapters.claude import ClaudeAdapter
from interviewprep_router.adapters.deepseek import DeepSeekAdapter
from interviewprep_router.adapters.gemini import GeminiAdapter
from interviewprep_router.adapters.openai import OpenAIAdapter
from interviewprep_router.models import ProviderId

ADAPTER_TYPES: Dict[ProviderId, Type[ProviderAdapter]] = {
    ProviderId.gemini: GeminiAdapter,
    ProviderId.deepseek: DeepSeekAdapter,
    ProviderId.claude: ClaudeAdapter,
    ProviderId.openai: OpenAIAdapter,
}

__all__ = [
    "ADAPTER_TYPES",
    "ProviderAdapter",
    "GeminiAdapter",
    "DeepSeekAdapter",
    "ClaudeAdapter",
    "OpenAIAdapter",
]
