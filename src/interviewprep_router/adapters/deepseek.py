# src/interviewprep_router/adapters/deepseek.py
from interviewprep_router.adapters.openai import OpenAIAdapter


class DeepSeekAdapter(OpenAIAdapter):
    """DeepSeek adapter (OpenAI-compatible /chat/completions)."""
