# src/interviewprep_router/models.py
from __future__ import annotations
from enum import Enum
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]
QuestionType = Literal["mcq", "coding", "subjective", "system-design"]
Difficulty = Literal["easy", "medium", "hard"]


class ProviderId(str, Enum):
    gemini = "gemini"
    deepseek = "deepseek"
    claude = "claude"
    openai = "openai"


class Credential(BaseModel):
    """One API key. `name` is the env var it came from; only the name is logged."""
    model_config = ConfigDict(frozen=True)

    name: str
    secret: str = Field(repr=False)


class ProviderConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: ProviderId
    endpoint: str
    model: str
    api_key_envs: List[str] = []
    cost_per_k_tokens: float = 0.0
    temperature: float = 0.7
    top_k: int = 40
    top_p: float = 0.95
    max_tokens: int = 2048
    anthropic_version: Optional[str] = None


class ChatMessage(BaseModel):
    role: Role
    content: str


class CallResult(BaseModel):
    content: str
    tokens: int = 0
    cost_usd: float = 0.0
    provider_used: ProviderId
    model: str = ""
    credential_name: str = ""
    response_time_ms: int = 0
    fallback_used: bool = False


# --- HTTP request bodies -----------------------------------------------------

class ChatRequest(BaseModel):
    user_id: str
    session_id: Optional[str] = None
    message: str
    category: str = "general"
    provider: Optional[ProviderId] = None  # None → routing.default_provider
    stream: bool = False


class SessionCreateRequest(BaseModel):
    user_id: str
    title: Optional[str] = None
    category: str = "general"


class QuestionGenerateRequest(BaseModel):
    domain: str
    sub_domain: Optional[str] = None
    difficulty: Difficulty
    type: QuestionType
    count: int = Field(default=5, ge=1, le=20)
    tags: List[str] = []
    companies: List[str] = []
