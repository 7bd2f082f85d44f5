# tests/conftest.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional
from unittest.mock import Mock

import pytest

# ---------- Paths & .env ----------
ROOT = Path(__file__).resolve().parents[1]  # repo root
# Optional: load .env from repo root for local runs (live tests only read it)
try:
    from dotenv import load_dotenv  # type: ignore
    env_path = ROOT / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)
except ImportError:
    pass

from interviewprep_router.core.config import load_config, provider_configs  # noqa: E402
from interviewprep_router.core.errors import ProviderHttpError  # noqa: E402
from interviewprep_router.core.keypool import KeyPool  # noqa: E402
from interviewprep_router.core.route import Router  # noqa: E402
from interviewprep_router.models import CallResult, Credential, ProviderId  # noqa: E402


# ---------- Helpers ----------
def make_response(status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> Mock:
    """A requests.Response stand-in."""
    resp = Mock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    if text is None:
        text = json.dumps(payload) if payload is not None else ""
    resp.text = text
    if payload is None:
        resp.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
    else:
        resp.json.return_value = payload
    return resp


class FakeAdapter:
    """Records every invoke(); fails with `error` or answers with `content`."""

    def __init__(self, provider: ProviderId, content: str = "ok", tokens: int = 100,
                 error: Optional[Exception] = None) -> None:
        self.provider = provider
        self.content = content
        self.tokens = tokens
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    def invoke(self, messages, system_prompt, credential) -> CallResult:
        self.calls.append(
            {"messages": list(messages), "system_prompt": system_prompt, "credential": credential}
        )
        if self.error is not None:
            raise self.error
        return CallResult(
            content=self.content,
            tokens=self.tokens,
            provider_used=self.provider,
            model=f"{self.provider.value}-model",
            credential_name=credential.name,
        )


def creds(*names: str) -> List[Credential]:
    return [Credential(name=n, secret=f"secret-{n}") for n in names]


# ---------- Fixtures ----------
@pytest.fixture(scope="session")
def cfg() -> Dict[str, Any]:
    return load_config()


@pytest.fixture(scope="session")
def pcfgs(cfg):
    return provider_configs(cfg)


@pytest.fixture
def messages() -> List[Dict[str, str]]:
    return [{"role": "user", "content": "hi"}]


@pytest.fixture
def fake_adapters() -> Dict[ProviderId, FakeAdapter]:
    return {pid: FakeAdapter(pid, content=f"from {pid.value}") for pid in ProviderId}


@pytest.fixture
def router(fake_adapters) -> Router:
    """Router over fake adapters: 3 Gemini keys, one key for every other provider."""
    pool = KeyPool(creds("keyA", "keyB", "keyC"))
    single = {
        ProviderId.deepseek: Credential(name="DEEPSEEK_API_KEY", secret="ds"),
        ProviderId.claude: Credential(name="ANTHROPIC_API_KEY", secret="cl"),
        ProviderId.openai: Credential(name="OPENAI_API_KEY", secret="oa"),
    }
    return Router(fake_adapters, pool, single)


@pytest.fixture
def http_500() -> ProviderHttpError:
    return ProviderHttpError("claude", 500, "internal error")
