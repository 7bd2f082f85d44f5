import os
import pytest

from interviewprep_router.core.config import CFG, provider_configs
from interviewprep_router.core.route import build_router
from interviewprep_router.adapters import GeminiAdapter
from interviewprep_router.models import Credential, ProviderId


@pytest.mark.gemini_live
def test_gemini_adapter_chat_smoke():
    """
    Live smoke test against the Gemini adapter.

    Requires GEMINI_API_KEY in env (or .env at repo root).
    """
    if not os.getenv("GEMINI_API_KEY"):
        pytest.skip("GEMINI_API_KEY not set; skipping live Gemini test")

    adapter = GeminiAdapter(provider_configs(CFG)[ProviderId.gemini])
    cred = Credential(name="GEMINI_API_KEY", secret=os.environ["GEMINI_API_KEY"])

    messages = [
        {"role": "user", "content": "Say 'OK' in one short sentence."}
    ]

    result = adapter.invoke(messages, "", cred)

    assert isinstance(result.content, str)
    assert "ok" in result.content.lower()
    assert result.tokens > 0
    assert result.response_time_ms >= 0


@pytest.mark.gemini_live
def test_router_claude_without_key_lands_on_gemini():
    """
    Live end-to-end: claude (no key) -> fallback -> gemini adapter -> Gemini API
    """
    if not os.getenv("GEMINI_API_KEY"):
        pytest.skip("GEMINI_API_KEY not set; skipping live router test")

    env = {"GEMINI_API_KEY": os.environ["GEMINI_API_KEY"]}
    router = build_router(CFG, env)

    result = router.call(
        "claude",
        [{"role": "user", "content": "Name one sorting algorithm."}],
        "Answer in five words or fewer.",
    )

    assert result.provider_used == ProviderId.gemini
    assert result.fallback_used is True
    assert len(result.content) > 0
    assert result.cost_usd >= 0.0
