# tests/unit/test_cost.py
import pytest

from interviewprep_router.core.cost import CostEstimator
from interviewprep_router.models import ProviderId


def test_flat_rate_per_1k_tokens():
    est = CostEstimator()
    assert est.estimate("openai", 1000) == pytest.approx(0.03)
    assert est.estimate("claude", 500) == pytest.approx(0.004)
    assert est.estimate("gemini", 2000) == pytest.approx(0.001)


def test_accepts_provider_enum():
    assert CostEstimator().estimate(ProviderId.deepseek, 1000) == pytest.approx(0.0014)


def test_unknown_provider_is_free():
    assert CostEstimator().estimate("ollama", 10_000) == 0.0


def test_negative_tokens_clamp_to_zero():
    assert CostEstimator().estimate("openai", -50) == 0.0


@pytest.mark.parametrize("provider", [p.value for p in ProviderId])
def test_non_negative_and_monotonic(provider):
    est = CostEstimator()
    costs = [est.estimate(provider, t) for t in range(0, 20_000, 137)]
    assert all(c >= 0 for c in costs)
    assert all(a <= b for a, b in zip(costs, costs[1:]))


def test_rates_from_config(cfg):
    est = CostEstimator.from_config(cfg)
    assert est.rates["gemini"] == pytest.approx(0.0005)

    custom = {"providers": {"openai": {"cost_per_k_tokens": 0.5}}}
    assert CostEstimator.from_config(custom).estimate("openai", 2000) == pytest.approx(1.0)
