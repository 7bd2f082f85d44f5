# src/interviewprep_router/core/cost.py

from __future__ import annotations
from typing import Dict, Mapping

# USD per 1K tokens (rough, for bookkeeping only)
DEFAULT_RATES: Dict[str, float] = {
    "gemini": 0.0005,
    "deepseek": 0.0014,
    "claude": 0.008,
    "openai": 0.03,
}


class CostEstimator:
    """
    Approximate USD cost of a call from a flat per-provider rate:

      cost = (tokens / 1000) * rate

    Unknown providers cost 0.0.
    """

    def __init__(self, rates: Mapping[str, float] | None = None) -> None:
        self.rates: Dict[str, float] = dict(DEFAULT_RATES if rates is None else rates)

    @classmethod
    def from_config(cls, cfg: Dict) -> "CostEstimator":
        rates = dict(DEFAULT_RATES)
        for name, pcfg in (cfg.get("providers") or {}).items():
            if "cost_per_k_tokens" in pcfg:
                rates[name] = float(pcfg["cost_per_k_tokens"])
        return cls(rates)

    def estimate(self, provider: str, tokens: int) -> float:
        rate = self.rates.get(getattr(provider, "value", provider))
        if not rate or rate < 0:
            return 0.0
        if tokens < 0:
            tokens = 0
        return round((tokens / 1000.0) * rate, 6)
