from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence

from interviewprep_router.adapters import ADAPTER_TYPES, ProviderAdapter
from interviewprep_router.core.config import (
    CFG,
    provider_configs,
    routing_settings,
    single_credential,
)
from interviewprep_router.core.cost import CostEstimator
from interviewprep_router.core.errors import EmptyPoolError, RouterError
from interviewprep_router.core.keypool import KeyPool
from interviewprep_router.core.logging import redact, router_trace
from interviewprep_router.models import CallResult, Credential, ProviderId

logger = logging.getLogger(__name__)


class Router:
    """
    Calls one provider and, when it fails, the fallback provider.

    - the fallback provider's credentials come from `key_pool` (round-robin)
    - every other provider uses its single credential from `credentials`
    - `fallback_depth` extra attempts go to the fallback provider, each with a
      fresh pool credential; 0 disables fallback
    - a failing call to the fallback provider itself is never retried
    """

    def __init__(
        self,
        adapters: Mapping[ProviderId, ProviderAdapter],
        key_pool: KeyPool,
        credentials: Optional[Mapping[ProviderId, Optional[Credential]]] = None,
        cost: Optional[CostEstimator] = None,
        fallback_provider: ProviderId = ProviderId.gemini,
        fallback_depth: int = 1,
    ) -> None:
        if fallback_depth < 0:
            raise ValueError("fallback_depth must be >= 0")
        self.adapters: Dict[ProviderId, ProviderAdapter] = dict(adapters)
        self.key_pool = key_pool
        self.credentials: Dict[ProviderId, Optional[Credential]] = dict(credentials or {})
        self.cost = cost or CostEstimator()
        self.fallback_provider = ProviderId(fallback_provider)
        self.fallback_depth = fallback_depth

    # --- lookups ----------------------------------------------------------------

    def _adapter(self, provider: ProviderId) -> ProviderAdapter:
        adapter = self.adapters.get(provider)
        if adapter is None:
            raise RouterError(f"Provider '{provider.value}' is not configured")
        return adapter

    def _credential(self, provider: ProviderId) -> Credential:
        if provider == self.fallback_provider:
            return self.key_pool.next()
        cred = self.credentials.get(provider)
        if cred is None:
            raise EmptyPoolError(provider.value)
        return cred

    def available_providers(self) -> List[ProviderId]:
        out = []
        for pid in self.adapters:
            if pid == self.fallback_provider:
                if len(self.key_pool):
                    out.append(pid)
            elif self.credentials.get(pid) is not None:
                out.append(pid)
        return out

    def attempt_plan(self, provider: ProviderId) -> List[ProviderId]:
        """Providers tried, in order, for a call to `provider`."""
        plan = [provider]
        if provider != self.fallback_provider:
            plan.extend([self.fallback_provider] * self.fallback_depth)
        return plan

    # --- main entry -------------------------------------------------------------

    def call(
        self,
        provider_id: ProviderId | str,
        messages: Sequence[Any],
        system_prompt: str = "",
    ) -> CallResult:
        provider = ProviderId(provider_id)
        if not messages:
            raise ValueError("'messages' must be non-empty")

        t0 = time.time()
        plan = self.attempt_plan(provider)
        first_error: Optional[Exception] = None

        for i, target in enumerate(plan):
            is_last = i == len(plan) - 1
            try:
                adapter = self._adapter(target)
                cred = self._credential(target)
                logger.info("Calling %s with key %s (attempt %d/%d)", target.value, cred.name, i + 1, len(plan))
                router_trace("attempt", provider=target.value, key=cred.name, attempt=i + 1)
                result = adapter.invoke(messages, system_prompt, cred)
            except Exception as ex:
                # requests errors carry the full URL, Gemini's key included
                logger.warning("%s call failed: %s: %s", target.value, type(ex).__name__, redact(ex))
                router_trace("failure", provider=target.value, error=type(ex).__name__)
                if is_last:
                    if first_error is not None and ex is not first_error:
                        raise ex from first_error
                    raise
                if first_error is None:
                    first_error = ex
                logger.info("Falling back from %s to %s", target.value, plan[i + 1].value)
                continue

            elapsed_ms = int((time.time() - t0) * 1000)
            cost_usd = self.cost.estimate(result.provider_used.value, result.tokens)
            router_trace(
                "success",
                provider=target.value,
                tokens=result.tokens,
                cost_usd=cost_usd,
                latency_ms=elapsed_ms,
            )
            return result.model_copy(
                update={
                    "cost_usd": cost_usd,
                    "response_time_ms": elapsed_ms,
                    "fallback_used": target != provider,
                }
            )

        # plan is never empty
        raise RouterError("no provider attempted")


def build_router(
    cfg: Dict[str, Any] | None = None,
    env: Optional[Mapping[str, str]] = None,
) -> Router:
    """Wire adapters, credentials and the key pool from router.yml + environment."""
    if cfg is None:
        cfg = CFG
    settings = routing_settings(cfg)
    pcfgs = provider_configs(cfg)
    fallback = settings["fallback_provider"]

    adapters: Dict[ProviderId, ProviderAdapter] = {}
    credentials: Dict[ProviderId, Optional[Credential]] = {}
    for pid, pcfg in pcfgs.items():
        adapters[pid] = ADAPTER_TYPES[pid](pcfg, timeout_s=settings["timeout_s"])
        if pid != fallback:
            credentials[pid] = single_credential(pcfg, env)

    pool_names = pcfgs[fallback].api_key_envs if fallback in pcfgs else []
    key_pool = KeyPool.from_env(pool_names, env, provider=fallback.value)

    logger.info(
        "Router ready: %s pool has %d key(s); providers with keys: %s",
        fallback.value,
        len(key_pool),
        [p.value for p, c in credentials.items() if c is not None],
    )

    return Router(
        adapters,
        key_pool,
        credentials,
        cost=CostEstimator.from_config(cfg),
        fallback_provider=fallback,
        fallback_depth=settings["fallback_depth"],
    )
