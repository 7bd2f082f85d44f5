from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from interviewprep_router.models import Credential, ProviderConfig, ProviderId


# --- Load router.yml once at startup into global CFG -------------------------

# This file lives at: src/interviewprep_router/core/config.py
# router.yml ships next to the package: src/interviewprep_router/router.yml
PACKAGE_DIR = Path(__file__).resolve().parents[1]
DEFAULT_CFG_PATH = PACKAGE_DIR / "router.yml"


def load_config(path: str | Path | None = None) -> Dict[str, Any]:
    """Read router.yml (or ROUTER_CONFIG when set) into a plain dict."""
    cfg_path = Path(path or os.getenv("ROUTER_CONFIG") or DEFAULT_CFG_PATH)
    with cfg_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


CFG: Dict[str, Any] = load_config()


# --- Routing policy -----------------------------------------------------------

def routing_settings(cfg: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """
    Routing policy with defaults filled in.

    ROUTER_TIMEOUT_S overrides routing.timeout_s from the file.
    """
    if cfg is None:
        cfg = CFG
    routing = cfg.get("routing") or {}

    timeout_s = float(routing.get("timeout_s", 30))
    env_timeout = (os.getenv("ROUTER_TIMEOUT_S") or "").strip()
    if env_timeout:
        timeout_s = float(env_timeout)

    return {
        "default_provider": ProviderId(routing.get("default_provider", "gemini")),
        "fallback_provider": ProviderId(routing.get("fallback_provider", "gemini")),
        "fallback_depth": max(0, int(routing.get("fallback_depth", 1))),
        "timeout_s": timeout_s,
        "history_limit": int(routing.get("history_limit", 10)),
    }


# --- Providers ----------------------------------------------------------------

def provider_configs(cfg: Dict[str, Any] | None = None) -> Dict[ProviderId, ProviderConfig]:
    """Validate the `providers:` block into ProviderConfig objects."""
    if cfg is None:
        cfg = CFG
    out: Dict[ProviderId, ProviderConfig] = {}
    for name, pcfg in (cfg.get("providers") or {}).items():
        pid = ProviderId(name)
        out[pid] = ProviderConfig(id=pid, **pcfg)
    return out


def single_credential(
    pcfg: ProviderConfig,
    env: Optional[Mapping[str, str]] = None,
) -> Optional[Credential]:
    """First non-blank env var from api_key_envs, or None when none is set."""
    if env is None:
        env = os.environ
    for name in pcfg.api_key_envs:
        secret = (env.get(name) or "").strip()
        if secret:
            return Credential(name=name, secret=secret)
    return None


def category_prompts(cfg: Dict[str, Any] | None = None) -> Dict[str, str]:
    if cfg is None:
        cfg = CFG
    return {k: str(v).strip() for k, v in (cfg.get("categories") or {}).items()}


def all_key_envs(cfg: Dict[str, Any] | None = None) -> List[str]:
    """Every credential env var name the config knows about, in file order."""
    names: List[str] = []
    for pcfg in provider_configs(cfg).values():
        for name in pcfg.api_key_envs:
            if name not in names:
                names.append(name)
    return names
