# src/interviewprep_router/core/logging.py
from __future__ import annotations
import logging
import os
import re
import time
from typing import Any, Mapping

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR":    logging.ERROR,
    "WARNING":  logging.WARNING,
    "INFO":     logging.INFO,
    "DEBUG":    logging.DEBUG,
    "NOTSET":   logging.NOTSET,
}

_trace_log = logging.getLogger("interviewprep.router.trace")


def _level_from_env(var: str, default: str = "INFO") -> int:
    val = (os.getenv(var, default) or "").strip().upper()
    return _LEVELS.get(val, _LEVELS[default])


def setup_logging() -> None:
    """
    Configure root logging once. Idempotent.
    LOG_LEVEL controls verbosity (default INFO).
    """
    root = logging.getLogger()
    if root.handlers:
        # already configured (pytest, uvicorn, etc.)
        root.setLevel(_level_from_env("LOG_LEVEL", "INFO"))
        return

    level = _level_from_env("LOG_LEVEL", "INFO")
    fmt = "%(asctime)s.%(msecs)03d %(levelname)-8s %(name)s %(message)s"
    datefmt = "%Y-%m-%dT%H:%M:%S"

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))

    root.setLevel(level)
    root.addHandler(handler)


_SECRET_QS = re.compile(r"(key=)[^&\s'\"]+", re.IGNORECASE)


def redact(text: Any) -> str:
    """Mask `key=...` query values (Gemini puts the API key in the URL)."""
    return _SECRET_QS.sub(r"\1***", str(text))


def trace_enabled() -> bool:
    return (os.getenv("ROUTER_TRACE", "")).lower() in ("1", "true", "yes", "on")


def _fmt_kv(d: Mapping[str, Any]) -> str:
    return " ".join(f"{k}={d[k]}" for k in d)


def router_trace(event: str, **kv: Any) -> None:
    """
    Emit a single-line structured log ONLY when ROUTER_TRACE=true.
    Example:
      [router] attempt ts=... provider=gemini key=GEMINI_API_KEY_2
    """
    if not trace_enabled():
        return
    kv2 = {"ts": int(time.time()), **kv}
    _trace_log.info("[router] %s %s", event, _fmt_kv(kv2))
