# src/interviewprep_router/core/keypool.py
from __future__ import annotations

import os
import threading
from typing import Iterable, List, Mapping, Optional

from interviewprep_router.core.errors import EmptyPoolError
from interviewprep_router.models import Credential


class KeyPool:
    """
    Round-robin pool of credentials for one provider.

    - next() hands out credentials in insertion order, wrapping at the end
    - an empty pool raises EmptyPoolError on every call and keeps its cursor
    - the cursor is process-local; separate instances rotate independently
    """

    def __init__(self, credentials: Iterable[Credential], provider: str = "gemini") -> None:
        self.provider = provider
        self._credentials: List[Credential] = list(credentials)
        self._cursor = 0
        self._lock = threading.Lock()

    @classmethod
    def from_env(
        cls,
        names: Iterable[str],
        env: Optional[Mapping[str, str]] = None,
        provider: str = "gemini",
    ) -> "KeyPool":
        """Build a pool from env var names, skipping unset or blank ones."""
        if env is None:
            env = os.environ
        creds = []
        for name in names:
            secret = (env.get(name) or "").strip()
            if secret:
                creds.append(Credential(name=name, secret=secret))
        return cls(creds, provider=provider)

    def __len__(self) -> int:
        return len(self._credentials)

    @property
    def names(self) -> List[str]:
        return [c.name for c in self._credentials]

    def next(self) -> Credential:
        if not self._credentials:
            raise EmptyPoolError(self.provider)
        with self._lock:
            cred = self._credentials[self._cursor]
            self._cursor = (self._cursor + 1) % len(self._credentials)
        return cred
