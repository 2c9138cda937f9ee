"""Single-use login nonces held in process memory."""

from __future__ import annotations

import logging
import secrets
import time
from collections.abc import Callable
from dataclasses import dataclass
from threading import Lock
from typing import Final

from wallet_signin.core.errors import NonceNotFoundError
from wallet_signin.core.settings import settings

logger = logging.getLogger(__name__)

NONCE_BYTES: Final[int] = 32

Clock = Callable[[], float]
RandomBytes = Callable[[int], bytes]


@dataclass(frozen=True)
class Nonce:
    """A freshly minted nonce and the monotonic time it was created."""

    value: str
    created_at: float


class NonceStore:
    """Issues nonces and hands each one back exactly once.

    All access to the underlying map happens under one lock, so ``consume`` is
    linearizable: for any value, at most one caller across all threads gets a
    creation time back. Expiry is not enforced here; callers compare the
    returned creation time against ``ttl_seconds`` themselves.

    When more than ``capacity`` nonces are outstanding, ``generate`` sweeps out
    the ones older than the TTL before inserting, which bounds the memory held
    by abandoned challenges without a background task.
    """

    def __init__(
        self,
        *,
        ttl_seconds: float,
        capacity: int,
        clock: Clock = time.monotonic,
        random_bytes: RandomBytes = secrets.token_bytes,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.capacity = capacity
        self._clock = clock
        self._random_bytes = random_bytes
        self._nonces: dict[str, float] = {}
        self._lock = Lock()

    def now(self) -> float:
        """Return the store's current monotonic time."""
        return self._clock()

    def generate(self) -> Nonce:
        """Mint a nonce, record it, and return it."""
        with self._lock:
            if len(self._nonces) > self.capacity:
                self._prune_locked()
            value = self._random_bytes(NONCE_BYTES).hex()
            while value in self._nonces:
                value = self._random_bytes(NONCE_BYTES).hex()
            created_at = self._clock()
            self._nonces[value] = created_at
        return Nonce(value=value, created_at=created_at)

    def consume(self, value: str) -> float:
        """Remove ``value`` and return its creation time.

        Raises:
            NonceNotFoundError: If the nonce was never issued, was already
                consumed, or was pruned.
        """
        with self._lock:
            created_at = self._nonces.pop(value, None)
        if created_at is None:
            raise NonceNotFoundError()
        return created_at

    def is_expired(self, created_at: float, now: float | None = None) -> bool:
        """Return True once strictly more than the TTL has elapsed."""
        current = self._clock() if now is None else now
        return current - created_at > self.ttl_seconds

    def prune(self) -> int:
        """Drop every nonce that has reached the TTL and return how many went."""
        with self._lock:
            return self._prune_locked()

    def clear(self) -> None:
        """Forget every outstanding nonce."""
        with self._lock:
            self._nonces.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._nonces)

    def _prune_locked(self) -> int:
        now = self._clock()
        before = len(self._nonces)
        self._nonces = {
            value: created_at
            for value, created_at in self._nonces.items()
            if now - created_at < self.ttl_seconds
        }
        removed = before - len(self._nonces)
        logger.debug("Pruned %d expired nonces (%d remain)", removed, len(self._nonces))
        return removed


_NONCE_STORE: NonceStore | None = None
_STORE_LOCK = Lock()


def get_nonce_store() -> NonceStore:
    """Return the process-wide nonce store, creating it on first use."""
    global _NONCE_STORE
    with _STORE_LOCK:
        if _NONCE_STORE is None:
            _NONCE_STORE = NonceStore(
                ttl_seconds=settings.nonce_ttl_seconds,
                capacity=settings.nonce_store_capacity,
            )
        return _NONCE_STORE
