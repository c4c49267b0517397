"""In-memory cache for the automation portal credential."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, Optional

from ..models import Credential

_LOGGER = logging.getLogger(__name__)


class TokenCache:
    """Owns one cached credential and its validity window.

    Refreshes are serialised by a lock; callers waiting on the lock reuse the
    credential installed by the refresh that ran before them.
    """

    __slots__ = ("_validity", "_clock", "_credential", "_lock")

    def __init__(self, validity_seconds: float, clock: Callable[[], float] = time.time) -> None:
        self._validity = validity_seconds
        self._clock = clock
        self._credential: Optional[Credential] = None
        self._lock = asyncio.Lock()

    @property
    def credential(self) -> Optional[Credential]:
        return self._credential

    @property
    def validity_seconds(self) -> float:
        return self._validity

    def is_valid(self) -> bool:
        credential = self._credential
        return credential is not None and credential.is_valid(self._clock(), self._validity)

    def invalidate(self, credential: Optional[Credential] = None) -> None:
        """Drop the cached credential.

        When ``credential`` is given, the cache is only cleared if it still
        holds that credential. A rejection of a token that has already been
        replaced leaves the newer one in place.
        """
        if self._credential is None:
            return
        if credential is not None and self._credential is not credential:
            if _LOGGER.isEnabledFor(logging.DEBUG):
                _LOGGER.debug("Ignoring rejection of a replaced portal token")
            return
        _LOGGER.info("Portal token invalidated")
        self._credential = None

    async def get(self, authenticate: Callable[[], Awaitable[str]]) -> Credential:
        """Return a valid credential, calling ``authenticate`` when needed.

        Args:
            authenticate: Coroutine function returning a fresh token

        Returns:
            The cached or freshly issued credential

        Raises:
            Exception: Whatever ``authenticate`` raised; the cache is cleared
        """
        credential = self._credential
        if credential is not None and credential.is_valid(self._clock(), self._validity):
            if _LOGGER.isEnabledFor(logging.DEBUG):
                _LOGGER.debug("Using cached portal token")
            return credential

        async with self._lock:
            credential = self._credential
            if credential is not None and credential.is_valid(self._clock(), self._validity):
                return credential

            try:
                token = await authenticate()
            except BaseException:
                self._credential = None
                raise

            credential = Credential(token=token, issued_at=self._clock())
            self._credential = credential
            return credential
