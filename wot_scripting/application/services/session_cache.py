"""
Session Cache - Application Layer

Keeps the device sessions created from Thing Descriptions so repeated
operations on the same thing do not consume its description again. Entries
are keyed by thing identity and expire after a configurable number of
minutes without being used.

All methods must be called from the event loop thread. Concurrent misses
for the same identity share a single factory call. If the caller running
that call is cancelled, the remaining waiters retry on their own.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, List, Optional

from wot_scripting.domain.ports.thing_runtime import IConsumedThing
from wot_scripting.shared import get_logger

logger = get_logger(__name__)

SessionFactory = Callable[[], Awaitable[IConsumedThing]]


@dataclass(slots=True)
class SessionCacheEntry:
    """A cached session and the timer that evicts it."""

    session: IConsumedThing
    timer: Optional[asyncio.TimerHandle] = None


class SessionCache:
    """Time-bounded table of device sessions keyed by thing identity."""

    def __init__(self) -> None:
        self._entries: Dict[str, SessionCacheEntry] = {}
        self._pending: Dict[str, asyncio.Future] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identity: object) -> bool:
        return identity in self._entries

    def identities(self) -> List[str]:
        return list(self._entries)

    async def get_or_create(
        self,
        identity: str,
        factory: SessionFactory,
        ttl_minutes: float = 0,
    ) -> IConsumedThing:
        """
        Return the session cached for ``identity``, creating it if needed.

        Args:
            identity: Thing identity the session belongs to
            factory: Coroutine function creating a new session
            ttl_minutes: Minutes without use after which the entry expires.
                Zero keeps the entry until it is evicted explicitly.

        Returns:
            IConsumedThing: The cached or newly created session

        Raises:
            ValueError: If ``ttl_minutes`` is negative
            Exception: Whatever the factory raised. Nothing is cached then.
        """
        if ttl_minutes < 0:
            raise ValueError("ttl_minutes must not be negative")

        while True:
            entry = self._entries.get(identity)
            if entry is not None:
                logger.debug("session_cache.hit", identity=identity)
                if ttl_minutes > 0:
                    self._schedule_expiry(identity, entry, ttl_minutes)
                return entry.session

            pending = self._pending.get(identity)
            if pending is None:
                return await self._create(identity, factory, ttl_minutes)

            logger.debug("session_cache.await_pending", identity=identity)
            try:
                session = await asyncio.shield(pending)
            except asyncio.CancelledError:
                task = asyncio.current_task()
                if task is None or task.cancelling():
                    raise
                # only the creating caller was cancelled
                logger.info("session_cache.pending_cancelled", identity=identity)
                continue

            current = self._entries.get(identity)
            if current is not None and ttl_minutes > 0:
                self._schedule_expiry(identity, current, ttl_minutes)
            return session

    async def _create(
        self, identity: str, factory: SessionFactory, ttl_minutes: float
    ) -> IConsumedThing:
        future = asyncio.get_running_loop().create_future()
        self._pending[identity] = future
        logger.info("session_cache.miss", identity=identity)

        try:
            session = await factory()
        except asyncio.CancelledError:
            self._pending.pop(identity, None)
            future.cancel()
            raise
        except Exception as exc:
            self._pending.pop(identity, None)
            future.set_exception(exc)
            # mark as retrieved, waiters (if any) get their own copy
            future.exception()
            logger.warning(
                "session_cache.create_failed", identity=identity, error=str(exc)
            )
            raise

        self._pending.pop(identity, None)
        entry = SessionCacheEntry(session=session)
        self._entries[identity] = entry
        if ttl_minutes > 0:
            self._schedule_expiry(identity, entry, ttl_minutes)
        future.set_result(session)

        logger.info(
            "session_cache.stored",
            identity=identity,
            ttl_minutes=ttl_minutes,
            size=len(self._entries),
        )
        return session

    def _schedule_expiry(
        self, identity: str, entry: SessionCacheEntry, ttl_minutes: float
    ) -> None:
        if entry.timer is not None:
            entry.timer.cancel()
        entry.timer = asyncio.get_running_loop().call_later(
            ttl_minutes * 60, self._expire, identity, entry
        )

    def _expire(self, identity: str, entry: SessionCacheEntry) -> None:
        # a stale timer must not evict a newer entry for the same thing
        if self._entries.get(identity) is not entry:
            return
        del self._entries[identity]
        logger.info("session_cache.expired", identity=identity, size=len(self))

    def evict(self, identity: str) -> bool:
        """Drop the entry for ``identity``. Returns whether one existed."""
        entry = self._entries.pop(identity, None)
        if entry is None:
            return False
        if entry.timer is not None:
            entry.timer.cancel()
        logger.info("session_cache.evicted", identity=identity)
        return True

    def clear(self) -> int:
        """Drop every entry and return how many were removed."""
        removed = 0
        for identity in list(self._entries):
            if self.evict(identity):
                removed += 1
        return removed

    def close(self) -> None:
        """Cancel all expiry timers and empty the cache."""
        removed = self.clear()
        logger.info("session_cache.closed", removed=removed)
