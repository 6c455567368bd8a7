# src/composer/style/baseline.py
import logging
from typing import Dict

from .sources import BaselineProvider

logger = logging.getLogger(__name__)


class BaselineCache:
    """
    Memoizes the pristine computed style of each tag for the cache's lifetime.

    The provider's offscreen context is opened on the first request and kept
    for reuse. If it cannot be created the cache fails closed: every lookup
    returns an empty snapshot, so every value compares as non-default.
    """

    def __init__(self, provider: BaselineProvider):
        self._provider = provider
        self._snapshots: Dict[str, Dict[str, str]] = {}
        self._opened = False
        self._unavailable = False

    @property
    def available(self) -> bool:
        return not self._unavailable

    async def get_baseline(self, tag: str) -> Dict[str, str]:
        key = tag.lower()
        cached = self._snapshots.get(key)
        if cached is not None:
            return cached

        if not await self._ensure_open():
            return {}

        try:
            snapshot = dict(await self._provider.probe(key))
        except Exception as e:
            logger.error("Baseline probe failed for <%s>: %s", key, e)
            return {}

        self._snapshots[key] = snapshot
        logger.debug("Cached baseline for <%s> (%d properties)", key, len(snapshot))
        return snapshot

    async def _ensure_open(self) -> bool:
        if self._opened:
            return True
        if self._unavailable:
            return False
        try:
            await self._provider.open()
            self._opened = True
            return True
        except Exception as e:
            logger.error("Could not create the offscreen baseline context: %s", e, exc_info=True)
            self._unavailable = True
            return False

    async def close(self) -> None:
        if self._opened:
            await self._provider.close()
            self._opened = False
