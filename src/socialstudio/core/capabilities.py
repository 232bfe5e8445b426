# -*- coding: utf-8 -*-
"""Permission dashboard: query device capability providers in parallel."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Any, Callable, Mapping

from socialstudio.models.capability_status import (
    AuthorizationStatus,
    Capability,
    CapabilityStatus,
    normalize_status,
)

logger = logging.getLogger(__name__)

# A provider asks the platform once and returns its raw answer.
CapabilityProvider = Callable[[], Any]


class CapabilityAggregator:
    """Republish each capability's authorization as a shared status value.

    Queries are independent and may complete in any order; each one only
    writes its own entry. Nothing is cached between refreshes.
    """

    def __init__(self, providers: Mapping[Capability | str, CapabilityProvider], max_workers: int | None = None) -> None:
        self.providers: dict[Capability, CapabilityProvider] = {
            Capability(name): provider for name, provider in providers.items()
        }
        self.max_workers = max_workers or max(1, len(self.providers))
        self._statuses: dict[Capability, CapabilityStatus] = {
            capability: CapabilityStatus(capability) for capability in Capability
        }
        self._lock = threading.Lock()
        self._generation = 0
        self._latest: dict[Capability, int] = {}

    def _query(self, capability: Capability, generation: int) -> CapabilityStatus:
        provider = self.providers[capability]
        try:
            status = normalize_status(provider())
        except Exception as exc:
            logger.warning("Capability query for %s failed: %s", capability.value, exc)
            status = AuthorizationStatus.UNKNOWN
        result = CapabilityStatus.checked_now(capability, status)
        with self._lock:
            # An answer from an older refresh must not overwrite a newer one.
            if generation < self._latest.get(capability, 0):
                logger.debug("Dropping stale %s status from refresh %d", capability.value, generation)
                return self._statuses[capability]
            self._latest[capability] = generation
            self._statuses[capability] = result
        return result

    def refresh_async(self) -> dict[Capability, Future]:
        """Fire every query at once; the executor closes once all have completed.

        Each call is numbered. A query that finishes after a later refresh has
        already stored its answer is dropped and its future resolves to the newer status.
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
        executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="socialstudio-capability")
        try:
            return {capability: executor.submit(self._query, capability, generation) for capability in self.providers}
        finally:
            executor.shutdown(wait=False)

    def refresh(self, timeout: float | None = None) -> dict[Capability, CapabilityStatus]:
        futures = self.refresh_async()
        wait(list(futures.values()), timeout=timeout)
        return self.snapshot()

    def snapshot(self) -> dict[Capability, CapabilityStatus]:
        """Last known statuses, without asking the providers again."""
        with self._lock:
            return dict(self._statuses)

    def status_of(self, capability: Capability | str) -> AuthorizationStatus:
        with self._lock:
            return self._statuses[Capability(capability)].status

    def to_settings(self) -> dict[str, str]:
        return {capability.value: entry.status.value for capability, entry in self.snapshot().items()}

    def apply_to_config(self, config: dict[str, Any]) -> dict[str, Any]:
        config.setdefault("permissions", {}).update(self.to_settings())
        return config
