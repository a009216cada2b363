# mooncake/core/loaders.py
# SPDX-License-Identifier: Apache-2.0
from __future__ import annotations

"""
One-shot data loaders for the Karmaboard and My Mooncakes views.

Each loader issues its fetch at most once per browser session and replaces its
whole item tuple with the result. There is no retry, polling or cancellation:

- success → `LoadState.LOADED`, items replaced wholesale
- exception → `LoadState.FAILED`, error kept for the view, items stay empty
- `discard()` before the fetch returns → result dropped silently

The two loaders never share state, so their completion order does not matter.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from enum import Enum
from typing import Generic, TypeVar

from mooncake.services.near import KarmaEntry

log = logging.getLogger(__name__)

T = TypeVar("T")


class LoadState(str, Enum):
    NOT_LOADED = "not_loaded"
    LOADED = "loaded"
    FAILED = "failed"


class OneShotLoader(Generic[T]):
    def __init__(self, name: str, fetch: Callable[[], Iterable[T]]) -> None:
        self.name = name
        self._fetch = fetch
        self.state = LoadState.NOT_LOADED
        self.items: tuple[T, ...] = ()
        self.error: Exception | None = None
        self._started = False
        self._discarded = False

    def load(self) -> LoadState:
        """Run the fetch if it has never run; later calls are no-ops."""
        if self._started or self._discarded:
            return self.state
        self._started = True
        try:
            result = tuple(self._fetch())
        except Exception as e:
            if self._discarded:
                log.debug("%s: dropped failure after discard: %s", self.name, e)
                return self.state
            log.warning("%s: load failed: %s", self.name, e)
            self.error = e
            self.state = LoadState.FAILED
            return self.state
        if self._discarded:
            log.debug("%s: dropped %d item(s) after discard", self.name, len(result))
            return self.state
        self.items = result
        self.state = LoadState.LOADED
        log.debug("%s: loaded %d item(s)", self.name, len(result))
        return self.state

    def discard(self) -> None:
        """Mark the owning view as gone; a pending result will be ignored."""
        self._discarded = True

    @property
    def discarded(self) -> bool:
        return self._discarded


def ranked_for_display(entries: Sequence[KarmaEntry]) -> list[KarmaEntry]:
    """Highest karma first: the contract returns its rank in ascending order.

    Returns a new list; `entries` is left untouched so repeated renders
    always flip the same stored order.
    """
    return list(reversed(entries))
