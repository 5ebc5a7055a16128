"""Application layer - Three-tier singleton cache."""

import threading
from typing import Any, Callable, Dict, Optional, Set


class SingletonCache:
    """Holds singleton instances in three tiers keyed by bean name.

    - finished: fully constructed and processed instances.
    - early: partially constructed instances exposed to satisfy a cycle.
    - factories: producers yielding the early instance, invoked at most once.

    A name lives in at most one tier at a time. Every mutation happens under
    ``lock``; reads of the finished tier do not lock.

    Attributes:
        lock: Re-entrant lock guarding all tier mutations.
        _finished: Tier 1, completed singletons.
        _early: Tier 2, early-exposed instances.
        _factories: Tier 3, pending early-reference producers.
    """

    def __init__(self) -> None:
        self.lock = threading.RLock()
        self._finished: Dict[str, Any] = {}
        self._early: Dict[str, Any] = {}
        self._factories: Dict[str, Callable[[], Any]] = {}

    def get_finished(self, name: str) -> Optional[Any]:
        """Return the completed singleton for ``name``, or None."""
        return self._finished.get(name)

    def get_early(self, name: str) -> Optional[Any]:
        """Return the early reference for ``name``, invoking its producer if needed.

        The producer's result is memoized into the early tier.
        """
        with self.lock:
            if name in self._finished:
                return self._finished[name]
            if name in self._early:
                return self._early[name]
            producer = self._factories.pop(name, None)
            if producer is None:
                return None
            instance = producer()
            self._early[name] = instance
            return instance

    def add_factory(self, name: str, producer: Callable[[], Any]) -> None:
        with self.lock:
            if name in self._finished:
                raise ValueError(f"Singleton {name} is already finished")
            self._early.pop(name, None)
            self._factories[name] = producer

    def is_early_consumed(self, name: str) -> bool:
        """Whether the early reference of ``name`` has been handed out."""
        return name in self._early

    def add_finished(self, name: str, instance: Any) -> None:
        with self.lock:
            self._early.pop(name, None)
            self._factories.pop(name, None)
            self._finished[name] = instance

    def discard(self, name: str) -> None:
        """Remove ``name`` from every tier."""
        with self.lock:
            self._finished.pop(name, None)
            self._early.pop(name, None)
            self._factories.pop(name, None)

    def contains(self, name: str) -> bool:
        return name in self._finished

    def finished_names(self) -> Set[str]:
        return set(self._finished)

    def clear(self) -> None:
        with self.lock:
            self._finished.clear()
            self._early.clear()
            self._factories.clear()
