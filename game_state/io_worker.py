"""Background save/load so disk I/O never stalls the update loop.

Jobs run on a small thread pool. The update loop calls ``poll()`` once per
frame to collect finished jobs in submission order and applies them itself;
the worker never touches live game state. Saves receive a snapshot copy of
the planet, so the live planet can keep changing while the file is written.
"""
from __future__ import annotations

import logging
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Deque, List, Optional, Tuple

from game_state.persistence import PersistenceError, load_planet, save_planet
from game_state.planet import Planet

logger = logging.getLogger(__name__)


@dataclass
class IOResult:
    """Outcome of one background save or load."""
    op: str                                   # "save" or "load"
    path: str
    planet: Optional[Planet] = None           # Set for successful loads
    error: Optional[PersistenceError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _run_save(planet: Planet, path: str) -> IOResult:
    try:
        save_planet(planet, path)
    except PersistenceError as e:
        return IOResult("save", path, error=e)
    return IOResult("save", path)


def _run_load(path: str) -> IOResult:
    try:
        planet = load_planet(path)
    except PersistenceError as e:
        return IOResult("load", path, error=e)
    return IOResult("load", path, planet=planet)


class PersistenceWorker:
    """Runs save/load jobs off the main thread and hands back results in order."""

    def __init__(self, max_workers: int = 1):
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="planet-io")
        self._pending: Deque[Tuple[str, Future]] = deque()

    @property
    def busy(self) -> bool:
        return bool(self._pending)

    def submit_save(self, planet: Planet, path: str) -> None:
        """Queue a save. ``planet`` must not be mutated afterwards; pass a copy."""
        logger.debug("Queued save to %s", path)
        self._pending.append(("save", self._executor.submit(_run_save, planet, path)))

    def submit_load(self, path: str) -> None:
        logger.debug("Queued load from %s", path)
        self._pending.append(("load", self._executor.submit(_run_load, path)))

    def poll(self) -> List[IOResult]:
        """Collect finished jobs without blocking.

        Results are returned in submission order; a finished job queued behind
        an unfinished one waits for it.
        """
        results: List[IOResult] = []
        while self._pending and self._pending[0][1].done():
            _, future = self._pending.popleft()
            results.append(future.result())
        return results

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until every queued job has finished."""
        wait([future for _, future in self._pending], timeout=timeout)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=True)
