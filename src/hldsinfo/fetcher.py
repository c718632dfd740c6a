"""Concurrent multi-server info fetcher.

Brief:
  Fetcher accepts addresses without blocking, runs one query thread per
  address and hands back an address -> Optional[ServerInfo] mapping once
  every query has finished. A failed query is stored as None; collection
  itself never fails.

Example:
    >>> with Fetcher(timeout_ms=500) as f:
    ...     f.submit("127.0.0.1:27015")
    ...     infos = f.collect()
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Dict, Iterable, Optional

from .errors import FetcherClosed, HLDSInfoError
from .models import ServerInfo
from .transport import deadline_after, get_info

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 4000

_STOP = object()


class Fetcher:
    """
    Brief: Fan out info queries and collect their results.

    Inputs:
      - timeout_ms: per-query timeout used to build each query deadline;
        <= 0 means no deadline
      - query: callable(address, deadline) -> ServerInfo (defaults to
        transport.get_info)

    Outputs:
      - collect() -> Dict[str, Optional[ServerInfo]]

    Submitting the same address twice runs both queries; whichever finishes
    last owns the entry. submit() after collect()/close() raises
    FetcherClosed.
    """

    def __init__(
        self,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        *,
        query: Optional[Callable[[str, Optional[float]], ServerInfo]] = None,
    ):
        self.timeout_ms = int(timeout_ms)
        self._query = query or get_info

        # Guards the dispatch loop start and the open/closed state.
        self._lock = threading.Lock()
        self._queue: Optional[queue.Queue] = None
        self._dispatcher: Optional[threading.Thread] = None
        self._closed = False

        # Guards the result map together with the outstanding counter.
        self._done = threading.Condition()
        self._infos: Dict[str, Optional[ServerInfo]] = {}
        self._pending = 0

    def __enter__(self) -> "Fetcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def _ensure_dispatcher(self) -> queue.Queue:
        # Caller holds self._lock.
        if self._queue is None:
            self._queue = queue.Queue()
            self._dispatcher = threading.Thread(
                target=self._run,
                args=(self._queue,),
                name="hldsinfo-dispatch",
                daemon=True,
            )
            self._dispatcher.start()
        return self._queue

    def submit(self, address: str) -> None:
        """
        Brief: Schedule a query for ``address`` and return immediately.

        Inputs:
          - address: ``host:port`` string used as the result key

        Outputs:
          - None

        Raises:
          - FetcherClosed: when called after collect() or close()
        """
        with self._lock:
            if self._closed:
                raise FetcherClosed("cannot submit after collect()/close()")
            q = self._ensure_dispatcher()
            with self._done:
                self._pending += 1
            q.put(address)

    def _run(self, q: queue.Queue) -> None:
        while True:
            address = q.get()
            if address is _STOP:
                return
            t = threading.Thread(
                target=self._fetch_one,
                args=(address,),
                name=f"hldsinfo-query-{address}",
                daemon=True,
            )
            try:
                t.start()
            except RuntimeError as e:
                logger.error("Cannot start query for %s: %s", address, e)
                self._store(address, None)

    def _fetch_one(self, address: str) -> None:
        info: Optional[ServerInfo] = None
        try:
            info = self._query(address, deadline_after(self.timeout_ms))
        except (HLDSInfoError, OSError) as e:
            logger.debug("Query to %s failed: %s", address, e)
        except Exception as e:
            logger.error("Unexpected error querying %s: %s", address, e, exc_info=True)
        finally:
            self._store(address, info)

    def _store(self, address: str, info: Optional[ServerInfo]) -> None:
        with self._done:
            self._infos[address] = info
            self._pending -= 1
            self._done.notify_all()

    def _wait(self) -> None:
        with self._lock:
            if not self._closed:
                self._closed = True
                if self._queue is not None:
                    self._queue.put(_STOP)
            dispatcher = self._dispatcher
        if dispatcher is not None:
            dispatcher.join()
        with self._done:
            self._done.wait_for(lambda: self._pending == 0)

    def collect(self) -> Dict[str, Optional[ServerInfo]]:
        """
        Brief: Stop accepting addresses and wait for every query.

        Outputs:
          - dict mapping each submitted address to its ServerInfo, or None
            when the query timed out, failed in transport, or returned a
            malformed reply.
        """
        self._wait()
        with self._done:
            infos = dict(self._infos)
        ok = sum(1 for v in infos.values() if v is not None)
        logger.info("Collected %d servers (%d responded)", len(infos), ok)
        return infos

    def close(self) -> None:
        """Stop accepting addresses and wait for outstanding queries."""
        self._wait()


def fetch_all(
    addresses: Iterable[str], timeout_ms: int = DEFAULT_TIMEOUT_MS
) -> Dict[str, Optional[ServerInfo]]:
    """Submit every address to a fresh Fetcher and collect the results."""
    fetcher = Fetcher(timeout_ms=timeout_ms)
    for address in addresses:
        fetcher.submit(address)
    return fetcher.collect()
