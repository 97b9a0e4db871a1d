"""
csvgeocode — Result Cache
==========================
In-memory memo of successful results keyed by rendered request URL.

The cache lives for one run and is never evicted.  With more than one row
in flight, the first row to miss on a URL *claims* it and every other row
asking for the same URL waits on the claimant's pending future, so each
distinct URL is requested at most once at a time::

    claim = cache.claim(url)
    if claim.entry is not None:          # cached
        ...
    elif claim.owner:                    # we fetch
        try:
            result = fetch(url)
        except GeocodingError as exc:
            cache.fail(url, exc)
            raise
        cache.settle(url, result)
    else:                                # someone else is fetching
        result = claim.pending.result()
"""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass
from threading import Lock

from csvgeocode.models import GeocodeResult, GeocodeSuccess


@dataclass(frozen=True)
class CacheClaim:
    """Answer to :meth:`GeocodeCache.claim`.

    Exactly one of these holds: ``entry`` is set (hit), or ``pending`` is
    set with ``owner=True`` (caller must fetch and settle), or ``pending``
    is set with ``owner=False`` (caller waits).
    """

    url: str
    entry: GeocodeSuccess | None = None
    pending: Future | None = None
    owner: bool = False


class GeocodeCache:
    """Thread-safe, single-flight cache of :class:`GeocodeSuccess` results."""

    def __init__(self) -> None:
        self._entries: dict[str, GeocodeSuccess] = {}
        self._pending: dict[str, Future] = {}
        self._lock = Lock()

    def get(self, url: str) -> GeocodeSuccess | None:
        with self._lock:
            return self._entries.get(url)

    def claim(self, url: str) -> CacheClaim:
        """Look *url* up, or register the caller as the one fetching it."""
        with self._lock:
            entry = self._entries.get(url)
            if entry is not None:
                return CacheClaim(url, entry=entry)
            pending = self._pending.get(url)
            if pending is not None:
                return CacheClaim(url, pending=pending)
            pending = Future()
            self._pending[url] = pending
            return CacheClaim(url, pending=pending, owner=True)

    def settle(self, url: str, result: GeocodeResult) -> None:
        """Publish the owner's *result*; only successes are stored."""
        with self._lock:
            pending = self._pending.pop(url, None)
            if isinstance(result, GeocodeSuccess):
                self._entries[url] = result
        if pending is not None:
            pending.set_result(result)

    def fail(self, url: str, error: BaseException) -> None:
        """Release waiters on *url* with *error*; nothing is stored."""
        with self._lock:
            pending = self._pending.pop(url, None)
        if pending is not None:
            pending.set_exception(error)

    def __contains__(self, url: object) -> bool:
        with self._lock:
            return url in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
