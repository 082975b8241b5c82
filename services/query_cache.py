# -*- coding: utf-8 -*-
"""
Query Cache Service
===================

Response cache shared by every wizard in the client.

Features:
- Entries keyed on endpoint name + exact arguments
- De-duplication of identical in-flight requests
- Tag-based invalidation ("ClassStudents" or "ClassStudents:12")
- Refetch of subscribed entries after invalidation and on window focus
- Full teardown on logout; results of requests started before the
  teardown are dropped on arrival

Usage:
    cache = QueryCache(ThreadedRequestRunner())
    cache.register(QueryEndpoint("transferOptions", client.get_transfer_options,
                                 provides=("TransferOptions",)))
    key = cache.subscribe("transferOptions", current_class_id=12)
    cache.query_updated.connect(on_update)
"""

import json
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union

from PyQt5.QtCore import QObject, pyqtSignal

from services.request_runner import RequestRunner
from utils.logger import get_logger

logger = get_logger(__name__)

TagSource = Union[Tuple[str, ...], Callable[[Any, Dict[str, Any]], Iterable[str]]]


# Default of QueryCache(ttl_seconds): take the value from Config
CONFIG_TTL = object()


class QueryStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class QueryState:
    """Snapshot of one cache entry as seen by consumers."""
    status: QueryStatus = QueryStatus.IDLE
    data: Any = None
    error: Optional[Exception] = None
    is_fetching: bool = False
    updated_at: Optional[float] = None

    @property
    def is_loading(self) -> bool:
        return self.is_fetching

    @property
    def is_error(self) -> bool:
        return self.status is QueryStatus.ERROR

    @property
    def has_data(self) -> bool:
        return self.data is not None


@dataclass(frozen=True)
class QueryEndpoint:
    """
    A cacheable read endpoint.

    fetch: called with the query arguments as keywords
    provides: tags of the cached result; a callable receives (data, args)
    transform: converts the raw response into the cached value
    """
    name: str
    fetch: Callable[..., Any]
    provides: TagSource = ()
    transform: Optional[Callable[[Any], Any]] = None


class _Entry:
    __slots__ = ("endpoint", "args", "state", "tags", "subscribers", "request_id", "stale")

    def __init__(self, endpoint: QueryEndpoint, args: Dict[str, Any]):
        self.endpoint = endpoint
        self.args = args
        self.state = QueryState()
        self.tags: Tuple[str, ...] = ()
        self.subscribers = 0
        self.request_id = 0
        self.stale = False


class QueryCache(QObject):
    """Tag-invalidated cache of read endpoints."""

    query_updated = pyqtSignal(str, object)  # key, QueryState

    def __init__(self, runner: RequestRunner, ttl_seconds: Any = CONFIG_TTL,
                 parent: Optional[QObject] = None):
        """
        Args:
            ttl_seconds: age after which a successful entry is refetched.
                None never expires entries; 0 refetches on every query.
                Defaults to QUERY_CACHE_TTL_SECONDS.
        """
        super().__init__(parent)
        if ttl_seconds is CONFIG_TTL:
            from app.config import Config
            ttl_seconds = Config.QUERY_CACHE_TTL_SECONDS

        self.runner = runner
        self.ttl_seconds = ttl_seconds
        self._endpoints: Dict[str, QueryEndpoint] = {}
        self._entries: Dict[str, _Entry] = {}
        self._epoch = 0

        # Statistics
        self.hits = 0
        self.misses = 0

    def register(self, endpoint: QueryEndpoint):
        self._endpoints[endpoint.name] = endpoint

    @staticmethod
    def make_key(name: str, **args) -> str:
        """Stable key for an endpoint call."""
        return f"{name}({json.dumps(args, sort_keys=True, default=str)})"

    # =========================================================================
    # Reads
    # =========================================================================

    def state(self, key: str) -> QueryState:
        entry = self._entries.get(key)
        return entry.state if entry else QueryState()

    def query(self, name: str, force: bool = False, **args) -> str:
        """
        Make sure the entry for (name, args) is fresh or being fetched.

        Returns:
            The cache key
        """
        if name not in self._endpoints:
            raise KeyError(f"Unknown query endpoint: {name}")

        key = self.make_key(name, **args)
        entry = self._entries.get(key)
        if entry is None:
            entry = _Entry(self._endpoints[name], args)
            self._entries[key] = entry

        if entry.state.is_fetching:
            logger.debug(f"Query {key} already in flight")
            return key

        if not force and self._is_fresh(entry):
            self.hits += 1
            return key

        self.misses += 1
        self._fetch(key, entry)
        return key

    def refetch(self, key: str) -> bool:
        entry = self._entries.get(key)
        if entry is None or entry.state.is_fetching:
            return False
        self._fetch(key, entry)
        return True

    def subscribe(self, name: str, **args) -> str:
        """Start observing an entry; it is refetched when invalidated."""
        key = self.query(name, **args)
        self._entries[key].subscribers += 1
        return key

    def unsubscribe(self, key: str):
        entry = self._entries.get(key)
        if entry is not None and entry.subscribers > 0:
            entry.subscribers -= 1
        self.evict_expired()

    def _is_fresh(self, entry: _Entry) -> bool:
        if entry.stale or entry.state.status is not QueryStatus.SUCCESS:
            return False
        if self.ttl_seconds is None or entry.state.updated_at is None:
            return True
        return time.monotonic() - entry.state.updated_at < self.ttl_seconds

    def evict_expired(self) -> int:
        """Drop unobserved entries that are idle and no longer fresh."""
        expired = [
            key for key, entry in self._entries.items()
            if entry.subscribers == 0 and not entry.state.is_fetching and not self._is_fresh(entry)
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"Evicted {len(expired)} expired cache entries")
        return len(expired)

    def _fetch(self, key: str, entry: _Entry):
        entry.request_id += 1
        request_id = entry.request_id
        epoch = self._epoch
        self._update(key, entry, replace(
            entry.state,
            status=QueryStatus.LOADING if entry.state.data is None else entry.state.status,
            is_fetching=True,
        ))

        endpoint = entry.endpoint
        args = dict(entry.args)

        def call():
            raw = endpoint.fetch(**args)
            return endpoint.transform(raw) if endpoint.transform else raw

        def on_success(data):
            if not self._is_current(key, entry, request_id, epoch):
                return
            entry.stale = False
            entry.tags = self._tags_for(endpoint, data, args)
            self._update(key, entry, QueryState(
                status=QueryStatus.SUCCESS,
                data=data,
                is_fetching=False,
                updated_at=time.monotonic(),
            ))

        def on_error(error):
            if not self._is_current(key, entry, request_id, epoch):
                return
            logger.warning(f"Query {key} failed: {error}")
            self._update(key, entry, QueryState(
                status=QueryStatus.ERROR,
                error=error,
                is_fetching=False,
                updated_at=time.monotonic(),
            ))

        self.runner.run(call, on_success, on_error, label=key)

    def _is_current(self, key: str, entry: _Entry, request_id: int, epoch: int) -> bool:
        if epoch != self._epoch or self._entries.get(key) is not entry or entry.request_id != request_id:
            logger.debug(f"Dropping superseded result for {key}")
            return False
        return True

    @staticmethod
    def _tags_for(endpoint: QueryEndpoint, data: Any, args: Dict[str, Any]) -> Tuple[str, ...]:
        if callable(endpoint.provides):
            return tuple(endpoint.provides(data, args))
        return tuple(endpoint.provides)

    def _update(self, key: str, entry: _Entry, state: QueryState):
        entry.state = state
        self.query_updated.emit(key, state)

    # =========================================================================
    # Invalidation
    # =========================================================================

    @staticmethod
    def tag_matches(invalidated: str, provided: str) -> bool:
        """"Type" invalidates every "Type" and "Type:id"; "Type:id" only itself."""
        if ":" in invalidated:
            return invalidated == provided
        return provided == invalidated or provided.startswith(f"{invalidated}:")

    def invalidate_tags(self, tags: Iterable[str]) -> List[str]:
        """
        Mark entries providing any of ``tags`` stale.

        Subscribed entries are refetched; unobserved ones are dropped.

        Returns:
            Keys of the invalidated entries
        """
        tags = tuple(tags)
        invalidated: List[str] = []
        for key, entry in list(self._entries.items()):
            if any(self.tag_matches(t, p) for t in tags for p in entry.tags):
                invalidated.append(key)
                entry.stale = True
                if entry.subscribers > 0:
                    if not entry.state.is_fetching:
                        self._fetch(key, entry)
                elif not entry.state.is_fetching:
                    del self._entries[key]

        if invalidated:
            logger.info(f"Invalidated {len(invalidated)} cached queries for tags {list(tags)}")
        return invalidated

    def refetch_on_focus(self) -> int:
        """Refetch every observed entry (window regained focus)."""
        count = 0
        for key, entry in list(self._entries.items()):
            if entry.subscribers > 0 and self.refetch(key):
                count += 1
        logger.debug(f"Refetch on focus: {count} queries")
        return count

    def reset(self):
        """Drop everything (logout). In-flight results are discarded on arrival."""
        self._epoch += 1
        self._entries.clear()
        self.hits = 0
        self.misses = 0
        logger.info("Query cache reset")

    def keys(self) -> List[str]:
        return list(self._entries)
