from __future__ import annotations

import datetime as dt
import threading
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


@dataclass
class Snapshot(Generic[T]):
    value: T
    loaded_at: dt.datetime


class SnapshotCache(Generic[T]):
    """进程内快照缓存（TTL + 主动失效）

    词条目录变更时调用 invalidate()，下一次 get() 立即重建；
    否则最多 ttl 秒后自动刷新。多 worker 部署时每个进程各自维护一份。

    loader 在 get() 时传入，避免缓存持有某个请求的 DB 会话。
    """

    def __init__(self, ttl_seconds: int):
        self._ttl = dt.timedelta(seconds=ttl_seconds)
        self._snapshot: Snapshot[T] | None = None
        self._invalidated = True
        self._generation = 0
        self._lock = threading.Lock()

    def invalidate(self) -> None:
        self._generation += 1
        self._invalidated = True

    @property
    def loaded_at(self) -> dt.datetime | None:
        return self._snapshot.loaded_at if self._snapshot is not None else None

    def _is_stale(self, now: dt.datetime) -> bool:
        if self._snapshot is None or self._invalidated:
            return True
        return now - self._snapshot.loaded_at >= self._ttl

    def get(self, loader: Callable[[], T]) -> T:
        now = dt.datetime.now(dt.timezone.utc)
        if not self._is_stale(now):
            return self._snapshot.value  # type: ignore[union-attr]

        with self._lock:
            if self._is_stale(now):
                generation = self._generation
                self._snapshot = Snapshot(loader(), now)
                # 加载期间又有 invalidate() 时保持失效，下次 get() 重建
                self._invalidated = self._generation != generation
            return self._snapshot.value  # type: ignore[union-attr]
