from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from loguru import logger

from app.linking.enums import TermStatus


@dataclass(frozen=True)
class TermIndexEntry:
    term: str
    slug: str


def _field(item: Any, name: str) -> Any:
    # 兼容 dict / ORM 行 / pydantic 对象
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


class TermIndex:
    """
    已发布词条的只读快照（每次渲染构建一次）

    - 仅保留 status == published 的词条
    - 排除空词条（空串会产生零宽匹配导致死循环）
    - 按词条长度降序，长度相同保持原有相对顺序（稳定排序）
    - (term, slug) 完全相同的重复项只保留第一条
    """

    def __init__(self, entries: Iterable[TermIndexEntry] = ()) -> None:
        self._entries: tuple[TermIndexEntry, ...] = tuple(entries)

    @classmethod
    def build(cls, terms: Iterable[Any] | None) -> "TermIndex":
        seen: set[tuple[str, str]] = set()
        entries: list[TermIndexEntry] = []
        for item in terms or ():
            status = _field(item, "status")
            status = getattr(status, "value", status)
            if status != TermStatus.published.value:
                continue
            term = _field(item, "term")
            slug = _field(item, "slug")
            if not term or not str(term).strip() or not slug:
                continue
            key = (str(term), str(slug))
            if key in seen:
                continue
            seen.add(key)
            entries.append(TermIndexEntry(term=key[0], slug=key[1]))

        # sorted() 是稳定排序
        entries = sorted(entries, key=lambda e: len(e.term), reverse=True)
        logger.debug(f"词条索引构建完成: {len(entries)} 条")
        return cls(entries)

    @property
    def entries(self) -> tuple[TermIndexEntry, ...]:
        return self._entries

    def __iter__(self) -> Iterator[TermIndexEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)
