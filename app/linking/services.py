from __future__ import annotations

import re
import unicodedata
from typing import Any, Iterable, Sequence

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.linking.cache import SnapshotCache
from app.linking.enums import RenderFormat, TermStatus
from app.linking.matcher import autolink
from app.linking.models import GlossaryTerm
from app.linking.renderer import SegmentRenderer
from app.linking.repositories import GlossaryTermRepository
from app.linking.term_index import TermIndex

_SLUG_STRIP_RE = re.compile(r"[^a-z0-9]+")


def slugify(text: str) -> str:
    """「Écoute active」 -> 「ecoute-active」"""
    ascii_text = unicodedata.normalize("NFKD", text).encode("ascii", "ignore").decode("ascii")
    return _SLUG_STRIP_RE.sub("-", ascii_text.lower()).strip("-")


def _value(item: Any, name: str) -> Any:
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name, None)


def normalize_items(items: Iterable[Any]) -> list[tuple[str, str, TermStatus]]:
    """
    规范化外部传入的词条：(term, slug, status)

    - 空词条跳过
    - slug 为空时由词条生成
    - 未知 status 抛 ValueError
    """
    out: list[tuple[str, str, TermStatus]] = []
    for item in items:
        term = (_value(item, "term") or "").strip()
        if not term:
            continue
        slug = (_value(item, "slug") or "").strip() or slugify(term)
        if not slug:
            continue
        raw_status = _value(item, "status") or TermStatus.published
        try:
            status = TermStatus(getattr(raw_status, "value", raw_status))
        except ValueError as exc:
            raise ValueError(f"未知的词条状态: {raw_status}") from exc
        out.append((term, slug, status))
    return out


class TermCatalogService:
    """词条目录：持久化镜像 + 已发布词条索引快照。"""

    def __init__(self, repo: GlossaryTermRepository | None = None, ttl_seconds: int | None = None) -> None:
        self._repo = repo or GlossaryTermRepository()
        ttl = settings.TERM_INDEX_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        self._cache: SnapshotCache[TermIndex] = SnapshotCache(ttl)

    def _load_index(self, db: Session) -> TermIndex:
        rows = self._repo.list_published(db)
        index = TermIndex.build(
            {"term": term, "slug": slug, "status": TermStatus.published.value} for term, slug in rows
        )
        logger.info(f"词条索引已刷新: {len(index)} 条已发布词条")
        return index

    def invalidate(self) -> None:
        self._cache.invalidate()

    def get_index(self, db: Session) -> TermIndex:
        return self._cache.get(lambda: self._load_index(db))

    def upsert_terms(self, db: Session, items: Sequence[Any]) -> int:
        try:
            n = self._repo.upsert_many(db, normalize_items(items))
        except IntegrityError as exc:
            logger.error(f"词条写入冲突: {exc}")
            raise ValueError("词条 slug 冲突，写入已回滚") from exc
        # 目录变更立即生效
        self.invalidate()
        return n

    def delete_terms(self, db: Session, slugs: Sequence[str]) -> int:
        n = self._repo.delete_many(db, slugs)
        self.invalidate()
        return n

    def list_terms(
        self,
        db: Session,
        status: TermStatus | None = None,
        skip: int = 0,
        limit: int = 1000,
    ) -> list[GlossaryTerm]:
        return self._repo.list_terms(db, status=status, skip=skip, limit=limit)


class LinkingService:
    """
    自由文本自动链接

    URL 预处理 -> 词条匹配/切分 -> 渲染（json 或 html）。
    每次调用只读取一份索引快照，调用之间不共享可变状态。
    """

    def __init__(
        self,
        catalog: TermCatalogService | None = None,
        *,
        route_prefix: str | None = None,
        max_depth: int | None = None,
        choice_title: str | None = None,
    ) -> None:
        self.catalog = catalog or TermCatalogService()
        self.max_depth = settings.LINKING_MAX_DEPTH if max_depth is None else max_depth
        self.renderer = SegmentRenderer(
            route_prefix=route_prefix or settings.LINKING_ROUTE_PREFIX,
            choice_title=choice_title or settings.LINKING_CHOICE_TITLE,
        )

    def resolve_index(self, db: Session | None, terms: Iterable[Any] | None = None) -> TermIndex:
        if terms is not None:
            return TermIndex.build(
                {"term": term, "slug": slug, "status": status.value} for term, slug, status in normalize_items(terms)
            )
        if db is None:
            raise ValueError("未提供词条列表时需要数据库会话")
        return self.catalog.get_index(db)

    def _link(self, text: str | None, index: TermIndex) -> list:
        if not text:
            return []
        return [seg for seg in autolink(text, index.entries, max_depth=self.max_depth) if seg]

    def _render(self, text: str | None, index: TermIndex, fmt: RenderFormat) -> dict[str, Any]:
        segments = self._link(text, index)
        if fmt == RenderFormat.html:
            return {"format": fmt.value, "html": str(self.renderer.to_html(segments))}
        return {"format": fmt.value, "segments": self.renderer.to_payload(segments)}

    def link_text(self, db: Session | None, text: str | None, terms: Iterable[Any] | None = None) -> list:
        return self._link(text, self.resolve_index(db, terms))

    def render(
        self,
        db: Session | None,
        text: str | None,
        fmt: RenderFormat = RenderFormat.json,
        terms: Iterable[Any] | None = None,
    ) -> dict[str, Any]:
        return self._render(text, self.resolve_index(db, terms), fmt)

    def render_many(
        self,
        db: Session | None,
        texts: Sequence[str | None],
        fmt: RenderFormat = RenderFormat.json,
        terms: Iterable[Any] | None = None,
    ) -> list[dict[str, Any]]:
        index = self.resolve_index(db, terms)
        return [self._render(text, index, fmt) for text in texts]

    def render_fiche(
        self,
        db: Session | None,
        fiche: Any,
        fmt: RenderFormat = RenderFormat.json,
        terms: Iterable[Any] | None = None,
    ) -> dict[str, Any]:
        """词条详情页：定义、示例、来源、备注逐项链接；来源自带的 url 原样保留。"""
        index = self.resolve_index(db, terms)
        return {
            "definition": self._render(_value(fiche, "definition"), index, fmt),
            "examples": [self._render(_value(ex, "text"), index, fmt) for ex in _value(fiche, "examples") or []],
            "sources": [
                {"content": self._render(_value(src, "text"), index, fmt), "url": _value(src, "url") or None}
                for src in _value(fiche, "sources") or []
            ],
            "remarks": [self._render(_value(r, "text"), index, fmt) for r in _value(fiche, "remarks") or []],
        }
