from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Sequence

from loguru import logger

from app.linking.overlap import find_overlapping, resolve_candidates
from app.linking.segments import ChoiceSegment, LinkSegment, Segment, TextSegment, URLSegment
from app.linking.term_index import TermIndexEntry
from app.linking.url_extractor import extract_urls

DEFAULT_MAX_DEPTH = 16


@lru_cache(maxsize=4096)
def _term_pattern(term: str) -> re.Pattern[str]:
    # 整词匹配：前后都不能紧挨着单词字符（"coach" 不会命中 "coaching"）
    return re.compile(rf"(?<!\w){re.escape(term)}(?!\w)", re.IGNORECASE)


def find_first(text: str, terms: Iterable[TermIndexEntry]) -> tuple[TermIndexEntry, re.Match[str]] | None:
    """
    按索引顺序（长词优先）找第一个能命中的词条

    注意优先级是「词条顺序」而不是「文本中的位置」：
    片段里任何位置出现的最长词条都会先于更靠前的短词条被选中。
    """
    for entry in terms:
        m = _term_pattern(entry.term).search(text)
        if m is not None:
            return entry, m
    return None


def link(
    text: str | None,
    terms: Sequence[TermIndexEntry],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    _depth: int = 0,
) -> list:
    """
    把文本切分为普通文本与词条链接

    - 空文本原样返回 [text]（包括 None）
    - 命中后对 before / after 用完整词条列表分别递归
    - 命中片段内若包含其他词条，则对片段递归生成嵌套链接作为 label
    """
    if not text:
        return [text]

    hit = find_first(text, terms)
    if hit is None:
        return [TextSegment(text)]

    entry, m = hit
    before = text[: m.start()]
    matched = m.group(0)
    after = text[m.end():]

    overlapping = find_overlapping(matched, terms)
    if overlapping and _depth < max_depth:
        inner = link(matched, overlapping, max_depth=max_depth, _depth=_depth + 1)
        label: tuple[Segment, ...] = tuple(seg for seg in inner if seg)
    else:
        if overlapping:
            logger.warning(f"嵌套链接深度超过上限 {max_depth}，片段按纯文本处理: {matched!r}")
        label = (TextSegment(matched),)

    primary = LinkSegment(label=label, slug=entry.slug)
    candidates = resolve_candidates(matched, entry.slug, terms, overlapping)
    segment = ChoiceSegment(primary=primary, candidates=candidates) if len(candidates) > 1 else primary

    return [
        *link(before, terms, max_depth=max_depth, _depth=_depth),
        segment,
        *link(after, terms, max_depth=max_depth, _depth=_depth),
    ]


def autolink(
    text: str | None,
    terms: Sequence[TermIndexEntry],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list:
    """完整流水线：先切出 URL，再对每段普通文本做词条链接。"""
    out: list = []
    for part in extract_urls(text):
        if isinstance(part, URLSegment):
            out.append(part)
        else:
            out.extend(link(part, terms, max_depth=max_depth))
    return out
