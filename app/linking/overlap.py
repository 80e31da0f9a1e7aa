from __future__ import annotations

from typing import Iterable, Sequence

from app.linking.segments import LinkCandidate
from app.linking.term_index import TermIndexEntry


def find_overlapping(matched_text: str, terms: Iterable[TermIndexEntry]) -> list[TermIndexEntry]:
    """
    命中片段内部包含的其他词条（嵌套概念）

    按原文逐字比较（区分大小写），与命中片段完全相同的词条不算重叠。
    重叠词条一定比命中片段短，嵌套递归逐层收缩。
    """
    return [e for e in terms if e.term in matched_text and e.term != matched_text]


def find_homonyms(matched_text: str, primary_slug: str, terms: Iterable[TermIndexEntry]) -> list[TermIndexEntry]:
    """与命中片段文字相同、slug 不同的词条（同名不同义）。"""
    folded = matched_text.casefold()
    return [e for e in terms if e.slug != primary_slug and e.term.casefold() == folded]


def dedupe_by_slug(candidates: Iterable[LinkCandidate]) -> list[LinkCandidate]:
    seen: set[str] = set()
    out: list[LinkCandidate] = []
    for c in candidates:
        if c.slug in seen:
            continue
        seen.add(c.slug)
        out.append(c)
    return out


def resolve_candidates(
    matched_text: str,
    primary_slug: str,
    terms: Sequence[TermIndexEntry],
    overlapping: Sequence[TermIndexEntry] | None = None,
) -> tuple[LinkCandidate, ...]:
    """
    命中片段可跳转的全部目标

    顺序：[主词条, 同名词条..., 重叠词条...]（后两者按索引顺序），按 slug 去重保留首个。
    """
    if overlapping is None:
        overlapping = find_overlapping(matched_text, terms)
    candidates = [LinkCandidate(term=matched_text, slug=primary_slug)]
    candidates.extend(LinkCandidate(term=e.term, slug=e.slug) for e in find_homonyms(matched_text, primary_slug, terms))
    candidates.extend(LinkCandidate(term=e.term, slug=e.slug) for e in overlapping)
    return tuple(dedupe_by_slug(candidates))
