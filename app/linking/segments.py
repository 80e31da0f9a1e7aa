from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

# 自动链接的输出单元（纯数据，渲染方式由展示层决定）


@dataclass(frozen=True)
class TextSegment:
    value: str


@dataclass(frozen=True)
class LinkCandidate:
    term: str
    slug: str


@dataclass(frozen=True)
class LinkSegment:
    """指向词条页面的链接，label 里可以再嵌套子链接。"""

    label: tuple["Segment", ...]
    slug: str


@dataclass(frozen=True)
class ChoiceSegment:
    """同一片段可跳转到多个词条时的消歧分组。"""

    primary: LinkSegment
    candidates: tuple[LinkCandidate, ...]


@dataclass(frozen=True)
class URLSegment:
    display_text: str
    href: str


Segment = Union[TextSegment, LinkSegment, ChoiceSegment, URLSegment]


def plain_text(segments: Iterable[object]) -> str:
    """
    还原片段序列的原始文本（忽略链接标记）

    递归基例可能产生 "" / None，这里按空串处理。
    """
    parts: list[str] = []
    for seg in segments:
        if seg is None:
            continue
        if isinstance(seg, str):
            parts.append(seg)
        elif isinstance(seg, TextSegment):
            parts.append(seg.value)
        elif isinstance(seg, URLSegment):
            parts.append(seg.display_text)
        elif isinstance(seg, LinkSegment):
            parts.append(plain_text(seg.label))
        elif isinstance(seg, ChoiceSegment):
            parts.append(plain_text(seg.primary.label))
    return "".join(parts)
