from __future__ import annotations

from typing import Any, Iterable

from markupsafe import Markup, escape

from app.linking.segments import ChoiceSegment, LinkCandidate, LinkSegment, TextSegment, URLSegment

DEFAULT_ROUTE_PREFIX = "/fiche"
DEFAULT_CHOICE_TITLE = "Termes trouvés :"


def build_href(route_prefix: str, slug: str) -> str:
    return f"{route_prefix.rstrip('/')}/{slug}"


class SegmentRenderer:
    """
    片段树 -> 输出（纯转换，不做任何匹配）

    - to_payload(): JSON 友好的 dict 列表，供前端自行渲染
    - to_html(): 服务端直出 HTML（markupsafe 转义）
    """

    def __init__(self, route_prefix: str = DEFAULT_ROUTE_PREFIX, choice_title: str = DEFAULT_CHOICE_TITLE) -> None:
        self.route_prefix = route_prefix
        self.choice_title = choice_title

    def href(self, slug: str) -> str:
        return build_href(self.route_prefix, slug)

    # ---------- JSON ----------

    def to_payload(self, segments: Iterable[object]) -> list[dict[str, Any]]:
        out: list[dict[str, Any]] = []
        for seg in segments:
            # 递归基例留下的 "" / None 不输出
            if not seg:
                continue
            out.append(self._payload(seg))
        return out

    def _payload(self, seg: object) -> dict[str, Any]:
        if isinstance(seg, str):
            return {"type": "text", "value": seg}
        if isinstance(seg, TextSegment):
            return {"type": "text", "value": seg.value}
        if isinstance(seg, URLSegment):
            return {"type": "url", "text": seg.display_text, "href": seg.href}
        if isinstance(seg, LinkSegment):
            return {
                "type": "link",
                "slug": seg.slug,
                "href": self.href(seg.slug),
                "label": self.to_payload(seg.label),
            }
        if isinstance(seg, ChoiceSegment):
            return {
                "type": "choice",
                "primary": self._payload(seg.primary),
                "candidates": [self._candidate_payload(c) for c in seg.candidates],
            }
        raise TypeError(f"unsupported segment: {type(seg).__name__}")

    def _candidate_payload(self, c: LinkCandidate) -> dict[str, str]:
        return {"term": c.term, "slug": c.slug, "href": self.href(c.slug)}

    # ---------- HTML ----------

    def to_html(self, segments: Iterable[object]) -> Markup:
        return Markup("").join(self._html(seg, in_link=False) for seg in segments if seg)

    def _html(self, seg: object, *, in_link: bool) -> Markup:
        if isinstance(seg, str):
            return escape(seg)
        if isinstance(seg, TextSegment):
            return escape(seg.value)
        if isinstance(seg, URLSegment):
            return Markup(
                '<a href="{}" target="_blank" rel="noopener noreferrer" class="external-link" '
                'onclick="event.stopPropagation()">{}</a>'
            ).format(seg.href, seg.display_text)
        if isinstance(seg, LinkSegment):
            label = Markup("").join(self._html(s, in_link=True) for s in seg.label if s)
            if in_link:
                # <a> 不能嵌套
                return Markup('<span class="term-link" role="link" data-href="{}">{}</span>').format(
                    self.href(seg.slug), label
                )
            return Markup('<a class="term-link" href="{}">{}</a>').format(self.href(seg.slug), label)
        if isinstance(seg, ChoiceSegment):
            item_tpl = (
                Markup('<span role="menuitem" data-href="{}">{}</span>')
                if in_link
                else Markup('<a role="menuitem" href="{}">{}</a>')
            )
            items = Markup("").join(item_tpl.format(self.href(c.slug), c.term) for c in seg.candidates)
            return Markup(
                '<span class="term-choice">{}<span class="term-choice-menu" role="menu">'
                '<span class="term-choice-title">{}</span>{}</span></span>'
            ).format(self._html(seg.primary, in_link=in_link), self.choice_title, items)
        raise TypeError(f"unsupported segment: {type(seg).__name__}")
