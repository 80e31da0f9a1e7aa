from __future__ import annotations

import re

from app.linking.segments import URLSegment

# http(s)://... | www.... | 独立的域名（前面是行首或空白）
_URL_RE = re.compile(
    r"https?://\S+"
    r"|www\.\S+"
    r"|(?<!\S)[a-zA-Z0-9-]+\.(?:com|fr|org|net|edu|gov|info|biz|co|io)\S*",
    re.IGNORECASE,
)
_SCHEME_RE = re.compile(r"^https?://", re.IGNORECASE)


def normalize_href(url: str) -> str:
    if _SCHEME_RE.match(url):
        return url
    return "https://" + url


def extract_urls(text: str | None) -> list[str | URLSegment]:
    """
    URL 预处理：把文本切成「普通文本 / URL」交替的片段

    URL 片段不会再参与词条匹配；普通文本原样返回，交给 matcher 继续处理。
    """
    if not text:
        return [text]

    parts: list[str | URLSegment] = []
    cursor = 0
    for m in _URL_RE.finditer(text):
        if m.start() > cursor:
            parts.append(text[cursor:m.start()])
        display = m.group(0)
        parts.append(URLSegment(display_text=display, href=normalize_href(display)))
        cursor = m.end()

    if cursor < len(text):
        parts.append(text[cursor:])
    return parts
