"""
词条自动链接模块

把自由文本（定义、评论、备注）中出现的已发布词条改写为可跳转的引用：
- URL 先行切出，不参与词条匹配
- 长词条优先，整词、不区分大小写匹配
- 命中片段内包含的其他词条生成嵌套链接，多目标时给出消歧分组
"""

from app.linking.matcher import autolink, link
from app.linking.segments import ChoiceSegment, LinkCandidate, LinkSegment, TextSegment, URLSegment
from app.linking.term_index import TermIndex, TermIndexEntry
from app.linking.url_extractor import extract_urls

__all__ = [
    "ChoiceSegment",
    "LinkCandidate",
    "LinkSegment",
    "TermIndex",
    "TermIndexEntry",
    "TextSegment",
    "URLSegment",
    "autolink",
    "extract_urls",
    "link",
]
