from __future__ import annotations

from enum import Enum


class TermStatus(str, Enum):
    draft = "draft"
    pending = "pending"
    published = "published"
    rejected = "rejected"


class RenderFormat(str, Enum):
    json = "json"  # segment payload list
    html = "html"  # escaped html string
