from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.linking.enums import RenderFormat, TermStatus


class TermItem(BaseModel):
    term: str = Field(..., description="词条显示文本")
    slug: str | None = Field(default=None, description="路由 slug，为空时由词条生成")
    status: TermStatus = Field(default=TermStatus.published)

    model_config = ConfigDict(from_attributes=True)


class TermRecord(BaseModel):
    id: int
    term: str
    slug: str
    status: str

    model_config = ConfigDict(from_attributes=True)


class TermIndexItem(BaseModel):
    term: str
    slug: str


class BulkTermUpsert(BaseModel):
    items: list[TermItem] = Field(..., min_length=1)


class BulkTermDelete(BaseModel):
    slugs: list[str] = Field(..., min_length=1)


class LinkRenderRequest(BaseModel):
    text: str | None = Field(default=None, description="待链接的自由文本")
    format: RenderFormat = Field(default=RenderFormat.json)
    terms: list[TermItem] | None = Field(default=None, description="临时词条列表，传入时不读取词条目录")


class LinkBatchRenderRequest(BaseModel):
    texts: list[str | None] = Field(..., min_length=1)
    format: RenderFormat = Field(default=RenderFormat.json)
    terms: list[TermItem] | None = None


class LinkRenderResponse(BaseModel):
    format: str
    segments: list[dict[str, Any]] | None = None
    html: str | None = None


class FicheText(BaseModel):
    text: str | None = None


class FicheSource(BaseModel):
    text: str | None = None
    url: str | None = None


class FicheContent(BaseModel):
    definition: str | None = None
    examples: list[FicheText] = Field(default_factory=list)
    sources: list[FicheSource] = Field(default_factory=list)
    remarks: list[FicheText] = Field(default_factory=list)


class FicheRenderRequest(BaseModel):
    fiche: FicheContent
    format: RenderFormat = Field(default=RenderFormat.json)
    terms: list[TermItem] | None = None


class RenderedSource(BaseModel):
    content: LinkRenderResponse
    url: str | None = None


class FicheRenderResponse(BaseModel):
    definition: LinkRenderResponse
    examples: list[LinkRenderResponse]
    sources: list[RenderedSource]
    remarks: list[LinkRenderResponse]
