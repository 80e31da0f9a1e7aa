"""
词条自动链接 API 端点

- 单段文本渲染（定义 / 评论 / 备注）
- 批量渲染（评论列表，共用一份词条快照）
- 词条详情页整体渲染
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_linking_service
from app.linking.schemas import (
    FicheRenderRequest,
    FicheRenderResponse,
    LinkBatchRenderRequest,
    LinkRenderRequest,
    LinkRenderResponse,
)
from app.linking.services import LinkingService
from app.schemas.response import ApiResponse

router = APIRouter()


@router.post("/render", response_model=ApiResponse[LinkRenderResponse], summary="渲染单段文本")
def render_text(
    payload: LinkRenderRequest,
    db: Session = Depends(get_db),
    service: LinkingService = Depends(get_linking_service),
) -> ApiResponse[LinkRenderResponse]:
    try:
        result = service.render(db, payload.text, payload.format, terms=payload.terms)
        return ApiResponse(data=LinkRenderResponse(**result))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.error(f"文本链接渲染失败: {exc}")
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.post("/render/batch", response_model=ApiResponse[list[LinkRenderResponse]], summary="批量渲染文本")
def render_batch(
    payload: LinkBatchRenderRequest,
    db: Session = Depends(get_db),
    service: LinkingService = Depends(get_linking_service),
) -> ApiResponse[list[LinkRenderResponse]]:
    try:
        results = service.render_many(db, payload.texts, payload.format, terms=payload.terms)
        return ApiResponse(data=[LinkRenderResponse(**r) for r in results])
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.error(f"批量链接渲染失败: {exc}")
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@router.post("/fiche", response_model=ApiResponse[FicheRenderResponse], summary="渲染词条详情页")
def render_fiche(
    payload: FicheRenderRequest,
    db: Session = Depends(get_db),
    service: LinkingService = Depends(get_linking_service),
) -> ApiResponse[FicheRenderResponse]:
    try:
        result = service.render_fiche(db, payload.fiche, payload.format, terms=payload.terms)
        return ApiResponse(data=FicheRenderResponse(**result))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except Exception as exc:
        logger.error(f"词条详情页渲染失败: {exc}")
        raise HTTPException(status_code=500, detail=str(exc)) from exc
