from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_term_catalog_service
from app.linking.enums import TermStatus
from app.linking.schemas import BulkTermDelete, BulkTermUpsert, TermIndexItem, TermRecord
from app.linking.services import TermCatalogService

router = APIRouter()


@router.post("/upsert")
def upsert_terms(
    payload: BulkTermUpsert,
    db: Session = Depends(get_db),
    service: TermCatalogService = Depends(get_term_catalog_service),
):
    try:
        n = service.upsert_terms(db, payload.items)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"affected": n}


@router.post("/delete")
def delete_terms(
    payload: BulkTermDelete,
    db: Session = Depends(get_db),
    service: TermCatalogService = Depends(get_term_catalog_service),
):
    n = service.delete_terms(db, payload.slugs)
    return {"deleted": n}


@router.get("", response_model=list[TermRecord])
def list_terms(
    status: TermStatus | None = Query(None, description="按状态过滤"),
    skip: int = Query(0, ge=0),
    limit: int = Query(200, ge=1, le=1000),
    db: Session = Depends(get_db),
    service: TermCatalogService = Depends(get_term_catalog_service),
):
    rows = service.list_terms(db, status=status, skip=skip, limit=limit)
    return [TermRecord.model_validate(r) for r in rows]


@router.get("/index", response_model=list[TermIndexItem])
def get_term_index(
    db: Session = Depends(get_db),
    service: TermCatalogService = Depends(get_term_catalog_service),
):
    """当前生效的已发布词条索引（长词在前）。"""
    return [TermIndexItem(term=e.term, slug=e.slug) for e in service.get_index(db)]
