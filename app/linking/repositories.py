from __future__ import annotations

import datetime as dt
from typing import Sequence

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.linking.enums import TermStatus
from app.linking.models import GlossaryTerm


class GlossaryTermRepository:
    def upsert_many(self, db: Session, items: Sequence[tuple[str, str, TermStatus]]) -> int:
        """
        items: (term, slug, status)，按 slug 新增或更新

        同一批次里 slug 重复时以最后一条为准（会话不自动 flush，
        逐条 add 会在 commit 时撞唯一约束）。
        """
        latest: dict[str, tuple[str, TermStatus]] = {}
        for term, slug, status in items:
            if not term or not slug:
                continue
            latest[slug] = (term, status)

        now = dt.datetime.now(dt.timezone.utc)
        for slug, (term, status) in latest.items():
            existing = db.execute(select(GlossaryTerm).where(GlossaryTerm.slug == slug)).scalar_one_or_none()
            if existing is None:
                db.add(
                    GlossaryTerm(
                        term=term,
                        slug=slug,
                        status=status.value,
                        created_at=now,
                        updated_at=now,
                    )
                )
            else:
                existing.term = term
                existing.status = status.value
                existing.updated_at = now
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise
        return len(latest)

    def delete_many(self, db: Session, slugs: Sequence[str]) -> int:
        slugs = [s for s in slugs if s]
        if not slugs:
            return 0
        result = db.execute(delete(GlossaryTerm).where(GlossaryTerm.slug.in_(slugs)))
        db.commit()
        return int(result.rowcount or 0)

    def list_terms(
        self,
        db: Session,
        status: TermStatus | None = None,
        skip: int = 0,
        limit: int = 1000,
    ) -> list[GlossaryTerm]:
        stmt = select(GlossaryTerm).order_by(GlossaryTerm.id)
        if status is not None:
            stmt = stmt.where(GlossaryTerm.status == status.value)
        return list(db.execute(stmt.offset(skip).limit(limit)).scalars().all())

    def list_published(self, db: Session) -> list[tuple[str, str]]:
        rows = db.execute(
            select(GlossaryTerm.term, GlossaryTerm.slug)
            .where(GlossaryTerm.status == TermStatus.published.value)
            .order_by(GlossaryTerm.id)
        ).all()
        return [(term, slug) for term, slug in rows]
