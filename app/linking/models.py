from __future__ import annotations

import datetime as dt

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base
from app.linking.enums import TermStatus


UTCNOW = lambda: dt.datetime.now(dt.timezone.utc)


class GlossaryTerm(Base):
    """词条目录镜像（只保存自动链接需要的字段）。"""

    __tablename__ = "glossary_terms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    term: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    status: Mapped[str] = mapped_column(String(32), index=True, nullable=False, default=TermStatus.pending.value)

    created_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=UTCNOW, nullable=False)
    updated_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), default=UTCNOW, onupdate=UTCNOW, nullable=False)
