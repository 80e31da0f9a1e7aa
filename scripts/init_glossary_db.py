"""Create the glossary term table and optionally seed it.

Usage:
  1) Ensure .env is configured for DB connection.
  2) Run: python scripts/init_glossary_db.py [terms.json]

terms.json is a list of {"term", "slug", "status"} objects exported from
the term catalog. Rows are upserted by slug.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

from app.core.database import Base, SessionLocal, engine
from app.linking import models as _models  # noqa: F401
from app.linking.services import TermCatalogService


def main() -> None:
    Base.metadata.create_all(bind=engine)
    print("✅ Glossary tables ensured (create_all executed).")

    if len(sys.argv) < 2:
        return

    items = json.loads(Path(sys.argv[1]).read_text(encoding="utf-8"))
    db = SessionLocal()
    try:
        n = TermCatalogService().upsert_terms(db, items)
    finally:
        db.close()
    print(f"✅ Seeded {n} terms from {sys.argv[1]}")


if __name__ == "__main__":
    main()
