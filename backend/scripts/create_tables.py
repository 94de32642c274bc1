"""Create all tables from SQLAlchemy models using the sync DATABASE_URL_SYNC.

Usage:
    cd backend
    python scripts/create_tables.py

This is a convenience helper for local testing. For production use Alembic migrations.
"""
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from sqlalchemy import create_engine

from promotheans_api.core.config import settings
from promotheans_api.db.base import Base
import promotheans_api.models  # noqa: F401


def main() -> int:
    url = settings.database_url_sync
    if not url:
        print("DATABASE_URL_SYNC is not set. Check backend/.env")
        return 2

    print(f"Creating tables on {url} ...")
    engine = create_engine(url)
    Base.metadata.create_all(engine)
    print("Done.")
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
