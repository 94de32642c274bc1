import sys
from pathlib import Path

# Ensure backend/ is on sys.path before importing `promotheans_api`.
# This allows running the script directly: `python seeding/seed_admin.py` from the backend folder.
BASE_DIR = Path(__file__).resolve().parents[1]
sys.path.append(str(BASE_DIR))

import argparse
import asyncio

from promotheans_api.core.config import settings
from promotheans_api.db.init_db import ensure_default_admin
from promotheans_api.db.session import get_engine, get_sessionmaker


async def main(username: str, password: str):
    engine = get_engine(settings.database_url, pool_size=1)
    try:
        async with get_sessionmaker(engine)() as db:
            user = await ensure_default_admin(db, username, password)
            print(f"Admin '{user.username}' (id={user.id}) ready with role {user.user_role}.")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or promote an Admin account.")
    parser.add_argument("--username", default=settings.admin_username)
    parser.add_argument("--password", default=settings.admin_password, help="only used when the account is created")
    args = parser.parse_args()
    asyncio.run(main(args.username, args.password))
