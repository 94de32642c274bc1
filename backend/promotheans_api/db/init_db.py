import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from promotheans_api.core.config import Settings
from promotheans_api.core.security import hash_password
from promotheans_api.db.base import Base
from promotheans_api.models import AdminUser, UserRole  # noqa: F401  registers all tables
from promotheans_api.repositories.youtube import YoutubeSettingRepository

logger = logging.getLogger(__name__)


async def create_tables(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ensure_default_admin(db: AsyncSession, username: str, password: str) -> AdminUser:
    """Create the bootstrap admin, or make sure the existing one still has the Admin role."""
    res = await db.execute(select(AdminUser).where(AdminUser.username == username))
    user = res.scalar_one_or_none()

    if user is None:
        user = AdminUser(
            username=username,
            password_hash=hash_password(password),
            user_role=UserRole.admin.value,
        )
        db.add(user)
        logger.info("Default admin user '%s' created; change the password after first login", username)
    else:
        user.user_role = UserRole.admin.value
        logger.info("Admin user '%s' exists and has Admin role", username)

    await db.commit()
    return user


async def init_database(
    engine: AsyncEngine,
    sessionmaker: async_sessionmaker[AsyncSession],
    settings: Settings,
) -> None:
    if settings.auto_create_tables:
        await create_tables(engine)

    async with sessionmaker() as db:
        if await YoutubeSettingRepository(db).ensure_default(settings.default_video_id, settings.default_video_url):
            logger.info("Default YouTube video created")
        await ensure_default_admin(db, settings.admin_username, settings.admin_password)

    logger.info("Database tables initialized successfully")
