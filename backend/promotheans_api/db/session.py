from urllib.parse import urlsplit, urlunsplit, parse_qsl, urlencode

from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession, AsyncEngine


def _sanitize_db_url(url: str) -> str:
    """Remove any `sslmode` query param which asyncpg does not accept as a keyword arg.

    This keeps URLs like `postgresql+asyncpg://.../?sslmode=require` from raising
    `TypeError: connect() got an unexpected keyword argument 'sslmode'`.
    """
    parts = urlsplit(url)
    if not parts.query:
        return url
    qs = parse_qsl(parts.query, keep_blank_values=True)
    filtered = [(k, v) for (k, v) in qs if k.lower() != "sslmode"]
    new_query = urlencode(filtered)
    if new_query == parts.query:
        return url
    return urlunsplit((parts.scheme, parts.netloc, parts.path, new_query, parts.fragment))


def get_engine(database_url: str, pool_size: int = 10) -> AsyncEngine:
    """Create the async engine. No connection is opened until first use."""
    db_url = _sanitize_db_url(database_url)
    if db_url.startswith("sqlite"):
        return create_async_engine(db_url, echo=False)
    # requests beyond pool_size wait for a free connection instead of failing
    return create_async_engine(
        db_url,
        echo=False,
        pool_size=pool_size,
        max_overflow=0,
        pool_timeout=60,
        pool_pre_ping=True,
    )


def get_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db(request: Request):
    async with request.app.state.sessionmaker() as session:
        yield session
