import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from promotheans_api.core import config
from promotheans_api.core.config import Settings
from promotheans_api.core.errors import register_exception_handlers
from promotheans_api.core.security import TokenService
from promotheans_api.db.init_db import init_database
from promotheans_api.db.session import get_engine, get_sessionmaker
from promotheans_api.services.rate_limit import FixedWindowRateLimiter, install_rate_limit
from promotheans_api.services.storage import build_storage
from promotheans_api.services.uploads import UploadResolver

from promotheans_api.api.accounts.auth import router as auth_router
from promotheans_api.api.news import router as news_router
from promotheans_api.api.community_arts import router as community_arts_router
from promotheans_api.api.categories import news_router as news_categories_router
from promotheans_api.api.categories import art_router as art_categories_router
from promotheans_api.api.uploads import router as uploads_router
from promotheans_api.api.users import router as users_router
from promotheans_api.api.youtube import router as youtube_router
from promotheans_api.api.admin import router as admin_router

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or config.settings

    logging.basicConfig(level=settings.log_level.upper())

    engine = get_engine(settings.database_url, pool_size=settings.db_pool_size)
    sessionmaker = get_sessionmaker(engine)
    storage = build_storage(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        await init_database(engine, sessionmaker, settings)
        storage.ensure_root()
        logger.info("API available under %s (uploads via %s)", settings.api_prefix, storage.name)
        yield
        await engine.dispose()

    app = FastAPI(title="Promotheans API", lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.sessionmaker = sessionmaker
    app.state.token_service = TokenService(
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
        expire_minutes=settings.access_token_expire_minutes,
    )
    app.state.storage = storage
    app.state.upload_resolver = UploadResolver(storage, max_bytes=settings.max_file_size)
    app.state.rate_limiter = FixedWindowRateLimiter(
        limit=settings.rate_limit_max_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )

    install_rate_limit(app, app.state.rate_limiter, settings.api_prefix)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    api = APIRouter()
    api.include_router(auth_router)
    api.include_router(news_router)
    api.include_router(community_arts_router)
    api.include_router(news_categories_router)
    api.include_router(art_categories_router)
    api.include_router(uploads_router)
    api.include_router(users_router)
    api.include_router(youtube_router)
    api.include_router(admin_router)

    @api.get("/health")
    def health():
        return {"status": "ok", "message": "Promotheans API is running"}

    app.include_router(api, prefix=settings.api_prefix)
    return app


app = create_app()
