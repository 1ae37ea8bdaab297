"""ToneHunt Catalog - 音色模型目录服务入口。"""

from contextlib import asynccontextmanager

import sentry_sdk
from fastapi import FastAPI
from fastapi.routing import APIRoute
from loguru import logger
from starlette.middleware.cors import CORSMiddleware

from src.core.application import security as app_security
from src.core.config import settings
from src.core.infrastructure.database.session import check_db_health, init_db
from src.core.infrastructure.health import overall_status
from src.core.infrastructure.logging import setup_logging
from src.core.infrastructure.security import jwt as infra_jwt
from src.core.interfaces.http.exceptions import register_exception_handlers
from src.core.interfaces.http.routers import api_router
from src.modules.catalog.application import dependencies as catalog_app_deps
from src.modules.catalog.infrastructure import dependencies as catalog_infra_deps

APP_VERSION = "0.1.0"

# application-layer stub -> infrastructure implementation
DEPENDENCY_OVERRIDES = {
    app_security.get_current_profile_id: infra_jwt.get_current_profile_id,
    app_security.get_optional_profile_id: infra_jwt.get_optional_profile_id,
    catalog_app_deps.get_tone_model_repository: catalog_infra_deps.get_tone_model_repository,
    catalog_app_deps.get_category_repository: catalog_infra_deps.get_category_repository,
}

if settings.SENTRY_DSN and settings.ENVIRONMENT != "local":
    sentry_sdk.init(
        dsn=str(settings.SENTRY_DSN),
        environment=settings.ENVIRONMENT,
        release=f"tonehunt-catalog@{APP_VERSION}",
        traces_sample_rate=0.1,
    )


@asynccontextmanager
async def lifespan(_: FastAPI):
    setup_logging()
    logger.info(f"Starting {settings.PROJECT_NAME} {APP_VERSION} ({settings.ENVIRONMENT})")
    await init_db()
    yield
    logger.info(f"{settings.PROJECT_NAME} stopped")


def _operation_id(route: APIRoute) -> str:
    return f"{route.tags[0]}-{route.name}" if route.tags else route.name


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=(
        "音色模型目录：按分类筛选、排序、分页浏览。\n\n"
        "列表与计数接口匿名可用；我的模型与删除需要 JWT Bearer。"
    ),
    version=APP_VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=None,
    root_path=settings.ROOTPATH,
    generate_unique_id_function=_operation_id,
    lifespan=lifespan,
)
app.dependency_overrides.update(DEPENDENCY_OVERRIDES)
register_exception_handlers(app)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.all_cors_origins,
    allow_credentials=True,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)
app.include_router(api_router, prefix=settings.API_V1_STR)


@app.get("/health", tags=["health"])
async def health_check():
    """healthy / degraded（目录表未迁移）/ unhealthy（数据库不可用）。"""
    database = await check_db_health()
    return {
        "status": overall_status(database).value,
        "environment": settings.ENVIRONMENT,
        "version": APP_VERSION,
        "components": {"database": database.model_dump(mode="json")},
    }


@app.get("/", tags=["root"])
async def root():
    return {
        "message": f"Welcome to {settings.PROJECT_NAME} API",
        "docs": f"{settings.API_V1_STR}/docs",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=settings.SERVER_PORT,
        reload=settings.ENVIRONMENT == "local",
    )
