# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description: FastAPI 应用入口

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, APIRouter, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, RedirectResponse

from app.routers import auth_router, category_router, project_router, search_router
from domains.error_domain import AppError, ServerError, ValidationAppError
from infrastructures.store.entity_store import EntityStore
from infrastructures.store.rate_limiter import RateLimiter
from infrastructures.store.seed_data import seed_store
from infrastructures.vconfig import VConfig, vconfig
from infrastructures.vlogger import RequestContextMiddleware, init_logging, vlogger
from services.auth_service import AuthService
from services.project_query_service import ProjectQueryService
from services.project_service import ProjectService


@asynccontextmanager
async def lifespan(_app: FastAPI):
    store: EntityStore = _app.state.store
    vlogger.info(
        "application started users=%s categories=%s projects=%s",
        len(store.list_users()), len(store.get_categories()), len(store.list_projects()),
    )
    try:
        yield
    finally:
        # 内存数据随进程结束丢弃
        vlogger.info("application shutdown")


def _error_response(exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.http_status, content=jsonable_encoder(exc.to_response()))


def create_app(
        config: Optional[VConfig] = None,
        store: Optional[EntityStore] = None,
        rate_limiter: Optional[RateLimiter] = None,
) -> FastAPI:
    config = config or vconfig
    config.ensure_production_safe()
    init_logging(config.log_level)

    app = FastAPI(
        title="Kalluba Funding API",
        version="0.1.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    # ---------- Core components ----------
    if store is None:
        store = EntityStore()
        if config.seed_data:
            seed_store(store, AuthService.hash_password, config.seed_user_password)
    rate_limiter = rate_limiter or RateLimiter(window_seconds=config.rate_limit_window_seconds)

    app.state.store = store
    app.state.rate_limiter = rate_limiter
    app.state.auth_service = AuthService(store, rate_limiter, config)
    app.state.query_service = ProjectQueryService(store)
    app.state.project_service = ProjectService(store)

    # ---------- Global error handlers ----------
    @app.exception_handler(AppError)
    async def _app_error_handler(_req: Request, exc: AppError):
        return _error_response(exc)

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(_req: Request, exc: RequestValidationError):
        return _error_response(ValidationAppError(details=jsonable_encoder(exc.errors())))

    @app.exception_handler(Exception)
    async def _unhandled_error_handler(req: Request, exc: Exception):
        vlogger.exception("unhandled error %s %s", req.method, req.url.path)
        return _error_response(ServerError())

    # ---------- Middleware ----------
    cors = config.cors_origins.strip()
    if cors == "*":
        origins = ["*"]
    else:
        origins = [o.strip() for o in cors.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RequestContextMiddleware,
        header_name=config.request_id_header,
        generate_request_id=config.generate_request_id,
        log_requests=config.log_requests,
    )

    # ---------- Routers ----------
    api = APIRouter(prefix="/api")

    @api.get("/health", tags=["system"])
    async def health_check():
        return {"status": "ok"}

    api.include_router(auth_router.router)
    api.include_router(category_router.router)
    api.include_router(project_router.router)
    api.include_router(search_router.router)
    app.include_router(api)

    @app.get("/")
    async def index():
        return RedirectResponse(url="/api/docs", status_code=302)

    return app


app = create_app()
