# -*- coding: utf-8 -*-
# @Author: yaccii
# @Description:

from __future__ import annotations

from fastapi import FastAPI

from app.api import examples as examples_api, health as health_api, trace as trace_api, users as users_api
from app.common.exception_handlers import register_exception_handlers
from app.common.logging import setup_logging
from app.common.middlewares import TraceIdMiddleware
from app.infra.config import settings

setup_logging(settings.LOG_LEVEL)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version="1.0.0",
        debug=settings.DEBUG,
    )

    # ---------- middlewares / handlers ----------

    app.add_middleware(TraceIdMiddleware)
    register_exception_handlers(app)

    # ---------- routers ----------

    # 用户管理
    app.include_router(users_api.router, prefix=settings.API_PREFIX)

    # 健康检查 / trace 自测 / 响应示例
    app.include_router(health_api.router, prefix=settings.API_PREFIX)
    app.include_router(trace_api.router, prefix=settings.API_PREFIX)
    app.include_router(examples_api.router, prefix=settings.API_PREFIX)

    return app


app = create_app()
