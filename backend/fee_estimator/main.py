# backend/fee_estimator/main.py
"""
弁護士報酬計算 API 应用入口
所有业务 API 统一收归到 /api/v1 命名空间
"""
import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from fee_estimator.api.v1.router import api_router
from fee_estimator.core.config import settings
from fee_estimator.core.exceptions import setup_exception_handlers
from fee_estimator.core.logger import setup_logging

setup_logging()
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="旧日弁連報酬基準に基づく弁護士報酬計算 API",
    )

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )

    # 安全头中间件
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response

    setup_exception_handlers(app)
    app.include_router(api_router, prefix=settings.API_V1_STR)

    @app.get("/")
    def read_root():
        """API 根端点"""
        return {
            "success": True,
            "message": "弁護士報酬計算 API",
            "version": settings.VERSION,
            "docs": "/docs",
            "api_base": settings.API_V1_STR,
            "timestamp": time.time(),
        }

    logger.info(f"{settings.PROJECT_NAME} 应用初始化完成 (ENVIRONMENT={settings.ENVIRONMENT})")
    return app


app = create_app()


def run():
    """fee-estimator 命令入口"""
    import uvicorn

    uvicorn.run("fee_estimator.main:app", host="0.0.0.0", port=8000, log_level=settings.LOG_LEVEL.lower())
