# backend/fee_estimator/api/v1/endpoints/health.py
"""
健康检查端点
"""
import logging
import time

from fastapi import APIRouter

from fee_estimator.core.config import settings

router = APIRouter()


@router.get("/system")
async def check_system_health():
    """
    系统运行配置检查

    返回当前生效的环境、日志级别、默认税率和 CORS 配置，用于确认部署时的环境变量
    """
    package_logger = logging.getLogger("fee_estimator")
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "timestamp": time.time(),
        "log_level": logging.getLevelName(package_logger.getEffectiveLevel()),
        "logging_configured": bool(package_logger.handlers),
        "default_tax_rate": settings.DEFAULT_TAX_RATE,
        "cors_origins": settings.cors_origins,
    }
