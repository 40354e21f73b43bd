# backend/fee_estimator/api/v1/router.py
"""
统一 API v1 路由总管
所有业务逻辑 API 统一收归到 /api/v1 命名空间下
"""
import logging

from fastapi import APIRouter

# ==================== V1 端点模块（位于 fee_estimator/api/v1/endpoints/） ====================
from fee_estimator.api.v1.endpoints import health

# ==================== 游离路由模块（位于 fee_estimator/api/） ====================
# 报酬计算模块
from fee_estimator.api.fee_calculation_router import router as fee_calculation_router

logger = logging.getLogger(__name__)

# ==================== 创建主路由器 ====================
api_router = APIRouter()

# 健康检查 API
api_router.include_router(health.router, prefix="/health", tags=["Health"])

# 报酬计算模块 (/api/v1/fee-calculation)
api_router.include_router(fee_calculation_router, prefix="/fee-calculation", tags=["Fee Calculation"])
