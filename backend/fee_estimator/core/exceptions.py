# backend/fee_estimator/core/exceptions.py
"""
自定义异常处理器
"""
import logging

from fastapi import HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from fee_estimator.services.fee_calculation.exceptions import FeeCalculationError

from .config import settings
from .responses import (
    APIResponse,
    BusinessError,
    ErrorDetail,
    ResponseCode,
    ValidationError,
    ValidationErrorResponse,
)

logger = logging.getLogger(__name__)


async def business_exception_handler(request: Request, exc: BusinessError):
    """业务异常处理器"""
    logger.error(f"Business Error: {exc.code} - {exc.message}")
    return JSONResponse(
        status_code=400,
        content=APIResponse.error_response(
            message=exc.message,
            code=exc.code,
            data=exc.data
        ).model_dump(mode="json")
    )


async def fee_calculation_exception_handler(request: Request, exc: FeeCalculationError):
    """报酬计算异常处理器（路由层未转换的计算/渲染异常）"""
    logger.error(f"Fee Calculation Error: {exc.error_code} - {exc.message}")
    return JSONResponse(
        status_code=400,
        content=APIResponse.error_response(
            message=exc.message,
            code=ResponseCode.CALCULATION_ERROR,
            data=exc.to_dict()
        ).model_dump(mode="json")
    )


async def validation_exception_handler(request: Request, exc: ValidationError):
    """数据验证异常处理器"""
    logger.error(f"Validation Error: {exc.message}")

    details = []
    for error in exc.errors:
        details.append(ErrorDetail(
            field=error.get("field"),
            message=error.get("message", "数据验证失败"),
            code=error.get("code")
        ))

    return JSONResponse(
        status_code=422,
        content=ValidationErrorResponse(
            success=False,
            message=exc.message or "数据验证失败",
            code=ResponseCode.VALIDATION_ERROR,
            data=None,
            details=details
        ).model_dump(mode="json")
    )


async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
    """FastAPI 请求验证异常处理器"""
    logger.error(f"Request Validation Error: {exc.errors()}")

    details = []
    for error in exc.errors():
        # 构建字段路径
        field_path = " -> ".join(str(loc) for loc in error.get("loc", []))
        details.append(ErrorDetail(
            field=field_path,
            message=error.get("msg", "验证失败"),
            code=error.get("type")
        ))

    return JSONResponse(
        status_code=422,
        content=ValidationErrorResponse(
            success=False,
            message="请求数据验证失败",
            code=ResponseCode.VALIDATION_ERROR,
            data=None,
            details=details
        ).model_dump(mode="json")
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """HTTP 异常处理器"""
    logger.error(f"HTTP Exception: {exc.status_code} - {exc.detail}")

    # 根据状态码映射业务状态码
    code_mapping = {
        400: ResponseCode.BUSINESS_ERROR,
        404: ResponseCode.NOT_FOUND,
        422: ResponseCode.VALIDATION_ERROR,
        500: ResponseCode.INTERNAL_SERVER_ERROR,
        503: ResponseCode.SERVICE_UNAVAILABLE,
    }

    business_code = code_mapping.get(exc.status_code, ResponseCode.BUSINESS_ERROR)

    if isinstance(exc.detail, dict):
        message = exc.detail.get("message") or exc.detail.get("detail") or str(exc.detail)
    else:
        message = str(exc.detail)

    return JSONResponse(
        status_code=exc.status_code,
        content=APIResponse.error_response(
            message=message,
            code=business_code
        ).model_dump(mode="json")
    )


async def general_exception_handler(request: Request, exc: Exception):
    """通用异常处理器"""
    logger.error(f"Unhandled Exception: {type(exc).__name__} - {str(exc)}", exc_info=True)

    # 生产环境下隐藏详细错误信息
    message = "服务器内部错误" if settings.ENVIRONMENT == "production" else str(exc)

    return JSONResponse(
        status_code=500,
        content=APIResponse.error_response(
            message=message,
            code=ResponseCode.INTERNAL_SERVER_ERROR
        ).model_dump(mode="json")
    )


def setup_exception_handlers(app):
    """设置异常处理器"""
    # 自定义异常处理器
    app.add_exception_handler(BusinessError, business_exception_handler)
    app.add_exception_handler(FeeCalculationError, fee_calculation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)

    # FastAPI 内置异常处理器
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Exception handlers configured successfully")
