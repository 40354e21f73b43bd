# backend/fee_estimator/core/responses.py
"""
统一的API响应格式模块
"""
import time
from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar('T')


class ResponseCode(str, Enum):
    """API响应状态码枚举"""
    SUCCESS = "SUCCESS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
    BUSINESS_ERROR = "BUSINESS_ERROR"
    CALCULATION_ERROR = "CALCULATION_ERROR"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


class APIResponse(BaseModel, Generic[T]):
    """
    统一的API响应格式
    """
    success: bool = Field(..., description="请求是否成功")
    message: str = Field(..., description="响应消息")
    code: ResponseCode = Field(..., description="业务状态码")
    data: Optional[T] = Field(None, description="响应数据")
    timestamp: Optional[float] = Field(None, description="响应时间戳")

    @classmethod
    def success_response(
        cls,
        data: Optional[T] = None,
        message: str = "操作成功",
        code: ResponseCode = ResponseCode.SUCCESS
    ) -> "APIResponse[T]":
        """创建成功响应"""
        return cls(
            success=True,
            message=message,
            code=code,
            data=data,
            timestamp=time.time()
        )

    @classmethod
    def error_response(
        cls,
        message: str,
        code: ResponseCode = ResponseCode.INTERNAL_SERVER_ERROR,
        data: Optional[T] = None
    ) -> "APIResponse[T]":
        """创建错误响应"""
        return cls(
            success=False,
            message=message,
            code=code,
            data=data,
            timestamp=time.time()
        )


class ErrorDetail(BaseModel):
    """错误详情"""
    field: Optional[str] = Field(None, description="错误字段")
    message: str = Field(..., description="错误消息")
    code: Optional[str] = Field(None, description="错误代码")


class ValidationErrorResponse(APIResponse[None]):
    """验证错误响应"""
    details: list[ErrorDetail] = Field(default_factory=list, description="错误详情列表")


class BusinessError(Exception):
    """业务异常基类"""
    def __init__(
        self,
        message: str,
        code: ResponseCode = ResponseCode.BUSINESS_ERROR,
        data: Any = None
    ):
        self.message = message
        self.code = code
        self.data = data
        super().__init__(message)


class ValidationError(Exception):
    """数据验证异常"""
    def __init__(self, message: str, errors: list[dict] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)

