"""
弁護士報酬计算模块 - 异常类
"""
from typing import Any, Dict, Optional


class FeeCalculationError(Exception):
    """报酬计算基础异常类"""

    def __init__(
        self,
        message: str,
        error_code: str = "FC_GENERAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """转换为字典格式"""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details
        }


class UnsupportedCategoryError(FeeCalculationError):
    """没有对应计算函数的案件类别"""

    def __init__(self, category: Any):
        super().__init__(
            message=f"不支持的案件类别: {category}",
            error_code="FC_UNSUPPORTED_CATEGORY",
            details={"category": str(category)}
        )


class EstimateRenderError(FeeCalculationError):
    """见积书文档生成失败"""

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(
            message=message,
            error_code="FC_ESTIMATE_RENDER_ERROR",
            details={"original_error": str(original_error) if original_error else None}
        )
