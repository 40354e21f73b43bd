# backend/fee_estimator/api/fee_calculation_router.py
"""
弁護士報酬计算 API 路由

提供旧日弁連報酬基準的报酬计算服务，支持：
1. 按案件类别计算着手金/報酬金
2. 生成税抜/税込摘要和复制用文本
3. 组装御見積书并导出 Word 文档
"""
import logging
import math
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from fee_estimator.core.config import settings
from fee_estimator.core.responses import APIResponse, BusinessError, ResponseCode, ValidationError
from fee_estimator.schemas.fee_calculation import (
    CategoryInfo,
    CategoryListResponse,
    EstimateRequest,
    FeeCalculationRequest,
    FeeSummaryRequest,
    FeeSummaryResponse,
)
from fee_estimator.services.estimate import (
    EstimateDocument,
    build_estimate_document,
    estimate_filename,
    render_estimate_docx,
    render_summary_text,
    summarize_result,
)
from fee_estimator.services.fee_calculation import (
    CASE_CATEGORY_LABELS,
    FEE_SCHEDULE,
    FeeCalculationError,
    FeeCalculationOptions,
    FeeCalculationResult,
    FeeSchedule,
    run_fee_calculation,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Fee Calculation"]
)

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def _resolve_tax_rate(tax_rate: Optional[float]) -> float:
    """未指定时使用 settings.DEFAULT_TAX_RATE；负数及 NaN/Infinity 拒绝"""
    if tax_rate is None:
        return settings.DEFAULT_TAX_RATE
    if not math.isfinite(tax_rate) or tax_rate < 0:
        raise ValidationError(
            "消費税率は0以上で指定してください",
            errors=[{"field": "tax_rate", "message": "tax_rate must be a finite, non-negative number", "code": "value_error"}]
        )
    return tax_rate


def _calculate(options: FeeCalculationOptions) -> FeeCalculationResult:
    try:
        return run_fee_calculation(options)
    except FeeCalculationError as e:
        logger.error(f"[FeeCalculation] 计算失败: {e.message}", exc_info=True)
        raise BusinessError(message=e.message, code=ResponseCode.CALCULATION_ERROR, data=e.to_dict())


def _build_estimate(request: EstimateRequest) -> EstimateDocument:
    tax_rate = _resolve_tax_rate(request.tax_rate)
    result = _calculate(request.options)
    return build_estimate_document(result, tax_rate, request.details)


# ==================== API 端点 ====================

@router.post("/calculate", response_model=APIResponse[FeeCalculationResult])
async def calculate(request: FeeCalculationRequest):
    """
    报酬计算

    请求体为单个案件类别的入参（通过 category 字段区分）
    """
    result = _calculate(request.root)
    return APIResponse.success_response(data=result, message="計算が完了しました")


@router.post("/summary", response_model=APIResponse[FeeSummaryResponse])
async def summarize(request: FeeSummaryRequest):
    """计算结果 + 税抜/税込摘要 + 复制用文本"""
    tax_rate = _resolve_tax_rate(request.tax_rate)
    result = _calculate(request.options)
    summary = summarize_result(result, tax_rate)
    return APIResponse.success_response(
        data=FeeSummaryResponse(
            result=result,
            summary=summary,
            copy_text=render_summary_text(summary, result.explanatory_note),
        )
    )


@router.post("/estimate", response_model=APIResponse[EstimateDocument])
async def build_estimate(request: EstimateRequest):
    """御見積書の内容を生成"""
    return APIResponse.success_response(data=_build_estimate(request))


@router.post("/estimate/export")
async def export_estimate(request: EstimateRequest):
    """御見積書を Word 文档として出力"""
    estimate = _build_estimate(request)
    try:
        buffer = render_estimate_docx(estimate)
    except FeeCalculationError as e:
        logger.error(f"[Estimate] 导出失败: {e.message}", exc_info=True)
        raise BusinessError(message=e.message, code=ResponseCode.CALCULATION_ERROR, data=e.to_dict())

    filename = estimate_filename()
    logger.info(f"[Estimate] 导出见积书: {filename}")
    return StreamingResponse(
        buffer,
        media_type=DOCX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@router.get("/schedule", response_model=APIResponse[FeeSchedule])
async def get_schedule():
    """当前使用的报酬基准表（万円）"""
    return APIResponse.success_response(data=FEE_SCHEDULE)


@router.get("/categories", response_model=APIResponse[CategoryListResponse])
async def list_categories():
    """支持的案件类别"""
    categories = [CategoryInfo(code=code, label=label) for code, label in CASE_CATEGORY_LABELS.items()]
    return APIResponse.success_response(data=CategoryListResponse(categories=categories))


@router.get("/health")
async def health_check():
    """报酬计算服务健康检查"""
    return {
        "status": "healthy",
        "service": "fee-calculation",
        "version": settings.VERSION,
    }
