# backend/fee_estimator/schemas/fee_calculation.py
"""
弁護士報酬计算 API 的请求/响应模型
"""
from typing import List, Optional

from pydantic import BaseModel, Field, RootModel

from fee_estimator.services.estimate.models import EstimateDetails, FeeSummary
from fee_estimator.services.fee_calculation.models import CaseCategory, FeeCalculationOptions, FeeCalculationResult


class FeeCalculationRequest(RootModel[FeeCalculationOptions]):
    """单个案件类别的入参（通过 category 字段区分）"""


class FeeSummaryRequest(BaseModel):
    """计算 + 摘要请求"""
    options: FeeCalculationOptions
    tax_rate: Optional[float] = Field(None, description="消費税率（0.10 = 10%），未指定时使用默认值")


class EstimateRequest(FeeSummaryRequest):
    """見積書请求"""
    details: Optional[EstimateDetails] = Field(None, description="見積書抬头信息")


class FeeSummaryResponse(BaseModel):
    result: FeeCalculationResult
    summary: FeeSummary
    copy_text: str = Field(description="复制到剪贴板用的文本")


class CategoryInfo(BaseModel):
    code: CaseCategory
    label: str


class CategoryListResponse(BaseModel):
    categories: List[CategoryInfo]
