# backend/fee_estimator/services/estimate/models.py
"""
计算结果摘要与见积书的数据模型（金额单位：円）
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..fee_calculation.models import CaseCategory


class FeeSummaryLine(BaseModel):
    """摘要中的一行：税抜/税込金额 + 可选计算式"""
    model_config = ConfigDict(frozen=True)

    label: str
    amount: int = Field(description="税抜金额")
    amount_with_tax: int = Field(description="税込金额")
    formula: Optional[str] = None
    show_tax_inclusive: bool = Field(True, description="是否显示税込行")


class FeeSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: CaseCategory
    tax_rate: float
    lines: List[FeeSummaryLine] = Field(default_factory=list)
    grand_total: int = Field(0, description="税込合计")
    show_grand_total: bool = False


class EstimateDetails(BaseModel):
    """见积书抬头信息，未填写的项目使用配置中的默认值"""
    office_name: Optional[str] = None
    lawyer_name: Optional[str] = None
    address: Optional[str] = None
    tel: Optional[str] = None
    client_name: Optional[str] = None
    case_title: Optional[str] = None
    notes: Optional[str] = None
    validity: Optional[str] = None


class EstimateRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    amount: int
    in_subtotal: bool = True


class EstimateDocument(BaseModel):
    """御見積書"""
    model_config = ConfigDict(frozen=True)

    category: CaseCategory
    issue_date: str
    office_name: str
    lawyer_name: str
    address: str = ""
    tel: str = ""
    client_name: str
    case_title: str
    rows: List[EstimateRow] = Field(default_factory=list)
    subtotal: int = 0
    tax_rate: float = 0.0
    tax_label: str = ""
    tax: int = 0
    total: int = 0
    notes: List[str] = Field(default_factory=list)
    validity: str
