# backend/fee_estimator/services/fee_calculation/calculator.py
"""
报酬计算入口：按 options.category 分派到各类别的计算函数
"""
import logging
import time
from typing import Callable, Dict

from .exceptions import UnsupportedCategoryError
from .fee_schedule import FEE_SCHEDULE, FeeSchedule
from .flat_rate_fees import (
    calculate_advisory_retainer,
    calculate_bankruptcy,
    calculate_criminal,
    calculate_daily_rate,
    calculate_divorce,
    calculate_preservation,
)
from .models import CaseCategory, FeeCalculationOptions, FeeCalculationResult
from .tiered_fees import calculate_civil, calculate_negotiation, calculate_payment_order

logger = logging.getLogger(__name__)

_CALCULATORS: Dict[CaseCategory, Callable[..., FeeCalculationResult]] = {
    CaseCategory.CIVIL: calculate_civil,
    CaseCategory.NEGOTIATION: calculate_negotiation,
    CaseCategory.PAYMENT_ORDER: calculate_payment_order,
    CaseCategory.DIVORCE: calculate_divorce,
    CaseCategory.BANKRUPTCY: calculate_bankruptcy,
    CaseCategory.PRESERVATION: calculate_preservation,
    CaseCategory.CRIMINAL: calculate_criminal,
    CaseCategory.ADVISORY_RETAINER: calculate_advisory_retainer,
    CaseCategory.DAILY_RATE: calculate_daily_rate,
}


def calculate_fee(
    options: FeeCalculationOptions,
    schedule: FeeSchedule = FEE_SCHEDULE,
) -> FeeCalculationResult:
    """纯函数：同一 options 与 schedule 总是得到相同结果"""
    try:
        category = CaseCategory(options.category)
    except ValueError:
        raise UnsupportedCategoryError(options.category)
    return _CALCULATORS[category](options, schedule)


def run_fee_calculation(
    options: FeeCalculationOptions,
    schedule: FeeSchedule = FEE_SCHEDULE,
) -> FeeCalculationResult:
    """带日志的计算入口（供 API 层调用）"""
    start = time.time()
    logger.info(f"[FeeCalculation] 开始计算: category={options.category}")
    result = calculate_fee(options, schedule)
    logger.info(
        f"[FeeCalculation] 计算完成: category={result.category.value}, "
        f"retainer={result.retainer_fee}, success={result.success_fee}, "
        f"耗时={time.time() - start:.3f}s"
    )
    return result
