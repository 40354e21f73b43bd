"""Fee Calculation Service Module

This module provides attorney fee calculation based on the former
JFBA (旧日弁連) fee schedule, covering civil, negotiation, payment order,
divorce, insolvency, preservation, criminal, advisory retainer and
daily allowance cases.
"""

from .calculator import calculate_fee, run_fee_calculation
from .exceptions import EstimateRenderError, FeeCalculationError, UnsupportedCategoryError
from .fee_schedule import FEE_SCHEDULE, FeeSchedule
from .flat_rate_fees import (
    calculate_advisory_retainer,
    calculate_bankruptcy,
    calculate_criminal,
    calculate_daily_rate,
    calculate_divorce,
    calculate_preservation,
)
from .models import (
    CASE_CATEGORY_LABELS,
    CaseCategory,
    FeeCalculationOptions,
    FeeCalculationResult,
    NoteCode,
)
from .tiered_fees import calculate_civil, calculate_negotiation, calculate_payment_order

__all__ = [
    "CASE_CATEGORY_LABELS",
    "CaseCategory",
    "FeeCalculationOptions",
    "FeeCalculationResult",
    "NoteCode",
    "FEE_SCHEDULE",
    "FeeSchedule",
    "FeeCalculationError",
    "UnsupportedCategoryError",
    "EstimateRenderError",
    "calculate_fee",
    "run_fee_calculation",
    "calculate_civil",
    "calculate_negotiation",
    "calculate_payment_order",
    "calculate_divorce",
    "calculate_bankruptcy",
    "calculate_preservation",
    "calculate_criminal",
    "calculate_advisory_retainer",
    "calculate_daily_rate",
]
