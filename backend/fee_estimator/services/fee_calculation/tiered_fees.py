# backend/fee_estimator/services/fee_calculation/tiered_fees.py
"""
按经济利益分段计费的案件类别

- 民事事件（訴訟・手形小切手訴訟・調停示談）
- 契約締結交渉
- 督促手続

分段区间统一使用訴訟事件表的边界，费率与加算额取各自类别的表。
"""
from typing import Optional

from .fee_schedule import FEE_SCHEDULE, FeeSchedule, TieredFeeTable
from .fee_trail import FeeTrail, tier_formula
from .formatting import format_manyen, format_ratio, to_yen
from .models import (
    CaseCategory,
    CivilFeeOptions,
    FeeCalculationResult,
    NegotiationFeeOptions,
    NoteCode,
    PaymentOrderFeeOptions,
)


def evaluate_tier(amount: float, table: TieredFeeTable, schedule: FeeSchedule) -> FeeTrail:
    """
    分段公式：金额 × 费率 + 加算额

    Args:
        amount: 经济利益（万円，需为正数）
        table: 提供费率的费率表
        schedule: 提供分段边界的总表
    """
    index = schedule.tier_index(amount)
    tier = table.tiers[index]
    return FeeTrail(
        retainer=amount * tier.retainer_rate + tier.retainer_additive,
        success=amount * tier.success_rate + tier.success_additive,
        retainer_parts=tier_formula(amount, tier.retainer_rate, tier.retainer_additive),
        success_parts=tier_formula(amount, tier.success_rate, tier.success_additive),
    )


def build_civil_trail(
    options: CivilFeeOptions,
    schedule: FeeSchedule = FEE_SCHEDULE,
) -> Optional[FeeTrail]:
    """
    民事事件的未取整计算过程；经济利益非正数时返回 None

    调整顺序固定：调停示談 2/3 → 継続受任 1/2 → 最低着手金 → 増減額 → 専門性加算 → 成功報酬のみ
    """
    amount = options.amount
    if amount <= 0:
        return None

    table = schedule.promissory if options.is_promissory else schedule.litigation
    trail = evaluate_tier(amount, table, schedule)
    trail.note(NoteCode.ECONOMIC_VALUE, f"経済的利益: {format_manyen(amount)}")

    # 手形・小切手訴訟は調停・示談の減額対象外
    if options.is_negotiation_settlement and not options.is_promissory:
        trail.apply_settlement(schedule.settlement_ratio)

    if options.is_continued:
        trail.apply_continued(schedule.continued_retainer_ratio)

    trail.apply_minimum(table.min_retainer)
    trail.apply_adjustment(options.adjustment_percent)
    trail.apply_expertise(options.expertise_percent)

    if options.is_success_only:
        trail.apply_success_only()

    return trail


def calculate_civil(
    options: CivilFeeOptions,
    schedule: FeeSchedule = FEE_SCHEDULE,
) -> FeeCalculationResult:
    """民事事件の報酬計算"""
    trail = build_civil_trail(options, schedule)
    if trail is None:
        return FeeCalculationResult(category=CaseCategory.CIVIL)
    return trail.to_result(CaseCategory.CIVIL)


def calculate_negotiation(
    options: NegotiationFeeOptions,
    schedule: FeeSchedule = FEE_SCHEDULE,
) -> FeeCalculationResult:
    """契約締結交渉の報酬計算"""
    amount = options.amount
    if amount <= 0:
        return FeeCalculationResult(category=CaseCategory.NEGOTIATION)

    table = schedule.negotiation
    trail = evaluate_tier(amount, table, schedule)
    trail.note(NoteCode.ECONOMIC_VALUE, f"契約の経済的利益: {format_manyen(amount)}")

    trail.apply_minimum(table.min_retainer)
    trail.apply_adjustment(options.adjustment_percent)

    return trail.to_result(CaseCategory.NEGOTIATION)


def calculate_payment_order(
    options: PaymentOrderFeeOptions,
    schedule: FeeSchedule = FEE_SCHEDULE,
) -> FeeCalculationResult:
    """
    督促手続事件の報酬計算

    着手金：契約締結交渉の費率（最低 5万円）
    報酬金：訴訟事件の報酬金 × 1/2
    訴訟移行時：訴訟事件の着手金との差額（不低于 0）
    """
    amount = options.amount
    if amount <= 0:
        return FeeCalculationResult(category=CaseCategory.PAYMENT_ORDER, litigation_transition_fee=0)

    index = schedule.tier_index(amount)
    negotiation_tier = schedule.negotiation.tiers[index]
    litigation_tier = schedule.litigation.tiers[index]
    ratio = schedule.payment_order_success_ratio

    success_parts = tier_formula(amount, litigation_tier.success_rate, litigation_tier.success_additive)
    trail = FeeTrail(
        retainer=amount * negotiation_tier.retainer_rate + negotiation_tier.retainer_additive,
        success=(amount * litigation_tier.success_rate + litigation_tier.success_additive) * ratio,
        retainer_parts=tier_formula(amount, negotiation_tier.retainer_rate, negotiation_tier.retainer_additive),
        success_parts=[f"({' '.join(success_parts)}) × {format_ratio(ratio)}"],
    )
    trail.note(NoteCode.ECONOMIC_VALUE, f"請求債権額: {format_manyen(amount)}")
    trail.apply_minimum(schedule.payment_order_min_retainer)
    trail.note(NoteCode.SUCCESS_CONDITION, "報酬金は金銭等の具体的な回収をしたときに限り請求可能")

    transition = 0.0
    if options.may_escalate_to_litigation:
        full_retainer = amount * litigation_tier.retainer_rate + litigation_tier.retainer_additive
        transition = max(full_retainer - trail.retainer, 0.0)
        trail.note(NoteCode.LITIGATION_TRANSITION, f"訴訟移行時の追加着手金: {format_manyen(transition)}")

    return trail.to_result(
        CaseCategory.PAYMENT_ORDER,
        litigation_transition_fee=to_yen(transition),
    )
