# backend/fee_estimator/services/fee_calculation/fee_schedule.py
"""
旧日弁連報酬基準データ（单位：万円）

整张表是只读的领域常量：所有模型均为 frozen，集合均为 tuple。
计算函数通过参数显式接收 FeeSchedule，默认使用模块级实例 FEE_SCHEDULE。
"""
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .models import ApplicantType, Difficulty, EntityScale, InsolvencyCaseType


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ==================== 1. 分段计费表 ====================

class FeeTier(_FrozenModel):
    """经济利益分段：金额 ≤ upper_bound 时适用（None 表示无上限）"""
    upper_bound: Optional[float] = Field(None, description="区间上限（万円），None 为无上限")
    retainer_rate: float
    retainer_additive: float
    success_rate: float
    success_additive: float

    def contains(self, amount: float) -> bool:
        return self.upper_bound is None or amount <= self.upper_bound


class TieredFeeTable(_FrozenModel):
    """4 段费率表 + 最低着手金"""
    tiers: Tuple[FeeTier, ...]
    min_retainer: float

    @model_validator(mode="after")
    def _check_tiers(self):
        if len(self.tiers) != 4:
            raise ValueError("tiered fee table must have exactly 4 tiers")
        if self.tiers[-1].upper_bound is not None:
            raise ValueError("last tier must be unbounded")
        return self

    def tier_index(self, amount: float) -> int:
        for index, tier in enumerate(self.tiers):
            if tier.contains(amount):
                return index
        return len(self.tiers) - 1


# ==================== 2. 定额表 ====================

class FeeRange(_FrozenModel):
    minimum: float
    maximum: float

    def pick(self, difficulty: Optional[Difficulty] = None) -> float:
        """low → 下限，high → 上限，其余 → 中间值"""
        if difficulty == Difficulty.LOW:
            return self.minimum
        if difficulty == Difficulty.HIGH:
            return self.maximum
        return (self.minimum + self.maximum) / 2


class ScaleAmounts(_FrozenModel):
    small: float
    medium: float
    large: float

    def pick(self, scale: Optional[EntityScale]) -> float:
        if scale == EntityScale.LARGE:
            return self.large
        if scale == EntityScale.MEDIUM:
            return self.medium
        return self.small


class ApplicantAmounts(_FrozenModel):
    individual: float
    sole_proprietor: float
    corporation: ScaleAmounts

    def pick(self, applicant: ApplicantType, scale: Optional[EntityScale]) -> float:
        if applicant == ApplicantType.INDIVIDUAL:
            return self.individual
        if applicant == ApplicantType.SOLE_PROPRIETOR:
            return self.sole_proprietor
        return self.corporation.pick(scale)


class InsolvencySchedule(_FrozenModel):
    self_bankruptcy: ApplicantAmounts
    other_bankruptcy: float
    civil_rehabilitation: ApplicantAmounts
    voluntary_arrangement: ApplicantAmounts
    company_arrangement: float
    special_liquidation: float
    corporate_reorganization: float

    def lookup(
        self,
        case_subtype: InsolvencyCaseType,
        applicant: ApplicantType,
        scale: Optional[EntityScale],
    ) -> float:
        """按事件类型（及申请人类型、规模）查询基本着手金"""
        by_applicant = {
            InsolvencyCaseType.SELF_BANKRUPTCY: self.self_bankruptcy,
            InsolvencyCaseType.CIVIL_REHABILITATION: self.civil_rehabilitation,
            InsolvencyCaseType.VOLUNTARY_ARRANGEMENT: self.voluntary_arrangement,
        }
        if case_subtype in by_applicant:
            return by_applicant[case_subtype].pick(applicant, scale)

        fixed = {
            InsolvencyCaseType.OTHER_BANKRUPTCY: self.other_bankruptcy,
            InsolvencyCaseType.COMPANY_ARRANGEMENT: self.company_arrangement,
            InsolvencyCaseType.SPECIAL_LIQUIDATION: self.special_liquidation,
            InsolvencyCaseType.CORPORATE_REORGANIZATION: self.corporate_reorganization,
        }
        return fixed[case_subtype]


class DivorceSchedule(_FrozenModel):
    negotiation: FeeRange
    litigation: FeeRange


class PreservationSchedule(_FrozenModel):
    """保全命令：以本案的着手金/报酬金为基数按比例计算"""
    standard_retainer_ratio: float
    standard_success_ratio: float
    hearing_retainer_ratio: float
    hearing_success_ratio: float


class CriminalSchedule(_FrozenModel):
    simple: FeeRange
    complex: FeeRange


class AdvisorySchedule(_FrozenModel):
    """顧問料（月額）"""
    business: ScaleAmounts
    individual: float


class DailyRateSchedule(_FrozenModel):
    half_day: FeeRange
    full_day: FeeRange


# ==================== 3. 总表 ====================

class FeeSchedule(_FrozenModel):
    litigation: TieredFeeTable
    promissory: TieredFeeTable
    negotiation: TieredFeeTable
    payment_order_min_retainer: float

    # 政策系数
    settlement_ratio: float = Field(description="調停・示談交渉事件：訴訟事件の2/3")
    continued_retainer_ratio: float = Field(description="継続受任：着手金1/2")
    payment_order_success_ratio: float = Field(description="督促手続の報酬金：訴訟事件の1/2")

    divorce: DivorceSchedule
    insolvency: InsolvencySchedule
    preservation: PreservationSchedule
    criminal: CriminalSchedule
    advisory: AdvisorySchedule
    daily_rate: DailyRateSchedule

    def tier_index(self, amount: float) -> int:
        """所有分段类别共用訴訟事件的区间边界：300 / 3,000 / 30,000 / 无上限"""
        return self.litigation.tier_index(amount)


def _tiers(*rows) -> Tuple[FeeTier, ...]:
    return tuple(
        FeeTier(
            upper_bound=upper_bound,
            retainer_rate=retainer_rate,
            retainer_additive=retainer_additive,
            success_rate=success_rate,
            success_additive=success_additive,
        )
        for upper_bound, retainer_rate, retainer_additive, success_rate, success_additive in rows
    )


FEE_SCHEDULE = FeeSchedule(
    # 民事事件（訴訟事件等）
    litigation=TieredFeeTable(
        tiers=_tiers(
            (300, 0.08, 0, 0.16, 0),
            (3000, 0.05, 9, 0.10, 18),
            (30000, 0.03, 69, 0.06, 138),
            (None, 0.02, 369, 0.04, 738),
        ),
        min_retainer=10,
    ),
    # 手形・小切手訴訟（訴訟事件の1/2）
    promissory=TieredFeeTable(
        tiers=_tiers(
            (300, 0.04, 0, 0.08, 0),
            (3000, 0.025, 4.5, 0.05, 9),
            (30000, 0.015, 34.5, 0.03, 69),
            (None, 0.01, 184.5, 0.02, 369),
        ),
        min_retainer=5,
    ),
    # 契約締結交渉（訴訟事件の1/4）
    negotiation=TieredFeeTable(
        tiers=_tiers(
            (300, 0.02, 0, 0.04, 0),
            (3000, 0.01, 3, 0.02, 6),
            (30000, 0.005, 18, 0.01, 36),
            (None, 0.003, 78, 0.006, 156),
        ),
        min_retainer=10,
    ),
    payment_order_min_retainer=5,
    settlement_ratio=2 / 3,
    continued_retainer_ratio=1 / 2,
    payment_order_success_ratio=1 / 2,
    divorce=DivorceSchedule(
        negotiation=FeeRange(minimum=20, maximum=50),
        litigation=FeeRange(minimum=30, maximum=60),
    ),
    insolvency=InsolvencySchedule(
        self_bankruptcy=ApplicantAmounts(
            individual=20,
            sole_proprietor=50,
            corporation=ScaleAmounts(small=50, medium=80, large=100),
        ),
        other_bankruptcy=50,
        civil_rehabilitation=ApplicantAmounts(
            individual=20,
            sole_proprietor=30,
            corporation=ScaleAmounts(small=100, medium=150, large=200),
        ),
        voluntary_arrangement=ApplicantAmounts(
            individual=20,
            sole_proprietor=50,
            corporation=ScaleAmounts(small=50, medium=80, large=100),
        ),
        company_arrangement=100,
        special_liquidation=100,
        corporate_reorganization=200,
    ),
    preservation=PreservationSchedule(
        standard_retainer_ratio=1 / 2,
        standard_success_ratio=1 / 4,
        hearing_retainer_ratio=2 / 3,
        hearing_success_ratio=1 / 3,
    ),
    criminal=CriminalSchedule(
        simple=FeeRange(minimum=20, maximum=50),
        complex=FeeRange(minimum=50, maximum=100),
    ),
    advisory=AdvisorySchedule(
        business=ScaleAmounts(small=5, medium=10, large=20),
        individual=0.5,
    ),
    daily_rate=DailyRateSchedule(
        half_day=FeeRange(minimum=3, maximum=5),
        full_day=FeeRange(minimum=5, maximum=10),
    ),
)
