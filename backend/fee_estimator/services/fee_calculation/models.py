# backend/fee_estimator/services/fee_calculation/models.py
"""
弁護士報酬计算的数据模型

- 枚举：案件类别、难易度、各类别的选择项
- 入参：每个案件类别一个不可变的 Options 模型，通过 category 字段区分
- 出参：FeeCalculationResult（金额单位：円）
"""
import math
from enum import Enum
from typing import Annotated, Any, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


# ==================== 1. 基础枚举定义 ====================

class CaseCategory(str, Enum):
    """案件类别（对应计算入口）"""
    CIVIL = "civil"                          # 民事事件（訴訟・調停・示談）
    NEGOTIATION = "negotiation"              # 契約締結交渉
    PAYMENT_ORDER = "payment_order"          # 督促手続
    DIVORCE = "divorce"                      # 離婚事件
    BANKRUPTCY = "bankruptcy"                # 破産・再生・整理
    PRESERVATION = "preservation"            # 保全命令申立
    CRIMINAL = "criminal"                    # 刑事事件
    ADVISORY_RETAINER = "advisory_retainer"  # 顧問契約
    DAILY_RATE = "daily_rate"                # 日当


CASE_CATEGORY_LABELS = {
    CaseCategory.CIVIL: "民事事件",
    CaseCategory.NEGOTIATION: "契約締結交渉",
    CaseCategory.PAYMENT_ORDER: "督促手続",
    CaseCategory.DIVORCE: "離婚事件",
    CaseCategory.BANKRUPTCY: "破産・再生事件",
    CaseCategory.PRESERVATION: "保全命令申立事件",
    CaseCategory.CRIMINAL: "刑事事件",
    CaseCategory.ADVISORY_RETAINER: "顧問契約",
    CaseCategory.DAILY_RATE: "日当",
}


class Difficulty(str, Enum):
    """三档选择：low=下限 / medium=中间值 / high=上限"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class EntityScale(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


ENTITY_SCALE_LABELS = {
    EntityScale.SMALL: "小規模",
    EntityScale.MEDIUM: "中規模",
    EntityScale.LARGE: "大規模",
}


class ApplicantType(str, Enum):
    INDIVIDUAL = "individual"            # 個人・非事業者
    SOLE_PROPRIETOR = "sole_proprietor"  # 個人事業主
    CORPORATION = "corporation"          # 法人


class InsolvencyCaseType(str, Enum):
    SELF_BANKRUPTCY = "self_bankruptcy"                    # 自己破産
    OTHER_BANKRUPTCY = "other_bankruptcy"                  # 自己破産以外の破産（債権者申立）
    CIVIL_REHABILITATION = "civil_rehabilitation"          # 民事再生
    VOLUNTARY_ARRANGEMENT = "voluntary_arrangement"        # 任意整理
    COMPANY_ARRANGEMENT = "company_arrangement"            # 会社整理
    SPECIAL_LIQUIDATION = "special_liquidation"            # 特別清算
    CORPORATE_REORGANIZATION = "corporate_reorganization"  # 会社更生


class DivorceProceeding(str, Enum):
    NEGOTIATION = "negotiation"  # 交渉・調停
    LITIGATION = "litigation"    # 訴訟


class PreservationProcedure(str, Enum):
    STANDARD = "standard"  # 基本（審尋なし）
    HEARING = "hearing"    # 審尋・口頭弁論を経る


class CriminalStage(str, Enum):
    PRE_INDICTMENT = "pre_indictment"    # 起訴前
    POST_INDICTMENT = "post_indictment"  # 起訴後（第一審）
    APPEAL = "appeal"                    # 上訴審


class CriminalComplexity(str, Enum):
    SIMPLE = "simple"    # 事案簡明
    COMPLEX = "complex"  # 複雑・重大


class AdvisoryClientType(str, Enum):
    BUSINESS = "business"
    INDIVIDUAL = "individual"


class DailyDuration(str, Enum):
    HALF_DAY = "half_day"  # 半日（往復2〜4時間）
    FULL_DAY = "full_day"  # 一日（往復4時間超）


class NoteCode(str, Enum):
    """计算过程说明的类别码"""
    ECONOMIC_VALUE = "economic_value"
    NEGOTIATION_SETTLEMENT = "negotiation_settlement"
    CONTINUED_REPRESENTATION = "continued_representation"
    MINIMUM_RETAINER = "minimum_retainer"
    CASE_ADJUSTMENT = "case_adjustment"
    EXPERTISE_SURCHARGE = "expertise_surcharge"
    SUCCESS_FEE_ONLY = "success_fee_only"
    SUCCESS_CONDITION = "success_condition"
    LITIGATION_TRANSITION = "litigation_transition"
    CASE_TYPE = "case_type"
    BASE_FEE = "base_fee"
    PROPERTY_DIVISION = "property_division"
    PROCEDURE = "procedure"
    WITH_MAIN_CASE = "with_main_case"
    STAGE = "stage"
    COMPLEXITY = "complexity"
    CLIENT_TYPE = "client_type"
    MONTHLY_FEE = "monthly_fee"
    CONTRACT_PERIOD = "contract_period"
    DURATION = "duration"
    PER_DIEM = "per_diem"
    DAY_COUNT = "day_count"


# ==================== 2. 入参归一化 ====================

def coerce_number(value: Any) -> float:
    """空值、无法解析的值、NaN/Infinity 一律视为 0"""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def coerce_count(value: Any, default: int) -> int:
    """月数/日数：无法解析或非正数时使用默认值，小数部分截断"""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number) or int(number) <= 0:
        return default
    return int(number)


class _FeeOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


# ==================== 3. 各案件类别的入参 ====================

class CivilFeeOptions(_FeeOptions):
    """民事事件（訴訟事件・手形小切手訴訟・調停示談）"""
    category: Literal["civil"] = "civil"
    amount: float = Field(0.0, description="経済的利益の額（万円）")
    is_negotiation_settlement: bool = Field(False, description="調停・示談交渉事件（2/3）")
    is_promissory: bool = Field(False, description="手形・小切手訴訟事件")
    is_continued: bool = Field(False, description="示談→調停→訴訟の継続受任（着手金1/2）")
    adjustment_percent: float = Field(0.0, description="事件内容による増減額（%、通常±30%）")
    expertise_percent: float = Field(0.0, description="専門性加算（%）")
    is_success_only: bool = Field(False, description="着手金なし・成功報酬のみ")

    @field_validator("amount", "adjustment_percent", "expertise_percent", mode="before")
    @classmethod
    def _normalize_numbers(cls, v):
        return coerce_number(v)


class NegotiationFeeOptions(_FeeOptions):
    """契約締結交渉"""
    category: Literal["negotiation"] = "negotiation"
    amount: float = Field(0.0, description="契約の経済的利益の額（万円）")
    adjustment_percent: float = Field(0.0, description="事件内容による増減額（%）")

    @field_validator("amount", "adjustment_percent", mode="before")
    @classmethod
    def _normalize_numbers(cls, v):
        return coerce_number(v)


class PaymentOrderFeeOptions(_FeeOptions):
    """督促手続事件"""
    category: Literal["payment_order"] = "payment_order"
    amount: float = Field(0.0, description="請求債権額（万円）")
    may_escalate_to_litigation: bool = Field(False, description="訴訟に移行する可能性がある")

    @field_validator("amount", mode="before")
    @classmethod
    def _normalize_numbers(cls, v):
        return coerce_number(v)


class DivorceFeeOptions(_FeeOptions):
    """離婚事件"""
    category: Literal["divorce"] = "divorce"
    proceeding: DivorceProceeding = DivorceProceeding.NEGOTIATION
    complexity: Optional[Difficulty] = Field(None, description="未指定時は中間値")
    is_continued: bool = False
    property_amount: float = Field(0.0, description="財産分与・慰謝料等の経済的利益（万円）")
    expertise_percent: float = 0.0

    @field_validator("property_amount", "expertise_percent", mode="before")
    @classmethod
    def _normalize_numbers(cls, v):
        return coerce_number(v)


class BankruptcyFeeOptions(_FeeOptions):
    """破産・民事再生・任意整理等"""
    category: Literal["bankruptcy"] = "bankruptcy"
    case_subtype: InsolvencyCaseType = InsolvencyCaseType.SELF_BANKRUPTCY
    applicant_type: ApplicantType = ApplicantType.INDIVIDUAL
    entity_scale: EntityScale = EntityScale.SMALL
    expertise_percent: float = 0.0

    @field_validator("expertise_percent", mode="before")
    @classmethod
    def _normalize_numbers(cls, v):
        return coerce_number(v)


class PreservationFeeOptions(_FeeOptions):
    """保全命令申立事件"""
    category: Literal["preservation"] = "preservation"
    amount: float = Field(0.0, description="本案の経済的利益（万円）")
    procedure: PreservationProcedure = PreservationProcedure.STANDARD
    with_main_case: bool = Field(False, description="本案事件と併せて受任")

    @field_validator("amount", mode="before")
    @classmethod
    def _normalize_numbers(cls, v):
        return coerce_number(v)


class CriminalFeeOptions(_FeeOptions):
    """刑事事件"""
    category: Literal["criminal"] = "criminal"
    stage: CriminalStage = CriminalStage.PRE_INDICTMENT
    complexity: CriminalComplexity = CriminalComplexity.SIMPLE
    difficulty: Optional[Difficulty] = None
    is_continued: bool = False
    expertise_percent: float = 0.0

    @field_validator("expertise_percent", mode="before")
    @classmethod
    def _normalize_numbers(cls, v):
        return coerce_number(v)


class AdvisoryRetainerOptions(_FeeOptions):
    """顧問契約"""
    category: Literal["advisory_retainer"] = "advisory_retainer"
    client_type: AdvisoryClientType = AdvisoryClientType.BUSINESS
    entity_scale: EntityScale = EntityScale.SMALL
    contract_months: int = Field(12, description="契約期間（月）。無効値は12")

    @field_validator("contract_months", mode="before")
    @classmethod
    def _normalize_months(cls, v):
        return coerce_count(v, 12)


class DailyRateOptions(_FeeOptions):
    """日当"""
    category: Literal["daily_rate"] = "daily_rate"
    duration: DailyDuration = DailyDuration.HALF_DAY
    rate: Optional[Difficulty] = Field(None, description="未指定時は中間値")
    day_count: int = Field(1, description="日数。無効値は1")

    @field_validator("day_count", mode="before")
    @classmethod
    def _normalize_days(cls, v):
        return coerce_count(v, 1)


FeeCalculationOptions = Annotated[
    Union[
        CivilFeeOptions,
        NegotiationFeeOptions,
        PaymentOrderFeeOptions,
        DivorceFeeOptions,
        BankruptcyFeeOptions,
        PreservationFeeOptions,
        CriminalFeeOptions,
        AdvisoryRetainerOptions,
        DailyRateOptions,
    ],
    Field(discriminator="category"),
]


# ==================== 4. 计算结果 ====================

class DerivationNote(BaseModel):
    """单条计算说明（类别码 + 显示文本）"""
    model_config = ConfigDict(frozen=True)

    code: NoteCode
    text: str


class FeeCalculationResult(BaseModel):
    """
    报酬计算结果（金额单位：円）

    通用字段之外的扩展字段仅在对应类别中填充：
    - litigation_transition_fee: 督促手続 → 訴訟移行時の追加着手金
    - main_case_retainer: 保全命令 → 本案の着手金
    - advisory_*: 顧問契約
    - daily_rate_* / day_count: 日当
    """
    model_config = ConfigDict(frozen=True)

    category: CaseCategory
    retainer_fee: int = 0
    success_fee: int = 0
    retainer_formula: str = ""
    success_formula: str = ""
    notes: Tuple[DerivationNote, ...] = ()
    explanatory_note: str = ""

    litigation_transition_fee: Optional[int] = None
    main_case_retainer: Optional[int] = None
    advisory_monthly_fee: Optional[int] = None
    advisory_total_fee: Optional[int] = None
    contract_months: Optional[int] = None
    daily_rate_per_day: Optional[int] = None
    daily_rate_total: Optional[int] = None
    day_count: Optional[int] = None

    @computed_field
    @property
    def details(self) -> List[str]:
        return [note.text for note in self.notes]

    def has_note(self, code: NoteCode) -> bool:
        return any(note.code == code for note in self.notes)
