# backend/fee_estimator/services/fee_calculation/flat_rate_fees.py
"""
定额/区间计费的案件类别

離婚・破産再生・保全命令・刑事・顧問契約・日当。
区间类按难易度取下限/中间值/上限；離婚与保全命令复用民事事件的分段公式。
"""
from .fee_schedule import FEE_SCHEDULE, FeeSchedule
from .fee_trail import FeeTrail
from .formatting import format_manyen, format_ratio, to_yen, yen_to_manyen
from .models import (
    ENTITY_SCALE_LABELS,
    AdvisoryClientType,
    AdvisoryRetainerOptions,
    ApplicantType,
    BankruptcyFeeOptions,
    CaseCategory,
    CivilFeeOptions,
    CriminalComplexity,
    CriminalFeeOptions,
    CriminalStage,
    DailyDuration,
    DailyRateOptions,
    DivorceFeeOptions,
    DivorceProceeding,
    FeeCalculationResult,
    InsolvencyCaseType,
    NoteCode,
    PreservationFeeOptions,
    PreservationProcedure,
)
from .tiered_fees import build_civil_trail, calculate_civil


# ==================== 離婚事件 ====================

def calculate_divorce(
    options: DivorceFeeOptions,
    schedule: FeeSchedule = FEE_SCHEDULE,
) -> FeeCalculationResult:
    """離婚事件の報酬計算"""
    is_litigation = options.proceeding == DivorceProceeding.LITIGATION
    fee_range = schedule.divorce.litigation if is_litigation else schedule.divorce.negotiation
    base = fee_range.pick(options.complexity)

    trail = FeeTrail(retainer=base, success=base)
    trail.note(NoteCode.CASE_TYPE, f"事件種類: {'訴訟' if is_litigation else '交渉・調停'}")
    trail.note(NoteCode.BASE_FEE, f"基本報酬: {format_manyen(base)}")

    if options.is_continued:
        trail.apply_continued(schedule.continued_retainer_ratio)

    # 財産分与・慰謝料等は民事事件の基準で別途算定し、円→万円に戻して加算
    if options.property_amount > 0:
        property_fee = calculate_civil(
            CivilFeeOptions(
                amount=options.property_amount,
                is_negotiation_settlement=not is_litigation,
            ),
            schedule,
        )
        trail.add(
            yen_to_manyen(property_fee.retainer_fee),
            yen_to_manyen(property_fee.success_fee),
        )
        trail.note(
            NoteCode.PROPERTY_DIVISION,
            f"財産分与・慰謝料等: {format_manyen(options.property_amount)}の経済的利益を加算",
        )

    trail.apply_expertise(options.expertise_percent)
    return trail.to_result(CaseCategory.DIVORCE)


# ==================== 破産・再生事件 ====================

# 按申请人类型区分的事件：(個人, 個人事業主, 法人)
_APPLICANT_LABELS = {
    InsolvencyCaseType.SELF_BANKRUPTCY: (
        "自己破産（個人・非事業者）", "自己破産（個人事業主）", "自己破産（法人・{scale}）",
    ),
    InsolvencyCaseType.CIVIL_REHABILITATION: (
        "民事再生（個人・小規模個人再生）", "民事再生（非事業者）", "民事再生（事業者・{scale}）",
    ),
    InsolvencyCaseType.VOLUNTARY_ARRANGEMENT: (
        "任意整理（非事業者）", "任意整理（事業者）", "任意整理（法人・{scale}）",
    ),
}

_FIXED_LABELS = {
    InsolvencyCaseType.OTHER_BANKRUPTCY: "破産（自己破産以外）",
    InsolvencyCaseType.COMPANY_ARRANGEMENT: "会社整理",
    InsolvencyCaseType.SPECIAL_LIQUIDATION: "特別清算",
    InsolvencyCaseType.CORPORATE_REORGANIZATION: "会社更生",
}

_INSOLVENCY_SUCCESS_CONDITIONS = {
    InsolvencyCaseType.SELF_BANKRUPTCY: "報酬金は免責決定を受けたときに限り発生",
    InsolvencyCaseType.CIVIL_REHABILITATION: "報酬金は再生計画認可決定を受けたときに限り発生。執務報酬を別途協議可能。",
}

_DEFAULT_INSOLVENCY_CONDITION = "報酬金は事件の結果（配当・計画認可等）に応じて別途協議"


def _insolvency_label(options: BankruptcyFeeOptions) -> str:
    subtype = options.case_subtype
    if subtype in _FIXED_LABELS:
        return _FIXED_LABELS[subtype]

    individual, sole_proprietor, corporation = _APPLICANT_LABELS[subtype]
    if options.applicant_type == ApplicantType.INDIVIDUAL:
        return individual
    if options.applicant_type == ApplicantType.SOLE_PROPRIETOR:
        return sole_proprietor
    return corporation.format(scale=ENTITY_SCALE_LABELS[options.entity_scale])


def calculate_bankruptcy(
    options: BankruptcyFeeOptions,
    schedule: FeeSchedule = FEE_SCHEDULE,
) -> FeeCalculationResult:
    """破産・再生事件の報酬計算（着手金のみ。報酬金は特定の結果を得たときに限り発生）"""
    retainer = schedule.insolvency.lookup(
        options.case_subtype, options.applicant_type, options.entity_scale
    )

    trail = FeeTrail(retainer=retainer, success=0.0)
    trail.note(NoteCode.CASE_TYPE, _insolvency_label(options))
    trail.note(NoteCode.BASE_FEE, f"基本着手金: {format_manyen(retainer)}以上")
    trail.apply_expertise(options.expertise_percent)

    condition = _INSOLVENCY_SUCCESS_CONDITIONS.get(options.case_subtype, _DEFAULT_INSOLVENCY_CONDITION)
    trail.note(NoteCode.SUCCESS_CONDITION, condition)
    return trail.to_result(CaseCategory.BANKRUPTCY, explanatory_note=condition)


# ==================== 保全命令申立事件 ====================

PRESERVATION_SUCCESS_CONDITION = "報酬金は事件が重大・複雑なとき、または本案の目的を達したときに請求可能"


def calculate_preservation(
    options: PreservationFeeOptions,
    schedule: FeeSchedule = FEE_SCHEDULE,
) -> FeeCalculationResult:
    """
    保全命令申立事件の報酬計算

    以本案（民事事件、无附加选项）的未取整着手金/报酬金为基数：
    基本：着手金 1/2、報酬金 1/4；審尋・口頭弁論を経る：着手金 2/3、報酬金 1/3
    """
    main_case = build_civil_trail(CivilFeeOptions(amount=options.amount), schedule)
    if main_case is None:
        return FeeCalculationResult(category=CaseCategory.PRESERVATION, main_case_retainer=0)

    table = schedule.preservation
    if options.procedure == PreservationProcedure.HEARING:
        retainer_ratio, success_ratio = table.hearing_retainer_ratio, table.hearing_success_ratio
        procedure_note = f"審尋・口頭弁論を経る場合: 着手金{format_ratio(retainer_ratio)}"
    else:
        retainer_ratio, success_ratio = table.standard_retainer_ratio, table.standard_success_ratio
        procedure_note = f"基本: 着手金{format_ratio(retainer_ratio)}"

    trail = FeeTrail(
        retainer=main_case.retainer * retainer_ratio,
        success=main_case.success * success_ratio,
        retainer_parts=[f"本案着手金 {format_manyen(main_case.retainer)} × {format_ratio(retainer_ratio)}"],
        success_parts=[f"本案報酬金 {format_manyen(main_case.success)} × {format_ratio(success_ratio)}"],
    )
    trail.note(NoteCode.ECONOMIC_VALUE, f"本案の経済的利益: {format_manyen(options.amount)}")
    trail.note(NoteCode.PROCEDURE, procedure_note)
    if options.with_main_case:
        trail.note(NoteCode.WITH_MAIN_CASE, "本案事件と併せて受任（別途請求可）")
    trail.note(NoteCode.SUCCESS_CONDITION, PRESERVATION_SUCCESS_CONDITION)

    return trail.to_result(
        CaseCategory.PRESERVATION,
        explanatory_note=PRESERVATION_SUCCESS_CONDITION,
        main_case_retainer=to_yen(main_case.retainer),
    )


# ==================== 刑事事件 ====================

_CRIMINAL_STAGE_LABELS = {
    CriminalStage.PRE_INDICTMENT: "起訴前",
    CriminalStage.POST_INDICTMENT: "起訴後（第一審）",
    CriminalStage.APPEAL: "上訴審",
}


def calculate_criminal(
    options: CriminalFeeOptions,
    schedule: FeeSchedule = FEE_SCHEDULE,
) -> FeeCalculationResult:
    """刑事事件の報酬計算"""
    is_complex = options.complexity == CriminalComplexity.COMPLEX
    fee_range = schedule.criminal.complex if is_complex else schedule.criminal.simple
    base = fee_range.pick(options.difficulty)

    trail = FeeTrail(retainer=base, success=base)
    trail.note(NoteCode.STAGE, f"事件段階: {_CRIMINAL_STAGE_LABELS[options.stage]}")
    trail.note(NoteCode.COMPLEXITY, f"事案: {'複雑・重大' if is_complex else '事案簡明'}")

    # 継続受任の減額は事案簡明な事件に限る
    if options.is_continued and not is_complex:
        trail.apply_continued(schedule.continued_retainer_ratio, label="継続受任（事案簡明）")

    trail.apply_expertise(options.expertise_percent)

    if options.stage == CriminalStage.PRE_INDICTMENT:
        condition = "報酬金は不起訴または略式命令の場合に発生"
    else:
        condition = "報酬金は無罪、執行猶予、刑の軽減等の結果に応じて発生"
    return trail.to_result(CaseCategory.CRIMINAL, explanatory_note=condition)


# ==================== 顧問契約 ====================

def calculate_advisory_retainer(
    options: AdvisoryRetainerOptions,
    schedule: FeeSchedule = FEE_SCHEDULE,
) -> FeeCalculationResult:
    """顧問契約：月額 × 契約月数"""
    trail = FeeTrail(retainer=0.0, success=0.0)

    if options.client_type == AdvisoryClientType.BUSINESS:
        monthly = schedule.advisory.business.pick(options.entity_scale)
        trail.note(NoteCode.CLIENT_TYPE, f"事業者顧問（{ENTITY_SCALE_LABELS[options.entity_scale]}）")
    else:
        monthly = schedule.advisory.individual
        trail.note(NoteCode.CLIENT_TYPE, "非事業者（個人）顧問")

    months = options.contract_months
    total = monthly * months
    trail.note(NoteCode.MONTHLY_FEE, f"月額: {format_manyen(monthly)}")
    trail.note(NoteCode.CONTRACT_PERIOD, f"契約期間: {months}ヶ月")

    return trail.to_result(
        CaseCategory.ADVISORY_RETAINER,
        advisory_monthly_fee=to_yen(monthly),
        advisory_total_fee=to_yen(total),
        contract_months=months,
    )


# ==================== 日当 ====================

def calculate_daily_rate(
    options: DailyRateOptions,
    schedule: FeeSchedule = FEE_SCHEDULE,
) -> FeeCalculationResult:
    """日当：1日あたり × 日数"""
    is_full_day = options.duration == DailyDuration.FULL_DAY
    fee_range = schedule.daily_rate.full_day if is_full_day else schedule.daily_rate.half_day
    per_day = fee_range.pick(options.rate)
    days = options.day_count
    total = per_day * days

    trail = FeeTrail(retainer=0.0, success=0.0)
    trail.note(
        NoteCode.DURATION,
        f"拘束時間: {'一日（往復4時間超）' if is_full_day else '半日（往復2〜4時間）'}",
    )
    trail.note(NoteCode.PER_DIEM, f"1日あたり: {format_manyen(per_day)}")
    trail.note(NoteCode.DAY_COUNT, f"日数: {days}日")

    return trail.to_result(
        CaseCategory.DAILY_RATE,
        daily_rate_per_day=to_yen(per_day),
        daily_rate_total=to_yen(total),
        day_count=days,
    )
