# backend/fee_estimator/services/estimate/estimate_service.py
"""
计算结果摘要与见积书组装

- summarize_result: 结果画面用的税抜/税込明细
- render_summary_text: 复制到剪贴板的纯文本
- build_estimate_document: 御見積書的数据结构
"""
import logging
from datetime import date
from typing import List, Optional

from fee_estimator.core.config import settings
from ..fee_calculation.formatting import apply_tax, format_currency, format_japanese_date, format_percent, round_half_up
from ..fee_calculation.models import CaseCategory, FeeCalculationResult
from .models import EstimateDetails, EstimateDocument, EstimateRow, FeeSummary, FeeSummaryLine

logger = logging.getLogger(__name__)

SUMMARY_HEADER = "【弁護士報酬計算結果】\n（旧日弁連報酬基準に基づく概算）\n\n"


def _line(label: str, amount: int, tax_rate: float, formula: str = "", show_tax_inclusive: bool = True) -> FeeSummaryLine:
    return FeeSummaryLine(
        label=label,
        amount=amount,
        amount_with_tax=apply_tax(amount, tax_rate),
        formula=formula or None,
        show_tax_inclusive=show_tax_inclusive,
    )


def summarize_result(result: FeeCalculationResult, tax_rate: float) -> FeeSummary:
    """按案件类别生成摘要明细"""
    if result.category == CaseCategory.ADVISORY_RETAINER:
        months = result.contract_months or 0
        total = _line(f"{months}ヶ月分", result.advisory_total_fee or 0, tax_rate)
        lines = [
            _line("月額顧問料", result.advisory_monthly_fee or 0, tax_rate),
            total,
        ]
        return FeeSummary(
            category=result.category,
            tax_rate=tax_rate,
            lines=lines,
            grand_total=total.amount_with_tax,
        )

    if result.category == CaseCategory.DAILY_RATE:
        days = result.day_count or 1
        total_with_tax = apply_tax(result.daily_rate_total or 0, tax_rate)
        lines = [_line("日当/日", result.daily_rate_per_day or 0, tax_rate)]
        if days > 1:
            lines.append(_line(f"{days}日分", result.daily_rate_total or 0, tax_rate))
        return FeeSummary(
            category=result.category,
            tax_rate=tax_rate,
            lines=lines,
            grand_total=total_with_tax,
        )

    retainer = _line("着手金", result.retainer_fee, tax_rate, result.retainer_formula)
    lines = [retainer]
    grand_total = retainer.amount_with_tax
    if result.success_fee > 0:
        success = _line("報酬金", result.success_fee, tax_rate, result.success_formula)
        lines.append(success)
        grand_total += success.amount_with_tax
    if result.litigation_transition_fee:
        lines.append(
            _line("訴訟移行時追加着手金", result.litigation_transition_fee, tax_rate, show_tax_inclusive=False)
        )

    return FeeSummary(
        category=result.category,
        tax_rate=tax_rate,
        lines=lines,
        grand_total=grand_total,
        show_grand_total=tax_rate > 0 and (result.retainer_fee > 0 or result.success_fee > 0),
    )


def render_summary_text(summary: FeeSummary, explanatory_note: str = "") -> str:
    """复制用文本；税率为 0 时不输出税込行"""
    text = SUMMARY_HEADER
    for line in summary.lines:
        text += f"{line.label}（税抜）: {format_currency(line.amount)}\n"
        if summary.tax_rate > 0 and line.show_tax_inclusive:
            text += f"{line.label}（税込）: {format_currency(line.amount_with_tax)}\n"
    if summary.show_grand_total:
        text += f"合計（税込）: {format_currency(summary.grand_total)}\n"
    if explanatory_note:
        text += f"\n※ {explanatory_note}"
    return text


def _estimate_rows(result: FeeCalculationResult) -> List[EstimateRow]:
    if result.category == CaseCategory.ADVISORY_RETAINER:
        return [
            EstimateRow(label="月額顧問料", amount=result.advisory_monthly_fee or 0, in_subtotal=False),
            EstimateRow(label=f"{result.contract_months}ヶ月分", amount=result.advisory_total_fee or 0),
        ]

    if result.category == CaseCategory.DAILY_RATE:
        return [EstimateRow(label=f"日当（{result.day_count}日分）", amount=result.daily_rate_total or 0)]

    rows = []
    if result.retainer_fee > 0:
        rows.append(EstimateRow(label="着手金", amount=result.retainer_fee))
    if result.success_fee > 0:
        rows.append(EstimateRow(label="報酬金（成功時）", amount=result.success_fee))
    # 訴訟移行時の追加着手金は参考表示のみ（小計に含めない）
    if result.litigation_transition_fee:
        rows.append(
            EstimateRow(label="訴訟移行時追加着手金", amount=result.litigation_transition_fee, in_subtotal=False)
        )
    return rows


def build_estimate_document(
    result: FeeCalculationResult,
    tax_rate: float,
    details: Optional[EstimateDetails] = None,
    issue_date: Optional[date] = None,
) -> EstimateDocument:
    """
    组装御見積書

    Args:
        result: 报酬计算结果
        tax_rate: 消费税率（0.10 = 10%）
        details: 抬头信息，空值项使用 settings.ESTIMATE_* 默认值
        issue_date: 发行日，默认为当天
    """
    details = details or EstimateDetails()
    issue_date = issue_date or date.today()

    rows = _estimate_rows(result)
    subtotal = sum(row.amount for row in rows if row.in_subtotal)
    tax = round_half_up(subtotal * tax_rate) if tax_rate > 0 else 0
    notes = details.notes or settings.ESTIMATE_NOTES

    logger.info(f"[Estimate] 组装见积书: category={result.category.value}, subtotal={subtotal}, tax={tax}")
    return EstimateDocument(
        category=result.category,
        issue_date=format_japanese_date(issue_date),
        office_name=details.office_name or settings.ESTIMATE_OFFICE_NAME,
        lawyer_name=details.lawyer_name or settings.ESTIMATE_LAWYER_NAME,
        address=details.address or "",
        tel=details.tel or "",
        client_name=details.client_name or settings.ESTIMATE_CLIENT_NAME,
        case_title=details.case_title or settings.ESTIMATE_CASE_TITLE,
        rows=rows,
        subtotal=subtotal,
        tax_rate=tax_rate,
        tax_label=f"消費税（{format_percent(tax_rate)}%）",
        tax=tax,
        total=subtotal + tax,
        notes=notes.split("\n"),
        validity=details.validity or settings.ESTIMATE_VALIDITY,
    )
