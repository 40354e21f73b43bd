# backend/fee_estimator/services/fee_calculation/fee_trail.py
"""
计算过程累加器

在万円单位下依次应用各项调整，同时维护计算式文本和计算说明，
最后在 to_result() 中一次性换算为円。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from .formatting import format_manyen, format_number, format_percent, format_ratio, to_yen
from .models import CaseCategory, DerivationNote, FeeCalculationResult, NoteCode


def tier_formula(amount: float, rate: float, additive: float) -> List[str]:
    """'500万円 × 5%', '+ 9万円'"""
    parts = [f"{format_manyen(amount)} × {format_percent(rate)}%"]
    if additive > 0:
        parts.append(f"+ {format_manyen(additive)}")
    return parts


@dataclass
class FeeTrail:
    """
    着手金/报酬金的中间状态（万円，未取整）

    retainer_parts / success_parts 为 None 时不生成计算式（定额类案件）。
    """
    retainer: float
    success: float
    retainer_parts: Optional[List[str]] = None
    success_parts: Optional[List[str]] = None
    notes: List[DerivationNote] = field(default_factory=list)

    def note(self, code: NoteCode, text: str) -> None:
        self.notes.append(DerivationNote(code=code, text=text))

    def _push(self, parts: Optional[List[str]], text: str) -> None:
        if parts is not None:
            parts.append(text)

    def apply_settlement(self, ratio: float) -> None:
        """調停・示談交渉：两项同比例缩减"""
        self.retainer *= ratio
        self.success *= ratio
        label = format_ratio(ratio)
        if self.retainer_parts is not None:
            self.retainer_parts = [f"({' '.join(self.retainer_parts)}) × {label}"]
        if self.success_parts is not None:
            self.success_parts = [f"({' '.join(self.success_parts)}) × {label}"]
        self.note(NoteCode.NEGOTIATION_SETTLEMENT, f"調停・示談交渉: {label}適用")

    def apply_continued(self, ratio: float, label: str = "継続受任") -> None:
        """継続受任：仅着手金"""
        self.retainer *= ratio
        self._push(self.retainer_parts, f"× {format_ratio(ratio)}")
        self.note(NoteCode.CONTINUED_REPRESENTATION, f"{label}: 着手金{format_ratio(ratio)}適用")

    def apply_minimum(self, minimum: float) -> bool:
        """最低着手金：触发时计算式整体替换"""
        if self.retainer >= minimum:
            return False
        self.retainer = minimum
        text = f"最低着手金 {format_manyen(minimum)}を適用"
        if self.retainer_parts is not None:
            self.retainer_parts = [text]
        self.note(NoteCode.MINIMUM_RETAINER, text)
        return True

    def apply_adjustment(self, percent: float) -> None:
        """事件内容による増減額（可为负数）"""
        if not percent:
            return
        factor = 1 + percent / 100
        self.retainer *= factor
        self.success *= factor
        sign = "+" if percent > 0 else ""
        self._push(self.retainer_parts, f"× (1{sign}{format_number(percent)}%)")
        self._push(self.success_parts, f"× (1{sign}{format_number(percent)}%)")
        self.note(NoteCode.CASE_ADJUSTMENT, f"事件内容による調整: {sign}{format_number(percent)}%")

    def apply_expertise(self, percent: float) -> None:
        """専門性加算（仅正数生效）"""
        if percent <= 0:
            return
        factor = 1 + percent / 100
        self.retainer *= factor
        self.success *= factor
        self._push(self.retainer_parts, f"× (1+{format_number(percent)}%)")
        self._push(self.success_parts, f"× (1+{format_number(percent)}%)")
        self.note(NoteCode.EXPERTISE_SURCHARGE, f"専門性加算: +{format_number(percent)}%")

    def apply_success_only(self) -> None:
        """着手金なし：着手金并入报酬金"""
        self.success += self.retainer
        self.retainer = 0.0
        self.retainer_parts = ["着手金なし"]
        self.success_parts = ["報酬金 + 着手金相当額"]
        self.note(NoteCode.SUCCESS_FEE_ONLY, "着手金なし・成功報酬のみ")

    def add(self, retainer: float, success: float) -> None:
        self.retainer += retainer
        self.success += success

    def to_result(self, category: CaseCategory, **extra) -> FeeCalculationResult:
        return FeeCalculationResult(
            category=category,
            retainer_fee=to_yen(max(self.retainer, 0.0)),
            success_fee=to_yen(max(self.success, 0.0)),
            retainer_formula=" ".join(self.retainer_parts or []),
            success_formula=" ".join(self.success_parts or []),
            notes=tuple(self.notes),
            **extra,
        )
