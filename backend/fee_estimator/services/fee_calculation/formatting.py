# backend/fee_estimator/services/fee_calculation/formatting.py
"""
金额换算与文本格式化工具

报酬基准表的原生单位为「万円」，对外结果统一换算为「円」。
四舍五入统一采用 ROUND_HALF_UP（.5 远离零方向进位）。
"""
from datetime import date
from decimal import Context, Decimal, ROUND_HALF_UP, localcontext
from fractions import Fraction
from typing import Union

Number = Union[int, float, Decimal]

# 1万円 = 10,000円
YEN_PER_MANYEN = 10000

# 足以容纳 float 全量程（约 1e308）的整数位 + 三位小数
_DECIMAL_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


def _to_decimal(value: Number) -> Decimal:
    """float 按最短表示转换，避免二进制误差影响进位"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round_half_up(value: Number) -> int:
    """四舍五入到整数（.5 远离零）"""
    with localcontext(_DECIMAL_CONTEXT):
        return int(_to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def to_yen(manyen: Number) -> int:
    """万円 → 円，仅在此处取整一次"""
    with localcontext(_DECIMAL_CONTEXT):
        return round_half_up(_to_decimal(manyen) * YEN_PER_MANYEN)


def yen_to_manyen(yen: int) -> float:
    """円 → 万円（用于嵌套计算结果回算）"""
    return yen / YEN_PER_MANYEN


def apply_tax(amount: int, tax_rate: float) -> int:
    """含税金额 = 金额 × (1 + 税率)，取整到円"""
    with localcontext(_DECIMAL_CONTEXT):
        return round_half_up(_to_decimal(amount) * (1 + _to_decimal(tax_rate)))


def format_number(value: Number) -> str:
    """千分位 + 最多三位小数（ja-JP 数字格式）"""
    with localcontext(_DECIMAL_CONTEXT):
        quantized = _to_decimal(value).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
        text = f"{quantized:,.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def format_percent(rate: Number) -> str:
    """0.05 → '5'"""
    with localcontext(_DECIMAL_CONTEXT):
        return format_number(_to_decimal(rate) * 100)


def format_ratio(ratio: float) -> str:
    """2/3 → '2/3'"""
    fraction = Fraction(ratio).limit_denominator(100)
    if fraction.denominator == 1:
        return str(fraction.numerator)
    return f"{fraction.numerator}/{fraction.denominator}"


def format_manyen(value: Number) -> str:
    return f"{format_number(value)}万円"


def format_currency(yen: Number) -> str:
    """ja-JP 日元货币格式：￥1,234,567"""
    amount = round_half_up(yen)
    sign = "-" if amount < 0 else ""
    return f"{sign}￥{abs(amount):,}"


def format_japanese_date(value: date) -> str:
    """2024年4月1日"""
    return f"{value.year}年{value.month}月{value.day}日"
